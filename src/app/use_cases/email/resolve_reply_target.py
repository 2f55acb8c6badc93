"""Use case de resolução do destino de uma resposta.

threadId, em ordem: o da própria mensagem; o da mensagem completa buscada
no upstream; o de uma thread nova criada com o assunto original. As duas
últimas etapas são best-effort: falha é logada e a resposta segue sem
thread.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.normalizers.email import as_non_empty_string, extract_email_address
from app.protocols.models import ReplyTarget
from config.logging import log_fallback

if TYPE_CHECKING:
    from app.protocols.email_gateway import EmailGatewayProtocol
    from app.protocols.models import EmailMessage

logger = logging.getLogger(__name__)

REPLY_PREFIX = "Re:"
THREAD_SUBJECT_FALLBACK = "(no subject)"


def build_reply_subject(subject: str) -> str:
    """Prefixa ``Re:`` sem duplicar (comparação sem caixa)."""
    original = subject or ""
    if original.strip().lower().startswith(REPLY_PREFIX.lower()):
        return original
    return f"{REPLY_PREFIX} {original}"


class ResolveReplyTargetUseCase:
    """Determina destinatário, assunto e thread de uma resposta."""

    def __init__(self, gateway: EmailGatewayProtocol) -> None:
        self._gateway = gateway

    async def execute(self, message: EmailMessage, credential_id: str) -> ReplyTarget:
        to = message.from_email or extract_email_address(message.from_display)
        thread_id = message.thread_id

        if not thread_id and message.id and credential_id:
            thread_id = await self._fetch_thread_id(credential_id, message.id)

        if not thread_id and credential_id:
            thread_id = await self._create_thread(credential_id, message.subject)

        return ReplyTarget(
            to=to,
            subject=build_reply_subject(message.subject),
            thread_id=thread_id,
        )

    async def _fetch_thread_id(self, credential_id: str, message_id: str) -> str:
        try:
            response = await self._gateway.get_message(credential_id, message_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "reply_thread_lookup_failed",
                extra={"message_id": message_id, "error_type": type(exc).__name__},
            )
            log_fallback(logger, "reply_thread_lookup", reason=type(exc).__name__)
            return ""
        if not response.ok or not isinstance(response.body, dict):
            log_fallback(logger, "reply_thread_lookup", reason=f"http_{response.status_code}")
            return ""
        return as_non_empty_string(response.body.get("threadId"))

    async def _create_thread(self, credential_id: str, subject: str) -> str:
        try:
            response = await self._gateway.create_thread(
                credential_id,
                subject or THREAD_SUBJECT_FALLBACK,
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "reply_thread_create_failed",
                extra={"error_type": type(exc).__name__},
            )
            log_fallback(logger, "reply_thread_create", reason=type(exc).__name__)
            return ""
        if not response.ok or not isinstance(response.body, dict):
            logger.warning(
                "reply_thread_create_rejected",
                extra={"status_code": response.status_code},
            )
            log_fallback(logger, "reply_thread_create", reason=f"http_{response.status_code}")
            return ""
        return as_non_empty_string(response.body.get("id"))
