"""Use case de carga da caixa de entrada.

Pagina sequencialmente a listagem do upstream (cada cursor depende da
página anterior), normaliza, remove mensagens enviadas pela própria conta
e duplicadas, ordena da mais recente para a mais antiga e corta no total
pedido. O limite de páginas limita a latência no pior caso, então o
resultado pode ter menos mensagens que o pedido mesmo havendo mais.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from api.connectors.rollout.upstream_errors import extract_error_message
from api.normalizers.email import (
    emails_match,
    extract_email_address,
    extract_message_list,
    extract_next_cursor,
    normalize_message,
    parse_received_at,
)
from utils.errors import UpstreamError

if TYPE_CHECKING:
    from app.protocols.email_gateway import EmailGatewayProtocol
    from app.protocols.models import EmailMessage

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_LIMIT = 20
MAX_PAGES = 5

# Mensagens sem data interpretável ficam por último
_EARLIEST = datetime.min.replace(tzinfo=UTC)


def sort_newest_first(messages: list[EmailMessage]) -> list[EmailMessage]:
    """Ordena por ``received_at`` decrescente; empates mantêm a ordem de chegada."""
    return sorted(
        messages,
        key=lambda message: parse_received_at(message.received_at) or _EARLIEST,
        reverse=True,
    )


class LoadInboxUseCase:
    """Agrega páginas do upstream em uma lista limitada e ordenada."""

    def __init__(self, gateway: EmailGatewayProtocol, max_pages: int = MAX_PAGES) -> None:
        self._gateway = gateway
        self._max_pages = max_pages

    async def execute(
        self,
        credential_id: str,
        desired_count: int = DEFAULT_MESSAGE_LIMIT,
        credential_email: str = "",
    ) -> list[EmailMessage]:
        """Carrega até ``desired_count`` mensagens.

        Args:
            credential_id: Referência da mailbox
            desired_count: Total desejado (também usado como tamanho de página)
            credential_email: Endereço da própria conta, para excluir enviados

        Raises:
            UpstreamError: qualquer página falhou; nada parcial é devolvido
        """
        own_email = extract_email_address(credential_email)
        accumulated: list[EmailMessage] = []
        seen_ids: set[str] = set()
        cursor = ""
        pages = 0
        raw_index = 0

        while len(accumulated) < desired_count and pages < self._max_pages:
            response = await self._gateway.list_messages(credential_id, limit=desired_count, cursor=cursor)
            if not response.ok:
                logger.error(
                    "inbox_page_failed",
                    extra={
                        "credential_id": credential_id,
                        "page": pages + 1,
                        "status_code": response.status_code,
                        "payload": response.body,
                    },
                )
                raise UpstreamError(
                    extract_error_message(
                        response.body,
                        f"Failed to load messages (status {response.status_code}).",
                    ),
                    upstream_status=response.status_code,
                    payload=response.body,
                )

            for raw in extract_message_list(response.body):
                message = normalize_message(raw, raw_index)
                raw_index += 1
                if own_email and emails_match(message.from_email, own_email):
                    continue
                if message.id in seen_ids:
                    continue
                seen_ids.add(message.id)
                accumulated.append(message)

            cursor = extract_next_cursor(response.body)
            pages += 1
            if not cursor:
                break

        messages = sort_newest_first(accumulated)[:desired_count]
        logger.info(
            "inbox_loaded",
            extra={
                "credential_id": credential_id,
                "pages": pages,
                "collected": len(accumulated),
                "returned": len(messages),
            },
        )
        return messages
