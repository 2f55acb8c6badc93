"""Use case para envio de email pela mailbox conectada."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from api.connectors.rollout.upstream_errors import extract_error_message
from api.normalizers.email import extract_email_address, merge_recipients, parse_recipients
from app.protocols.models import Recipient
from utils.errors import UpstreamError, ValidationError

if TYPE_CHECKING:
    from api.connectors.rollout.models import UpstreamResponse
    from app.protocols.email_gateway import EmailGatewayProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendMessageCommand:
    """Dados de composição.

    Destinatários podem vir prontos (``recipients``) ou como texto livre
    em ``to``/``cc``/``bcc``; a API não separa CC/BCC, tudo vai junto.
    """

    credential_id: str
    subject: str
    body: str
    to: str = ""
    cc: str = ""
    bcc: str = ""
    recipients: tuple[Recipient, ...] = field(default_factory=tuple)
    sender: Recipient | None = None
    credential_label: str = ""
    credential_email: str = ""
    thread_id: str = ""


class SendMessageUseCase:
    """Valida a composição, monta o payload e envia pelo gateway."""

    def __init__(self, gateway: EmailGatewayProtocol) -> None:
        self._gateway = gateway

    async def execute(self, command: SendMessageCommand) -> UpstreamResponse:
        """Envia o email.

        Raises:
            ValidationError: composição incompleta
            UpstreamError: upstream recusou o envio
        """
        payload = self.build_payload(command)
        response = await self._gateway.send_message(command.credential_id.strip(), payload)
        if not response.ok:
            logger.error(
                "email_send_failed",
                extra={"status_code": response.status_code, "payload": response.body},
            )
            raise UpstreamError(
                extract_error_message(
                    response.body,
                    f"Failed to send email (status {response.status_code}).",
                ),
                upstream_status=response.status_code,
                payload=response.body,
            )
        logger.info(
            "email_sent",
            extra={
                "recipient_count": len(payload["recipients"]),
                "threaded": "threadId" in payload,
            },
        )
        return response

    @staticmethod
    def build_payload(command: SendMessageCommand) -> dict[str, Any]:
        """Monta o payload da API universal validando na ordem da UI."""
        if not command.credential_id or not command.credential_id.strip():
            raise ValidationError("Connect an email account first.")

        recipients = merge_recipients(
            list(command.recipients),
            parse_recipients(command.to),
            parse_recipients(command.cc),
            parse_recipients(command.bcc),
        )
        sender = _resolve_sender(command)
        if sender is None:
            raise ValidationError("Unable to determine sender email for this credential.")
        if not recipients:
            raise ValidationError("Please provide at least one valid recipient.")
        if not command.subject or not command.subject.strip():
            raise ValidationError("Subject is required.")
        if not command.body or not command.body.strip():
            raise ValidationError("Body is required.")

        payload: dict[str, Any] = {
            "subject": command.subject.strip(),
            "body": command.body,
            "sender": sender.as_dict(),
            "recipients": [recipient.as_dict() for recipient in recipients],
        }
        if command.thread_id:
            payload["threadId"] = command.thread_id
        return payload


def _resolve_sender(command: SendMessageCommand) -> Recipient | None:
    if command.sender is not None:
        email = extract_email_address(command.sender.email)
        if email:
            return Recipient(name=command.sender.name or email, email=email)
    email = extract_email_address(command.credential_email) or extract_email_address(
        command.credential_label
    )
    if not email:
        return None
    return Recipient(name=command.credential_label or email, email=email)
