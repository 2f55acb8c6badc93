"""Protocolos e modelos do core da aplicação."""

from .email_gateway import EmailGatewayProtocol
from .models import (
    NO_SUBJECT,
    UNKNOWN_SENDER,
    CredentialProfile,
    EmailMessage,
    Recipient,
    ReplyTarget,
    SenderDetails,
)

__all__ = [
    "NO_SUBJECT",
    "UNKNOWN_SENDER",
    "CredentialProfile",
    "EmailGatewayProtocol",
    "EmailMessage",
    "Recipient",
    "ReplyTarget",
    "SenderDetails",
]
