"""Modelos internos canônicos do proxy de email.

Todos são imutáveis e serializam para o formato camelCase consumido pela UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UNKNOWN_SENDER = "Unknown sender"
NO_SUBJECT = "(No subject)"


@dataclass(frozen=True, slots=True)
class EmailMessage:
    """Mensagem normalizada.

    Invariantes: ``id`` nunca vazio; ``from_display`` nunca vazio.
    """

    id: str
    thread_id: str = ""
    subject: str = NO_SUBJECT
    from_display: str = UNKNOWN_SENDER
    from_email: str = ""
    snippet: str = ""
    received_at: str = ""
    body: str = ""

    def as_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "threadId": self.thread_id,
            "subject": self.subject,
            "from": self.from_display,
            "fromEmail": self.from_email,
            "snippet": self.snippet,
            "receivedAt": self.received_at,
            "body": self.body,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmailMessage:
        """Reconstrói a partir do formato canônico (ex.: devolvido pela UI)."""

        def _text(key: str) -> str:
            value = data.get(key)
            return value.strip() if isinstance(value, str) else ""

        return cls(
            id=_text("id"),
            thread_id=_text("threadId"),
            subject=_text("subject"),
            from_display=_text("from"),
            from_email=_text("fromEmail"),
            snippet=_text("snippet"),
            received_at=_text("receivedAt"),
            body=_text("body"),
        )


@dataclass(frozen=True, slots=True)
class CredentialProfile:
    """Credencial (mailbox conectada) normalizada."""

    id: str
    label: str
    email: str
    app_key: str = ""

    def as_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "label": self.label,
            "email": self.email,
            "appKey": self.app_key,
        }


@dataclass(frozen=True, slots=True)
class Recipient:
    """Destinatário no formato da API universal."""

    name: str
    email: str

    def as_dict(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email}


@dataclass(frozen=True, slots=True)
class SenderDetails:
    """Remetente extraído: texto de exibição + endereço."""

    display: str = ""
    email: str = ""


@dataclass(frozen=True, slots=True)
class ReplyTarget:
    """Destino de uma resposta: para quem, assunto e thread (opcional)."""

    to: str
    subject: str
    thread_id: str = ""

    def as_dict(self) -> dict[str, str]:
        payload = {"to": self.to, "subject": self.subject}
        if self.thread_id:
            payload["threadId"] = self.thread_id
        return payload
