"""Normalizer de email — payloads brutos → EmailMessage / CredentialProfile.

Cada campo canônico é resolvido por uma tabela ordenada de regras
(nome do campo → accessor), primeira correspondência vence. Nenhuma
função deste módulo levanta exceção para payload malformado.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

from app.protocols.models import (
    NO_SUBJECT,
    UNKNOWN_SENDER,
    CredentialProfile,
    EmailMessage,
    Recipient,
)

from ._extraction_helpers import (
    as_non_empty_string,
    as_text,
    extract_body_text,
    extract_email_address,
    extract_sender_details,
    truncate_body,
)

MESSAGE_ID_KEYS = ("id", "messageId", "externalId", "threadId")
SUBJECT_KEYS = ("subject", "snippet", "preview")
SENDER_KEYS = ("from", "sender", "senderProfile", "fromAddress")
SNIPPET_KEYS = ("snippet", "preview", "bodyPreview")
RECEIVED_AT_KEYS = ("receivedAt", "sentAt", "internalDate", "received", "sent", "created", "updated")
RECIPIENT_SEPARATORS = re.compile(r"[;,\n]")

# Acima disso um timestamp numérico é interpretado como milissegundos
_EPOCH_MILLIS_THRESHOLD = 10**11
# Timestamps numéricos fora desse limite são descartados
_EPOCH_MAX_DIGITS = 18
_EPOCH_MAX_VALUE = 10**_EPOCH_MAX_DIGITS


def _dig(value: Any, *path: str) -> Any:
    current = value
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


# Ordem de candidatos para o email da credencial
CREDENTIAL_EMAIL_RULES = (
    ("profile.email", lambda c: _dig(c, "profile", "email")),
    ("profile.emails", lambda c: _dig(c, "profile", "emails")),
    ("profile.accountEmail", lambda c: _dig(c, "profile", "accountEmail")),
    ("profile.accountName", lambda c: _dig(c, "profile", "accountName")),
    ("profile", lambda c: _dig(c, "profile")),
    ("label", lambda c: _dig(c, "label")),
    ("data.email", lambda c: _dig(c, "data", "email")),
    ("data", lambda c: _dig(c, "data")),
)


def derive_credential_email(credential: Any, fallback_label: str = "") -> str:
    """Primeiro endereço extraível da credencial; por último, o fallback."""
    for _name, accessor in CREDENTIAL_EMAIL_RULES:
        email = extract_email_address(accessor(credential))
        if email:
            return email
    return extract_email_address(fallback_label)


def resolve_credential_label(credential: Any) -> str:
    """Nome de exibição: profile.accountName, label, appKey ou id."""
    if not isinstance(credential, dict):
        return ""
    profile_name = as_non_empty_string(_dig(credential, "profile", "accountName"))
    if profile_name:
        return profile_name
    label = credential.get("label") or credential.get("appKey") or credential.get("id")
    return label if isinstance(label, str) else ""


def normalize_credential(credential: Any) -> CredentialProfile | None:
    """Normaliza credencial; None quando não há id utilizável."""
    if not isinstance(credential, dict):
        return None
    credential_id = credential.get("id")
    if not isinstance(credential_id, (str, int)) or isinstance(credential_id, bool):
        return None
    credential_id = as_text(credential_id).strip()
    if not credential_id:
        return None
    label = resolve_credential_label(credential) or credential_id
    return CredentialProfile(
        id=credential_id,
        label=label,
        email=derive_credential_email(credential, label),
        app_key=as_non_empty_string(credential.get("appKey")),
    )


def _first_text(message: dict[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        text = as_non_empty_string(message.get(key))
        if text:
            return text
    return ""


def _resolve_message_id(message: dict[str, Any], index: int) -> str:
    for key in MESSAGE_ID_KEYS:
        value = message.get(key)
        if isinstance(value, bool) or value is None:
            continue
        text = as_text(value).strip()
        if text:
            return text
    return f"message-{index}"


def _resolve_received_at(message: dict[str, Any]) -> str:
    for key in RECEIVED_AT_KEYS:
        value = message.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            if abs(value) < _EPOCH_MAX_VALUE:
                return str(value)
            continue
        if isinstance(value, float):
            if math.isfinite(value) and abs(value) < _EPOCH_MAX_VALUE:
                return str(int(value))
            continue
        text = as_non_empty_string(value)
        if text:
            return text
    return ""


def _resolve_sender(message: dict[str, Any]) -> tuple[str, str]:
    display = ""
    email = ""
    for key in SENDER_KEYS:
        details = extract_sender_details(message.get(key))
        display = display or details.display
        email = email or details.email
        if display and email:
            break
    return display, email


def normalize_message(message: Any, index: int = 0) -> EmailMessage:
    """Converte mensagem bruta no registro canônico EmailMessage."""
    if not isinstance(message, dict):
        return EmailMessage(
            id=f"message-{index}",
            subject=as_non_empty_string("" if message is None else as_text(message)) or NO_SUBJECT,
        )

    from_display, from_email = _resolve_sender(message)
    body = extract_body_text(message)
    snippet = _first_text(message, SNIPPET_KEYS) or body

    return EmailMessage(
        id=_resolve_message_id(message, index),
        thread_id=as_non_empty_string(message.get("threadId")),
        subject=_first_text(message, SUBJECT_KEYS) or NO_SUBJECT,
        from_display=from_display or from_email or UNKNOWN_SENDER,
        from_email=from_email,
        snippet=truncate_body(snippet),
        received_at=_resolve_received_at(message),
        body=body,
    )


def parse_received_at(value: Any) -> datetime | None:
    """Converte ``receivedAt`` em datetime UTC (ISO-8601, RFC 2822 ou epoch).

    Retorna None para valores ausentes ou não interpretáveis.
    """
    text = as_non_empty_string(value)
    if not text:
        return None
    parsed = _parse_epoch(text) or _parse_iso(text) or _parse_rfc2822(text)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_epoch(text: str) -> datetime | None:
    if not (text.isascii() and text.isdigit()) or len(text) > _EPOCH_MAX_DIGITS:
        return None
    try:
        number = int(text)
        seconds = number / 1000 if number >= _EPOCH_MILLIS_THRESHOLD else number
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def _parse_iso(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_rfc2822(text: str) -> datetime | None:
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def parse_recipients(value: Any) -> list[Recipient]:
    """Converte texto livre (``a@x.com, Nome <b@y.com>``) em destinatários.

    Separadores: vírgula, ponto e vírgula, quebra de linha. Entradas sem
    endereço válido são ignoradas.
    """
    if not isinstance(value, str):
        return []
    recipients: list[Recipient] = []
    for part in RECIPIENT_SEPARATORS.split(value):
        part = part.strip()
        email = extract_email_address(part)
        if not email:
            continue
        name = part.split("<", 1)[0].strip() if "<" in part and ">" in part else ""
        recipients.append(Recipient(name=name or email, email=email))
    return recipients


def merge_recipients(*groups: list[Recipient]) -> list[Recipient]:
    """Concatena grupos removendo endereços repetidos (primeiro vence)."""
    seen: set[str] = set()
    merged: list[Recipient] = []
    for group in groups:
        for recipient in group:
            if recipient.email in seen:
                continue
            seen.add(recipient.email)
            merged.append(recipient)
    return merged
