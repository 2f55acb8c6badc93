"""Helpers de extração de campos de payloads de email.

Payloads do upstream variam por provedor; cada helper sonda uma lista
ordenada de campos (primeiro que casar vence) e nunca levanta exceção:
campo ausente ou malformado degrada para string vazia.
"""

from __future__ import annotations

import html
import re
from typing import Any

from app.protocols.models import SenderDetails

EMAIL_ADDRESS_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)

SNIPPET_MAX_LENGTH = 280

# Chaves sondadas em objetos, nesta ordem, antes dos sub-objetos profile/data
EMAIL_CANDIDATE_KEYS = (
    "email",
    "emailAddress",
    "address",
    "value",
    "primary",
    "username",
    "login",
    "accountEmail",
    "accountName",
)
EMAIL_NESTED_KEYS = ("profile", "data")

SENDER_EMAIL_KEYS = ("email", "emailAddress", "address")
SENDER_NAME_KEYS = ("displayName", "name")

_BR_TAG = re.compile(r"<\s*br\s*/?>", re.IGNORECASE)
_HTML_TAG = re.compile(r"<[^>]*>")


def as_non_empty_string(value: Any) -> str:
    """Retorna a string aparada se não vazia; qualquer outra coisa vira ""."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return ""


def as_text(value: Any) -> str:
    """str(value), ou "" quando a conversão falha (inteiros gigantes)."""
    try:
        return str(value)
    except ValueError:
        return ""


def normalize_email(value: Any) -> str:
    if isinstance(value, str) and value:
        return value.strip().lower()
    return ""


def emails_match(left: Any, right: Any) -> bool:
    """Compara endereços sem diferenciar caixa; vazio nunca casa."""
    normalized_left = normalize_email(left)
    return bool(normalized_left) and normalized_left == normalize_email(right)


def extract_email_address(value: Any) -> str:
    """Extrai o primeiro endereço de email de um valor arbitrário.

    Ordem: listas (primeiro item com endereço), strings (regex), objetos
    (EMAIL_CANDIDATE_KEYS, depois profile/data). Resultado em minúsculas.
    """
    if isinstance(value, (list, tuple)):
        for entry in value:
            email = extract_email_address(entry)
            if email:
                return email
        return ""
    if not value:
        return ""
    if isinstance(value, str):
        match = EMAIL_ADDRESS_PATTERN.search(value)
        return normalize_email(match.group(0)) if match else ""
    if isinstance(value, dict):
        for key in EMAIL_CANDIDATE_KEYS:
            if key in value:
                email = extract_email_address(value[key])
                if email:
                    return email
        for key in EMAIL_NESTED_KEYS:
            if value.get(key):
                email = extract_email_address(value[key])
                if email:
                    return email
    return ""


def extract_sender_details(value: Any) -> SenderDetails:
    """Extrai exibição e endereço de um campo de remetente.

    Exibição preferida: ``"Nome <email>"``; senão só o nome; senão o
    endereço como veio no payload; senão o endereço extraído.
    """
    if isinstance(value, (list, tuple)):
        for entry in value:
            details = extract_sender_details(entry)
            if details.display or details.email:
                return details
        return SenderDetails()
    if not value:
        return SenderDetails()
    if isinstance(value, str):
        trimmed = value.strip()
        return SenderDetails(display=trimmed, email=extract_email_address(trimmed))
    if not isinstance(value, dict):
        return SenderDetails()

    email = ""
    for key in SENDER_EMAIL_KEYS:
        email = extract_email_address(value.get(key))
        if email:
            break
    else:
        email = extract_email_address(value)

    name = _first_non_empty(value, SENDER_NAME_KEYS)
    if name:
        display = f"{name} <{email}>" if email else name
    else:
        display = _first_non_empty(value, SENDER_EMAIL_KEYS) or email
    return SenderDetails(display=display, email=email)


def html_to_plain_text(value: Any) -> str:
    """Remove tags HTML (``<br>`` vira quebra de linha) e decodifica entidades."""
    if not isinstance(value, str) or not value.strip():
        return ""
    text = _BR_TAG.sub("\n", value)
    text = _HTML_TAG.sub("", text)
    return html.unescape(text)


def _original_snippet(message: dict[str, Any]) -> Any:
    original = message.get("original")
    if not isinstance(original, dict):
        return None
    email = original.get("email")
    return email.get("snippet") if isinstance(email, dict) else None


def _joined_fragments(message: dict[str, Any]) -> Any:
    fragments = message.get("fragments")
    if not isinstance(fragments, list):
        return None
    return "\n\n".join(as_text(fragment) for fragment in fragments if fragment is not None)


# (nome, accessor): primeiro candidato com texto não vazio vence
BODY_TEXT_RULES = (
    ("body", lambda m: m.get("body")),
    ("textBody", lambda m: m.get("textBody")),
    ("plainText", lambda m: m.get("plainText")),
    ("snippet", lambda m: m.get("snippet")),
    ("preview", lambda m: m.get("preview")),
    ("summary", lambda m: m.get("summary")),
    ("original.email.snippet", _original_snippet),
    ("fragments", _joined_fragments),
)


def extract_body_text(message: Any) -> str:
    """Extrai corpo em texto puro de uma mensagem bruta."""
    if not isinstance(message, dict):
        return ""
    for _name, accessor in BODY_TEXT_RULES:
        candidate = accessor(message)
        if not isinstance(candidate, str) or not candidate.strip():
            continue
        plain = html_to_plain_text(candidate).strip()
        if plain:
            return plain
    return ""


def truncate_body(body: Any, limit: int = SNIPPET_MAX_LENGTH) -> str:
    """Corta texto em ``limit`` caracteres, terminando em reticências."""
    if not isinstance(body, str):
        return ""
    trimmed = body.strip()
    if len(trimmed) <= limit:
        return trimmed
    return f"{trimmed[: limit - 1]}…"


def _first_non_empty(value: dict[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        text = as_non_empty_string(value.get(key))
        if text:
            return text
    return ""
