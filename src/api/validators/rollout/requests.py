"""Validação das requisições de proxy antes de qualquer chamada de rede."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from utils.errors import BadRequestError, ValidationError


@dataclass(frozen=True, slots=True)
class ProxyRequest:
    """Requisição validada: credencial + payload a encaminhar."""

    credential_id: str
    payload: dict[str, Any]


def parse_json_body(raw_body: bytes) -> dict[str, Any]:
    """Decodifica corpo JSON de entrada.

    Corpo vazio é tratado como objeto vazio (a validação de campos
    obrigatórios decide depois).

    Raises:
        BadRequestError: JSON inválido ou que não é objeto
    """
    if not raw_body or not raw_body.strip():
        return {}
    try:
        payload = json.loads(raw_body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise BadRequestError("Invalid JSON body") from exc
    if not isinstance(payload, dict):
        raise BadRequestError("JSON body must be an object")
    return payload


def require_credential_id(value: Any) -> str:
    """Garante referência de credencial não vazia.

    Raises:
        ValidationError: ausente, vazia ou não textual
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("credentialId is required")
    return value.strip()


def require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def validate_smart_list_request(body: dict[str, Any]) -> ProxyRequest:
    """Valida ``{credentialId, name, tagName}``."""
    credential_id = require_credential_id(body.get("credentialId"))
    name = require_text(body.get("name"), "name")
    tag_name = require_text(body.get("tagName"), "tagName")
    return ProxyRequest(
        credential_id=credential_id,
        payload={"name": name, "tagName": tag_name},
    )


def validate_person_request(body: dict[str, Any]) -> ProxyRequest:
    """Valida ``{credentialId, person: {...}}``."""
    credential_id = require_credential_id(body.get("credentialId"))
    person = body.get("person")
    if not isinstance(person, dict) or not person:
        raise ValidationError("person must be a non-empty object")
    return ProxyRequest(credential_id=credential_id, payload=dict(person))


def validate_send_payload(payload: dict[str, Any]) -> None:
    """Valida payload de envio de email no formato da API universal.

    Formato: ``{subject, body, sender: {name, email}, recipients: [...],
    threadId?}``.
    """
    require_text(payload.get("subject"), "subject")
    body = payload.get("body")
    if not isinstance(body, str) or not body.strip():
        raise ValidationError("body is required")
    sender = payload.get("sender")
    if not isinstance(sender, dict):
        raise ValidationError("sender is required")
    require_text(sender.get("email"), "sender.email")
    recipients = payload.get("recipients")
    if not isinstance(recipients, list) or not recipients:
        raise ValidationError("recipients must be a non-empty list")


def validate_page_size(value: Any, default: int, maximum: int = 100) -> int:
    """Converte hint de tamanho de página (query string) em inteiro válido."""
    if value is None or value == "":
        return default
    try:
        size = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("limit must be an integer") from exc
    if size < 1 or size > maximum:
        raise ValidationError(f"limit must be between 1 and {maximum}")
    return size
