"""Extrator estrutural de respostas da API universal.

Localiza a lista de mensagens/credenciais e o cursor de paginação no
payload bruto. Não normaliza campos: apenas extração estrutural.
"""

from __future__ import annotations

from typing import Any

MESSAGE_LIST_KEYS = ("emailmessages", "messages", "data", "items", "records", "threads")
CREDENTIAL_LIST_KEYS = ("credentials", "data")


def _extract_list(payload: Any, keys: tuple[str, ...]) -> list[Any]:
    if not payload:
        return []
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []
    for key in keys:
        value = payload.get(key)
        if isinstance(value, list):
            return value
    # Último recurso: primeira lista encontrada no objeto
    return next((value for value in payload.values() if isinstance(value, list)), [])


def extract_message_list(payload: Any) -> list[Any]:
    """Lista bruta de mensagens de uma página."""
    return _extract_list(payload, MESSAGE_LIST_KEYS)


def extract_credential_list(payload: Any) -> list[Any]:
    """Lista bruta de credenciais."""
    return _extract_list(payload, CREDENTIAL_LIST_KEYS)


def extract_next_cursor(payload: Any) -> str:
    """Cursor da próxima página (``_metadata.next``); vazio = fim."""
    if not isinstance(payload, dict):
        return ""
    metadata = payload.get("_metadata")
    if not isinstance(metadata, dict):
        return ""
    cursor = metadata.get("next")
    if isinstance(cursor, str) and cursor.strip():
        return cursor
    return ""
