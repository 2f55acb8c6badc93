"""Helpers de parsing de erros da API Rollout."""

from __future__ import annotations

from typing import Any

# Campos em que a API costuma devolver a mensagem de erro, em ordem
_ERROR_MESSAGE_KEYS = ("error", "message", "errorMessage")


def extract_error_message(payload: Any, fallback: str) -> str:
    """Extrai mensagem legível de um payload de erro do upstream.

    Args:
        payload: Corpo JSON já decodificado (qualquer formato)
        fallback: Mensagem usada quando nenhum campo conhecido existe

    Returns:
        Primeira mensagem não vazia encontrada ou o fallback.
    """
    if not isinstance(payload, dict):
        return fallback
    for key in _ERROR_MESSAGE_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        # Alguns endpoints aninham: {"error": {"message": "..."}}
        if isinstance(value, dict):
            nested = value.get("message")
            if isinstance(nested, str) and nested.strip():
                return nested.strip()
    return fallback
