"""Formatter de logs JSON com campos padronizados."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON.

    Exemplo de output:
        {"asctime": "...", "level": "INFO", "logger": "api.connectors.rollout.gateway",
         "message": "upstream_request", "correlation_id": "abc-123",
         "service": "mailbridge", "method": "GET", "url": "..."}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
