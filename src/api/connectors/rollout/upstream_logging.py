"""Logging das chamadas ao upstream Rollout.

Cada chamada sai logada de forma reconstruível (método, URL, credencial,
payload) e cada resposta com status, headers e corpo. Os logs passam por
``log_sink``: falha ao logar nunca derruba a requisição.
"""

from __future__ import annotations

import logging
from typing import Any

from config.logging import log_sink

logger = logging.getLogger(__name__)

# Headers que nunca vão para o log
_REDACTED_HEADERS = frozenset({"authorization", "set-cookie", "cookie"})


def redact_headers(headers: Any) -> dict[str, str]:
    """Copia headers ocultando credenciais."""
    return {
        str(key): "[redacted]" if str(key).lower() in _REDACTED_HEADERS else str(value)
        for key, value in dict(headers or {}).items()
    }


def log_upstream_request(
    method: str,
    url: str,
    credential_id: str | None,
    payload: Any,
    params: dict[str, str] | None = None,
) -> None:
    """Loga requisição de saída."""
    with log_sink(logger) as log:
        log.info(
            "upstream_request",
            extra={
                "method": method,
                "url": url,
                "params": params or {},
                "credential_id": credential_id or "",
                "payload": payload,
            },
        )


def log_upstream_response(
    method: str,
    url: str,
    status_code: int,
    headers: Any,
    body: Any,
) -> None:
    """Loga resposta do upstream (nível WARNING para status >= 400)."""
    with log_sink(logger) as log:
        level = logging.WARNING if status_code >= 400 else logging.INFO
        log.log(
            level,
            "upstream_response",
            extra={
                "method": method,
                "url": url,
                "status_code": status_code,
                "headers": redact_headers(headers),
                "body": body,
            },
        )
