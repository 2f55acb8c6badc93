"""Configuração centralizada de logging.

Logging JSON estruturado com campos obrigatórios (correlation_id, service,
level, logger, message) e nível configurável por ambiente.

Uso:
    from config.logging import configure_logging, get_logger

    # Uma vez, no bootstrap
    configure_logging(level="INFO", service_name="mailbridge")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("inbox_loaded", extra={"message_count": 20})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "mailbridge"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado no root logger.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço injetado em todo record.
        correlation_id_getter: Função que retorna o correlation_id do
            contexto atual (ContextVar de app.observability).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    resolved = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(resolved)
    # Um único handler JSON; reconfigurar não duplica saída
    root.handlers = [_build_handler(resolved, service_name, correlation_id_getter)]


def _resolve_level(level: str) -> str:
    resolved = level.strip().upper()
    if resolved not in VALID_LOG_LEVELS:
        valid = ", ".join(sorted(VALID_LOG_LEVELS))
        raise ValueError(f"Nível de log inválido: {level}. Válidos: {valid}")
    return resolved


def _build_handler(
    level: str,
    service_name: str,
    correlation_id_getter: Callable[[], str] | None,
) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo (o filter injeta service/correlation_id)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um fallback best-effort foi acionado.

    Usado quando uma etapa opcional falha e o fluxo segue sem ela
    (ex.: hidratação de threadId na resposta a um email).

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "reply_thread_lookup").
        reason: Razão do fallback (ex: "http_404").
        elapsed_ms: Tempo decorrido em ms (quando aplicável).
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info("Fallback applied for %s", component, extra=extra)
