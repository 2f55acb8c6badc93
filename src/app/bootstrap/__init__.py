"""Bootstrap da aplicação — inicialização e wiring.

Composition root: configura logging, valida settings e expõe os
singletons (emissor de token, gateway Rollout) consumidos pelas rotas.

Uso:
    from app.bootstrap import initialize_app, get_rollout_gateway

    initialize_app()
    gateway = get_rollout_gateway()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_rollout_settings

if TYPE_CHECKING:
    from api.connectors.rollout import RolloutGateway
    from app.services.token_issuer import TokenIssuer

DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON com correlation_id. Chamar uma vez no startup."""
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    configure_logging(
        level=log_level,
        service_name=get_base_settings().service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> list[str]:
    """Valida settings no startup.

    Erros de settings base impedem o boot em staging/production. Segredos
    Rollout ausentes nunca bloqueiam o boot: falham por chamada
    (ConfigurationError na emissão de token) e aqui viram só alerta.

    Returns:
        Lista de erros encontrados.

    Raises:
        RuntimeError: em staging/production quando as settings base são inválidas.
    """
    environment = get_base_settings().environment
    base_errors = [f"base: {error}" for error in get_base_settings().validate()]
    errors = base_errors + [f"rollout: {error}" for error in get_rollout_settings().validate()]

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return errors

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base_errors and environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in base_errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
    return errors


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    """Emissor de token (singleton)."""
    from app.bootstrap.dependencies import create_token_issuer

    return create_token_issuer()


@lru_cache(maxsize=1)
def get_rollout_gateway() -> RolloutGateway:
    """Gateway Rollout (singleton; sem estado entre chamadas)."""
    from app.bootstrap.dependencies import create_rollout_gateway

    return create_rollout_gateway()
