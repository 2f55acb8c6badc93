"""Factories — criação de implementações concretas a partir das settings.

Settings são lidas apenas aqui e injetadas nos construtores; nenhum
componente de negócio consulta o ambiente diretamente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.rollout import RolloutGateway, create_rollout_http_client
from app.services.token_issuer import TokenIssuer
from app.use_cases.email import (
    LoadActiveCredentialUseCase,
    LoadInboxUseCase,
    ResolveReplyTargetUseCase,
    SendMessageUseCase,
)
from config.settings import get_rollout_settings

if TYPE_CHECKING:
    import httpx

    from config.settings import RolloutSettings

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Token / Gateway
# ──────────────────────────────────────────────────────────────────────────────


def create_token_issuer(settings: RolloutSettings | None = None) -> TokenIssuer:
    """Cria TokenIssuer com os segredos do app."""
    rollout = settings or get_rollout_settings()
    return TokenIssuer(client_id=rollout.client_id, client_secret=rollout.client_secret)


def create_rollout_gateway(
    settings: RolloutSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RolloutGateway:
    """Cria o gateway de proxy com cliente HTTP e emissor de token.

    Args:
        settings: Settings explícitas (default: carregadas do ambiente)
        transport: Transport httpx alternativo (testes)
    """
    rollout = settings or get_rollout_settings()
    logger.debug(
        "rollout_gateway_created",
        extra={
            "email_api": rollout.email_api_endpoint,
            "crm_api": rollout.crm_api_endpoint,
            "timeout_seconds": rollout.request_timeout_seconds,
        },
    )
    return RolloutGateway(
        token_issuer=create_token_issuer(rollout),
        http_client=create_rollout_http_client(rollout, transport=transport),
        settings=rollout,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Use cases
# ──────────────────────────────────────────────────────────────────────────────


def create_load_inbox_use_case(gateway: RolloutGateway) -> LoadInboxUseCase:
    return LoadInboxUseCase(gateway=gateway)


def create_reply_target_use_case(gateway: RolloutGateway) -> ResolveReplyTargetUseCase:
    return ResolveReplyTargetUseCase(gateway=gateway)


def create_send_message_use_case(gateway: RolloutGateway) -> SendMessageUseCase:
    return SendMessageUseCase(gateway=gateway)


def create_active_credential_use_case(
    gateway: RolloutGateway,
    app_key: str | None = None,
) -> LoadActiveCredentialUseCase:
    return LoadActiveCredentialUseCase(
        gateway=gateway,
        app_key=app_key or get_rollout_settings().connector_app_key,
    )
