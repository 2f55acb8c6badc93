"""Conector Rollout — cliente HTTP autenticado e gateway de proxy.

Uso:
    from api.connectors.rollout import RolloutGateway, create_rollout_http_client

    client = create_rollout_http_client(settings)
    gateway = RolloutGateway(token_issuer, client, settings)
    response = await gateway.list_messages("cred-123", limit=20)
"""

from api.connectors.rollout.gateway import RolloutGateway
from api.connectors.rollout.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.rollout.http_client import (
    RolloutHttpClient,
    create_rollout_http_client,
    forward_response,
)
from api.connectors.rollout.models import UpstreamResponse
from api.connectors.rollout.upstream_errors import extract_error_message

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "RolloutGateway",
    "RolloutHttpClient",
    "UpstreamResponse",
    "create_rollout_http_client",
    "extract_error_message",
    "forward_response",
]
