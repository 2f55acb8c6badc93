"""Testes do RolloutGateway com transporte httpx simulado."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import jwt
import pytest

from api.connectors.rollout import RolloutGateway, create_rollout_http_client
from app.services.token_issuer import TokenIssuer
from config.settings import RolloutSettings
from utils.errors import ConfigurationError, ProxyError, ValidationError


def _gateway(
    settings: RolloutSettings,
    handler: Callable[[httpx.Request], httpx.Response],
) -> RolloutGateway:
    return RolloutGateway(
        token_issuer=TokenIssuer(settings.client_id, settings.client_secret),
        http_client=create_rollout_http_client(settings, transport=httpx.MockTransport(handler)),
        settings=settings,
    )


class _Recorder:
    def __init__(self, response: httpx.Response) -> None:
        self.requests: list[httpx.Request] = []
        self._response = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._response


@pytest.mark.asyncio
async def test_smart_list_forwards_with_token_for_default_subject(
    rollout_settings: RolloutSettings,
) -> None:
    recorder = _Recorder(httpx.Response(201, json={"id": "sl-1"}))
    gateway = _gateway(rollout_settings, recorder)

    forwarded = await gateway.create_smart_list("cred-1", {"name": "VIP", "tagName": "vip"})

    request = recorder.requests[0]
    assert str(request.url) == "https://crm.test/api/smartLists"
    assert request.headers["x-rollout-credential-id"] == "cred-1"
    token = request.headers["Authorization"].removeprefix("Bearer ")
    claims = jwt.decode(token, rollout_settings.client_secret, algorithms=["HS512"])
    assert claims["sub"] == "demo-email-user"
    assert claims["iss"] == rollout_settings.client_id
    assert forwarded.status_code == 201
    assert forwarded.body == {"id": "sl-1"}


@pytest.mark.asyncio
async def test_upstream_status_is_relayed_unchanged(rollout_settings: RolloutSettings) -> None:
    gateway = _gateway(rollout_settings, _Recorder(httpx.Response(409, json={"error": "exists"})))

    forwarded = await gateway.create_person("cred-1", {"firstName": "Ada"})

    assert forwarded.status_code == 409
    assert forwarded.body == {"error": "exists"}


@pytest.mark.asyncio
async def test_missing_credential_fails_before_network(rollout_settings: RolloutSettings) -> None:
    recorder = _Recorder(httpx.Response(200))
    gateway = _gateway(rollout_settings, recorder)

    with pytest.raises(ValidationError, match="credentialId is required"):
        await gateway.create_smart_list("  ", {"name": "VIP", "tagName": "vip"})

    assert recorder.requests == []


@pytest.mark.asyncio
async def test_missing_secret_fails_before_network(rollout_settings: RolloutSettings) -> None:
    settings = RolloutSettings(client_id=rollout_settings.client_id, client_secret="")
    recorder = _Recorder(httpx.Response(200))
    gateway = _gateway(settings, recorder)

    with pytest.raises(ConfigurationError, match="ROLLOUT_CLIENT_SECRET not configured"):
        await gateway.list_messages("cred-1", limit=20)

    assert recorder.requests == []


@pytest.mark.asyncio
async def test_network_failure_becomes_generic_proxy_error(
    rollout_settings: RolloutSettings,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    gateway = _gateway(rollout_settings, handler)

    with pytest.raises(ProxyError) as exc_info:
        await gateway.create_person("cred-1", {"firstName": "Ada"})

    assert exc_info.value.to_payload() == {"error": "Failed to proxy request"}


@pytest.mark.asyncio
async def test_list_messages_sends_limit_and_cursor(rollout_settings: RolloutSettings) -> None:
    recorder = _Recorder(httpx.Response(200, json={"data": []}))
    gateway = _gateway(rollout_settings, recorder)

    await gateway.list_messages("cred-1", limit=20, cursor="abc")

    params = recorder.requests[0].url.params
    assert recorder.requests[0].url.path == "/api/emailMessages"
    assert params["limit"] == "20"
    assert params["next"] == "abc"


@pytest.mark.asyncio
async def test_get_message_escapes_id(rollout_settings: RolloutSettings) -> None:
    recorder = _Recorder(httpx.Response(200, json={"threadId": "t-1"}))
    gateway = _gateway(rollout_settings, recorder)

    await gateway.get_message("cred-1", "a/b")

    assert recorder.requests[0].url.raw_path == b"/api/emailMessages/a%2Fb"


@pytest.mark.asyncio
async def test_create_thread_posts_subject(rollout_settings: RolloutSettings) -> None:
    recorder = _Recorder(httpx.Response(201, json={"id": "t-9"}))
    gateway = _gateway(rollout_settings, recorder)

    await gateway.create_thread("cred-1", "Hello")

    assert recorder.requests[0].url.path == "/api/email-threads"
    assert json.loads(recorder.requests[0].content) == {"subject": "Hello"}


@pytest.mark.asyncio
async def test_list_credentials_is_not_scoped_to_mailbox(
    rollout_settings: RolloutSettings,
) -> None:
    recorder = _Recorder(httpx.Response(200, json=[]))
    gateway = _gateway(rollout_settings, recorder)

    await gateway.list_credentials("gmail")

    request = recorder.requests[0]
    assert "x-rollout-credential-id" not in request.headers
    assert dict(request.url.params) == {
        "appKey": "gmail",
        "includeProfile": "true",
        "includeData": "true",
    }


@pytest.mark.asyncio
async def test_send_message_validates_payload(rollout_settings: RolloutSettings) -> None:
    recorder = _Recorder(httpx.Response(200))
    gateway = _gateway(rollout_settings, recorder)

    with pytest.raises(ValidationError):
        await gateway.send_message("cred-1", {"subject": "Hi", "body": "x"})

    assert recorder.requests == []
