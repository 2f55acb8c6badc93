"""Gateway de proxy para as APIs universais Rollout.

Para cada operação:
1. Valida credencial e payload (ValidationError antes de qualquer I/O)
2. Emite token para o subject padrão do app (ConfigurationError se faltar segredo)
3. Encaminha via RolloutHttpClient com Bearer + header de credencial
4. Repassa status e corpo do upstream sem alteração

Qualquer outra falha é logada com contexto e vira ProxyError genérico.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from api.validators.rollout import (
    require_credential_id,
    require_text,
    validate_send_payload,
)
from utils.errors import ProxyError, ServiceError, ValidationError

if TYPE_CHECKING:
    from api.connectors.rollout.http_client import RolloutHttpClient
    from api.connectors.rollout.models import UpstreamResponse
    from app.services.token_issuer import TokenIssuer
    from config.settings import RolloutSettings

logger = logging.getLogger(__name__)


class RolloutGateway:
    """Borda de proxy: token + credencial + repasse do upstream."""

    def __init__(
        self,
        token_issuer: TokenIssuer,
        http_client: RolloutHttpClient,
        settings: RolloutSettings,
    ) -> None:
        self._token_issuer = token_issuer
        self._http = http_client
        self._settings = settings

    # ── CRM ────────────────────────────────────────────────────────────────

    async def create_smart_list(self, credential_id: str, payload: dict[str, Any]) -> UpstreamResponse:
        """POST {crm}/smartLists com ``{name, tagName}``."""
        credential_id = require_credential_id(credential_id)
        require_text(payload.get("name"), "name")
        require_text(payload.get("tagName"), "tagName")
        url = f"{self._settings.crm_api_endpoint}/smartLists"
        return await self._forward("POST", url, credential_id, payload=payload)

    async def create_person(self, credential_id: str, person: dict[str, Any]) -> UpstreamResponse:
        """POST {crm}/people com o objeto pessoa."""
        credential_id = require_credential_id(credential_id)
        if not isinstance(person, dict) or not person:
            raise ValidationError("person must be a non-empty object")
        url = f"{self._settings.crm_api_endpoint}/people"
        return await self._forward("POST", url, credential_id, payload=person)

    # ── Email ──────────────────────────────────────────────────────────────

    async def list_messages(
        self,
        credential_id: str,
        limit: int,
        cursor: str = "",
    ) -> UpstreamResponse:
        """GET {email}/emailMessages?limit=&next= (uma página)."""
        credential_id = require_credential_id(credential_id)
        params = {"limit": str(limit)}
        if cursor:
            params["next"] = cursor
        url = f"{self._settings.email_api_endpoint}/emailMessages"
        return await self._forward("GET", url, credential_id, params=params)

    async def get_message(self, credential_id: str, message_id: str) -> UpstreamResponse:
        """GET {email}/emailMessages/{id}."""
        credential_id = require_credential_id(credential_id)
        message_id = require_text(message_id, "messageId")
        url = f"{self._settings.email_api_endpoint}/emailMessages/{quote(message_id, safe='')}"
        return await self._forward("GET", url, credential_id)

    async def send_message(self, credential_id: str, payload: dict[str, Any]) -> UpstreamResponse:
        """POST {email}/emailMessages."""
        credential_id = require_credential_id(credential_id)
        validate_send_payload(payload)
        url = f"{self._settings.email_api_endpoint}/emailMessages"
        return await self._forward("POST", url, credential_id, payload=payload)

    async def create_thread(self, credential_id: str, subject: str) -> UpstreamResponse:
        """POST {email}/email-threads semeando o assunto."""
        credential_id = require_credential_id(credential_id)
        url = f"{self._settings.email_api_endpoint}/email-threads"
        return await self._forward("POST", url, credential_id, payload={"subject": subject})

    # ── Credenciais ────────────────────────────────────────────────────────

    async def list_credentials(self, app_key: str) -> UpstreamResponse:
        """GET credentials?appKey=&includeProfile=true&includeData=true (sem escopo de mailbox)."""
        params = {"appKey": app_key, "includeProfile": "true", "includeData": "true"}
        return await self._forward("GET", self._settings.credentials_url, None, params=params)

    # ── Interno ────────────────────────────────────────────────────────────

    async def _forward(
        self,
        method: str,
        url: str,
        credential_id: str | None,
        *,
        payload: Any = None,
        params: dict[str, str] | None = None,
    ) -> UpstreamResponse:
        # Erros de configuração sobem com mensagem específica, antes da rede
        token = self._token_issuer.issue(self._settings.default_user_id)
        try:
            return await self._http.call(
                method,
                url,
                access_token=token.value,
                credential_id=credential_id,
                payload=payload,
                params=params,
            )
        except ServiceError:
            raise
        except Exception as exc:
            logger.exception(
                "proxy_request_failed",
                extra={
                    "method": method,
                    "url": url,
                    "credential_id": credential_id or "",
                    "error_type": type(exc).__name__,
                },
            )
            raise ProxyError(f"{method} {url} failed: {type(exc).__name__}") from exc
