"""Cliente HTTP especializado para a API universal Rollout.

Estende HttpClient com o que toda chamada Rollout exige:
- Authorization: Bearer <token> emitido pelo TokenIssuer
- Header de credencial (x-rollout-credential-id) escopando a mailbox
- Corpo JSON, decodificado de forma defensiva na volta
- Log de requisição/resposta best-effort
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.rollout.http_base import HttpClient, HttpClientConfig
from api.connectors.rollout.models import UpstreamResponse
from api.connectors.rollout.upstream_logging import log_upstream_request, log_upstream_response
from config.settings.rollout import CREDENTIAL_HEADER

if TYPE_CHECKING:
    import httpx

    from config.settings import RolloutSettings

logger: logging.Logger = logging.getLogger(__name__)


def forward_response(response: httpx.Response) -> UpstreamResponse:
    """Converte resposta httpx em UpstreamResponse preservando o status.

    Corpo vazio vira ``{}``; corpo que não é JSON vira ``{"raw": texto}``
    em vez de ser descartado.
    """
    text = response.text
    if not text.strip():
        return UpstreamResponse(status_code=response.status_code, body={})
    try:
        body = json.loads(text)
    except ValueError:
        logger.warning(
            "upstream_body_not_json",
            extra={"status_code": response.status_code, "body_size": len(text)},
        )
        body = {"raw": text}
    return UpstreamResponse(status_code=response.status_code, body=body)


class RolloutHttpClient(HttpClient):
    """Cliente HTTP autenticado para as APIs universais Rollout."""

    async def call(
        self,
        method: str,
        url: str,
        *,
        access_token: str,
        credential_id: str | None = None,
        payload: Any = None,
        params: dict[str, str] | None = None,
    ) -> UpstreamResponse:
        """Executa chamada autenticada e devolve a resposta normalizada.

        Args:
            method: Verbo HTTP
            url: URL completa do endpoint upstream
            access_token: Bearer token já emitido
            credential_id: Referência da credencial (mailbox); omitida em
                endpoints que não são escopados por credencial
            payload: Corpo serializado como JSON (None = sem corpo)
            params: Query string

        Raises:
            ValueError: access_token vazio
            HttpError: falha de rede/timeout
        """
        if not access_token or not access_token.strip():
            raise ValueError("access_token não pode ser vazio")

        headers = self._build_headers(access_token, credential_id, has_body=payload is not None)
        log_upstream_request(method, url, credential_id, payload, params)

        response = await self.request(method, url, json=payload, params=params, headers=headers)
        forwarded = forward_response(response)

        log_upstream_response(method, url, forwarded.status_code, response.headers, forwarded.body)
        return forwarded

    @staticmethod
    def _build_headers(
        access_token: str,
        credential_id: str | None,
        *,
        has_body: bool,
    ) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        if credential_id:
            headers[CREDENTIAL_HEADER] = credential_id
        return headers


def create_rollout_http_client(
    settings: RolloutSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RolloutHttpClient:
    """Factory do cliente Rollout a partir das settings injetadas."""
    config = HttpClientConfig(
        timeout_seconds=settings.request_timeout_seconds,
        transport=transport,
    )
    return RolloutHttpClient(config=config)
