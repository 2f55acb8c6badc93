"""Cliente HTTP base para conectores da camada API.

Uma tentativa por chamada, com timeout: sem retries, a falha sobe para
quem chamou.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 15.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    # Permite injetar httpx.MockTransport em testes
    transport: httpx.AsyncBaseTransport | None = None


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class HttpClient:
    """Cliente HTTP simples para chamadas externas."""

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Executa a requisição e devolve a resposta, qualquer que seja o status.

        Raises:
            HttpError: timeout, falha de conexão ou erro de protocolo.
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        try:
            async with httpx.AsyncClient(
                verify=self._config.verify_ssl,
                transport=self._config.transport,
                timeout=self._config.timeout_seconds,
            ) as client:
                return await client.request(
                    method,
                    url,
                    json=json,
                    params=params,
                    headers=merged_headers,
                )
        except httpx.TimeoutException as exc:
            logger.warning("http_timeout", extra={"method": method, "url": url})
            raise HttpError("http_timeout") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "http_connection_error",
                extra={"method": method, "url": url, "error_type": type(exc).__name__},
            )
            raise HttpError("http_connection_error") from exc

