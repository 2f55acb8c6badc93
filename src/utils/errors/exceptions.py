"""Exceções de domínio do proxy de email.

Cada exceção carrega o status HTTP e a mensagem pública que a borda
(rotas FastAPI) devolve ao chamador como ``{"error": ...}``.
"""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base para erros que atravessam a borda HTTP."""

    status_code: int = 500
    public_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)

    @property
    def message(self) -> str:
        return str(self)

    def to_payload(self) -> dict[str, str]:
        """Corpo JSON devolvido ao chamador."""
        return {"error": self.message}


class ConfigurationError(ServiceError):
    """Segredos/configuração ausentes. Fatal por chamada, mensagem específica."""

    status_code = 500


class ValidationError(ServiceError):
    """Campos obrigatórios ausentes ou malformados na requisição."""

    status_code = 422
    public_message = "Invalid request"


class BadRequestError(ServiceError):
    """Corpo da requisição não é JSON válido."""

    status_code = 400
    public_message = "Invalid JSON body"


class NotFoundError(ServiceError):
    """Recurso ou rota inexistente."""

    status_code = 404
    public_message = "Not Found"


class ProxyError(ServiceError):
    """Falha inesperada ao encaminhar para o upstream.

    A mensagem pública é sempre genérica; o detalhe fica só nos logs.
    """

    status_code = 500
    public_message = "Failed to proxy request"

    def to_payload(self) -> dict[str, str]:
        return {"error": self.public_message}


class UpstreamError(ServiceError):
    """Upstream respondeu com status de erro em uma operação agregada."""

    status_code = 502
    public_message = "Upstream request failed"

    def __init__(
        self,
        message: str | None = None,
        upstream_status: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status
        self.payload = payload
