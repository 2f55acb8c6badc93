"""correlation_id por requisição, propagado para os logs.

ContextVar mantém o valor isolado por task asyncio; o middleware HTTP
define o valor a partir do header ``x-correlation-id`` (ou gera um UUID)
e devolve o mesmo header na resposta.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response

CORRELATION_HEADER = "x-correlation-id"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; gera UUID v4 quando ausente."""
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o valor anterior."""
    _correlation_id.reset(token)


async def correlation_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Middleware HTTP que envolve cada requisição com um correlation_id."""
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = get_correlation_id()
        return response
    finally:
        reset_correlation_id(token)
