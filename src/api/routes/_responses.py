"""Helpers de resposta compartilhados pelas rotas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from api.validators.rollout import parse_json_body

if TYPE_CHECKING:
    from api.connectors.rollout.models import UpstreamResponse
    from utils.errors import ServiceError

# Status que não podem carregar corpo
_BODYLESS_STATUS = frozenset({204, 304})


def error_response(exc: ServiceError) -> JSONResponse:
    """Converte ServiceError em ``{"error": ...}`` com o status da exceção."""
    return JSONResponse(content=exc.to_payload(), status_code=exc.status_code)


def relay_upstream(forwarded: UpstreamResponse) -> Response:
    """Repassa status e corpo do upstream sem alteração."""
    if forwarded.status_code in _BODYLESS_STATUS or forwarded.status_code < 200:
        return Response(status_code=forwarded.status_code)
    return JSONResponse(content=forwarded.body, status_code=forwarded.status_code)


async def read_json_body(request: Request) -> dict[str, Any]:
    """Lê e decodifica o corpo JSON (BadRequestError se inválido)."""
    return parse_json_body(await request.body())


def text_field(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    return value.strip() if isinstance(value, str) else ""

