"""Endpoints de proxy para a API universal de CRM.

- POST /smart-lists  {credentialId, name, tagName}
- POST /people       {credentialId, person: {...}}

Status e corpo do upstream são repassados sem alteração.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response

from api.routes._responses import error_response, read_json_body, relay_upstream
from api.validators.rollout import validate_person_request, validate_smart_list_request
from app.bootstrap import get_rollout_gateway
from utils.errors import ProxyError, ServiceError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from api.connectors.rollout.models import UpstreamResponse
    from api.validators.rollout import ProxyRequest

logger = logging.getLogger(__name__)

router = APIRouter()


async def _proxy(
    operation: str,
    request: Request,
    validate: Callable[[dict], ProxyRequest],
    forward: Callable[[ProxyRequest], Awaitable[UpstreamResponse]],
) -> Response:
    """Valida, encaminha e repassa; converte falhas no contrato de erro."""
    try:
        proxy_request = validate(await read_json_body(request))
        forwarded = await forward(proxy_request)
    except ServiceError as exc:
        logger.warning(
            "proxy_request_rejected",
            extra={
                "operation": operation,
                "error_type": type(exc).__name__,
                "status_code": exc.status_code,
            },
        )
        return error_response(exc)
    except Exception as exc:
        logger.exception(
            "proxy_request_unexpected_error",
            extra={"operation": operation, "error_type": type(exc).__name__},
        )
        return error_response(ProxyError())

    logger.info(
        "proxy_request_forwarded",
        extra={"operation": operation, "status_code": forwarded.status_code},
    )
    return relay_upstream(forwarded)


@router.post("/smart-lists", response_model=None)
async def create_smart_list(request: Request) -> Response:
    """Cria smart list na conta vinculada à credencial."""
    gateway = get_rollout_gateway()
    return await _proxy(
        "create_smart_list",
        request,
        validate_smart_list_request,
        lambda req: gateway.create_smart_list(req.credential_id, req.payload),
    )


@router.post("/people", response_model=None)
async def create_person(request: Request) -> Response:
    """Cria pessoa na conta vinculada à credencial."""
    gateway = get_rollout_gateway()
    return await _proxy(
        "create_person",
        request,
        validate_person_request,
        lambda req: gateway.create_person(req.credential_id, req.payload),
    )
