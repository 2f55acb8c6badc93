"""Endpoint de emissão de token Bearer para a UI.

GET /token?user_id=<subject>; sem user_id, usa o subject padrão.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api.routes._responses import error_response
from app.bootstrap import get_token_issuer
from config.settings import get_rollout_settings
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter()

TOKEN_FAILURE_MESSAGE = "Failed to generate token"


class TokenResponse(BaseModel):
    """Token emitido e o subject usado."""

    token: str
    user_id: str


@router.get("/token", response_model=None)
async def issue_token(request: Request) -> Response | TokenResponse:
    """Emite token para o subject informado (ou o padrão).

    Returns:
        ``{token, user_id}``; 500 com a causa para configuração ausente;
        500 genérico para qualquer outra falha.
    """
    user_id = (request.query_params.get("user_id") or "").strip()
    if not user_id:
        user_id = get_rollout_settings().default_user_id

    try:
        issued = get_token_issuer().issue(user_id)
    except ConfigurationError as exc:
        logger.error("token_config_missing", extra={"error": str(exc)})
        return error_response(exc)
    except Exception as exc:
        logger.exception("token_issue_failed", extra={"error_type": type(exc).__name__})
        return JSONResponse(content={"error": TOKEN_FAILURE_MESSAGE}, status_code=500)

    logger.info("token_issued", extra={"user_id": user_id, "expires_at": issued.expires_at})
    return TokenResponse(token=issued.value, user_id=user_id)
