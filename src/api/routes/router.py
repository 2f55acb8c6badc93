"""Agregador de rotas — registra todos os sub-routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.email.router import router as email_router
from api.routes.health.router import router as health_router
from api.routes.proxy.router import router as proxy_router
from api.routes.token.router import router as token_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(token_router, tags=["token"])
    api_router.include_router(proxy_router, tags=["proxy"])
    api_router.include_router(email_router, tags=["email"])

    return api_router
