"""Entrypoint da aplicação mailbridge.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 4567

Uso (desenvolvimento):
    python -m app.app
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import create_api_router
from api.routes._responses import error_response
from app.bootstrap import initialize_app, validate_runtime_settings
from app.observability import CORRELATION_HEADER, correlation_middleware
from config.logging import get_logger
from config.settings import get_base_settings
from utils.errors import NotFoundError, ServiceError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.datastructures import Headers

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", "Authorization", CORRELATION_HEADER]


class PreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware cujo preflight sempre responde 204 sem corpo.

    Origin, métodos e headers pedidos nunca geram 400: a resposta traz os
    valores configurados e o navegador decide.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        origin = request_headers.get("origin", "")
        headers = {
            "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
            "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
        }
        if self.allow_all_origins:
            headers["Access-Control-Allow-Origin"] = "*"
        else:
            allowed = origin if origin and self.is_allowed_origin(origin) else self.allow_origins[0]
            headers["Access-Control-Allow-Origin"] = allowed
            headers["Vary"] = "Origin"
        return Response(status_code=204, headers=headers)


async def _options_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Qualquer OPTIONS responde 204 vazio; headers CORS vêm do middleware externo."""
    if request.method == "OPTIONS":
        return Response(status_code=204)
    return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Valida settings no startup; segredos ausentes só geram alerta."""
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()
    yield
    logger.info("app_shutting_down", extra={"service": service_name})


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        return error_response(NotFoundError())
    return JSONResponse(
        content={"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _service_error_handler(request: Request, exc: ServiceError) -> Response:
    logger.warning(
        "service_error",
        extra={
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
        },
    )
    return error_response(exc)


async def _unhandled_error_handler(request: Request, exc: Exception) -> Response:
    logger.exception(
        "unhandled_error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return JSONResponse(content={"error": str(exc)}, status_code=500)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    settings = get_base_settings()
    fastapi_app = FastAPI(
        title="mailbridge",
        description="Backend de token e proxy para as APIs universais de email e CRM",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Último registrado é o mais externo: CORS responde preflight antes de tudo
    fastapi_app.middleware("http")(_options_middleware)
    fastapi_app.middleware("http")(correlation_middleware)
    fastapi_app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    fastapi_app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    fastapi_app.add_exception_handler(ServiceError, _service_error_handler)
    fastapi_app.add_exception_handler(Exception, _unhandled_error_handler)

    fastapi_app.include_router(create_api_router())

    logger.info(
        "app_configured",
        extra={"service": settings.service_name, "cors_origins": settings.cors_origins},
    )

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    settings = get_base_settings()
    logger.info("app_listening", extra={"port": settings.port})
    uvicorn.run("app.app:app", host="0.0.0.0", port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    main()
