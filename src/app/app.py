"""Entrypoint da aplicação Prospector IA.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import (
    get_session_registry,
    get_transport,
    initialize_app,
    validate_runtime_settings,
)
from app.bootstrap.clients import create_async_redis_client
from app.observability import (
    CORRELATION_ID_HEADER,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from config.logging import get_logger
from config.settings import get_base_settings, get_gemini_settings, get_history_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import Response

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup: valida configurações e abre conexões.
    Shutdown: encerra sessões, transporte e Redis.
    """
    service = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service})
    validate_runtime_settings()
    app.state.redis_client = None
    app.state.gemini_configured = bool(get_gemini_settings().api_key)

    history_settings = get_history_settings()
    if history_settings.backend == "redis":
        try:
            app.state.redis_client = create_async_redis_client(history_settings.redis_url)
        except Exception as exc:
            logger.warning("redis_client_not_ready", extra={"error_type": type(exc).__name__})

    yield

    logger.info("app_shutting_down", extra={"service": service})
    await get_session_registry().close_all()
    await get_transport().close()
    redis_client = getattr(app.state, "redis_client", None)
    if redis_client is not None:
        await redis_client.aclose()


async def correlation_id_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Propaga X-Correlation-Id para logs e resposta."""
    token = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
    try:
        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = get_correlation_id()
        return response
    finally:
        reset_correlation_id(token)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    base = get_base_settings()
    fastapi_app = FastAPI(
        title="Prospector IA",
        description="Prospecção de leads B2B com IA e grounding em mapas/busca web",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(base.cors_origins),
        allow_credentials="*" not in base.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    fastapi_app.middleware("http")(correlation_id_middleware)

    fastapi_app.include_router(create_api_router())

    logger.info(
        "app_configured",
        extra={"service": base.service_name, "environment": base.environment},
    )

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    base = get_base_settings()
    logger.info("Starting Prospector IA", extra={"port": base.port})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=base.port,
        reload=base.is_development,
    )


if __name__ == "__main__":
    main()
