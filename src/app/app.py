"""Entrypoint da GitHub App Gateway.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3000

Uso (desenvolvimento):
    uvicorn app.app:app --reload --port 3000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from api.routes.github.webhook_runtime_tasks import drain_processing_tasks
from app.bootstrap import (
    SERVICE_NAME,
    get_credential_exchanger,
    get_github_client,
    get_rate_limited_invoker,
    initialize_app,
    validate_runtime_settings,
)
from app.infra.http import HttpError
from config.logging import get_logger
from config.settings import get_base_settings, get_github_settings
from utils.errors import GitHubAppError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


async def verify_app_configuration() -> bool:
    """Confere a identidade da App contra a plataforma no startup.

    Falha não impede o boot: o serviço continua recebendo webhooks e
    registra o problema.
    """
    if not get_github_settings().has_identity:
        logger.warning("app_identity_not_configured", extra={"service": SERVICE_NAME})
        return False

    client = get_github_client()
    try:
        assertion = get_credential_exchanger().mint_assertion()
        data = await get_rate_limited_invoker().invoke(
            lambda: client.get_authenticated_app(assertion.token)
        )
    except (GitHubAppError, HttpError) as exc:
        logger.error(
            "app_configuration_verify_failed",
            extra={"service": SERVICE_NAME, "error_type": type(exc).__name__},
        )
        return False

    logger.info(
        "app_configuration_verified",
        extra={"app_name": data.get("name"), "app_id": data.get("id")},
    )
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Confere a identidade da App

    Shutdown:
    - Aguarda tasks de webhook pendentes
    """
    logger.info("app_starting", extra={"service": SERVICE_NAME})
    validate_runtime_settings()
    app.state.app_verified = await verify_app_configuration()

    yield

    logger.info("app_shutting_down", extra={"service": SERVICE_NAME})
    await drain_processing_tasks(timeout_seconds=30.0)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="GitHub App Gateway",
        description="Recebimento de webhooks e automação de repositórios via GitHub App",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": SERVICE_NAME})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    port = get_base_settings().port
    logger.info("Starting GitHub App Gateway in development mode", extra={"port": port})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=port,
        reload=True,
    )


if __name__ == "__main__":
    main()
