"""Agregador de rotas — registra todos os routers do serviço.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.app_info.router import router as app_info_router
from api.routes.github.router import router as github_router
from api.routes.health.router import router as health_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health e informação do serviço na raiz
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(github_router, tags=["github"])

    api_router.include_router(app_info_router, prefix="/api", tags=["app"])

    return api_router
