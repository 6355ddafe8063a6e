"""Endpoints de health check e informação do serviço."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from app.bootstrap import SERVICE_NAME

router = APIRouter()

SERVICE_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = SERVICE_VERSION


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/")
async def service_info() -> dict[str, Any]:
    return {
        "message": "GitHub App Gateway",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "webhooks": "/webhooks",
            "api": "/api",
        },
    }
