"""Router do GitHub — agrega os endpoints do webhook."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.github.webhook import router as webhook_router

router = APIRouter()

router.include_router(webhook_router)
