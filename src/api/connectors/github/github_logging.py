"""Helpers de logging para a API do GitHub (sem tokens)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.infra.http import HttpError

logger = logging.getLogger(__name__)


def log_api_error(method: str, endpoint: str, error: HttpError) -> None:
    """Loga erro da API sem expor dados sensíveis."""
    logger.warning(
        "github_api_error",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": error.status_code,
            "ratelimit_remaining": error.headers.get("x-ratelimit-remaining"),
        },
    )


def log_success(method: str, endpoint: str, status_code: int) -> None:
    logger.debug(
        "github_api_success",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
        },
    )
