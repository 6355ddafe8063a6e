"""API informativa da GitHub App.

Endpoints (prefixo /api):
- GET /app: dados da App autenticada
- GET /installations: instalações da App
- GET /installations/{installation_id}/repositories: repositórios de uma instalação
- POST /test/issue: cria issue de teste (debug)
- GET /health: health da API com índice de endpoints

Chamadas da App usam a asserção assinada; chamadas por instalação usam
o token trocado. Tudo passa pelo invocador com backoff de rate limit.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.bootstrap import (
    get_credential_exchanger,
    get_github_client,
    get_rate_limited_invoker,
)
from app.infra.http import HttpError
from utils.errors import GitHubAppError

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_TEST_ISSUE_BODY = "Test issue created by GitHub App Gateway"

_APP_FIELDS = ("name", "id", "description", "permissions", "events", "installations_count")
_REPOSITORY_FIELDS = (
    "id",
    "name",
    "full_name",
    "private",
    "description",
    "language",
    "stargazers_count",
    "forks_count",
    "updated_at",
)


class CreateTestIssueRequest(BaseModel):
    """Body de criação de issue de teste."""

    installation_id: int | None = None
    owner: str | None = None
    repo: str | None = None
    title: str | None = None
    body: str | None = Field(default=None)

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("installation_id", "owner", "repo", "title")
            if not getattr(self, name)
        ]


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


def _summarize_installation(installation: dict[str, Any]) -> dict[str, Any]:
    account = installation.get("account") or {}
    return {
        "id": installation.get("id"),
        "account": {
            "login": account.get("login"),
            "type": account.get("type"),
            "avatar_url": account.get("avatar_url"),
        },
        "permissions": installation.get("permissions"),
        "events": installation.get("events"),
        "created_at": installation.get("created_at"),
        "updated_at": installation.get("updated_at"),
    }


@router.get("/app", response_model=None)
async def get_app_info() -> dict[str, Any] | JSONResponse:
    exchanger = get_credential_exchanger()
    client = get_github_client()
    try:
        assertion = exchanger.mint_assertion()
        data = await get_rate_limited_invoker().invoke(
            lambda: client.get_authenticated_app(assertion.token)
        )
    except (GitHubAppError, HttpError) as exc:
        logger.warning("app_info_fetch_failed", extra={"error_type": type(exc).__name__})
        return _error("Failed to fetch app information", 500)

    info = {field: data.get(field) for field in _APP_FIELDS}
    info["owner"] = (data.get("owner") or {}).get("login")
    return info


@router.get("/installations", response_model=None)
async def list_installations() -> dict[str, Any] | JSONResponse:
    exchanger = get_credential_exchanger()
    client = get_github_client()
    try:
        assertion = exchanger.mint_assertion()
        installations = await get_rate_limited_invoker().invoke(
            lambda: client.list_installations(assertion.token)
        )
    except (GitHubAppError, HttpError) as exc:
        logger.warning("installations_fetch_failed", extra={"error_type": type(exc).__name__})
        return _error("Failed to fetch installations", 500)

    summaries = [_summarize_installation(item) for item in installations or []]
    return {"total_count": len(summaries), "installations": summaries}


@router.get("/installations/{installation_id}/repositories", response_model=None)
async def list_installation_repositories(installation_id: int) -> dict[str, Any] | JSONResponse:
    client = get_github_client()
    try:
        credential = await get_credential_exchanger().exchange_for_tenant(installation_id)
        data = await get_rate_limited_invoker().invoke(
            lambda: client.list_installation_repositories(credential.access_token)
        )
    except (GitHubAppError, HttpError) as exc:
        logger.warning(
            "installation_repositories_fetch_failed",
            extra={"tenant_id": installation_id, "error_type": type(exc).__name__},
        )
        return _error("Failed to fetch repositories", 500)

    repositories = [
        {field: repo.get(field) for field in _REPOSITORY_FIELDS}
        for repo in (data or {}).get("repositories", [])
    ]
    return {"total_count": len(repositories), "repositories": repositories}


@router.post("/test/issue", response_model=None)
async def create_test_issue(request: CreateTestIssueRequest) -> dict[str, Any] | JSONResponse:
    missing = request.missing_fields()
    if missing:
        return _error(f"Missing required fields: {', '.join(missing)}", 400)

    client = get_github_client()
    try:
        credential = await get_credential_exchanger().exchange_for_tenant(
            request.installation_id  # type: ignore[arg-type]
        )
        issue = await get_rate_limited_invoker().invoke(
            lambda: client.create_issue(
                credential.access_token,
                request.owner,  # type: ignore[arg-type]
                request.repo,  # type: ignore[arg-type]
                request.title,  # type: ignore[arg-type]
                request.body or DEFAULT_TEST_ISSUE_BODY,
            )
        )
    except (GitHubAppError, HttpError) as exc:
        logger.warning("test_issue_create_failed", extra={"error_type": type(exc).__name__})
        return _error("Failed to create test issue", 500)

    logger.info(
        "test_issue_created",
        extra={"tenant_id": request.installation_id, "issue_number": issue.get("number")},
    )
    return {
        "message": "Test issue created successfully",
        "issue": {
            "number": issue.get("number"),
            "title": issue.get("title"),
            "url": issue.get("html_url"),
        },
    }


@router.get("/health")
async def api_health() -> dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "endpoints": {
            "app": "GET /api/app",
            "installations": "GET /api/installations",
            "repositories": "GET /api/installations/{id}/repositories",
            "test": "POST /api/test/issue",
        },
    }
