"""Cliente HTTP especializado para a REST API do GitHub.

Estende HttpClient genérico com comportamentos específicos do GitHub:
- Headers de versão de API, Accept e User-Agent
- Validação de token antes de usar
- Logging estruturado sem tokens
- Erros preservam status e headers (x-ratelimit-*) para o invoker
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.github.github_logging import log_api_error, log_success
from app.infra.http import HttpClient, HttpClientConfig, HttpError

if TYPE_CHECKING:
    import httpx

    from config.settings import GitHubAppSettings

logger: logging.Logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github+json"


class GitHubHttpClient(HttpClient):
    """Cliente para a REST API do GitHub.

    Operações com ``app_jwt`` autenticam como App; operações com
    ``access_token`` autenticam como instalação.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        base_url: str = "https://api.github.com",
        api_version: str = "2022-11-28",
        user_agent: str = "github-app-gateway/1.0.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, transport=transport)
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.user_agent = user_agent

    # ── App (JWT) ────────────────────────────────────────────────────────

    async def create_installation_access_token(
        self,
        app_jwt: str,
        installation_id: int,
    ) -> dict[str, Any]:
        """POST /app/installations/{id}/access_tokens."""
        return await self._call(
            "POST",
            f"/app/installations/{installation_id}/access_tokens",
            app_jwt,
        )

    async def get_authenticated_app(self, app_jwt: str) -> dict[str, Any]:
        return await self._call("GET", "/app", app_jwt)

    async def list_installations(self, app_jwt: str) -> list[dict[str, Any]]:
        return await self._call("GET", "/app/installations", app_jwt)

    # ── Instalação (token de acesso) ─────────────────────────────────────

    async def list_installation_repositories(
        self,
        access_token: str,
    ) -> dict[str, Any]:
        return await self._call("GET", "/installation/repositories", access_token)

    async def create_issue_comment(
        self,
        access_token: str,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            access_token,
            json={"body": body},
        )

    async def add_labels(
        self,
        access_token: str,
        owner: str,
        repo: str,
        issue_number: int,
        labels: list[str],
    ) -> list[dict[str, Any]]:
        return await self._call(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/labels",
            access_token,
            json={"labels": labels},
        )

    async def create_issue(
        self,
        access_token: str,
        owner: str,
        repo: str,
        title: str,
        body: str = "",
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            f"/repos/{owner}/{repo}/issues",
            access_token,
            json={"title": title, "body": body},
        )

    # ── Internos ─────────────────────────────────────────────────────────

    def _build_headers(self, token: str) -> dict[str, str]:
        """Monta headers autenticados.

        Raises:
            ValueError: Se token vazio
        """
        if not token or not token.strip():
            raise ValueError("token não pode ser vazio")
        return {
            "Accept": GITHUB_ACCEPT,
            "Authorization": f"Bearer {token}",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": self.api_version,
        }

    async def _call(
        self,
        method: str,
        path: str,
        token: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        headers = self._build_headers(token)
        try:
            response = await self.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                json=json,
            )
        except HttpError as exc:
            log_api_error(method, path, exc)
            raise

        log_success(method, path, response.status_code)
        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            logger.error("github_response_invalid_json", extra={"endpoint": path})
            raise HttpError(
                "invalid_json_response",
                status_code=response.status_code,
            ) from exc


def create_github_http_client(
    settings: GitHubAppSettings | None = None,
) -> GitHubHttpClient:
    """Factory para criar cliente GitHub com config padrão.

    Args:
        settings: GitHubAppSettings opcional. Se None, carrega do ambiente.
    """
    # Import local para evitar dependência circular
    from config.settings import get_github_settings

    github = settings or get_github_settings()
    return GitHubHttpClient(
        config=HttpClientConfig(timeout_seconds=github.request_timeout_seconds),
        base_url=github.api_base_url,
        api_version=github.api_version,
        user_agent=github.user_agent,
    )
