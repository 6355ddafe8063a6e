"""Contrato da API da plataforma usado pelo núcleo.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import Any, Protocol


class GitHubApiProtocol(Protocol):
    """Operações remotas consumidas pelo trocador e pelos handlers."""

    async def create_installation_access_token(
        self,
        app_jwt: str,
        installation_id: int,
    ) -> dict[str, Any]: ...

    async def get_authenticated_app(self, app_jwt: str) -> dict[str, Any]: ...

    async def list_installations(self, app_jwt: str) -> list[dict[str, Any]]: ...

    async def list_installation_repositories(
        self,
        access_token: str,
    ) -> dict[str, Any]: ...

    async def create_issue_comment(
        self,
        access_token: str,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> dict[str, Any]: ...

    async def add_labels(
        self,
        access_token: str,
        owner: str,
        repo: str,
        issue_number: int,
        labels: list[str],
    ) -> list[dict[str, Any]]: ...

    async def create_issue(
        self,
        access_token: str,
        owner: str,
        repo: str,
        title: str,
        body: str = "",
    ) -> dict[str, Any]: ...
