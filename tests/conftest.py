"""Configuração do pytest para o GitHub App Gateway."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from cryptography.hazmat.primitives import serialization  # noqa: E402
from cryptography.hazmat.primitives.asymmetric import rsa  # noqa: E402


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


class FakeGitHubClient:
    """Cliente em memória: registra chamadas e devolve respostas fixas.

    ``errors`` mapeia nome do método para uma lista de exceções levantadas
    em ordem, antes de devolver a resposta normal.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.errors: dict[str, list[Exception]] = {}
        self.token_response: dict[str, Any] = {
            "token": "ghs_installation_token",
            "expires_at": "2026-10-19T12:00:00Z",
        }
        self.app_response: dict[str, Any] = {
            "id": 42,
            "name": "gateway-app",
            "owner": {"login": "octo-org"},
            "permissions": {"issues": "write"},
            "events": ["issues"],
            "installations_count": 1,
        }
        self.installations_response: list[dict[str, Any]] = []
        self.repositories_response: dict[str, Any] = {"total_count": 0, "repositories": []}

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        pending = self.errors.get(method)
        if pending:
            raise pending.pop(0)

    async def create_installation_access_token(self, app_jwt: str, installation_id: int) -> dict[str, Any]:
        self._record("create_installation_access_token", app_jwt, installation_id)
        return self.token_response

    async def get_authenticated_app(self, app_jwt: str) -> dict[str, Any]:
        self._record("get_authenticated_app", app_jwt)
        return self.app_response

    async def list_installations(self, app_jwt: str) -> list[dict[str, Any]]:
        self._record("list_installations", app_jwt)
        return self.installations_response

    async def list_installation_repositories(self, access_token: str) -> dict[str, Any]:
        self._record("list_installation_repositories", access_token)
        return self.repositories_response

    async def create_issue_comment(
        self, access_token: str, owner: str, repo: str, issue_number: int, body: str
    ) -> dict[str, Any]:
        self._record("create_issue_comment", access_token, owner, repo, issue_number, body)
        return {"id": 1, "body": body}

    async def add_labels(
        self, access_token: str, owner: str, repo: str, issue_number: int, labels: list[str]
    ) -> list[dict[str, Any]]:
        self._record("add_labels", access_token, owner, repo, issue_number, labels)
        return [{"name": label} for label in labels]

    async def create_issue(
        self, access_token: str, owner: str, repo: str, title: str, body: str = ""
    ) -> dict[str, Any]:
        self._record("create_issue", access_token, owner, repo, title, body)
        return {"number": 7, "title": title, "html_url": f"https://github.com/{owner}/{repo}/issues/7"}


class RecordingSleep:
    """Substitui asyncio.sleep registrando as esperas pedidas."""

    def __init__(self) -> None:
        self.waits: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


@pytest.fixture
def fake_github_client() -> FakeGitHubClient:
    return FakeGitHubClient()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
