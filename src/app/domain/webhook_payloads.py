"""Modelos de payload de webhook da plataforma.

Só os campos consumidos pelos handlers são modelados; o restante
do payload é ignorado (extra="ignore").
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Account(_Payload):
    """Conta (usuário ou organização)."""

    login: str = ""
    type: str | None = None


class Repository(_Payload):
    id: int | None = None
    name: str = ""
    full_name: str = ""
    owner: Account = Field(default_factory=Account)


class Installation(_Payload):
    id: int
    account: Account | None = None


class Label(_Payload):
    name: str = ""


class Issue(_Payload):
    number: int
    title: str = ""
    state: str | None = None


class PullRequest(_Payload):
    number: int
    title: str = ""
    additions: int = 0
    deletions: int = 0
    merged: bool = False


class Commit(_Payload):
    id: str = ""
    message: str = ""


class WebhookEnvelope(_Payload):
    """Campos comuns a todos os eventos."""

    action: str | None = None
    installation: Installation | None = None
    repository: Repository | None = None
    sender: Account | None = None

    @property
    def installation_id(self) -> int | None:
        return self.installation.id if self.installation else None


class IssuesPayload(WebhookEnvelope):
    issue: Issue
    label: Label | None = None


class PullRequestPayload(WebhookEnvelope):
    pull_request: PullRequest
    requested_reviewer: Account | None = None


class PushPayload(WebhookEnvelope):
    ref: str = ""
    commits: list[Commit] = Field(default_factory=list)


class InstallationPayload(WebhookEnvelope):
    repositories: list[Repository] | None = None
    repositories_added: list[Repository] | None = None
    repositories_removed: list[Repository] | None = None
