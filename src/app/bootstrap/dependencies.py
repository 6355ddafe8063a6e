"""Factories das dependências do núcleo.

Toda leitura de configuração acontece aqui; o núcleo recebe objetos
prontos (AppIdentity, cliente, invoker) por injeção.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.coordinators.github import EventDispatcher, HandlerRegistry
from app.coordinators.github.handlers import (
    InstallationHandler,
    IssuesHandler,
    PullRequestHandler,
    PushHandler,
)
from app.domain.identity import AppIdentity
from app.services.credential_exchange import CredentialExchanger
from app.services.rate_limit import RateLimitedInvoker

if TYPE_CHECKING:
    from app.protocols.github_client import GitHubApiProtocol
    from config.settings import GitHubAppSettings


def create_app_identity(settings: GitHubAppSettings) -> AppIdentity:
    """AppIdentity imutável a partir das settings (valores vazios viram None)."""
    return AppIdentity(
        app_id=settings.app_id or None,
        private_key=settings.private_key or None,
    )


def create_rate_limited_invoker(settings: GitHubAppSettings) -> RateLimitedInvoker:
    return RateLimitedInvoker(
        max_retries=settings.rate_limit_max_retries,
        max_wait_seconds=settings.rate_limit_max_wait_seconds,
    )


def create_github_client(settings: GitHubAppSettings) -> GitHubApiProtocol:
    from api.connectors.github import create_github_http_client

    return create_github_http_client(settings)


def create_handler_registry(
    client: GitHubApiProtocol,
    invoker: RateLimitedInvoker,
) -> HandlerRegistry:
    """Tabela de handlers, montada uma única vez."""
    return HandlerRegistry(
        [
            IssuesHandler(client, invoker),
            PullRequestHandler(client, invoker),
            PushHandler(client, invoker),
            InstallationHandler(client, invoker),
        ]
    )


def create_event_dispatcher(
    settings: GitHubAppSettings,
    client: GitHubApiProtocol | None = None,
    invoker: RateLimitedInvoker | None = None,
) -> EventDispatcher:
    """Monta o dispatcher com exchanger e registry."""
    github_client = client or create_github_client(settings)
    rate_limited = invoker or create_rate_limited_invoker(settings)
    exchanger = CredentialExchanger(
        identity=create_app_identity(settings),
        client=github_client,
        invoker=rate_limited,
    )
    return EventDispatcher(
        registry=create_handler_registry(github_client, rate_limited),
        exchanger=exchanger,
        webhook_secret=settings.webhook_secret or None,
    )
