"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e expõe singletons do núcleo (identidade, cliente, invoker, dispatcher).

Uso:
    from app.bootstrap import initialize_app, get_event_dispatcher

    initialize_app()
    dispatcher = get_event_dispatcher()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_github_settings

if TYPE_CHECKING:
    from app.coordinators.github import EventDispatcher
    from app.domain.identity import AppIdentity
    from app.protocols.github_client import GitHubApiProtocol
    from app.services.credential_exchange import CredentialExchanger
    from app.services.rate_limit import RateLimitedInvoker

# Nome do serviço para logs e métricas
SERVICE_NAME = "github_app_gateway"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development`/`test` mantém alerta sem bloquear execução local.
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in get_base_settings().validate())

    github = get_github_settings()
    errors.extend(f"github: {error}" for error in github.validate())

    if not github.verification_enabled:
        # Verificação permissiva: toda entrega passa sem assinatura
        logger.warning(
            "webhook_secret_not_configured",
            extra={"component": "bootstrap", "environment": environment},
        )
        if strict_mode:
            errors.append("github: WEBHOOK_SECRET não configurado")

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Singletons (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_app_identity() -> AppIdentity:
    """AppIdentity do processo, lida uma única vez das settings."""
    from app.bootstrap.dependencies import create_app_identity

    return create_app_identity(get_github_settings())


@lru_cache(maxsize=1)
def get_github_client() -> GitHubApiProtocol:
    from app.bootstrap.dependencies import create_github_client

    return create_github_client(get_github_settings())


@lru_cache(maxsize=1)
def get_rate_limited_invoker() -> RateLimitedInvoker:
    from app.bootstrap.dependencies import create_rate_limited_invoker

    return create_rate_limited_invoker(get_github_settings())


@lru_cache(maxsize=1)
def get_credential_exchanger() -> CredentialExchanger:
    from app.services.credential_exchange import CredentialExchanger

    return CredentialExchanger(
        identity=get_app_identity(),
        client=get_github_client(),
        invoker=get_rate_limited_invoker(),
    )


@lru_cache(maxsize=1)
def get_event_dispatcher() -> EventDispatcher:
    """Dispatcher com a tabela de handlers montada uma única vez."""
    from app.bootstrap.dependencies import create_event_dispatcher

    return create_event_dispatcher(
        get_github_settings(),
        client=get_github_client(),
        invoker=get_rate_limited_invoker(),
    )
