"""Settings da GitHub App.

Credenciais da App, secret de webhook e parâmetros da REST API.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

# Constantes da REST API
GITHUB_API_BASE_URL: str = "https://api.github.com"
GITHUB_API_VERSION: str = "2022-11-28"
DEFAULT_USER_AGENT: str = "github-app-gateway/1.0.0"


@dataclass(frozen=True)
class GitHubAppSettings:
    """Configurações da GitHub App.

    Attributes:
        app_id: ID numérico da App (string, validado em validate())
        private_key: Chave privada PEM
        webhook_secret: Secret HMAC dos webhooks (vazio = sem verificação)
        api_base_url: URL base da REST API
        api_version: Valor de X-GitHub-Api-Version
        user_agent: User-Agent enviado à API
        request_timeout_seconds: Timeout para requisições HTTP
        rate_limit_max_retries: Retentativas em rate limit
        rate_limit_max_wait_seconds: Teto da espera por reset (None = sem teto)
        webhook_processing_mode: Modo de execução dos handlers (async|inline)
    """

    # Credenciais
    app_id: str = ""
    private_key: str = ""
    webhook_secret: str = ""

    # API
    api_base_url: str = GITHUB_API_BASE_URL
    api_version: str = GITHUB_API_VERSION
    user_agent: str = DEFAULT_USER_AGENT

    # Timeouts e rate limit
    request_timeout_seconds: float = 30.0
    rate_limit_max_retries: int = 3
    rate_limit_max_wait_seconds: float | None = None

    # Webhook processing
    webhook_processing_mode: str = "async"

    @property
    def has_identity(self) -> bool:
        """True se App ID e chave estão presentes."""
        return bool(self.app_id and self.private_key)

    @property
    def verification_enabled(self) -> bool:
        return bool(self.webhook_secret)

    def validate(self) -> list[str]:
        """Valida configurações mínimas da App.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.app_id:
            errors.append("GITHUB_APP_ID não configurado")
        elif not self.app_id.strip().isdigit():
            errors.append("GITHUB_APP_ID deve ser numérico")

        if not self.private_key:
            errors.append("GITHUB_PRIVATE_KEY não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("GITHUB_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.rate_limit_max_retries < 0:
            errors.append("GITHUB_RATE_LIMIT_MAX_RETRIES deve ser >= 0")

        if (
            self.rate_limit_max_wait_seconds is not None
            and self.rate_limit_max_wait_seconds < 0
        ):
            errors.append("GITHUB_RATE_LIMIT_MAX_WAIT_SECONDS deve ser >= 0")

        if self.webhook_processing_mode not in ("async", "inline"):
            errors.append(
                "WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'"
            )

        return errors


def normalize_pem(value: str) -> str:
    """Normaliza PEM vindo de variável de ambiente.

    Aceita ``\\n`` literais (comum em .env e secrets de CI) e remove
    espaços/aspas nas bordas.
    """
    normalized = value.strip().strip('"').strip("'")
    if "\\n" in normalized and "\n" not in normalized:
        normalized = normalized.replace("\\n", "\n")
    return normalized


def _read_private_key() -> str:
    """Lê a chave de GITHUB_PRIVATE_KEY ou do arquivo em GITHUB_PRIVATE_KEY_PATH."""
    inline = os.getenv("GITHUB_PRIVATE_KEY", "")
    if inline.strip():
        return normalize_pem(inline)

    key_path = os.getenv("GITHUB_PRIVATE_KEY_PATH", "")
    if not key_path:
        return ""
    try:
        return Path(key_path).read_text(encoding="utf-8").strip()
    except OSError as exc:
        logger.warning(
            "github_private_key_unreadable",
            extra={"error_type": type(exc).__name__},
        )
        return ""


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


def _load_from_env() -> GitHubAppSettings:
    """Carrega GitHubAppSettings a partir de variáveis de ambiente."""
    environment = os.getenv("ENVIRONMENT", "").lower()
    default_processing_mode = (
        "inline" if environment in ("development", "dev", "test") else "async"
    )
    return GitHubAppSettings(
        app_id=os.getenv("GITHUB_APP_ID", "").strip(),
        private_key=_read_private_key(),
        webhook_secret=os.getenv("WEBHOOK_SECRET", ""),
        api_base_url=os.getenv("GITHUB_API_BASE_URL", GITHUB_API_BASE_URL),
        api_version=os.getenv("GITHUB_API_VERSION", GITHUB_API_VERSION),
        user_agent=os.getenv("GITHUB_USER_AGENT", DEFAULT_USER_AGENT),
        request_timeout_seconds=float(
            os.getenv("GITHUB_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        rate_limit_max_retries=int(os.getenv("GITHUB_RATE_LIMIT_MAX_RETRIES", "3")),
        rate_limit_max_wait_seconds=_optional_float(
            "GITHUB_RATE_LIMIT_MAX_WAIT_SECONDS"
        ),
        webhook_processing_mode=os.getenv(
            "WEBHOOK_PROCESSING_MODE", default_processing_mode
        ).lower(),
    )


@lru_cache(maxsize=1)
def get_github_settings() -> GitHubAppSettings:
    """Retorna instância cacheada de GitHubAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
