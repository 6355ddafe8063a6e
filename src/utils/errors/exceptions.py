"""Taxonomia de erros do núcleo de credenciais e entrega de webhooks."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.rate_limit import RateLimitSignal


class GitHubAppError(Exception):
    """Base para todos os erros do serviço."""


class ConfigurationError(GitHubAppError):
    """Credenciais ausentes ou malformadas (App ID, chave privada)."""


class SigningError(GitHubAppError):
    """Falha criptográfica ao assinar a asserção da App."""


class CredentialError(GitHubAppError):
    """Base para falhas ao obter credencial de instalação."""


class AuthenticationError(CredentialError):
    """Não foi possível emitir a asserção que identifica a App."""


class ExchangeError(CredentialError):
    """Plataforma recusou a troca da asserção por token de instalação."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitExceeded(GitHubAppError):
    """Limite de requisições persistiu após esgotar as retentativas."""

    def __init__(
        self,
        message: str,
        signal: RateLimitSignal | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message)
        self.signal = signal
        self.attempts = attempts


class VerificationFailure(GitHubAppError):
    """Assinatura do webhook não confere."""


class HandlerFailure(GitHubAppError):
    """Efeito colateral best-effort de um handler falhou."""

    def __init__(self, handler: str, action: str | None = None) -> None:
        super().__init__(f"{handler} failed" + (f" on {action}" if action else ""))
        self.handler = handler
        self.action = action
