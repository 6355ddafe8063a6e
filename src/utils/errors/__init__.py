"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    CredentialError,
    ExchangeError,
    GitHubAppError,
    HandlerFailure,
    RateLimitExceeded,
    SigningError,
    VerificationFailure,
)

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "CredentialError",
    "ExchangeError",
    "GitHubAppError",
    "HandlerFailure",
    "RateLimitExceeded",
    "SigningError",
    "VerificationFailure",
]
