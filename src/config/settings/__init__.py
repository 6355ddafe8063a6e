"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.github import (
    GITHUB_API_BASE_URL,
    GITHUB_API_VERSION,
    GitHubAppSettings,
    get_github_settings,
)

__all__ = [
    "GITHUB_API_BASE_URL",
    "GITHUB_API_VERSION",
    "BaseSettings",
    "Environment",
    "GitHubAppSettings",
    "get_base_settings",
    "get_github_settings",
]
