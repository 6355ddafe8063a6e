"""Protocolos e contratos do core da aplicação."""

from .github_client import GitHubApiProtocol

__all__ = ["GitHubApiProtocol"]
