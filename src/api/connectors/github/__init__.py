"""Conector GitHub: cliente REST e recebimento de webhooks."""

from .http_client import GitHubHttpClient, create_github_http_client

__all__ = ["GitHubHttpClient", "create_github_http_client"]
