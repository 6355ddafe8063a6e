"""Cliente HTTP base (httpx) compartilhado pelos conectores."""

from .client import HttpClient, HttpClientConfig, HttpError

__all__ = ["HttpClient", "HttpClientConfig", "HttpError"]
