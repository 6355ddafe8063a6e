"""Gerenciamento de correlation_id para rastreamento de entregas.

Para webhooks o correlation_id é o X-GitHub-Delivery da entrega,
o que permite cruzar logs com o painel de entregas da App.
Usa ContextVar para ser thread/async-safe.

Uso:
    from app.observability import reset_correlation_id, set_correlation_id

    token = set_correlation_id(request.headers.get("x-github-delivery"))
    try:
        # processar request
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

# ContextVar para correlation_id (thread/async-safe)
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None/vazio, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def correlation_from_headers(headers: dict[str, str]) -> str | None:
    """Escolhe o ID da entrega: X-GitHub-Delivery, depois X-Correlation-Id."""
    lowered = {key.lower(): value for key, value in headers.items()}
    return lowered.get("x-github-delivery") or lowered.get("x-correlation-id") or None
