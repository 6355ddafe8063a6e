"""Sinal de limite de requisições extraído de respostas da plataforma."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

RATE_LIMIT_STATUS_CODE = 403
REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"


@dataclass(frozen=True, slots=True)
class RateLimitSignal:
    """Metadados de rate limit de uma chamada que falhou.

    Attributes:
        remaining: Chamadas restantes na janela atual
        reset_at: Epoch (segundos) em que a janela reinicia
    """

    remaining: int
    reset_at: float

    def wait_seconds(self, now: float, buffer_seconds: float = 1.0) -> float:
        """Duração até o reset somada ao buffer; nunca negativa."""
        return max(self.reset_at - now + buffer_seconds, 0.0)


def _lookup_header(headers: Any, name: str) -> str | None:
    if not isinstance(headers, Mapping):
        return None
    value = headers.get(name)
    if value is None:
        # dict simples não normaliza o case (httpx.Headers normaliza)
        value = next(
            (item for key, item in headers.items() if str(key).lower() == name),
            None,
        )
    return None if value is None else str(value)


def _status_and_headers(error: BaseException) -> tuple[int | None, Any]:
    status = getattr(error, "status_code", None)
    if status is None:
        status = getattr(error, "status", None)
    headers = getattr(error, "headers", None)

    response = getattr(error, "response", None)
    if response is not None:
        if status is None:
            status = getattr(response, "status_code", None)
        if headers is None:
            headers = getattr(response, "headers", None)
    return status, headers


def extract_rate_limit_signal(error: BaseException) -> RateLimitSignal | None:
    """Extrai RateLimitSignal de um erro, se houver.

    Só reconhece o padrão de rate limit primário: status 403 com
    ``x-ratelimit-remaining: 0`` e ``x-ratelimit-reset`` presente.
    Qualquer outro erro retorna None.

    Args:
        error: Exceção levantada pela operação remota

    Returns:
        RateLimitSignal ou None se o erro não for de rate limit
    """
    status, headers = _status_and_headers(error)
    if status != RATE_LIMIT_STATUS_CODE:
        return None

    remaining_raw = _lookup_header(headers, REMAINING_HEADER)
    reset_raw = _lookup_header(headers, RESET_HEADER)
    if remaining_raw is None or reset_raw is None:
        return None

    try:
        remaining = int(remaining_raw)
        reset_at = float(reset_raw)
    except (TypeError, ValueError):
        return None

    if remaining != 0:
        return None

    return RateLimitSignal(remaining=remaining, reset_at=reset_at)
