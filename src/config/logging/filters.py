"""Filters de logging para injeção de contexto.

Campos injetados:
- correlation_id: ID da entrega/requisição
- service: Nome do serviço

Campos de credencial (tokens, chave da App, secret) são mascarados.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record (nunca descarta).

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


# Atributos de record que nunca podem sair em claro
REDACTED_FIELDS = frozenset(
    {
        "access_token",
        "authorization",
        "private_key",
        "token",
        "webhook_secret",
    }
)
REDACTED_VALUE = "<redacted>"


class CredentialRedactionFilter(logging.Filter):
    """Mascara credenciais passadas por engano via ``extra``.

    Tokens de instalação, asserções e a chave da App nunca vão para o
    log; o nome do campo continua visível para diagnóstico.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for field in REDACTED_FIELDS:
            if getattr(record, field, None):
                setattr(record, field, REDACTED_VALUE)
        return True
