"""Observabilidade — logs estruturados e métricas.

Re-exporta funções de correlation_id e métricas para uso em toda a aplicação.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_dispatch_outcome
"""

from app.observability.correlation import (
    correlation_from_headers,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_dispatch_outcome,
    record_latency,
)

__all__ = [
    "correlation_from_headers",
    "generate_correlation_id",
    "get_correlation_id",
    "record_dispatch_outcome",
    "record_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
