"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, CloudWatch Insights, Loki etc.). Nenhuma
decisão de dispatch depende destas chamadas.

Uso:
    from app.observability.metrics import record_latency, record_dispatch_outcome

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("event_dispatcher", "dispatch", latency_ms, delivery_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "event_dispatcher")
        operation: Nome da operação (ex: "dispatch")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_dispatch_outcome(
    event_type: str,
    status: str,
    reason: str,
    correlation_id: str | None = None,
) -> None:
    """Registra contador de resultado por entrega de webhook.

    Args:
        event_type: Tipo do evento (X-GitHub-Event)
        status: Status terminal (completed, rejected, failed, accepted)
        reason: Razão estável do resultado
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_dispatch_outcome",
        extra={
            "metric_type": "dispatch_outcome",
            "component": "event_dispatcher",
            "event": event_type,
            "status": status,
            "reason": reason,
            "correlation_id": correlation_id,
        },
    )
