"""Endpoint de webhook da GitHub App.

Endpoints:
- POST /webhooks: recebimento de entregas (X-GitHub-Event)

Mapeamento de resultado para HTTP:
- Assinatura inválida: 401 (a plataforma não deve reenviar)
- Corpo verificado que não é JSON: 500
- Falha na troca de credencial antes dos handlers: 500
- Qualquer outro resultado (inclusive evento desconhecido e falha
  parcial de handler): 200
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.github.webhook import build_inbound_event
from api.routes.github.webhook_runtime_tasks import schedule_processing_task
from app.bootstrap import get_event_dispatcher
from app.domain.events import (
    REASON_INVALID_PAYLOAD,
    DispatchOutcome,
    DispatchStatus,
)
from app.observability import (
    correlation_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from config.settings import get_github_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(outcome: DispatchOutcome) -> Response | dict[str, Any]:
    if outcome.status == DispatchStatus.REJECTED:
        return Response(
            content="Unauthorized",
            media_type="text/plain",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if outcome.status == DispatchStatus.FAILED:
        return Response(
            content=(
                "Invalid payload"
                if outcome.reason == REASON_INVALID_PAYLOAD
                else "Authentication failed"
            ),
            media_type="text/plain",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return {**outcome.as_dict(), "correlation_id": get_correlation_id()}


@router.post("/webhooks", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de entregas da plataforma.

    Em modo ``inline`` aguarda handlers; em ``async`` responde logo após
    verificação e troca de credencial, deixando os handlers em background.
    """
    headers = dict(request.headers)
    token = set_correlation_id(correlation_from_headers(headers))

    try:
        settings = get_github_settings()
        raw_body = await request.body()
        inbound = build_inbound_event(raw_body, headers)

        logger.info(
            "webhook_received",
            extra={
                "channel": "github",
                "event": inbound.event_type or None,
                "payload_size": len(raw_body),
                "has_signature": inbound.signature_header is not None,
            },
        )

        dispatcher = get_event_dispatcher()
        inline = (settings.webhook_processing_mode or "async").lower() == "inline"
        try:
            outcome = await dispatcher.dispatch(
                inbound,
                schedule=None if inline else schedule_processing_task,
            )
        except Exception:
            logger.exception("webhook_processing_failed", extra={"channel": "github"})
            return Response(
                content="Internal server error",
                media_type="text/plain",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return _to_response(outcome)

    finally:
        reset_correlation_id(token)
