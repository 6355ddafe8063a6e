"""Leitura inicial da entrega de webhook (sem PII).

Só extrai headers e corpo bruto; verificação e parsing ficam no
EventDispatcher para que o ciclo da entrega seja único. Uma entrega
sem X-GitHub-Event segue como evento desconhecido: ainda passa pela
verificação de assinatura e termina como no-op.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.events import InboundEvent

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-hub-signature-256"
EVENT_HEADER = "x-github-event"
DELIVERY_HEADER = "x-github-delivery"


def build_inbound_event(raw_body: bytes, headers: Mapping[str, str]) -> InboundEvent:
    """Monta InboundEvent a partir do request.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos (qualquer case)

    Returns:
        InboundEvent pronto para o dispatcher
    """
    lowered = {key.lower(): value for key, value in headers.items()}
    return InboundEvent(
        event_type=(lowered.get(EVENT_HEADER) or "").strip(),
        raw_body=raw_body,
        signature_header=lowered.get(SIGNATURE_HEADER) or None,
        delivery_id=lowered.get(DELIVERY_HEADER, ""),
    )
