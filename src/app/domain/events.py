"""Entrega de webhook e resultado de dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class DispatchStatus(StrEnum):
    """Estados terminais de uma entrega."""

    ACCEPTED = "accepted"
    COMPLETED = "completed"
    REJECTED = "rejected"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class DispatchStage(StrEnum):
    """Ciclo de vida de uma entrega: Received → Verified → Routed → terminal."""

    RECEIVED = "received"
    VERIFIED = "verified"
    ROUTED = "routed"
    COMPLETED = "completed"
    REJECTED = "rejected"
    FAILED = "failed"


# Razões estáveis (usadas pela borda HTTP para escolher o status code)
REASON_INVALID_SIGNATURE = "invalid_signature"
REASON_INVALID_PAYLOAD = "invalid_payload"
REASON_AUTHENTICATION_FAILED = "authentication_failed"
REASON_UNHANDLED_EVENT = "unhandled_event"
REASON_HANDLED = "handled"
REASON_PARTIAL_FAILURE = "partial_failure"
REASON_SCHEDULED = "scheduled"


@dataclass(frozen=True, slots=True)
class InboundEvent:
    """Uma entrega de webhook, consumida uma única vez pelo dispatcher.

    Attributes:
        event_type: Valor do header X-GitHub-Event
        raw_body: Corpo bruto (base da verificação HMAC)
        signature_header: Valor de X-Hub-Signature-256 (pode faltar)
        delivery_id: Valor de X-GitHub-Delivery (rastreamento)
    """

    event_type: str
    raw_body: bytes
    signature_header: str | None = None
    delivery_id: str = ""

    def __repr__(self) -> str:
        return (
            f"InboundEvent(event_type={self.event_type!r}, "
            f"delivery_id={self.delivery_id!r}, size={len(self.raw_body)})"
        )


@dataclass(frozen=True, slots=True)
class WebhookEvent:
    """Entrega já verificada e parseada, pronta para os handlers."""

    event_type: str
    payload: dict[str, Any]
    delivery_id: str = ""

    @property
    def action(self) -> str | None:
        action = self.payload.get("action")
        return action if isinstance(action, str) else None

    @property
    def tenant_id(self) -> int | None:
        installation = self.payload.get("installation")
        if not isinstance(installation, dict):
            return None
        value = installation.get("id")
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Resultado de uma entrega, mapeado para status HTTP na borda."""

    status: DispatchStatus
    reason: str
    event_type: str = ""
    action: str | None = None
    handlers_invoked: int = 0
    failures: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_terminal_error(self) -> bool:
        return self.status in (DispatchStatus.REJECTED, DispatchStatus.FAILED)

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": str(self.status),
            "reason": self.reason,
            "event": self.event_type,
            "action": self.action,
            "handlers_invoked": self.handlers_invoked,
            "failures": list(self.failures),
        }
