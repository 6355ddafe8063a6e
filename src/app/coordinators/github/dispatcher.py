"""Dispatcher de entregas de webhook.

Ciclo por entrega: Received → Verified → Routed → {Completed | Failed}.

- Verificação falha: Rejected; nenhum handler é invocado.
- Corpo verificado que não é um objeto JSON: Failed.
- Evento com instalação: a credencial é trocada antes dos handlers;
  falha na troca é Failed e nenhum handler é invocado.
- Evento sem handler registrado ou action desconhecida: Completed no-op.
- Falha dentro de um handler fica isolada nele: a entrega termina
  Completed com nota de falha parcial, para a plataforma não reentregar.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.events import (
    REASON_AUTHENTICATION_FAILED,
    REASON_HANDLED,
    REASON_INVALID_PAYLOAD,
    REASON_INVALID_SIGNATURE,
    REASON_PARTIAL_FAILURE,
    REASON_SCHEDULED,
    REASON_UNHANDLED_EVENT,
    DispatchOutcome,
    DispatchStage,
    DispatchStatus,
    InboundEvent,
    WebhookEvent,
)
from app.infra.crypto import SignatureResult, ensure_signature
from app.observability import record_dispatch_outcome, record_latency
from config.logging import log_fallback
from utils.errors import CredentialError, VerificationFailure

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from app.coordinators.github.handlers.base import EventHandler
    from app.coordinators.github.registry import HandlerRegistry
    from app.domain.identity import TenantCredential
    from app.services.credential_exchange import CredentialExchanger

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoutedDelivery:
    """Entrega verificada, com credencial resolvida e handlers escolhidos."""

    event: WebhookEvent
    credential: TenantCredential | None
    handlers: tuple[EventHandler, ...]
    signature: SignatureResult


class EventDispatcher:
    """Verifica, resolve credencial e roteia entregas para os handlers.

    Args:
        registry: Tabela event_type → handlers (montada no bootstrap)
        exchanger: Trocador de credenciais por instalação
        webhook_secret: Secret HMAC; None/vazio desativa a verificação
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        exchanger: CredentialExchanger,
        webhook_secret: str | None,
    ) -> None:
        self._registry = registry
        self._exchanger = exchanger
        self._webhook_secret = webhook_secret or None

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    async def dispatch(
        self,
        inbound: InboundEvent,
        schedule: Callable[[Coroutine[Any, Any, DispatchOutcome]], object] | None = None,
    ) -> DispatchOutcome:
        """Executa a entrega até um estado terminal.

        Args:
            inbound: Entrega recebida
            schedule: Quando informado, a fase de handlers é entregue a ele
                (ex: task em background) e a entrega retorna Accepted logo
                após a troca de credencial. Sem ele, tudo roda inline.
        """
        started_at = time.perf_counter()
        routed = await self.route(inbound)
        if isinstance(routed, DispatchOutcome):
            outcome = routed
        elif schedule is None:
            outcome = await self.complete(routed)
        else:
            schedule(self._complete_observed(inbound, routed, started_at))
            outcome = DispatchOutcome(
                status=DispatchStatus.ACCEPTED,
                reason=REASON_SCHEDULED,
                event_type=routed.event.event_type,
                action=routed.event.action,
            )
        _observe(inbound, outcome, started_at)
        return outcome

    async def _complete_observed(
        self,
        inbound: InboundEvent,
        routed: RoutedDelivery,
        started_at: float,
    ) -> DispatchOutcome:
        outcome = await self.complete(routed)
        _observe(inbound, outcome, started_at)
        return outcome

    async def route(self, inbound: InboundEvent) -> RoutedDelivery | DispatchOutcome:
        """Received → Verified → Routed.

        Returns:
            RoutedDelivery pronto para ``complete`` ou DispatchOutcome
            terminal (Rejected, Failed ou Completed no-op).
        """
        _stage(inbound, DispatchStage.RECEIVED)

        try:
            signature = ensure_signature(
                inbound.raw_body,
                inbound.signature_header,
                self._webhook_secret,
            )
        except VerificationFailure as exc:
            _stage(inbound, DispatchStage.REJECTED, reason=str(exc))
            return DispatchOutcome(
                status=DispatchStatus.REJECTED,
                reason=REASON_INVALID_SIGNATURE,
                event_type=inbound.event_type,
            )
        if signature.skipped:
            log_fallback(logger, "signature_verifier", reason="webhook_secret_not_configured")
        _stage(
            inbound,
            DispatchStage.VERIFIED,
            signature_valid=signature.valid,
            signature_skipped=signature.skipped,
        )

        payload = _parse_payload(inbound.raw_body)
        if payload is None:
            logger.warning(
                "webhook_payload_invalid",
                extra={"event": inbound.event_type, "delivery_id": inbound.delivery_id},
            )
            _stage(inbound, DispatchStage.FAILED, reason=REASON_INVALID_PAYLOAD)
            return DispatchOutcome(
                status=DispatchStatus.FAILED,
                reason=REASON_INVALID_PAYLOAD,
                event_type=inbound.event_type,
            )

        event = WebhookEvent(
            event_type=inbound.event_type,
            payload=payload,
            delivery_id=inbound.delivery_id,
        )
        handlers = self._registry.handlers_for(event.event_type)
        if not handlers:
            logger.info(
                "webhook_event_not_handled",
                extra={"event": event.event_type, "delivery_id": event.delivery_id},
            )
            _stage(inbound, DispatchStage.COMPLETED, reason=REASON_UNHANDLED_EVENT)
            return DispatchOutcome(
                status=DispatchStatus.COMPLETED,
                reason=REASON_UNHANDLED_EVENT,
                event_type=event.event_type,
                action=event.action,
            )

        credential: TenantCredential | None = None
        tenant_id = event.tenant_id
        if tenant_id is not None:
            try:
                credential = await self._exchanger.exchange_for_tenant(tenant_id)
            except CredentialError as exc:
                logger.error(
                    "webhook_authentication_failed",
                    extra={
                        "event": event.event_type,
                        "tenant_id": tenant_id,
                        "error_type": type(exc).__name__,
                    },
                )
                _stage(inbound, DispatchStage.FAILED, reason=REASON_AUTHENTICATION_FAILED)
                return DispatchOutcome(
                    status=DispatchStatus.FAILED,
                    reason=REASON_AUTHENTICATION_FAILED,
                    event_type=event.event_type,
                    action=event.action,
                )

        _stage(inbound, DispatchStage.ROUTED, handlers=[h.name for h in handlers])
        return RoutedDelivery(
            event=event,
            credential=credential,
            handlers=handlers,
            signature=signature,
        )

    async def complete(self, routed: RoutedDelivery) -> DispatchOutcome:
        """Routed → Completed, isolando falhas por handler."""
        event = routed.event
        invoked = 0
        failures: list[str] = []

        for handler in routed.handlers:
            try:
                handled = await handler.handle(event, routed.credential)
            except Exception as exc:
                invoked += 1
                failures.append(handler.name)
                logger.warning(
                    "webhook_handler_failed",
                    extra={
                        "handler": handler.name,
                        "event": event.event_type,
                        "action": event.action,
                        "error_type": type(exc).__name__,
                        "cause_type": type(exc.__cause__).__name__ if exc.__cause__ else None,
                    },
                    exc_info=True,
                )
                continue
            if handled:
                invoked += 1

        reason = REASON_PARTIAL_FAILURE if failures else REASON_HANDLED
        if not failures and invoked == 0:
            reason = REASON_UNHANDLED_EVENT

        logger.info(
            "webhook_stage",
            extra={
                "stage": str(DispatchStage.COMPLETED),
                "event": event.event_type,
                "delivery_id": event.delivery_id,
                "reason": reason,
            },
        )
        return DispatchOutcome(
            status=DispatchStatus.COMPLETED,
            reason=reason,
            event_type=event.event_type,
            action=event.action,
            handlers_invoked=invoked,
            failures=tuple(failures),
        )


def _parse_payload(raw_body: bytes) -> dict[str, Any] | None:
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def _stage(inbound: InboundEvent, stage: DispatchStage, **fields: Any) -> None:
    logger.info(
        "webhook_stage",
        extra={
            "stage": str(stage),
            "event": inbound.event_type,
            "delivery_id": inbound.delivery_id,
            **fields,
        },
    )


def _observe(inbound: InboundEvent, outcome: DispatchOutcome, started_at: float) -> None:
    latency_ms = (time.perf_counter() - started_at) * 1000
    record_latency("event_dispatcher", "dispatch", latency_ms, inbound.delivery_id)
    record_dispatch_outcome(
        inbound.event_type,
        str(outcome.status),
        outcome.reason,
        inbound.delivery_id,
    )
