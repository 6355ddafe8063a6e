"""Base dos handlers de evento.

Cada handler declara os tipos de evento que atende e uma tabela
``action -> método``, montada uma vez na construção. Ações fora da
tabela são no-op (logadas), espelhando a política de eventos
desconhecidos do dispatcher.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from app.infra.http import HttpError
from utils.errors import HandlerFailure, RateLimitExceeded

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from pydantic import BaseModel

    from app.domain.events import WebhookEvent
    from app.domain.identity import TenantCredential
    from app.protocols.github_client import GitHubApiProtocol
    from app.services.rate_limit import RateLimitedInvoker

    ActionCallback = Callable[[Any, TenantCredential | None], Awaitable[None]]

logger = logging.getLogger(__name__)

# Chave usada por handlers sem sub-dispatch por action
ANY_ACTION = "*"


@runtime_checkable
class EventHandler(Protocol):
    """Capacidade mínima de um handler registrado no dispatcher."""

    name: str
    event_types: tuple[str, ...]

    async def handle(
        self,
        event: WebhookEvent,
        credential: TenantCredential | None,
    ) -> bool: ...


class ActionHandler(ABC):
    """Handler com sub-dispatch por ``action``.

    Subclasses definem ``name``, ``event_types``, ``payload_model`` e
    retornam a tabela de ações em ``_build_actions``.
    """

    name: ClassVar[str] = ""
    event_types: ClassVar[tuple[str, ...]] = ()
    payload_model: ClassVar[type[BaseModel]]

    def __init__(self, client: GitHubApiProtocol, invoker: RateLimitedInvoker) -> None:
        self._client = client
        self._invoker = invoker
        self._actions: Mapping[str, ActionCallback] = self._build_actions()

    @abstractmethod
    def _build_actions(self) -> Mapping[str, ActionCallback]:
        """Tabela action -> callback, montada uma vez por instância."""

    @property
    def actions(self) -> frozenset[str]:
        """Ações tratadas (enumeráveis para inspeção da tabela)."""
        return frozenset(self._actions)

    async def handle(
        self,
        event: WebhookEvent,
        credential: TenantCredential | None,
    ) -> bool:
        """Roteia pela action. Retorna False quando a action é no-op."""
        action = event.action or ""
        callback = self._actions.get(action) or self._actions.get(ANY_ACTION)
        if callback is None:
            logger.info(
                "event_action_not_handled",
                extra={"handler": self.name, "event": event.event_type, "action": action},
            )
            return False

        payload = self.payload_model.model_validate(event.payload)
        await callback(payload, credential)
        return True

    async def _call_platform(
        self,
        action: str,
        credential: TenantCredential | None,
        operation: Callable[[str], Awaitable[Any]],
    ) -> Any:
        """Executa chamada autenticada sempre via RateLimitedInvoker.

        Raises:
            HandlerFailure: Sem credencial ou falha na chamada remota
        """
        if credential is None:
            logger.warning(
                "handler_credential_unavailable",
                extra={"handler": self.name, "action": action},
            )
            raise HandlerFailure(self.name, action)

        token = credential.access_token
        try:
            return await self._invoker.invoke(lambda: operation(token))
        except (HttpError, RateLimitExceeded) as exc:
            raise HandlerFailure(self.name, action) from exc
