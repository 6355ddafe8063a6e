"""Handler de eventos ``push``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.coordinators.github.handlers.base import ANY_ACTION, ActionHandler
from app.domain.webhook_payloads import PushPayload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.coordinators.github.handlers.base import ActionCallback
    from app.domain.identity import TenantCredential

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_REFS = frozenset({"refs/heads/main", "refs/heads/master"})


def is_default_branch_push(ref: str) -> bool:
    return ref in DEFAULT_BRANCH_REFS


class PushHandler(ActionHandler):
    """Push não tem action; loga commits e destaca o branch principal."""

    name = "push"
    event_types = ("push",)
    payload_model = PushPayload

    def _build_actions(self) -> Mapping[str, ActionCallback]:
        return {ANY_ACTION: self.on_push}

    async def on_push(
        self,
        payload: PushPayload,
        credential: TenantCredential | None,
    ) -> None:
        logger.info(
            "push_received",
            extra={
                "ref": payload.ref,
                "commit_count": len(payload.commits),
                "default_branch": is_default_branch_push(payload.ref),
            },
        )
