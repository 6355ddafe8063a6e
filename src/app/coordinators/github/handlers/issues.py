"""Handler de eventos ``issues``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.coordinators.github.handlers.base import ActionHandler
from app.domain.webhook_payloads import IssuesPayload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.coordinators.github.handlers.base import ActionCallback
    from app.domain.identity import TenantCredential

logger = logging.getLogger(__name__)


def welcome_comment(issue_number: int) -> str:
    return (
        "🚀 Thanks for opening this issue! We'll take a look as soon as possible.\n\n"
        f"Issue #{issue_number} has been automatically labeled and is now being tracked."
    )


class IssuesHandler(ActionHandler):
    """opened → comentário de boas-vindas; closed/labeled → log."""

    name = "issues"
    event_types = ("issues",)
    payload_model = IssuesPayload

    def _build_actions(self) -> Mapping[str, ActionCallback]:
        return {
            "opened": self.on_opened,
            "closed": self.on_closed,
            "labeled": self.on_labeled,
            "unlabeled": self.on_labeled,
        }

    async def on_opened(
        self,
        payload: IssuesPayload,
        credential: TenantCredential | None,
    ) -> None:
        repository = payload.repository
        if repository is None:
            logger.warning("issue_opened_without_repository")
            return

        number = payload.issue.number
        await self._call_platform(
            "opened",
            credential,
            lambda token: self._client.create_issue_comment(
                token,
                repository.owner.login,
                repository.name,
                number,
                welcome_comment(number),
            ),
        )
        logger.info("issue_welcome_comment_added", extra={"issue_number": number})

    async def on_closed(
        self,
        payload: IssuesPayload,
        credential: TenantCredential | None,
    ) -> None:
        logger.info("issue_closed", extra={"issue_number": payload.issue.number})

    async def on_labeled(
        self,
        payload: IssuesPayload,
        credential: TenantCredential | None,
    ) -> None:
        logger.info(
            "issue_label_changed",
            extra={
                "issue_number": payload.issue.number,
                "action": payload.action,
                "label": payload.label.name if payload.label else None,
            },
        )
