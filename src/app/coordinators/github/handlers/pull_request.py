"""Handler de eventos ``pull_request``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.coordinators.github.handlers.base import ActionHandler
from app.domain.webhook_payloads import PullRequest, PullRequestPayload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.coordinators.github.handlers.base import ActionCallback
    from app.domain.identity import TenantCredential

logger = logging.getLogger(__name__)

LARGE_PR_THRESHOLD = 500
MEDIUM_PR_THRESHOLD = 100


def size_label(pull_request: PullRequest) -> str:
    """Classifica o PR pelo maior entre additions e deletions."""
    if pull_request.additions > LARGE_PR_THRESHOLD or pull_request.deletions > LARGE_PR_THRESHOLD:
        return "large-pr"
    if pull_request.additions > MEDIUM_PR_THRESHOLD or pull_request.deletions > MEDIUM_PR_THRESHOLD:
        return "medium-pr"
    return "small-pr"


class PullRequestHandler(ActionHandler):
    """opened → label de tamanho; closed+merged / review_requested → log."""

    name = "pull_request"
    event_types = ("pull_request",)
    payload_model = PullRequestPayload

    def _build_actions(self) -> Mapping[str, ActionCallback]:
        return {
            "opened": self.on_opened,
            "closed": self.on_closed,
            "review_requested": self.on_review_requested,
        }

    async def on_opened(
        self,
        payload: PullRequestPayload,
        credential: TenantCredential | None,
    ) -> None:
        repository = payload.repository
        if repository is None:
            logger.warning("pull_request_opened_without_repository")
            return

        pull_request = payload.pull_request
        labels = [size_label(pull_request)]
        await self._call_platform(
            "opened",
            credential,
            lambda token: self._client.add_labels(
                token,
                repository.owner.login,
                repository.name,
                pull_request.number,
                labels,
            ),
        )
        logger.info(
            "pull_request_labeled",
            extra={"pull_request": pull_request.number, "labels": labels},
        )

    async def on_closed(
        self,
        payload: PullRequestPayload,
        credential: TenantCredential | None,
    ) -> None:
        if payload.pull_request.merged:
            logger.info(
                "pull_request_merged",
                extra={"pull_request": payload.pull_request.number},
            )

    async def on_review_requested(
        self,
        payload: PullRequestPayload,
        credential: TenantCredential | None,
    ) -> None:
        reviewer = payload.requested_reviewer
        logger.info(
            "pull_request_review_requested",
            extra={
                "pull_request": payload.pull_request.number,
                "reviewer": reviewer.login if reviewer else None,
            },
        )
