"""Handler do ciclo de vida de instalações."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.coordinators.github.handlers.base import ActionHandler
from app.domain.webhook_payloads import InstallationPayload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.coordinators.github.handlers.base import ActionCallback
    from app.domain.identity import TenantCredential

logger = logging.getLogger(__name__)


class InstallationHandler(ActionHandler):
    """created/deleted (e added/removed em installation_repositories)."""

    name = "installation"
    event_types = ("installation", "installation_repositories")
    payload_model = InstallationPayload

    def _build_actions(self) -> Mapping[str, ActionCallback]:
        return {
            "created": self.on_created,
            "deleted": self.on_deleted,
            "added": self.on_repositories_changed,
            "removed": self.on_repositories_changed,
        }

    async def on_created(
        self,
        payload: InstallationPayload,
        credential: TenantCredential | None,
    ) -> None:
        repositories = payload.repositories or []
        logger.info(
            "app_installed",
            extra={
                "installation_id": payload.installation_id,
                "account": _account_login(payload),
                "repositories": [repo.name for repo in repositories],
            },
        )

    async def on_deleted(
        self,
        payload: InstallationPayload,
        credential: TenantCredential | None,
    ) -> None:
        logger.info(
            "app_uninstalled",
            extra={
                "installation_id": payload.installation_id,
                "account": _account_login(payload),
            },
        )

    async def on_repositories_changed(
        self,
        payload: InstallationPayload,
        credential: TenantCredential | None,
    ) -> None:
        logger.info(
            "installation_repositories_changed",
            extra={
                "installation_id": payload.installation_id,
                "action": payload.action,
                "added": [repo.name for repo in payload.repositories_added or []],
                "removed": [repo.name for repo in payload.repositories_removed or []],
            },
        )


def _account_login(payload: InstallationPayload) -> str | None:
    installation = payload.installation
    if installation is None or installation.account is None:
        return None
    return installation.account.login
