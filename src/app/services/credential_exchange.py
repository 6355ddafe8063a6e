"""Troca da asserção da App por token de acesso de instalação.

Cada chamada emite uma asserção nova e faz uma troca nova: o token
obtido pertence ao dispatch que o pediu e não é cacheado.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.domain.identity import AppIdentity, SignedAssertion, TenantCredential
from app.infra.crypto import mint
from app.infra.http import HttpError
from utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ExchangeError,
    RateLimitExceeded,
    SigningError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.github_client import GitHubApiProtocol
    from app.services.rate_limit import RateLimitedInvoker

logger = logging.getLogger(__name__)


class CredentialExchanger:
    """Obtém credenciais escopadas por tenant (instalação).

    Args:
        identity: Identidade imutável da App, criada no bootstrap
        client: Cliente da API da plataforma
        invoker: Invocador com backoff de rate limit
        clock: Fonte de tempo (epoch segundos) para a emissão
    """

    def __init__(
        self,
        identity: AppIdentity,
        client: GitHubApiProtocol,
        invoker: RateLimitedInvoker,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._identity = identity
        self._client = client
        self._invoker = invoker
        self._clock = clock

    def mint_assertion(self) -> SignedAssertion:
        """Emite asserção da App.

        Raises:
            AuthenticationError: Configuração ausente ou falha de assinatura
        """
        try:
            return mint(self._identity, self._clock())
        except (ConfigurationError, SigningError) as exc:
            logger.error(
                "assertion_mint_failed",
                extra={"error_type": type(exc).__name__},
            )
            raise AuthenticationError(f"Failed to authenticate app: {exc}") from exc

    async def exchange_for_tenant(self, tenant_id: int) -> TenantCredential:
        """Troca asserção por token da instalação ``tenant_id``.

        Raises:
            AuthenticationError: Não foi possível emitir a asserção
            ExchangeError: Plataforma recusou a troca (tenant inválido,
                instalação revogada, permissões, rate limit esgotado)
        """
        if isinstance(tenant_id, bool) or not isinstance(tenant_id, int) or tenant_id <= 0:
            raise ExchangeError("invalid_tenant_id")

        assertion = self.mint_assertion()

        try:
            data = await self._invoker.invoke(
                lambda: self._client.create_installation_access_token(
                    assertion.token,
                    tenant_id,
                )
            )
        except RateLimitExceeded as exc:
            raise ExchangeError("exchange_rate_limited", status_code=403) from exc
        except HttpError as exc:
            logger.warning(
                "installation_token_exchange_rejected",
                extra={"tenant_id": tenant_id, "status_code": exc.status_code},
            )
            raise ExchangeError(
                f"Failed to get installation token: {exc}",
                status_code=exc.status_code,
            ) from exc

        credential = _parse_credential(tenant_id, data)
        logger.info(
            "installation_token_exchanged",
            extra={"tenant_id": tenant_id},
        )
        return credential


def _parse_credential(tenant_id: int, data: Any) -> TenantCredential:
    if not isinstance(data, dict):
        raise ExchangeError("malformed_exchange_response")
    token = data.get("token")
    if not isinstance(token, str) or not token:
        raise ExchangeError("malformed_exchange_response")

    expires_at = None
    raw_expiry = data.get("expires_at")
    if isinstance(raw_expiry, str) and raw_expiry:
        try:
            expires_at = datetime.fromisoformat(raw_expiry.replace("Z", "+00:00"))
        except ValueError:
            logger.warning("installation_token_expiry_unparseable")

    return TenantCredential(tenant_id=tenant_id, access_token=token, expires_at=expires_at)
