"""Testes para CredentialExchanger."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from app.domain.identity import AppIdentity
from app.infra.http import HttpError
from app.services.credential_exchange import CredentialExchanger
from app.services.rate_limit import RateLimitedInvoker
from utils.errors import AuthenticationError, CredentialError, ExchangeError

NOW = 1_700_000_000.0


def _exchanger(
    client: Any,
    recording_sleep: Any,
    identity: AppIdentity,
) -> CredentialExchanger:
    invoker = RateLimitedInvoker(clock=lambda: NOW, sleep=recording_sleep)
    return CredentialExchanger(identity, client, invoker, clock=lambda: NOW)


@pytest.fixture
def identity(private_key_pem: str) -> AppIdentity:
    return AppIdentity(app_id=12345, private_key=private_key_pem)


@pytest.mark.asyncio
async def test_exchange_returns_tenant_credential(
    fake_github_client: Any,
    recording_sleep: Any,
    identity: AppIdentity,
) -> None:
    exchanger = _exchanger(fake_github_client, recording_sleep, identity)

    credential = await exchanger.exchange_for_tenant(777)

    assert credential.tenant_id == 777
    assert credential.access_token == "ghs_installation_token"
    assert credential.expires_at == datetime(2026, 10, 19, 12, 0, tzinfo=UTC)
    method, args = fake_github_client.calls[0]
    assert method == "create_installation_access_token"
    assert args[1] == 777
    assert args[0].count(".") == 2


@pytest.mark.asyncio
async def test_each_exchange_mints_fresh_assertion(
    fake_github_client: Any,
    recording_sleep: Any,
    identity: AppIdentity,
) -> None:
    exchanger = _exchanger(fake_github_client, recording_sleep, identity)

    await exchanger.exchange_for_tenant(1)
    await exchanger.exchange_for_tenant(1)

    assert fake_github_client.count("create_installation_access_token") == 2


@pytest.mark.asyncio
async def test_exchange_retries_rate_limit(
    fake_github_client: Any,
    recording_sleep: Any,
    identity: AppIdentity,
) -> None:
    fake_github_client.errors["create_installation_access_token"] = [
        HttpError(
            "rate limited",
            status_code=403,
            headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": str(int(NOW) + 2)},
        )
    ]
    exchanger = _exchanger(fake_github_client, recording_sleep, identity)

    credential = await exchanger.exchange_for_tenant(5)

    assert credential.access_token == "ghs_installation_token"
    assert fake_github_client.count("create_installation_access_token") == 2
    assert recording_sleep.waits == [3.0]


@pytest.mark.asyncio
async def test_rejected_exchange_raises_exchange_error(
    fake_github_client: Any,
    recording_sleep: Any,
    identity: AppIdentity,
) -> None:
    fake_github_client.errors["create_installation_access_token"] = [
        HttpError("Not Found", status_code=404)
    ]
    exchanger = _exchanger(fake_github_client, recording_sleep, identity)

    with pytest.raises(ExchangeError) as exc_info:
        await exchanger.exchange_for_tenant(404)

    assert exc_info.value.status_code == 404
    assert isinstance(exc_info.value, CredentialError)


@pytest.mark.asyncio
async def test_exhausted_rate_limit_becomes_exchange_error(
    fake_github_client: Any,
    recording_sleep: Any,
    identity: AppIdentity,
) -> None:
    fake_github_client.errors["create_installation_access_token"] = [
        HttpError(
            "rate limited",
            status_code=403,
            headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": str(int(NOW))},
        )
        for _ in range(4)
    ]
    exchanger = _exchanger(fake_github_client, recording_sleep, identity)

    with pytest.raises(ExchangeError, match="exchange_rate_limited"):
        await exchanger.exchange_for_tenant(5)

    assert fake_github_client.count("create_installation_access_token") == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("tenant_id", [0, -3, True, "12"])
async def test_invalid_tenant_id(
    fake_github_client: Any,
    recording_sleep: Any,
    identity: AppIdentity,
    tenant_id: Any,
) -> None:
    exchanger = _exchanger(fake_github_client, recording_sleep, identity)

    with pytest.raises(ExchangeError, match="invalid_tenant_id"):
        await exchanger.exchange_for_tenant(tenant_id)

    assert fake_github_client.calls == []


@pytest.mark.asyncio
async def test_missing_identity_is_authentication_error(
    fake_github_client: Any,
    recording_sleep: Any,
) -> None:
    exchanger = _exchanger(
        fake_github_client,
        recording_sleep,
        AppIdentity(app_id=None, private_key=None),
    )

    with pytest.raises(AuthenticationError):
        await exchanger.exchange_for_tenant(1)

    assert fake_github_client.calls == []


@pytest.mark.asyncio
async def test_malformed_exchange_response(
    fake_github_client: Any,
    recording_sleep: Any,
    identity: AppIdentity,
) -> None:
    fake_github_client.token_response = {"expires_at": "2026-01-01T00:00:00Z"}
    exchanger = _exchanger(fake_github_client, recording_sleep, identity)

    with pytest.raises(ExchangeError, match="malformed_exchange_response"):
        await exchanger.exchange_for_tenant(1)
