"""Testes para a rota POST /webhooks."""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest
from starlette.requests import Request

from api.routes.github import webhook, webhook_runtime_tasks
from app.domain.events import DispatchOutcome, DispatchStatus, InboundEvent
from app.observability import get_correlation_id


def _build_request(body: bytes = b"{}", headers: dict[str, str] | None = None) -> Request:
    raw_headers = [
        (k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in (headers or {}).items()
    ]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/webhooks",
        "raw_path": b"/webhooks",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


class _StubDispatcher:
    def __init__(self, outcome: DispatchOutcome | Exception) -> None:
        self.outcome = outcome
        self.received: list[InboundEvent] = []
        self.schedules: list[Any] = []
        self.correlation_ids: list[str] = []

    async def dispatch(self, inbound: InboundEvent, schedule: Any = None) -> DispatchOutcome:
        self.received.append(inbound)
        self.schedules.append(schedule)
        self.correlation_ids.append(get_correlation_id())
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def _install(monkeypatch: pytest.MonkeyPatch, dispatcher: Any, mode: str = "inline") -> None:
    monkeypatch.setattr(webhook, "get_event_dispatcher", lambda: dispatcher)
    monkeypatch.setattr(
        webhook,
        "get_github_settings",
        lambda: SimpleNamespace(webhook_processing_mode=mode),
    )


HEADERS = {
    "X-GitHub-Event": "issues",
    "X-GitHub-Delivery": "delivery-abc",
    "X-Hub-Signature-256": "sha256=abc",
}


@pytest.mark.asyncio
async def test_completed_returns_200_with_outcome(monkeypatch: pytest.MonkeyPatch) -> None:
    dispatcher = _StubDispatcher(
        DispatchOutcome(DispatchStatus.COMPLETED, "handled", "issues", "opened", 1)
    )
    _install(monkeypatch, dispatcher)

    response = await webhook.receive_webhook(_build_request(b'{"a":1}', HEADERS))

    assert response["status"] == "completed"
    assert response["correlation_id"] == "delivery-abc"
    inbound = dispatcher.received[0]
    assert inbound.event_type == "issues"
    assert inbound.raw_body == b'{"a":1}'
    assert inbound.signature_header == "sha256=abc"
    assert dispatcher.schedules == [None]
    assert dispatcher.correlation_ids == ["delivery-abc"]


@pytest.mark.asyncio
async def test_correlation_id_reset_after_request(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _StubDispatcher(DispatchOutcome(DispatchStatus.COMPLETED, "handled")))

    await webhook.receive_webhook(_build_request(headers=HEADERS))

    assert get_correlation_id() != "delivery-abc"


@pytest.mark.asyncio
async def test_invalid_signature_returns_401(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(
        monkeypatch,
        _StubDispatcher(DispatchOutcome(DispatchStatus.REJECTED, "invalid_signature")),
    )

    response = await webhook.receive_webhook(_build_request(headers=HEADERS))

    assert response.status_code == 401
    assert response.body == b"Unauthorized"


@pytest.mark.asyncio
async def test_invalid_payload_returns_500(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(
        monkeypatch,
        _StubDispatcher(DispatchOutcome(DispatchStatus.FAILED, "invalid_payload")),
    )

    response = await webhook.receive_webhook(_build_request(b"{", HEADERS))

    assert response.status_code == 500
    assert response.body == b"Invalid payload"


@pytest.mark.asyncio
async def test_authentication_failure_returns_500(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(
        monkeypatch,
        _StubDispatcher(DispatchOutcome(DispatchStatus.FAILED, "authentication_failed")),
    )

    response = await webhook.receive_webhook(_build_request(headers=HEADERS))

    assert response.status_code == 500


@pytest.mark.asyncio
async def test_unexpected_error_returns_500(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _StubDispatcher(RuntimeError("boom")))

    response = await webhook.receive_webhook(_build_request(headers=HEADERS))

    assert response.status_code == 500


@pytest.mark.asyncio
async def test_async_mode_passes_scheduler(monkeypatch: pytest.MonkeyPatch) -> None:
    dispatcher = _StubDispatcher(DispatchOutcome(DispatchStatus.ACCEPTED, "scheduled", "issues"))
    _install(monkeypatch, dispatcher, mode="async")

    response = await webhook.receive_webhook(_build_request(headers=HEADERS))

    assert response["status"] == "accepted"
    assert dispatcher.schedules == [webhook_runtime_tasks.schedule_processing_task]


@pytest.mark.asyncio
async def test_end_to_end_async_delivery(
    monkeypatch: pytest.MonkeyPatch,
    fake_github_client: Any,
    recording_sleep: Any,
    private_key_pem: str,
) -> None:
    from app.bootstrap.dependencies import create_event_dispatcher
    from app.infra.crypto import compute_signature
    from app.services.rate_limit import RateLimitedInvoker
    from config.settings import GitHubAppSettings

    settings = GitHubAppSettings(
        app_id="99",
        private_key=private_key_pem,
        webhook_secret="s3cret",
        webhook_processing_mode="async",
    )
    dispatcher = create_event_dispatcher(
        settings,
        client=fake_github_client,
        invoker=RateLimitedInvoker(sleep=recording_sleep),
    )
    monkeypatch.setattr(webhook, "get_event_dispatcher", lambda: dispatcher)
    monkeypatch.setattr(webhook, "get_github_settings", lambda: settings)

    body = json.dumps(
        {
            "action": "opened",
            "installation": {"id": 8},
            "issue": {"number": 5},
            "repository": {"name": "widgets", "owner": {"login": "octo-org"}},
        }
    ).encode("utf-8")
    headers = {
        "X-GitHub-Event": "issues",
        "X-GitHub-Delivery": "d-e2e",
        "X-Hub-Signature-256": compute_signature(body, "s3cret"),
    }

    response = await webhook.receive_webhook(_build_request(body, headers))
    await webhook_runtime_tasks.drain_processing_tasks(timeout_seconds=5.0)

    assert response["status"] == "accepted"
    assert fake_github_client.count("create_issue_comment") == 1
