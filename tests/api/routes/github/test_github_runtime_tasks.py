"""Testes para o controle de tasks de processamento em background."""

from __future__ import annotations

import asyncio

import pytest

from api.routes.github import webhook_runtime_tasks


@pytest.mark.asyncio
async def test_scheduled_task_runs_and_is_released() -> None:
    done = asyncio.Event()

    async def _work() -> str:
        done.set()
        return "ok"

    task = webhook_runtime_tasks.schedule_processing_task(_work())

    assert await task == "ok"
    assert done.is_set()
    await asyncio.sleep(0)
    assert webhook_runtime_tasks.active_task_count() == 0


@pytest.mark.asyncio
async def test_failing_task_does_not_propagate() -> None:
    async def _boom() -> None:
        raise RuntimeError("boom")

    task = webhook_runtime_tasks.schedule_processing_task(_boom())
    await asyncio.gather(task, return_exceptions=True)
    await asyncio.sleep(0)

    assert webhook_runtime_tasks.active_task_count() == 0


@pytest.mark.asyncio
async def test_drain_cancels_tasks_after_timeout() -> None:
    blocker = asyncio.Event()

    async def _slow() -> None:
        await blocker.wait()

    task = webhook_runtime_tasks.schedule_processing_task(_slow())

    await webhook_runtime_tasks.drain_processing_tasks(timeout_seconds=0.01)

    assert task.cancelled()


@pytest.mark.asyncio
async def test_drain_without_tasks_returns_immediately() -> None:
    await webhook_runtime_tasks.drain_processing_tasks(timeout_seconds=0.01)
