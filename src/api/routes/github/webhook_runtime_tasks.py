"""Controle de tasks assíncronas para a fase de handlers do webhook.

Backoff de rate limit dentro de um handler nunca atrasa o ACK da entrega:
a fase de handlers roda aqui, com limite de concorrência.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from app.observability import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)

MAX_CONCURRENT_TASKS = 100

_task_semaphore: asyncio.Semaphore | None = None
_active_tasks: set[asyncio.Task[Any]] = set()


def _semaphore() -> asyncio.Semaphore:
    global _task_semaphore
    if _task_semaphore is None:
        _task_semaphore = asyncio.Semaphore(MAX_CONCURRENT_TASKS)
    return _task_semaphore


def schedule_processing_task(coroutine: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
    """Agenda task assíncrona com limite de concorrência.

    O ContextVar de correlation_id é copiado para a task pelo asyncio,
    então os logs dos handlers mantêm o ID da entrega.
    """
    task = asyncio.create_task(_run_with_limit(coroutine))
    _active_tasks.add(task)
    task.add_done_callback(_on_processing_task_done)
    logger.info(
        "webhook_processing_scheduled",
        extra={
            "channel": "github",
            "correlation_id": get_correlation_id(),
            "mode": "async",
            "active_tasks": len(_active_tasks),
        },
    )
    return task


async def _run_with_limit(coroutine: Coroutine[Any, Any, Any]) -> Any:
    async with _semaphore():
        return await coroutine


def _on_processing_task_done(task: asyncio.Task[Any]) -> None:
    _active_tasks.discard(task)
    with contextlib.suppress(asyncio.CancelledError):
        exc = task.exception()
        if exc is not None:
            logger.error(
                "webhook_processing_task_failed",
                extra={
                    "channel": "github",
                    "error_type": type(exc).__name__,
                    "active_tasks": len(_active_tasks),
                },
            )


def active_task_count() -> int:
    return len(_active_tasks)


async def drain_processing_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda tasks pendentes durante shutdown do processo."""
    if not _active_tasks:
        return

    pending_now = list(_active_tasks)
    logger.info(
        "webhook_processing_shutdown_wait",
        extra={
            "channel": "github",
            "pending_tasks": len(pending_now),
            "timeout_seconds": timeout_seconds,
        },
    )
    _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
    if not pending:
        return

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    logger.warning(
        "webhook_processing_shutdown_cancelled",
        extra={"channel": "github", "cancelled_tasks": len(pending)},
    )
