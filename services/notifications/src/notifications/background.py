"""
Detached background tasks for the notification service.

Channel deliveries are fire-and-forget: the dispatcher schedules them and
returns. The event loop only keeps weak references to tasks, so this
module holds a strong reference until each task finishes and logs any
exception a task failed to handle itself.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

logger = structlog.get_logger()

_tasks: set[asyncio.Task[Any]] = set()


def _on_done(task: asyncio.Task[Any]) -> None:
    _tasks.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("background_task_failed", task=task.get_name(), error=str(exc))


def spawn_detached(coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
    """Schedule *coro* on the running loop without awaiting it.

    Args:
        coro: Coroutine that owns its own error handling.
        name: Task name used in logs.

    Returns:
        The scheduled task (callers normally ignore it).
    """
    task = asyncio.create_task(coro, name=name)
    _tasks.add(task)
    task.add_done_callback(_on_done)
    return task


def pending() -> int:
    """Return the number of detached tasks still running."""
    return len(_tasks)


async def drain(timeout: float | None = None) -> None:
    """Wait for outstanding detached tasks, e.g. before shutdown."""
    loop = asyncio.get_running_loop()
    # Tasks may schedule further tasks (e.g. reaping a spawned process).
    while True:
        tasks = {t for t in _tasks if t.get_loop() is loop}
        if not tasks:
            return
        _, still_running = await asyncio.wait(tasks, timeout=timeout)
        if still_running:
            logger.warning("background_tasks_still_running", count=len(still_running))
            return
