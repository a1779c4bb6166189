from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Callback = Callable[[Optional[BaseException], Optional[Any]], None]


def drain(awaitable: Awaitable[T], callback: Callback) -> "asyncio.Task[T]":
    """
    Schedule `awaitable` and report its outcome as callback(error, value).

    Must be called from a running event loop. The returned task yields the same
    outcome when awaited; callers that only use the callback may drop it (its
    exception is marked retrieved). Cancellation is not reported to the callback.
    """

    async def _run() -> T:
        try:
            value = await awaitable
        except Exception as e:
            callback(e, None)
            raise
        callback(None, value)
        return value

    task = asyncio.get_running_loop().create_task(_run())
    task.add_done_callback(_mark_retrieved)
    return task


def _mark_retrieved(task: "asyncio.Task[Any]") -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Callback-drained request failed: %s", type(task.exception()).__name__)
