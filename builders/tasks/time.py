"""Time and running helpers for tasks

Sleeping, delayed start, memoization and synchronous entry point."""

from __future__ import annotations

import asyncio
import logging

from kungfu import LazyCoroResult, Ok, Result
from kungfu.library.caching import acache

from .._types import Task

logger = logging.getLogger(__name__)

def sleep(seconds: float) -> Task[None]:
    """Task that waits `seconds` and succeeds with None."""

    async def run() -> Result[None, Exception]:
        if seconds > 0.0:
            await asyncio.sleep(seconds)
        return Ok(None)

    return LazyCoroResult(run)

def delayed[T](interp: Task[T], *, seconds: float) -> Task[T]:
    """Sleep before running."""

    async def run() -> Result[T, Exception]:
        if seconds > 0.0:
            await asyncio.sleep(seconds)
        return await interp()

    return LazyCoroResult(run)

def cached[T](interp: Task[T]) -> Task[T]:
    """Cache the result - only compute once."""
    return LazyCoroResult(acache(interp))

def run_synchronously[T](interp: Task[T]) -> Result[T, Exception]:
    """
    Run a task to completion on a fresh event loop.

    NOTE: Uses asyncio.run, so it cannot be called from a running loop.
          Inside async code, await the task instead.
    """
    result = asyncio.run(_await(interp))
    logger.debug("task finished: %r", result)
    return result

async def _await[T](interp: Task[T]) -> Result[T, Exception]:
    return await interp()

__all__ = (
    "sleep",
    "delayed",
    "cached",
    "run_synchronously",
)
