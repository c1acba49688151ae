"""Fire-and-forget task set for best-effort background work (cache backfills).

Callers spawn a coroutine and return immediately. The set keeps a strong
reference to every running task (the event loop only keeps weak ones),
logs failures when a task finishes, and can be drained at shutdown.
Tasks may be registered under a key so a later invalidation of that key
can cancel a backfill that has not landed yet.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class FireAndForget:
    """Owner of detached asyncio tasks. One instance per process (app.state.background)."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()
        self._keyed: dict[str, set[asyncio.Task[Any]]] = {}

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    def spawn(
        self,
        coro: Coroutine[Any, Any, Any],
        *,
        description: str,
        key: str | None = None,
    ) -> asyncio.Task[Any]:
        """Schedule coro without awaiting it. Exceptions are logged, never raised.

        Args:
            coro: Coroutine to run in the background.
            description: Short label for log messages (e.g. "cache backfill profile:abc").
            key: Optional key; cancel(key) cancels every task still running under it.

        Returns:
            The created task (callers normally ignore it).
        """
        task = asyncio.create_task(coro, name=description)
        self._tasks.add(task)
        if key is not None:
            self._keyed.setdefault(key, set()).add(task)
        task.add_done_callback(lambda t: self._on_done(t, key))
        return task

    def cancel(self, key: str) -> bool:
        """Cancel every running task registered under key. Returns True if any was cancelled."""
        cancelled = False
        for task in self._keyed.pop(key, set()):
            if not task.done():
                task.cancel()
                cancelled = True
        return cancelled

    def _on_done(self, task: asyncio.Task[Any], key: str | None) -> None:
        self._tasks.discard(task)
        if key is not None:
            keyed = self._keyed.get(key)
            if keyed is not None:
                keyed.discard(task)
                if not keyed:
                    del self._keyed[key]
        if task.cancelled():
            logger.debug("Background task cancelled: %s", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(
                "Background task failed: %s: %s",
                task.get_name(),
                exc,
                exc_info=exc,
            )

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for running tasks; cancel whatever is still running after timeout."""
        if not self._tasks:
            return
        _, still_running = await asyncio.wait(list(self._tasks), timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            logger.warning("Cancelled %d background task(s) at shutdown", len(still_running))
            await asyncio.gather(*still_running, return_exceptions=True)
