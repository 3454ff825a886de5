"""Scoped background tasks with a single cancellation point.

Every task started through a scope is tracked until it finishes, so tearing the
owner down is one `aclose()` call instead of cleanup spread over exit paths.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar

from loguru import logger

T = TypeVar("T")

TickCallback = Callable[[], Awaitable[None] | None]


class TaskScope:
    """Owns a set of asyncio tasks (one-shot and recurring) for one session."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._tasks: set[asyncio.Task] = set()
        self._recurring: set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active_count(self) -> int:
        """Number of tracked tasks that have not finished yet."""
        return sum(1 for task in self._tasks if not task.done())

    @property
    def recurring_count(self) -> int:
        return sum(1 for task in self._recurring if not task.done())

    def spawn(self, coro: Coroutine[Any, Any, T], *, name: str | None = None) -> asyncio.Task[T]:
        """Start a tracked task.

        Raises:
            RuntimeError: If the scope was already closed
        """
        if self._closed:
            coro.close()
            raise RuntimeError(f"Task scope '{self.name}' is closed")

        task = asyncio.create_task(coro, name=f"{self.name}:{name or 'task'}")
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def every(self, interval: float, callback: TickCallback, *, name: str) -> asyncio.Task[None]:
        """Run `callback` once per `interval` seconds until cancelled.

        A failing tick is logged and the schedule keeps going.
        """
        task = self.spawn(self._repeat(interval, callback, name), name=name)
        self._recurring.add(task)
        return task

    async def _repeat(self, interval: float, callback: TickCallback, name: str) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.exception(f"Recurring task {self.name}:{name} tick failed: {exc}")

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        self._recurring.discard(task)

        if task.cancelled():
            return

        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error(f"Task {task.get_name()} failed: {exc}")

    async def wait_idle(self) -> None:
        """Wait until every one-shot task has finished. Recurring tasks are ignored."""
        while True:
            pending = [
                task for task in self._tasks if task not in self._recurring and not task.done()
            ]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel every tracked task and wait for them to unwind. Idempotent."""
        self._closed = True

        current = asyncio.current_task()
        tasks = [task for task in self._tasks if task is not current]
        for task in tasks:
            task.cancel()

        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug(f"Task scope {self.name} closed, cancelled {len(tasks)} task(s)")
