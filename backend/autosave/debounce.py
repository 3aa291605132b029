"""
Trailing-edge debounce and a serialized save queue.

Debouncer: every schedule() restarts the quiet period; the action runs once,
after the last call. SaveQueue: documents are saved one at a time, in the order
they were queued.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from loguru import logger


class Debouncer:
    def __init__(self, delay: float, action: Callable[[], None]):
        self.delay = delay
        self._action = action
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        """(Re)start the quiet period. Must be called from the event loop."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> bool:
        """Run a pending action now. Returns True if one was pending."""
        if self._handle is None:
            return False
        self.cancel()
        self._action()
        return True

    def _fire(self) -> None:
        self._handle = None
        self._action()


class SaveQueue:
    """Single worker draining an asyncio.Queue; never two saves in flight."""

    def __init__(self, save: Callable[[Any], Awaitable[None]]):
        self._save = save
        self._queue: asyncio.Queue = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None

    @property
    def idle(self) -> bool:
        return self._queue.empty() and (self._worker is None or self._worker.done())

    def put(self, item: Any) -> None:
        self._queue.put_nowait(item)
        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        while not self._queue.empty():
            item = self._queue.get_nowait()
            try:
                await self._save(item)
            except Exception:
                logger.exception("Queued save failed")
            finally:
                self._queue.task_done()

    async def join(self) -> None:
        """Wait until every queued save has finished."""
        await self._queue.join()

    async def close(self) -> None:
        """Drop queued saves and stop the worker."""
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
        self._worker = None
