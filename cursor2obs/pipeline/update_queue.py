"""
Serial update queue.

Display changes can arrive faster than OBS applies them. Every update is
queued and a single worker runs them one at a time in arrival order. A
failing task is logged and the next task still runs. The queue is unbounded.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

UpdateTask = Callable[[], Awaitable[None]]


class UpdatePipeline:
    """Single-worker FIFO of side-effecting update tasks"""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[UpdateTask] = asyncio.Queue()
        self._worker: Optional[asyncio.Task[None]] = None
        self._completed: int = 0
        self._failed: int = 0

    @property
    def pending_count(self) -> int:
        """Tasks queued but not yet started"""
        return self._queue.qsize()

    @property
    def completed_count(self) -> int:
        return self._completed

    @property
    def failed_count(self) -> int:
        return self._failed

    async def start(self) -> None:
        """Launch the worker (no-op if already running)"""
        if self._worker is not None and not self._worker.done():
            return
        self._worker = asyncio.create_task(self._run())
        logger.debug("Update pipeline started")

    def enqueue(self, task: UpdateTask) -> None:
        """
        Append a task; it runs after every task enqueued before it has settled

        Args:
            task: Zero-argument coroutine function
        """
        self._queue.put_nowait(task)
        logger.debug("Update queued (%d pending)", self._queue.qsize())

    async def join(self) -> None:
        """Wait until every enqueued task has settled"""
        await self._queue.join()

    async def stop(self) -> None:
        """Cancel the worker; queued tasks that have not started are dropped"""
        if self._worker is None:
            return
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None

        dropped = 0
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
            dropped += 1
        if dropped:
            logger.warning("Update pipeline stopped with %d update(s) not applied", dropped)
        else:
            logger.debug("Update pipeline stopped")

    async def _run(self) -> None:
        while True:
            task = await self._queue.get()
            try:
                await task()
                self._completed += 1
            except asyncio.CancelledError:
                raise
            except Exception:
                self._failed += 1
                logger.exception("Display update failed")
            finally:
                self._queue.task_done()
