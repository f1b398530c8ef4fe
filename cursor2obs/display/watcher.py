"""
Display-change watcher.

Polls the pointer on a self-paced timer, resolves which display owns it, and
notifies subscribers only when the owning display differs from the last one
reported. The first successful tick always notifies.

Scheduling is epoch-guarded: start() and stop() each advance the epoch, and a
tick scheduled under an older epoch does nothing. A tick already running when
stop() is called completes but cannot schedule a successor, and after a
restart the first new tick waits for it, so probe calls never overlap.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from cursor2obs.common.settings import settings
from cursor2obs.common.types import DisplayGeometry, DisplayRegistry
from cursor2obs.display.geometry import displayRegistry_fetch
from cursor2obs.display.ownership import owner_resolve
from cursor2obs.display.probe import CursorProbe

logger = logging.getLogger(__name__)

ChangeListener = Callable[[DisplayGeometry], None]
RegistryLoader = Callable[[], Awaitable[DisplayRegistry]]


@dataclass
class WatcherState:
    """Mutable watcher state, touched only by the watcher itself"""

    running: bool = False
    last_emitted_index: Optional[int] = None
    epoch: int = 0


class ChangeWatcher:
    """Polls pointer ownership and reports display changes"""

    def __init__(
        self,
        probe: CursorProbe,
        poll_interval_ms: int = settings.DEFAULT_POLL_INTERVAL_MS,
        registry_loader: RegistryLoader = displayRegistry_fetch,
    ) -> None:
        """
        Initialize watcher

        Args:
            probe: Pointer position source
            poll_interval_ms: Delay between the end of a tick and the next tick
            registry_loader: Coroutine function returning the display registry
        """
        self._probe: CursorProbe = probe
        self._poll_interval: float = poll_interval_ms / settings.POLL_INTERVAL_DIVISOR
        self._registry_loader: RegistryLoader = registry_loader
        self._registry: Optional[DisplayRegistry] = None
        self._state: WatcherState = WatcherState()
        self._listeners: list[ChangeListener] = []
        self._timer: Optional[asyncio.TimerHandle] = None
        self._tick_task: Optional[asyncio.Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._state.running

    @property
    def last_emitted_index(self) -> Optional[int]:
        return self._state.last_emitted_index

    @property
    def registry(self) -> Optional[DisplayRegistry]:
        return self._registry

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Register a display-change listener

        Args:
            listener: Called with the new owning display on every change

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def start(self) -> None:
        """Fetch the display registry and begin polling (no-op if running)"""
        if self._state.running:
            return

        epoch = self._state.epoch
        registry = await self._registry_loader()
        if self._state.running or self._state.epoch != epoch:
            # stop() or another start() ran while the registry was loading
            return

        self._registry = registry
        self._state.running = True
        self._state.epoch += 1
        logger.info(
            "Display watcher started: %d display(s), poll interval %.3fs",
            len(registry),
            self._poll_interval,
        )
        self._tickNext_schedule(0.0)

    def stop(self) -> None:
        """Stop polling; an in-flight tick finishes but schedules nothing"""
        was_running = self._state.running
        self._state.running = False
        self._state.epoch += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if was_running:
            logger.info("Display watcher stopped")

    async def tick_run(self) -> Optional[DisplayGeometry]:
        """
        Execute one poll tick

        Returns:
            The newly emitted display, or None when nothing was emitted
        """
        if not self._state.running or self._registry is None:
            return None

        try:
            position = await self._probe.position_query()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Pointer poll failed: %s", e)
            return None

        display = owner_resolve(position, self._registry)
        if display.index == self._state.last_emitted_index:
            return None

        previous = self._state.last_emitted_index
        self._state.last_emitted_index = display.index
        logger.info(
            "Display change: %s -> %d (%s) at (%d, %d)",
            previous,
            display.index,
            display.name,
            position.x,
            position.y,
        )
        self._listeners_notify(display)
        return display

    def _listeners_notify(self, display: DisplayGeometry) -> None:
        for listener in list(self._listeners):
            try:
                listener(display)
            except Exception:
                logger.exception("Display change listener failed for display %d", display.index)

    def _epoch_isCurrent(self, epoch: int) -> bool:
        return self._state.running and epoch == self._state.epoch

    def _tickNext_schedule(self, delay: float) -> None:
        loop = asyncio.get_running_loop()
        epoch = self._state.epoch
        self._timer = loop.call_later(delay, self._tick_spawn, epoch)

    def _tick_spawn(self, epoch: int) -> None:
        self._timer = None
        if not self._epoch_isCurrent(epoch):
            return
        previous = self._tick_task
        if previous is not None and previous.done():
            previous = None
        self._tick_task = asyncio.get_running_loop().create_task(
            self._tickCycle_run(epoch, previous)
        )

    async def _tickCycle_run(
        self, epoch: int, previous: Optional[asyncio.Task[None]] = None
    ) -> None:
        if previous is not None:
            # A tick from before the last restart is still probing
            await asyncio.wait({previous})
            if not self._epoch_isCurrent(epoch):
                return
        await self.tick_run()
        if self._epoch_isCurrent(epoch):
            self._tickNext_schedule(self._poll_interval)
