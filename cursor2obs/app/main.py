"""cursor2obs runtime: connect to OBS, watch displays, apply changes"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
from typing import Optional

from cursor2obs.app.bootstrap import (
    configWithSettings_load,
    loggingWithConfig_setup,
    transitionOptions_resolve,
)
from cursor2obs.common.config import Config
from cursor2obs.common.settings import settings
from cursor2obs.common.types import DisplayGeometry
from cursor2obs.display.geometry import displayRegistry_fetch
from cursor2obs.display.probe import CursorProbe, cursorProbe_create
from cursor2obs.display.watcher import ChangeWatcher, RegistryLoader
from cursor2obs.obs.client import DEFAULT_EVENT_SUBSCRIPTIONS, ObsClient
from cursor2obs.pipeline.update_queue import UpdatePipeline
from cursor2obs.pipeline.update_task import displayUpdateTask_create

logger = logging.getLogger(__name__)


class Application:
    """Wires watcher, pipeline and OBS client for one process lifetime"""

    def __init__(
        self,
        config: Optional[Config] = None,
        client: Optional[ObsClient] = None,
        probe: Optional[CursorProbe] = None,
        registry_loader: RegistryLoader = displayRegistry_fetch,
    ) -> None:
        """
        Initialize application

        Args:
            config: Resolved configuration, defaults to settings.config
            client: obs-websocket client, created when omitted
            probe: Pointer probe, created from config when omitted
            registry_loader: Display registry source
        """
        self._config: Config = config if config is not None else settings.config
        self._client: ObsClient = client if client is not None else ObsClient()
        self._probe: CursorProbe = (
            probe
            if probe is not None
            else cursorProbe_create(self._config.watcher.probe, self._config.watcher.display)
        )
        self._transition = transitionOptions_resolve(self._config)
        self._pipeline: UpdatePipeline = UpdatePipeline()
        self._watcher: ChangeWatcher = ChangeWatcher(
            self._probe,
            poll_interval_ms=self._config.watcher.poll_interval_ms,
            registry_loader=registry_loader,
        )
        self._shutdown_event: asyncio.Event = asyncio.Event()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def watcher(self) -> ChangeWatcher:
        return self._watcher

    @property
    def pipeline(self) -> UpdatePipeline:
        return self._pipeline

    def displayChange_handle(self, display: DisplayGeometry) -> None:
        """Queue the OBS update for a display change"""
        self._pipeline.enqueue(
            displayUpdateTask_create(
                self._client,
                self._config.capture.input_name,
                display,
                self._transition,
            )
        )

    async def startup(self) -> None:
        """
        Connect to OBS and start watching

        Raises:
            ControllerCallFailure: If OBS cannot be reached
        """
        await self._client.connect(
            url=self._config.obs.url,
            password=self._config.obs.password,
            event_subscriptions=DEFAULT_EVENT_SUBSCRIPTIONS,
        )
        await self._pipeline.start()
        self._watcher.subscribe(self.displayChange_handle)
        await self._watcher.start()

    def shutdown_request(self) -> None:
        """Stop polling and release run(); safe to call from a signal handler"""
        logger.info("Shutdown requested")
        self._watcher.stop()
        self._shutdown_event.set()

    async def shutdown(self) -> None:
        """Stop all components and disconnect from OBS"""
        self._watcher.stop()
        await self._pipeline.stop()
        await self._client.disconnect()
        close = getattr(self._probe, "close", None)
        if close is not None:
            close()

    async def run(self) -> None:
        """Start, then block until shutdown_request() is called"""
        try:
            await self.startup()
            await self._shutdown_event.wait()
        finally:
            await self.shutdown()


def signalHandlers_install(app: Application) -> None:
    """
    Route SIGINT and SIGTERM to an orderly shutdown

    Args:
        app: Running application
    """
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, app.shutdown_request)


async def app_main() -> None:
    """Run the application on settings.config until a termination signal arrives"""
    app = Application()
    config = app.config
    signalHandlers_install(app)
    logger.info(
        "Following pointer into input '%s' via %s (probe=%s, poll=%dms)",
        config.capture.input_name,
        config.obs.url,
        config.watcher.probe,
        config.watcher.poll_interval_ms,
    )
    await app.run()


def app_run(args: argparse.Namespace) -> None:
    """
    Run cursor2obs

    Args:
        args: Parsed command line arguments
    """
    config = configWithSettings_load(args)
    loggingWithConfig_setup(args, config)
    asyncio.run(app_main())
    logger.info("cursor2obs stopped")
