"""obs-websocket v5 client

Thin wrapper over simpleobsws. The library performs the Hello/Identify
handshake, password authentication and request correlation; this module maps
its results and errors onto ControllerCallFailure.
"""

from __future__ import annotations

import logging
from enum import IntFlag
from typing import Any, Callable, Dict, Optional

import simpleobsws

from cursor2obs.common.errors import ControllerCallFailure

logger = logging.getLogger(__name__)

DEFAULT_URL = "ws://127.0.0.1:4455"

REQUEST_TIMEOUT_S = 15
"""Seconds simpleobsws waits for a response; a dropped connection surfaces here"""


class EventSubscription(IntFlag):
    """obs-websocket event categories, as sent in Identify.eventSubscriptions"""

    NONE = 0
    GENERAL = 1 << 0
    CONFIG = 1 << 1
    SCENES = 1 << 2
    INPUTS = 1 << 3
    TRANSITIONS = 1 << 4
    FILTERS = 1 << 5
    OUTPUTS = 1 << 6
    SCENE_ITEMS = 1 << 7
    MEDIA_INPUTS = 1 << 8
    VENDORS = 1 << 9
    UI = 1 << 10


DEFAULT_EVENT_SUBSCRIPTIONS = (
    EventSubscription.INPUTS
    | EventSubscription.SCENES
    | EventSubscription.SCENE_ITEMS
    | EventSubscription.TRANSITIONS
)

ClientFactory = Callable[..., Any]


class ObsClient:
    """Request/response session with obs-websocket (RPC version 1)"""

    def __init__(self, client_factory: ClientFactory = simpleobsws.WebSocketClient) -> None:
        """
        Initialize client

        Args:
            client_factory: Builds the underlying simpleobsws.WebSocketClient,
                injectable for tests
        """
        self._client_factory: ClientFactory = client_factory
        self._ws: Any = None

    @property
    def is_connected(self) -> bool:
        return self._ws is not None

    async def connect(
        self,
        url: str = DEFAULT_URL,
        password: Optional[str] = None,
        event_subscriptions: int = DEFAULT_EVENT_SUBSCRIPTIONS,
    ) -> None:
        """
        Open the session and wait until OBS has identified it

        Args:
            url: Server URL
            password: Server password, when authentication is enabled
            event_subscriptions: EventSubscription bit mask

        Raises:
            ControllerCallFailure: If the server cannot be reached or does not
                identify the session (for example a wrong password)
        """
        if self._ws is not None:
            return

        parameters = simpleobsws.IdentificationParameters(
            ignoreNonFatalRequestChecks=False,
            eventSubscriptions=int(event_subscriptions),
        )
        ws = self._client_factory(
            url=url,
            password=password or "",
            identification_parameters=parameters,
        )

        try:
            await ws.connect()
        except Exception as e:
            raise ControllerCallFailure(f"Could not connect to {url}: {e}") from e

        if not await ws.wait_until_identified():
            await ws.disconnect()
            raise ControllerCallFailure(
                f"{url} did not identify the session (check the obs-websocket password)"
            )

        ws.register_event_callback(self._event_log)
        self._ws = ws
        logger.info("Connected to %s", url)

    async def _event_log(self, event_type: str, event_data: Optional[Dict[str, Any]]) -> None:
        logger.debug("Event %s", event_type)

    async def call(
        self,
        request_type: str,
        request_data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send one request and wait for its response

        Args:
            request_type: obs-websocket request name, e.g. 'GetInputSettings'
            request_data: Request fields

        Returns:
            responseData of the reply (empty dict when absent)

        Raises:
            ControllerCallFailure: If not connected, no response arrives, or
                the server reports a failed request status
        """
        if self._ws is None:
            raise ControllerCallFailure(
                f"{request_type}: not connected to obs-websocket", request_type=request_type
            )

        request = simpleobsws.Request(request_type, request_data)
        try:
            response = await self._ws.call(request, timeout=REQUEST_TIMEOUT_S)
        except Exception as e:
            raise ControllerCallFailure(
                f"{request_type}: no response from obs-websocket ({e})",
                request_type=request_type,
            ) from e

        if not response.ok():
            status = response.requestStatus
            raise ControllerCallFailure(
                f"{request_type} failed (code {status.code}): {status.comment or 'no comment'}",
                request_type=request_type,
                code=status.code,
                comment=status.comment,
            )
        return response.responseData or {}

    async def disconnect(self) -> None:
        """Close the session (safe to call when already closed)"""
        ws = self._ws
        self._ws = None
        if ws is not None:
            await ws.disconnect()
            logger.info("Disconnected from obs-websocket")
