"""Pointer position probes"""

from __future__ import annotations

import asyncio
import logging
import math
import subprocess
from typing import Callable, Optional, Protocol, Sequence

from Xlib import display as xdisplay
from Xlib.display import Display

from cursor2obs.common.errors import ProbeFailure
from cursor2obs.common.process import command_run
from cursor2obs.common.settings import settings
from cursor2obs.common.types import CursorPosition
from cursor2obs.display.geometry import CommandRunner

logger = logging.getLogger(__name__)


class CursorProbe(Protocol):
    """Reads the current pointer position, once per watcher tick"""

    async def position_query(self) -> CursorPosition:
        """Return the pointer position or raise ProbeFailure."""
        ...


def mouseLocation_parse(output: str) -> CursorPosition:
    """
    Parse `xdotool getmouselocation --shell` output

    Args:
        output: KEY=VALUE lines, e.g. "X=812\\nY=430\\nSCREEN=0\\nWINDOW=6291462"

    Returns:
        Parsed position

    Raises:
        ProbeFailure: If X or Y is absent or not numeric
    """
    values: dict[str, str] = {}
    for line in output.strip().splitlines():
        key, sep, value = line.partition("=")
        if key and sep:
            values[key.strip()] = value.strip()

    return CursorPosition(
        x=_coordinate_parse("X", values.get("X"), output),
        y=_coordinate_parse("Y", values.get("Y"), output),
    )


def _coordinate_parse(key: str, raw: Optional[str], output: str) -> int:
    if raw is None:
        raise ProbeFailure(f"Pointer query output has no {key}: {output!r}")
    try:
        value = float(raw)
    except ValueError:
        raise ProbeFailure(f"Pointer query returned invalid {key}={raw!r}") from None
    if not math.isfinite(value):
        raise ProbeFailure(f"Pointer query returned invalid {key}={raw!r}")
    return int(value)


class XdotoolCursorProbe:
    """Pointer probe backed by the xdotool command"""

    def __init__(
        self,
        command: Sequence[str] = settings.CURSOR_QUERY_COMMAND,
        runner: CommandRunner = command_run,
    ) -> None:
        """
        Initialize probe

        Args:
            command: Pointer query argv
            runner: Command runner, injectable for tests
        """
        self._command: tuple[str, ...] = tuple(command)
        self._runner: CommandRunner = runner

    async def position_query(self) -> CursorPosition:
        """
        Run the pointer query command once

        Returns:
            Current pointer position

        Raises:
            ProbeFailure: If the command fails or its output is malformed
        """
        try:
            output = await self._runner(self._command)
        except (OSError, subprocess.CalledProcessError) as e:
            raise ProbeFailure(f"{self._command[0]} failed: {e}") from e
        return mouseLocation_parse(output)


class XlibCursorProbe:
    """Pointer probe reading the root window pointer through python-xlib

    The X connection opens on the first query and is dropped after any
    failure, so the next tick reconnects.
    """

    def __init__(
        self,
        display_name: Optional[str] = None,
        display_factory: Callable[[Optional[str]], Display] = xdisplay.Display,
    ) -> None:
        """
        Initialize probe

        Args:
            display_name: X11 display name (e.g., ':0'), None for $DISPLAY
            display_factory: Opens the X connection, injectable for tests
        """
        self._display_name: Optional[str] = display_name
        self._display_factory: Callable[[Optional[str]], Display] = display_factory
        self._display: Optional[Display] = None

    def _position_read(self) -> CursorPosition:
        if self._display is None:
            self._display = self._display_factory(self._display_name)
            logger.debug("Connected to X11 display %s", self._display.get_display_name())
        pointer_data = self._display.screen().root.query_pointer()
        return CursorPosition(x=pointer_data.root_x, y=pointer_data.root_y)

    async def position_query(self) -> CursorPosition:
        """
        Query the pointer without blocking the event loop

        Returns:
            Current pointer position in virtual-desktop coordinates

        Raises:
            ProbeFailure: If the X server cannot be reached or queried
        """
        try:
            return await asyncio.to_thread(self._position_read)
        except Exception as e:
            self.close()
            raise ProbeFailure(f"X11 pointer query failed: {e}") from e

    def close(self) -> None:
        """Release the X11 connection"""
        display = self._display
        self._display = None
        if display is not None:
            display.close()


def cursorProbe_create(probe_name: str, display_name: Optional[str] = None) -> CursorProbe:
    """
    Create the configured pointer probe

    Args:
        probe_name: 'xdotool' or 'xlib'
        display_name: X11 display name for the xlib probe

    Returns:
        Probe instance

    Raises:
        ValueError: If the probe name is unknown
    """
    name = probe_name.lower()
    if name == "xdotool":
        return XdotoolCursorProbe()
    if name == "xlib":
        return XlibCursorProbe(display_name)
    raise ValueError(f"Unsupported probe '{probe_name}'. Supported: xdotool, xlib.")
