"""Display listing parsing and registry construction"""

from __future__ import annotations

import logging
import re
import subprocess
from typing import Awaitable, Callable, Optional, Sequence

from cursor2obs.common.errors import ListingFailure
from cursor2obs.common.process import command_run
from cursor2obs.common.settings import settings
from cursor2obs.common.types import DisplayGeometry, DisplayRegistry

logger = logging.getLogger(__name__)

# NAME connected [primary ]WIDTHxHEIGHT+X+Y ...
_CONNECTED_OUTPUT = re.compile(r"^(\S+)\s+connected\s+(primary\s+)?(\d+)x(\d+)\+(\d+)\+(\d+)")

CommandRunner = Callable[[Sequence[str]], Awaitable[str]]


def xrandrOutput_parse(output: str) -> list[DisplayGeometry]:
    """
    Parse `xrandr --query` text into display geometries

    Only active connected outputs match; headers, mode lines and
    disconnected outputs are skipped.

    Args:
        output: Raw listing text

    Returns:
        Geometries in line order, indexed from 0. Empty if nothing matched.
    """
    displays: list[DisplayGeometry] = []
    for line in output.splitlines():
        match = _CONNECTED_OUTPUT.match(line)
        if match is None:
            continue
        name, primary, width, height, x, y = match.groups()
        displays.append(
            DisplayGeometry(
                index=len(displays),
                x=int(x),
                y=int(y),
                width=int(width),
                height=int(height),
                is_main=primary is not None,
                name=name,
                id=name,
            )
        )
    return displays


def fallbackRegistry_create() -> DisplayRegistry:
    """
    Build the deterministic single-display registry

    Returns:
        Registry holding one 1920x1080 main display at the origin
    """
    return DisplayRegistry(
        [
            DisplayGeometry(
                index=0,
                x=0,
                y=0,
                width=settings.FALLBACK_DISPLAY_WIDTH,
                height=settings.FALLBACK_DISPLAY_HEIGHT,
                is_main=True,
                name=settings.FALLBACK_DISPLAY_NAME,
                id=settings.FALLBACK_DISPLAY_NAME,
            )
        ]
    )


async def displayList_query(
    command: Sequence[str] = settings.DISPLAY_LIST_COMMAND,
    runner: CommandRunner = command_run,
) -> list[DisplayGeometry]:
    """
    Run the listing command and parse its output

    Args:
        command: Listing command argv
        runner: Command runner, injectable for tests

    Returns:
        Non-empty list of parsed geometries

    Raises:
        ListingFailure: If the command fails or lists no active display
    """
    try:
        output = await runner(command)
    except (OSError, subprocess.CalledProcessError) as e:
        raise ListingFailure(f"{command[0]} failed: {e}") from e

    displays = xrandrOutput_parse(output)
    if not displays:
        raise ListingFailure(f"{command[0]} listed no connected displays")
    return displays


async def displayRegistry_fetch(
    command: Optional[Sequence[str]] = None,
    runner: CommandRunner = command_run,
) -> DisplayRegistry:
    """
    Build the display registry, falling back to a single default display

    Args:
        command: Listing command argv, defaults to settings.DISPLAY_LIST_COMMAND
        runner: Command runner, injectable for tests

    Returns:
        Non-empty display registry
    """
    argv = tuple(command) if command is not None else settings.DISPLAY_LIST_COMMAND
    try:
        registry = DisplayRegistry(await displayList_query(argv, runner))
    except ListingFailure as e:
        logger.error("Display listing failed, falling back to default display: %s", e)
        return fallbackRegistry_create()

    logger.info("Detected %d display(s):", len(registry))
    for geometry in registry:
        logger.info(
            "  [%d] %s %dx%d+%d+%d%s",
            geometry.index,
            geometry.name,
            geometry.width,
            geometry.height,
            geometry.x,
            geometry.y,
            " (primary)" if geometry.is_main else "",
        )
    return registry
