"""Per-display update task: retarget the capture input, then transition"""

from __future__ import annotations

import logging

from cursor2obs.common.types import DisplayGeometry
from cursor2obs.obs.capture import DisplayValue, ObsCaller, captureInput_update
from cursor2obs.obs.transition import TransitionOptions, transition_run
from cursor2obs.pipeline.update_queue import UpdateTask

logger = logging.getLogger(__name__)


def displayValue_select(display: DisplayGeometry) -> DisplayValue:
    """
    Choose the value identifying a display to OBS

    Args:
        display: Target display

    Returns:
        Non-blank name, else non-blank id, else the display index
    """
    if display.name and display.name.strip():
        return display.name
    if display.id and display.id.strip():
        return display.id
    return display.index


def displayUpdateTask_create(
    client: ObsCaller,
    input_name: str,
    display: DisplayGeometry,
    transition: TransitionOptions = TransitionOptions(),
) -> UpdateTask:
    """
    Build the update task for one display change

    Args:
        client: Connected obs-websocket client
        input_name: Capture input to retarget
        display: Display that now owns the pointer
        transition: Transition applied after the capture update

    Returns:
        Zero-argument coroutine function for UpdatePipeline.enqueue()
    """

    async def _display_apply() -> None:
        display_value = displayValue_select(display)
        logger.debug(
            "Updating input %s: index=%d name=%s id=%s value=%r pos=(%d, %d) size=%dx%d",
            input_name,
            display.index,
            display.name,
            display.id,
            display_value,
            display.x,
            display.y,
            display.width,
            display.height,
        )
        field, value = await captureInput_update(
            client, input_name, display_value, display.index
        )
        await transition_run(client, transition)
        logger.info("Input %s now shows display %d (%s=%r)", input_name, display.index, field, value)

    return _display_apply
