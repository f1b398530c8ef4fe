"""Studio-mode scene transition sequence"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from cursor2obs.obs.capture import ObsCaller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionOptions:
    """Transition applied after each capture update"""

    transition_name: Optional[str] = None
    transition_duration_ms: Optional[int] = None
    auto_enable_studio_mode: bool = True


async def transition_run(client: ObsCaller, options: TransitionOptions = TransitionOptions()) -> None:
    """
    Trigger a studio-mode transition

    Sequence:
    1. GetStudioModeEnabled, then SetStudioModeEnabled if it was off (optional)
    2. SetCurrentSceneTransition (when a name is configured)
    3. SetCurrentSceneTransitionDuration (when a duration is configured)
    4. TriggerStudioModeTransition

    Args:
        client: Connected obs-websocket client
        options: Transition options

    Raises:
        ControllerCallFailure: If any request is rejected
    """
    if options.auto_enable_studio_mode:
        response = await client.call("GetStudioModeEnabled")
        if not response.get("studioModeEnabled", False):
            logger.info("Enabling studio mode")
            await client.call("SetStudioModeEnabled", {"studioModeEnabled": True})

    if options.transition_name:
        await client.call("SetCurrentSceneTransition", {"transitionName": options.transition_name})

    if options.transition_duration_ms is not None:
        await client.call(
            "SetCurrentSceneTransitionDuration",
            {"transitionDuration": options.transition_duration_ms},
        )

    await client.call("TriggerStudioModeTransition")
