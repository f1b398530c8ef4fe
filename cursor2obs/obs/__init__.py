"""obs-websocket v5 client and the requests cursor2obs issues through it."""

from cursor2obs.obs.capture import captureInput_update, displayField_locate, value_coerce
from cursor2obs.obs.client import DEFAULT_EVENT_SUBSCRIPTIONS, EventSubscription, ObsClient
from cursor2obs.obs.transition import TransitionOptions, transition_run

__all__ = [
    "DEFAULT_EVENT_SUBSCRIPTIONS",
    "EventSubscription",
    "ObsClient",
    "TransitionOptions",
    "captureInput_update",
    "displayField_locate",
    "transition_run",
    "value_coerce",
]
