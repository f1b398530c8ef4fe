"""Serialized application of display changes to OBS."""

from cursor2obs.pipeline.update_queue import UpdatePipeline, UpdateTask
from cursor2obs.pipeline.update_task import displayUpdateTask_create, displayValue_select

__all__ = [
    "UpdatePipeline",
    "UpdateTask",
    "displayUpdateTask_create",
    "displayValue_select",
]
