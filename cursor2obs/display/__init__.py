"""Display geometry, pointer probing, and display-change watching."""

from cursor2obs.display.geometry import displayRegistry_fetch, fallbackRegistry_create, xrandrOutput_parse
from cursor2obs.display.ownership import owner_resolve
from cursor2obs.display.watcher import ChangeWatcher

__all__ = [
    "ChangeWatcher",
    "displayRegistry_fetch",
    "fallbackRegistry_create",
    "owner_resolve",
    "xrandrOutput_parse",
]
