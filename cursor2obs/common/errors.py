"""Exception hierarchy for cursor2obs"""

from __future__ import annotations

from typing import Optional


class Cursor2ObsError(Exception):
    """Base class for all cursor2obs errors"""


class ConfigError(Cursor2ObsError):
    """Configuration is invalid or a required value is missing"""


class ProbeFailure(Cursor2ObsError):
    """Cursor position could not be read or was malformed"""


class ListingFailure(Cursor2ObsError):
    """Display listing command unavailable, failed, or produced no displays"""


class FieldResolutionFailure(Cursor2ObsError):
    """No display-selection field found in capture input settings"""


class ControllerCallFailure(Cursor2ObsError):
    """An obs-websocket request was rejected or could not be delivered"""

    def __init__(
        self,
        message: str,
        request_type: Optional[str] = None,
        code: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.request_type: Optional[str] = request_type
        self.code: Optional[int] = code
        self.comment: Optional[str] = comment
