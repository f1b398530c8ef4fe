"""
Capture input display retargeting.

OBS capture sources name their display-selection field differently per
platform and plugin (`display`, `screen`, `monitor_id`, ...) and store it as
either a number or a string identifier. Rather than hard-code a field name,
the current settings are read back, the first display-like key is chosen,
and the new value is coerced to the type the field already holds. Only that
one field is written back, as a partial-merge update.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from cursor2obs.common.errors import FieldResolutionFailure
from cursor2obs.common.settings import settings

logger = logging.getLogger(__name__)

DisplayValue = Union[str, int]
Number = Union[int, float]


class ObsCaller(Protocol):
    """Minimal request interface used by capture and transition helpers"""

    async def call(
        self, request_type: str, request_data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...


def displayField_locate(input_settings: Mapping[str, Any]) -> str:
    """
    Find the display-selection key in a settings map

    Args:
        input_settings: Settings in the order OBS returned them

    Returns:
        First key whose lowercase form contains a display keyword

    Raises:
        FieldResolutionFailure: If no key matches
    """
    for key in input_settings:
        lowered = key.lower()
        if any(keyword in lowered for keyword in settings.DISPLAY_FIELD_KEYWORDS):
            return key
    raise FieldResolutionFailure(
        f"No display selection field among settings keys {list(input_settings)}"
    )


def _isNumeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def number_parse(value: DisplayValue) -> Optional[Number]:
    """
    Convert a display value to a number

    Args:
        value: Desired display value

    Returns:
        int or float, or None when the value is not a finite number
    """
    if _isNumeric(value):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def value_coerce(
    current_value: Any,
    desired_value: DisplayValue,
    fallback_index: Optional[int] = None,
) -> DisplayValue | float:
    """
    Coerce the desired display value to the type the field already holds

    A numeric (or NaN) current value gets a number: the desired value if it
    converts, else the fallback index, else 0. Any other current value gets
    the desired value as a string.

    Args:
        current_value: Value currently stored in the field
        desired_value: Display name, id or index to select
        fallback_index: Display index used when the name is not numeric

    Returns:
        Value to write
    """
    if _isNumeric(current_value):
        number = number_parse(desired_value)
        if number is not None:
            return number
        if fallback_index is not None:
            return fallback_index
        return 0
    return str(desired_value)


async def captureInput_update(
    client: ObsCaller,
    input_name: str,
    display_value: DisplayValue,
    display_index: Optional[int] = None,
) -> tuple[str, DisplayValue | float]:
    """
    Point a capture input at another display

    Args:
        client: Connected obs-websocket client
        input_name: Capture input to retarget
        display_value: Display name, id or index to select
        display_index: Fallback numeric index for numeric fields

    Returns:
        The (field, value) pair written

    Raises:
        FieldResolutionFailure: If the input has no display-like field
        ControllerCallFailure: If either request is rejected
    """
    response = await client.call("GetInputSettings", {"inputName": input_name})
    input_settings: Dict[str, Any] = response.get("inputSettings") or {}

    field = displayField_locate(input_settings)
    current_value = input_settings[field]
    next_value = value_coerce(current_value, display_value, display_index)

    logger.debug(
        "SetInputSettings payload: input=%s key=%s current=%r (%s) next=%r (%s)",
        input_name,
        field,
        current_value,
        type(current_value).__name__,
        next_value,
        type(next_value).__name__,
    )

    await client.call(
        "SetInputSettings",
        {
            "inputName": input_name,
            "inputSettings": {field: next_value},
            "overlay": True,
        },
    )
    return field, next_value
