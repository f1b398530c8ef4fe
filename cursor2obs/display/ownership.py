"""Pointer-to-display ownership resolution"""

from cursor2obs.common.types import CursorPosition, DisplayGeometry, DisplayRegistry


def owner_resolve(position: CursorPosition, registry: DisplayRegistry) -> DisplayGeometry:
    """
    Pick the display that owns the pointer

    Resolution order:
    1. First display whose half-open box contains the pointer
    2. First display flagged as main (pointer in a gap or off-desktop)
    3. Display at index 0

    Args:
        position: Current pointer position
        registry: Non-empty display registry

    Returns:
        Owning display geometry
    """
    for geometry in registry:
        if geometry.contains(position):
            return geometry

    main = registry.main_get()
    if main is not None:
        return main
    return registry[0]
