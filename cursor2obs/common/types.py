"""Common types and data structures for cursor2obs"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence


@dataclass(frozen=True)
class CursorPosition:
    """Pointer position in virtual-desktop coordinates"""
    x: int
    y: int


@dataclass(frozen=True)
class DisplayGeometry:
    """One physical display as placed on the virtual desktop"""
    index: int
    x: int
    y: int
    width: int
    height: int
    is_main: bool = False
    name: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Display geometry must have positive size, got {self.width}x{self.height}"
            )

    def contains(self, position: CursorPosition) -> bool:
        """Check if position lies in the half-open box [x, x+width) x [y, y+height)"""
        return (
            self.x <= position.x < self.x + self.width
            and self.y <= position.y < self.y + self.height
        )


class DisplayRegistry:
    """
    Ordered, non-empty, read-only set of display geometries.

    Built once when the watcher starts and never refreshed afterwards.
    """

    def __init__(self, geometries: Sequence[DisplayGeometry]) -> None:
        """
        Initialize registry

        Args:
            geometries: Displays in listing order

        Raises:
            ValueError: If no geometry is supplied
        """
        if not geometries:
            raise ValueError("DisplayRegistry requires at least one display geometry")
        self._geometries: tuple[DisplayGeometry, ...] = tuple(geometries)

    def __len__(self) -> int:
        return len(self._geometries)

    def __iter__(self) -> Iterator[DisplayGeometry]:
        return iter(self._geometries)

    def __getitem__(self, index: int) -> DisplayGeometry:
        return self._geometries[index]

    def __repr__(self) -> str:
        return f"DisplayRegistry({list(self._geometries)!r})"

    def main_get(self) -> Optional[DisplayGeometry]:
        """Return the first display flagged as main, if any"""
        for geometry in self._geometries:
            if geometry.is_main:
                return geometry
        return None
