"""Unit tests for display types and registry"""

import pytest

from cursor2obs.common.types import CursorPosition, DisplayGeometry, DisplayRegistry


class TestDisplayGeometry:
    """Test DisplayGeometry invariants and containment"""

    def test_contains_is_half_open(self):
        """Left/top edges are inside, right/bottom edges are outside"""
        geometry = DisplayGeometry(index=0, x=100, y=50, width=200, height=100)

        assert geometry.contains(CursorPosition(x=100, y=50))
        assert geometry.contains(CursorPosition(x=299, y=149))
        assert not geometry.contains(CursorPosition(x=300, y=100))
        assert not geometry.contains(CursorPosition(x=150, y=150))
        assert not geometry.contains(CursorPosition(x=99, y=60))

    def test_contains_negative_origin(self):
        """Displays left of the primary use negative coordinates"""
        geometry = DisplayGeometry(index=1, x=-1280, y=0, width=1280, height=1024)

        assert geometry.contains(CursorPosition(x=-1, y=10))
        assert not geometry.contains(CursorPosition(x=0, y=10))

    @pytest.mark.parametrize("width,height", [(0, 1080), (1920, 0), (-10, 100)])
    def test_non_positive_size_raises(self, width, height):
        """Zero or negative dimensions are rejected"""
        with pytest.raises(ValueError, match="positive size"):
            DisplayGeometry(index=0, x=0, y=0, width=width, height=height)

    def test_is_immutable(self):
        """Geometries are frozen"""
        geometry = DisplayGeometry(index=0, x=0, y=0, width=10, height=10)
        with pytest.raises(AttributeError):
            geometry.x = 5  # type: ignore[misc]


class TestDisplayRegistry:
    """Test DisplayRegistry behavior"""

    def test_empty_registry_raises(self):
        """A registry always holds at least one display"""
        with pytest.raises(ValueError, match="at least one"):
            DisplayRegistry([])

    def test_preserves_order(self, side_by_side_registry):
        """Iteration and indexing follow construction order"""
        assert len(side_by_side_registry) == 2
        assert [g.name for g in side_by_side_registry] == ["A", "B"]
        assert side_by_side_registry[1].name == "B"

    def test_main_get(self):
        """main_get returns the first main display or None"""
        first = DisplayGeometry(index=0, x=0, y=0, width=10, height=10)
        second = DisplayGeometry(index=1, x=10, y=0, width=10, height=10, is_main=True)
        third = DisplayGeometry(index=2, x=20, y=0, width=10, height=10, is_main=True)

        assert DisplayRegistry([first, second, third]).main_get() is second
        assert DisplayRegistry([first]).main_get() is None

    def test_registry_is_detached_from_source_list(self):
        """Mutating the source list does not change the registry"""
        source = [DisplayGeometry(index=0, x=0, y=0, width=10, height=10)]
        registry = DisplayRegistry(source)
        source.append(DisplayGeometry(index=1, x=10, y=0, width=10, height=10))

        assert len(registry) == 1
