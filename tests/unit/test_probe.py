"""Unit tests for pointer position probes"""

import asyncio
import subprocess
from unittest.mock import Mock

import pytest

from cursor2obs.common.errors import ProbeFailure
from cursor2obs.common.types import CursorPosition
from cursor2obs.display.probe import (
    XdotoolCursorProbe,
    XlibCursorProbe,
    cursorProbe_create,
    mouseLocation_parse,
)


class TestMouseLocationParse:
    """Test xdotool --shell output parsing"""

    def test_valid_output(self):
        """X and Y are read from KEY=VALUE lines"""
        output = "X=812\nY=430\nSCREEN=0\nWINDOW=6291462\n"
        assert mouseLocation_parse(output) == CursorPosition(x=812, y=430)

    def test_negative_coordinates(self):
        """Virtual desktops can place the pointer at negative coordinates"""
        assert mouseLocation_parse("X=-640\nY=12\n") == CursorPosition(x=-640, y=12)

    def test_missing_key_raises(self):
        """Output without Y is a probe failure"""
        with pytest.raises(ProbeFailure, match="no Y"):
            mouseLocation_parse("X=10\nSCREEN=0\n")

    def test_non_numeric_raises(self):
        """Non-numeric coordinates are a probe failure"""
        with pytest.raises(ProbeFailure, match="invalid X"):
            mouseLocation_parse("X=abc\nY=10\n")

    def test_empty_output_raises(self):
        """Empty output is a probe failure"""
        with pytest.raises(ProbeFailure):
            mouseLocation_parse("")


class TestXdotoolCursorProbe:
    """Test the command-backed probe"""

    def test_position_query_uses_runner(self):
        """The configured command is run and its output parsed"""
        seen = []

        async def _runner(argv):
            seen.append(tuple(argv))
            return "X=5\nY=6\n"

        probe = XdotoolCursorProbe(runner=_runner)
        position = asyncio.run(probe.position_query())

        assert position == CursorPosition(x=5, y=6)
        assert seen == [("xdotool", "getmouselocation", "--shell")]

    @pytest.mark.parametrize(
        "error",
        [
            FileNotFoundError("xdotool"),
            subprocess.CalledProcessError(1, ["xdotool"]),
        ],
    )
    def test_command_failure_becomes_probe_failure(self, error):
        """Launch errors and nonzero exits surface as ProbeFailure"""

        async def _runner(argv):
            raise error

        probe = XdotoolCursorProbe(runner=_runner)
        with pytest.raises(ProbeFailure, match="xdotool failed"):
            asyncio.run(probe.position_query())


class TestXlibCursorProbe:
    """Test the python-xlib-backed probe"""

    @staticmethod
    def display_create(root_x=7, root_y=8):
        display = Mock()
        display.screen.return_value.root.query_pointer.return_value = Mock(
            root_x=root_x, root_y=root_y
        )
        return display

    def test_position_query_connects_once_and_reads(self):
        """Connection is opened lazily on the first query and then reused"""
        display = self.display_create()
        factory = Mock(return_value=display)

        probe = XlibCursorProbe(":1", display_factory=factory)
        first = asyncio.run(probe.position_query())
        second = asyncio.run(probe.position_query())

        assert first == second == CursorPosition(x=7, y=8)
        factory.assert_called_once_with(":1")

    def test_connect_error_becomes_probe_failure(self):
        factory = Mock(side_effect=RuntimeError("Can't connect to display"))

        probe = XlibCursorProbe(display_factory=factory)
        with pytest.raises(ProbeFailure, match="X11 pointer query failed"):
            asyncio.run(probe.position_query())

    def test_query_error_drops_connection(self):
        """A failed query closes the connection so the next tick reconnects"""
        broken = Mock()
        broken.screen.return_value.root.query_pointer.side_effect = OSError("connection reset")
        healthy = self.display_create(root_x=1, root_y=2)
        factory = Mock(side_effect=[broken, healthy])

        probe = XlibCursorProbe(display_factory=factory)
        with pytest.raises(ProbeFailure):
            asyncio.run(probe.position_query())
        broken.close.assert_called_once()

        assert asyncio.run(probe.position_query()) == CursorPosition(x=1, y=2)
        assert factory.call_count == 2

    def test_close_is_idempotent(self):
        display = self.display_create()
        probe = XlibCursorProbe(display_factory=Mock(return_value=display))
        asyncio.run(probe.position_query())

        probe.close()
        probe.close()

        display.close.assert_called_once()


class TestCursorProbeCreate:
    """Test probe factory"""

    def test_xdotool(self):
        assert isinstance(cursorProbe_create("xdotool"), XdotoolCursorProbe)

    def test_xlib(self):
        assert isinstance(cursorProbe_create("XLIB", ":1"), XlibCursorProbe)

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unsupported probe"):
            cursorProbe_create("libinput")
