"""Unit tests for display listing parsing and registry fallback"""

import asyncio
import subprocess

from cursor2obs.common.types import DisplayGeometry
from cursor2obs.display.geometry import (
    displayRegistry_fetch,
    fallbackRegistry_create,
    xrandrOutput_parse,
)

XRANDR_OUTPUT = """\
Screen 0: minimum 320 x 200, current 4480 x 1440, maximum 16384 x 16384
HDMI-1 connected 1920x1080+0+180 (normal left inverted right x axis y axis) 527mm x 296mm
   1920x1080     60.00*+  50.00    59.94
DP-1 connected primary 2560x1440+1920+0 (normal left inverted right x axis y axis) 597mm x 336mm
   2560x1440     59.95*+
DP-2 disconnected (normal left inverted right x axis y axis)
eDP-1 connected (normal left inverted right x axis y axis)
"""

FALLBACK = DisplayGeometry(
    index=0, x=0, y=0, width=1920, height=1080, is_main=True, name="Display-0", id="Display-0"
)


def runner_returning(output):
    """Build a command runner that returns fixed output"""

    async def _runner(argv):
        return output

    return _runner


def runner_raising(error):
    """Build a command runner that raises"""

    async def _runner(argv):
        raise error

    return _runner


class TestXrandrOutputParse:
    """Test GeometryParser line matching"""

    def test_two_connected_outputs_in_line_order(self):
        """Connected outputs parse in order with primary flagged"""
        displays = xrandrOutput_parse(XRANDR_OUTPUT)

        assert displays == [
            DisplayGeometry(
                index=0, x=0, y=180, width=1920, height=1080,
                is_main=False, name="HDMI-1", id="HDMI-1",
            ),
            DisplayGeometry(
                index=1, x=1920, y=0, width=2560, height=1440,
                is_main=True, name="DP-1", id="DP-1",
            ),
        ]

    def test_disconnected_and_inactive_outputs_ignored(self):
        """Disconnected outputs and connected outputs without a mode are skipped"""
        names = [d.name for d in xrandrOutput_parse(XRANDR_OUTPUT)]
        assert "DP-2" not in names
        assert "eDP-1" not in names

    def test_no_matches_returns_empty(self):
        """Unrelated text parses to an empty list without raising"""
        assert xrandrOutput_parse("Screen 0: minimum 320 x 200\nnothing here\n") == []
        assert xrandrOutput_parse("") == []

    def test_index_follows_matches_not_lines(self):
        """Index counts matched outputs only"""
        text = "junk\nA connected 10x10+0+0\njunk\nB connected 10x10+10+0\n"
        assert [d.index for d in xrandrOutput_parse(text)] == [0, 1]


class TestDisplayRegistryFetch:
    """Test registry construction and fallback policy"""

    def test_parsed_displays_used(self):
        """Successful listing produces one geometry per connected output"""
        registry = asyncio.run(displayRegistry_fetch(runner=runner_returning(XRANDR_OUTPUT)))

        assert [d.name for d in registry] == ["HDMI-1", "DP-1"]

    def test_zero_matches_falls_back(self):
        """An empty parse result yields the fallback display"""
        registry = asyncio.run(displayRegistry_fetch(runner=runner_returning("Screen 0: nothing\n")))

        assert list(registry) == [FALLBACK]

    def test_missing_command_falls_back(self):
        """A command that cannot be launched yields the fallback display"""
        registry = asyncio.run(
            displayRegistry_fetch(runner=runner_raising(FileNotFoundError("xrandr")))
        )

        assert list(registry) == [FALLBACK]

    def test_nonzero_exit_falls_back(self):
        """A failing command yields the fallback display"""
        error = subprocess.CalledProcessError(1, ["xrandr"], output="", stderr="Can't open display")
        registry = asyncio.run(displayRegistry_fetch(runner=runner_raising(error)))

        assert list(registry) == [FALLBACK]

    def test_custom_command_passed_to_runner(self):
        """The configured command reaches the runner unchanged"""
        seen = []

        async def _runner(argv):
            seen.append(tuple(argv))
            return XRANDR_OUTPUT

        asyncio.run(displayRegistry_fetch(command=["xrandr", "-q"], runner=_runner))

        assert seen == [("xrandr", "-q")]

    def test_fallback_registry_is_deterministic(self):
        """Two fallback registries are identical"""
        assert list(fallbackRegistry_create()) == list(fallbackRegistry_create()) == [FALLBACK]
