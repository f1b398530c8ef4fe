"""Pytest configuration and shared fixtures for cursor2obs tests

This module provides common fixtures used across the unit tests.
Nothing here needs X11, xrandr, xdotool or a running OBS.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest

from cursor2obs.common.config import Config, ConfigLoader
from cursor2obs.common.settings import settings
from cursor2obs.common.types import DisplayGeometry, DisplayRegistry


@pytest.fixture
def side_by_side_registry() -> DisplayRegistry:
    """Two 200x200 displays: A at the origin, B to its right"""
    return DisplayRegistry(
        [
            DisplayGeometry(index=0, x=0, y=0, width=200, height=200, name="A", id="A"),
            DisplayGeometry(index=1, x=200, y=0, width=200, height=200, name="B", id="B"),
        ]
    )


@pytest.fixture
def sample_config() -> Config:
    """Load the shipped config.yml

    Returns:
        Config object with repository defaults
    """
    config_path = Path(__file__).parent.parent / "config.yml"
    if not config_path.exists():
        pytest.skip("config.yml not found - required for this test")
    return ConfigLoader.config_load(config_path)


@pytest.fixture
def reset_settings() -> Generator[None, None, None]:
    """Reset settings singleton between tests"""
    settings._config = None
    yield
    settings._config = None


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
