"""Unit tests for settings singleton"""

import pytest

from cursor2obs.common.config import ConfigLoader
from cursor2obs.common.settings import Settings, settings


class TestSettingsSingleton:
    """Test Settings singleton pattern"""

    def test_singleton_same_instance(self):
        """Test that Settings() returns same instance"""
        assert Settings() is Settings()

    def test_global_settings_is_singleton(self):
        """Test that global 'settings' is the singleton"""
        assert settings is Settings()


class TestSettingsConstants:
    """Test application constants"""

    def test_fallback_display(self):
        assert settings.FALLBACK_DISPLAY_NAME == "Display-0"
        assert settings.FALLBACK_DISPLAY_WIDTH == 1920
        assert settings.FALLBACK_DISPLAY_HEIGHT == 1080

    def test_watcher_constants(self):
        assert settings.DEFAULT_POLL_INTERVAL_MS == 400
        assert settings.POLL_INTERVAL_DIVISOR == 1000.0

    def test_display_field_keywords(self):
        assert settings.DISPLAY_FIELD_KEYWORDS == ("display", "screen", "monitor")

    def test_commands(self):
        assert settings.DISPLAY_LIST_COMMAND == ("xrandr", "--query", "--current")
        assert settings.CURSOR_QUERY_COMMAND == ("xdotool", "getmouselocation", "--shell")


class TestSettingsInitialization:
    """Test settings initialization with config"""

    def test_config_property_before_init_raises(self, reset_settings):
        """Test accessing config before initialization raises error"""
        with pytest.raises(RuntimeError, match="Settings not initialized"):
            _ = settings.config

    def test_initialize_with_config(self, reset_settings):
        config = ConfigLoader.config_parse({})
        settings.initialize(config)
        assert settings.config is config
