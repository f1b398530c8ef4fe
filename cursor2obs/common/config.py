"""Configuration file loading and management"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from cursor2obs.common.errors import ConfigError

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SUPPORTED_PROBES = ("xdotool", "xlib")


@dataclass
class ObsConfig:
    """obs-websocket connection settings"""
    url: str
    password: Optional[str]


@dataclass
class CaptureConfig:
    """Capture input targeted by display changes"""
    input_name: str


@dataclass
class TransitionConfig:
    """Scene transition settings applied after each capture update"""
    name: Optional[str]
    duration_ms: Optional[int]
    auto_enable_studio_mode: bool


@dataclass
class WatcherConfig:
    """Pointer polling settings"""
    poll_interval_ms: int
    probe: str
    display: Optional[str]  # X11 display name, used by the xlib probe


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str
    file: Optional[str]
    format: str


@dataclass
class Config:
    """Complete application configuration"""
    obs: ObsConfig
    capture: CaptureConfig
    transition: TransitionConfig
    watcher: WatcherConfig
    logging: LoggingConfig


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/cursor2obs/config.yml",
        "/etc/cursor2obs/config.yml",
    ]

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Every section and key is optional; missing values take defaults.

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object
        """
        obs_data = data.get("obs") or {}
        obs = ObsConfig(
            url=obs_data.get("url", "ws://127.0.0.1:4455"),
            password=obs_data.get("password"),
        )

        capture_data = data.get("capture") or {}
        capture = CaptureConfig(
            input_name=capture_data.get("input_name", "obs_active_plugin"),
        )

        transition_data = data.get("transition") or {}
        duration = transition_data.get("duration_ms")
        transition = TransitionConfig(
            name=transition_data.get("name"),
            duration_ms=int(duration) if duration is not None else None,
            auto_enable_studio_mode=bool(transition_data.get("auto_enable_studio_mode", True)),
        )

        watcher_data = data.get("watcher") or {}
        watcher = WatcherConfig(
            poll_interval_ms=int(watcher_data.get("poll_interval_ms", 400)),
            probe=str(watcher_data.get("probe", "xdotool")).lower(),
            display=watcher_data.get("display"),
        )

        logging_data = data.get("logging") or {}
        logging = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            file=logging_data.get("file"),
            format=logging_data.get("format", DEFAULT_LOG_FORMAT),
        )

        return Config(
            obs=obs,
            capture=capture,
            transition=transition,
            watcher=watcher,
            logging=logging,
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard
                locations and falls back to built-in defaults when none exists.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If an explicit config file does not exist
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                return ConfigLoader.config_parse({})

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def envOverrides_apply(config: Config, environ: Optional[Mapping[str, str]] = None) -> Config:
        """
        Apply environment variable overrides

        Args:
            config: Config to update in place
            environ: Environment mapping, defaults to os.environ

        Returns:
            The same Config object

        Raises:
            ConfigError: If a numeric variable does not parse
        """
        env = os.environ if environ is None else environ

        if env.get("OBS_WEBSOCKET_URL"):
            config.obs.url = env["OBS_WEBSOCKET_URL"]
        if env.get("OBS_WEBSOCKET_PASSWORD"):
            config.obs.password = env["OBS_WEBSOCKET_PASSWORD"]
        if env.get("OBS_WINDOW_CAPTURE_INPUT_NAME"):
            config.capture.input_name = env["OBS_WINDOW_CAPTURE_INPUT_NAME"]
        if env.get("OBS_TRANSITION_NAME"):
            config.transition.name = env["OBS_TRANSITION_NAME"]
        if env.get("OBS_TRANSITION_DURATION_MS"):
            config.transition.duration_ms = _int_parse(
                "OBS_TRANSITION_DURATION_MS", env["OBS_TRANSITION_DURATION_MS"]
            )
        if env.get("ACTIVE_WINDOW_POLL_MS"):
            config.watcher.poll_interval_ms = _int_parse(
                "ACTIVE_WINDOW_POLL_MS", env["ACTIVE_WINDOW_POLL_MS"]
            )
        if env.get("DEBUG") in ("1", "true"):
            config.logging.level = "DEBUG"

        return config

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply environment and command-line overrides

        Precedence is file < environment < command line.

        Args:
            file_path: Optional path to config file
            environ: Environment mapping, defaults to os.environ
            **overrides: Key-value pairs to override config values

        Returns:
            Validated Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                input_name="Screen Capture",
                poll_interval_ms=250
            )
        """
        config = ConfigLoader.config_load(file_path)
        ConfigLoader.envOverrides_apply(config, environ)

        if overrides.get("obs_url") is not None:
            config.obs.url = overrides["obs_url"]
        if overrides.get("obs_password") is not None:
            config.obs.password = overrides["obs_password"]
        if overrides.get("input_name") is not None:
            config.capture.input_name = overrides["input_name"]
        if overrides.get("transition_name") is not None:
            config.transition.name = overrides["transition_name"]
        if overrides.get("transition_duration_ms") is not None:
            config.transition.duration_ms = overrides["transition_duration_ms"]
        if overrides.get("poll_interval_ms") is not None:
            config.watcher.poll_interval_ms = overrides["poll_interval_ms"]
        if overrides.get("probe") is not None:
            config.watcher.probe = overrides["probe"].lower()
        if overrides.get("display") is not None:
            config.watcher.display = overrides["display"]

        ConfigLoader.config_validate(config)
        return config

    @staticmethod
    def config_validate(config: Config) -> None:
        """
        Validate a fully resolved configuration

        Args:
            config: Config to check

        Raises:
            ConfigError: If any value is out of range or a required value is missing
        """
        if not config.capture.input_name or not config.capture.input_name.strip():
            raise ConfigError(
                "capture.input_name is required "
                "(must match an existing display capture input in OBS)"
            )
        if config.watcher.poll_interval_ms <= 0:
            raise ConfigError("watcher.poll_interval_ms must be > 0")
        if config.watcher.probe not in SUPPORTED_PROBES:
            raise ConfigError(
                f"Unsupported probe '{config.watcher.probe}'. "
                f"Supported: {', '.join(SUPPORTED_PROBES)}."
            )
        if config.transition.duration_ms is not None and config.transition.duration_ms < 0:
            raise ConfigError("transition.duration_ms must be >= 0")


def _int_parse(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
