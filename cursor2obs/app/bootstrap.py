"""Bootstrap helpers for config, logging, and component wiring."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Mapping, Optional

from cursor2obs.common.app_logging import logging_setup
from cursor2obs.common.config import Config, ConfigLoader
from cursor2obs.common.errors import ConfigError
from cursor2obs.common.settings import settings
from cursor2obs.obs.transition import TransitionOptions

logger = logging.getLogger(__name__)


def configWithSettings_load(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> Config:
    """
    Load configuration and initialize settings singleton.

    Exits the process when the configuration is unusable; nothing else has
    started at this point.

    Args:
        args: Parsed CLI args.
        environ: Environment mapping, defaults to os.environ.

    Returns:
        Loaded config.
    """
    config_path: Path | None = Path(args.config) if getattr(args, "config", None) else None
    try:
        config: Config = ConfigLoader.configWithOverrides_load(
            file_path=config_path,
            environ=environ,
            obs_url=getattr(args, "obs_url", None),
            obs_password=getattr(args, "obs_password", None),
            input_name=getattr(args, "input_name", None),
            transition_name=getattr(args, "transition_name", None),
            transition_duration_ms=getattr(args, "transition_duration_ms", None),
            poll_interval_ms=getattr(args, "poll_interval_ms", None),
            probe=getattr(args, "probe", None),
            display=getattr(args, "display", None),
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Create a config.yml file or specify path with --config", file=sys.stderr)
        sys.exit(1)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)
    settings.initialize(config)
    return config


def loggingWithConfig_setup(args: argparse.Namespace, config: Config) -> None:
    """
    Setup logging from config and CLI override.

    Args:
        args: Parsed CLI args.
        config: Loaded config.
    """
    log_level: str = getattr(args, "log_level", None) or config.logging.level
    logging_setup(log_level, config.logging.format, config.logging.file)


def transitionOptions_resolve(config: Config) -> TransitionOptions:
    """
    Build transition options from config.

    Args:
        config: Loaded config.

    Returns:
        Transition options for every update.
    """
    return TransitionOptions(
        transition_name=config.transition.name,
        transition_duration_ms=config.transition.duration_ms,
        auto_enable_studio_mode=config.transition.auto_enable_studio_mode,
    )
