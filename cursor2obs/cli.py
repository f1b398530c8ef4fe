"""
cursor2obs command-line interface.

Every flag defaults to None (or False for log-level switches) so that
configuration file and environment values survive unless a flag is given.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Optional, Sequence

from cursor2obs import __version__

__all__ = [
    "arguments_parse",
    "parser_create",
    "obsArgs_populate",
    "watcherArgs_populate",
    "logLevelArgs_populate",
    "logLevelOverride_get",
    "argsWithLogLevel_apply",
    "main",
]

LOG_LEVEL_FLAGS: tuple[str, ...] = ("critical", "error", "warning", "info", "debug")


def parser_create() -> argparse.ArgumentParser:
    """
    Create fully populated argument parser.

    Returns:
        Configured argument parser.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="cursor2obs",
        description="Retarget an OBS display capture to whichever monitor holds the pointer",
    )
    parser.add_argument("--version", action="version", version=f"cursor2obs {__version__}")
    parser.add_argument(
        "--config",
        default=None,
        help="Config file path (default: ./config.yml, ~/.config/cursor2obs, /etc/cursor2obs)",
    )
    obsArgs_populate(parser)
    watcherArgs_populate(parser)
    logLevelArgs_populate(parser)
    return parser


def obsArgs_populate(parser: argparse.ArgumentParser) -> None:
    """
    Add obs-websocket, capture input and transition flags.

    Args:
        parser: Target argument parser.
    """
    group = parser.add_argument_group("OBS")
    group.add_argument("--obs-url", dest="obs_url", default=None, help="obs-websocket URL")
    group.add_argument(
        "--obs-password", dest="obs_password", default=None, help="obs-websocket password"
    )
    group.add_argument(
        "--input-name",
        dest="input_name",
        default=None,
        help="Name of the display capture input to retarget",
    )
    group.add_argument(
        "--transition-name",
        dest="transition_name",
        default=None,
        help="Scene transition selected before each switch, e.g. Fade",
    )
    group.add_argument(
        "--transition-duration-ms",
        dest="transition_duration_ms",
        type=int,
        default=None,
        help="Scene transition duration in milliseconds",
    )


def watcherArgs_populate(parser: argparse.ArgumentParser) -> None:
    """
    Add pointer polling flags.

    Args:
        parser: Target argument parser.
    """
    group = parser.add_argument_group("pointer watcher")
    group.add_argument(
        "--poll-interval-ms",
        dest="poll_interval_ms",
        type=int,
        default=None,
        help="Pause between pointer polls in milliseconds",
    )
    group.add_argument(
        "--probe",
        choices=["xdotool", "xlib"],
        default=None,
        help="Where pointer positions come from (default: xdotool)",
    )
    group.add_argument(
        "--display", default=None, help="X11 display for the xlib probe (default: $DISPLAY)"
    )


def logLevelArgs_populate(parser: argparse.ArgumentParser) -> None:
    """
    Add log-level switches; the most restrictive one given wins.

    Args:
        parser: Target argument parser.
    """
    group = parser.add_argument_group("logging")
    for flag in reversed(LOG_LEVEL_FLAGS):
        group.add_argument(
            f"--{flag}", action="store_true", help=f"Log at {flag.upper()} level"
        )


def arguments_parse(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list, defaults to sys.argv[1:].

    Returns:
        Parsed CLI arguments.
    """
    return parser_create().parse_args(argv)


def logLevelOverride_get(args: argparse.Namespace) -> str | None:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Most restrictive selected level, or None when no switch was given.
    """
    for flag in LOG_LEVEL_FLAGS:
        if getattr(args, flag, False):
            return flag.upper()
    return None


def argsWithLogLevel_apply(args: argparse.Namespace, log_level: str | None) -> None:
    """Store a resolved log level on args as `log_level`"""
    if log_level is not None:
        args.log_level = log_level


def main() -> NoReturn:
    """Console entry point"""
    args = arguments_parse()
    argsWithLogLevel_apply(args, logLevelOverride_get(args))

    try:
        from cursor2obs.app.main import app_run

        app_run(args)
    except KeyboardInterrupt:
        print("\nShutting down...")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
