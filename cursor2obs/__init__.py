"""
cursor2obs: follow the pointer across displays in OBS Studio
Retargets a display capture input to whichever monitor holds the cursor
"""

from importlib.metadata import PackageNotFoundError, version


def _version_get() -> str:
    """Installed distribution version, or a dev marker for an uninstalled tree"""
    try:
        return version("cursor2obs")
    except PackageNotFoundError:
        return "0.0.0.dev0"


__version__ = _version_get()
__author__ = "cursor2obs contributors"
