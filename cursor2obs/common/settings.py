"""Process-wide settings: cursor2obs constants plus the resolved Config

`settings` is created on import; the bootstrap code calls
`settings.initialize(config)` once the file, environment and CLI layers have
been merged. Constants are class attributes and usable before that.
"""

from typing import Optional

from cursor2obs.common.config import Config


class Settings:
    """Singleton holding cursor2obs constants and the loaded configuration"""

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        # __init__ runs on every Settings() call; keep the first state
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._config: Optional[Config] = None

    def initialize(self, config: Config) -> None:
        """
        Install the resolved configuration

        Args:
            config: Validated configuration
        """
        self._config = config

    # =========================================================================
    # Display Detection Constants
    # =========================================================================

    DISPLAY_LIST_COMMAND: tuple[str, ...] = ("xrandr", "--query", "--current")
    """Command whose stdout lists connected outputs and their geometry"""

    CURSOR_QUERY_COMMAND: tuple[str, ...] = ("xdotool", "getmouselocation", "--shell")
    """Command printing the pointer position as KEY=VALUE lines"""

    FALLBACK_DISPLAY_NAME: str = "Display-0"
    FALLBACK_DISPLAY_WIDTH: int = 1920
    FALLBACK_DISPLAY_HEIGHT: int = 1080
    """Single full-HD display at the origin, used when listing fails"""

    # =========================================================================
    # Watcher Constants
    # =========================================================================

    DEFAULT_POLL_INTERVAL_MS: int = 400
    """Delay between the end of one tick and the start of the next"""

    POLL_INTERVAL_DIVISOR: float = 1000.0
    """Convert poll_interval_ms to seconds for loop.call_later()"""

    # =========================================================================
    # Capture Input Constants
    # =========================================================================

    DISPLAY_FIELD_KEYWORDS: tuple[str, ...] = ("display", "screen", "monitor")
    """Substrings identifying the display-selection key in input settings

    Matched against the lowercase key; the first key in settings order wins.
    """

    # =========================================================================
    # Runtime Configuration Access
    # =========================================================================

    @property
    def config(self) -> Config:
        """
        Resolved configuration

        Returns:
            Loaded configuration

        Raises:
            RuntimeError: If initialize() was never called
        """
        if self._config is None:
            raise RuntimeError("Settings not initialized: no configuration has been loaded yet")
        return self._config


settings = Settings()
