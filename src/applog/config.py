"""Configuration management for applog."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .debugger import Debugger, standard_debugger
from .levels import Level
from .log import get_logger
from .logger import AppLogger, standard_logger
from .paths import get_journal_path

_log = get_logger("config")


def get_config_path() -> Path:
    """Get the path to the applog config file."""
    xdg_config = Path.home() / ".config"
    return xdg_config / "applog" / "config.toml"


def get_default_config() -> str:
    """Return the default config file contents."""
    return """\
# applog configuration

[display]
# Minimum level shown on the terminal: debug, user, warn, fail, silent
level = "user"

[journal]
# Where every entry is recorded, regardless of display level.
# "" discards, "stdout"/"stderr" are the standard streams,
# "default" is ~/.local/state/applog/logs/journal.log, anything else is a file path.
path = ""

[debug]
enabled = false
"""


@dataclass
class DisplayConfig:
    """Configuration for the display."""

    level: Level = Level.USER


@dataclass
class JournalConfig:
    """Configuration for the journal."""

    path: str = ""  # "" discards

    def target(self) -> str:
        """The sink target for this journal, with "default" expanded."""
        if self.path == "default":
            return str(get_journal_path())
        return self.path


@dataclass
class DebugConfig:
    enabled: bool = False


@dataclass
class Config:
    """applog configuration."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    journal: JournalConfig = field(default_factory=JournalConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file, or return defaults."""
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # Log warning but return defaults
        _log.warning("could not load config from %s: %s", config_path, e)
        return Config()

    return _parse_config(data)


def _parse_config(data: dict[str, Any]) -> Config:
    """Parse config dict into Config object."""
    display_data = data.get("display", {})
    display = DisplayConfig(
        level=Level.from_name(display_data.get("level", "user")),
    )

    journal_data = data.get("journal", {})
    journal = JournalConfig(
        path=journal_data.get("path", ""),
    )

    debug_data = data.get("debug", {})
    debug = DebugConfig(
        enabled=bool(debug_data.get("enabled", False)),
    )

    return Config(display=display, journal=journal, debug=debug)


def configure(
    config: Config,
    logger: AppLogger | None = None,
    debugger: Debugger | None = None,
) -> None:
    """Apply a config to a logger and debugger (the process-wide ones by default).

    Raises:
        OSError: the journal file could not be opened
    """
    logger = logger or standard_logger()
    debugger = debugger or standard_debugger()

    logger.set_level(config.display.level)
    logger.set_journal(config.journal.target())
    if config.debug.enabled:
        debugger.enable()
    else:
        debugger.disable()


def ensure_config_exists() -> Path:
    """Ensure the config file exists, creating with defaults if needed."""
    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(get_default_config())

    return config_path
