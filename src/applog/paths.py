"""Path utilities for applog."""

from pathlib import Path


def get_log_dir() -> Path:
    """Get the directory for applog journals.

    Uses XDG state directory: ~/.local/state/applog/logs/
    """
    log_dir = Path.home() / ".local" / "state" / "applog" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_journal_path(name: str = "journal") -> Path:
    """Get the path to a specific journal file.

    Args:
        name: Journal file name (e.g., "journal", "run")

    Returns:
        Path to ~/.local/state/applog/logs/{name}.log
    """
    return get_log_dir() / f"{name}.log"
