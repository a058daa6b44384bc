"""
Environment-driven configuration.

Values come from the process environment, optionally seeded from a `.env`
file in the working directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from wordbook.constants import DEFAULT_SAVE_DELAY_MS

# Load environment
load_dotenv()

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "wordbook"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""
    data_dir: Path
    save_delay_ms: int
    log_level: str


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def get_settings() -> Settings:
    """
    Read settings from the environment.

    Environment variables:
        WORDBOOK_DATA_DIR: Directory holding words.json, words.csv and backups
        WORDBOOK_SAVE_DELAY_MS: Debounce delay before a write (milliseconds)
        WORDBOOK_LOG_LEVEL: Logging level name for scripts

    Returns:
        Settings instance
    """
    data_dir = os.getenv("WORDBOOK_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        save_delay_ms=_read_int("WORDBOOK_SAVE_DELAY_MS", DEFAULT_SAVE_DELAY_MS),
        log_level=os.getenv("WORDBOOK_LOG_LEVEL", "WARNING").upper(),
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts."""
    level_name = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
