# core/config.py
"""
Environment-driven configuration for jwverse.

Values are read once at import time after loading .env. Per-user
preferences (language, formatting strings, book-name overrides) live in
the settings store, not here.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env
load_dotenv()

# ---- PROVIDER ----
PROVIDER_URL = os.getenv("JWVERSE_PROVIDER_URL", "https://www.jw.org")
DEFAULT_LANGUAGE = os.getenv("JWVERSE_LANGUAGE", "E")
EXTRACTOR = os.getenv("JWVERSE_EXTRACTOR", "span-class")


def _optional_float(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    return float(value)


# No timeout unless the environment asks for one
REQUEST_TIMEOUT = _optional_float(os.getenv("JWVERSE_REQUEST_TIMEOUT"))

# ---- STORAGE ----
SETTINGS_PATH = Path(os.getenv(
    "JWVERSE_SETTINGS_PATH",
    str(Path.home() / ".jwverse" / "settings.json"),
))
BOOKS_PATH = Path(os.getenv(
    "JWVERSE_BOOKS_PATH",
    os.path.join(os.path.dirname(os.path.dirname(__file__)), "config", "books.yml"),
))

# ---- LOGGING ----
LOG_LEVEL = os.getenv("JWVERSE_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging for entry points (server, CLI)."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
