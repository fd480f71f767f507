# jwverse/services/verses/settings.py
"""
Settings store for language, formatting and book-name preferences.

Stands in for the host's key-value store: a single JSON file, created
with defaults on first use. The path can be configured via environment
variable (JWVERSE_SETTINGS_PATH).
"""

import json
import logging
import time
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, Optional

from jwverse.core import config

from .books import BookTable, load_default_books

logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000


@dataclass
class VerseSettings:
    """
    User preferences consumed by the insertion pipeline.

    Attributes:
        language: Provider language token (e.g., "E" for English)
        auto_update: Whether localized book names should be refreshed
        update_interval: Days between localized book-name refreshes
        insert_link_only: Insert a link instead of verse text by default
        link_prefix / link_suffix: Wrapped around inserted links
        verse_prefix / verse_suffix: Wrapped around inserted verse text
        custom_book_names: {book_number: display name}
        standard_abbreviations: {book_number: abbreviation}
        alternate_abbreviations: {book_number: abbreviation}
        localized_book_names: {language: {name: book_number}}
        last_language_update: {language: epoch milliseconds}
    """
    language: str = field(default_factory=lambda: config.DEFAULT_LANGUAGE)
    auto_update: bool = True
    update_interval: int = 14
    insert_link_only: bool = False
    link_prefix: str = ""
    link_suffix: str = ""
    verse_prefix: str = ""
    verse_suffix: str = ""
    custom_book_names: Dict[str, str] = field(default_factory=dict)
    standard_abbreviations: Dict[str, str] = field(default_factory=dict)
    alternate_abbreviations: Dict[str, str] = field(default_factory=dict)
    localized_book_names: Dict[str, Dict[str, int]] = field(default_factory=dict)
    last_language_update: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "VerseSettings":
        """Build settings from stored values; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)

    def for_language(self, language: Optional[str] = None) -> "VerseSettings":
        """Copy of these settings with language swapped in (self if not given)."""
        if not language or language == self.language:
            return self
        return replace(self, language=language)


def build_book_table(settings: VerseSettings, base: Optional[BookTable] = None) -> BookTable:
    """
    Default book table overlaid with the settings' book-name preferences.

    Localized names apply for settings.language only.
    """
    books = base if base is not None else load_default_books()
    books = books.with_localized(settings.localized_book_names.get(settings.language, {}))
    books = books.with_aliases(settings.standard_abbreviations)
    books = books.with_aliases(settings.alternate_abbreviations)
    return books.with_names(settings.custom_book_names)


class SettingsStore:
    """
    JSON file holding one VerseSettings record.

    Usage:
        store = SettingsStore()
        settings = store.load()
        store.update(language="S", verse_prefix="> ")
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or config.SETTINGS_PATH)
        self._ensure_file()

    def _ensure_file(self):
        """Create the settings file with defaults if it doesn't exist."""
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write(VerseSettings().to_dict())
            logger.info(f"Created settings file {self.path}")

    def _read(self) -> dict:
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: dict):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def load(self) -> VerseSettings:
        """Load settings; missing keys take their defaults."""
        return VerseSettings.from_dict(self._read())

    def save(self, settings: VerseSettings):
        self._write(settings.to_dict())

    def update(self, **kwargs) -> VerseSettings:
        """
        Update settings with provided key-value pairs.

        Raises:
            KeyError: If a key is not a known setting
        """
        known = {f.name for f in fields(VerseSettings)}
        unknown = set(kwargs) - known
        if unknown:
            raise KeyError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        data = self.load().to_dict()
        data.update(kwargs)
        settings = VerseSettings.from_dict(data)
        self.save(settings)
        return settings

    def set_localized_book_names(
        self,
        language: str,
        mapping: Dict[str, int],
        now: Optional[float] = None,
    ) -> VerseSettings:
        """
        Store localized book names for a language and stamp the update time.

        Args:
            language: Provider language token
            mapping: {book name: book_number}
            now: Current time in seconds (defaults to time.time())

        Raises:
            ValueError: If a book number is outside 1-66
        """
        # Validate against the default table before writing anything
        load_default_books().with_localized(mapping)

        settings = self.load()
        settings.localized_book_names[language] = {str(k): int(v) for k, v in mapping.items()}
        now = time.time() if now is None else now
        settings.last_language_update[language] = int(now * 1000)
        self.save(settings)
        logger.info(f"Stored {len(mapping)} localized book names for {language}")
        return settings

    def is_book_names_stale(self, language: str, now: Optional[float] = None) -> bool:
        """
        Check whether localized book names for a language need refreshing.

        Returns False when auto_update is off.
        """
        settings = self.load()
        if not settings.auto_update:
            return False

        last = settings.last_language_update.get(language)
        if last is None:
            return True

        now_ms = (time.time() if now is None else now) * 1000
        return now_ms - last > settings.update_interval * MS_PER_DAY

    def book_table(self, settings: Optional[VerseSettings] = None) -> BookTable:
        """Book table for the stored (or given) settings."""
        return build_book_table(settings or self.load())
