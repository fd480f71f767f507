# jwverse/services/verses/books.py
"""
Book table: book numbers, display names and recognized aliases.

The English table ships as a YAML data asset (config/books.yml). Localized
names, custom display names and extra abbreviations are layered on top
with the overlay methods, which return new tables; a BookTable is never
mutated after construction.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from jwverse.core import config

logger = logging.getLogger(__name__)

BOOK_COUNT = 66
UNKNOWN_BOOK = "Unknown Book"

# "1 john" -> "1john"
_NUMBERED_ALIAS = re.compile(r'^(\d)\s+(\S.*)$')


@dataclass(frozen=True)
class BookEntry:
    """
    One book of the canon.

    Attributes:
        number: Book number, 1-66
        name: Display name (e.g., "1 John")
        aliases: Lowercase alias strings that resolve to this book
    """
    number: int
    name: str
    aliases: Tuple[str, ...] = ()


def normalize_alias(alias: str) -> str:
    """Lowercase, drop periods and collapse whitespace."""
    key = alias.replace(".", "").lower().strip()
    return re.sub(r'\s+', ' ', key)


def _expand_alias(alias: str) -> List[str]:
    """Return the alias plus its no-space form for numbered books."""
    key = normalize_alias(alias)
    if not key:
        return []
    variants = [key]
    match = _NUMBERED_ALIAS.match(key)
    if match:
        variants.append(f"{match.group(1)}{match.group(2)}")
    return variants


def _check_number(number: int) -> int:
    number = int(number)
    if not 1 <= number <= BOOK_COUNT:
        raise ValueError(f"Book number out of range: {number}")
    return number


class BookTable:
    """
    Immutable alias table used by the reference resolver.

    Aliases are kept sorted longest first so that prefix matching prefers
    "1 john" over "john" and "song of songs" over "song".

    Usage:
        books = load_default_books()
        books.match_prefix("1 john 4:8")   # -> (62, "1 john")
        books.name_for(62)                 # -> "1 John"
    """

    def __init__(self, entries: Iterable[BookEntry]):
        self._entries: Dict[int, BookEntry] = {}
        self._aliases: Dict[str, int] = {}

        for entry in entries:
            number = _check_number(entry.number)
            self._entries[number] = entry
            for alias in entry.aliases:
                for key in _expand_alias(alias):
                    owner = self._aliases.get(key)
                    if owner is not None and owner != number:
                        raise ValueError(
                            f"Alias '{key}' maps to both book {owner} and book {number}"
                        )
                    self._aliases[key] = number

        self._ordered: List[Tuple[str, int]] = sorted(
            self._aliases.items(), key=lambda item: len(item[0]), reverse=True
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, number: int) -> bool:
        return number in self._entries

    @property
    def entries(self) -> List[BookEntry]:
        return [self._entries[n] for n in sorted(self._entries)]

    @property
    def aliases(self) -> Dict[str, int]:
        return dict(self._aliases)

    def name_for(self, number: int) -> str:
        """Display name for a book number, or "Unknown Book"."""
        entry = self._entries.get(number)
        return entry.name if entry else UNKNOWN_BOOK

    def lookup(self, alias: str) -> Optional[int]:
        """Exact alias lookup."""
        return self._aliases.get(normalize_alias(alias))

    def match_prefix(self, text: str) -> Optional[Tuple[int, str]]:
        """
        Find the longest alias that starts the normalized text.

        An alias only counts when the character after it is not a
        lowercase letter, so "johnson" does not match "john".

        Args:
            text: Normalized (lowercase, period-free) reference text

        Returns:
            (book_number, alias) or None
        """
        for alias, number in self._ordered:
            if not text.startswith(alias):
                continue
            rest = text[len(alias):len(alias) + 1]
            if rest and "a" <= rest <= "z":
                continue
            return number, alias
        return None

    # ------------------------------------------------------------------
    # Overlays
    # ------------------------------------------------------------------

    def with_names(self, names: Mapping) -> "BookTable":
        """
        Replace display names; the new names also become aliases.

        Args:
            names: {book_number: display_name}; keys may be str or int
        """
        if not names:
            return self
        overrides = {_check_number(k): v for k, v in names.items() if v}
        entries = []
        for entry in self.entries:
            name = overrides.get(entry.number)
            if name:
                entries.append(BookEntry(entry.number, name, entry.aliases + (name,)))
            else:
                entries.append(entry)
        return BookTable(entries)

    def with_aliases(self, aliases: Mapping) -> "BookTable":
        """
        Add one extra alias per book (standard or alternate abbreviation).

        Args:
            aliases: {book_number: alias}; keys may be str or int
        """
        if not aliases:
            return self
        extra = {_check_number(k): v for k, v in aliases.items() if v}
        return BookTable(
            BookEntry(e.number, e.name, e.aliases + ((extra[e.number],) if e.number in extra else ()))
            for e in self.entries
        )

    def with_localized(self, mapping: Mapping[str, int]) -> "BookTable":
        """
        Add localized aliases from a {name: book_number} mapping.

        Display names stay as they are; use with_names() to change them.
        """
        if not mapping:
            return self
        extra: Dict[int, List[str]] = {}
        for name, number in mapping.items():
            extra.setdefault(_check_number(number), []).append(name)
        return BookTable(
            BookEntry(e.number, e.name, e.aliases + tuple(extra.get(e.number, ())))
            for e in self.entries
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping) -> "BookTable":
        """
        Build a table from the parsed books.yml structure.

        Expected shape:
            {"books": {1: {"name": "Genesis", "aliases": ["gen", ...]}, ...}}
        """
        books = data.get("books")
        if not isinstance(books, Mapping):
            raise ValueError("Book table must contain a 'books' mapping")

        entries = []
        for number, body in books.items():
            name = body.get("name")
            if not name:
                raise ValueError(f"Book {number} has no name")
            aliases = tuple(str(a) for a in body.get("aliases", []))
            # The display name is always an alias
            entries.append(BookEntry(_check_number(number), str(name), (str(name),) + aliases))
        return cls(entries)

    @classmethod
    def from_yaml(cls, path: Path) -> "BookTable":
        """Load a book table from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Book table not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        table = cls.from_dict(data)
        logger.debug(f"Loaded {len(table)} books ({len(table.aliases)} aliases) from {path}")
        return table


@lru_cache(maxsize=1)
def load_default_books() -> BookTable:
    """Load the configured book table (cached)."""
    return BookTable.from_yaml(config.BOOKS_PATH)


def reload_default_books() -> BookTable:
    """Clear cache and reload the book table."""
    load_default_books.cache_clear()
    return load_default_books()
