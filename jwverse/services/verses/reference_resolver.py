# jwverse/services/verses/reference_resolver.py
"""
Scripture reference resolver.

Converts free-text citations into jw.org finder codes:
- "John 3:16"     -> 43003016
- "1 Pet. 5:7-9"  -> 60005007-60005009
- "Gen 1:1,3"     -> 01001001-01001003

Codes are BBCCCVVV: 2-digit book, 3-digit chapter, 3-digit verse. A range
is two codes that share book and chapter, joined with "-". Chapter and
verse numbers are not checked against the real contents of the book.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from .books import BookTable, load_default_books
from .errors import ReferenceNotFoundError

logger = logging.getLogger(__name__)

# Matches "3:16", "3:16-18", "3:16,17" at the start of the remaining text
CHAPTER_VERSE_PATTERN = re.compile(r'^(\d+):(\d+)(?:[-,](\d+))?')

CODE_PATTERN = re.compile(r'^(\d{2})(\d{3})(\d{3})$')

MAX_CHAPTER = 999
MAX_VERSE = 999


@dataclass(frozen=True)
class ReferenceCode:
    """
    A resolved reference in finder-code form.

    Attributes:
        book: Book number (1-66)
        chapter: Chapter number
        verse: First verse
        end_verse: Last verse of a range (None for a single verse)
    """
    book: int
    chapter: int
    verse: int
    end_verse: Optional[int] = None

    @property
    def is_range(self) -> bool:
        return self.end_verse is not None

    @property
    def start_code(self) -> str:
        return f"{self.book:02d}{self.chapter:03d}{self.verse:03d}"

    @property
    def end_code(self) -> Optional[str]:
        if self.end_verse is None:
            return None
        return f"{self.book:02d}{self.chapter:03d}{self.end_verse:03d}"

    @property
    def code(self) -> str:
        """Return the code string (e.g., "43003016" or "43003016-43003018")."""
        if self.end_verse is None:
            return self.start_code
        return f"{self.start_code}-{self.end_code}"

    def __str__(self) -> str:
        return self.code

    def display(self, books: Optional[BookTable] = None) -> str:
        """Human-readable reference: "John 3:16" or "John 3:16-18"."""
        books = books if books is not None else load_default_books()
        ref = f"{books.name_for(self.book)} {self.chapter}:{self.verse}"
        if self.end_verse is not None:
            ref = f"{ref}-{self.end_verse}"
        return ref

    @classmethod
    def parse(cls, code: Union[str, "ReferenceCode"]) -> "ReferenceCode":
        """
        Decode a code string back into its parts.

        Raises:
            ValueError: If the string is not a valid code or code pair
        """
        if isinstance(code, ReferenceCode):
            return code

        start, sep, end = str(code).strip().partition("-")
        match = CODE_PATTERN.match(start)
        if not match:
            raise ValueError(f"Invalid reference code: {code}")
        book, chapter, verse = (int(g) for g in match.groups())

        end_verse = None
        if sep:
            end_match = CODE_PATTERN.match(end)
            if not end_match:
                raise ValueError(f"Invalid reference code: {code}")
            # The end code only contributes its verse
            end_verse = int(end_match.group(3))

        return cls(book=book, chapter=chapter, verse=verse, end_verse=end_verse)


def normalize_reference(text: str) -> str:
    """Strip abbreviation periods, lowercase and tidy whitespace."""
    text = text.replace(".", "").lower().strip()
    return re.sub(r'\s+', ' ', text)


def resolve(text: str, books: Optional[BookTable] = None) -> Optional[ReferenceCode]:
    """
    Resolve a citation to a ReferenceCode.

    Args:
        text: Reference text (e.g., "John 3:16", "1 Pet. 5:7-9")
        books: Book table to use (defaults to the configured table)

    Returns:
        ReferenceCode, or None if the book or chapter:verse is not recognized
    """
    if not text:
        return None

    books = books if books is not None else load_default_books()
    normalized = normalize_reference(text)
    logger.debug(f"Parsing reference: {normalized!r}")

    match = books.match_prefix(normalized)
    if not match:
        logger.debug(f"Could not identify book name in: {normalized!r}")
        return None

    book, alias = match
    remaining = normalized[len(alias):].strip()

    cv = CHAPTER_VERSE_PATTERN.match(remaining)
    if not cv:
        logger.debug(f"Could not extract chapter and verse from: {remaining!r}")
        return None

    chapter, verse = int(cv.group(1)), int(cv.group(2))
    end_verse = int(cv.group(3)) if cv.group(3) else None

    if not (1 <= chapter <= MAX_CHAPTER and 1 <= verse <= MAX_VERSE):
        return None
    if end_verse is not None and not 1 <= end_verse <= MAX_VERSE:
        return None

    code = ReferenceCode(book=book, chapter=chapter, verse=verse, end_verse=end_verse)
    logger.debug(f"Identified book {alias!r} ({book}), code {code}")
    return code


def resolve_or_raise(text: str, books: Optional[BookTable] = None) -> ReferenceCode:
    """
    Resolve a citation, raising if it is not recognized.

    Raises:
        ReferenceNotFoundError: If the reference cannot be resolved
    """
    code = resolve(text, books)
    if code is None:
        raise ReferenceNotFoundError(text)
    return code


def is_valid_reference(text: str, books: Optional[BookTable] = None) -> bool:
    """Check if a string resolves to a reference code."""
    return resolve(text, books) is not None
