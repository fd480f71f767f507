# jwverse/services/verses/__init__.py
"""
Verse lookup services for jwverse.

This package provides:
- resolve: Parse a citation into a ReferenceCode (BBCCCVVV)
- build_url: Finder URL for a code and language
- VerseService: Fetch a verse page and extract its text
- VerseInserter: The insert-verse and insert-link actions
- BookTable: Book numbers, names and aliases
- SettingsStore: JSON-backed user preferences
- Verse extractors: One per known provider markup
"""

from .errors import (
    VerseError,
    ReferenceNotFoundError,
    VerseNetworkError,
)
from .books import (
    BookEntry,
    BookTable,
    UNKNOWN_BOOK,
    load_default_books,
    reload_default_books,
)
from .reference_resolver import (
    ReferenceCode,
    resolve,
    resolve_or_raise,
    is_valid_reference,
    normalize_reference,
)
from .url_builder import build_url
from .extractors import (
    VerseExtractor,
    SpanClassExtractor,
    SoupVerseExtractor,
    clean_html_fragment,
    get_extractor,
)
from .verse_client import VerseClient
from .verse_service import (
    VerseService,
    VerseResult,
    VerseErrorKind,
    NETWORK_ERROR_MESSAGE,
    render_error,
)
from .settings import (
    VerseSettings,
    SettingsStore,
    build_book_table,
)
from .insertion import (
    VerseInserter,
    NoticeCollector,
    format_verse_block,
    format_link,
)

__all__ = [
    # Errors
    "VerseError",
    "ReferenceNotFoundError",
    "VerseNetworkError",
    # Books
    "BookEntry",
    "BookTable",
    "UNKNOWN_BOOK",
    "load_default_books",
    "reload_default_books",
    # Resolution
    "ReferenceCode",
    "resolve",
    "resolve_or_raise",
    "is_valid_reference",
    "normalize_reference",
    "build_url",
    # Extraction
    "VerseExtractor",
    "SpanClassExtractor",
    "SoupVerseExtractor",
    "clean_html_fragment",
    "get_extractor",
    # Fetching
    "VerseClient",
    "VerseService",
    "VerseResult",
    "VerseErrorKind",
    "NETWORK_ERROR_MESSAGE",
    "render_error",
    # Settings
    "VerseSettings",
    "SettingsStore",
    "build_book_table",
    # Insertion
    "VerseInserter",
    "NoticeCollector",
    "format_verse_block",
    "format_link",
]
