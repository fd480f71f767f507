# jwverse/services/verses/verse_service.py
"""
Verse lookup service: reference code -> display reference + verse text.

Network and extraction failures are soft: the result still carries the
display reference and a placeholder message, so the caller can show
what was attempted. Only unresolvable reference text is a hard failure,
and that is handled before a code reaches fetch_verse().
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Union

from jwverse.core import config

from .books import BookTable, load_default_books
from .errors import VerseNetworkError
from .extractors import VerseExtractor, get_extractor
from .reference_resolver import ReferenceCode, resolve, resolve_or_raise
from .url_builder import build_url
from .verse_client import VerseClient

logger = logging.getLogger(__name__)


class VerseErrorKind(str, Enum):
    """Why a lookup produced a placeholder instead of verse text."""
    NETWORK = "network"
    EXTRACTION = "extraction"


NETWORK_ERROR_MESSAGE = "Error fetching verse. Please check your connection and try again."

# Both kinds render the same text by default
DEFAULT_ERROR_MESSAGES = {
    VerseErrorKind.NETWORK: NETWORK_ERROR_MESSAGE,
    VerseErrorKind.EXTRACTION: NETWORK_ERROR_MESSAGE,
}


def render_error(kind: VerseErrorKind, messages: Optional[Mapping] = None) -> str:
    """
    Render an error kind as user-facing text.

    Args:
        kind: The error kind
        messages: Optional {kind: text} overrides for localization
    """
    if messages and kind in messages:
        return messages[kind]
    return DEFAULT_ERROR_MESSAGES[kind]


@dataclass
class VerseResult:
    """
    Outcome of one verse lookup.

    Attributes:
        reference: Display reference (e.g., "John 3:16-18")
        text: Verse text, or the placeholder message on soft failure
        code: Reference code string that was looked up
        url: Finder URL that was requested
        error: Error kind on soft failure, None on success
    """
    reference: str
    text: str
    code: str
    url: str
    error: Optional[VerseErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "reference": self.reference,
            "text": self.text,
            "code": self.code,
            "url": self.url,
            "error": self.error.value if self.error else None,
        }


class VerseService:
    """
    Resolves references and fetches verse text.

    Configuration is passed in explicitly; the service holds no ambient
    state beyond what it was constructed with.

    Usage:
        service = VerseService(language="E")

        code = service.resolve("John 3:16")
        result = service.fetch_verse(code)
        print(result.reference, result.text)
    """

    def __init__(
        self,
        language: str = None,
        books: Optional[BookTable] = None,
        client: Optional[VerseClient] = None,
        extractor: Optional[VerseExtractor] = None,
        base_url: str = None,
        messages: Optional[Mapping] = None,
    ):
        self.language = language or config.DEFAULT_LANGUAGE
        self.books = books if books is not None else load_default_books()
        self.client = client or VerseClient()
        self.extractor = extractor or get_extractor(config.EXTRACTOR)
        self.base_url = base_url or config.PROVIDER_URL
        self.messages = messages

    def resolve(self, text: str) -> Optional[ReferenceCode]:
        """Resolve reference text with this service's book table."""
        return resolve(text, self.books)

    def build_url(self, code: Union[ReferenceCode, str]) -> str:
        """Finder URL for a code in this service's language."""
        return build_url(code, self.language, self.base_url)

    def fetch_verse(self, code: Union[ReferenceCode, str]) -> VerseResult:
        """
        Fetch and extract the verse(s) for a reference code.

        Args:
            code: ReferenceCode or code string

        Returns:
            VerseResult; on network or extraction failure the text is a
            placeholder and error is set

        Raises:
            ValueError: If code is not a valid reference code string
        """
        ref = ReferenceCode.parse(code)
        reference = ref.display(self.books)
        url = self.build_url(ref)

        logger.info(f"Fetching verse: {reference} with code {ref}")

        try:
            html = self.client.fetch_html(url)
        except VerseNetworkError as e:
            logger.warning(f"Error accessing {url}: {e}")
            return self._soft_failure(reference, ref, url, VerseErrorKind.NETWORK)

        text = self.extractor.extract(html)
        if not text:
            logger.info(f"No verse content found for {reference} in {len(html)} chars of HTML")
            return self._soft_failure(reference, ref, url, VerseErrorKind.EXTRACTION)

        return VerseResult(reference=reference, text=text, code=ref.code, url=url)

    def lookup(self, text: str) -> VerseResult:
        """
        Resolve reference text and fetch it.

        Raises:
            ReferenceNotFoundError: If the text does not resolve; no fetch
                is attempted in that case
        """
        return self.fetch_verse(resolve_or_raise(text, self.books))

    def _soft_failure(
        self,
        reference: str,
        ref: ReferenceCode,
        url: str,
        kind: VerseErrorKind,
    ) -> VerseResult:
        return VerseResult(
            reference=reference,
            text=render_error(kind, self.messages),
            code=ref.code,
            url=url,
            error=kind,
        )
