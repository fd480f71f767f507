# jwverse/services/verses/extractors.py
"""
Verse extractors: pull verse text out of a provider HTML page.

Each extractor targets one known provider markup. Pick one by name with
get_extractor(); the service only depends on the VerseExtractor contract.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Applied in order, after tags are stripped
HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#039;", "'"),
)

TAG_PATTERN = re.compile(r'<[^>]*>')


def clean_html_fragment(html: str) -> str:
    """
    Reduce an HTML fragment to plain text.

    Strips all tags, decodes a fixed set of entities and trims. Text with
    no tags and no entities comes back unchanged apart from trimming.
    """
    text = TAG_PATTERN.sub("", html)
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text.strip()


class VerseExtractor(ABC):
    """
    Base class for verse extractors.

    Extractors are pure: HTML in, verse text (or None) out. No network,
    no logging above DEBUG.
    """

    name: str = ""

    @abstractmethod
    def extract(self, html: str) -> Optional[str]:
        """
        Extract verse text from a page.

        Args:
            html: Full HTML response body

        Returns:
            Clean verse text, or None if no verse element was found
        """
        pass


class SpanClassExtractor(VerseExtractor):
    """
    First <span> whose class contains "verse", via one regex.

    This assumes the provider's simplified markup: the verse text sits in
    a span with a class like "verse" or "verseText", and nested spans do
    not appear before the verse text ends. Any markup change on the
    provider side can break it; the match is non-greedy so a nested
    </span> cuts the text short.
    """

    name = "span-class"

    PATTERN = re.compile(
        r'<span[^>]*?class="[^"]*?verse[^"]*?"[^>]*?>([\s\S]*?)</span>',
        re.IGNORECASE,
    )

    def extract(self, html: str) -> Optional[str]:
        match = self.PATTERN.search(html or "")
        if match and match.group(1):
            return clean_html_fragment(match.group(1))
        return None


class SoupVerseExtractor(VerseExtractor):
    """
    First element of any tag whose class contains "verse".

    Parses the page with BeautifulSoup, so nested markup inside the verse
    element is kept and then flattened by clean_html_fragment.
    """

    name = "soup"

    def extract(self, html: str) -> Optional[str]:
        if not html:
            return None

        soup = BeautifulSoup(html, "html.parser")
        element = soup.find(
            class_=lambda classes: bool(classes) and "verse" in classes.lower()
        )
        if element is None:
            return None

        # The parser already turned &nbsp; into U+00A0
        inner = element.decode_contents().replace("\xa0", " ")
        text = clean_html_fragment(inner)
        return text or None


EXTRACTORS: Dict[str, Type[VerseExtractor]] = {
    SpanClassExtractor.name: SpanClassExtractor,
    SoupVerseExtractor.name: SoupVerseExtractor,
}


def get_extractor(name: str = None) -> VerseExtractor:
    """
    Get an extractor instance by name.

    Raises:
        ValueError: If no extractor is registered under that name
    """
    name = name or SpanClassExtractor.name
    cls = EXTRACTORS.get(name)
    if cls is None:
        raise ValueError(
            f"Unknown verse extractor: {name} (available: {', '.join(sorted(EXTRACTORS))})"
        )
    return cls()
