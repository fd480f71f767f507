# jwverse/services/verses/insertion.py
"""
Insertion pipeline: the two editor actions.

- insert_verse: resolve, fetch, and format a verse block
- insert_link:  resolve and format a markdown link to the finder page

The host supplies the reference text, writes the returned string into
its document, and shows the notices passed to notify().
"""

import logging
from typing import Callable, List, Optional

from .reference_resolver import ReferenceCode
from .settings import VerseSettings
from .verse_service import VerseResult, VerseService

logger = logging.getLogger(__name__)

Notify = Callable[[str], None]


def format_verse_block(result: VerseResult, prefix: str = "", suffix: str = "") -> str:
    """Verse text wrapped in prefix/suffix, followed by the citation line."""
    return f"{prefix}{result.text}{suffix}\n\n— {result.reference}"


def format_link(reference_text: str, url: str, prefix: str = "", suffix: str = "") -> str:
    """Markdown link around the reference text as the user typed it."""
    return f"{prefix}[{reference_text}]({url}){suffix}"


def _log_notice(message: str):
    logger.info(message)


class VerseInserter:
    """
    Runs one insertion request end to end.

    Usage:
        inserter = VerseInserter(service, settings, notify=show_notice)
        text = inserter.insert("John 3:16")
        if text is not None:
            editor.replace_selection(text)
    """

    def __init__(
        self,
        service: VerseService,
        settings: VerseSettings,
        notify: Optional[Notify] = None,
    ):
        self.service = service
        self.settings = settings
        self.notify = notify or _log_notice

    def _resolve(self, reference_text: str) -> Optional[ReferenceCode]:
        reference_text = (reference_text or "").strip()
        if not reference_text:
            self.notify("Please enter a Bible reference")
            return None

        code = self.service.resolve(reference_text)
        if code is None:
            self.notify(f"Could not parse reference: {reference_text}")
        return code

    def insert_verse(self, reference_text: str) -> Optional[str]:
        """
        Build the verse block for a reference.

        Returns:
            Text to insert, or None if the reference was not recognized
        """
        code = self._resolve(reference_text)
        if code is None:
            return None

        reference_text = reference_text.strip()
        self.notify(f"Fetching verse: {reference_text}...")
        result = self.service.fetch_verse(code)

        block = format_verse_block(
            result, self.settings.verse_prefix, self.settings.verse_suffix
        )
        self.notify(f"Inserted verse: {result.reference}")
        return block

    def insert_link(self, reference_text: str) -> Optional[str]:
        """
        Build a link to the finder page for a reference.

        Returns:
            Text to insert, or None if the reference was not recognized
        """
        code = self._resolve(reference_text)
        if code is None:
            return None

        reference_text = reference_text.strip()
        url = self.service.build_url(code)
        link = format_link(
            reference_text, url, self.settings.link_prefix, self.settings.link_suffix
        )
        self.notify(f"Inserted link for: {reference_text}")
        return link

    def insert(self, reference_text: str, link_only: Optional[bool] = None) -> Optional[str]:
        """Insert a verse or a link; link_only=None follows settings.insert_link_only."""
        if link_only is None:
            link_only = self.settings.insert_link_only
        if link_only:
            return self.insert_link(reference_text)
        return self.insert_verse(reference_text)


class NoticeCollector:
    """notify() target that records notices, for hosts that show them later."""

    def __init__(self):
        self.notices: List[str] = []

    def __call__(self, message: str):
        logger.info(message)
        self.notices.append(message)
