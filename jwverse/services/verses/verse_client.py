# jwverse/services/verses/verse_client.py
"""
Client for the jw.org finder pages.

One blocking GET per lookup. No caching and no retries; verse pages are
fetched fresh every time.
"""

import logging
from typing import Optional

from jwverse.core import config
from jwverse.utils.http import HttpFetchError, get_page

from .errors import VerseNetworkError

logger = logging.getLogger(__name__)

# Some providers reject default client identifiers
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

DEFAULT_HEADERS = {
    "Accept": "text/html",
    "User-Agent": USER_AGENT,
}


class VerseClient:
    """
    Fetches finder pages as HTML.

    Usage:
        client = VerseClient()
        html = client.fetch_html("https://www.jw.org/finder?wtlocale=E&bible=43003016")
    """

    def __init__(self, timeout: Optional[float] = None, headers: Optional[dict] = None):
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.headers = dict(DEFAULT_HEADERS)
        if headers:
            self.headers.update(headers)

    def fetch_html(self, url: str) -> str:
        """
        GET a finder page.

        Args:
            url: Finder URL from build_url()

        Returns:
            HTML body

        Raises:
            VerseNetworkError: If the request fails for any reason
        """
        logger.debug(f"Fetching {url}")
        try:
            html = get_page(url, headers=self.headers, timeout=self.timeout)
        except HttpFetchError as e:
            raise VerseNetworkError(str(e))

        logger.debug(f"Received HTML response, length: {len(html)}")
        return html
