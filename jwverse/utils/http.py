# jwverse/utils/http.py
"""
HTTP GET for provider pages.

Single attempt, no retries: the caller decides what a failure means.

Usage:
    from jwverse.utils.http import get_page

    html = get_page(
        url="https://www.jw.org/finder?wtlocale=E&bible=43003016",
        headers={"Accept": "text/html"},
    )
"""

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class HttpFetchError(RuntimeError):
    """Raised when a GET fails at the transport or HTTP level."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def get_page(
    url: str,
    headers: dict,
    timeout: Optional[float] = None,
) -> str:
    """
    GET a page and return its decoded body.

    Behavior:
    - 2xx: body returned as text
    - 4xx / 5xx: HttpFetchError with the status
    - Connection errors and timeouts: HttpFetchError, no retry

    Args:
        url: Page URL
        headers: HTTP headers
        timeout: Request timeout in seconds (None waits indefinitely)

    Returns:
        Response body as text

    Raises:
        HttpFetchError: On any failure
    """
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.Timeout:
        raise HttpFetchError(f"Request to {url} timed out after {timeout}s")
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise HttpFetchError(f"HTTP {status} from {url}", status=status)
    except requests.RequestException as e:
        raise HttpFetchError(f"Request to {url} failed: {e}")

    logger.debug(f"GET {url} -> {response.status_code} ({len(response.text)} chars)")
    return response.text
