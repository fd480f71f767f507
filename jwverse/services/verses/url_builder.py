# jwverse/services/verses/url_builder.py
"""
Finder URL construction.

The provider expects book numbers 1-9 without the leading zero
("1001001" for Genesis 1:1) while book 10 and up use the full code.
Only the URL form is changed; ReferenceCode keeps the padded code.
"""

from typing import Union

from jwverse.core import config

from .reference_resolver import ReferenceCode


def url_code(code: str) -> str:
    """Drop the leading zero of a single 8-digit code for books 1-9."""
    book = int(code[:2])
    if book <= 9:
        return f"{book}{code[2:]}"
    return code


def build_url(
    code: Union[ReferenceCode, str],
    language: str,
    base_url: str = None,
) -> str:
    """
    Build the finder URL for a reference code.

    Args:
        code: ReferenceCode or code string ("43003016", "01001001-01001003")
        language: Provider language token, used verbatim (e.g., "E")
        base_url: Provider root (defaults to JWVERSE_PROVIDER_URL)

    Returns:
        URL like https://www.jw.org/finder?wtlocale=E&bible=43003016
    """
    base_url = (base_url or config.PROVIDER_URL).rstrip("/")
    parts = str(code).split("-")
    bible = "-".join(url_code(part) for part in parts)
    return f"{base_url}/finder?wtlocale={language}&bible={bible}"
