# jwverse/services/verses/errors.py
"""Exceptions raised by the verse lookup services."""


class VerseError(Exception):
    """Base exception for verse lookup errors."""
    pass


class ReferenceNotFoundError(VerseError, ValueError):
    """Raised when reference text does not resolve to a book and chapter:verse."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Could not parse reference: {reference}")


class VerseNetworkError(VerseError):
    """Raised when the provider page cannot be fetched."""
    pass
