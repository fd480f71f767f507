"""
jwverse: scripture citation resolution and verse lookup for jw.org.

Turns citations like "John 3:16" into finder codes, builds the lookup URL,
fetches the page and extracts the verse text.
"""

__version__ = "1.0.0"
