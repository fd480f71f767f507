# jwverse/tests/test_books.py
"""
Tests for books.py - the book table and its YAML data asset.
"""

import os
import sys
import tempfile
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest

from jwverse.services.verses import (
    UNKNOWN_BOOK,
    BookEntry,
    BookTable,
    load_default_books,
)


def test_default_table_complete():
    books = load_default_books()
    assert len(books) == 66
    assert books.name_for(1) == "Genesis"
    assert books.name_for(43) == "John"
    assert books.name_for(60) == "1 Peter"
    assert books.name_for(62) == "1 John"
    assert books.name_for(66) == "Revelation"


def test_unknown_book_name():
    books = load_default_books()
    assert books.name_for(0) == UNKNOWN_BOOK
    assert books.name_for(67) == "Unknown Book"


def test_numbered_aliases_have_no_space_variant():
    books = load_default_books()
    assert books.lookup("1 samuel") == 9
    assert books.lookup("1samuel") == 9
    assert books.lookup("2 Kgs.") == 12
    assert books.lookup("2kgs") == 12
    assert books.lookup("iii john") == 64


def test_display_names_are_aliases():
    books = load_default_books()
    assert books.lookup("Song of Solomon") == 22
    assert books.lookup("1 Thessalonians") == 52


def test_match_prefix_longest_first_and_boundary():
    books = load_default_books()
    assert books.match_prefix("1 john 4:8") == (62, "1 john")
    assert books.match_prefix("philemon 1:1") == (57, "philemon")
    assert books.match_prefix("phil 1:1") == (50, "phil")
    assert books.match_prefix("johnson 1:1") is None
    # End of string counts as a boundary
    assert books.match_prefix("rev") == (66, "rev")


def test_duplicate_alias_rejected():
    with pytest.raises(ValueError) as exc:
        BookTable([
            BookEntry(43, "John", ("jn",)),
            BookEntry(62, "1 John", ("jn",)),
        ])
    assert "both book 43 and book 62" in str(exc.value)


def test_book_number_out_of_range_rejected():
    with pytest.raises(ValueError):
        BookTable([BookEntry(67, "Extra", ("extra",))])
    with pytest.raises(ValueError):
        load_default_books().with_localized({"Libro": 0})


def test_overlays_return_new_tables():
    books = load_default_books()
    renamed = books.with_names({43: "Johannes"})
    assert renamed.name_for(43) == "Johannes"
    assert renamed.lookup("johannes") == 43
    assert books.name_for(43) == "John"
    assert books.lookup("johannes") is None


def test_from_yaml():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "books.yml"
        path.write_text(
            "books:\n"
            "  43: {name: Juan, aliases: [jn]}\n"
            "  62: {name: 1 Juan, aliases: [1 jn]}\n",
            encoding="utf-8",
        )
        books = BookTable.from_yaml(path)

    assert len(books) == 2
    assert books.lookup("juan") == 43
    assert books.lookup("1juan") == 62
    assert books.match_prefix("1 juan 4:8") == (62, "1 juan")


def test_from_yaml_errors():
    with pytest.raises(FileNotFoundError):
        BookTable.from_yaml(Path("/nonexistent/books.yml"))
    with pytest.raises(ValueError):
        BookTable.from_dict({"chapters": {}})
    with pytest.raises(ValueError):
        BookTable.from_dict({"books": {1: {"aliases": ["gen"]}}})
