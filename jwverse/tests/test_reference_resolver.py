# jwverse/tests/test_reference_resolver.py
"""
Tests for reference_resolver.py - citation text to BBCCCVVV codes.
"""

import os
import sys

# Add repository root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest

from jwverse.services.verses import (
    BookEntry,
    BookTable,
    ReferenceCode,
    ReferenceNotFoundError,
    is_valid_reference,
    normalize_reference,
    resolve,
    resolve_or_raise,
)


def test_single_verse_codes():
    """Single references pad book/chapter/verse to 2/3/3 digits."""
    print("\n=== Testing single verse codes ===")

    cases = {
        "John 3:16": "43003016",
        "Genesis 1:1": "01001001",
        "Psalm 119:105": "19119105",
        "Revelation 22:21": "66022021",
        # Canonical numbering: 1 Peter is 60, 2 Peter 61, 1 John 62
        "1 Peter 5:7": "60005007",
        "Matt 5:3": "40005003",
    }
    for text, expected in cases.items():
        code = resolve(text)
        assert code is not None, f"{text} should resolve"
        assert str(code) == expected, f"{text}: expected {expected}, got {code}"
        print(f"✓ {text} -> {expected}")


def test_range_codes_share_book_and_chapter():
    """Ranges produce two codes joined by '-' with the same book and chapter."""
    assert resolve("1 Peter 5:7-9").code == "60005007-60005009"
    assert resolve("Genesis 1:1-3").code == "01001001-01001003"
    # Comma form is read as a range too
    assert resolve("Gen 1:1,3").code == "01001001-01001003"

    code = resolve("Matt 5:3-12")
    assert code.is_range
    assert code.start_code[:5] == code.end_code[:5]
    assert code.end_code == "40005012"


def test_longest_alias_wins():
    """'1 john' must pick 1 John (62), not John (43)."""
    assert resolve("1 john 4:8").book == 62
    assert resolve("1 John 4:8").code == "62004008"
    assert resolve("1john 4:8").book == 62
    assert resolve("john 4:8").book == 43
    assert resolve("Song of Songs 2:1").book == 22


def test_longest_alias_with_custom_table():
    """Precedence comes from alias length, not table order."""
    books = BookTable([
        BookEntry(43, "John", ("john",)),
        BookEntry(62, "1 John", ("1 john",)),
    ])
    assert resolve("1 john 4:8", books).book == 62
    assert resolve("john 4:8", books).book == 43


def test_word_boundary_rejects_longer_words():
    """'johnson' is not 'john' + garbage."""
    assert resolve("johnson 1:1") is None
    assert resolve("Genesisx 1:1") is None
    # A digit right after the alias is fine
    assert resolve("John3:16").code == "43003016"


def test_unknown_book_and_missing_chapter_verse():
    assert resolve("Nonsense 1:1") is None
    assert resolve("John") is None
    assert resolve("John 3") is None
    assert resolve("John three:sixteen") is None
    assert resolve("") is None
    assert resolve("   ") is None


def test_normalization():
    """Periods are dropped, case and whitespace do not matter."""
    assert normalize_reference("  1 Pet.   5:7 ") == "1 pet 5:7"
    assert resolve("1 Pet. 5:7").code == "60005007"
    assert resolve("GEN. 1:1").code == "01001001"
    assert resolve("  john   3:16  ").code == "43003016"


def test_chapter_and_verse_not_range_checked():
    """Chapter 999 is syntactically accepted; contents are not validated."""
    assert resolve("John 999:1").code == "43999001"
    assert resolve("Jude 1:99").code == "65001099"


def test_unencodable_numbers_rejected():
    assert resolve("John 0:1") is None
    assert resolve("John 3:0") is None
    assert resolve("John 1000:1") is None
    assert resolve("John 3:1-1000") is None


def test_trailing_text_ignored():
    assert resolve("John 3:16 (NWT)").code == "43003016"


def test_resolve_or_raise():
    assert resolve_or_raise("John 3:16").code == "43003016"

    with pytest.raises(ReferenceNotFoundError) as exc:
        resolve_or_raise("Nonsense 1:1")
    assert exc.value.reference == "Nonsense 1:1"
    assert "Could not parse reference" in str(exc.value)
    # Also a ValueError for callers that only know that
    assert isinstance(exc.value, ValueError)


def test_is_valid_reference():
    assert is_valid_reference("Rom 8:28")
    assert not is_valid_reference("Romance 8:28")


def test_reference_code_parse_and_display():
    """Codes decode back into parts and a display string."""
    code = ReferenceCode.parse("60005007")
    assert (code.book, code.chapter, code.verse, code.end_verse) == (60, 5, 7, None)
    assert code.display() == "1 Peter 5:7"

    code = ReferenceCode.parse("43003016-43003018")
    assert code.end_verse == 18
    assert code.display() == "John 3:16-18"
    assert str(code) == "43003016-43003018"

    same = ReferenceCode(43, 3, 16)
    assert ReferenceCode.parse(same) is same


def test_reference_code_parse_rejects_garbage():
    for bad in ("4300316", "abc", "43003016-", "43003016-xyz", ""):
        with pytest.raises(ValueError):
            ReferenceCode.parse(bad)


def main():
    """Run all tests."""
    print("=" * 60)
    print("Reference Resolver Test Suite")
    print("=" * 60)

    test_single_verse_codes()
    test_range_codes_share_book_and_chapter()
    test_longest_alias_wins()
    test_longest_alias_with_custom_table()
    test_word_boundary_rejects_longer_words()
    test_unknown_book_and_missing_chapter_verse()
    test_normalization()
    test_chapter_and_verse_not_range_checked()
    test_unencodable_numbers_rejected()
    test_trailing_text_ignored()
    test_resolve_or_raise()
    test_is_valid_reference()
    test_reference_code_parse_and_display()
    test_reference_code_parse_rejects_garbage()

    print("\n" + "=" * 60)
    print("ALL TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()
