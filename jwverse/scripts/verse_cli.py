#!/usr/bin/env python3
"""
Command-line verse lookup.

Prints the text the editor actions would insert, so it can be piped
into any document.

Usage:
    jwverse lookup "John 3:16"
    jwverse lookup "Matt 5:3-12" --link
    jwverse lookup "Juan 3:16" --lang S
    jwverse resolve "1 Pet. 5:7"
    jwverse books import S books_es.yml
    jwverse books status S
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

from jwverse.core.config import configure_logging
from jwverse.services.verses import (
    SettingsStore,
    VerseInserter,
    VerseService,
    VerseSettings,
)


def _service(store: SettingsStore, settings: VerseSettings) -> VerseService:
    return VerseService(
        language=settings.language,
        books=store.book_table(settings),
    )


def cmd_lookup(args, store: SettingsStore) -> int:
    settings = store.load().for_language(args.lang)
    inserter = VerseInserter(
        _service(store, settings),
        settings,
        notify=lambda message: print(message, file=sys.stderr),
    )
    link_only = True if args.link else None
    text = inserter.insert(args.ref, link_only=link_only)
    if text is None:
        return 1
    print(text)
    return 0


def cmd_resolve(args, store: SettingsStore) -> int:
    service = _service(store, store.load().for_language(args.lang))
    code = service.resolve(args.ref)
    if code is None:
        print(f"Could not parse reference: {args.ref}", file=sys.stderr)
        return 1
    print(f"Reference: {code.display(service.books)}")
    print(f"Code:      {code}")
    print(f"URL:       {service.build_url(code)}")
    return 0


def _load_mapping(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f) or {}


def cmd_books_import(args, store: SettingsStore) -> int:
    path = Path(args.file)
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    mapping = _load_mapping(path)
    if not isinstance(mapping, dict):
        print("Expected a mapping of book name to book number", file=sys.stderr)
        return 1

    try:
        store.set_localized_book_names(args.language, mapping)
    except ValueError as e:
        print(f"Invalid book names: {e}", file=sys.stderr)
        return 1

    print(f"Imported {len(mapping)} book names for language {args.language}")
    return 0


def cmd_books_status(args, store: SettingsStore) -> int:
    settings = store.load()
    names = settings.localized_book_names.get(args.language, {})
    stale = store.is_book_names_stale(args.language)
    print(f"Language:   {args.language}")
    print(f"Book names: {len(names)}")
    print(f"Stale:      {'yes' if stale else 'no'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jwverse",
        description="Look up Bible verses on jw.org",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jwverse lookup "John 3:16"            # Verse block
  jwverse lookup "Gen 1:1-3" --link     # Markdown link only
  jwverse resolve "1 Pet. 5:7"          # Show code and URL
        """
    )
    parser.add_argument(
        "--settings",
        metavar="PATH",
        help="Settings file (default: JWVERSE_SETTINGS_PATH)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: JWVERSE_LOG_LEVEL or INFO)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="Print the text to insert for a reference")
    lookup.add_argument("ref", help='Reference, e.g. "John 3:16"')
    lookup.add_argument("--link", action="store_true", help="Insert a link instead of verse text")
    lookup.add_argument("--lang", help="Language token (default: from settings)")
    lookup.set_defaults(func=cmd_lookup)

    resolve = sub.add_parser("resolve", help="Show the finder code and URL")
    resolve.add_argument("ref", help="Reference text")
    resolve.add_argument("--lang", help="Language token (default: from settings)")
    resolve.set_defaults(func=cmd_resolve)

    books = sub.add_parser("books", help="Manage localized book names")
    books_sub = books.add_subparsers(dest="books_command", required=True)

    books_import = books_sub.add_parser("import", help="Import {name: number} from YAML or JSON")
    books_import.add_argument("language", help="Language token, e.g. S")
    books_import.add_argument("file", help="YAML or JSON file")
    books_import.set_defaults(func=cmd_books_import)

    books_status = books_sub.add_parser("status", help="Show localized book-name status")
    books_status.add_argument("language", help="Language token")
    books_status.set_defaults(func=cmd_books_status)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    store = SettingsStore(Path(args.settings) if args.settings else None)
    return args.func(args, store)


if __name__ == "__main__":
    sys.exit(main())
