# jwverse/routes/verses_api.py
"""
API endpoints for verse lookup and insertion.

Provides access to:
- Reference resolution to finder codes
- Finder URL construction
- Verse lookup (soft failures still return 200 with "error" set)
- Insertion text for the insert-verse / insert-link actions
"""

import logging

from flask import Blueprint, request, jsonify

from jwverse.services.verses import (
    NoticeCollector,
    ReferenceNotFoundError,
    SettingsStore,
    VerseInserter,
    VerseService,
)
from jwverse.utils.errors import (
    invalid_field,
    missing_field,
    reference_not_recognized,
    server_error,
)

logger = logging.getLogger(__name__)

verses_bp = Blueprint("verses_api", __name__, url_prefix="/api/verses")

# Lazily initialized store
_store = None


def get_store() -> SettingsStore:
    """Get or create SettingsStore instance."""
    global _store
    if _store is None:
        _store = SettingsStore()
    return _store


def set_store(store: SettingsStore):
    """Replace the settings store (used by create_app and tests)."""
    global _store
    _store = store


def get_service(language: str = None) -> VerseService:
    """Build a VerseService from the current settings, optionally for another language."""
    store = get_store()
    settings = store.load().for_language(language)
    return VerseService(language=settings.language, books=store.book_table(settings))


# =============================================================================
# Resolution Endpoints
# =============================================================================

@verses_bp.get("/resolve")
def resolve_reference():
    """
    Resolve a reference to its finder code.

    Query params:
        ref: Reference string (required) e.g., "John 3:16"
        lang: Language token (optional, defaults to settings)

    Returns:
        {"ref": "John 3:16", "code": "43003016", "reference": "John 3:16"}
    """
    ref = request.args.get("ref", "").strip()
    if not ref:
        return missing_field("ref")

    service = get_service(request.args.get("lang"))
    code = service.resolve(ref)
    if code is None:
        return reference_not_recognized(ref)

    return jsonify({
        "ref": ref,
        "code": code.code,
        "reference": code.display(service.books),
    })


@verses_bp.get("/url")
def reference_url():
    """
    Build the finder URL for a reference.

    Query params:
        ref: Reference string (required)
        lang: Language token (optional, defaults to settings)

    Returns:
        {"ref": "...", "code": "...", "url": "https://www.jw.org/finder?..."}
    """
    ref = request.args.get("ref", "").strip()
    if not ref:
        return missing_field("ref")

    service = get_service(request.args.get("lang"))
    code = service.resolve(ref)
    if code is None:
        return reference_not_recognized(ref)

    return jsonify({"ref": ref, "code": code.code, "url": service.build_url(code)})


# =============================================================================
# Lookup Endpoints
# =============================================================================

@verses_bp.get("/lookup")
def lookup_verse():
    """
    Fetch verse text for a reference.

    Query params:
        ref: Reference string (required)
        lang: Language token (optional)

    Returns:
        {"reference", "text", "code", "url", "error"}
    """
    ref = request.args.get("ref", "").strip()
    if not ref:
        return missing_field("ref")

    try:
        result = get_service(request.args.get("lang")).lookup(ref)
        return jsonify(result.to_dict())
    except ReferenceNotFoundError:
        return reference_not_recognized(ref)
    except Exception as e:
        logger.exception(f"Lookup failed for {ref}")
        return server_error("lookup_failed", str(e))


@verses_bp.post("/insert")
def insert_verse():
    """
    Produce the text to insert for a reference.

    Body:
        {"ref": "John 3:16", "link_only": false, "lang": "E"}

    Returns:
        {"text": "...", "notices": ["Fetching verse: ...", ...]}
    """
    data = request.get_json(silent=True) or {}
    ref = (data.get("ref") or "").strip()
    if not ref:
        return missing_field("ref")

    link_only = data.get("link_only")
    if link_only is not None and not isinstance(link_only, bool):
        return invalid_field("link_only", "link_only must be a boolean")

    store = get_store()
    settings = store.load().for_language(data.get("lang"))
    notices = NoticeCollector()
    inserter = VerseInserter(
        VerseService(language=settings.language, books=store.book_table(settings)),
        settings,
        notify=notices,
    )

    try:
        text = inserter.insert(ref, link_only=link_only)
    except Exception as e:
        logger.exception(f"Insert failed for {ref}")
        return server_error("insert_failed", str(e))

    if text is None:
        return reference_not_recognized(ref, notices=notices.notices)

    return jsonify({"text": text, "notices": notices.notices})
