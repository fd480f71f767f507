# jwverse/utils/errors.py
"""
JSON error bodies for the verse API.

Every error is {"error": <snake_case code>, "detail": <message>} plus any
extra fields the route adds (e.g. "notices" from the insert action).
"""

from typing import Optional

from flask import jsonify


def error_response(code: str, status: int = 400, detail: Optional[str] = None, **extra):
    """
    Build a (response, status) pair for a route to return.

    Args:
        code: snake_case error code clients switch on
        status: HTTP status
        detail: Message for humans; omitted from the body when empty
        **extra: Extra fields merged into the body
    """
    body = {"error": code}
    if detail:
        body["detail"] = detail
    body.update(extra)
    return jsonify(body), status


def missing_field(name: str):
    """400: a required query param or body field is absent or blank."""
    return error_response(f"{name}_required", 400, f"Missing required field: {name}")


def invalid_field(name: str, detail: str = None):
    """400: a field is present but has the wrong type or value."""
    return error_response(f"invalid_{name}", 400, detail)


def reference_not_recognized(reference: str, **extra):
    """422: the text did not resolve to a book and chapter:verse."""
    return error_response(
        "reference_not_recognized", 422, f"Could not parse reference: {reference}", **extra
    )


def server_error(code: str = "internal_error", detail: str = None):
    """500: unexpected failure inside a route."""
    return error_response(code, 500, detail)
