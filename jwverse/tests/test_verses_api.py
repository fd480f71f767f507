# jwverse/tests/test_verses_api.py
"""
Tests for routes/verses_api.py via the Flask test client.
"""

import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest
import requests

from jwverse.server import create_app
from jwverse.services.verses import NETWORK_ERROR_MESSAGE, SettingsStore

PAGE = '<span class="verse">Jesus wept.</span>'


@pytest.fixture
def client():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = SettingsStore(Path(tmpdir) / "settings.json")
        store.update(language="E")
        app = create_app(store)
        app.config["TESTING"] = True
        with app.test_client() as test_client:
            yield test_client


def _ok(text: str = PAGE) -> MagicMock:
    response = MagicMock()
    response.text = text
    response.status_code = 200
    return response


def test_resolve(client):
    resp = client.get("/api/verses/resolve", query_string={"ref": "1 John 4:8"})
    assert resp.status_code == 200
    assert resp.get_json() == {"ref": "1 John 4:8", "code": "62004008", "reference": "1 John 4:8"}


def test_resolve_requires_ref(client):
    resp = client.get("/api/verses/resolve")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ref_required"


def test_resolve_not_recognized(client):
    resp = client.get("/api/verses/resolve", query_string={"ref": "johnson 1:1"})
    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "reference_not_recognized"
    assert body["detail"] == "Could not parse reference: johnson 1:1"


def test_url_with_language(client):
    resp = client.get("/api/verses/url", query_string={"ref": "Gen 1:1", "lang": "S"})
    assert resp.status_code == 200
    assert resp.get_json()["url"].endswith("/finder?wtlocale=S&bible=1001001")


def test_lookup_success(client):
    with patch("jwverse.utils.http.requests.get", return_value=_ok()):
        resp = client.get("/api/verses/lookup", query_string={"ref": "John 11:35"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["text"] == "Jesus wept."
    assert body["reference"] == "John 11:35"
    assert body["error"] is None


def test_lookup_soft_failure_is_200(client):
    with patch("jwverse.utils.http.requests.get", side_effect=requests.ConnectionError()):
        resp = client.get("/api/verses/lookup", query_string={"ref": "John 11:35"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["error"] == "network"
    assert body["text"] == NETWORK_ERROR_MESSAGE


def test_lookup_not_recognized_never_fetches(client):
    with patch("jwverse.utils.http.requests.get") as get:
        resp = client.get("/api/verses/lookup", query_string={"ref": "Nonsense 1:1"})
    assert resp.status_code == 422
    get.assert_not_called()


def test_insert_verse(client):
    with patch("jwverse.utils.http.requests.get", return_value=_ok()):
        resp = client.post("/api/verses/insert", json={"ref": "John 11:35"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["text"] == "Jesus wept.\n\n— John 11:35"
    assert body["notices"] == ["Fetching verse: John 11:35...", "Inserted verse: John 11:35"]


def test_insert_link(client):
    resp = client.post("/api/verses/insert", json={"ref": "John 11:35", "link_only": True})
    assert resp.status_code == 200
    assert resp.get_json()["text"] == (
        "[John 11:35](https://www.jw.org/finder?wtlocale=E&bible=43011035)"
    )


def test_insert_validation(client):
    resp = client.post("/api/verses/insert", json={})
    assert resp.status_code == 400

    resp = client.post("/api/verses/insert", json={"ref": "John 3:16", "link_only": "yes"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_link_only"

    resp = client.post("/api/verses/insert", json={"ref": "Nonsense 1:1"})
    assert resp.status_code == 422
    assert resp.get_json()["notices"] == ["Could not parse reference: Nonsense 1:1"]


@pytest.fixture
def spanish_client():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = SettingsStore(Path(tmpdir) / "settings.json")
        store.update(language="E")
        store.set_localized_book_names("S", {"Juan": 43})
        app = create_app(store)
        app.config["TESTING"] = True
        with app.test_client() as test_client:
            yield test_client


def test_lang_param_uses_that_languages_book_names(spanish_client):
    resp = spanish_client.get("/api/verses/url", query_string={"ref": "Juan 3:16", "lang": "S"})
    assert resp.status_code == 200
    assert resp.get_json()["url"].endswith("/finder?wtlocale=S&bible=43003016")

    resp = spanish_client.get("/api/verses/resolve", query_string={"ref": "Juan 3:16", "lang": "S"})
    assert resp.status_code == 200
    assert resp.get_json()["code"] == "43003016"

    with patch("jwverse.utils.http.requests.get", return_value=_ok()) as get:
        resp = spanish_client.get("/api/verses/lookup", query_string={"ref": "Juan 11:35", "lang": "S"})
    assert resp.status_code == 200
    assert resp.get_json()["text"] == "Jesus wept."
    assert "wtlocale=S" in get.call_args[0][0]

    resp = spanish_client.post(
        "/api/verses/insert", json={"ref": "Juan 3:16", "link_only": True, "lang": "S"}
    )
    assert resp.status_code == 200
    assert resp.get_json()["text"] == (
        "[Juan 3:16](https://www.jw.org/finder?wtlocale=S&bible=43003016)"
    )


def test_without_lang_param_saved_language_applies(spanish_client):
    resp = spanish_client.get("/api/verses/url", query_string={"ref": "Juan 3:16"})
    assert resp.status_code == 422
