"""Tests for the language middleware and the /api/v1/i18n endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from lexicon_dbi.app.core.database import SessionLocal
from lexicon_dbi.app.core.i18n import I18nConfig
from lexicon_dbi.app.main import app
from lexicon_dbi.app.models.lexicon import LexiconEntry
from lexicon_dbi.tests.conftest import count_entries


# ─── Middleware ──────────────────────────────────────────────────────────────


def test_content_language_header_echoes_resolved_language(client: TestClient) -> None:
    resp = client.get("/api/v1/i18n/languages", headers={"Accept-Language": "de-AT,en;q=0.5"})
    assert resp.status_code == 200
    assert resp.headers["Content-Language"] == "de"


def test_doubled_separators_in_header_resolve(client: TestClient) -> None:
    resp = client.get("/api/v1/i18n/languages", headers={"Accept-Language": "de--AT"})
    assert resp.status_code == 200
    assert resp.headers["Content-Language"] == "de"


def test_content_language_defaults(client: TestClient) -> None:
    resp = client.get("/api/v1/i18n/languages", headers={"Accept-Language": "ja"})
    assert resp.headers["Content-Language"] == "en"


def test_no_content_language_when_nothing_available(client: TestClient) -> None:
    config = app.state.i18n
    app.state.i18n = I18nConfig.create(
        {}, default_lang="en", lexicons=config.lexicons, repair=None
    )
    try:
        resp = client.get("/api/v1/i18n/loc", params={"key": "Welcome"})
    finally:
        app.state.i18n = config

    assert resp.status_code == 200
    assert "Content-Language" not in resp.headers
    assert resp.json() == {"language": None, "key": "Welcome", "text": "Welcome"}


# ─── Endpoints ───────────────────────────────────────────────────────────────


def test_list_languages(client: TestClient) -> None:
    resp = client.get("/api/v1/i18n/languages")
    assert resp.status_code == 200
    data = resp.json()
    assert sorted(data["languages"]) == ["de", "en", "fr-ca"]
    assert data["default_lang"] == "en"
    assert data["lexicons"] == ["app", "errors"]


def test_loc_translates_with_args(client: TestClient) -> None:
    resp = client.get(
        "/api/v1/i18n/loc",
        params={"key": "Hello [_1]", "args": ["Catalyst"]},
        headers={"Accept-Language": "de"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"language": "de", "key": "Hello [_1]", "text": "Hallo Catalyst"}


def test_loc_multiple_args(client: TestClient) -> None:
    resp = client.get(
        "/api/v1/i18n/loc",
        params=[("key", "greeting"), ("args", "Anna"), ("args", "Ben")],
    )
    assert resp.json()["text"] == "Hi Anna and Ben"


def test_loc_requires_key(client: TestClient) -> None:
    resp = client.get("/api/v1/i18n/loc")
    assert resp.status_code == 422


def test_loc_miss_is_listed_as_missing(client: TestClient) -> None:
    resp = client.get(
        "/api/v1/i18n/loc",
        params={"key": "FooBar"},
        headers={"Accept-Language": "de"},
    )
    assert resp.json()["text"] == "FooBar"
    assert count_entries(lex_key="FooBar", lang="de") == 1

    resp = client.get("/api/v1/i18n/missing", params={"lang": "DE"})
    assert resp.status_code == 200
    rows = resp.json()
    assert [(r["lex"], r["lex_key"], r["lex_value"]) for r in rows] == [
        ("app", "FooBar", "? FooBar")
    ]


def test_missing_matches_stored_underscore_language(client: TestClient) -> None:
    with SessionLocal() as s:
        s.add(LexiconEntry(lex="app", lex_key="Late", lang="fr_CA", lex_value="? Late"))
        s.commit()

    for lang in ("fr_CA", "fr-ca"):
        resp = client.get("/api/v1/i18n/missing", params={"lang": lang})
        assert [(r["lex_key"], r["lang"]) for r in resp.json()] == [("Late", "fr_CA")]


def test_missing_is_empty_without_misses(client: TestClient) -> None:
    resp = client.get("/api/v1/i18n/missing")
    assert resp.status_code == 200
    assert resp.json() == []


def test_503_before_lexicons_are_loaded(client: TestClient) -> None:
    config = app.state.i18n
    app.state.i18n = None
    try:
        resp = client.get("/api/v1/i18n/languages")
    finally:
        app.state.i18n = config

    assert resp.status_code == 503
    assert "Content-Language" not in resp.headers
