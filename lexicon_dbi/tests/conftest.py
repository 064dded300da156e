"""Shared test fixtures.

Tests run against an in-memory SQLite database. Tables are created before
and dropped after every test, so tests never see each other's rows.
"""

from __future__ import annotations

import os

# Settings are read at import time, so the environment must be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LEXICON_LANGUAGES"] = '["en", "de", "fr_CA"]'
os.environ["LEXICON_NAMES"] = '["app", "errors"]'
os.environ["LEXICON_DEFAULT_LANG"] = "en"
os.environ["LEXICON_FAIL_WITH"] = "true"
os.environ["LEXICON_REPAIR_ASYNC"] = "false"

from typing import Any, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from lexicon_dbi.app.core.config import settings  # noqa: E402
from lexicon_dbi.app.core.database import Base, SessionLocal, engine  # noqa: E402
from lexicon_dbi.app.core.i18n import I18nConfig, init_i18n  # noqa: E402
from lexicon_dbi.app.main import app  # noqa: E402
from lexicon_dbi.app.models.lexicon import LexiconEntry  # noqa: E402


# ─── Lexicon seed data ───────────────────────────────────────────────────────

LEXICON_ROWS: list[tuple[str, str, str, str]] = [
    # (lang, lex, key, value)
    ("en", "app", "Hello [_1]", "Hello [_1]"),
    ("en", "app", "Welcome", "Welcome!"),
    ("en", "app", "greeting", "Hi [_1] and [_2]"),
    ("en", "errors", "not_found", "Not found"),
    ("de", "app", "Hello [_1]", "Hallo [_1]"),
    ("de", "app", "Welcome", "Willkommen!"),
    ("de", "errors", "Welcome", "Fehler-Willkommen"),
    ("de", "errors", "not_found", "Nicht gefunden"),
    ("fr_CA", "app", "Welcome", "Bienvenue!"),
]


def count_entries(**filters: Any) -> int:
    """Count lexicon rows matching *filters*, through a fresh session."""
    with SessionLocal() as s:
        return s.query(LexiconEntry).filter_by(**filters).count()


# ─── DB session ──────────────────────────────────────────────────────────────


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    """Yield a session on freshly created tables; drop them afterwards."""
    Base.metadata.create_all(engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture()
def seed_lexicon(db: Session) -> list[LexiconEntry]:
    entries = [
        LexiconEntry(lang=lang, lex=lex, lex_key=key, lex_value=value)
        for lang, lex, key, value in LEXICON_ROWS
    ]
    db.add_all(entries)
    db.commit()
    return entries


@pytest.fixture()
def i18n(seed_lexicon: list[LexiconEntry]) -> I18nConfig:
    """Config loaded from the seeded table with inline miss repair."""
    return init_i18n(settings, engine=engine, session_factory=SessionLocal)


@pytest.fixture()
def client(seed_lexicon: list[LexiconEntry]) -> Generator[TestClient, None, None]:
    """FastAPI TestClient; entering it runs the startup lexicon load."""
    with TestClient(app) as c:
        yield c
