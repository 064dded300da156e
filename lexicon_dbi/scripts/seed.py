"""Seed the lexicon table from a JSON file.

The file maps language -> lexicon -> key -> value::

    {"de": {"app": {"Hello [_1]": "Hallo [_1]"}}}

Existing (lexicon, key, language) rows are left untouched.

Usage:
    python -m lexicon_dbi.scripts.seed path/to/lexicon.json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from sqlalchemy.orm import Session

from lexicon_dbi.app.core.database import SessionLocal
from lexicon_dbi.app.core.langtags import normalize_tag
from lexicon_dbi.app.models.lexicon import LexiconEntry, normalized_lang


def seed_entries(db: Session, data: dict[str, dict[str, dict[str, str]]]) -> int:
    """Add every entry of *data* that is not stored yet; return how many were added."""
    created = 0
    # "de_DE" and "de-de" normalize to the same tag; the first one listed wins
    seen: set[tuple[str, str, str]] = set()
    for raw_lang, lexicons in data.items():
        lang = normalize_tag(raw_lang)
        for lex, entries in lexicons.items():
            for key, value in entries.items():
                if (lex, key, lang) in seen:
                    continue
                seen.add((lex, key, lang))
                exists = (
                    db.query(LexiconEntry)
                    .filter(
                        LexiconEntry.lex == lex,
                        LexiconEntry.lex_key == key,
                        normalized_lang() == lang,
                    )
                    .first()
                )
                if exists:
                    continue
                db.add(LexiconEntry(lex=lex, lex_key=key, lang=lang, lex_value=value))
                created += 1
    db.flush()
    return created


def seed(path: Path) -> None:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    db = SessionLocal()
    try:
        created = seed_entries(db, data)
        db.commit()
        print(f"Seed complete: {created} entries created.")
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python -m lexicon_dbi.scripts.seed <lexicon.json>")
        sys.exit(1)
    seed(Path(sys.argv[1]))
