"""Startup loading of lexicon rows into per-language handles."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import Connection, select
from sqlalchemy.exc import SQLAlchemyError

from lexicon_dbi.app.core.exceptions import LexiconLoadError
from lexicon_dbi.app.core.langtags import normalize_tag
from lexicon_dbi.app.models.lexicon import LexiconEntry, normalized_lang
from lexicon_dbi.app.services.lexicon import LanguageHandle

logger = logging.getLogger(__name__)

ALL_LEXICONS = "*"


def _fetch_pair(connection: Connection, lang: str, lex: str) -> dict[str, dict[str, str]]:
    """Return ``{lexicon: {key: value}}`` for one configured pair.

    ``lex == "*"`` selects every lexicon of *lang*. Stored language codes are
    compared after the same normalization applied to configured ones.
    """
    stmt = (
        select(LexiconEntry.lex, LexiconEntry.lex_key, LexiconEntry.lex_value)
        .where(normalized_lang() == lang)
        .order_by(LexiconEntry.created_at)
    )
    if lex != ALL_LEXICONS:
        stmt = stmt.where(LexiconEntry.lex == lex)

    try:
        rows = connection.execute(stmt).all()
    except SQLAlchemyError as exc:
        connection.rollback()
        raise LexiconLoadError(lang, lex, str(exc)) from exc

    found: dict[str, dict[str, str]] = {}
    for row_lex, key, value in rows:
        # first row wins when a key was stored twice
        found.setdefault(row_lex, {}).setdefault(key, value)
    if lex != ALL_LEXICONS:
        found.setdefault(lex, {})
    return found


def load_handles(
    connection: Connection,
    languages: Sequence[str],
    lexicons: Sequence[str],
) -> dict[str, LanguageHandle]:
    """Build one ``LanguageHandle`` per configured language.

    Lexicon priority follows *lexicons*; the names matched by ``"*"`` take its
    position, sorted. A pair that fails to load is logged and skipped, and
    the language still gets a handle with whatever did load.
    """
    handles: dict[str, LanguageHandle] = {}
    for raw_lang in languages:
        lang = normalize_tag(raw_lang)
        priority: list[str] = []
        entries: dict[str, dict[str, str]] = {}

        for lex in lexicons:
            try:
                found = _fetch_pair(connection, lang, lex)
            except LexiconLoadError as exc:
                logger.error("%s", exc)
                continue

            names = sorted(found) if lex == ALL_LEXICONS else [lex]
            for name in names:
                if name not in priority:
                    priority.append(name)
                target = entries.setdefault(name, {})
                for key, value in found[name].items():
                    target.setdefault(key, value)
            logger.debug("Lexicon %s/%s loaded", lang, lex)

        handles[lang] = LanguageHandle.build(lang, priority, entries)
    return handles
