from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    ColumnElement,
    DateTime,
    Index,
    String,
    Text,
    Uuid,
    func,
    literal_column,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from lexicon_dbi.app.core.database import Base

# Same SQL as the expression index below, so the planner can use it
NORMALIZED_LANG_SQL = "replace(lower(lang), '_', '-')"


class LexiconEntry(Base):
    """One translated string: (lexicon, key, language) -> value.

    Uniqueness of (lex, lex_key, lang) is expected but not enforced; two
    requests that miss the same key at the same time may both insert a row.
    ``lang`` may be stored as ``fr_CA`` or ``fr-ca``; reads compare it through
    ``normalized_lang()``.
    """

    __tablename__ = "lexicon"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    lex: Mapped[str] = mapped_column(String(255), nullable=False)
    lex_key: Mapped[str] = mapped_column(Text, nullable=False)
    lang: Mapped[str] = mapped_column(String(15), nullable=False)
    lex_value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_lexicon_norm_lang_lex", text(NORMALIZED_LANG_SQL), "lex"),
        Index("ix_lexicon_lex_key_lang", "lex", "lex_key", "lang"),
    )


def normalized_lang() -> ColumnElement[str]:
    """``lang`` lower-cased with ``_`` turned into ``-``, evaluated in SQL."""
    return func.replace(
        func.lower(LexiconEntry.lang), literal_column("'_'"), literal_column("'-'")
    )
