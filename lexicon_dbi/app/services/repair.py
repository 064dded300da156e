"""Miss repair: persist a placeholder row for every key that has no translation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lexicon_dbi.app.core.exceptions import RepairWriteError
from lexicon_dbi.app.core.langtags import normalize_tag
from lexicon_dbi.app.models.lexicon import LexiconEntry, normalized_lang

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "? "


@dataclass(frozen=True)
class MissRecord:
    lexicon: str
    key: str
    language: str
    value: str

    @classmethod
    def for_key(cls, lexicon: str, key: str, language: str) -> MissRecord:
        return cls(lexicon=lexicon, key=key, language=language, value=PLACEHOLDER_PREFIX + key)


def record_missing_entry(db: Session, miss: MissRecord) -> bool:
    """Add a placeholder row for *miss* unless one already exists.

    Returns ``True`` when a row was added. It does NOT call db.commit() --
    the caller owns the transaction. The check and the insert are not atomic,
    so concurrent misses for the same key can both insert.
    """
    existing = (
        db.query(LexiconEntry)
        .filter(
            LexiconEntry.lex == miss.lexicon,
            LexiconEntry.lex_key == miss.key,
            normalized_lang() == normalize_tag(miss.language),
        )
        .first()
    )
    if existing is not None:
        return False

    db.add(
        LexiconEntry(
            lex=miss.lexicon,
            lex_key=miss.key,
            lang=miss.language,
            lex_value=miss.value,
        )
    )
    db.flush()
    return True


class MissRepair(ABC):
    """Strategy invoked by ``LexiconLookup`` when a key is not found."""

    @abstractmethod
    def record(self, miss: MissRecord) -> None:
        """Persist *miss*. Raises ``RepairWriteError`` on failure."""


class DatabaseMissRepair(MissRepair):
    """Write the placeholder row inline, in a session of its own."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def record(self, miss: MissRecord) -> None:
        db = self._session_factory()
        try:
            if record_missing_entry(db, miss):
                logger.info(
                    "Recorded missing key %r for %s/%s", miss.key, miss.language, miss.lexicon
                )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise RepairWriteError(miss, str(exc)) from exc
        finally:
            db.close()


class CeleryMissRepair(MissRepair):
    """Hand the write to a Celery worker so the request does not wait on it."""

    def __init__(self, task: Any = None) -> None:
        if task is None:
            from lexicon_dbi.app.workers.tasks.lexicon import record_missing_entry_task

            task = record_missing_entry_task
        self._task = task

    def record(self, miss: MissRecord) -> None:
        try:
            self._task.delay(miss.lexicon, miss.key, miss.language, miss.value)
        except Exception as exc:
            raise RepairWriteError(miss, str(exc)) from exc
