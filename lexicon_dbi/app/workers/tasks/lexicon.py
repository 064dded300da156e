"""Async miss-repair task -- writes placeholder rows off the request path."""

from __future__ import annotations

from lexicon_dbi.app.workers.celery_app import celery


@celery.task(name="lexicon_dbi.app.workers.tasks.lexicon.record_missing_entry")
def record_missing_entry_task(lexicon: str, key: str, language: str, value: str) -> dict:
    """Insert a ``"? <key>"`` row for a missed lookup unless one exists."""
    from lexicon_dbi.app.core.database import SessionLocal
    from lexicon_dbi.app.services.repair import MissRecord, record_missing_entry

    miss = MissRecord(lexicon=lexicon, key=key, language=language, value=value)
    db = SessionLocal()
    try:
        created = record_missing_entry(db, miss)
        db.commit()
        return {"created": created}
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
