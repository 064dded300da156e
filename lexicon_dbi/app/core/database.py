from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lexicon_dbi.app.core.config import Settings, settings


def build_engine(cfg: Settings) -> Engine:
    """Create the engine described by *cfg*.

    ``DATABASE_USER`` / ``DATABASE_PASSWORD`` replace whatever credentials the
    DSN carries. In-memory SQLite shares one connection so every session sees
    the same database.
    """
    url = make_url(cfg.DATABASE_URL)
    if cfg.DATABASE_USER is not None:
        url = url.set(username=cfg.DATABASE_USER)
    if cfg.DATABASE_PASSWORD is not None:
        url = url.set(password=cfg.DATABASE_PASSWORD)

    connect_args: dict[str, Any] = dict(cfg.DATABASE_CONNECT_ARGS)
    kwargs: dict[str, Any] = {}
    if url.get_backend_name() == "sqlite":
        connect_args.setdefault("check_same_thread", False)
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    return create_engine(url, echo=False, connect_args=connect_args, **kwargs)


engine = build_engine(settings)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    pass


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
