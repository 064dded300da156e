"""Database-backed translation framework.

Lexicons are loaded once at startup into an immutable ``I18nConfig``; every
request then resolves a language from its ``Accept-Language`` header and
looks keys up with ``loc``::

    loc(config, "de-AT,en;q=0.5", "Hello [_1]", "Catalyst")
    loc(config, header, "lalala[_1]lalala[_2]", ["test", "foo"])

A key that no lexicon holds comes back untranslated, and by default a
``"? <key>"`` row is written so it shows up for translators.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from lexicon_dbi.app.core.config import Settings
from lexicon_dbi.app.core.exceptions import NoLanguageAvailable
from lexicon_dbi.app.services.lexicon import LanguageHandle, LexiconLookup
from lexicon_dbi.app.services.loader import load_handles
from lexicon_dbi.app.services.repair import CeleryMissRepair, DatabaseMissRepair, MissRepair
from lexicon_dbi.app.services.resolver import LanguageResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class I18nConfig:
    handles: Mapping[str, LanguageHandle]
    default_lang: str
    lexicons: tuple[str, ...]
    resolver: LanguageResolver
    lookup: LexiconLookup

    @classmethod
    def create(
        cls,
        handles: Mapping[str, LanguageHandle],
        default_lang: str,
        lexicons: tuple[str, ...] | list[str],
        repair: MissRepair | None,
    ) -> I18nConfig:
        if not lexicons:
            raise ValueError("At least one lexicon must be configured")
        resolver = LanguageResolver(default_lang)
        return cls(
            handles=MappingProxyType(dict(handles)),
            default_lang=resolver.default_lang,
            lexicons=tuple(lexicons),
            resolver=resolver,
            lookup=LexiconLookup(repair, default_lexicon=lexicons[0]),
        )


def _expand_args(args: tuple[Any, ...]) -> tuple[Any, ...]:
    # loc("k", ["a", "b"]) and loc("k", "a", "b") are equivalent
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return tuple(args[0])
    return args


def loc(config: I18nConfig, accept_language: str | None, key: str, *args: Any) -> str:
    """Return *key* translated for the best language in *accept_language*.

    Never raises: without a usable language the raw key is returned.
    """
    try:
        handle = config.resolver.resolve(accept_language, config.handles)
    except NoLanguageAvailable as exc:
        logger.critical("%s", exc)
        return key
    return config.lookup.lookup(handle, key, _expand_args(args))


class Localizer:
    """``loc`` bound to one request's ``Accept-Language`` value."""

    def __init__(self, config: I18nConfig, accept_language: str | None) -> None:
        self.config = config
        self.accept_language = accept_language

    @property
    def language(self) -> str | None:
        """The resolved language tag, or ``None`` if nothing is available."""
        try:
            return self.config.resolver.resolve(self.accept_language, self.config.handles).tag
        except NoLanguageAvailable:
            return None

    def loc(self, key: str, *args: Any) -> str:
        return loc(self.config, self.accept_language, key, *args)


def build_repair(
    cfg: Settings, session_factory: Callable[[], Session] | None = None
) -> MissRepair | None:
    """Return the miss-repair strategy selected by *cfg* (``None`` = disabled)."""
    if not cfg.LEXICON_FAIL_WITH:
        return None
    if cfg.LEXICON_REPAIR_ASYNC:
        return CeleryMissRepair()
    if session_factory is None:
        from lexicon_dbi.app.core.database import SessionLocal

        session_factory = SessionLocal
    return DatabaseMissRepair(session_factory)


def init_i18n(
    cfg: Settings,
    engine: Engine | None = None,
    session_factory: Callable[[], Session] | None = None,
) -> I18nConfig:
    """Load all configured lexicons and return the process-wide config.

    The connection used for loading is returned to the pool before this
    function returns; lookups never touch it.
    """
    if engine is None:
        from lexicon_dbi.app.core import database

        engine = database.engine

    with engine.connect() as connection:
        handles = load_handles(connection, cfg.LEXICON_LANGUAGES, cfg.LEXICON_NAMES)

    config = I18nConfig.create(
        handles,
        default_lang=cfg.LEXICON_DEFAULT_LANG,
        lexicons=cfg.LEXICON_NAMES,
        repair=build_repair(cfg, session_factory),
    )
    logger.info(
        "I18N initialized: languages=%s default=%s",
        ", ".join(config.handles) or "-",
        config.default_lang,
    )
    return config
