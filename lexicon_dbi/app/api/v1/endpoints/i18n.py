from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lexicon_dbi.app.api.deps import get_i18n, get_localizer
from lexicon_dbi.app.core.database import get_db
from lexicon_dbi.app.core.i18n import I18nConfig, Localizer
from lexicon_dbi.app.core.langtags import normalize_tag
from lexicon_dbi.app.models.lexicon import LexiconEntry, normalized_lang
from lexicon_dbi.app.schemas.lexicon import LanguagesOut, LexiconEntryOut, LocalizedOut
from lexicon_dbi.app.services.repair import PLACEHOLDER_PREFIX

router = APIRouter()


@router.get("/languages", response_model=LanguagesOut)
def list_languages(config: I18nConfig = Depends(get_i18n)) -> LanguagesOut:
    return LanguagesOut(
        languages=list(config.handles),
        default_lang=config.default_lang,
        lexicons=list(config.lexicons),
    )


@router.get("/loc", response_model=LocalizedOut)
def localize(
    key: str = Query(..., min_length=1),
    args: list[str] = Query(default=[]),
    localizer: Localizer = Depends(get_localizer),
) -> LocalizedOut:
    return LocalizedOut(
        language=localizer.language,
        key=key,
        text=localizer.loc(key, args),
    )


@router.get("/missing", response_model=list[LexiconEntryOut])
def list_missing(
    lang: str | None = None,
    db: Session = Depends(get_db),
) -> list[LexiconEntry]:
    """Placeholder rows written by miss repair, i.e. keys awaiting translation."""
    query = db.query(LexiconEntry).filter(
        LexiconEntry.lex_value.startswith(PLACEHOLDER_PREFIX, autoescape=True)
    )
    if lang:
        query = query.filter(normalized_lang() == normalize_tag(lang))
    return query.order_by(LexiconEntry.lang, LexiconEntry.lex_key).all()
