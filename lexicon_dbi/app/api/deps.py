from __future__ import annotations

from fastapi import HTTPException, Request, status

from lexicon_dbi.app.core.i18n import I18nConfig, Localizer


def get_i18n(request: Request) -> I18nConfig:
    config: I18nConfig | None = getattr(request.app.state, "i18n", None)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Lexicons not loaded",
        )
    return config


def get_localizer(request: Request) -> Localizer:
    """Per-request ``loc`` bound to the caller's Accept-Language header."""
    return Localizer(get_i18n(request), request.headers.get("Accept-Language"))
