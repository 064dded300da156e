"""Pick the language handle that best matches a client's preferences."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from lexicon_dbi.app.core.exceptions import NoLanguageAvailable
from lexicon_dbi.app.core.langtags import implicate_supers, normalize_tag, parse_accept_language

H = TypeVar("H")


class LanguageResolver:
    """Resolve an ``Accept-Language`` value against the loaded handles.

    Order of attempts:
    1. Each preferred tag, best quality first, each followed by the broader
       tags it implies (``de-AT`` also tries ``de``)
    2. The default language
    """

    def __init__(self, default_lang: str) -> None:
        self.default_lang = normalize_tag(default_lang)

    def preferences(self, accept_language: str | None) -> list[str]:
        """Return the expanded, normalized preference list for a header value."""
        return implicate_supers(parse_accept_language(accept_language))

    def resolve(self, accept_language: str | None, handles: Mapping[str, H]) -> H:
        """Return the handle for the best match.

        Raises ``NoLanguageAvailable`` when even the default is not loaded.
        """
        available = {normalize_tag(tag): handle for tag, handle in handles.items()}
        for tag in self.preferences(accept_language):
            if tag in available:
                return available[tag]

        if self.default_lang in available:
            return available[self.default_lang]
        raise NoLanguageAvailable(self.default_lang)
