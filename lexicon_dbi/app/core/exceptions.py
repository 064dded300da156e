"""Errors raised by the lexicon layer.

None of these reach the request layer: ``loc`` and ``LexiconLookup.lookup``
catch them, log them and degrade to the untranslated key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexicon_dbi.app.services.repair import MissRecord


class LexiconError(Exception):
    """Base class for lexicon errors."""


class NoLanguageAvailable(LexiconError):
    """Neither a preferred language nor the default language is loaded."""

    def __init__(self, default_lang: str) -> None:
        self.default_lang = default_lang
        super().__init__(f"No default language '{default_lang}' available!")


class LexiconLoadError(LexiconError):
    """A configured (language, lexicon) pair could not be loaded."""

    def __init__(self, language: str, lexicon: str, reason: str) -> None:
        self.language = language
        self.lexicon = lexicon
        super().__init__(
            f"Couldn't initialize I18N for lexicon {language}/{lexicon}, \"{reason}\""
        )


class RepairWriteError(LexiconError):
    """Persisting a placeholder row for a missing key failed."""

    def __init__(self, miss: MissRecord, reason: str) -> None:
        self.miss = miss
        super().__init__(
            f"Failed to record missing key {miss.key!r} "
            f"({miss.language}/{miss.lexicon}): {reason}"
        )
