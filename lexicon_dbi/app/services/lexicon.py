"""Per-language lexicon handles and keyed lookup with miss repair."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from lexicon_dbi.app.services.repair import MissRecord, MissRepair

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\[_(\d+)\]")


@dataclass(frozen=True)
class LanguageHandle:
    """All lexicons loaded for one language.

    ``entries`` maps lexicon name to a key -> value mapping. Both levels are
    read-only views, so a handle can be shared by every request.
    """

    tag: str
    lexicons: tuple[str, ...] = ()
    entries: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    @classmethod
    def build(
        cls, tag: str, lexicons: Sequence[str], entries: Mapping[str, Mapping[str, str]]
    ) -> LanguageHandle:
        frozen = {lex: MappingProxyType(dict(values)) for lex, values in entries.items()}
        return cls(tag=tag, lexicons=tuple(lexicons), entries=MappingProxyType(frozen))

    def find(self, key: str, lexicon_priority: Sequence[str] | None = None) -> str | None:
        """Return the first value for *key* in *lexicon_priority* order."""
        for lex in lexicon_priority if lexicon_priority is not None else self.lexicons:
            value = self.entries.get(lex, {}).get(key)
            if value is not None:
                return value
        return None


def interpolate(text: str, args: Sequence[Any]) -> str:
    """Replace ``[_1]``, ``[_2]``, ... with the matching positional argument.

    Placeholders without an argument are left as they are.
    """

    def _sub(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if 1 <= index <= len(args):
            return str(args[index - 1])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_sub, text)


class LexiconLookup:
    """Look keys up in a handle, repairing misses when a strategy is set.

    A miss returns the raw key. With *repair* set, a ``"? <key>"`` row is
    recorded for *default_lexicon* first; failures there are logged and
    otherwise ignored.
    """

    def __init__(self, repair: MissRepair | None, default_lexicon: str) -> None:
        self.repair = repair
        self.default_lexicon = default_lexicon

    def lookup(
        self,
        handle: LanguageHandle,
        key: str,
        args: Sequence[Any] = (),
        lexicon_priority: Sequence[str] | None = None,
    ) -> str:
        value = handle.find(key, lexicon_priority)
        if value is not None:
            return interpolate(value, args)

        if self.repair is not None:
            miss = MissRecord.for_key(self.default_lexicon, key, handle.tag)
            try:
                self.repair.record(miss)
            except Exception:
                logger.exception("Miss repair failed for key %r (%s)", key, handle.tag)

        return key
