"""Language tag helpers: normalization, Accept-Language parsing, super-tags."""

from __future__ import annotations

import re
from collections.abc import Iterable

_COMMENT_RE = re.compile(r"\([^)]*\)")
_WHITESPACE_RE = re.compile(r"\s+")
# "de", "en-US", "pt_BR;q=0.7" -- "*" and extra params are skipped
_ENTRY_RE = re.compile(
    r"^([a-z]+(?:[-_]+[a-z0-9]+)*)(?:;q=(\d*(?:\.\d+)?))?$", re.IGNORECASE
)

# Singleton prefixes of "i-klingon" / "x-pig-latin" are not languages
_NON_LANGUAGE_SUPERS = {"i", "x"}


def normalize_tag(tag: str) -> str:
    """Return *tag* lower-cased with ``_`` separators turned into ``-``.

    Empty subtags are dropped, so ``de--AT`` becomes ``de-at``.
    """
    subtags = tag.strip().lower().replace("_", "-").split("-")
    return "-".join(s for s in subtags if s)


def parse_accept_language(header: str | None) -> list[str]:
    """Return the tags of an ``Accept-Language`` value, best quality first.

    Entries without a ``q`` weight count as ``1``. Equal weights keep the
    order in which they were declared. Unparsable entries are dropped, so an
    empty or garbage header yields ``[]``.
    """
    if not header:
        return []

    cleaned = _WHITESPACE_RE.sub("", _COMMENT_RE.sub("", header))
    weighted: list[tuple[str, float]] = []
    for part in cleaned.split(","):
        match = _ENTRY_RE.match(part)
        if match is None:
            continue
        quality = match.group(2)
        weighted.append((normalize_tag(match.group(1)), float(quality) if quality else 1.0))

    # sorted() is stable, so ties stay in declaration order
    ordered = [tag for tag, _ in sorted(weighted, key=lambda item: -item[1])]
    return list(dict.fromkeys(ordered))


def super_languages(tag: str) -> list[str]:
    """Return the broader forms of *tag*, longest first.

    ``en-us-x`` gives ``["en-us", "en"]``; a plain ``en`` gives ``[]``.
    """
    subtags = normalize_tag(tag).split("-")
    supers = ["-".join(subtags[:i]) for i in range(len(subtags) - 1, 0, -1)]
    return [s for s in supers if s not in _NON_LANGUAGE_SUPERS]


def implicate_supers(tags: Iterable[str]) -> list[str]:
    """Expand *tags* with the super-tags they imply.

    Each implied tag that is not already listed is inserted right after the
    last tag that is a more specific form of it, so ``["en-us", "fr", "en-gb"]``
    becomes ``["en-us", "fr", "en-gb", "en"]``. Explicit tags keep their
    positions and expanding an expanded list changes nothing.
    """
    result = list(dict.fromkeys(normalize_tag(t) for t in tags))
    for tag in list(result):
        for sup in super_languages(tag):
            if sup in result:
                continue
            prefix = sup + "-"
            last = max(
                (i for i, t in enumerate(result) if t.startswith(prefix)),
                default=result.index(tag),
            )
            result.insert(last + 1, sup)
    return result
