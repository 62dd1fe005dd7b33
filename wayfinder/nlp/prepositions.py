"""Preposition table used to split location descriptions into chunks.

Each definition groups keyword phrases that share a category and weight.
``direct`` prepositions place the subject in the phrase that follows,
``relational`` ones place it next to that phrase, ``negating`` ones say
the subject is *not* there, and ``contextual_linking`` ones are filler
connectives that never split a description.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Pattern

from ..domain.models import PrepositionType


@dataclass(frozen=True, slots=True)
class PrepositionDefinition:
    keywords: tuple[str, ...]
    type: PrepositionType
    weight: float

    @property
    def longest_keyword(self) -> int:
        return max(len(k) for k in self.keywords)


_DEFINITIONS: tuple[PrepositionDefinition, ...] = (
    PrepositionDefinition(("inside of", "inside"), PrepositionType.DIRECT, 100),
    PrepositionDefinition(("atop of", "atop"), PrepositionType.DIRECT, 100),
    PrepositionDefinition(
        ("at the center of", "at the heart of", "at the"), PrepositionType.DIRECT, 90
    ),
    PrepositionDefinition(("at",), PrepositionType.DIRECT, 85),
    PrepositionDefinition(("within",), PrepositionType.DIRECT, 95),
    PrepositionDefinition(("on top of", "on"), PrepositionType.DIRECT, 90),
    PrepositionDefinition(("entering into", "entering"), PrepositionType.DIRECT, 90),
    PrepositionDefinition(("overlooking",), PrepositionType.RELATIONAL, 60),
    PrepositionDefinition(
        ("leading to", "leading towards"), PrepositionType.RELATIONAL, 55
    ),
    PrepositionDefinition(
        ("near to", "near by", "nearby", "near", "close to", "by", "beside", "next to"),
        PrepositionType.RELATIONAL,
        50,
    ),
    PrepositionDefinition(("facing",), PrepositionType.RELATIONAL, 45),
    PrepositionDefinition(("approaching",), PrepositionType.RELATIONAL, 40),
    PrepositionDefinition(
        ("exiting from", "exiting", "leaving from", "leaving"),
        PrepositionType.RELATIONAL,
        35,
    ),
    PrepositionDefinition(
        ("heading to", "heading towards", "going to", "going towards"),
        PrepositionType.RELATIONAL,
        50,
    ),
    PrepositionDefinition(
        ("coming from", "arriving from"), PrepositionType.RELATIONAL, 30
    ),
    PrepositionDefinition(
        ("outside of", "outside", "behind"), PrepositionType.NEGATING, 30
    ),
    PrepositionDefinition(("away from", "far from"), PrepositionType.NEGATING, 20),
    PrepositionDefinition(("beyond",), PrepositionType.NEGATING, 25),
    PrepositionDefinition(
        ("of the", "of a", "of an", "of"), PrepositionType.CONTEXTUAL_LINKING, 5
    ),
    PrepositionDefinition(
        ("from the", "from a", "from an", "from"),
        PrepositionType.CONTEXTUAL_LINKING,
        5,
    ),
)

# Groups with longer keywords first; sorted() is stable for equal lengths.
PREPOSITIONS: tuple[PrepositionDefinition, ...] = tuple(
    sorted(_DEFINITIONS, key=lambda d: d.longest_keyword, reverse=True)
)

_BY_KEYWORD: dict[str, PrepositionDefinition] = {}
for _definition in PREPOSITIONS:
    for _keyword in _definition.keywords:
        _BY_KEYWORD.setdefault(_keyword, _definition)

KEYWORD_INDEX: Mapping[str, PrepositionDefinition] = MappingProxyType(_BY_KEYWORD)

# Keywords that split a description, longest first so "inside of" wins over "inside".
SPLITTER_KEYWORDS: tuple[str, ...] = tuple(
    sorted(
        (
            keyword
            for definition in PREPOSITIONS
            if definition.type is not PrepositionType.CONTEXTUAL_LINKING
            for keyword in definition.keywords
        ),
        key=len,
        reverse=True,
    )
)

SPLITTER_PATTERN: Pattern[str] = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in SPLITTER_KEYWORDS) + r")\b",
    re.IGNORECASE,
)


def lookup_preposition(keyword: str) -> Optional[PrepositionDefinition]:
    """Return the definition owning a keyword, matched case-insensitively."""
    return KEYWORD_INDEX.get(keyword.strip().lower())
