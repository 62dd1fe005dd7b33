"""Split a free-text location description into weighted phrase chunks.

Example
-------
    >>> [c.phrase for c in parse_into_chunks("a crate near the old well, at dusk")]
    ['a crate', 'the old well', 'dusk']
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..domain.models import Chunk, PrepositionType
from .prepositions import SPLITTER_PATTERN, lookup_preposition

logger = logging.getLogger(__name__)

IMPLICIT_SUBJECT_KEYWORD = "implicit_subject"
IMPLICIT_SUBJECT_WEIGHT = 100.0


def _cut_at_comma(phrase: str) -> str:
    # A comma ends a location phrase.
    return phrase.split(",", 1)[0].strip()


def parse_into_chunks(text: Optional[str]) -> List[Chunk]:
    """Split a description on preposition keywords.

    Parameters
    ----------
    text:
        The location description, e.g. "the player is near the old well
        behind the chapel".

    Returns
    -------
    list[Chunk]
        The implicit subject (text before the first keyword) followed by
        one chunk per keyword, in input order. Empty phrases are dropped,
        so blank input gives an empty list.
    """
    if not text or not text.strip():
        return []

    matches = list(SPLITTER_PATTERN.finditer(text))
    chunks: List[Chunk] = []

    subject_end = matches[0].start() if matches else len(text)
    subject = _cut_at_comma(text[:subject_end])
    if subject:
        chunks.append(
            Chunk(
                phrase=subject,
                preposition_keyword=IMPLICIT_SUBJECT_KEYWORD,
                preposition_type=PrepositionType.DIRECT,
                preposition_weight=IMPLICIT_SUBJECT_WEIGHT,
            )
        )

    for index, match in enumerate(matches):
        definition = lookup_preposition(match.group(0))
        if definition is None:
            continue
        phrase_end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        phrase = _cut_at_comma(text[match.end():phrase_end])
        if not phrase:
            continue
        chunks.append(
            Chunk(
                phrase=phrase,
                preposition_keyword=match.group(0).lower(),
                preposition_type=definition.type,
                preposition_weight=definition.weight,
                original_preposition_text=match.group(0),
            )
        )

    logger.debug(
        "Description chunked",
        extra={"chunks": [(c.preposition_keyword, c.phrase) for c in chunks]},
    )
    return chunks
