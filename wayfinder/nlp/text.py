"""Text normalisation and tokenisation shared by the matchers."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "is", "are", "was", "were", "am", "i", "you", "he",
        "she", "it", "we", "they", "and", "or", "but", "so", "then", "just",
        "very", "quite", "also", "too", "now", "player", "character", "up",
        "down", "left", "right", "north", "south", "east", "west", "above",
        "below", "under", "over", "through", "around", "along", "across",
        "between", "among", "front", "go", "look", "see", "find", "take", "get",
        "move", "walk", "run", "stand", "sit", "several", "stories",
    }
)

_STRIP_CHARS = re.compile(r"[.,!?;:\"(){}\[\]'‘’]")
_EDGE_QUOTES = re.compile(r"^['\"]+|['\"]+$")

# Shorter tokens are too ambiguous for the plural rule ("as" / "a").
MIN_PLURAL_TOKEN_LENGTH = 3


def normalize_for_matching(text: Optional[str]) -> str:
    """Lowercase, drop punctuation and trim."""
    if not text:
        return ""
    return _STRIP_CHARS.sub("", text.lower()).strip()


def tokenize_for_matching(text: Optional[str]) -> List[str]:
    """Split normalised text into tokens, dropping stop words."""
    normalized = normalize_for_matching(text)
    tokens = []
    for raw in normalized.split():
        token = _EDGE_QUOTES.sub("", raw).strip()
        if token and token not in STOP_WORDS:
            tokens.append(token)
    return tokens


def is_singular_plural_match(first: str, second: str) -> bool:
    """Check whether two different tokens are singular/plural forms of a word.

    Handles ``-s``, ``-es`` and ``-ies``/``-y``. Only applied when both
    tokens have at least MIN_PLURAL_TOKEN_LENGTH characters.
    """
    if not first or not second or first == second:
        return False
    if min(len(first), len(second)) < MIN_PLURAL_TOKEN_LENGTH:
        return False
    a, b = first.lower(), second.lower()
    for plural, singular in ((a, b), (b, a)):
        if plural == singular + "s":
            return True
        if plural.endswith("es") and plural[:-2] == singular:
            return True
        if plural.endswith("ies") and plural[:-3] + "y" == singular:
            return True
    return False


def tokens_match(first: str, second: str) -> bool:
    return first == second or is_singular_plural_match(first, second)


def count_common_tokens(name_tokens: Sequence[str], phrase_tokens: Sequence[str]) -> int:
    """Count name tokens found in the phrase, each phrase token used once.

    An exact occurrence is preferred over a singular/plural one.
    """
    remaining = list(phrase_tokens)
    common = 0
    for token in name_tokens:
        if token in remaining:
            remaining.remove(token)
            common += 1
            continue
        for index, candidate in enumerate(remaining):
            if is_singular_plural_match(token, candidate):
                del remaining[index]
                common += 1
                break
    return common
