"""Tests for text normalisation and token matching."""

import pytest

from wayfinder.nlp.text import (
    count_common_tokens,
    is_singular_plural_match,
    normalize_for_matching,
    tokens_match,
    tokenize_for_matching,
)


def test_normalize_strips_punctuation_and_case():
    assert normalize_for_matching("  The (Old) Well!  ") == "the old well"
    assert normalize_for_matching("Smith’s \"Forge\"; [closed]") == "smiths forge closed"
    assert normalize_for_matching(None) == ""


def test_tokenize_drops_stop_words():
    assert tokenize_for_matching("The player is near the Old Well") == ["near", "old", "well"]
    assert tokenize_for_matching("") == []


@pytest.mark.parametrize(
    "first, second",
    [
        ("well", "wells"),
        ("wells", "well"),
        ("box", "boxes"),
        ("berry", "berries"),
        ("ruin", "ruins"),
    ],
)
def test_singular_plural_pairs_match(first, second):
    assert is_singular_plural_match(first, second)


@pytest.mark.parametrize(
    "first, second",
    [
        ("well", "well"),
        ("a", "as"),
        ("ox", "oxs"),
        ("well", "wall"),
        ("mill", "millers"),
    ],
)
def test_non_plural_pairs_do_not_match(first, second):
    assert not is_singular_plural_match(first, second)


def test_common_tokens_prefer_exact_and_consume_once():
    assert count_common_tokens(["old", "well"], ["old", "wells"]) == 2
    assert count_common_tokens(["well", "well"], ["well"]) == 1
    assert count_common_tokens(["well"], ["wells", "well"]) == 1
    assert count_common_tokens(["gate"], ["door"]) == 0


def test_tokens_match_exact_or_plural():
    assert tokens_match("gate", "gate")
    assert tokens_match("gate", "gates")
    assert not tokens_match("gate", "grate")
