"""Lexical matching of location descriptions against map nodes."""

from .chunker import parse_into_chunks
from .prepositions import PREPOSITIONS, PrepositionDefinition, lookup_preposition
from .scorer import score_node, score_nodes, substring_bonus
from .suggestions import suggest_similar_nodes
from .text import normalize_for_matching, tokenize_for_matching

__all__ = [
    "parse_into_chunks",
    "PREPOSITIONS",
    "PrepositionDefinition",
    "lookup_preposition",
    "score_node",
    "score_nodes",
    "substring_bonus",
    "suggest_similar_nodes",
    "normalize_for_matching",
    "tokenize_for_matching",
]
