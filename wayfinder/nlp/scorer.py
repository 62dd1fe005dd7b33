"""Lexical scoring of map nodes against the chunks of a description.

For each name or alias of a node, every chunk sharing at least one token
with it contributes a base score (token coverage on both sides plus a
substring bonus) scaled by the chunk's preposition weight. The node's
score is the best total over its names, plus a proximity bonus when the
node neighbours the player's previous location.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, List, Sequence, Tuple, Union

from ..domain.models import Chunk, MapNode, PrepositionType
from .text import count_common_tokens, normalize_for_matching, tokenize_for_matching

PROXIMITY_BONUS = 30.0
NEGATION_HALVING_THRESHOLD = 75.0

NODE_COVERAGE_WEIGHT = 60.0
CHUNK_RELEVANCE_WEIGHT = 40.0


@dataclass(frozen=True, slots=True)
class NodeNameTokens:
    """A node with each of its names, normalised and tokenised once."""

    node: MapNode
    names: Tuple[Tuple[str, str, Tuple[str, ...]], ...]

    @classmethod
    def of(cls, node: MapNode) -> NodeNameTokens:
        return cls(
            node=node,
            names=tuple(
                (name, normalize_for_matching(name), tuple(tokenize_for_matching(name)))
                for name in node.names
            ),
        )


@dataclass(frozen=True, slots=True)
class _ChunkTokens:
    chunk: Chunk
    normalized: str
    tokens: Tuple[str, ...]


def node_name_tokens(node: MapNode) -> NodeNameTokens:
    return NodeNameTokens.of(node)


def substring_bonus(normalized_name: str, normalized_phrase: str) -> float:
    """Bonus for a name equal to, bounding, or nested in a phrase."""
    if not normalized_name or not normalized_phrase:
        return 0.0
    if normalized_name == normalized_phrase:
        return 100.0
    longer = len(normalized_phrase) > len(normalized_name)
    if longer and normalized_phrase.endswith(normalized_name):
        return 75.0
    if longer and normalized_phrase.startswith(normalized_name):
        return 70.0
    if normalized_name in normalized_phrase:
        return 50.0 + len(normalized_name) * 0.2
    if normalized_phrase in normalized_name:
        return 25.0 + len(normalized_phrase) * 0.2
    return 0.0


def _tokenize_chunks(chunks: Sequence[Chunk]) -> List[_ChunkTokens]:
    return [
        _ChunkTokens(
            chunk=chunk,
            normalized=normalize_for_matching(chunk.phrase),
            tokens=tuple(tokenize_for_matching(chunk.phrase)),
        )
        for chunk in chunks
    ]


def _score_name(
    normalized_name: str,
    name_tokens: Sequence[str],
    chunks: Sequence[_ChunkTokens],
    negation_halving_threshold: float,
) -> float:
    total = 0.0
    for item in chunks:
        if not item.tokens:
            continue
        common = count_common_tokens(name_tokens, item.tokens)
        if common == 0:
            continue
        base = (
            NODE_COVERAGE_WEIGHT * common / len(name_tokens)
            + CHUNK_RELEVANCE_WEIGHT * common / len(item.tokens)
            + substring_bonus(normalized_name, item.normalized)
        )
        weight = item.chunk.preposition_weight
        # A strong match on a negated phrase is discounted, not discarded.
        if (
            item.chunk.preposition_type is PrepositionType.NEGATING
            and base > negation_halving_threshold
        ):
            weight *= 0.5
        total += base * weight / 100.0
    return total


def score_node(
    node: Union[MapNode, NodeNameTokens],
    chunks: Sequence[Chunk],
    direct_neighbor_ids: AbstractSet[str] = frozenset(),
    proximity_bonus: float = PROXIMITY_BONUS,
    negation_halving_threshold: float = NEGATION_HALVING_THRESHOLD,
) -> float:
    """Score a node against the chunks of a description.

    Args:
        node: The candidate node, or its pre-tokenised names.
        chunks: Chunks produced by parse_into_chunks.
        direct_neighbor_ids: Ids of nodes adjacent to the previous location.
        proximity_bonus: Added to a positive score for a direct neighbour.
        negation_halving_threshold: Base score above which a negated chunk
            counts at half its weight.

    Returns:
        The score; 0.0 when no name of the node shares a token with any chunk.
    """
    tokens = node if isinstance(node, NodeNameTokens) else NodeNameTokens.of(node)
    return _score_tokens(
        tokens,
        _tokenize_chunks(chunks),
        direct_neighbor_ids,
        proximity_bonus,
        negation_halving_threshold,
    )


def score_nodes(
    nodes: Sequence[MapNode],
    chunks: Sequence[Chunk],
    direct_neighbor_ids: AbstractSet[str] = frozenset(),
    proximity_bonus: float = PROXIMITY_BONUS,
    negation_halving_threshold: float = NEGATION_HALVING_THRESHOLD,
) -> List[Tuple[MapNode, float]]:
    """Score every node, tokenising the chunks only once. Keeps input order."""
    chunk_tokens = _tokenize_chunks(chunks)
    return [
        (
            node,
            _score_tokens(
                NodeNameTokens.of(node),
                chunk_tokens,
                direct_neighbor_ids,
                proximity_bonus,
                negation_halving_threshold,
            ),
        )
        for node in nodes
    ]


def _score_tokens(
    tokens: NodeNameTokens,
    chunk_tokens: Sequence[_ChunkTokens],
    direct_neighbor_ids: AbstractSet[str],
    proximity_bonus: float,
    negation_halving_threshold: float,
) -> float:
    best = 0.0
    for _, normalized_name, name_tokens in tokens.names:
        if not name_tokens:
            continue
        score = _score_name(
            normalized_name, name_tokens, chunk_tokens, negation_halving_threshold
        )
        best = max(best, score)

    if best > 0 and tokens.node.id in direct_neighbor_ids:
        best += proximity_bonus
    return best
