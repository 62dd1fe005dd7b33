"""Resolve AI output to a node of the location graph.

Two entry points:

- attempt_match_and_set_node: an AI-supplied identifier that should be a
  node id, a corrupted id, a place name or an alias.
- select_best_matching_map_node: a free-text description of where the
  player stands.

A miss is a normal outcome (``matched=False`` / ``None``); callers keep
the location unresolved and decide whether to ask for a correction.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, List, Optional, Sequence

from ..config import MatcherConfig, get_config
from ..domain.models import Chunk, MapEdge, MapNode, NodeMatchResult, PrepositionType
from ..nlp.chunker import parse_into_chunks
from ..nlp.scorer import NEGATION_HALVING_THRESHOLD, PROXIMITY_BONUS, score_nodes
from ..nlp.suggestions import (
    DEFAULT_SUGGESTION_LIMIT,
    MIN_SIMILARITY_SCORE,
    suggest_similar_nodes,
)
from ..nlp.text import normalize_for_matching, tokenize_for_matching

logger = logging.getLogger(__name__)

EXACT_MATCH_FEATURE_BONUS = 10.0

# "<base>-<4 alphanumerics>": generated ids whose random suffix the AI garbled.
_SUFFIXED_ID = re.compile(r"^(.*)-([a-zA-Z0-9]{4})$")


@dataclass(frozen=True, slots=True)
class _ExactCandidate:
    node: MapNode
    score: float
    name_length: int


# ---------------------------------------------------------------------------
# Identifier resolution
# ---------------------------------------------------------------------------


def _nodes_named(nodes: Sequence[MapNode], wanted: str) -> List[MapNode]:
    return [
        node
        for node in nodes
        if node.place_name.lower() == wanted
        or any(alias.lower() == wanted for alias in node.aliases)
    ]


def attempt_match_and_set_node(
    suggested_identifier: Optional[str],
    previous_node_id: Optional[str],
    nodes: Sequence[MapNode],
    *,
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    suggestion_score_cutoff: float = MIN_SIMILARITY_SCORE,
) -> NodeMatchResult:
    """Resolve an AI-supplied node identifier.

    Attempts, first success wins:

    1. exact id;
    2. the suggestion contained in an id (case-insensitive);
    3. ``<base>-<4 alphanumerics>``: an id containing ``<base>``;
    4. place name or alias equal to the suggestion (case-insensitive),
       retried with the base (or the suggestion) with ``_`` read as space.

    Several name matches are settled by preferring the previous node,
    then the first non-feature node, then the first match.

    Args:
        suggested_identifier: Identifier produced by the AI.
        previous_node_id: The player's previous node, for tie-breaking.
        nodes: Candidate nodes.
        suggestion_limit: Closest candidates logged at debug on a miss.
        suggestion_score_cutoff: Minimum similarity for a logged candidate.

    Returns:
        NodeMatchResult; ``matched`` is False when nothing fits.
    """
    if not suggested_identifier or not suggested_identifier.strip():
        logger.debug("No identifier suggested")
        return NodeMatchResult.no_match()
    if not nodes:
        logger.debug("No candidate nodes", extra={"identifier": suggested_identifier})
        return NodeMatchResult.no_match()

    for node in nodes:
        if node.id == suggested_identifier:
            logger.debug("Identifier matched by id", extra={"node_id": node.id})
            return NodeMatchResult(matched=True, node_id=node.id)

    lowered = suggested_identifier.lower()
    partial = next((n for n in nodes if lowered in n.id.lower()), None)

    extracted_base: Optional[str] = None
    if partial is None:
        pattern = _SUFFIXED_ID.match(suggested_identifier)
        if pattern and pattern.group(1):
            extracted_base = pattern.group(1)
            base = extracted_base.lower()
            partial = next((n for n in nodes if base in n.id.lower()), None)

    if partial is not None:
        logger.info(
            "Malformed identifier matched heuristically",
            extra={"identifier": suggested_identifier, "node_id": partial.id},
        )
        return NodeMatchResult(matched=True, node_id=partial.id)

    matches = _nodes_named(nodes, lowered)
    if not matches:
        fallback = (extracted_base or suggested_identifier).replace("_", " ").lower()
        matches = _nodes_named(nodes, fallback)

    if not matches:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Identifier not found by id, name or alias",
                extra={
                    "identifier": suggested_identifier,
                    "closest": suggest_similar_nodes(
                        suggested_identifier,
                        nodes,
                        limit=suggestion_limit,
                        score_cutoff=suggestion_score_cutoff,
                    ),
                },
            )
        return NodeMatchResult.no_match()

    if len(matches) == 1:
        chosen = matches[0]
    elif previous_node_id and any(n.id == previous_node_id for n in matches):
        chosen = next(n for n in matches if n.id == previous_node_id)
    else:
        chosen = next((n for n in matches if not n.is_feature), matches[0])

    logger.debug(
        "Identifier matched by name or alias",
        extra={
            "identifier": suggested_identifier,
            "node_id": chosen.id,
            "candidates": len(matches),
        },
    )
    return NodeMatchResult(matched=True, node_id=chosen.id)


# ---------------------------------------------------------------------------
# Description resolution
# ---------------------------------------------------------------------------


def direct_neighbor_ids(
    edges: Iterable[MapEdge], previous_node_id: Optional[str]
) -> frozenset[str]:
    """Ids of nodes sharing an edge with the previous node, whatever its status."""
    if not previous_node_id:
        return frozenset()
    neighbors = set()
    for edge in edges:
        other = edge.other_end(previous_node_id)
        if other is not None and other != previous_node_id:
            neighbors.add(other)
    return frozenset(neighbors)


def _exact_match_score(normalized_place: str, token_string: str, name: str) -> float:
    normalized_name = normalize_for_matching(name)
    if not normalized_name:
        return 0.0
    if normalized_name == normalized_place:
        return 1000.0
    longer = len(normalized_place) > len(normalized_name)
    if longer and normalized_place.endswith(normalized_name):
        return 950.0
    if longer and normalized_place.startswith(normalized_name):
        return 920.0
    tokenized_name = " ".join(tokenize_for_matching(name))
    if tokenized_name and tokenized_name == token_string:
        return 900.0
    if normalized_name in normalized_place:
        return 800.0 + len(normalized_name) * 0.5
    return 0.0


def _best_exact_match(
    normalized_place: str,
    token_string: str,
    nodes: Sequence[MapNode],
    feature_bonus: float,
) -> Optional[MapNode]:
    candidates: List[_ExactCandidate] = []
    for node in nodes:
        for name in node.names:
            score = _exact_match_score(normalized_place, token_string, name)
            if score > 0:
                if node.is_feature:
                    score += feature_bonus
                candidates.append(_ExactCandidate(node, score, len(name)))
    if not candidates:
        return None
    # Highest score, then features, then longer names; sorted() keeps input order.
    candidates.sort(key=lambda c: (-c.score, not c.node.is_feature, -c.name_length))
    return candidates[0].node


def _prefers(candidate: MapNode, current: MapNode) -> bool:
    """Tie-break between equal fuzzy scores: features, then longer names."""
    if candidate.is_feature != current.is_feature:
        return candidate.is_feature
    return len(normalize_for_matching(candidate.place_name)) > len(
        normalize_for_matching(current.place_name)
    )


def _feature_child_mentioned(
    winner: MapNode, chunks: Sequence[Chunk], nodes: Sequence[MapNode]
) -> Optional[MapNode]:
    if winner.is_feature or winner.has_parent:
        return None
    direct_phrases = [
        normalize_for_matching(c.phrase)
        for c in chunks
        if c.preposition_type is PrepositionType.DIRECT
    ]
    for child in nodes:
        if not child.is_feature or child.parent_node_id != winner.id:
            continue
        name = normalize_for_matching(child.place_name)
        if name and any(name in phrase for phrase in direct_phrases):
            return child
    return None


def select_best_matching_map_node(
    local_place: Optional[str],
    nodes: Sequence[MapNode],
    edges: Sequence[MapEdge],
    previous_node_id: Optional[str],
    *,
    proximity_bonus: float = PROXIMITY_BONUS,
    exact_match_feature_bonus: float = EXACT_MATCH_FEATURE_BONUS,
    negation_halving_threshold: float = NEGATION_HALVING_THRESHOLD,
) -> Optional[str]:
    """Pick the node a free-text location description refers to.

    An exact pass over names and aliases runs first on the text before
    the first comma. Failing that, the description is chunked and every
    node scored; ties go to features, then to longer place names, then to
    the node listed first. A top-level area that wins while one of its
    feature children is named in a direct chunk yields that child.

    Args:
        local_place: The description, e.g. "near the old well, at dusk".
        nodes: Candidate nodes.
        edges: Map edges, used to find neighbours of the previous node.
        previous_node_id: The player's previous node, if any.

    Returns:
        The chosen node id, or None when nothing scores above zero.
    """
    if not local_place or not local_place.strip() or not nodes:
        return None

    normalized_place = normalize_for_matching(local_place.split(",", 1)[0].strip())
    token_string = " ".join(tokenize_for_matching(local_place))

    # Runs even when the head is empty: token equality uses the whole text.
    exact = _best_exact_match(
        normalized_place, token_string, nodes, exact_match_feature_bonus
    )
    if exact is not None:
        logger.debug(
            "Description matched exactly",
            extra={"local_place": local_place, "node_id": exact.id},
        )
        return exact.id

    chunks = parse_into_chunks(local_place)
    if not chunks:
        return None

    neighbors: AbstractSet[str] = direct_neighbor_ids(edges, previous_node_id)
    best: Optional[MapNode] = None
    best_score = 0.0
    for node, score in score_nodes(
        nodes, chunks, neighbors, proximity_bonus, negation_halving_threshold
    ):
        if score <= 0:
            continue
        if best is None or score > best_score or (
            score == best_score and _prefers(node, best)
        ):
            best, best_score = node, score

    if best is None:
        logger.debug("Description matched no node", extra={"local_place": local_place})
        return None

    feature = _feature_child_mentioned(best, chunks, nodes)
    if feature is not None:
        logger.debug(
            "Drilled down to mentioned feature",
            extra={"area_id": best.id, "node_id": feature.id},
        )
        best = feature

    logger.debug(
        "Description matched by score",
        extra={"local_place": local_place, "node_id": best.id, "score": best_score},
    )
    return best.id


@dataclass
class NodeResolver:
    """Node resolution bound to a matcher configuration.

    Attributes:
        config: Matcher configuration (bonuses, thresholds, suggestions)
    """

    config: MatcherConfig = field(default_factory=lambda: get_config().matcher)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def match_identifier(
        self,
        suggested_identifier: Optional[str],
        previous_node_id: Optional[str],
        nodes: Sequence[MapNode],
    ) -> NodeMatchResult:
        return attempt_match_and_set_node(
            suggested_identifier,
            previous_node_id,
            nodes,
            suggestion_limit=self.config.suggestion_limit,
            suggestion_score_cutoff=self.config.suggestion_score_cutoff,
        )

    def match_description(
        self,
        local_place: Optional[str],
        nodes: Sequence[MapNode],
        edges: Sequence[MapEdge],
        previous_node_id: Optional[str],
    ) -> Optional[str]:
        return select_best_matching_map_node(
            local_place,
            nodes,
            edges,
            previous_node_id,
            proximity_bonus=self.config.proximity_bonus,
            exact_match_feature_bonus=self.config.exact_match_feature_bonus,
            negation_halving_threshold=self.config.negation_halving_threshold,
        )

    def suggest(
        self, identifier: str, nodes: Sequence[MapNode]
    ) -> List[tuple[str, float]]:
        """Closest nodes for an identifier that did not resolve."""
        suggestions = suggest_similar_nodes(
            identifier,
            nodes,
            limit=self.config.suggestion_limit,
            score_cutoff=self.config.suggestion_score_cutoff,
        )
        self._logger.debug(
            "Node suggestions computed",
            extra={"identifier": identifier, "suggestions": suggestions},
        )
        return suggestions


__all__ = [
    "DEFAULT_SUGGESTION_LIMIT",
    "EXACT_MATCH_FEATURE_BONUS",
    "MIN_SIMILARITY_SCORE",
    "NodeResolver",
    "attempt_match_and_set_node",
    "direct_neighbor_ids",
    "select_best_matching_map_node",
]
