"""Closest-node suggestions for identifiers that could not be resolved.

Uses rapidfuzz to rank node ids, place names and aliases by similarity
to a misspelled identifier. The resolver never picks a node from these
suggestions; they feed logs and the caller's correction step.

Example
-------
    >>> suggest_similar_nodes("Old Lantren", nodes)
    [('old-lantern-7fr4', 90.9)]
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from rapidfuzz import fuzz, process

from ..domain.models import MapNode

# Minimum similarity score (0-100) to consider a node
MIN_SIMILARITY_SCORE = 70.0
DEFAULT_SUGGESTION_LIMIT = 3


def suggest_similar_nodes(
    identifier: str,
    nodes: Sequence[MapNode],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
    score_cutoff: float = MIN_SIMILARITY_SCORE,
) -> List[Tuple[str, float]]:
    """Rank nodes by similarity of their id, name or aliases to an identifier.

    Parameters
    ----------
    identifier:
        The unresolved identifier.
    nodes:
        Candidate nodes.
    limit:
        Maximum number of suggestions.
    score_cutoff:
        Minimum rapidfuzz ratio (0-100) for a node to be suggested.

    Returns
    -------
    list[tuple[str, float]]
        ``(node_id, score)`` pairs, best first; nodes with equal scores
        keep their input order.
    """
    query = identifier.strip().lower() if identifier else ""
    if not query or not nodes:
        return []

    choices: List[str] = []
    owners: List[int] = []
    for position, node in enumerate(nodes):
        for label in (node.id, *node.names):
            choices.append(label.lower())
            owners.append(position)

    best: Dict[int, float] = {}
    for _, score, index in process.extract(
        query,
        choices,
        scorer=fuzz.ratio,
        limit=None,
        score_cutoff=score_cutoff,
    ):
        owner = owners[index]
        if score > best.get(owner, -1.0):
            best[owner] = score

    ranked = sorted(best.items(), key=lambda item: (-item[1], item[0]))
    return [(nodes[position].id, round(score, 1)) for position, score in ranked[:limit]]
