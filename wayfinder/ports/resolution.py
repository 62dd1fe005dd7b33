"""Resolution port - Abstraction for turning AI output into map nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, Tuple

if TYPE_CHECKING:
    from ..domain.models import MapEdge, MapNode, NodeMatchResult


class NodeResolverPort(Protocol):
    """Port for node resolution.

    Implementation: services/node_resolver.py (NodeResolver)

    Neither method raises when nothing matches.
    """

    def match_identifier(
        self,
        suggested_identifier: Optional[str],
        previous_node_id: Optional[str],
        nodes: Sequence[MapNode],
    ) -> NodeMatchResult:
        """Resolve an identifier that should name an existing node."""
        ...

    def match_description(
        self,
        local_place: Optional[str],
        nodes: Sequence[MapNode],
        edges: Sequence[MapEdge],
        previous_node_id: Optional[str],
    ) -> Optional[str]:
        """Resolve a free-text description to a node id."""
        ...

    def suggest(
        self, identifier: str, nodes: Sequence[MapNode]
    ) -> List[Tuple[str, float]]:
        """Rank nodes that resemble an unresolved identifier."""
        ...
