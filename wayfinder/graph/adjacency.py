"""Weighted travel adjacency built from a map snapshot.

Real edges are weighted by their status. On top of them, synthetic
"hierarchy" edges let a route climb from a node to its parent, descend
into a child, or step from a feature to the other areas sharing its
parent. Blocked nodes and untraversable edges never enter the adjacency.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from ..domain.models import EdgeStatus, MapData, MapNode

logger = logging.getLogger(__name__)

EDGE_STATUS_TRAVEL_COSTS: Mapping[EdgeStatus, float] = MappingProxyType(
    {
        EdgeStatus.OPEN: 1.0,
        EdgeStatus.ACCESSIBLE: 1.0,
        EdgeStatus.ACTIVE: 1.0,
        EdgeStatus.ONE_WAY: 1.0,
        EdgeStatus.RUMORED: 5.0,
        EdgeStatus.CLOSED: math.inf,
        EdgeStatus.LOCKED: math.inf,
        EdgeStatus.BLOCKED: math.inf,
        EdgeStatus.HIDDEN: math.inf,
        EdgeStatus.COLLAPSED: math.inf,
        EdgeStatus.REMOVED: math.inf,
        EdgeStatus.INACTIVE: math.inf,
    }
)

HIERARCHY_EDGE_TRAVEL_COST = 20.0
HIERARCHY_EDGE_PREFIX = "hierarchy:"


def hierarchy_edge_id(from_id: str, to_id: str) -> str:
    return f"{HIERARCHY_EDGE_PREFIX}{from_id}->{to_id}"


def is_hierarchy_edge_id(edge_id: str) -> bool:
    return edge_id.startswith(HIERARCHY_EDGE_PREFIX)


@dataclass(frozen=True, slots=True)
class AdjacencyEntry:
    """A directed, weighted hop from one node to another.

    Attributes:
        edge_id: Id of the real edge, or a ``hierarchy:<a>-><b>`` id
        to_node_id: Node reached by the hop
        cost: Travel cost of the hop
    """

    edge_id: str
    to_node_id: str
    cost: float


@dataclass(frozen=True)
class TravelAdjacency:
    """Adjacency lists plus the lookup tables used to build them."""

    edges_from: Mapping[str, tuple[AdjacencyEntry, ...]] = field(
        default_factory=dict
    )
    nodes_by_id: Mapping[str, MapNode] = field(default_factory=dict)
    children_by_parent: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    hierarchy_edge_ids: frozenset[str] = frozenset()

    def neighbors(self, node_id: str) -> tuple[AdjacencyEntry, ...]:
        return self.edges_from.get(node_id, ())

    def is_traversable(self, node_id: Optional[str]) -> bool:
        node = self.nodes_by_id.get(node_id) if node_id else None
        return node is not None and node.is_traversable

    def hop_cost(self, from_id: str, edge_id: str, to_id: str) -> Optional[float]:
        """Return the cost of a specific hop, or None if it does not exist."""
        for entry in self.neighbors(from_id):
            if entry.edge_id == edge_id and entry.to_node_id == to_id:
                return entry.cost
        return None

    def has_hop(self, from_id: str, to_id: str) -> bool:
        return any(entry.to_node_id == to_id for entry in self.neighbors(from_id))


def build_travel_adjacency(
    map_data: MapData,
    hierarchy_edge_cost: Optional[float] = None,
) -> TravelAdjacency:
    """Build the weighted adjacency for a map snapshot.

    Args:
        map_data: The snapshot to convert. It is not modified.
        hierarchy_edge_cost: Cost of synthetic hierarchy hops, defaults
            to HIERARCHY_EDGE_TRAVEL_COST.

    Returns:
        A TravelAdjacency whose entries follow the snapshot order: real
        edges, then parent/child hops, then feature/sibling hops.
    """
    if hierarchy_edge_cost is None:
        hierarchy_edge_cost = HIERARCHY_EDGE_TRAVEL_COST

    nodes_by_id: Dict[str, MapNode] = {}
    for node in map_data.nodes:
        nodes_by_id.setdefault(node.id, node)

    children: Dict[str, List[MapNode]] = {}
    for node in map_data.nodes:
        if node.has_parent and node.parent_node_id:
            children.setdefault(node.parent_node_id, []).append(node)

    def traversable(node_id: Optional[str]) -> bool:
        node = nodes_by_id.get(node_id) if node_id else None
        return node is not None and node.is_traversable

    adjacency: Dict[str, List[AdjacencyEntry]] = {}

    def add(from_id: str, to_id: str, edge_id: str, cost: float) -> None:
        adjacency.setdefault(from_id, []).append(AdjacencyEntry(edge_id, to_id, cost))

    for edge in map_data.edges:
        if not traversable(edge.source_node_id) or not traversable(edge.target_node_id):
            continue
        cost = EDGE_STATUS_TRAVEL_COSTS[edge.status]
        if math.isinf(cost):
            continue
        add(edge.source_node_id, edge.target_node_id, edge.id, cost)
        if edge.status is not EdgeStatus.ONE_WAY:
            add(edge.target_node_id, edge.source_node_id, edge.id, cost)

    # Parent links only when the parent holds another usable child;
    # a lone child would just gain a detour through its container.
    for node in map_data.nodes:
        parent_id = node.parent_node_id
        if parent_id is None or not node.has_parent:
            continue
        if not traversable(node.id) or not traversable(parent_id):
            continue
        siblings = children.get(parent_id, [])
        if not any(s.id != node.id and traversable(s.id) for s in siblings):
            continue
        add(node.id, parent_id, hierarchy_edge_id(node.id, parent_id), hierarchy_edge_cost)
        add(parent_id, node.id, hierarchy_edge_id(parent_id, node.id), hierarchy_edge_cost)

    for siblings in children.values():
        features = [n for n in siblings if n.is_feature and traversable(n.id)]
        others = [n for n in siblings if not n.is_feature and traversable(n.id)]
        for feature in features:
            for other in others:
                add(feature.id, other.id, hierarchy_edge_id(feature.id, other.id), hierarchy_edge_cost)
                add(other.id, feature.id, hierarchy_edge_id(other.id, feature.id), hierarchy_edge_cost)

    logger.debug(
        "Travel adjacency built",
        extra={
            "nodes": len(nodes_by_id),
            "hops": sum(len(entries) for entries in adjacency.values()),
        },
    )

    return TravelAdjacency(
        edges_from=MappingProxyType(
            {node_id: tuple(entries) for node_id, entries in adjacency.items()}
        ),
        nodes_by_id=MappingProxyType(nodes_by_id),
        children_by_parent=MappingProxyType(
            {parent: tuple(n.id for n in kids) for parent, kids in children.items()}
        ),
        hierarchy_edge_ids=frozenset(
            entry.edge_id
            for entries in adjacency.values()
            for entry in entries
            if is_hierarchy_edge_id(entry.edge_id)
        ),
    )
