"""Read-only helpers for the containment hierarchy of map nodes.

Node types are ordered from region down to feature (NODE_TYPE_LEVELS).
A child is expected to sit at its parent's level or deeper, except
features, which may hang under anything but never contain other nodes.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from ..domain.models import NODE_TYPE_LEVELS, MapNode, NodeType

NODE_TYPE_DOWNGRADES: Mapping[NodeType, Optional[NodeType]] = {
    NodeType.REGION: NodeType.LOCATION,
    NodeType.LOCATION: NodeType.SETTLEMENT,
    NodeType.SETTLEMENT: None,
    NodeType.DISTRICT: None,
    NodeType.EXTERIOR: None,
    NodeType.INTERIOR: NodeType.ROOM,
    NodeType.ROOM: NodeType.FEATURE,
    NodeType.FEATURE: None,
}

NODE_TYPE_UPGRADES: Mapping[NodeType, Optional[NodeType]] = {
    NodeType.FEATURE: NodeType.ROOM,
    NodeType.ROOM: NodeType.INTERIOR,
    NodeType.INTERIOR: NodeType.EXTERIOR,
    NodeType.EXTERIOR: NodeType.DISTRICT,
    NodeType.DISTRICT: NodeType.SETTLEMENT,
    NodeType.SETTLEMENT: NodeType.LOCATION,
    NodeType.LOCATION: NodeType.REGION,
    NodeType.REGION: None,
}


def index_nodes(nodes: Sequence[MapNode]) -> Dict[str, MapNode]:
    """Map node ids to nodes, keeping the first node for a repeated id."""
    by_id: Dict[str, MapNode] = {}
    for node in nodes:
        by_id.setdefault(node.id, node)
    return by_id


def get_parent(node: MapNode, nodes_by_id: Mapping[str, MapNode]) -> Optional[MapNode]:
    if not node.has_parent or node.parent_node_id is None:
        return None
    return nodes_by_id.get(node.parent_node_id)


def get_children(node: MapNode, nodes: Sequence[MapNode]) -> List[MapNode]:
    return [n for n in nodes if n.parent_node_id == node.id and n.id != node.id]


def get_siblings(
    node: MapNode,
    nodes: Sequence[MapNode],
    nodes_by_id: Optional[Mapping[str, MapNode]] = None,
) -> List[MapNode]:
    """Return the other children of the node's parent, empty for top-level nodes."""
    parent = get_parent(node, nodes_by_id or index_nodes(nodes))
    if parent is None:
        return []
    return [n for n in get_children(parent, nodes) if n.id != node.id]


def is_valid_parent(parent: MapNode, child: MapNode) -> bool:
    """Check the level rule for a parent/child pair."""
    if parent.is_feature:
        return False
    if child.is_feature:
        return True
    return NODE_TYPE_LEVELS[parent.node_type] <= NODE_TYPE_LEVELS[child.node_type]


def map_has_hierarchy_conflict(nodes: Sequence[MapNode]) -> bool:
    """Check whether any node sits under a parent that may not contain it."""
    nodes_by_id = index_nodes(nodes)
    for node in nodes:
        parent = get_parent(node, nodes_by_id)
        if parent is not None and not is_valid_parent(parent, node):
            return True
    return False


def suggest_node_type_downgrade(
    node: MapNode, parent_type: NodeType, nodes: Sequence[MapNode]
) -> Optional[NodeType]:
    """Suggest a narrower type that would fit the node under ``parent_type``.

    Returns None when there is no narrower type, when it would still not
    sit below the parent, or when one of the node's children would no
    longer fit below it.
    """
    candidate = NODE_TYPE_DOWNGRADES[node.node_type]
    if candidate is None:
        return None
    level = NODE_TYPE_LEVELS[candidate]
    if NODE_TYPE_LEVELS[parent_type] >= level:
        return None
    if all(NODE_TYPE_LEVELS[c.node_type] > level for c in get_children(node, nodes)):
        return candidate
    return None


def suggest_node_type_upgrade(
    node: MapNode, nodes: Sequence[MapNode]
) -> Optional[NodeType]:
    """Suggest a wider type so the node can contain its children."""
    candidate = NODE_TYPE_UPGRADES[node.node_type]
    if candidate is None:
        return None
    level = NODE_TYPE_LEVELS[candidate]
    parent = get_parent(node, index_nodes(nodes))
    if parent is not None and NODE_TYPE_LEVELS[parent.node_type] >= level:
        return None
    if any(NODE_TYPE_LEVELS[c.node_type] <= level for c in get_children(node, nodes)):
        return None
    return candidate
