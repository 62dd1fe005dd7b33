"""Immutable domain models for wayfinder.

All models are frozen dataclasses with slots. They describe the location
graph snapshot handed over by the game-state layer (nodes and edges) and
the small derived values the core hands back (travel steps, match
results, phrase chunks). The core never mutates a snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar

from .errors import MapDataError

E = TypeVar("E", bound=Enum)

# Parent id used by the game-state layer for top-level nodes.
ROOT_NODE_ID = "Universe"


class NodeType(str, Enum):
    """Kind of location, ordered from the widest to the narrowest."""

    REGION = "region"
    LOCATION = "location"
    SETTLEMENT = "settlement"
    DISTRICT = "district"
    EXTERIOR = "exterior"
    INTERIOR = "interior"
    ROOM = "room"
    FEATURE = "feature"


# Lower level = higher in the containment hierarchy.
NODE_TYPE_LEVELS: Mapping[NodeType, int] = {
    node_type: level for level, node_type in enumerate(NodeType)
}


class NodeStatus(str, Enum):
    UNDISCOVERED = "undiscovered"
    DISCOVERED = "discovered"
    RUMORED = "rumored"
    QUEST_TARGET = "quest_target"
    BLOCKED = "blocked"


class EdgeType(str, Enum):
    PATH = "path"
    ROAD = "road"
    SEA_ROUTE = "sea route"
    DOOR = "door"
    TELEPORTER = "teleporter"
    SECRET_PASSAGE = "secret_passage"
    RIVER_CROSSING = "river_crossing"
    TEMPORARY_BRIDGE = "temporary_bridge"
    BOARDING_HOOK = "boarding_hook"
    SHORTCUT = "shortcut"


class EdgeStatus(str, Enum):
    OPEN = "open"
    ACCESSIBLE = "accessible"
    CLOSED = "closed"
    LOCKED = "locked"
    BLOCKED = "blocked"
    HIDDEN = "hidden"
    RUMORED = "rumored"
    ONE_WAY = "one_way"
    COLLAPSED = "collapsed"
    REMOVED = "removed"
    ACTIVE = "active"
    INACTIVE = "inactive"


class PrepositionType(str, Enum):
    """How directly a preposition locates the phrase that follows it."""

    DIRECT = "direct"
    RELATIONAL = "relational"
    NEGATING = "negating"
    CONTEXTUAL_LINKING = "contextual_linking"


def _coerce_enum(enum_cls: Type[E], raw: Any, field_name: str) -> E:
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError as e:
        raise MapDataError(
            f"Invalid {field_name}: {raw!r}",
            field_name=field_name,
            value=str(raw),
            cause=e,
        )


def _merged_payload(payload: Any, kind: str) -> Mapping[str, Any]:
    """Flatten a node/edge payload, lifting keys from its ``data`` block."""
    if not isinstance(payload, Mapping):
        raise MapDataError(
            f"{kind} payload must be an object",
            field_name=kind.lower(),
            value=type(payload).__name__,
        )
    nested = payload.get("data") or {}
    if not isinstance(nested, Mapping):
        raise MapDataError(
            f"{kind} data must be an object",
            field_name="data",
            value=type(nested).__name__,
        )
    return {**payload, **nested}


def _payload_list(payload: Mapping[str, Any], key: str) -> list:
    items = payload.get(key) or []
    if not isinstance(items, list):
        raise MapDataError(
            f"Snapshot {key} must be a list",
            field_name=key,
            value=type(items).__name__,
        )
    return items


def _unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    ordered = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return tuple(ordered)


@dataclass(frozen=True, slots=True)
class MapNode:
    """A location on the map graph.

    Attributes:
        id: Unique, stable node identifier
        place_name: Display name of the location
        node_type: Position of the node in the containment hierarchy
        status: Discovery / accessibility status
        parent_node_id: Containing node, None or ROOT_NODE_ID for top level
        aliases: Alternate names, ordered and without duplicates
        description: Free text description
    """

    id: str
    place_name: str
    node_type: NodeType = NodeType.LOCATION
    status: NodeStatus = NodeStatus.DISCOVERED
    parent_node_id: Optional[str] = None
    aliases: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "node_type", _coerce_enum(NodeType, self.node_type, "nodeType")
        )
        object.__setattr__(
            self, "status", _coerce_enum(NodeStatus, self.status, "status")
        )
        object.__setattr__(self, "aliases", _unique_in_order(self.aliases))

    @property
    def is_feature(self) -> bool:
        return self.node_type is NodeType.FEATURE

    @property
    def is_traversable(self) -> bool:
        return self.status is not NodeStatus.BLOCKED

    @property
    def has_parent(self) -> bool:
        """Check if the node hangs under another node rather than the root."""
        parent = self.parent_node_id
        return bool(parent) and parent.lower() != ROOT_NODE_ID.lower()

    @property
    def names(self) -> tuple[str, ...]:
        """Place name followed by aliases, skipping blank entries."""
        return tuple(
            name for name in (self.place_name, *self.aliases) if name and name.strip()
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> MapNode:
        """Build a node from a game-state payload.

        Accepts both the flat form and the nested ``data`` form where
        type, status, parent, aliases and description live under
        ``payload["data"]``. Keys may be camelCase or snake_case.
        """
        data = _merged_payload(payload, "Node")
        try:
            node_id = data["id"]
        except KeyError as e:
            raise MapDataError("Node payload has no id", field_name="id", cause=e)
        place_name = data.get("placeName", data.get("place_name")) or node_id
        return cls(
            id=str(node_id),
            place_name=str(place_name),
            node_type=data.get("nodeType", data.get("node_type")) or NodeType.LOCATION,
            status=data.get("status") or NodeStatus.DISCOVERED,
            parent_node_id=data.get("parentNodeId", data.get("parent_node_id")),
            aliases=tuple(data.get("aliases") or ()),
            description=data.get("description") or "",
        )


@dataclass(frozen=True, slots=True)
class MapEdge:
    """A navigable connection between two nodes.

    Attributes:
        id: Unique edge identifier
        source_node_id: Node the edge starts from
        target_node_id: Node the edge leads to
        type: Kind of connection
        status: Traversability status
        travel_time: Optional descriptive travel time
        description: Free text description
    """

    id: str
    source_node_id: str
    target_node_id: str
    type: EdgeType = EdgeType.PATH
    status: EdgeStatus = EdgeStatus.OPEN
    travel_time: Optional[str] = None
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _coerce_enum(EdgeType, self.type, "type"))
        object.__setattr__(
            self, "status", _coerce_enum(EdgeStatus, self.status, "status")
        )

    def touches(self, node_id: str) -> bool:
        return node_id in (self.source_node_id, self.target_node_id)

    def other_end(self, node_id: str) -> Optional[str]:
        """Return the opposite endpoint, or None if node_id is not an endpoint."""
        if node_id == self.source_node_id:
            return self.target_node_id
        if node_id == self.target_node_id:
            return self.source_node_id
        return None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> MapEdge:
        data = _merged_payload(payload, "Edge")
        try:
            edge_id = data["id"]
            source = data.get("sourceNodeId", data.get("source_node_id"))
            target = data.get("targetNodeId", data.get("target_node_id"))
        except KeyError as e:
            raise MapDataError("Edge payload has no id", field_name="id", cause=e)
        if not source or not target:
            raise MapDataError(
                f"Edge {edge_id} is missing an endpoint",
                field_name="sourceNodeId" if not source else "targetNodeId",
            )
        return cls(
            id=str(edge_id),
            source_node_id=str(source),
            target_node_id=str(target),
            type=data.get("type") or EdgeType.PATH,
            status=data.get("status") or EdgeStatus.OPEN,
            travel_time=data.get("travelTime", data.get("travel_time")),
            description=data.get("description") or "",
        )


@dataclass(frozen=True, slots=True)
class MapData:
    """Snapshot of the whole location graph for the current session."""

    nodes: tuple[MapNode, ...] = field(default_factory=tuple)
    edges: tuple[MapEdge, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

    def get_node(self, node_id: str) -> Optional[MapNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> MapData:
        return cls(
            nodes=tuple(MapNode.from_dict(n) for n in _payload_list(payload, "nodes")),
            edges=tuple(MapEdge.from_dict(e) for e in _payload_list(payload, "edges")),
        )


@dataclass(frozen=True, slots=True)
class Chunk:
    """A phrase of a location description and the preposition introducing it.

    Attributes:
        phrase: The phrase text, cut at its first comma
        preposition_keyword: Lowercased keyword, or ``implicit_subject``
        preposition_type: Category of the preposition
        preposition_weight: Weight applied to scores from this phrase
        original_preposition_text: Keyword as written in the input
    """

    phrase: str
    preposition_keyword: str
    preposition_type: PrepositionType
    preposition_weight: float
    original_preposition_text: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TravelStep:
    """One step of a travel route: a node or the edge between two nodes."""

    step: str
    id: str

    @classmethod
    def node(cls, node_id: str) -> TravelStep:
        return cls(step="node", id=node_id)

    @classmethod
    def edge(cls, edge_id: str) -> TravelStep:
        return cls(step="edge", id=edge_id)

    @property
    def is_node(self) -> bool:
        return self.step == "node"

    def to_dict(self) -> dict[str, str]:
        return {"step": self.step, "id": self.id}


@dataclass(frozen=True, slots=True)
class NodeMatchResult:
    """Outcome of resolving an AI-supplied node identifier."""

    matched: bool
    node_id: Optional[str] = None

    @classmethod
    def no_match(cls) -> NodeMatchResult:
        return cls(matched=False, node_id=None)
