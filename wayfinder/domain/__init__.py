"""Domain layer - Core graph models and errors.

This module contains immutable domain models and typed errors
used throughout the package. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    MapDataError,
    NodeNotFoundError,
    NoPathFoundError,
    WayfinderError,
)
from .models import (
    NODE_TYPE_LEVELS,
    ROOT_NODE_ID,
    Chunk,
    EdgeStatus,
    EdgeType,
    MapData,
    MapEdge,
    MapNode,
    NodeMatchResult,
    NodeStatus,
    NodeType,
    PrepositionType,
    TravelStep,
)

__all__ = [
    # Models
    "MapNode",
    "MapEdge",
    "MapData",
    "Chunk",
    "TravelStep",
    "NodeMatchResult",
    "NodeType",
    "NodeStatus",
    "EdgeType",
    "EdgeStatus",
    "PrepositionType",
    "NODE_TYPE_LEVELS",
    "ROOT_NODE_ID",
    # Errors
    "WayfinderError",
    "MapDataError",
    "NodeNotFoundError",
    "NoPathFoundError",
    "ConfigurationError",
]
