"""Top-level package for wayfinder.

Recovers a discrete position on a hierarchical location graph from the
free text a language model writes about the game world, and computes
cost-aware travel routes over that graph.

    from wayfinder import MapData, find_travel_path, select_best_matching_map_node
"""

from .domain import (
    MapData,
    MapEdge,
    MapNode,
    NodeMatchResult,
    TravelStep,
    WayfinderError,
)
from .graph import DijkstraTravelSolver, build_travel_adjacency, find_travel_path
from .nlp import parse_into_chunks, score_node
from .services import (
    LocationService,
    NodeResolver,
    attempt_match_and_set_node,
    select_best_matching_map_node,
)

__version__ = "0.1.0"

__all__ = [
    "MapData",
    "MapEdge",
    "MapNode",
    "NodeMatchResult",
    "TravelStep",
    "WayfinderError",
    "DijkstraTravelSolver",
    "build_travel_adjacency",
    "find_travel_path",
    "parse_into_chunks",
    "score_node",
    "LocationService",
    "NodeResolver",
    "attempt_match_and_set_node",
    "select_best_matching_map_node",
]
