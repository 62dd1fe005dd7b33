"""Location graph utilities.

This subpackage turns a map snapshot into a weighted travel adjacency
(real edges plus synthetic hierarchy hops) and runs the cheapest-route
search on top of it.
"""

from .adjacency import (
    EDGE_STATUS_TRAVEL_COSTS,
    HIERARCHY_EDGE_TRAVEL_COST,
    AdjacencyEntry,
    TravelAdjacency,
    build_travel_adjacency,
    hierarchy_edge_id,
    is_hierarchy_edge_id,
)
from .hierarchy import (
    get_children,
    get_parent,
    get_siblings,
    is_valid_parent,
    map_has_hierarchy_conflict,
    suggest_node_type_downgrade,
    suggest_node_type_upgrade,
)
from .pathfinder import DijkstraTravelSolver, find_travel_path, path_cost
from .priority_queue import MinHeap

__all__ = [
    "EDGE_STATUS_TRAVEL_COSTS",
    "HIERARCHY_EDGE_TRAVEL_COST",
    "AdjacencyEntry",
    "TravelAdjacency",
    "build_travel_adjacency",
    "hierarchy_edge_id",
    "is_hierarchy_edge_id",
    "DijkstraTravelSolver",
    "find_travel_path",
    "path_cost",
    "MinHeap",
    "get_parent",
    "get_children",
    "get_siblings",
    "is_valid_parent",
    "map_has_hierarchy_conflict",
    "suggest_node_type_downgrade",
    "suggest_node_type_upgrade",
]
