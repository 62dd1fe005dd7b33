"""Services layer - Application orchestration.

Available services:
- NodeResolver: AI identifiers and descriptions to map nodes
- LocationService: Snapshot-bound resolution and travel routing
"""

from .location_service import LocationService
from .node_resolver import (
    NodeResolver,
    attempt_match_and_set_node,
    direct_neighbor_ids,
    select_best_matching_map_node,
)

__all__ = [
    "LocationService",
    "NodeResolver",
    "attempt_match_and_set_node",
    "direct_neighbor_ids",
    "select_best_matching_map_node",
]
