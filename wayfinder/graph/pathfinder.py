"""Cheapest travel route between two map nodes.

Dijkstra over the travel adjacency, with a binary heap open set and lazy
deletion of stale entries. Routes are returned as alternating node and
edge steps: ``node, edge, node, ..., node``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import PathfindingConfig, get_config
from ..domain.errors import NodeNotFoundError, NoPathFoundError
from ..domain.models import MapData, TravelStep
from .adjacency import TravelAdjacency, build_travel_adjacency
from .priority_queue import MinHeap

logger = logging.getLogger(__name__)


def find_travel_path(
    map_data: MapData,
    start_id: str,
    end_id: str,
    adjacency: Optional[TravelAdjacency] = None,
) -> Optional[List[TravelStep]]:
    """Compute the cheapest route between two nodes.

    Parameters
    ----------
    map_data:
        Snapshot of the map graph.
    start_id:
        Id of the departure node.
    end_id:
        Id of the destination node.
    adjacency:
        Adjacency previously built from the same snapshot. Built on the
        fly when omitted; both give identical routes.

    Returns
    -------
    list[TravelStep] or None
        The route, starting with ``start_id`` and ending with ``end_id``,
        or None when either node is missing or blocked, or when the
        destination cannot be reached. Among equal-cost routes the one
        found first in heap insertion order wins.
    """
    if adjacency is None:
        adjacency = build_travel_adjacency(map_data)
    result = _dijkstra(adjacency, start_id, end_id)
    return result[0] if result is not None else None


def path_cost(path: Sequence[TravelStep], adjacency: TravelAdjacency) -> float:
    """Sum the hop costs along a route.

    Returns infinity if the route uses a hop missing from the adjacency.
    """
    total = 0.0
    for i in range(1, len(path) - 1, 2):
        cost = adjacency.hop_cost(path[i - 1].id, path[i].id, path[i + 1].id)
        if cost is None:
            return math.inf
        total += cost
    return total


def _dijkstra(
    adjacency: TravelAdjacency, start: str, end: str
) -> Optional[Tuple[List[TravelStep], float]]:
    if not adjacency.is_traversable(start) or not adjacency.is_traversable(end):
        return None

    distances: Dict[str, float] = {start: 0.0}
    previous: Dict[str, Tuple[str, str]] = {}

    heap: MinHeap[str] = MinHeap()
    heap.push(start, 0.0)

    while heap:
        popped = heap.pop_with_priority()
        if popped is None:
            break
        current, current_cost = popped

        if current_cost != distances.get(current, math.inf):
            continue

        if current == end:
            break

        for entry in adjacency.neighbors(current):
            new_cost = current_cost + entry.cost
            if new_cost < distances.get(entry.to_node_id, math.inf):
                distances[entry.to_node_id] = new_cost
                previous[entry.to_node_id] = (current, entry.edge_id)
                heap.push(entry.to_node_id, new_cost)

    if end not in distances:
        return None

    steps: List[TravelStep] = [TravelStep.node(end)]
    current = end
    while current != start:
        from_id, edge_id = previous[current]
        steps.append(TravelStep.edge(edge_id))
        steps.append(TravelStep.node(from_id))
        current = from_id

    steps.reverse()
    return steps, distances[end]


@dataclass
class DijkstraTravelSolver:
    """Travel route solver with logging and configurable hierarchy cost.

    Attributes:
        config: Pathfinding configuration (hierarchy hop cost)
    """

    config: PathfindingConfig = field(default_factory=lambda: get_config().pathfinding)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def build_adjacency(self, map_data: MapData) -> TravelAdjacency:
        return build_travel_adjacency(
            map_data, hierarchy_edge_cost=self.config.hierarchy_edge_cost
        )

    def solve(
        self,
        map_data: MapData,
        start_id: str,
        end_id: str,
        adjacency: Optional[TravelAdjacency] = None,
    ) -> Tuple[List[TravelStep], float]:
        """Find the cheapest route between two nodes.

        Args:
            map_data: Snapshot of the map graph.
            start_id: Departure node id.
            end_id: Destination node id.
            adjacency: Optional prebuilt adjacency for the same snapshot.

        Returns:
            The route steps and their total cost.

        Raises:
            NodeNotFoundError: If start or end is missing or blocked.
            NoPathFoundError: If no route exists.
        """
        self._logger.debug(
            "Solving travel path",
            extra={"start_id": start_id, "end_id": end_id},
        )

        adjacency = adjacency or self.build_adjacency(map_data)

        for node_id in (start_id, end_id):
            if not adjacency.is_traversable(node_id):
                raise NodeNotFoundError(
                    f"Node missing or not traversable: {node_id}",
                    node_id=node_id,
                )

        result = _dijkstra(adjacency, start_id, end_id)
        if result is None:
            self._logger.info(
                "No travel path found",
                extra={"start_id": start_id, "end_id": end_id},
            )
            raise NoPathFoundError(
                f"No path from {start_id} to {end_id}",
                start_id=start_id,
                end_id=end_id,
            )

        steps, cost = result
        self._logger.info(
            "Travel path found",
            extra={
                "start_id": start_id,
                "end_id": end_id,
                "steps": len(steps),
                "cost": cost,
            },
        )
        return steps, cost

    def solve_safe(
        self,
        map_data: MapData,
        start_id: str,
        end_id: str,
        adjacency: Optional[TravelAdjacency] = None,
    ) -> Optional[List[TravelStep]]:
        """Find the cheapest route, returning None instead of raising."""
        adjacency = adjacency or self.build_adjacency(map_data)
        result = _dijkstra(adjacency, start_id, end_id)
        if result is None:
            self._logger.debug(
                "No travel path found",
                extra={"start_id": start_id, "end_id": end_id},
            )
            return None
        return result[0]
