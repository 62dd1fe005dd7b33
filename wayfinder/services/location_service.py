"""Location service - One-call entry point for the narrative engine.

Binds a map snapshot source to node resolution and travel routing so
callers can go from AI output straight to a node id, and from two node
ids to a route, without handling the snapshot themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..domain.models import NodeMatchResult, TravelStep
from ..graph.pathfinder import DijkstraTravelSolver
from ..ports.graph import MapSnapshotPort, TravelSolverPort
from ..ports.resolution import NodeResolverPort
from .node_resolver import NodeResolver


@dataclass
class LocationService:
    """Resolve player positions and travel routes against the current map.

    Attributes:
        snapshot: Source of the current MapData
        resolver: Node resolution strategy
        solver: Travel route solver
    """

    snapshot: MapSnapshotPort
    resolver: NodeResolverPort = field(default_factory=NodeResolver)
    solver: TravelSolverPort = field(default_factory=DijkstraTravelSolver)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve_identifier(
        self, identifier: Optional[str], previous_node_id: Optional[str] = None
    ) -> NodeMatchResult:
        map_data = self.snapshot.load()
        return self.resolver.match_identifier(identifier, previous_node_id, map_data.nodes)

    def resolve_place(
        self, local_place: Optional[str], previous_node_id: Optional[str] = None
    ) -> Optional[str]:
        map_data = self.snapshot.load()
        return self.resolver.match_description(
            local_place, map_data.nodes, map_data.edges, previous_node_id
        )

    def resolve(
        self,
        identifier: Optional[str] = None,
        local_place: Optional[str] = None,
        previous_node_id: Optional[str] = None,
    ) -> Optional[str]:
        """Resolve the player's position from whatever the AI supplied.

        The identifier is tried first; the free-text description is only
        consulted when the identifier is absent or does not resolve.

        Args:
            identifier: Node id, name or alias suggested by the AI.
            local_place: Free-text description of the position.
            previous_node_id: The player's previous node.

        Returns:
            The resolved node id, or None when neither input resolves.
        """
        map_data = self.snapshot.load()

        if identifier:
            result = self.resolver.match_identifier(
                identifier, previous_node_id, map_data.nodes
            )
            if result.matched:
                self._logger.info(
                    "Position resolved from identifier",
                    extra={"identifier": identifier, "node_id": result.node_id},
                )
                return result.node_id

        node_id = self.resolver.match_description(
            local_place, map_data.nodes, map_data.edges, previous_node_id
        )
        if node_id is None:
            self._logger.info(
                "Position left unresolved",
                extra={"identifier": identifier, "local_place": local_place},
            )
        else:
            self._logger.info(
                "Position resolved from description",
                extra={"local_place": local_place, "node_id": node_id},
            )
        return node_id

    def travel_path(self, start_id: str, end_id: str) -> Optional[List[TravelStep]]:
        """Cheapest route between two nodes, or None when there is none."""
        return self.solver.solve_safe(self.snapshot.load(), start_id, end_id)

    def travel_route(self, start_id: str, end_id: str) -> Tuple[List[TravelStep], float]:
        """Cheapest route and its cost.

        Raises:
            NodeNotFoundError: If start or end is missing or blocked.
            NoPathFoundError: If no route exists.
        """
        return self.solver.solve(self.snapshot.load(), start_id, end_id)

    def suggest(self, identifier: str) -> List[Tuple[str, float]]:
        return self.resolver.suggest(identifier, self.snapshot.load().nodes)
