"""Graph ports - Abstractions for map snapshots and travel routing.

These protocols define the contracts between the location service and
whatever holds the current map (a game-state store, a fixture, a file)
and computes routes over it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from ..domain.models import MapData, TravelStep
    from ..graph.adjacency import TravelAdjacency


class MapSnapshotPort(Protocol):
    """Port for reading the current map.

    Implementations return a read-only snapshot; the core never writes
    back to it.
    """

    def load(self) -> MapData:
        """Return the current map snapshot."""
        ...


class TravelSolverPort(Protocol):
    """Port for travel route computation.

    Implementation: graph/pathfinder.py (DijkstraTravelSolver)
    """

    def build_adjacency(self, map_data: MapData) -> TravelAdjacency:
        """Build the weighted adjacency for a snapshot, for reuse across searches."""
        ...

    def solve(
        self,
        map_data: MapData,
        start_id: str,
        end_id: str,
        adjacency: Optional[TravelAdjacency] = None,
    ) -> Tuple[List[TravelStep], float]:
        """Find the cheapest route and its cost.

        Raises:
            NodeNotFoundError: If start or end is missing or blocked.
            NoPathFoundError: If no route exists.
        """
        ...

    def solve_safe(
        self,
        map_data: MapData,
        start_id: str,
        end_id: str,
        adjacency: Optional[TravelAdjacency] = None,
    ) -> Optional[List[TravelStep]]:
        """Find the cheapest route, or None when there is none."""
        ...
