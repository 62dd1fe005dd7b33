"""Ports layer - Protocols the services depend on.

Ports define the contracts between the application core and the
adapters that provide map snapshots, routing and node resolution. They
enable dependency injection and make the services testable.
"""

from .graph import MapSnapshotPort, TravelSolverPort
from .resolution import NodeResolverPort

__all__ = [
    "MapSnapshotPort",
    "TravelSolverPort",
    "NodeResolverPort",
]
