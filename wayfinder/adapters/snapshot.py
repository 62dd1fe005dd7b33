"""Map snapshot adapters.

StaticMapSnapshot wraps a MapData already in memory (game state, tests).
JsonMapSnapshot reads the ``{"nodes": [...], "edges": [...]}`` document
the game-state layer persists, and caches the parsed snapshot.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..domain.errors import MapDataError
from ..domain.models import MapData


@dataclass
class StaticMapSnapshot:
    """Snapshot source returning a fixed MapData."""

    map_data: MapData

    def load(self) -> MapData:
        return self.map_data


@dataclass
class JsonMapSnapshot:
    """Snapshot source backed by a JSON file.

    Attributes:
        path: Location of the map document
    """

    path: Path
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _map_data: Optional[MapData] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def load(self) -> MapData:
        """Load the map snapshot from disk, once.

        Returns:
            The parsed snapshot.

        Raises:
            MapDataError: If the file cannot be read or is not a map document.
        """
        if self._map_data is not None:
            return self._map_data

        self._logger.debug("Loading map snapshot", extra={"path": str(self.path)})

        try:
            with self.path.open(encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            raise MapDataError(
                f"Failed to read map snapshot: {self.path}",
                cause=e,
                field_name="path",
                value=str(self.path),
            )

        if not isinstance(payload, dict):
            raise MapDataError(
                "Map snapshot must be a JSON object",
                field_name="root",
                value=type(payload).__name__,
            )

        map_data = MapData.from_dict(payload)
        self._map_data = map_data
        self._logger.info(
            "Map snapshot loaded",
            extra={"nodes": len(map_data.nodes), "edges": len(map_data.edges)},
        )
        return map_data

    def clear_cache(self) -> None:
        """Forget the cached snapshot so the next load re-reads the file."""
        self._map_data = None
        self._logger.debug("Map snapshot cache cleared")
