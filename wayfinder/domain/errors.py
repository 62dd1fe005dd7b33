"""Typed domain errors for wayfinder.

Resolution misses and unreachable destinations are ordinary results
(``None`` / ``matched=False``) and never raise. These errors cover the
remaining failure modes: malformed snapshot payloads, bad configuration,
and the explicit raising variant of the travel solver.

All errors inherit from WayfinderError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class WayfinderError(Exception):
    """Base error for the wayfinder domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class MapDataError(WayfinderError):
    """A map snapshot payload could not be turned into domain models.

    Attributes:
        field_name: Name of the offending field
        value: The rejected raw value
    """

    field_name: str = ""
    value: Optional[str] = None


@dataclass
class NodeNotFoundError(WayfinderError):
    """Node id missing from the snapshot or not traversable.

    Attributes:
        node_id: The node id that was not found
    """

    node_id: str = ""


@dataclass
class NoPathFoundError(WayfinderError):
    """No traversable route exists between the requested nodes.

    Attributes:
        start_id: Origin node id
        end_id: Destination node id
    """

    start_id: str = ""
    end_id: str = ""


@dataclass
class ConfigurationError(WayfinderError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
