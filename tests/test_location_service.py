"""Tests for the snapshot-bound location service."""

import json

import pytest

from wayfinder.adapters import JsonMapSnapshot, StaticMapSnapshot
from wayfinder.config import MatcherConfig, PathfindingConfig
from wayfinder.domain.errors import MapDataError, NoPathFoundError
from wayfinder.domain.models import MapData
from wayfinder.graph.pathfinder import DijkstraTravelSolver
from wayfinder.services.location_service import LocationService
from wayfinder.services.node_resolver import NodeResolver

MAP_PAYLOAD = {
    "nodes": [
        {"id": "vale", "placeName": "Green Vale", "data": {"nodeType": "region", "parentNodeId": "Universe"}},
        {"id": "inn-7fr4", "placeName": "Old Lantern Inn", "data": {"parentNodeId": "vale"}},
        {"id": "well-2c9d", "placeName": "Old Well", "data": {"parentNodeId": "vale"}},
        {
            "id": "hatch",
            "placeName": "Cellar Hatch",
            "data": {"nodeType": "feature", "parentNodeId": "inn-7fr4"},
        },
        {"id": "isle", "placeName": "Lonely Isle", "data": {"nodeType": "region"}},
    ],
    "edges": [
        {"id": "road", "sourceNodeId": "inn-7fr4", "targetNodeId": "well-2c9d", "data": {"status": "open"}},
        {"id": "trap", "sourceNodeId": "inn-7fr4", "targetNodeId": "hatch"},
    ],
}


@pytest.fixture
def service():
    return LocationService(
        snapshot=StaticMapSnapshot(MapData.from_dict(MAP_PAYLOAD)),
        resolver=NodeResolver(config=MatcherConfig()),
        solver=DijkstraTravelSolver(config=PathfindingConfig()),
    )


def test_identifier_is_tried_first(service):
    assert service.resolve("inn-7fx9", "near the Old Well") == "inn-7fr4"


def test_description_used_when_identifier_fails(service):
    assert service.resolve("dragon-lair", "near the Old Well") == "well-2c9d"
    assert service.resolve(None, "the cellar hatch") == "hatch"


def test_unresolved_position_returns_none(service):
    assert service.resolve("dragon-lair", "somewhere unknown") is None
    assert service.resolve() is None


def test_resolve_identifier_and_place(service):
    assert service.resolve_identifier("old lantern inn").node_id == "inn-7fr4"
    assert service.resolve_place("far from the chapel, by the old well") == "well-2c9d"


def test_travel_path_and_route(service):
    path = service.travel_path("vale", "hatch")

    assert [s.id for s in path if s.is_node] == ["vale", "inn-7fr4", "hatch"]
    steps, cost = service.travel_route("well-2c9d", "hatch")
    assert [s.id for s in steps] == ["well-2c9d", "road", "inn-7fr4", "trap", "hatch"]
    assert cost == 2.0


def test_unreachable_destination(service):
    assert service.travel_path("vale", "isle") is None
    with pytest.raises(NoPathFoundError):
        service.travel_route("vale", "isle")


def test_suggest(service):
    assert service.suggest("Old Wel")[0][0] == "well-2c9d"


def test_json_snapshot_loads_once(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(json.dumps(MAP_PAYLOAD), encoding="utf-8")
    snapshot = JsonMapSnapshot(path)

    first = snapshot.load()
    path.write_text(json.dumps({"nodes": [], "edges": []}), encoding="utf-8")

    assert snapshot.load() is first
    assert len(first.nodes) == 5
    snapshot.clear_cache()
    assert snapshot.load().nodes == ()


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        '{"nodes": [1]}',
        '{"nodes": "ab"}',
        '{"nodes": [{"id": "a", "data": "x"}]}',
        '{"edges": {"id": "e1"}}',
    ],
)
def test_json_snapshot_rejects_bad_documents(tmp_path, content):
    path = tmp_path / "map.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(MapDataError):
        JsonMapSnapshot(path).load()


def test_json_snapshot_missing_file(tmp_path):
    with pytest.raises(MapDataError) as exc_info:
        JsonMapSnapshot(tmp_path / "missing.json").load()

    assert isinstance(exc_info.value.cause, OSError)
