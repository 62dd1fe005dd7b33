"""Tests for the travel pathfinder."""

import math
import random

import pytest

from wayfinder.config import PathfindingConfig
from wayfinder.domain.errors import NodeNotFoundError, NoPathFoundError
from wayfinder.domain.models import (
    EdgeStatus,
    MapData,
    MapEdge,
    MapNode,
    NodeStatus,
    NodeType,
    TravelStep,
)
from wayfinder.graph.adjacency import build_travel_adjacency
from wayfinder.graph.pathfinder import DijkstraTravelSolver, find_travel_path, path_cost


def node(node_id, parent="Universe", node_type=NodeType.LOCATION, status=NodeStatus.DISCOVERED):
    return MapNode(
        id=node_id,
        place_name=node_id,
        node_type=node_type,
        status=status,
        parent_node_id=parent,
    )


def edge(edge_id, source, target, status=EdgeStatus.OPEN):
    return MapEdge(id=edge_id, source_node_id=source, target_node_id=target, status=status)


def node_ids(path):
    return [step.id for step in path if step.is_node]


@pytest.fixture
def square_map():
    """a-b-c open, c-d rumored, d-a open."""
    return MapData(
        nodes=[node(i) for i in ("a", "b", "c", "d")],
        edges=[
            edge("e1", "a", "b"),
            edge("e2", "b", "c"),
            edge("e3", "c", "d", EdgeStatus.RUMORED),
            edge("e4", "d", "a"),
        ],
    )


@pytest.fixture
def nested_map():
    """Region n1 with locations n2 and n4; feature n3 inside n2 reached by e1."""
    return MapData(
        nodes=[
            node("n1", node_type=NodeType.REGION),
            node("n2", parent="n1"),
            node("n3", parent="n2", node_type=NodeType.FEATURE),
            node("n4", parent="n1"),
        ],
        edges=[edge("e1", "n2", "n3")],
    )


def test_start_equals_end_returns_single_node(square_map):
    assert find_travel_path(square_map, "a", "a") == [TravelStep.node("a")]


def test_missing_or_blocked_endpoints_return_none(square_map):
    blocked = MapData(
        nodes=[node("a"), node("b", status=NodeStatus.BLOCKED)],
        edges=[edge("e1", "a", "b")],
    )

    assert find_travel_path(square_map, "a", "ghost") is None
    assert find_travel_path(square_map, "ghost", "a") is None
    assert find_travel_path(blocked, "a", "b") is None
    assert find_travel_path(blocked, "b", "b") is None


def test_path_alternates_nodes_and_edges(square_map):
    path = find_travel_path(square_map, "a", "c")

    assert path is not None
    assert [s.step for s in path] == ["node", "edge", "node", "edge", "node"]
    assert path[0].id == "a"
    assert path[-1].id == "c"
    assert node_ids(path) == ["a", "b", "c"]


def test_rumored_edge_is_avoided_when_cheaper_route_exists(square_map):
    path = find_travel_path(square_map, "a", "c")
    adjacency = build_travel_adjacency(square_map)

    assert path_cost(path, adjacency) == 2.0


def test_prebuilt_adjacency_gives_same_path(square_map):
    direct = find_travel_path(square_map, "a", "c")
    adjacency = build_travel_adjacency(square_map)

    assert find_travel_path(square_map, "a", "c", adjacency) == direct
    assert find_travel_path(square_map, "d", "b", adjacency) == find_travel_path(
        square_map, "d", "b"
    )


def test_route_avoids_blocked_node():
    data = MapData(
        nodes=[node("a"), node("b", status=NodeStatus.BLOCKED), node("c"), node("d")],
        edges=[
            edge("e1", "a", "b"),
            edge("e2", "b", "c"),
            edge("e3", "a", "d", EdgeStatus.RUMORED),
            edge("e4", "d", "c", EdgeStatus.RUMORED),
        ],
    )

    path = find_travel_path(data, "a", "c")

    assert node_ids(path) == ["a", "d", "c"]
    assert path_cost(path, build_travel_adjacency(data)) == 10.0


def test_closed_edge_makes_destination_unreachable():
    data = MapData(
        nodes=[node("a"), node("b")],
        edges=[edge("e1", "a", "b", EdgeStatus.LOCKED)],
    )

    assert find_travel_path(data, "a", "b") is None


def test_one_way_edge_is_respected():
    data = MapData(
        nodes=[node("a"), node("b")],
        edges=[edge("e1", "a", "b", EdgeStatus.ONE_WAY)],
    )

    assert node_ids(find_travel_path(data, "a", "b")) == ["a", "b"]
    assert find_travel_path(data, "b", "a") is None


def test_equal_cost_routes_resolve_by_insertion_order():
    data = MapData(
        nodes=[node(i) for i in ("a", "b", "c", "d")],
        edges=[
            edge("ab", "a", "b"),
            edge("ac", "a", "c"),
            edge("bd", "b", "d"),
            edge("cd", "c", "d"),
        ],
    )

    path = find_travel_path(data, "a", "d")

    assert [s.id for s in path] == ["a", "ab", "b", "bd", "d"]


def test_single_child_chain_is_unreachable_from_region():
    """Without siblings there are no hierarchy hops to climb or descend."""
    data = MapData(
        nodes=[
            node("n1", node_type=NodeType.REGION),
            node("n2", parent="n1"),
            node("n3", parent="n2", node_type=NodeType.FEATURE),
        ],
        edges=[edge("e1", "n2", "n3")],
    )

    assert find_travel_path(data, "n1", "n3") is None
    assert node_ids(find_travel_path(data, "n2", "n3")) == ["n2", "n3"]


def test_region_to_feature_costs_hierarchy_hop_plus_edge(nested_map):
    path = find_travel_path(nested_map, "n1", "n3")
    adjacency = build_travel_adjacency(nested_map)

    assert node_ids(path) == ["n1", "n2", "n3"]
    assert path[-2].id == "e1"
    assert path_cost(path, adjacency) == 21.0


def test_siblings_reach_each_other_through_parent(nested_map):
    path = find_travel_path(nested_map, "n2", "n4")

    assert node_ids(path) == ["n2", "n1", "n4"]
    assert path_cost(path, build_travel_adjacency(nested_map)) == 40.0


def test_path_cost_of_invented_hop_is_infinite(square_map):
    adjacency = build_travel_adjacency(square_map)
    bogus = [TravelStep.node("a"), TravelStep.edge("e2"), TravelStep.node("c")]

    assert math.isinf(path_cost(bogus, adjacency))


def _random_map(seed):
    rng = random.Random(seed)
    count = rng.randint(2, 8)
    ids = [f"n{i}" for i in range(count)]
    nodes = []
    for i, node_id in enumerate(ids):
        parent = rng.choice(ids[:i]) if i and rng.random() < 0.4 else "Universe"
        node_type = NodeType.FEATURE if rng.random() < 0.2 else NodeType.LOCATION
        status = NodeStatus.BLOCKED if rng.random() < 0.1 else NodeStatus.DISCOVERED
        nodes.append(node(node_id, parent=parent, node_type=node_type, status=status))

    statuses = [
        EdgeStatus.OPEN,
        EdgeStatus.OPEN,
        EdgeStatus.RUMORED,
        EdgeStatus.ONE_WAY,
        EdgeStatus.CLOSED,
    ]
    edges = []
    for i in range(rng.randint(0, count * 2)):
        source, target = rng.sample(ids, 2)
        edges.append(edge(f"e{i}", source, target, rng.choice(statuses)))
    return MapData(nodes=nodes, edges=edges)


def _brute_force_cost(adjacency, start, end):
    """Cheapest cost over every simple path in the adjacency."""
    if not adjacency.is_traversable(start) or not adjacency.is_traversable(end):
        return math.inf
    best = math.inf

    def walk(current, visited, cost):
        nonlocal best
        if current == end:
            best = min(best, cost)
            return
        for entry in adjacency.neighbors(current):
            if entry.to_node_id not in visited:
                walk(entry.to_node_id, visited | {entry.to_node_id}, cost + entry.cost)

    walk(start, {start}, 0.0)
    return best


@pytest.mark.parametrize("seed", range(40))
def test_path_is_valid_and_minimal_on_small_graphs(seed):
    data = _random_map(seed)
    adjacency = build_travel_adjacency(data)
    ids = [n.id for n in data.nodes]

    for start in ids:
        for end in ids:
            expected = _brute_force_cost(adjacency, start, end)
            path = find_travel_path(data, start, end, adjacency)
            if math.isinf(expected):
                assert path is None
                continue
            assert path is not None
            assert path[0].id == start and path[-1].id == end
            assert all(s.is_node == (i % 2 == 0) for i, s in enumerate(path))
            assert all(
                data.get_node(s.id).status is not NodeStatus.BLOCKED
                for s in path
                if s.is_node
            )
            assert path_cost(path, adjacency) == pytest.approx(expected)


def test_solver_returns_path_and_cost(nested_map):
    solver = DijkstraTravelSolver(config=PathfindingConfig())

    steps, cost = solver.solve(nested_map, "n1", "n3")

    assert node_ids(steps) == ["n1", "n2", "n3"]
    assert cost == 21.0


def test_solver_uses_configured_hierarchy_cost(nested_map):
    solver = DijkstraTravelSolver(config=PathfindingConfig(hierarchy_edge_cost=5))

    _, cost = solver.solve(nested_map, "n1", "n3")

    assert cost == 6.0


def test_solver_raises_for_unknown_node(nested_map):
    solver = DijkstraTravelSolver(config=PathfindingConfig())

    with pytest.raises(NodeNotFoundError) as exc_info:
        solver.solve(nested_map, "n1", "ghost")

    assert exc_info.value.node_id == "ghost"


def test_solver_raises_when_no_path():
    data = MapData(nodes=[node("a"), node("b")], edges=[])
    solver = DijkstraTravelSolver(config=PathfindingConfig())

    with pytest.raises(NoPathFoundError) as exc_info:
        solver.solve(data, "a", "b")

    assert (exc_info.value.start_id, exc_info.value.end_id) == ("a", "b")
    assert solver.solve_safe(data, "a", "b") is None


def test_solve_safe_matches_find_travel_path(square_map):
    solver = DijkstraTravelSolver(config=PathfindingConfig())

    assert solver.solve_safe(square_map, "a", "c") == find_travel_path(square_map, "a", "c")
