"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from wayfinder.config import (
    MatcherConfig,
    PathfindingConfig,
    get_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


def test_defaults_match_documented_constants(monkeypatch):
    for var in (
        "WAYFINDER_MATCH_PROXIMITY_BONUS",
        "WAYFINDER_PATH_HIERARCHY_EDGE_COST",
        "WAYFINDER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)

    config = get_config()

    assert config.matcher.proximity_bonus == 30.0
    assert config.matcher.exact_match_feature_bonus == 10.0
    assert config.matcher.negation_halving_threshold == 75.0
    assert config.pathfinding.hierarchy_edge_cost == 20.0
    assert config.observability.level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WAYFINDER_MATCH_PROXIMITY_BONUS", "45")
    monkeypatch.setenv("WAYFINDER_PATH_HIERARCHY_EDGE_COST", "12.5")

    config = get_config()

    assert config.matcher.proximity_bonus == 45.0
    assert config.pathfinding.hierarchy_edge_cost == 12.5


def test_config_is_cached_until_reset(monkeypatch):
    first = get_config()
    assert get_config() is first

    monkeypatch.setenv("WAYFINDER_PATH_HIERARCHY_EDGE_COST", "3")
    assert get_config().pathfinding.hierarchy_edge_cost == first.pathfinding.hierarchy_edge_cost

    reset_config()
    assert get_config().pathfinding.hierarchy_edge_cost == 3.0


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        PathfindingConfig(hierarchy_edge_cost=0)
    with pytest.raises(ValidationError):
        MatcherConfig(suggestion_score_cutoff=150)
