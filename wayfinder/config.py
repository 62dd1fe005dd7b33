"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for the tunable constants of
the resolver and the pathfinder. Defaults reproduce the documented
scoring and cost rules exactly, so configuration is only needed to
experiment with different weights.

Configuration can be overridden via environment variables:
- WAYFINDER_MATCH_PROXIMITY_BONUS=40
- WAYFINDER_PATH_HIERARCHY_EDGE_COST=15
- WAYFINDER_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatcherConfig(BaseSettings):
    """Node resolution configuration.

    Environment variables prefixed with WAYFINDER_MATCH_.
    """

    model_config = SettingsConfigDict(env_prefix="WAYFINDER_MATCH_")

    proximity_bonus: float = Field(default=30.0, ge=0)
    exact_match_feature_bonus: float = Field(default=10.0, ge=0)
    negation_halving_threshold: float = 75.0
    suggestion_limit: int = Field(default=3, ge=1)
    suggestion_score_cutoff: float = Field(default=70.0, ge=0, le=100)


class PathfindingConfig(BaseSettings):
    """Travel graph configuration.

    Environment variables prefixed with WAYFINDER_PATH_.
    """

    model_config = SettingsConfigDict(env_prefix="WAYFINDER_PATH_")

    hierarchy_edge_cost: float = Field(default=20.0, gt=0)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with WAYFINDER_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="WAYFINDER_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

        config = get_config()
        print(config.matcher.proximity_bonus)
        print(config.pathfinding.hierarchy_edge_cost)

    Environment variables prefixed with WAYFINDER_.
    """

    model_config = SettingsConfigDict(env_prefix="WAYFINDER_")

    matcher: MatcherConfig = Field(default_factory=MatcherConfig)
    pathfinding: PathfindingConfig = Field(default_factory=PathfindingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
