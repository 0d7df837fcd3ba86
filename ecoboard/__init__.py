"""
EcoBoard - planetary-boundary scores as a public leaderboard.

This package turns per-boundary environmental measurements into a
composite score and grade, ranks stored assessments, and serves them
as a privacy-preserving leaderboard.

Components:
- scoring: boundary aggregation, grades, recommendations
- leaderboard: ranking pipeline, aliases, fallback data, display
- sources: entry sources (memory, JSON file, remote HTTP)
- registry: source type registration
- config: leaderboard configuration
- server: FastAPI endpoints
"""

from ecoboard.registry import (
    SOURCE_REGISTRY,
    create_source,
    get_source_class,
    register_source,
)
from ecoboard.config import LeaderboardConfig, SourceConfig, create_config, load_config

__all__ = [
    "SOURCE_REGISTRY",
    "create_source",
    "get_source_class",
    "register_source",
    "LeaderboardConfig",
    "SourceConfig",
    "create_config",
    "load_config",
]
