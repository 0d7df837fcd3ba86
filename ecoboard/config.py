"""Configuration models for the EcoBoard leaderboard."""

import os
import re
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from ecoboard.leaderboard.aliases import (
    DEFAULT_ECO_ALIASES,
    DEFAULT_INTERNAL_ID_PATTERNS,
    MIN_ALIAS_LENGTH,
)
from ecoboard.leaderboard.data import DEFAULT_CAMPUS
from ecoboard.registry import SOURCE_REGISTRY


class SourceConfig(BaseModel):
    """Configuration for the leaderboard data source."""

    type: str = Field(
        default="json_file",
        description="Registered source type (e.g., 'memory', 'json_file', 'http')"
    )
    path: Optional[str] = Field(
        default=None,
        description="Path to a JSON (or .json.gz) entry store for json_file sources"
    )
    url: Optional[str] = Field(
        default=None,
        description="Leaderboard endpoint URL for http sources"
    )
    timeout: float = Field(default=10.0, ge=0.1, description="Fetch timeout in seconds")
    records: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Inline records for memory sources"
    )

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate that the source type is registered."""
        if v not in SOURCE_REGISTRY:
            available = list(SOURCE_REGISTRY.keys())
            raise ValueError(
                f"Unknown source type: {v}. Available: {available}"
            )
        return v

    class Config:
        extra = "forbid"


class LeaderboardConfig(BaseModel):
    """
    Main configuration for the leaderboard pipeline.

    The score direction is fixed here once; every entry in a leaderboard is
    ranked with the same convention.
    """

    source: SourceConfig = Field(
        default_factory=SourceConfig,
        description="Data source configuration"
    )
    score_direction: Literal["lower_is_better", "higher_is_better"] = Field(
        default="lower_is_better",
        description="Convention of stored composite scores"
    )
    default_limit: int = Field(
        default=50,
        ge=1,
        description="Entries returned when the caller gives no limit"
    )
    max_entries: int = Field(
        default=50,
        ge=1,
        description="Hard cap on returned entries"
    )
    total_users_mode: Literal["population", "returned"] = Field(
        default="population",
        description="Whether total_users counts all ranked entries or only returned ones"
    )
    allow_partial_boundaries: bool = Field(
        default=False,
        description="Average over present boundaries instead of rejecting incomplete entries"
    )
    aliases: Tuple[str, ...] = Field(
        default=DEFAULT_ECO_ALIASES,
        description="Ordered pseudonym list for generated ids"
    )
    internal_id_patterns: Tuple[str, ...] = Field(
        default=DEFAULT_INTERNAL_ID_PATTERNS,
        description="Regexes marking ids as system-generated"
    )
    min_alias_length: int = Field(
        default=MIN_ALIAS_LENGTH,
        ge=0,
        description="Ids must be longer than this to be shown as-is"
    )
    default_campus: str = Field(
        default=DEFAULT_CAMPUS,
        min_length=1,
        description="Campus label for entries without one"
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging"
    )

    @field_validator("aliases")
    @classmethod
    def validate_aliases(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("aliases must not be empty")
        if any(not a.strip() for a in v):
            raise ValueError("aliases must not contain blank names")
        return v

    @field_validator("internal_id_patterns")
    @classmethod
    def validate_patterns(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid internal id pattern {pattern!r}: {e}")
        return v

    def effective_limit(self, limit: Optional[int] = None) -> int:
        """Requested limit (or the default), capped at max_entries."""
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        return min(limit or self.default_limit, self.max_entries)

    class Config:
        extra = "forbid"


def load_config(filepath: str) -> LeaderboardConfig:
    """
    Load configuration from YAML or JSON file.

    Args:
        filepath: Path to config file

    Returns:
        LeaderboardConfig instance
    """
    import json
    from pathlib import Path

    path = Path(filepath)
    content = path.read_text()

    if path.suffix in ['.yaml', '.yml']:
        import yaml
        data = yaml.safe_load(content) or {}
    else:
        data = json.loads(content)

    return LeaderboardConfig(**data)


def create_config(
    source_type: str = "json_file",
    **kwargs,
) -> LeaderboardConfig:
    """
    Create a LeaderboardConfig from simple parameters.

    Args:
        source_type: Registered source type
        **kwargs: SourceConfig fields (path, url, timeout, records) and
            LeaderboardConfig fields

    Returns:
        LeaderboardConfig instance
    """
    source_fields = {k: kwargs.pop(k) for k in ("path", "url", "timeout", "records") if k in kwargs}
    return LeaderboardConfig(
        source=SourceConfig(type=source_type, **source_fields),
        **kwargs,
    )


def config_from_env(environ: Optional[Dict[str, str]] = None) -> LeaderboardConfig:
    """
    Build configuration from environment variables.

    ECOBOARD_CONFIG points at a config file; ECOBOARD_SOURCE_TYPE,
    ECOBOARD_SOURCE_PATH and ECOBOARD_SOURCE_URL override its source.
    """
    env = os.environ if environ is None else environ

    config_path = env.get("ECOBOARD_CONFIG")
    config = load_config(config_path) if config_path else LeaderboardConfig()

    overrides: Dict[str, Any] = {}
    if env.get("ECOBOARD_SOURCE_TYPE"):
        overrides["type"] = env["ECOBOARD_SOURCE_TYPE"]
    if env.get("ECOBOARD_SOURCE_PATH"):
        overrides["path"] = env["ECOBOARD_SOURCE_PATH"]
    if env.get("ECOBOARD_SOURCE_URL"):
        overrides["url"] = env["ECOBOARD_SOURCE_URL"]
        overrides.setdefault("type", "http")

    if not overrides:
        return config

    source = SourceConfig(**{**config.source.model_dump(), **overrides})
    return config.model_copy(update={"source": source})
