"""
Core abstract interfaces for the EcoBoard leaderboard.

This module provides the data-access contract every leaderboard source
must implement to feed the scoring pipeline.
"""

from core.entry_source import (
    EntrySource,
    EntrySourceError,
    ConfigurationUnavailable,
    UpstreamFailure,
    TransportFailure,
    FetchErrorCategory,
    FetchResult,
    SourceStatus,
)

__all__ = [
    "EntrySource",
    "EntrySourceError",
    "ConfigurationUnavailable",
    "UpstreamFailure",
    "TransportFailure",
    "FetchErrorCategory",
    "FetchResult",
    "SourceStatus",
]
