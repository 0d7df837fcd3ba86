"""
EcoBoard leaderboard: ranking pipeline, fallback data and the Rich renderer.

Usage
-----
    python -m ecoboard.leaderboard          # render demo data to terminal

Programmatic
------------
    from ecoboard.leaderboard import LeaderboardPipeline, render_leaderboard

    result = await LeaderboardPipeline(source).run(limit=10)
    render_leaderboard(result)
"""

from ecoboard.leaderboard.data import (
    DEFAULT_CAMPUS,
    EntryValidationError,
    LeaderboardEntry,
    LeaderboardResult,
    ScoreEntry,
    leaderboard_stats,
)
from ecoboard.leaderboard.aliases import AliasGenerator, DEFAULT_ECO_ALIASES
from ecoboard.leaderboard.ranking import Ranking, RankedRow, rank_entries
from ecoboard.leaderboard.fallback import (
    FALLBACK_ENTRIES,
    FallbackDataset,
    FallbackProvider,
    FallbackReason,
)
from ecoboard.leaderboard.pipeline import LeaderboardPipeline, build_leaderboard
from ecoboard.leaderboard.display import render_leaderboard


def main() -> None:
    """Render the labeled demo leaderboard."""
    import asyncio

    from ecoboard.sources.memory import InMemoryEntrySource

    result = asyncio.run(LeaderboardPipeline(InMemoryEntrySource()).run())
    render_leaderboard(result)


__all__ = [
    "DEFAULT_CAMPUS",
    "EntryValidationError",
    "LeaderboardEntry",
    "LeaderboardResult",
    "ScoreEntry",
    "leaderboard_stats",
    "AliasGenerator",
    "DEFAULT_ECO_ALIASES",
    "Ranking",
    "RankedRow",
    "rank_entries",
    "FALLBACK_ENTRIES",
    "FallbackDataset",
    "FallbackProvider",
    "FallbackReason",
    "LeaderboardPipeline",
    "build_leaderboard",
    "render_leaderboard",
    "main",
]
