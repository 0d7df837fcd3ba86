"""
Leaderboard ranking.

Entries are ordered by composite score in the configured direction, ties
broken by earliest timestamp, then ranked 1..N with no shared ranks.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from ecoboard.leaderboard.data import ScoreEntry
from ecoboard.scoring.grades import ScoreDirection


@dataclass(frozen=True)
class RankedRow:
    rank: int
    entry: ScoreEntry


@dataclass(frozen=True)
class Ranking:
    """Ranked rows (possibly truncated) and the size of the full ranked set."""

    rows: List[RankedRow]
    population: int

    @property
    def returned(self) -> int:
        return len(self.rows)


def _sort_key(entry: ScoreEntry, direction: ScoreDirection) -> Tuple[float, bool, datetime, str]:
    if entry.composite_score is None:
        raise ValueError(f"Entry {entry.user_id} has no composite score to rank")
    score = entry.composite_score
    if direction == "higher_is_better":
        score = -score
    # undated entries sort after dated ones within a tie
    ts = entry.created_at.replace(tzinfo=None) if entry.created_at else datetime.max
    return (score, entry.created_at is None, ts, entry.user_id)


def rank_entries(
    entries: Iterable[ScoreEntry],
    direction: ScoreDirection = "lower_is_better",
    limit: Optional[int] = None,
) -> Ranking:
    """
    Order entries and assign contiguous ranks.

    Args:
        entries: Entries that all carry a composite score
        direction: Which end of the scale is best
        limit: Keep only the top N rows

    Returns:
        Ranking whose ``population`` counts every entry, not just the
        returned rows

    Raises:
        ValueError: On a limit below 1, an unknown direction, or an entry
            without a composite score
    """
    if direction not in ("lower_is_better", "higher_is_better"):
        raise ValueError(f"Unknown score direction: {direction}")
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    ordered = sorted(entries, key=lambda e: _sort_key(e, direction))
    rows = [RankedRow(rank=i + 1, entry=e) for i, e in enumerate(ordered)]

    if limit is not None:
        return Ranking(rows=rows[:limit], population=len(rows))
    return Ranking(rows=rows, population=len(rows))
