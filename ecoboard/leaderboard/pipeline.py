"""
Scoring-to-leaderboard pipeline.

One run goes through these steps:
  1. Fetch raw records from the entry source (or fall back to demo data
     when the source is unconfigured or unreachable).
  2. Validate each record; bad records are dropped and counted.
  3. Aggregate boundary scores for entries that have no composite yet.
  4. Classify grades for entries without a stored grade.
  5. Rank the full set, then truncate to the requested limit.
  6. Alias entries that have no stored pseudonym.
  7. Emit a LeaderboardResult.

Nothing is kept between runs; every request recomputes from fresh data.
"""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from core.entry_source import EntrySource, EntrySourceError, FetchErrorCategory, FetchResult
from ecoboard.leaderboard.aliases import AliasGenerator
from ecoboard.leaderboard.data import (
    EntryValidationError,
    LeaderboardEntry,
    LeaderboardResult,
    ScoreEntry,
)
from ecoboard.leaderboard.fallback import FallbackDataset, FallbackProvider, FallbackReason
from ecoboard.leaderboard.ranking import rank_entries
from ecoboard.scoring.boundaries import IncompleteMeasurement, aggregate_boundaries
from ecoboard.scoring.grades import grade_for_composite

if TYPE_CHECKING:
    from ecoboard.config import LeaderboardConfig

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Leaderboard retrieved successfully"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LeaderboardPipeline:
    """
    Turns stored score records into a ranked, display-ready leaderboard.

    Example:
        pipeline = LeaderboardPipeline(JsonFileEntrySource("entries.json"))
        result = await pipeline.run(limit=10)
        body, status = result.to_dict(), result.status_code
    """

    def __init__(
        self,
        source: EntrySource,
        config: Optional["LeaderboardConfig"] = None,
        alias_generator: Optional[AliasGenerator] = None,
        fallback: Optional[FallbackProvider] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            source: Data-access collaborator
            config: Pipeline configuration (defaults to LeaderboardConfig())
            alias_generator: Overrides the generator built from config
            fallback: Overrides the default canned dataset
            clock: Returns "now"; used for entries stored without a timestamp
        """
        if config is None:
            from ecoboard.config import LeaderboardConfig
            config = LeaderboardConfig()

        self.source = source
        self.config = config
        self.alias_generator = alias_generator or AliasGenerator(
            aliases=config.aliases,
            internal_id_patterns=config.internal_id_patterns,
            min_length=config.min_alias_length,
        )
        self.fallback = fallback or FallbackProvider()
        self.clock = clock or _utcnow

    async def run(self, limit: Optional[int] = None) -> LeaderboardResult:
        """
        Execute one pipeline run.

        Args:
            limit: Maximum entries to return (capped by config.max_entries)

        Returns:
            LeaderboardResult; ``success`` is False only on an upstream
            failure
        """
        effective_limit = self.config.effective_limit(limit)

        status = self.source.check_configuration()
        if not status.is_valid:
            logger.warning("Entry source not configured: %s", status.message)
            return self._from_fallback(
                self.fallback.provide(FallbackReason.UNCONFIGURED, status.message),
                effective_limit,
            )

        try:
            result = await self.source.fetch_entries()
        except EntrySourceError as e:
            result = FetchResult.from_error(e)

        if not result.success:
            if result.category is FetchErrorCategory.TRANSPORT:
                logger.warning("Entry source unreachable, serving offline data: %s", result.error)
                return self._from_fallback(
                    self.fallback.provide(FallbackReason.OFFLINE, result.error),
                    effective_limit,
                )
            if result.category is FetchErrorCategory.CONFIGURATION:
                logger.warning("Entry source reported missing configuration: %s", result.error)
                return self._from_fallback(
                    self.fallback.provide(FallbackReason.UNCONFIGURED, result.error),
                    effective_limit,
                )
            logger.error("Leaderboard fetch failed: %s", result.error)
            return LeaderboardResult(
                success=False,
                error=result.error or "Failed to fetch leaderboard",
            )

        built = self.build(result.data or [], effective_limit, message=result.message or SUCCESS_MESSAGE)
        # A source serving labeled (demo/offline) data keeps its label
        built.warning = result.warning
        return built

    def _from_fallback(self, dataset: FallbackDataset, limit: int) -> LeaderboardResult:
        result = self.build(dataset.records, limit, message=dataset.message)
        result.warning = dataset.warning
        result.is_fallback = True
        return result

    def build(
        self,
        records: List[Dict[str, Any]],
        limit: Optional[int] = None,
        message: str = SUCCESS_MESSAGE,
    ) -> LeaderboardResult:
        """
        Run validate/aggregate/classify/rank/alias over raw records.

        This is the synchronous part of the pipeline; it never fails on a
        single bad record.
        """
        now = self.clock()
        entries, rejected_ids, partial_count = self._prepare(records)

        ranking = rank_entries(entries, direction=self.config.score_direction, limit=limit)

        leaderboard = [
            self._to_leaderboard_entry(row.rank, row.entry, now)
            for row in ranking.rows
        ]

        if self.config.total_users_mode == "returned":
            total = ranking.returned
        else:
            total = ranking.population

        return LeaderboardResult(
            success=True,
            leaderboard=leaderboard,
            total_users=total,
            message=message,
            rejected_ids=rejected_ids,
            partial_count=partial_count,
        )

    def _prepare(self, records: List[Dict[str, Any]]) -> Tuple[List[ScoreEntry], List[str], int]:
        """Validate, aggregate and grade; returns (valid, rejected ids, partial count)."""
        valid: List[ScoreEntry] = []
        rejected: List[str] = []
        partial_count = 0

        for index, record in enumerate(records):
            try:
                entry = ScoreEntry.from_record(record)
                entry = self._aggregate(entry)
            except (EntryValidationError, IncompleteMeasurement) as e:
                entry_id = getattr(e, "entry_id", None) or f"#{index}"
                logger.warning("Rejected leaderboard entry %s: %s", entry_id, e)
                rejected.append(entry_id)
                continue

            if entry.grade is None:
                entry = entry.with_updates(
                    grade=grade_for_composite(entry.composite_score, self.config.score_direction)
                )
            if entry.partial:
                partial_count += 1
            valid.append(entry)

        return valid, rejected, partial_count

    def _aggregate(self, entry: ScoreEntry) -> ScoreEntry:
        if entry.composite_score is not None:
            return entry
        if entry.boundary_scores is None:
            raise EntryValidationError(
                "Entry has neither a composite score nor boundary scores",
                entry_id=entry.user_id,
            )

        aggregate = aggregate_boundaries(
            entry.boundary_scores,
            allow_partial=self.config.allow_partial_boundaries,
            entry_id=entry.user_id,
        )
        return entry.with_updates(composite_score=aggregate.composite, partial=aggregate.partial)

    def _to_leaderboard_entry(self, rank: int, entry: ScoreEntry, now: datetime) -> LeaderboardEntry:
        pseudonym = entry.pseudonym or self.alias_generator.generate(entry.user_id, rank - 1)
        timestamp = entry.created_at or now
        return LeaderboardEntry(
            rank=rank,
            user_id=entry.user_id,
            composite_score=entry.composite_score,
            grade=entry.grade,
            pseudonym=pseudonym,
            timestamp=timestamp.isoformat(),
            campus_affiliation=entry.campus_affiliation or self.config.default_campus,
            boundary_scores=entry.boundary_scores,
        )


async def build_leaderboard(
    source: EntrySource,
    limit: Optional[int] = None,
    config: Optional["LeaderboardConfig"] = None,
) -> Dict[str, Any]:
    """Convenience wrapper returning the JSON body of one run."""
    result = await LeaderboardPipeline(source, config=config).run(limit)
    return result.to_dict()
