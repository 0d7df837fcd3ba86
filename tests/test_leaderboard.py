"""Tests for leaderboard building blocks.

Coverage:
- ScoreEntry parsing: id/timestamp fallbacks, blank optional fields,
  out-of-range composites, bad timestamps
- Ranking: direction, contiguous ranks, timestamp tie-break, truncation
  and population count
- Alias generation: readable ids pass through, internal ids and UUIDs are
  replaced, determinism, EcoUser fallback past the list end
- Fallback provider: labeled datasets for both reasons
- LeaderboardResult serialization and stats
"""

import random
from datetime import datetime, timezone

import pytest

from ecoboard.leaderboard.aliases import DEFAULT_ECO_ALIASES, AliasGenerator
from ecoboard.leaderboard.data import (
    EntryValidationError,
    LeaderboardEntry,
    LeaderboardResult,
    ScoreEntry,
    leaderboard_stats,
    parse_timestamp,
)
from ecoboard.leaderboard.fallback import (
    FALLBACK_ENTRIES,
    FallbackProvider,
    FallbackReason,
    UNCONFIGURED_MESSAGE,
)
from ecoboard.leaderboard.ranking import rank_entries
from ecoboard.scoring.boundaries import IncompleteMeasurement


# ── helpers ───────────────────────────────────────────────────────────────────


def _entry(user_id, score, ts=None):
    created = datetime(2025, 3, 1, 12, 0, ts, tzinfo=timezone.utc) if ts is not None else None
    return ScoreEntry(user_id=user_id, composite_score=score, created_at=created)


def _lb_entry(rank, score, grade="B"):
    return LeaderboardEntry(
        rank=rank,
        user_id=f"u{rank}",
        composite_score=score,
        grade=grade,
        pseudonym=f"Alias{rank}",
        timestamp="2025-03-01T12:00:00+00:00",
    )


# ── TestScoreEntry ────────────────────────────────────────────────────────────


class TestScoreEntry:
    def test_from_record_full(self):
        entry = ScoreEntry.from_record({
            "user_id": "SolarSailor42",
            "composite_score": 31,
            "grade": "B",
            "campus_affiliation": "North Campus",
            "pseudonym": "Sunny",
            "created_at": "2025-03-01T12:00:00Z",
            "boundary_scores": {"climate": 10, "biogeochemical_flows": 20},
        })
        assert entry.composite_score == 31.0
        assert entry.created_at == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)
        assert entry.boundary_scores == {"climate": 10.0, "biogeochemical": 20.0}

    def test_id_and_timestamp_fallbacks(self):
        entry = ScoreEntry.from_record({"id": 7, "composite_score": 10, "timestamp": "2025-03-01T12:00:00"})
        assert entry.user_id == "7"
        assert entry.created_at.tzinfo is not None

    def test_blank_optionals_are_absent(self):
        entry = ScoreEntry.from_record({
            "user_id": "u1", "composite_score": 10,
            "grade": "  ", "campus_affiliation": "", "pseudonym": None,
        })
        assert entry.grade is None
        assert entry.campus_affiliation is None
        assert entry.pseudonym is None
        assert entry.created_at is None

    def test_missing_id_raises(self):
        with pytest.raises(EntryValidationError):
            ScoreEntry.from_record({"composite_score": 10})

    @pytest.mark.parametrize("score", [-0.1, 100.1, "40", True])
    def test_bad_composite_raises(self, score):
        with pytest.raises(EntryValidationError) as exc:
            ScoreEntry.from_record({"user_id": "u1", "composite_score": score})
        assert exc.value.entry_id == "u1"

    def test_bad_timestamp_raises(self):
        with pytest.raises(EntryValidationError):
            ScoreEntry.from_record({"user_id": "u1", "composite_score": 10, "created_at": "yesterday"})

    def test_bad_boundaries_raise(self):
        with pytest.raises(IncompleteMeasurement):
            ScoreEntry.from_record({"user_id": "u1", "boundary_scores": {"climate": "high"}})

    def test_parse_timestamp_normalizes_to_utc(self):
        ts = parse_timestamp("2025-03-01T14:00:00+02:00")
        assert ts == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)
        assert parse_timestamp("") is None


# ── TestRanking ───────────────────────────────────────────────────────────────


class TestRanking:
    def test_lower_is_better(self):
        ranking = rank_entries([_entry("a", 30), _entry("b", 10), _entry("c", 20)])
        assert [(r.rank, r.entry.composite_score) for r in ranking.rows] == [
            (1, 10), (2, 20), (3, 30),
        ]

    def test_higher_is_better(self):
        ranking = rank_entries(
            [_entry("a", 30), _entry("b", 10), _entry("c", 20)],
            direction="higher_is_better",
        )
        assert [r.entry.composite_score for r in ranking.rows] == [30, 20, 10]

    @pytest.mark.parametrize("n", [0, 1, 2, 7, 50])
    def test_ranks_contiguous(self, n):
        rng = random.Random(n)
        entries = [_entry(f"u{i}", rng.choice([10, 20, 30]), ts=i % 60) for i in range(n)]
        ranking = rank_entries(entries)
        assert [r.rank for r in ranking.rows] == list(range(1, n + 1))

    def test_tie_break_earliest_first(self):
        late = _entry("late", 15, ts=30)
        early = _entry("early", 15, ts=5)
        for order in ([late, early], [early, late]):
            ranking = rank_entries(order)
            assert [r.entry.user_id for r in ranking.rows] == ["early", "late"]
            assert [r.rank for r in ranking.rows] == [1, 2]

    def test_undated_after_dated_on_tie(self):
        ranking = rank_entries([_entry("nodate", 15), _entry("dated", 15, ts=59)])
        assert [r.entry.user_id for r in ranking.rows] == ["dated", "nodate"]

    def test_truncation_keeps_population(self):
        entries = [_entry(f"u{i}", s) for i, s in enumerate([50, 10, 40, 20, 30])]
        ranking = rank_entries(entries, limit=2)
        assert [r.entry.composite_score for r in ranking.rows] == [10, 20]
        assert ranking.population == 5
        assert ranking.returned == 2

    def test_bad_limit_raises(self):
        with pytest.raises(ValueError):
            rank_entries([_entry("a", 1)], limit=0)

    def test_bad_direction_raises(self):
        with pytest.raises(ValueError):
            rank_entries([_entry("a", 1)], direction="sideways")

    def test_missing_composite_raises(self):
        with pytest.raises(ValueError):
            rank_entries([ScoreEntry(user_id="a")])


# ── TestAliases ───────────────────────────────────────────────────────────────


class TestAliases:
    def test_readable_id_passes_through(self):
        gen = AliasGenerator()
        assert gen.generate("SolarSailor42", 3) == "SolarSailor42"

    @pytest.mark.parametrize("user_id", [
        "demo_user_123",
        "user_42abcdef",
        "short",
        "exactly8",
        "3f2b8c1e-9a4d-4e2f-8b6a-1c2d3e4f5a6b",
        "",
        None,
    ])
    def test_internal_ids_replaced(self, user_id):
        assert AliasGenerator().generate(user_id, 0) == "EcoChampion"

    def test_position_indexes_list(self):
        gen = AliasGenerator()
        assert [gen.generate("demo_user", i) for i in range(5)] == [
            "EcoChampion", "GreenGuru", "EcoWarrior", "NatureLover", "EcoFriend",
        ]

    def test_past_list_end_falls_back(self):
        gen = AliasGenerator()
        n = len(DEFAULT_ECO_ALIASES)
        assert gen.generate("user_1", n - 1) == "EcoSpirit"
        assert gen.generate("user_1", n) == f"EcoUser{n + 1}"
        assert gen.generate("user_1", n + 5) == f"EcoUser{n + 6}"

    def test_deterministic(self):
        assert AliasGenerator().generate("user_9", 4) == AliasGenerator().generate("user_9", 4)

    def test_injected_list(self):
        gen = AliasGenerator(aliases=["Fern", "Moss"], internal_id_patterns=[], min_length=3)
        assert gen.generate("ab", 1) == "Moss"
        assert gen.generate("abcd", 1) == "abcd"
        assert gen.generate("ab", 2) == "EcoUser3"

    def test_negative_position_raises(self):
        with pytest.raises(ValueError):
            AliasGenerator().generate("user_1", -1)


# ── TestFallback ──────────────────────────────────────────────────────────────


class TestFallback:
    def test_unconfigured_uses_detail_as_warning(self):
        dataset = FallbackProvider().provide(FallbackReason.UNCONFIGURED, "DB URL missing")
        assert dataset.warning == "DB URL missing"
        assert dataset.message == UNCONFIGURED_MESSAGE
        assert 3 <= len(dataset.records) <= 5

    def test_unconfigured_default_warning(self):
        dataset = FallbackProvider().provide(FallbackReason.UNCONFIGURED)
        assert dataset.warning

    def test_offline_warning(self):
        dataset = FallbackProvider().provide(FallbackReason.OFFLINE, "ConnectError")
        assert dataset.warning.startswith("Offline Mode")
        assert "ConnectError" in dataset.warning
        assert dataset.reason is FallbackReason.OFFLINE

    def test_records_are_copies(self):
        provider = FallbackProvider()
        provider.provide(FallbackReason.OFFLINE).records[0]["composite_score"] = 99
        assert provider.provide(FallbackReason.OFFLINE).records[0]["composite_score"] == FALLBACK_ENTRIES[0]["composite_score"]

    def test_empty_dataset_rejected(self):
        with pytest.raises(ValueError):
            FallbackProvider(entries=[])


# ── TestResult ────────────────────────────────────────────────────────────────


class TestResult:
    def test_failure_shape(self):
        result = LeaderboardResult(success=False, error="db timeout")
        assert result.to_dict() == {"success": False, "error": "db timeout", "leaderboard": []}
        assert result.status_code == 500

    def test_success_shape_without_optionals(self):
        result = LeaderboardResult(success=True, leaderboard=[_lb_entry(1, 10)], total_users=1, message="ok")
        data = result.to_dict()
        assert set(data) == {"success", "leaderboard", "total_users", "message"}
        assert "boundary_scores" not in data["leaderboard"][0]
        assert data["leaderboard"][0]["campus_affiliation"] == "Unknown Campus"

    def test_diagnostics(self):
        result = LeaderboardResult(success=True, rejected_ids=["bad"], partial_count=2)
        assert result.to_dict()["diagnostics"] == {"rejected": 1, "rejected_ids": ["bad"], "partial": 2}

    def test_stats(self):
        stats = leaderboard_stats([_lb_entry(1, 10, "A+"), _lb_entry(2, 21, "B"), _lb_entry(3, 14, "A-")])
        assert stats == {"participants": 3, "average_score": 15.0, "a_grades": 2}
        assert leaderboard_stats([])["average_score"] == 0.0
