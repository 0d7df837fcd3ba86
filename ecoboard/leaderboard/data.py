"""
Leaderboard data structures.

ScoreEntry is one stored assessment as it arrives from a source.
LeaderboardEntry is the ranked, display-ready projection built fresh for
every response; it is never persisted.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ecoboard.scoring.boundaries import is_score_value, normalize_boundary_scores

DEFAULT_CAMPUS = "Unknown Campus"


class EntryValidationError(ValueError):
    """
    Raised when a raw record cannot be turned into a ScoreEntry.

    Attributes:
        entry_id: Identifier of the offending record, when known
    """

    def __init__(self, message: str, entry_id: Optional[str] = None):
        super().__init__(message)
        self.entry_id = entry_id


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 string or datetime into an aware UTC datetime.

    Naive values are taken to be UTC. None and blank strings give None.

    Raises:
        ValueError: On anything else that does not parse
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _optional_text(value: Any) -> Optional[str]:
    """Blank strings count as absent."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class ScoreEntry:
    """One user's stored assessment result."""

    user_id: str
    composite_score: Optional[float] = None
    boundary_scores: Optional[Dict[str, float]] = None
    grade: Optional[str] = None
    campus_affiliation: Optional[str] = None
    pseudonym: Optional[str] = None
    created_at: Optional[datetime] = None
    partial: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ScoreEntry":
        """
        Build a ScoreEntry from a raw source record.

        Accepts ``user_id`` (or ``id``) and ``created_at`` (or
        ``timestamp``). Boundary data is normalized but not checked for
        completeness; that happens at aggregation time.

        Raises:
            EntryValidationError: On a missing id, an out-of-range composite
                or an unparseable timestamp
            IncompleteMeasurement: On malformed boundary values
        """
        if not isinstance(record, Mapping):
            raise EntryValidationError(f"Record must be a mapping, got {type(record).__name__}")

        raw_id = record.get("user_id")
        if raw_id is None:
            raw_id = record.get("id")
        user_id = _optional_text(raw_id)
        if user_id is None:
            raise EntryValidationError("Record has no user_id")

        composite = record.get("composite_score")
        if composite is not None:
            if not is_score_value(composite):
                raise EntryValidationError(
                    f"composite_score {composite!r} is not a number in [0, 100]",
                    entry_id=user_id,
                )
            composite = float(composite)

        boundaries = record.get("boundary_scores")
        if boundaries is not None:
            boundaries = normalize_boundary_scores(boundaries, entry_id=user_id)

        raw_ts = record.get("created_at")
        if raw_ts is None:
            raw_ts = record.get("timestamp")
        try:
            created_at = parse_timestamp(raw_ts)
        except ValueError as e:
            raise EntryValidationError(
                f"Invalid timestamp {raw_ts!r}: {e}", entry_id=user_id
            ) from e

        return cls(
            user_id=user_id,
            composite_score=composite,
            boundary_scores=boundaries,
            grade=_optional_text(record.get("grade")),
            campus_affiliation=_optional_text(record.get("campus_affiliation")),
            pseudonym=_optional_text(record.get("pseudonym")),
            created_at=created_at,
        )

    def with_updates(self, **changes: Any) -> "ScoreEntry":
        return replace(self, **changes)


@dataclass(frozen=True)
class LeaderboardEntry:
    """Ranked, display-ready leaderboard row."""

    rank: int
    user_id: str
    composite_score: float
    grade: str
    pseudonym: str
    timestamp: str  # ISO 8601
    campus_affiliation: str = DEFAULT_CAMPUS
    boundary_scores: Optional[Dict[str, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "rank": self.rank,
            "user_id": self.user_id,
            "composite_score": self.composite_score,
            "grade": self.grade,
            "campus_affiliation": self.campus_affiliation,
            "timestamp": self.timestamp,
            "pseudonym": self.pseudonym,
        }
        if self.boundary_scores is not None:
            data["boundary_scores"] = dict(self.boundary_scores)
        return data


@dataclass
class LeaderboardResult:
    """
    Outcome of one pipeline run.

    ``to_dict()`` gives the JSON body; ``status_code`` the HTTP status the
    transport layer should use.
    """

    success: bool
    leaderboard: List[LeaderboardEntry] = field(default_factory=list)
    total_users: int = 0
    message: str = ""
    warning: Optional[str] = None
    error: Optional[str] = None
    is_fallback: bool = False
    rejected_ids: List[str] = field(default_factory=list)
    partial_count: int = 0

    @property
    def status_code(self) -> int:
        return 200 if self.success else 500

    @property
    def diagnostics(self) -> Optional[Dict[str, Any]]:
        if not self.rejected_ids and not self.partial_count:
            return None
        return {
            "rejected": len(self.rejected_ids),
            "rejected_ids": list(self.rejected_ids),
            "partial": self.partial_count,
        }

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "error": self.error or "Unknown error",
                "leaderboard": [],
            }

        data: Dict[str, Any] = {
            "success": True,
            "leaderboard": [e.to_dict() for e in self.leaderboard],
            "total_users": self.total_users,
            "message": self.message,
        }
        if self.warning:
            data["warning"] = self.warning
        diagnostics = self.diagnostics
        if diagnostics is not None:
            data["diagnostics"] = diagnostics
        return data


def leaderboard_stats(entries: List[LeaderboardEntry]) -> Dict[str, Any]:
    """Participant count, average composite and number of A-family grades."""
    count = len(entries)
    average = round(sum(e.composite_score for e in entries) / count, 1) if count else 0.0
    a_grades = sum(1 for e in entries if e.grade.startswith("A"))
    return {
        "participants": count,
        "average_score": average,
        "a_grades": a_grades,
    }
