"""
Canned leaderboard data for when the real source is unavailable.

Fallback data is always returned together with a message and a warning so
a display layer can label it; it must never pass for authoritative data.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


class FallbackReason(Enum):
    UNCONFIGURED = "unconfigured"
    OFFLINE = "offline"


FALLBACK_CAMPUS = "Demo Campus"

# Stored (lower-is-better) composites; displayed as 95, 88, 82, 78, 73.
FALLBACK_ENTRIES: Tuple[Dict[str, Any], ...] = (
    {"user_id": "demo_user_1", "composite_score": 5.0, "campus_affiliation": FALLBACK_CAMPUS,
     "created_at": "2025-01-01T09:00:00Z"},
    {"user_id": "demo_user_2", "composite_score": 12.0, "campus_affiliation": FALLBACK_CAMPUS,
     "created_at": "2025-01-01T09:05:00Z"},
    {"user_id": "demo_user_3", "composite_score": 18.0, "campus_affiliation": FALLBACK_CAMPUS,
     "created_at": "2025-01-01T09:10:00Z"},
    {"user_id": "demo_user_4", "composite_score": 22.0, "campus_affiliation": FALLBACK_CAMPUS,
     "created_at": "2025-01-01T09:15:00Z"},
    {"user_id": "demo_user_5", "composite_score": 27.0, "campus_affiliation": FALLBACK_CAMPUS,
     "created_at": "2025-01-01T09:20:00Z"},
)

UNCONFIGURED_MESSAGE = "Mock leaderboard data - database not configured"
UNCONFIGURED_WARNING = "Leaderboard data source is not configured; showing demo data."
OFFLINE_MESSAGE = "Offline mode - showing demo leaderboard data"


@dataclass(frozen=True)
class FallbackDataset:
    records: List[Dict[str, Any]]
    reason: FallbackReason
    message: str
    warning: str


class FallbackProvider:
    """Supplies the labeled substitute dataset."""

    def __init__(self, entries: Sequence[Dict[str, Any]] = FALLBACK_ENTRIES):
        if not entries:
            raise ValueError("FallbackProvider needs at least one entry")
        self.entries = tuple(dict(e) for e in entries)

    def provide(self, reason: FallbackReason, detail: Optional[str] = None) -> FallbackDataset:
        """
        Build the fallback dataset for a given reason.

        Args:
            reason: Why the real source could not be used
            detail: Configuration message or transport error text
        """
        if reason is FallbackReason.UNCONFIGURED:
            message = UNCONFIGURED_MESSAGE
            warning = detail or UNCONFIGURED_WARNING
        else:
            message = OFFLINE_MESSAGE
            cause = f" ({detail})" if detail else ""
            warning = (
                f"Offline Mode: the leaderboard service could not be reached{cause}. "
                "Showing demo data."
            )

        return FallbackDataset(
            records=[dict(e) for e in self.entries],
            reason=reason,
            message=message,
            warning=warning,
        )
