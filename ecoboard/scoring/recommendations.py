"""
Advisory recommendations attached to a score.

Recommendation content is produced upstream; this module only parses it and
picks the subset shown next to a score.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Union

DISPLAY_RECOMMENDATIONS = 2


@dataclass(frozen=True)
class Recommendation:
    """One suggested action and the boundary it addresses."""

    action: str
    impact: str
    boundary: str
    current_score: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Recommendation":
        try:
            return cls(
                action=str(data["action"]),
                impact=str(data["impact"]),
                boundary=str(data["boundary"]),
                current_score=float(data["current_score"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid recommendation {dict(data)!r}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def select_recommendations(
    recommendations: Iterable[Union[Recommendation, Mapping[str, Any]]],
    limit: int = DISPLAY_RECOMMENDATIONS,
) -> List[Recommendation]:
    """Return the first ``limit`` recommendations, keeping upstream order."""
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    selected: List[Recommendation] = []
    for rec in recommendations:
        if len(selected) >= limit:
            break
        if not isinstance(rec, Recommendation):
            rec = Recommendation.from_dict(rec)
        selected.append(rec)
    return selected
