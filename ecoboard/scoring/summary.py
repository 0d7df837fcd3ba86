"""
Score summary for a single assessment.

Combines aggregation, grading, the display inversion and recommendation
selection into the payload a score screen renders.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Union

from ecoboard.scoring.boundaries import (
    BOUNDARIES,
    BOUNDARY_NAMES,
    aggregate_boundaries,
    round_half_up,
)
from ecoboard.scoring.grades import ScoreDirection, display_score, grade_for_composite
from ecoboard.scoring.recommendations import Recommendation, select_recommendations


@dataclass
class BoundaryBreakdown:
    """Per-boundary row of a score summary."""

    key: str
    name: str
    value: int  # stored scale
    display_value: int  # on the display scale

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "value": self.value,
            "display_value": self.display_value,
        }


@dataclass
class ScoreSummary:
    composite: float
    display_score: int
    grade: str
    per_boundary_averages: Dict[str, int]
    breakdown: List[BoundaryBreakdown]
    partial: bool = False
    recommendations: List[Recommendation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "composite": self.composite,
            "display_score": self.display_score,
            "grade": self.grade,
            "per_boundary_averages": dict(self.per_boundary_averages),
            "breakdown": [b.to_dict() for b in self.breakdown],
            "partial": self.partial,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


def build_score_summary(
    boundary_scores: Mapping[str, Any],
    recommendations: Iterable[Union[Recommendation, Mapping[str, Any]]] = (),
    direction: ScoreDirection = "lower_is_better",
    allow_partial: bool = False,
) -> ScoreSummary:
    """
    Build the display summary for one set of boundary scores.

    Raises:
        IncompleteMeasurement: If the boundary scores cannot be aggregated
            under the chosen partial policy
    """
    aggregate = aggregate_boundaries(boundary_scores, allow_partial=allow_partial)

    breakdown = [
        BoundaryBreakdown(
            key=key,
            name=BOUNDARY_NAMES[key],
            value=aggregate.per_boundary_averages[key],
            display_value=round_half_up(display_score(aggregate.per_boundary_averages[key], direction)),
        )
        for key in BOUNDARIES
        if key in aggregate.per_boundary_averages
    ]

    return ScoreSummary(
        composite=aggregate.composite,
        display_score=round_half_up(display_score(aggregate.composite, direction)),
        grade=grade_for_composite(aggregate.composite, direction),
        per_boundary_averages=aggregate.per_boundary_averages,
        breakdown=breakdown,
        partial=aggregate.partial,
        recommendations=select_recommendations(recommendations),
    )
