"""
Scoring primitives: boundary aggregation, grading, recommendations.
"""

from ecoboard.scoring.boundaries import (
    BOUNDARIES,
    BOUNDARY_NAMES,
    BoundaryAggregate,
    IncompleteMeasurement,
    aggregate_boundaries,
    normalize_boundary_scores,
)
from ecoboard.scoring.grades import (
    GRADE_THRESHOLDS,
    ScoreDirection,
    classify_grade,
    display_score,
    grade_band,
    grade_for_composite,
)
from ecoboard.scoring.recommendations import Recommendation, select_recommendations
from ecoboard.scoring.summary import ScoreSummary, build_score_summary

__all__ = [
    "BOUNDARIES",
    "BOUNDARY_NAMES",
    "BoundaryAggregate",
    "IncompleteMeasurement",
    "aggregate_boundaries",
    "normalize_boundary_scores",
    "GRADE_THRESHOLDS",
    "ScoreDirection",
    "classify_grade",
    "display_score",
    "grade_band",
    "grade_for_composite",
    "Recommendation",
    "select_recommendations",
    "ScoreSummary",
    "build_score_summary",
]
