"""
Planetary-boundary score sets and composite aggregation.

Each assessment measures five boundary dimensions on a 0-100 scale where
lower means less environmental pressure. The composite score is the plain
mean of the five values.
"""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Tuple


BOUNDARIES: Tuple[str, ...] = (
    "climate",
    "biosphere",
    "biogeochemical",
    "freshwater",
    "aerosols",
)

BOUNDARY_NAMES: Dict[str, str] = {
    "climate": "Climate Change",
    "biosphere": "Biosphere Integrity",
    "biogeochemical": "Biogeochemical Flows",
    "freshwater": "Freshwater Use",
    "aerosols": "Aerosols & Novel Entities",
}

# Alternate spellings seen in stored records
BOUNDARY_ALIASES: Dict[str, str] = {
    "biogeochemical_flows": "biogeochemical",
    "biogeochemical-flows": "biogeochemical",
}

COMPOSITE_PRECISION = 2
SCORE_MIN = 0.0
SCORE_MAX = 100.0


class IncompleteMeasurement(ValueError):
    """
    Raised when boundary data is partial or malformed.

    Attributes:
        missing: Boundary keys that were absent
        entry_id: Identifier of the offending entry, when known
    """

    def __init__(
        self,
        message: str,
        missing: Optional[List[str]] = None,
        entry_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.missing = list(missing or [])
        self.entry_id = entry_id


@dataclass(frozen=True)
class BoundaryAggregate:
    """Composite score plus the rounded per-boundary breakdown."""

    composite: float
    per_boundary_averages: Dict[str, int]
    partial: bool = False
    missing: Tuple[str, ...] = field(default_factory=tuple)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_score_value(value: Any) -> bool:
    """True for a finite real number (bools excluded) inside [0, 100]."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    value = float(value)
    return math.isfinite(value) and SCORE_MIN <= value <= SCORE_MAX


def normalize_boundary_scores(
    scores: Mapping[str, Any],
    entry_id: Optional[str] = None,
) -> Dict[str, float]:
    """
    Canonicalize keys and validate values of a raw boundary mapping.

    Unknown keys are dropped. Missing keys are not an error here; see
    aggregate_boundaries for the completeness policy.

    Raises:
        IncompleteMeasurement: If the mapping is not a dict or a value is
            not a number in [0, 100]
    """
    if not isinstance(scores, Mapping):
        raise IncompleteMeasurement(
            f"Boundary scores must be a mapping, got {type(scores).__name__}",
            entry_id=entry_id,
        )

    normalized: Dict[str, float] = {}
    for key, value in scores.items():
        name = BOUNDARY_ALIASES.get(key, key)
        if name not in BOUNDARIES:
            continue
        if value is None:
            continue
        if not is_score_value(value):
            raise IncompleteMeasurement(
                f"Boundary '{name}' has invalid value {value!r}; expected a number in [0, 100]",
                entry_id=entry_id,
            )
        normalized[name] = float(value)
    return normalized


def aggregate_boundaries(
    scores: Mapping[str, Any],
    allow_partial: bool = False,
    entry_id: Optional[str] = None,
) -> BoundaryAggregate:
    """
    Reduce a boundary score set to a composite score.

    Args:
        scores: Mapping of boundary name to value in [0, 100]
        allow_partial: Average over the present boundaries instead of
            failing when some are missing
        entry_id: Included in error messages

    Returns:
        BoundaryAggregate; ``partial`` is True when boundaries were missing

    Raises:
        IncompleteMeasurement: On malformed values, on any missing boundary
            in strict mode, or when no boundary is present at all
    """
    values = normalize_boundary_scores(scores, entry_id=entry_id)
    missing = [b for b in BOUNDARIES if b not in values]

    if missing and not allow_partial:
        raise IncompleteMeasurement(
            f"Missing boundary scores: {', '.join(missing)}",
            missing=missing,
            entry_id=entry_id,
        )
    if not values:
        raise IncompleteMeasurement(
            "No boundary scores present",
            missing=missing,
            entry_id=entry_id,
        )

    present = [b for b in BOUNDARIES if b in values]
    composite = sum(values[b] for b in present) / len(present)

    return BoundaryAggregate(
        composite=round(composite, COMPOSITE_PRECISION),
        per_boundary_averages={b: round_half_up(values[b]) for b in present},
        partial=bool(missing),
        missing=tuple(missing),
    )
