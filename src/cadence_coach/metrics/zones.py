"""Cadence zone classification."""

from typing import Dict, Iterable, List, Optional, Tuple

from ..models.analysis import CadenceZoneDistribution
from .statistics import filter_valid, round_half_up

# (key, label, lower bound, upper bound) in SPM. Bounds are informational;
# get_zone_for_cadence holds the exact open/closed edges.
CADENCE_ZONES: List[Tuple[str, str, Optional[int], Optional[int]]] = [
    ("very_low", "Very Low", None, 159),
    ("low", "Low", 160, 169),
    ("optimal", "Optimal", 170, 180),
    ("high", "High", 181, 190),
    ("very_high", "Very High", 191, None),
]


def get_zone_for_cadence(cadence: float) -> str:
    """
    Return the zone key for a cadence reading.

    Zone edges:
    - very_low:  < 160
    - low:       160 <= c < 170
    - optimal:   170 <= c <= 180
    - high:      180 < c <= 190
    - very_high: > 190
    """
    if cadence < 160:
        return "very_low"
    if cadence < 170:
        return "low"
    if cadence <= 180:
        return "optimal"
    if cadence <= 190:
        return "high"
    return "very_high"


def classify_cadence_zones(cadences: Iterable[Optional[float]]) -> CadenceZoneDistribution:
    """
    Bin a cadence series into the five cadence zones.

    Each zone percentage is rounded on its own, so the five values can miss
    100 by a point or two. The optimal/sub-optimal split is rounded once and
    always adds up to 100.

    Args:
        cadences: Cadence readings in SPM; dropout values are ignored

    Returns:
        CadenceZoneDistribution (all zeros for an empty series)
    """
    valid = filter_valid(cadences)
    total = len(valid)
    if total == 0:
        return CadenceZoneDistribution()

    counts: Dict[str, int] = {key: 0 for key, _, _, _ in CADENCE_ZONES}
    for cadence in valid:
        counts[get_zone_for_cadence(cadence)] += 1

    def pct(count: int) -> int:
        return round_half_up(count / total * 100)

    optimal = round_half_up(counts["optimal"] / total * 100)

    return CadenceZoneDistribution(
        very_low=pct(counts["very_low"]),
        low=pct(counts["low"]),
        optimal_zone=pct(counts["optimal"]),
        high=pct(counts["high"]),
        very_high=pct(counts["very_high"]),
        optimal=optimal,
        sub_optimal=100 - optimal,
        total_samples=total,
    )


def get_zone_label(key: str) -> str:
    """Human-readable label for a zone key."""
    for zone_key, label, _, _ in CADENCE_ZONES:
        if zone_key == key:
            return label
    return key
