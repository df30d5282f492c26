"""Statistics over noisy sensor series."""

import math
from typing import Iterable, List, Optional, Union

Number = Union[int, float]


def filter_valid(values: Iterable[Optional[Number]]) -> List[float]:
    """
    Drop readings that cannot be real samples.

    None, NaN, infinities and anything <= 0 are treated as sensor dropout.
    """
    valid = []
    for v in values:
        if v is None or isinstance(v, bool):
            continue
        try:
            f = float(v)
        except (TypeError, ValueError):
            continue
        if math.isfinite(f) and f > 0:
            valid.append(f)
    return valid


def average(values: Iterable[Optional[Number]]) -> float:
    """Arithmetic mean of the valid readings, 0.0 if there are none."""
    valid = filter_valid(values)
    if not valid:
        return 0.0
    return sum(valid) / len(valid)


def standard_deviation(values: Iterable[Optional[Number]]) -> float:
    """Population standard deviation of the valid readings, 0.0 if there are none."""
    valid = filter_valid(values)
    if len(valid) < 1:
        return 0.0
    mean = average(valid)
    variance = sum((v - mean) ** 2 for v in valid) / len(valid)
    return math.sqrt(variance)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
