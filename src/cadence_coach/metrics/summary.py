"""Run summary aggregation over decoded telemetry samples."""

from typing import List, Optional, Sequence

from ..models.telemetry import RunSummary, TelemetrySample
from .statistics import average, filter_valid, round_half_up, standard_deviation
from .terrain import calculate_distance


def _total_distance(samples: List[TelemetrySample]) -> float:
    """Distance from the device's cumulative field, else summed GPS gaps."""
    recorded = filter_valid(s.distance_m for s in samples)
    if recorded:
        return max(recorded)

    total = 0.0
    prev: Optional[TelemetrySample] = None
    for s in samples:
        if not s.has_valid_position:
            continue
        if prev is not None:
            total += calculate_distance(
                prev.latitude_deg, prev.longitude_deg, s.latitude_deg, s.longitude_deg
            )
        prev = s
    return total


def summarize_run(samples: Sequence[TelemetrySample]) -> RunSummary:
    """
    Aggregate a run's samples into a RunSummary.

    Dropout readings (missing, zero, negative, non-finite) are ignored per
    channel. An empty run gives an all-zero summary.
    """
    if not samples:
        return RunSummary()

    ordered = sorted(samples, key=lambda s: s.timestamp_ms)

    total_time_s = (ordered[-1].timestamp_ms - ordered[0].timestamp_ms) / 1000
    total_distance_m = _total_distance(ordered)

    cadences = filter_valid(s.cadence_spm for s in ordered)
    speeds = filter_valid(s.speed_mps for s in ordered)
    heart_rates = filter_valid(s.heart_rate_bpm for s in ordered)
    # Negative elevations are real readings; only non-finite ones are dropout
    elevations = [s.elevation_m for s in ordered if s.has_valid_elevation]

    if speeds:
        avg_speed = average(speeds)
    elif total_time_s > 0:
        avg_speed = total_distance_m / total_time_s
    else:
        avg_speed = 0.0

    gain = 0.0
    loss = 0.0
    for prev, curr in zip(elevations, elevations[1:]):
        delta = curr - prev
        if delta > 0:
            gain += delta
        else:
            loss -= delta

    return RunSummary(
        total_distance_m=total_distance_m,
        total_time_s=max(0.0, total_time_s),
        avg_speed_mps=avg_speed,
        max_speed_mps=max(speeds) if speeds else 0.0,
        avg_cadence_spm=average(cadences),
        min_cadence_spm=min(cadences) if cadences else 0.0,
        max_cadence_spm=max(cadences) if cadences else 0.0,
        cadence_variability=standard_deviation(cadences),
        avg_heart_rate_bpm=average(heart_rates),
        max_heart_rate_bpm=max(heart_rates) if heart_rates else 0.0,
        elevation_gain_m=float(round_half_up(gain)),
        elevation_loss_m=float(round_half_up(loss)),
        sample_count=len(ordered),
        cadence_samples=len(cadences),
        speed_samples=len(speeds),
        heart_rate_samples=len(heart_rates),
        gps_samples=sum(1 for s in ordered if s.has_valid_position),
        elevation_samples=len(elevations),
    )
