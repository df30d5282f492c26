"""
Cadence Analysis Service

Runs the full analysis for one run:
    samples -> summary, cadence zones, terrain profile
            -> personalized targets (profile dependent)
            -> recommendations and terrain-adjusted targets

Every step is a pure function of its inputs; one analyzer can serve
concurrent callers.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import TelemetryValidationError, ValidationError
from ..metrics.summary import summarize_run
from ..metrics.targets import calculate_personalized_targets
from ..metrics.terrain import analyze_terrain_profile, calculate_terrain_targets
from ..metrics.zones import classify_cadence_zones
from ..models.analysis import RunAnalysis
from ..models.profile import RunnerProfile
from ..models.telemetry import TelemetrySample
from ..recommendations.cadence import generate_recommendations

logger = logging.getLogger(__name__)

SampleInput = Union[TelemetrySample, Mapping[str, Any]]


def load_samples(records: Iterable[SampleInput]) -> List[TelemetrySample]:
    """
    Validate decoded records into TelemetrySample objects.

    Accepts already-built samples or dicts with camelCase or snake_case keys.

    Raises:
        TelemetryValidationError: if a record is malformed
    """
    samples = []
    for i, record in enumerate(records):
        if isinstance(record, TelemetrySample):
            samples.append(record)
            continue
        try:
            samples.append(TelemetrySample.model_validate(record))
        except PydanticValidationError as e:
            raise TelemetryValidationError(
                f"Invalid telemetry record at index {i}",
                details={"index": i, "errors": e.errors(include_url=False)},
            ) from e
    return samples


def load_profile(data: Optional[Union[RunnerProfile, Mapping[str, Any]]]) -> Optional[RunnerProfile]:
    """
    Validate a profile from the profile store, passing None through.

    Raises:
        ValidationError: if the profile is malformed
    """
    if data is None or isinstance(data, RunnerProfile):
        return data
    try:
        return RunnerProfile.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid runner profile",
            field="profile",
            details={"errors": e.errors(include_url=False)},
        ) from e


class CadenceAnalyzer:
    """
    Service that analyzes a run's telemetry against a runner profile.

    Example:
        analyzer = CadenceAnalyzer()
        analysis = analyzer.analyze(samples, profile)
        for rec in analysis.recommendations:
            print(rec.title)
    """

    def __init__(self):
        self._logger = logging.getLogger(__name__)

    def analyze(
        self,
        samples: Iterable[SampleInput],
        profile: Optional[Union[RunnerProfile, Mapping[str, Any]]] = None,
    ) -> RunAnalysis:
        """
        Analyze one run.

        Args:
            samples: Decoded telemetry in recording order
            profile: Runner profile, or None to use default targets

        Returns:
            RunAnalysis with summary, zones, terrain, targets and recommendations
        """
        run_samples = load_samples(samples)
        runner = load_profile(profile)

        summary = summarize_run(run_samples)
        zones = classify_cadence_zones(s.cadence_spm for s in run_samples)
        terrain = analyze_terrain_profile(run_samples)
        targets = calculate_personalized_targets(runner)
        recommendations = generate_recommendations(summary, runner)
        terrain_targets = calculate_terrain_targets(targets.base_cadence, terrain)

        note = None
        if not summary.has_cadence:
            note = "No cadence data in this run"

        self._logger.info(
            f"Analyzed run: {summary.sample_count} samples, "
            f"avg cadence {summary.avg_cadence_spm:.1f} SPM, "
            f"{zones.optimal}% optimal, target {targets.base_cadence} SPM"
        )

        return RunAnalysis(
            summary=summary,
            zones=zones,
            terrain=terrain,
            targets=targets,
            recommendations=recommendations,
            terrain_targets=terrain_targets,
            profile_used=runner is not None,
            note=note,
        )

    def analyze_to_dict(
        self,
        samples: Iterable[SampleInput],
        profile: Optional[Union[RunnerProfile, Mapping[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """Analyze a run and return a serializable dictionary."""
        return self.analyze(samples, profile).to_dict()
