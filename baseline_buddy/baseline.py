"""
Baseline evaluation: decides whether a feature is safe under the active target.

A feature is "baseline" when its support is adequate for the configured
target. Baseline features are never reported; everything else gets a
severity and a status message.

Year targets compare the year a feature became newly supported with the
target year. When that comparison passes and the catalog records per-engine
versions, eligibility is recomputed against the year's default engine
floor, and that result wins. Custom targets always use coverage.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .browsers import EnginePair, QueryError, catalog_engine, compare_versions, resolve_query
from .catalog import CATALOG, FeatureDescriptor
from .config import CustomTarget, YearTarget
from .issue import UNKNOWN_STATUS, Severity, SupportStatus, default_severity

logger = logging.getLogger(__name__)

# Share of targeted (engine, version) pairs that must support a feature.
COVERAGE_THRESHOLD = 0.95

# Default engine floors for year targets.
YEAR_FLOORS: Mapping[str, Tuple[str, ...]] = {
    "2024": ("chrome >= 105", "firefox >= 105", "safari >= 15.4", "edge >= 105"),
    "2025": ("chrome >= 109", "firefox >= 109", "safari >= 16.4", "edge >= 109"),
}

@dataclass(frozen=True)
class BaselineEvaluation:
    """Outcome of evaluating one feature against the target."""
    is_baseline: bool
    severity: Severity
    status_message: str
    status: str


def status_message(descriptor: Optional[FeatureDescriptor]) -> str:
    if descriptor is None:
        return "Unknown baseline status"
    if descriptor.status is SupportStatus.LIMITED:
        return "Limited browser support - use with caution or provide fallbacks"
    if descriptor.status is SupportStatus.NEWLY:
        if descriptor.since:
            return f"Newly supported since {descriptor.since} - consider your browser targets"
        return "Newly supported - consider your browser targets"
    if descriptor.status is SupportStatus.WIDELY:
        return "Widely supported across browsers"
    return "Unknown baseline status"


def coverage_ratio(descriptor: FeatureDescriptor, pairs: Sequence[EnginePair]) -> float:
    """Fraction of pairs at or above the feature's minimum version for that engine.

    An engine with no recorded minimum counts as unsupported.
    """
    if not pairs:
        return 0.0
    supported = 0
    for engine, version in pairs:
        minimum = descriptor.engines.get(catalog_engine(engine))
        if minimum and compare_versions(minimum, version) <= 0:
            supported += 1
    return supported / len(pairs)


class BaselineEvaluator:
    """Evaluates features against a year or custom compatibility target."""

    def __init__(
        self,
        target: Union[YearTarget, CustomTarget],
        catalog: Optional[Mapping[str, FeatureDescriptor]] = None,
    ):
        self.target = target
        self.catalog = CATALOG if catalog is None else catalog
        self._resolved: Dict[Tuple[str, ...], List[EnginePair]] = {}

    def evaluate(self, feature_id: str) -> BaselineEvaluation:
        descriptor = self.catalog.get(feature_id)
        if descriptor is None:
            return BaselineEvaluation(
                False, Severity.WARNING, status_message(None), UNKNOWN_STATUS
            )
        return BaselineEvaluation(
            is_baseline=self.is_baseline(descriptor),
            severity=default_severity(descriptor.status),
            status_message=status_message(descriptor),
            status=descriptor.status.value,
        )

    def is_baseline(self, descriptor: FeatureDescriptor) -> bool:
        if descriptor.status is SupportStatus.WIDELY:
            return True

        if isinstance(self.target, CustomTarget):
            return self._has_coverage(descriptor, self.target.queries)

        if descriptor.status is SupportStatus.NEWLY and descriptor.since_year is not None:
            year_baseline = descriptor.since_year <= int(self.target.year)
            if year_baseline and descriptor.engines:
                return self._has_coverage(descriptor, YEAR_FLOORS[self.target.year])
            return year_baseline

        # Limited, or newly without a recorded date.
        return False

    def _has_coverage(self, descriptor: FeatureDescriptor, queries: Sequence[str]) -> bool:
        try:
            pairs = self._resolve(tuple(queries))
            ratio = coverage_ratio(descriptor, pairs)
        except QueryError as e:
            logger.warning("Failed to evaluate browser targets for feature %s: %s", descriptor.id, e)
            return False
        return ratio >= COVERAGE_THRESHOLD

    def _resolve(self, queries: Tuple[str, ...]) -> List[EnginePair]:
        pairs = self._resolved.get(queries)
        if pairs is None:
            pairs = resolve_query(queries)
            self._resolved[queries] = pairs
        return pairs
