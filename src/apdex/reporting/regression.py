"""Rating regressions: compare two runs of named Apdex groups band by band."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from ..core.accumulator import ApdexAccumulator, Rating

logger = logging.getLogger(__name__)


# Worst to best; NO_SAMPLE has no rank.
RATING_ORDER: tuple[Rating, ...] = (
    Rating.UNACCEPTABLE,
    Rating.POOR,
    Rating.FAIR,
    Rating.GOOD,
    Rating.EXCELLENT,
)


@dataclass
class RatingChange:
    """A group whose rating moved between two runs."""

    group: str
    before: Rating
    after: Rating
    low_confidence: bool = False

    @property
    def steps(self) -> int:
        """Bands moved; negative when the rating got worse."""
        return RATING_ORDER.index(self.after) - RATING_ORDER.index(self.before)

    def __str__(self) -> str:
        marker = "*" if self.low_confidence else ""
        return f"{self.group}: {self.before.value} -> {self.after.value}{marker}"


@dataclass
class RegressionResult:
    regressions: list[RatingChange] = field(default_factory=list)
    improvements: list[RatingChange] = field(default_factory=list)
    uncertain: list[RatingChange] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def has_regression(self) -> bool:
        return bool(self.regressions)


class RegressionDetector:
    """
    Flag groups whose Apdex rating dropped between a baseline run and the
    current one.

    Ratings are compared by band, so score jitter inside a band is ignored.
    A drop of more than ``tolerance`` bands is a regression. Moves involving
    a small sample (fewer than 100 samples on either side) go to
    ``uncertain`` unless ``count_small_samples`` is set. Groups missing from
    either run, or without samples, are skipped.
    """

    def __init__(self, tolerance: int = 0, count_small_samples: bool = False):
        if tolerance < 0:
            raise ValueError(f"tolerance must not be negative, got {tolerance!r}")
        self.tolerance = tolerance
        self.count_small_samples = count_small_samples

    def compare(
        self,
        baseline: Mapping[str, ApdexAccumulator],
        current: Mapping[str, ApdexAccumulator],
    ) -> RegressionResult:
        result = RegressionResult()

        for group, after in current.items():
            before = baseline.get(group)
            if before is None or before.has_no_samples or after.has_no_samples:
                result.skipped.append(group)
                continue

            change = RatingChange(
                group=group,
                before=before.rating,
                after=after.rating,
                low_confidence=before.is_small_sample or after.is_small_sample,
            )
            if change.steps == 0:
                result.unchanged.append(group)
            elif change.low_confidence and not self.count_small_samples:
                result.uncertain.append(change)
            elif change.steps < -self.tolerance:
                result.regressions.append(change)
            elif change.steps > 0:
                result.improvements.append(change)
            else:
                result.unchanged.append(group)

        if result.regressions:
            logger.warning(
                "Apdex rating dropped in %d group(s): %s",
                len(result.regressions),
                "; ".join(str(c) for c in result.regressions),
            )
        return result
