"""Apdex accumulator: sample classification, score, rating and Uniform Output.

Based on the Apdex Technical Specification v1.1. Samples are sorted into
three zones by the target threshold ``T``:

* Satisfied   -- response time ``<= T``
* Tolerating  -- response time ``<= 4T``
* Frustrated  -- anything slower, and every failed operation

The score is ``(satisfied + tolerating / 2) / total``.
"""

from __future__ import annotations

import enum
import logging
import math
import numbers
from typing import Any, Iterable

import numpy as np

from .samples import Failure, ResponseTime, Sample, as_sample

logger = logging.getLogger(__name__)


DEFAULT_THRESHOLD = 4.0
TOLERATING_FACTOR = 4.0
SMALL_SAMPLE_LIMIT = 100


class Rating(str, enum.Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    UNACCEPTABLE = "Unacceptable"
    NO_SAMPLE = "NoSample"


class DisplayColor(str, enum.Enum):
    """Semantic severity of a score; renderers decide the actual colour."""

    UNSET = "unset"
    CYAN = "cyan"
    GREEN = "green"
    PURPLE = "purple"
    RED = "red"


# Lower bound of each band, checked in order; below the last is UNACCEPTABLE.
RATING_BANDS: tuple[tuple[float, Rating], ...] = (
    (0.94, Rating.EXCELLENT),
    (0.85, Rating.GOOD),
    (0.70, Rating.FAIR),
    (0.50, Rating.POOR),
)

RATING_COLORS: dict[Rating, DisplayColor] = {
    Rating.EXCELLENT: DisplayColor.CYAN,
    Rating.GOOD: DisplayColor.GREEN,
    Rating.FAIR: DisplayColor.PURPLE,
    Rating.POOR: DisplayColor.RED,
    Rating.UNACCEPTABLE: DisplayColor.RED,
    Rating.NO_SAMPLE: DisplayColor.UNSET,
}


class ApdexAccumulator:
    """
    Running Apdex counts for a single threshold.

    ``str()`` gives the Uniform Output of the score (``"0.75 [4.0]"``);
    :meth:`score_rating` gives the same output with the rating word.
    A trailing ``*`` marks a group of fewer than 100 samples.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self._threshold = threshold
        self.satisfied = 0
        self.tolerating = 0
        self.frustrated = 0

    # -- construction --------------------------------------------------------

    @classmethod
    def new(cls, threshold: float) -> ApdexAccumulator:
        return cls(threshold)

    @classmethod
    def default(cls) -> ApdexAccumulator:
        return cls(DEFAULT_THRESHOLD)

    @classmethod
    def from_samples(
        cls, threshold: float, samples: Iterable[Sample | float | None]
    ) -> ApdexAccumulator:
        """Classify every sample in *samples*; failures count as Frustrated."""
        apdex = cls(threshold)
        for sample in samples:
            apdex.insert(sample)
        return apdex

    @classmethod
    def with_hit_rate(
        cls,
        threshold: float,
        assumed_hit_rate: float,
        samples: Iterable[Sample | float | None],
    ) -> ApdexAccumulator:
        """Classify *samples* as cache misses and add the implied cache hits.

        A fraction *assumed_hit_rate* of all traffic is assumed to be served
        from cache instantly, so the hits are added to the Satisfied zone.
        """
        check_hit_rate(assumed_hit_rate)
        apdex = cls.from_samples(threshold, samples)
        apdex.add_cache_hits(assumed_hit_rate)
        return apdex

    # -- classification ------------------------------------------------------

    @property
    def threshold(self) -> float:
        """Satisfied/Tolerating boundary in seconds."""
        return self._threshold

    @property
    def frustrated_threshold(self) -> float:
        return self._threshold * TOLERATING_FACTOR

    def insert(self, sample: Sample | float | None) -> None:
        """Classify a single sample into one of the three zones."""
        match as_sample(sample):
            case ResponseTime(seconds=seconds):
                # NaN fails both comparisons and lands in Frustrated
                if seconds <= self._threshold:
                    self.satisfied += 1
                elif seconds <= self.frustrated_threshold:
                    self.tolerating += 1
                else:
                    self.frustrated += 1
            case Failure():
                # Detected task errors count as Frustrated (Apdex TS v1.1).
                self.frustrated += 1

    def insert_many(self, response_times: Any, failures: int = 0) -> None:
        """Classify a batch of response times (seconds) in one pass.

        *response_times* is anything ``numpy.asarray`` accepts; *failures* is
        the number of failed operations in the same batch.
        """
        check_failure_count(failures)
        times = np.asarray(response_times, dtype=np.float64).ravel()
        satisfied = times <= self._threshold
        tolerating = ~satisfied & (times <= self.frustrated_threshold)

        n_satisfied = int(np.count_nonzero(satisfied))
        n_tolerating = int(np.count_nonzero(tolerating))
        self.satisfied += n_satisfied
        self.tolerating += n_tolerating
        self.frustrated += times.size - n_satisfied - n_tolerating + int(failures)
        logger.debug(
            "Classified batch of %d response times and %d failures",
            times.size, failures,
        )

    def add_cache_hits(self, assumed_hit_rate: float) -> None:
        """Treat the current counts as cache misses and add the implied hits.

        Hits are assumed instant, so they all land in the Satisfied zone.
        """
        check_hit_rate(assumed_hit_rate)
        misses = self.total
        hits = math.ceil(misses / (1.0 - assumed_hit_rate) - misses)
        logger.debug(
            "Adding %d simulated cache hits to %d misses (hit rate %.3f)",
            hits, misses, assumed_hit_rate,
        )
        self.satisfied += hits

    # -- aggregates ----------------------------------------------------------

    @property
    def total(self) -> int:
        return self.satisfied + self.tolerating + self.frustrated

    @property
    def has_no_samples(self) -> bool:
        return self.total == 0

    @property
    def is_small_sample(self) -> bool:
        """True for 1-99 samples; only affects display, never the score."""
        return 0 < self.total < SMALL_SAMPLE_LIMIT

    @property
    def score(self) -> float | None:
        if self.has_no_samples:
            return None
        return (self.satisfied + self.tolerating / 2.0) / self.total

    @property
    def rating(self) -> Rating:
        score = self.score
        if score is None:
            return Rating.NO_SAMPLE
        for lower, rating in RATING_BANDS:
            if score >= lower:
                return rating
        return Rating.UNACCEPTABLE

    @property
    def rating_word(self) -> str:
        return self.rating.value

    @property
    def display_color(self) -> DisplayColor:
        if self.is_small_sample:
            return DisplayColor.UNSET
        return RATING_COLORS[self.rating]

    def merge(self, other: ApdexAccumulator) -> ApdexAccumulator:
        """Return a new accumulator holding the counts of both."""
        if other.threshold != self.threshold:
            raise ValueError(
                f"Cannot merge Apdex with threshold {other.threshold} "
                f"into threshold {self.threshold}"
            )
        merged = type(self)(self._threshold)
        merged.satisfied = self.satisfied + other.satisfied
        merged.tolerating = self.tolerating + other.tolerating
        merged.frustrated = self.frustrated + other.frustrated
        return merged

    def __add__(self, other: object) -> ApdexAccumulator:
        if not isinstance(other, ApdexAccumulator):
            return NotImplemented
        return self.merge(other)

    # -- output --------------------------------------------------------------

    def threshold_suffix(self) -> str:
        marker = "*" if self.is_small_sample else ""
        if self._threshold < 10.0:
            return f" [{self._threshold:.1f}]{marker}"
        return f" [{self._threshold:.0f}]{marker}"

    def score_rating(self) -> ApdexRating:
        return ApdexRating(self)

    def rating_text(self) -> str:
        return str(self.score_rating())

    def to_dict(self) -> dict[str, Any]:
        return {
            "threshold": self._threshold,
            "satisfied": self.satisfied,
            "tolerating": self.tolerating,
            "frustrated": self.frustrated,
            "total": self.total,
            "score": self.score,
            "rating": self.rating_word,
            "small_sample": self.is_small_sample,
            "text": str(self),
            "rating_text": self.rating_text(),
        }

    def __str__(self) -> str:
        score = self.score
        head = "NS" if score is None else f"{score:.2f}"
        return head + self.threshold_suffix()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(threshold={self._threshold!r}, "
            f"satisfied={self.satisfied}, tolerating={self.tolerating}, "
            f"frustrated={self.frustrated})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApdexAccumulator):
            return NotImplemented
        return (
            self._threshold == other._threshold
            and self.satisfied == other.satisfied
            and self.tolerating == other.tolerating
            and self.frustrated == other.frustrated
        )

    __hash__ = None  # type: ignore[assignment]


class ApdexRating:
    """Uniform Output with the rating word instead of the score."""

    def __init__(self, apdex: ApdexAccumulator):
        self.apdex = apdex

    def __str__(self) -> str:
        return self.apdex.rating_word + self.apdex.threshold_suffix()


def check_failure_count(failures: int) -> None:
    if isinstance(failures, bool) or not isinstance(failures, numbers.Integral):
        raise TypeError(f"failures must be an integer count, got {failures!r}")
    if failures < 0:
        raise ValueError(f"failures must not be negative, got {failures!r}")


def check_hit_rate(assumed_hit_rate: float) -> None:
    """Reject hit rates outside ``[0, 1)``; 1.0 would divide by zero."""
    if not 0.0 <= assumed_hit_rate < 1.0:
        raise ValueError(
            f"assumed_hit_rate must be in [0, 1), got {assumed_hit_rate!r}"
        )
