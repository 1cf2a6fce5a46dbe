"""Report configuration: thresholds per group, loaded from YAML."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .core.accumulator import DEFAULT_THRESHOLD, ApdexAccumulator, check_hit_rate

logger = logging.getLogger(__name__)


# Common target thresholds in seconds.
PROFILES: dict[str, float] = {
    "web":         4.0,
    "api":         0.5,
    "interactive": 0.1,
    "batch":       10.0,
}


@dataclass
class ApdexConfig:
    """
    Thresholds and gates for a set of named Apdex groups.

    ``threshold`` applies to every group not listed in ``groups``.
    ``min_score`` is the score a group must reach to pass a CI gate.
    """

    threshold: float = DEFAULT_THRESHOLD
    assumed_hit_rate: float | None = None
    min_score: float = 0.70
    groups: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.assumed_hit_rate is not None:
            check_hit_rate(self.assumed_hit_rate)

    @classmethod
    def from_profile(cls, profile: str, **overrides: Any) -> ApdexConfig:
        return cls(threshold=profile_threshold(profile), **overrides)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ApdexConfig:
        _check_mapping(data, "Apdex config")
        data = data.get("apdex", data) or {}
        _check_mapping(data, "'apdex' section")
        _check_mapping(data.get("groups") or {}, "'groups' section")

        if "profile" in data:
            threshold = profile_threshold(data["profile"])
        else:
            threshold = DEFAULT_THRESHOLD
        threshold = float(data.get("threshold", threshold))

        hit_rate = data.get("assumed_hit_rate")
        groups = {
            name: float(value) for name, value in (data.get("groups") or {}).items()
        }
        return cls(
            threshold=threshold,
            assumed_hit_rate=float(hit_rate) if hit_rate is not None else None,
            min_score=float(data.get("min_score", 0.70)),
            groups=groups,
        )

    def threshold_for(self, group: str) -> float:
        return self.groups.get(group, self.threshold)

    def accumulator(self, group: str = "") -> ApdexAccumulator:
        """Return an empty accumulator for *group*."""
        return ApdexAccumulator(self.threshold_for(group))

    def score_group(self, group: str, samples: Any) -> ApdexAccumulator:
        """Classify *samples* for *group*, applying the configured hit rate."""
        threshold = self.threshold_for(group)
        if self.assumed_hit_rate is None:
            return ApdexAccumulator.from_samples(threshold, samples)
        return ApdexAccumulator.with_hit_rate(threshold, self.assumed_hit_rate, samples)


def profile_threshold(profile: str) -> float:
    if profile not in PROFILES:
        logger.warning("Unknown Apdex profile '%s', using 'web'", profile)
    return PROFILES.get(profile, PROFILES["web"])


def load_config(path: str | Path) -> ApdexConfig:
    path = Path(path)
    with open(path) as fh:
        data = yaml.safe_load(fh)
    return ApdexConfig.from_dict(data or {})


def _check_mapping(value: Any, what: str) -> None:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}")
