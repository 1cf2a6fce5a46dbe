"""Shared pytest fixtures for the Apdex tests."""

from __future__ import annotations

import pytest

from apdex.core.accumulator import ApdexAccumulator
from apdex.core.samples import ResponseTime


MIXED_TIMES = [0.0, 0.1, 0.2, 0.5, 1.0, 4.0, 3.0, 2.0, 5.0]


@pytest.fixture
def mixed_apdex() -> ApdexAccumulator:
    """Nine samples at T=1.0: five satisfied, three tolerating, one frustrated."""
    return ApdexAccumulator.from_samples(1.0, [ResponseTime(t) for t in MIXED_TIMES])


@pytest.fixture
def fair_apdex() -> ApdexAccumulator:
    """Two hundred samples at the default threshold scoring 0.75."""
    apdex = ApdexAccumulator.default()
    for _ in range(100):
        apdex.insert(ResponseTime(0.1))
    for _ in range(100):
        apdex.insert(ResponseTime(5.0))
    return apdex


@pytest.fixture
def groups(fair_apdex: ApdexAccumulator) -> dict[str, ApdexAccumulator]:
    """Named groups covering good, fair, small, failing and empty cases."""
    excellent = ApdexAccumulator(0.5)
    excellent.insert_many([0.1] * 150)

    small = ApdexAccumulator.from_samples(4.0, [ResponseTime(0.1)])

    failing = ApdexAccumulator(0.5)
    failing.insert_many([0.1] * 20 + [5.0] * 80, failures=20)

    return {
        "/search": excellent,
        "/checkout": fair_apdex,
        "/admin": small,
        "/export": failing,
        "/unused": ApdexAccumulator(10.0),
    }

