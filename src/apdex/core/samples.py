"""Sample types: the outcome of one measured operation."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class ResponseTime:
    """A successful operation that took *seconds* to complete."""

    seconds: float


@dataclass(frozen=True)
class Failure:
    """An operation that failed; it carries no timing value."""


FAILURE = Failure()

Sample = Union[ResponseTime, Failure]


def as_sample(value: Any) -> Sample:
    """Coerce an instrumentation value into a ``Sample``.

    ``None`` and exception instances become ``FAILURE``; plain numbers are
    response times in seconds.
    """
    if isinstance(value, (ResponseTime, Failure)):
        return value
    if value is None or isinstance(value, BaseException):
        return FAILURE
    # bool is an int subclass but never a response time
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return ResponseTime(float(value))
    raise TypeError(f"Cannot interpret {value!r} as an Apdex sample")
