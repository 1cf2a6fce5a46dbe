from .samples import FAILURE, Failure, ResponseTime, Sample, as_sample
from .accumulator import (
    ApdexAccumulator,
    ApdexRating,
    DisplayColor,
    Rating,
)
from .collect import collect

__all__ = [
    "FAILURE",
    "Failure",
    "ResponseTime",
    "Sample",
    "as_sample",
    "ApdexAccumulator",
    "ApdexRating",
    "DisplayColor",
    "Rating",
    "collect",
]
