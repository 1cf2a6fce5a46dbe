"""
Apdex
=====

Application Performance Index scoring following the Apdex Technical
Specification v1.1.

Quick start::

    from apdex import ApdexAccumulator, ResponseTime, FAILURE

    apdex = ApdexAccumulator.from_samples(0.5, [ResponseTime(0.2), FAILURE])
    print(apdex, apdex.score_rating())
"""

from .core.samples import FAILURE, Failure, ResponseTime, Sample, as_sample
from .core.accumulator import (
    ApdexAccumulator,
    ApdexRating,
    DisplayColor,
    Rating,
)
from .core.collect import collect
from .config import ApdexConfig, PROFILES, load_config

from .reporting.html_report import HTMLReportGenerator
from .reporting.junit import JUnitXMLWriter
from .reporting.regression import RatingChange, RegressionDetector

__version__ = "0.1.0"

__all__ = [
    # Core
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
    # Config
    "ApdexConfig",
    "PROFILES",
    "load_config",
    # Reporting
    "HTMLReportGenerator",
    "JUnitXMLWriter",
    "RatingChange",
    "RegressionDetector",
]
