from .html_report import HTMLReportGenerator
from .junit import JUnitXMLWriter
from .regression import RatingChange, RegressionDetector, RegressionResult
from .terminal import print_summary, render, style_for

__all__ = [
    "HTMLReportGenerator",
    "JUnitXMLWriter",
    "RatingChange",
    "RegressionDetector",
    "RegressionResult",
    "print_summary",
    "render",
    "style_for",
]
