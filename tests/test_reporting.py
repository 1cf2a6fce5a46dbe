"""Tests for the reporting layer."""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from rich.console import Console

from apdex.core.accumulator import ApdexAccumulator, DisplayColor, Rating
from apdex.reporting.html_report import HTMLReportGenerator
from apdex.reporting.junit import JUnitXMLWriter
from apdex.reporting.regression import RegressionDetector
from apdex.reporting.terminal import print_summary, render, style_for


class TestTerminal:

    def test_style_for(self):
        assert style_for(DisplayColor.UNSET) == ""
        assert style_for(DisplayColor.CYAN) == "cyan"
        assert style_for(DisplayColor.PURPLE) == "magenta"
        assert style_for(DisplayColor.RED) == "red"

    def test_render(self, groups):
        text = render(groups["/search"])
        assert text.plain == "1.00 [0.5]"
        assert text.style == "cyan"

    def test_render_rating(self, groups):
        text = render(groups["/checkout"], rating=True)
        assert text.plain == "Fair [4.0]"
        assert text.style == "magenta"

    def test_small_sample_unstyled(self, groups):
        text = render(groups["/admin"])
        assert text.plain == "1.00 [4.0]*"
        assert text.style == ""

    def test_print_summary(self, groups):
        buf = io.StringIO()
        console = Console(file=buf, width=120, color_system=None)
        print_summary(groups, console=console)
        out = buf.getvalue()
        assert "/checkout" in out
        assert "0.75 [4.0]" in out
        assert "NoSample [10]" in out


class TestHTMLReport:

    def test_generate(self, tmp_path: Path, groups):
        gen = HTMLReportGenerator(title="Nightly Apdex")
        out = gen.generate(groups, output_path=tmp_path / "apdex.html")
        assert out.exists()
        content = out.read_text()
        assert "Nightly Apdex" in content
        assert "/checkout" in content
        assert "Fair [4.0]" in content
        assert 'class="apdex red"' in content
        assert "fewer than 100 samples" in content

    def test_empty(self, tmp_path: Path):
        out = HTMLReportGenerator().generate({}, output_path=tmp_path / "apdex.html")
        content = out.read_text()
        assert "0 group(s)" in content
        assert "fewer than 100 samples" not in content


class TestJUnitXML:

    def test_write(self, tmp_path: Path, groups):
        out = JUnitXMLWriter(min_score=0.70).write(groups, output_path=tmp_path / "apdex.xml")
        assert out.exists()
        suite = ET.parse(out).getroot()
        assert suite.get("tests") == "5"
        assert suite.get("failures") == "1"
        assert suite.get("skipped") == "1"

        cases = {case.get("name"): case for case in suite.iter("testcase")}
        assert cases["/export"].find("failure") is not None
        assert cases["/unused"].find("skipped") is not None
        assert cases["/checkout"].find("failure") is None

    def test_strict_gate(self, groups):
        suite = JUnitXMLWriter(min_score=0.94).build(groups)
        # only /search and the single-sample /admin reach 0.94
        assert suite.get("failures") == "2"

    def test_all_pass(self, tmp_path: Path):
        apdex = ApdexAccumulator.from_samples(1.0, [0.1] * 100)
        out = JUnitXMLWriter().write({"/ok": apdex}, output_path=tmp_path / "apdex.xml")
        assert 'failures="0"' in out.read_text()


def counted(satisfied: int = 0, frustrated: int = 0) -> ApdexAccumulator:
    apdex = ApdexAccumulator()
    apdex.satisfied = satisfied
    apdex.frustrated = frustrated
    return apdex


class TestRegressionDetector:

    def test_rating_drop(self, groups):
        baseline = {"/checkout": counted(95, 5), "/search": counted(100)}
        result = RegressionDetector().compare(baseline, groups)
        assert result.has_regression
        [change] = result.regressions
        assert (change.before, change.after) == (Rating.EXCELLENT, Rating.FAIR)
        assert change.steps == -2
        assert str(change) == "/checkout: Excellent -> Fair"
        assert result.unchanged == ["/search"]

    def test_score_jitter_inside_band(self):
        baseline = {"/checkout": counted(99, 1)}
        current = {"/checkout": counted(95, 5)}
        result = RegressionDetector().compare(baseline, current)
        assert not result.has_regression
        assert result.unchanged == ["/checkout"]

    def test_tolerance(self, groups):
        baseline = {"/checkout": counted(95, 5)}
        assert not RegressionDetector(tolerance=2).compare(baseline, groups).has_regression
        assert RegressionDetector(tolerance=1).compare(baseline, groups).has_regression

    def test_improvement(self, groups):
        baseline = {"/checkout": counted(50, 50), "/export": counted(0, 100)}
        result = RegressionDetector().compare(baseline, groups)
        assert not result.has_regression
        assert [c.group for c in result.improvements] == ["/checkout"]
        assert result.unchanged == ["/export"]

    def test_small_sample_is_uncertain(self, groups):
        baseline = {"/admin": counted(10, 90)}
        result = RegressionDetector().compare(baseline, groups)
        assert [c.group for c in result.uncertain] == ["/admin"]
        assert result.uncertain[0].low_confidence
        assert not result.improvements

        counted_result = RegressionDetector(count_small_samples=True).compare(baseline, groups)
        assert [c.group for c in counted_result.improvements] == ["/admin"]

    def test_skips_missing_and_empty_groups(self, groups):
        baseline = {"/unused": counted(100)}
        result = RegressionDetector().compare(baseline, groups)
        assert not result.has_regression
        assert set(result.skipped) == set(groups)

    def test_negative_tolerance(self):
        with pytest.raises(ValueError):
            RegressionDetector(tolerance=-1)

    def test_logs_regressions(self, groups, caplog):
        baseline = {"/checkout": counted(100)}
        with caplog.at_level(logging.WARNING, logger="apdex.reporting.regression"):
            RegressionDetector().compare(baseline, groups)
        assert "/checkout: Excellent -> Fair" in caplog.text
