"""JUnit XML writer: gate Apdex groups on a minimum score in CI."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from ..core.accumulator import ApdexAccumulator


class JUnitXMLWriter:
    """
    Generate JUnit XML reports compatible with CI/CD systems
    (Jenkins, GitHub Actions, GitLab CI, etc.).

    Each group becomes one testcase that fails when its score is below
    ``min_score``. Groups without samples are reported as skipped.
    """

    def __init__(self, suite_name: str = "apdex", min_score: float = 0.70):
        self.suite_name = suite_name
        self.min_score = min_score

    def build(self, groups: Mapping[str, ApdexAccumulator]) -> ET.Element:
        testsuite = ET.Element("testsuite")
        testsuite.set("name", self.suite_name)
        testsuite.set("timestamp", datetime.now(timezone.utc).isoformat())

        failures = 0
        skipped = 0

        for name, apdex in groups.items():
            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("classname", self.suite_name)
            testcase.set("name", name)

            score = apdex.score
            if score is None:
                skipped += 1
                skip = ET.SubElement(testcase, "skipped")
                skip.set("message", apdex.rating_text())
            elif score < self.min_score:
                failures += 1
                failure = ET.SubElement(testcase, "failure")
                failure.set("message", f"{apdex} below {self.min_score:.2f}")
                failure.text = (
                    f"Rating: {apdex.rating_text()}\n"
                    f"Satisfied: {apdex.satisfied}\n"
                    f"Tolerating: {apdex.tolerating}\n"
                    f"Frustrated: {apdex.frustrated}"
                )

        testsuite.set("tests", str(len(groups)))
        testsuite.set("failures", str(failures))
        testsuite.set("errors", "0")
        testsuite.set("skipped", str(skipped))
        return testsuite

    def write(
        self,
        groups: Mapping[str, ApdexAccumulator],
        output_path: str | Path = "apdex.xml",
    ) -> Path:
        tree = ET.ElementTree(self.build(groups))
        output_path = Path(output_path)
        ET.indent(tree, space="  ")
        tree.write(output_path, encoding="utf-8", xml_declaration=True)
        return output_path
