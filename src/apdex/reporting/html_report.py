"""HTML report generator using Jinja2 templates."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

import jinja2

from ..core.accumulator import ApdexAccumulator, DisplayColor


_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
<style>
  body { font-family: system-ui, sans-serif; max-width: 960px; margin: 24px auto; }
  table { border-collapse: collapse; font-size: 13px; }
  th, td { text-align: left; padding: 6px 12px; border-bottom: 1px solid #eee; }
  td.num { text-align: right; }
  .apdex.cyan { color: #0e7c86; }
  .apdex.green { color: #155724; }
  .apdex.purple { color: #6f42c1; }
  .apdex.red { color: #721c24; }
  .note { font-size: 12px; color: #888; }
</style>
</head>
<body>
<h1>{{ title }}</h1>
<p class="note">Generated {{ timestamp }}, {{ groups|length }} group(s)</p>
<table>
  <tr><th>Group</th><th>Score</th><th>Rating</th>
    <th>Satisfied</th><th>Tolerating</th><th>Frustrated</th></tr>
  {% for g in groups %}
  <tr>
    <td>{{ g.name }}</td>
    <td class="apdex {{ g.color }}">{{ g.text }}</td>
    <td class="apdex {{ g.color }}">{{ g.rating_text }}</td>
    <td class="num">{{ g.satisfied }}</td>
    <td class="num">{{ g.tolerating }}</td>
    <td class="num">{{ g.frustrated }}</td>
  </tr>
  {% endfor %}
</table>
{% if any_small %}
<p class="note">* fewer than 100 samples</p>
{% endif %}
</body>
</html>
"""


class HTMLReportGenerator:
    """Generate a self-contained HTML page from named accumulators."""

    def __init__(self, title: str = "Apdex Report"):
        self.title = title
        self._template = jinja2.Environment(autoescape=True).from_string(_HTML_TEMPLATE)

    def render(self, groups: Mapping[str, ApdexAccumulator]) -> str:
        rows = []
        for name, apdex in groups.items():
            color = apdex.display_color
            rows.append({
                "name": name,
                "text": str(apdex),
                "rating_text": apdex.rating_text(),
                "color": "" if color is DisplayColor.UNSET else color.value,
                "satisfied": apdex.satisfied,
                "tolerating": apdex.tolerating,
                "frustrated": apdex.frustrated,
            })

        return self._template.render(
            title=self.title,
            timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
            groups=rows,
            any_small=any(a.is_small_sample for a in groups.values()),
        )

    def generate(
        self,
        groups: Mapping[str, ApdexAccumulator],
        output_path: str | Path = "apdex.html",
    ) -> Path:
        output_path = Path(output_path)
        output_path.write_text(self.render(groups), encoding="utf-8")
        return output_path
