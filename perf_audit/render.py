from __future__ import annotations
from typing import Any, Dict, List

from jinja2 import Environment

from perf_audit.recommend import format_value
from perf_audit.severity import GROUPS

STATUS_CLASS = {"good": "status-good", "needsImprovement": "status-warning", "poor": "status-poor"}

REPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Performance Comparison Report</title>
<style>
  body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background: #f5f5f5; padding: 20px; line-height: 1.6; }
  .container { max-width: 1200px; margin: 0 auto; }
  .header { background: #5a67d8; color: white; padding: 30px; border-radius: 10px; margin-bottom: 30px; }
  .card, .section { background: white; padding: 25px; border-radius: 10px; margin-bottom: 30px; }
  .score { font-size: 4em; font-weight: bold; color: #5a67d8; text-align: center; }
  .grade { font-size: 2em; text-align: center; }
  .tally { display: grid; grid-template-columns: repeat(4, 1fr); gap: 20px; text-align: center; }
  table { width: 100%; border-collapse: collapse; }
  th, td { padding: 10px; text-align: left; border-bottom: 1px solid #eee; }
  .status-good { color: #28a745; }
  .status-warning { color: #b8860b; }
  .status-poor { color: #dc3545; }
  .item { border-left: 4px solid #ffc107; padding: 12px; margin-bottom: 12px; background: #fff8e1; }
  .item.high { border-left-color: #dc3545; background: #fdecea; }
</style>
</head>
<body>
<div class="container">
  <div class="header">
    <h1>Performance Comparison Report</h1>
    <p><strong>URL:</strong> {{ r.url }}</p>
    <p><strong>Date:</strong> {{ r.timestamp }}</p>
  </div>

  <div class="card">
    <div class="score">{{ r.overallScore }}</div>
    <div class="grade">Grade: {{ r.grade }}</div>
    {% if r.metrics.lighthouseScore is not none %}
    <p style="text-align:center">Lighthouse Score: {{ r.metrics.lighthouseScore }}</p>
    {% endif %}
  </div>

  <div class="card tally">
    <div><h3>Good</h3><div class="status-good">{{ r.summary.good }}</div></div>
    <div><h3>Needs Improvement</h3><div class="status-warning">{{ r.summary.needsImprovement }}</div></div>
    <div><h3>Poor</h3><div class="status-poor">{{ r.summary.poor }}</div></div>
    <div><h3>Bottlenecks</h3><div>{{ r.summary.bottleneckCount }}</div>
      <small>{{ r.summary.criticalBottleneckCount }} critical</small></div>
  </div>

  {% if r.bottlenecks %}
  <div class="section">
    <h2>Performance Bottlenecks</h2>
    {% for b in r.bottlenecks %}
    <div class="item {{ b.severity }}">
      <h3>{{ b.metric }} [{{ b.severity | upper }}]</h3>
      <p><strong>Current:</strong> {{ b.currentValue | format_value(b.metric, b.unit) }}
       | <strong>Target:</strong> {{ b.goodThreshold | format_value(b.metric, b.unit) }}</p>
      <p><strong>Impact:</strong> {{ b.impact }}</p>
      <p><strong>Recommendation:</strong> {{ b.recommendation }}</p>
    </div>
    {% endfor %}
  </div>
  {% endif %}

  {% for label, rows in sections %}
  <div class="section">
    <h2>{{ label }}</h2>
    <table>
      <thead><tr><th>Metric</th><th>Value</th><th>Status</th><th>Threshold (Good)</th></tr></thead>
      <tbody>
      {% for metric, c in rows %}
        <tr>
          <td><strong>{{ metric }}</strong></td>
          <td>{{ c.value | format_value(metric, c.unit) }}</td>
          <td><span class="{{ status_class[c.status] }}">{{ c.rating }}</span></td>
          <td>{{ c.thresholds.good | format_value(metric, c.unit) }}</td>
        </tr>
      {% endfor %}
      </tbody>
    </table>
  </div>
  {% endfor %}

  {% if r.recommendations %}
  <div class="section">
    <h2>Optimization Recommendations</h2>
    {% for rec in r.recommendations %}
    <div class="item {{ 'high' if rec.priority == 'High' else 'medium' }}">
      <h3>{{ rec.metric }} [{{ rec.priority }}]</h3>
      <p><strong>Issue:</strong> {{ rec.issue }}</p>
      <p><strong>Impact:</strong> {{ rec.impact }}</p>
      <p><strong>Current:</strong> {{ rec.currentValue }} | <strong>Target:</strong> {{ rec.targetValue }}</p>
      <p><strong>Recommendation:</strong> {{ rec.recommendation }}</p>
    </div>
    {% endfor %}
  </div>
  {% endif %}
</div>
</body>
</html>
"""


def _env() -> Environment:
    env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)
    env.filters["format_value"] = format_value
    return env

def render_html(result: Dict[str, Any]) -> str:
    comparison = result.get("comparison") or {}
    sections = [(label, list((comparison.get(key) or {}).items())) for key, label in GROUPS]
    tpl = _env().from_string(REPORT_TEMPLATE)
    return tpl.render(r=result, sections=sections, status_class=STATUS_CLASS)


def render_console(result: Dict[str, Any], top: int = 5) -> str:
    s = result["summary"]
    lh = result["metrics"].get("lighthouseScore")
    lines: List[str] = [
        "",
        "Performance Analysis Results:",
        f"   URL: {result['url']}",
        f"   Overall Score: {result['overallScore']}/100 (Grade: {result['grade']})",
        f"   Lighthouse Score: {lh if lh is not None else 'N/A'}",
        "",
        "Summary:",
        f"   Good: {s['good']}",
        f"   Needs Improvement: {s['needsImprovement']}",
        f"   Poor: {s['poor']}",
        f"   Bottlenecks: {s['bottleneckCount']} ({s['criticalBottleneckCount']} critical)",
    ]
    if result["bottlenecks"]:
        lines += ["", "Top Bottlenecks:"]
        for i, b in enumerate(result["bottlenecks"][:top], 1):
            value = format_value(b["currentValue"], b["metric"], b.get("unit"))
            lines.append(f"   {i}. [{b['severity'].upper()}] {b['metric']}: {value}")
    return "\n".join(lines)
