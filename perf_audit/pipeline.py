from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable

from perf_audit.bottlenecks import identify_bottlenecks
from perf_audit.parse import metrics_from_lhr
from perf_audit.recommend import generate_recommendations
from perf_audit.scoring import calculate_score, scoring_options
from perf_audit.severity import GROUPS, GOOD, NEEDS_IMPROVEMENT, POOR, ThresholdComparator


def _noop(*_, **__):
    return None

def summarize(comparison, bottlenecks) -> Dict[str, int]:
    counts = {GOOD: 0, NEEDS_IMPROVEMENT: 0, POOR: 0}
    for key, _label in GROUPS:
        for comp in ((comparison or {}).get(key) or {}).values():
            counts[comp["status"]] += 1
    return {
        "totalMetrics": sum(counts.values()),
        "good": counts[GOOD],
        "needsImprovement": counts[NEEDS_IMPROVEMENT],
        "poor": counts[POOR],
        "bottleneckCount": len(bottlenecks),
        "criticalBottleneckCount": sum(1 for b in bottlenecks if b["severity"] == "high"),
    }

def analyze(lhr: dict, thresholds: dict, report_path=None, now: datetime | None = None,
            log: Callable[..., Any] = _noop) -> Dict[str, Any]:
    """
    Grade one Lighthouse report against a threshold config.

    Pure: reads only its arguments and returns a fresh result dict that
    json.dumps can serialize as-is.
    """
    lhr = lhr if isinstance(lhr, dict) else {}
    comparator = ThresholdComparator(thresholds)
    url = lhr.get("finalUrl") or lhr.get("requestedUrl") or "Unknown"

    log(f"[1/5] Extract metrics … {url}")
    metrics = metrics_from_lhr(lhr)

    log("[2/5] Compare against thresholds …")
    comparison = comparator.compare(metrics)

    log("[3/5] Bottlenecks …")
    bottlenecks = identify_bottlenecks(comparison)

    log("[4/5] Score …")
    weights, grades = scoring_options(comparator.cfg)
    score = calculate_score(comparison, weights, grades)

    log("[5/5] Recommendations …")
    recommendations = generate_recommendations(bottlenecks, comparison)

    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return {
        "url": url,
        "timestamp": stamp,
        "lighthouseReportPath": str(report_path) if report_path is not None else None,
        "metrics": metrics,
        "comparison": comparison,
        "bottlenecks": bottlenecks,
        "summary": summarize(comparison, bottlenecks),
        "recommendations": recommendations,
        **score,
    }

def exit_code(results: Iterable[Dict[str, Any]]) -> int:
    """1 when any analyzed report has a poor metric, else 0."""
    return 1 if any(r["summary"]["poor"] > 0 for r in results) else 0
