from typing import Any, Dict, List

from perf_audit.severity import GROUPS, GOOD, POOR
from perf_audit.template_enrich import impact_for, recommendation_for

SEV_RANK = {"medium": 1, "high": 2}


def identify_bottlenecks(comparison) -> List[Dict[str, Any]]:
    """
    Every non-good comparison becomes a bottleneck, high (poor) before
    medium (needsImprovement). sorted() is stable, so within a severity the
    scan order (CWV, loading, resources; config order inside) survives.
    """
    out = []
    for key, label in GROUPS:
        for metric, comp in ((comparison or {}).get(key) or {}).items():
            if comp["status"] == GOOD:
                continue
            out.append({
                "category": label,
                "group": key,
                "metric": metric,
                "severity": "high" if comp["status"] == POOR else "medium",
                "currentValue": comp["value"],
                "goodThreshold": comp["thresholds"]["good"],
                "unit": comp.get("unit"),
                "impact": impact_for(metric),
                "recommendation": recommendation_for(metric),
            })
    return sorted(out, key=lambda b: SEV_RANK[b["severity"]], reverse=True)
