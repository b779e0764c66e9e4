from typing import Any, Dict, List, Optional

MAX_PER_PRIORITY = 5

BYTE_UNITS  = {"bytes", "byte", "b"}
MS_UNITS    = {"ms", "milliseconds"}
SCORE_UNITS = {"score", "unitless", ""}

TIME_HINTS = ("Time", "Paint", "Delay", "Index", "Interactive", "Loaded")


def _plain(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def _fmt_bytes(value) -> str:
    if value >= 1048576:
        return f"{value / 1048576:.2f} MB"
    if value >= 1024:
        return f"{value / 1024:.2f} KB"
    return f"{_plain(value)} bytes"

def _fmt_ms(value) -> str:
    if value >= 1000:
        return f"{value / 1000:.2f} s"
    return f"{int(value + 0.5)} ms"

def _unit_class(metric: str, unit: Optional[str]) -> Optional[str]:
    u = unit.strip().lower() if isinstance(unit, str) else None
    if u in BYTE_UNITS:
        return "bytes"
    if u in MS_UNITS:
        return "ms"
    if u in SCORE_UNITS and "LayoutShift" in metric:
        return "shift"
    # no (or unknown) unit: guess from the metric name
    if "Size" in metric:
        return "bytes"
    if any(h in metric for h in TIME_HINTS):
        return "ms"
    if "LayoutShift" in metric:
        return "shift"
    return None

def format_value(value, metric: str, unit: Optional[str] = None) -> str:
    """Human form of a metric value: bytes/KB/MB, ms/s, 3-decimal shift score."""
    if value is None:
        return "N/A"
    kind = _unit_class(metric, unit)
    if kind == "bytes":
        return _fmt_bytes(value)
    if kind == "ms":
        return _fmt_ms(value)
    if kind == "shift":
        return f"{value:.3f}"
    return _plain(value)


def _recommendation(b, priority, issue) -> Dict[str, Any]:
    unit = b.get("unit")
    return {
        "priority": priority,
        "metric": b["metric"],
        "category": b["category"],
        "issue": issue,
        "impact": b["impact"],
        "recommendation": b["recommendation"],
        "currentValue": format_value(b["currentValue"], b["metric"], unit),
        "targetValue": format_value(b["goodThreshold"], b["metric"], unit),
    }

def _unit_from(comparison, b):
    comp = ((comparison or {}).get(b.get("group")) or {}).get(b["metric"]) or {}
    return comp.get("unit", b.get("unit"))

def generate_recommendations(bottlenecks, comparison=None) -> List[Dict[str, Any]]:
    """
    Up to five High (poor) then up to five Medium (needs improvement)
    entries, each in bottleneck rank order.
    """
    recs = []
    high = [b for b in bottlenecks if b["severity"] == "high"][:MAX_PER_PRIORITY]
    medium = [b for b in bottlenecks if b["severity"] == "medium"][:MAX_PER_PRIORITY]

    for b in high:
        b = dict(b, unit=_unit_from(comparison, b))
        recs.append(_recommendation(b, "High", f"{b['metric']} is poor"))
    for b in medium:
        b = dict(b, unit=_unit_from(comparison, b))
        recs.append(_recommendation(b, "Medium", f"{b['metric']} needs improvement"))
    return recs
