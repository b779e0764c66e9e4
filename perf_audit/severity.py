from typing import Any, Dict, List, Optional

from perf_audit.inputs import read_thresholds

# config key -> label, in scan order
GROUPS = (
    ("coreWebVitals",   "Core Web Vitals"),
    ("loadingMetrics",  "Loading Metrics"),
    ("resourceMetrics", "Resource Metrics"),
)

GOOD = "good"
NEEDS_IMPROVEMENT = "needsImprovement"
POOR = "poor"

RATINGS = {
    GOOD: "Good",
    NEEDS_IMPROVEMENT: "Needs Improvement",
    POOR: "Poor",
}


def _is_num(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)

def classify(value, good, needs_improvement) -> str:
    # lower is better; both upper bounds inclusive
    if value <= good:
        return GOOD
    if value <= needs_improvement:
        return NEEDS_IMPROVEMENT
    return POOR

def _percent_over(difference, good) -> Optional[float]:
    # good == 0 has no meaningful percentage
    if good == 0:
        return None
    return difference / good * 100

def compare_value(value, good, needs_improvement, poor, unit=None) -> Dict[str, Any]:
    status = classify(value, good, needs_improvement)
    difference = value - good
    return {
        "value": value,
        "thresholds": {
            "good": good,
            "needsImprovement": needs_improvement,
            "poor": poor,
        },
        "status": status,
        "rating": RATINGS[status],
        "unit": unit,
        "difference": difference,
        "percentOverGood": _percent_over(difference, good),
    }


def _usable(entry) -> bool:
    return (isinstance(entry, dict)
            and all(_is_num(entry.get(k)) for k in ("good", "needsImprovement", "poor")))


class ThresholdComparator:
    def __init__(self, cfg):
        self.cfg = cfg or {}

    @classmethod
    def from_file(cls, path):
        return cls(read_thresholds(path))

    def group(self, key) -> Dict[str, Any]:
        g = self.cfg.get(key)
        return g if isinstance(g, dict) else {}

    def compare(self, metrics) -> Dict[str, Dict[str, Any]]:
        """
        Grade every metric that has both a threshold entry and a value.
        Walks the config, not the metrics, so output keeps config order.
        """
        out = {}
        for key, _label in GROUPS:
            values = (metrics or {}).get(key) or {}
            out[key] = {}
            for name, entry in self.group(key).items():
                value = values.get(name)
                if value is None or not _usable(entry):
                    continue
                out[key][name] = compare_value(
                    value,
                    entry["good"],
                    entry["needsImprovement"],
                    entry["poor"],
                    entry.get("unit"),
                )
        return out

    def validate(self) -> List[str]:
        """Warnings for entries that will be skipped or give odd math. Never raises."""
        warnings = []
        for key, _label in GROUPS:
            for name, entry in self.group(key).items():
                where = f"{key}.{name}"
                if not _usable(entry):
                    warnings.append(f"{where}: needs numeric good/needsImprovement/poor, skipped")
                    continue
                good, ni, poor = entry["good"], entry["needsImprovement"], entry["poor"]
                if good <= 0:
                    warnings.append(f"{where}: good={good}, percentOverGood will be empty")
                if good >= ni:
                    warnings.append(f"{where}: good ({good}) should be below needsImprovement ({ni})")
                if ni >= poor:
                    warnings.append(f"{where}: needsImprovement ({ni}) should be below poor ({poor})")
        # scoring imports this module
        from perf_audit.scoring import option_warnings
        return warnings + option_warnings(self.cfg)
