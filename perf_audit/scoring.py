"""
Weighted partial-credit scoring.

Each metric earns 100 (good), 50..99 (needsImprovement) or 0..49 (poor),
interpolated by where the value sits inside its tier. A category is the
mean of its metrics, an empty category counts as 100. The overall score is
the weighted sum of the three category scores.

`userExperience` is carried in the default weights but no category maps to
it, so it never contributes. With the default weights a perfect run
therefore tops out at 90 unless the other three weights are raised.
"""

import math
from typing import Any, Dict, List, Optional, Tuple

from perf_audit.severity import GOOD, NEEDS_IMPROVEMENT

DEFAULT_WEIGHTS = {
    "coreWebVitals": 0.4,
    "loadingMetrics": 0.3,
    "resourceMetrics": 0.2,
    "userExperience": 0.1,
}

DEFAULT_GRADES = {
    "A": {"min": 90, "max": 100},
    "B": {"min": 80, "max": 89},
    "C": {"min": 70, "max": 79},
    "D": {"min": 60, "max": 69},
    "F": {"min": 0, "max": 59},
}

SCORED_CATEGORIES = ("coreWebVitals", "loadingMetrics", "resourceMetrics")


def _clamp(lo, hi, v):
    return max(lo, min(hi, v))

def _ratio(num, den, on_zero):
    return num / den if den else on_zero

def metric_score(comp) -> float:
    t = comp["thresholds"]
    v = comp["value"]
    if comp["status"] == GOOD:
        return 100.0
    if comp["status"] == NEEDS_IMPROVEMENT:
        # good == needsImprovement can't land here, guard anyway
        r = _ratio(t["needsImprovement"] - v, t["needsImprovement"] - t["good"], 0.0)
        return 50 + _clamp(0, 49, 49 * r)
    # poor == needsImprovement: any poor value is already past the poor line
    r = _ratio(t["poor"] - v, t["poor"] - t["needsImprovement"], 0.0)
    return 49 * _clamp(0, 1, r)

def category_score(category_comparison) -> float:
    comps = list((category_comparison or {}).values())
    if not comps:
        return 100.0
    return sum(metric_score(c) for c in comps) / len(comps)

def _round_half_up(x) -> int:
    return int(math.floor(x + 0.5))

def grade_for(score, grade_bands=None) -> str:
    # last matching band wins, like iterating the config top to bottom
    grade = "F"
    for letter, band in (grade_bands or DEFAULT_GRADES).items():
        if band["min"] <= score <= band["max"]:
            grade = letter
    return grade

def calculate_score(comparison, weights=None, grade_bands=None) -> Dict[str, Any]:
    w = dict(DEFAULT_WEIGHTS, **(weights or {}))
    cats = {k: category_score((comparison or {}).get(k)) for k in SCORED_CATEGORIES}
    total = sum(cats[k] * w[k] for k in SCORED_CATEGORIES)
    overall = _clamp(0, 100, _round_half_up(total))
    return {
        "overallScore": overall,
        "grade": grade_for(overall, grade_bands),
        "categoryScores": cats,
    }


def _is_num(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)

def _read_options(cfg):
    """
    Usable weights and grade bands from reporting.scoreCalculation, plus
    a warning per entry that had to be dropped. Dropped weights fall back
    to DEFAULT_WEIGHTS; if no band survives, DEFAULT_GRADES is used.
    """
    warnings = []
    reporting = (cfg or {}).get("reporting") or {}
    calc = reporting.get("scoreCalculation") if isinstance(reporting, dict) else None
    if not isinstance(calc, dict):
        if calc:
            warnings.append("reporting.scoreCalculation: not a mapping, defaults used")
        return None, None, warnings

    raw_weights = calc.get("weights") or {}
    weights = {}
    if not isinstance(raw_weights, dict):
        warnings.append("reporting.scoreCalculation.weights: not a mapping, defaults used")
        raw_weights = {}
    for name, w in raw_weights.items():
        if isinstance(name, str) and _is_num(w):
            weights[name] = w
        else:
            warnings.append(f"reporting.scoreCalculation.weights.{name}: {w!r} is not a number, default used")

    raw_bands = calc.get("gradeThresholds") or {}
    bands = {}
    if not isinstance(raw_bands, dict):
        warnings.append("reporting.scoreCalculation.gradeThresholds: not a mapping, defaults used")
        raw_bands = {}
    for letter, band in raw_bands.items():
        if isinstance(band, dict) and _is_num(band.get("min")) and _is_num(band.get("max")):
            bands[str(letter)] = {"min": band["min"], "max": band["max"]}
        else:
            warnings.append(f"reporting.scoreCalculation.gradeThresholds.{letter}: "
                            "needs numeric min and max, skipped")

    return weights or None, bands or None, warnings

def scoring_options(cfg) -> Tuple[Optional[dict], Optional[dict]]:
    """(weights, gradeThresholds) from reporting.scoreCalculation, either may be None."""
    weights, bands, _ = _read_options(cfg)
    return weights, bands

def option_warnings(cfg) -> List[str]:
    return _read_options(cfg)[2]
