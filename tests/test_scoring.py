import pytest

from perf_audit.scoring import (
    DEFAULT_WEIGHTS, calculate_score, category_score, grade_for, metric_score, option_warnings,
    scoring_options,
)
from perf_audit.severity import compare_value

def _cmp(value, good=100, ni=200, poor=300):
    return compare_value(value, good, ni, poor)

def _all_good():
    return {k: {"m": _cmp(50)} for k in ("coreWebVitals", "loadingMetrics", "resourceMetrics")}

def test_metric_score_tiers():
    assert metric_score(_cmp(100)) == 100
    # needsImprovement: 99 just past good, 50 at the boundary
    assert metric_score(_cmp(200)) == 50
    assert metric_score(_cmp(150)) == pytest.approx(74.5)
    assert metric_score(_cmp(100.001)) == pytest.approx(99, abs=0.01)
    # poor: ~49 just past needsImprovement, 0 at and beyond poor
    assert metric_score(_cmp(250)) == pytest.approx(24.5)
    assert metric_score(_cmp(200.001)) == pytest.approx(49, abs=0.01)
    assert metric_score(_cmp(300)) == 0
    assert metric_score(_cmp(10_000)) == 0

def test_poor_equal_to_needs_improvement_scores_zero():
    assert metric_score(compare_value(250, 100, 200, 200)) == 0

def test_category_score_edges():
    assert category_score({}) == 100
    assert category_score(None) == 100
    assert category_score({"a": _cmp(1), "b": _cmp(100)}) == 100
    assert category_score({"a": _cmp(300)}) == 0
    assert category_score({"a": _cmp(100), "b": _cmp(300)}) == 50

def test_default_weights_leave_user_experience_unapplied():
    # 0.4 + 0.3 + 0.2 of full credit; the 0.1 userExperience weight has no category
    assert DEFAULT_WEIGHTS["userExperience"] == 0.1
    s = calculate_score(_all_good())
    assert s["overallScore"] == 90
    assert s["grade"] == "A"
    assert s["categoryScores"] == {"coreWebVitals": 100, "loadingMetrics": 100, "resourceMetrics": 100}

def test_weights_summing_to_one_reach_100():
    w = {"coreWebVitals": 0.5, "loadingMetrics": 0.3, "resourceMetrics": 0.2}
    assert calculate_score({}, w)["overallScore"] == 100

def test_partial_weights_merge_over_defaults():
    s = calculate_score(_all_good(), {"resourceMetrics": 0.3})
    assert s["overallScore"] == 100

def test_overall_is_int_and_clamped():
    s = calculate_score(_all_good(), {"coreWebVitals": 1, "loadingMetrics": 1, "resourceMetrics": 1})
    assert s["overallScore"] == 100
    assert isinstance(s["overallScore"], int)

def test_rounds_half_up():
    # 74.5 exactly; round() would give 74
    comp = {"coreWebVitals": {"m": _cmp(150)}}
    w = {"coreWebVitals": 1, "loadingMetrics": 0, "resourceMetrics": 0}
    assert calculate_score(comp, w)["overallScore"] == 75

def test_mixed_default_weights():
    comp = {
        "coreWebVitals": {"a": _cmp(50), "b": _cmp(300)},   # 50
        "loadingMetrics": {"a": _cmp(200)},                 # 50
        "resourceMetrics": {},                              # 100
    }
    s = calculate_score(comp)
    # 50*.4 + 50*.3 + 100*.2 = 55
    assert s["overallScore"] == 55
    assert s["grade"] == "F"

@pytest.mark.parametrize("score,grade", [
    (100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"), (70, "C"),
    (69, "D"), (60, "D"), (59, "F"), (0, "F"),
])
def test_default_grade_bands(score, grade):
    assert grade_for(score) == grade

def test_overlapping_bands_last_match_wins():
    bands = {"X": {"min": 0, "max": 100}, "Y": {"min": 50, "max": 100}}
    assert grade_for(75, bands) == "Y"
    assert grade_for(25, bands) == "X"

def test_no_matching_band_is_f():
    assert grade_for(50, {"A": {"min": 90, "max": 100}}) == "F"

def test_scoring_options():
    cfg = {"reporting": {"scoreCalculation": {"weights": {"coreWebVitals": 1},
                                              "gradeThresholds": {"P": {"min": 0, "max": 100}}}}}
    assert scoring_options(cfg) == ({"coreWebVitals": 1}, {"P": {"min": 0, "max": 100}})
    assert scoring_options({}) == (None, None)
    assert scoring_options(None) == (None, None)

def test_quoted_weight_falls_back_to_default():
    cfg = {"reporting": {"scoreCalculation": {"weights": {"coreWebVitals": "0.4", "loadingMetrics": 0.5}}}}
    weights, bands = scoring_options(cfg)
    assert weights == {"loadingMetrics": 0.5}
    assert bands is None
    # 100*.4 + 100*.5 + 100*.2 = 110, clamped
    assert calculate_score({}, weights)["overallScore"] == 100

def test_band_without_max_is_skipped():
    cfg = {"reporting": {"scoreCalculation": {"gradeThresholds": {
        "A": {"min": 90}, "B": {"min": 0, "max": 100}, "C": "70-79"}}}}
    weights, bands = scoring_options(cfg)
    assert weights is None
    assert bands == {"B": {"min": 0, "max": 100}}
    assert grade_for(95, bands) == "B"

def test_all_bands_unusable_means_default_grades():
    cfg = {"reporting": {"scoreCalculation": {"gradeThresholds": {"A": {"min": "90", "max": 100}}}}}
    assert scoring_options(cfg) == (None, None)
    assert calculate_score({}, *scoring_options(cfg))["grade"] == "A"

def test_option_warnings_name_dropped_entries():
    cfg = {"reporting": {"scoreCalculation": {
        "weights": {"coreWebVitals": "0.4", "loadingMetrics": True},
        "gradeThresholds": {"A": {"min": 90}}}}}
    warnings = option_warnings(cfg)
    assert len(warnings) == 3
    assert warnings[0].startswith("reporting.scoreCalculation.weights.coreWebVitals:")
    assert warnings[1].startswith("reporting.scoreCalculation.weights.loadingMetrics:")
    assert warnings[2].startswith("reporting.scoreCalculation.gradeThresholds.A:")
    assert option_warnings({}) == []
