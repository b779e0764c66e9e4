from perf_audit.bottlenecks import identify_bottlenecks
from perf_audit.severity import compare_value
from perf_audit.template_enrich import DEFAULT_IMPACT, DEFAULT_REC, TEMPLATES, impact_for

def _cmp(value, good=10, ni=20, poor=30, unit="ms"):
    return compare_value(value, good, ni, poor, unit)

def _comparison():
    return {
        "coreWebVitals": {
            "largestContentfulPaint": _cmp(15),   # medium
            "firstContentfulPaint": _cmp(5),      # good
            "cumulativeLayoutShift": _cmp(40),    # high
        },
        "loadingMetrics": {
            "speedIndex": _cmp(35),               # high
            "timeToFirstByte": _cmp(15),          # medium
        },
        "resourceMetrics": {
            "brandNewMetric": _cmp(99),           # high, unknown name
        },
    }

def test_only_non_good_comparisons_become_bottlenecks():
    bs = identify_bottlenecks(_comparison())
    assert len(bs) == 5
    assert "firstContentfulPaint" not in [b["metric"] for b in bs]

def test_high_first_then_scan_order():
    bs = identify_bottlenecks(_comparison())
    assert [(b["severity"], b["metric"]) for b in bs] == [
        ("high", "cumulativeLayoutShift"),
        ("high", "speedIndex"),
        ("high", "brandNewMetric"),
        ("medium", "largestContentfulPaint"),
        ("medium", "timeToFirstByte"),
    ]

def test_bottleneck_fields():
    b = identify_bottlenecks(_comparison())[0]
    assert b["category"] == "Core Web Vitals"
    assert b["group"] == "coreWebVitals"
    assert b["currentValue"] == 40
    assert b["goodThreshold"] == 10
    assert b["unit"] == "ms"
    assert b["impact"] == TEMPLATES["cumulativeLayoutShift"]["impact"]
    assert b["recommendation"] == TEMPLATES["cumulativeLayoutShift"]["rec"]

def test_unknown_metric_uses_fallback_text():
    b = [b for b in identify_bottlenecks(_comparison()) if b["metric"] == "brandNewMetric"][0]
    assert b["category"] == "Resource Metrics"
    assert b["impact"] == DEFAULT_IMPACT == "Affects overall performance"
    assert b["recommendation"] == DEFAULT_REC == "Review and optimize this metric"
    assert impact_for("") == DEFAULT_IMPACT

def test_all_good_or_empty_means_no_bottlenecks():
    assert identify_bottlenecks({"coreWebVitals": {"x": _cmp(1)}}) == []
    assert identify_bottlenecks({}) == []
