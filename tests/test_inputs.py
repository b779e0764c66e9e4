import pytest

from perf_audit.inputs import InputError, read_lhr, read_thresholds


def test_missing_file(tmp_path):
    with pytest.raises(InputError, match="file not found"):
        read_lhr(tmp_path / "nope.json")

def test_invalid_json_report(tmp_path):
    p = tmp_path / "lhr.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(InputError, match="invalid JSON"):
        read_lhr(p)

def test_report_must_be_object(tmp_path):
    p = tmp_path / "lhr.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InputError, match="top level"):
        read_lhr(p)

def test_empty_object_report_is_fine(tmp_path):
    p = tmp_path / "lhr.json"
    p.write_text("{}", encoding="utf-8")
    assert read_lhr(p) == {}

def test_thresholds_json_and_yaml(tmp_path):
    j = tmp_path / "t.json"
    j.write_text('{"coreWebVitals": {"speedIndex": {"good": 1, "needsImprovement": 2, "poor": 3}}}',
                 encoding="utf-8")
    y = tmp_path / "t.yaml"
    y.write_text("coreWebVitals:\n  speedIndex: {good: 1, needsImprovement: 2, poor: 3}\n",
                 encoding="utf-8")
    assert read_thresholds(j) == read_thresholds(y)

def test_bad_yaml(tmp_path):
    y = tmp_path / "t.yml"
    y.write_text("coreWebVitals: [unclosed\n", encoding="utf-8")
    with pytest.raises(InputError, match="invalid threshold config"):
        read_thresholds(y)

def test_input_error_is_runtime_error():
    assert issubclass(InputError, RuntimeError)
