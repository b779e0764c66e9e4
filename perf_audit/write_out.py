import json
import re
import time
from pathlib import Path

import pandas as pd

from perf_audit.render import render_html
from perf_audit.severity import GROUPS

def _sheet_name_from_url(url: str) -> str:
    s = re.sub(r"[^A-Za-z0-9_]", "_", url.split("://",1)[-1])
    return s[:31] or "home"

def _report_names(results: list) -> list:
    """
    One sheet/file name per report. Same URL (or same first 31 chars)
    gets _2, _3 ...; "summary" is taken by the summary sheet.
    """
    taken = {"summary"}
    names = []
    for r in results:
        base = _sheet_name_from_url(r["url"])
        name, n = base, 1
        while name.lower() in taken:
            n += 1
            suffix = f"_{n}"
            name = base[:31 - len(suffix)] + suffix
        taken.add(name.lower())
        names.append(name)
    return names

def write_results(result: dict, out_dir, stamp=None, html=True) -> dict:
    """Write performance-comparison_<stamp>.json (+ .html). Returns the paths written."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    stamp = stamp if stamp is not None else int(time.time() * 1000)
    base = out_dir / f"performance-comparison_{stamp}"

    paths = {"json": base.with_suffix(".json")}
    paths["json"].write_text(json.dumps(result, indent=2), encoding="utf-8")
    if html:
        paths["html"] = base.with_suffix(".html")
        paths["html"].write_text(render_html(result), encoding="utf-8")
    return paths

def comparison_rows(result: dict) -> list:
    rows = []
    for key, label in GROUPS:
        for metric, c in (result["comparison"].get(key) or {}).items():
            rows.append({
                "Page URL": result["url"],
                "Category": label,
                "Metric": metric,
                "Value": c["value"],
                "Unit": c.get("unit"),
                "Status": c["status"],
                "Good": c["thresholds"]["good"],
                "Needs Improvement": c["thresholds"]["needsImprovement"],
                "Poor": c["thresholds"]["poor"],
                "Difference": c["difference"],
                "% Over Good": c["percentOverGood"],
            })
    return rows

def _summary_row(result: dict) -> dict:
    s = result["summary"]
    df = pd.DataFrame(comparison_rows(result))
    # NaN when the metric wasn't compared
    def _val(metric):
        if df.empty:
            return float("nan")
        hit = df.loc[df["Metric"] == metric, "Value"]
        return pd.to_numeric(hit, errors="coerce").mean()
    return {
        "Page": result["url"],
        "Score": result["overallScore"],
        "Grade": result["grade"],
        "Good": s["good"],
        "Needs Improvement": s["needsImprovement"],
        "Poor": s["poor"],
        "Critical": s["criticalBottleneckCount"],
        "LCP": _val("largestContentfulPaint"),
        "CLS": _val("cumulativeLayoutShift"),
        "TBT": _val("totalBlockingTime"),
    }

def write_csvs(results: list, out_dir):
    out_dir = Path(out_dir)
    pages_dir = out_dir / "pages"
    pages_dir.mkdir(parents=True, exist_ok=True)

    for r, name in zip(results, _report_names(results)):
        df = pd.DataFrame(comparison_rows(r))
        df.to_csv(pages_dir / f"{name}.csv", index=False)
    pd.DataFrame([_summary_row(r) for r in results]).to_csv(out_dir / "summary.csv", index=False)

def write_xlsx(results: list, xlsx_path):
    xlsx_path = Path(xlsx_path)
    xlsx_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(xlsx_path, engine="openpyxl") as xl:
        # one sheet per report
        for r, name in zip(results, _report_names(results)):
            pd.DataFrame(comparison_rows(r)).to_excel(xl, index=False, sheet_name=name)
        pd.DataFrame([_summary_row(r) for r in results]).to_excel(
            xl, index=False, sheet_name="summary")
