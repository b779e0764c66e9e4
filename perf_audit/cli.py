import argparse, sys, time
from pathlib import Path

from perf_audit.inputs import InputError, read_lhr, read_thresholds
from perf_audit.pipeline import analyze, exit_code
from perf_audit.render import render_console
from perf_audit.severity import ThresholdComparator
from perf_audit.write_out import write_csvs, write_results, write_xlsx

# project root, config/ sits next to the package
PKG_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_THRESHOLDS = PKG_ROOT / "config" / "performance-thresholds.yaml"


def build_parser():
    ap = argparse.ArgumentParser("perf-audit",
                                 description="Grade Lighthouse reports against performance thresholds.")
    ap.add_argument("--lighthouse-report", action="append", required=True, metavar="PATH",
                    help="Lighthouse JSON report. Repeat to analyze several reports.")
    ap.add_argument("--thresholds", default=str(DEFAULT_THRESHOLDS),
                    help="Threshold config (.yaml or .json).")
    ap.add_argument("--out", "--output-dir", dest="out", default="test-results",
                    help="Directory for JSON/HTML/CSV output.")
    ap.add_argument("--no-html", action="store_true", help="Skip the HTML report.")
    ap.add_argument("--csv", action="store_true",
                    help="Also write per-report CSVs and summary.csv")
    ap.add_argument("--xlsx", action="store_true",
                    help="Also write workbook.xlsx")
    ap.add_argument("--verbose", action="store_true")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    log = print if args.verbose else (lambda *_, **__: None)

    # load everything up front so a bad file stops us before any output
    try:
        thresholds = read_thresholds(args.thresholds)
        reports = [(p, read_lhr(p)) for p in args.lighthouse_report]
    except InputError as e:
        print(f"Comparison failed: {e}", file=sys.stderr)
        return 1

    for w in ThresholdComparator(thresholds).validate():
        log(f"threshold warning: {w}")

    out_dir = Path(args.out)
    results = []
    for path, lhr in reports:
        print(f"Comparing Lighthouse report: {path}")
        result = analyze(lhr, thresholds, report_path=path, log=log)
        print(render_console(result))

        written = write_results(result, out_dir, stamp=_stamp(len(results), len(reports)),
                                html=not args.no_html)
        print("\nReports saved:")
        for kind, p in written.items():
            print(f"   {kind.upper()}: {p}")
        results.append(result)

    if args.csv:
        write_csvs(results, out_dir)
        print(f"CSV → {out_dir / 'summary.csv'}")
    if args.xlsx:
        write_xlsx(results, out_dir / "workbook.xlsx")
        print(f"XLSX → {out_dir / 'workbook.xlsx'}")

    return exit_code(results)


def _stamp(i, n):
    ms = int(time.time() * 1000)
    # same millisecond is likely when several reports run back to back
    return f"{ms}" if n == 1 else f"{ms}-{i + 1}"


if __name__ == "__main__":
    sys.exit(main())
