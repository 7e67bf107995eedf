"""
Fire Alarm Inspection Report Renderer
-------------------------------------
Usage:  firereport <record.json|record.xml> [output.pdf]

Without an output path the report is written next to the record as
Fire_Alarm_Report_<property>_<date>.pdf.
"""

import logging
import os
import sys

from . import config
from .errors import ReportError
from .pdfinfo import page_sizes
from .record import load_record
from .render import generate_report_pdf, report_filename


def render(inp, out=None):
    print(f"\n{'='*60}\n  Fire Alarm Report Renderer\n  In : {inp}\n{'='*60}\n")

    print("[1/3] Loading record...")
    report = load_record(inp)
    print(f"      Property: {report.property_name or '(unnamed)'}")
    print(f"      {len(report.equipment_tested)} equipment rows")

    if out is None:
        out = os.path.join(os.path.dirname(os.path.abspath(inp)), report_filename(report))

    print("[2/3] Rendering...")
    pdf = generate_report_pdf(report)
    with open(out, "wb") as fh:
        fh.write(pdf)

    print("[3/3] Checking output...")
    sizes = page_sizes(pdf)
    for i, (w, h) in enumerate(sizes, 1):
        print(f"      Page {i}: {w:g} x {h:g} pt")

    print(f"\n  Done -> {out}  ({len(sizes)} page(s), {len(pdf)} bytes)\n")
    return out


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    if not argv:
        print(__doc__)
        return 1
    inp = argv[0]
    if not os.path.exists(inp):
        print(f"Not found: {inp}", file=sys.stderr)
        return 1
    try:
        render(inp, argv[1] if len(argv) >= 2 else None)
    except ReportError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
