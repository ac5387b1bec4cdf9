"""
Audit the parsed JSON files against ground truth before merging.

Reads afcars.json, sources.json, metrics.json and orgs-and-networks.json
from the data directory and writes audit-report.json. Exits 1 when any
non-warning check fails.

Usage: python scripts/02_audit.py [data_dir] [output_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.auditor.audit import format_summary, run_audit
from src.configs.sources import AUDIT_REPORT_FILE, PROCESSED_DIR
from src.dataset_io.files import resolve_path, write_json

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Audit parsed files against ground truth")
    parser.add_argument("data_dir", nargs="?", default=PROCESSED_DIR, help=f"Directory of parsed JSON (default: {PROCESSED_DIR})")
    parser.add_argument(
        "output", nargs="?", default=f"{PROCESSED_DIR}/{AUDIT_REPORT_FILE}", help="Audit report JSON path"
    )
    args = parser.parse_args()

    data_dir = resolve_path(args.data_dir, project_root)
    output_path = resolve_path(args.output, project_root)
    print(f"Data directory: {data_dir}")

    report = run_audit(data_dir)
    print()
    print(format_summary(report))

    write_json(report.to_dict(), output_path)
    print(f"\nReport written to {output_path}")
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
