"""
Parse the yearly metrics workbooks into metrics.json.

Each workbook holds one sheet per state with county (or region, city,
district office) rows. Both years are required.

Usage: python scripts/01_parse_metrics.py [2024_file] [2025_file] [output_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.sources import SOURCES
from src.dataset_io.files import file_size_kb, resolve_path, write_json
from src.source_parser.metrics import parse_metrics

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

SPEC = SOURCES["metrics"]


def main():
    parser = argparse.ArgumentParser(description="Parse MTE metrics workbooks into metrics.json")
    parser.add_argument("file_2024", nargs="?", default=SPEC["paths"][2024], help="2024 workbook")
    parser.add_argument("file_2025", nargs="?", default=SPEC["paths"][2025], help="2025 workbook")
    parser.add_argument("output", nargs="?", default=SPEC["output"], help=f"Output JSON (default: {SPEC['output']})")
    args = parser.parse_args()

    paths = {
        2024: resolve_path(args.file_2024, project_root),
        2025: resolve_path(args.file_2025, project_root),
    }
    output_path = resolve_path(args.output, project_root)
    for year, p in paths.items():
        print(f"{year} file: {p}")
    print(f"Output:    {output_path}")

    try:
        doc = parse_metrics(paths)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(SPEC["hint"], file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    meta = doc["metadata"]
    print(f"\nTotal records: {meta['totalRecords']}")
    print(f"States: {meta['stateCount']}")
    print("By year: " + ", ".join(f"{y}={n}" for y, n in meta["byYear"].items()))
    print("By geography type:")
    for geo_type, n in meta["byGeographyType"].items():
        print(f"  {geo_type}: {n}")

    v = meta["verification"]
    print(f"\nVerification ({v['year']} county counts):")
    for code in ("TX", "GA", "KY"):
        print(f"  {code}: {v[code]}")

    total = meta["totalRecords"] or 1
    print("\nNull counts (sample fields):")
    for field, n in meta["nullCounts"].items():
        print(f"  {field}: {n} ({100.0 * n / total:.1f}%)")

    write_json(doc, output_path)
    print(f"\nSaved: {output_path} ({file_size_kb(output_path) / 1024:.2f} MB)")


if __name__ == "__main__":
    main()
    sys.exit(0)
