"""
Parse Sources_and_Definitions.xlsx into sources.json.

One record per state: data collection date, source agency, source URL and
the state's own definition of each metric.

Usage: python scripts/01_parse_sources.py [input_file] [output_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.sources import SOURCES
from src.dataset_io.files import file_size_kb, resolve_path, write_json
from src.source_parser.definitions import parse_sources

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

SPEC = SOURCES["sources"]


def main():
    parser = argparse.ArgumentParser(description="Parse Sources_and_Definitions.xlsx into sources.json")
    parser.add_argument("input", nargs="?", default=SPEC["path"], help=f"Sources workbook (default: {SPEC['path']})")
    parser.add_argument("output", nargs="?", default=SPEC["output"], help=f"Output JSON (default: {SPEC['output']})")
    args = parser.parse_args()

    input_path = resolve_path(args.input, project_root)
    output_path = resolve_path(args.output, project_root)
    print(f"Input:  {input_path}")
    print(f"Output: {output_path}")

    try:
        doc = parse_sources(input_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(SPEC["hint"], file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    meta = doc["metadata"]
    print(f"\nParsed {meta['stateCount']} states")
    print(f"States with source URL: {meta['statesWithUrl']}/{meta['stateCount']}")
    print("Data year distribution:")
    for year, n in sorted(meta["dataYearDistribution"].items(), reverse=True):
        print(f"  {year}: {n} states")
    print("Definition coverage:")
    for field, n in meta["definitionCoverage"].items():
        print(f"  {field}: {n} states")
    if meta["issues"]:
        print("Data issues found:")
        for issue in meta["issues"]:
            print(f"  - {issue}")

    write_json(doc, output_path)
    print(f"\nSaved: {output_path} ({file_size_kb(output_path):.1f} KB)")


if __name__ == "__main__":
    main()
    sys.exit(0)
