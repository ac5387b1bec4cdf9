"""
Parse the AFCARS state table into afcars.json.

Input: AFCARS.xlsx (one row per state and year, 52 states x 3 years).
Output: {metadata, data} with one record per state-year; missing and
suppressed cells stay null.

Usage: python scripts/01_parse_afcars.py [input_file] [output_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.sources import SOURCES
from src.dataset_io.files import file_size_kb, resolve_path, write_json
from src.source_parser.afcars import parse_afcars

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

SPEC = SOURCES["afcars"]


def main():
    parser = argparse.ArgumentParser(description="Parse AFCARS.xlsx into afcars.json")
    parser.add_argument("input", nargs="?", default=SPEC["path"], help=f"AFCARS workbook (default: {SPEC['path']})")
    parser.add_argument("output", nargs="?", default=SPEC["output"], help=f"Output JSON (default: {SPEC['output']})")
    args = parser.parse_args()

    input_path = resolve_path(args.input, project_root)
    output_path = resolve_path(args.output, project_root)
    print(f"Input:  {input_path}")
    print(f"Output: {output_path}")

    try:
        doc = parse_afcars(input_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(SPEC["hint"], file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    meta = doc["metadata"]
    print(f"\nParsed {meta['recordCount']} records, {meta['stateCount']} states, years {meta['years']}")
    nulls = {f: n for f, n in meta["nullCounts"].items() if n}
    if nulls:
        print("Null counts:")
        for field, n in nulls.items():
            print(f"  {field}: {n}")
    v = meta["verification"]
    print(f"\nVerification ({v['year']} US totals, excluding {v['excludes']}):")
    print(f"  Children in Care: {v['childrenInCare']:,}")
    print(f"  Children Adopted: {v['childrenAdopted']:,}")

    write_json(doc, output_path)
    print(f"\nSaved: {output_path} ({file_size_kb(output_path):.1f} KB)")


if __name__ == "__main__":
    main()
    sys.exit(0)
