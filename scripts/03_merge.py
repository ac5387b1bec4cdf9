"""
Merge the parsed files into real-data.json.

Required in data_dir: afcars.json, sources.json, metrics.json,
orgs-and-networks.json. Optional: org-descriptions.json. Nothing is
written when a required file is missing.

Usage: python scripts/03_merge.py [data_dir] [output_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.sources import MERGED_FILE, PROCESSED_DIR
from src.dataset_io.files import file_size_kb, resolve_path, write_json
from src.reconciler.merge import merge

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Merge parsed files into the dashboard dataset")
    parser.add_argument("data_dir", nargs="?", default=PROCESSED_DIR, help=f"Directory of parsed JSON (default: {PROCESSED_DIR})")
    parser.add_argument("output", nargs="?", default=f"{PROCESSED_DIR}/{MERGED_FILE}", help="Merged JSON path")
    args = parser.parse_args()

    data_dir = resolve_path(args.data_dir, project_root)
    output_path = resolve_path(args.output, project_root)
    print(f"Data directory: {data_dir}")
    print(f"Output: {output_path}")

    try:
        doc = merge(data_dir)
    except FileNotFoundError as e:
        print(f"Error: {e} (required)", file=sys.stderr)
        print("Run the scripts/01_parse_*.py stages first.", file=sys.stderr)
        sys.exit(1)

    counts = doc["metadata"]["counts"]
    print(f"\nNational years: {', '.join(str(y) for y in doc['national'])}")
    print(f"States: {counts['states']}")
    print(f"County/region records: {counts['countyRecords']}")
    print(f"Organizations: {counts['organizations']} ({counts['organizationsWithDescriptions']} with descriptions)")
    print(f"Networks: {counts['networks']}")
    violations = doc["metadata"]["contractViolations"]
    if violations:
        print(f"Contract violations: {len(violations)} (see metadata.contractViolations)")

    write_json(doc, output_path)
    print(f"\nSaved: {output_path} ({file_size_kb(output_path) / 1024:.2f} MB)")


if __name__ == "__main__":
    main()
    sys.exit(0)
