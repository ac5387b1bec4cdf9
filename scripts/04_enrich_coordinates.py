"""
Add county coordinates to real-data.json from the SimpleMaps county CSV.

The merged file is updated in place. Re-running with the same CSV changes
nothing.

Setup:
1. Download the free SimpleMaps database from https://simplemaps.com/data/us-counties
2. Place uscounties.csv at data/raw_data/uscounties.csv

Usage: python scripts/04_enrich_coordinates.py [csv_file] [merged_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.sources import MERGED_FILE, PROCESSED_DIR, SOURCES
from src.coordinate_enricher.enricher import enrich_document, load_coordinate_lookup
from src.dataset_io.files import load_required_json, resolve_path, write_json

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

SPEC = SOURCES["county_coordinates"]


def main():
    parser = argparse.ArgumentParser(description="Enrich the merged dataset with county coordinates")
    parser.add_argument("csv", nargs="?", default=SPEC["path"], help=f"SimpleMaps CSV (default: {SPEC['path']})")
    parser.add_argument("merged", nargs="?", default=f"{PROCESSED_DIR}/{MERGED_FILE}", help="Merged JSON to update")
    args = parser.parse_args()

    csv_path = resolve_path(args.csv, project_root)
    merged_path = resolve_path(args.merged, project_root)
    print(f"CSV file: {csv_path}")
    print(f"Dataset:  {merged_path}")

    try:
        lookup = load_coordinate_lookup(csv_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("\nDownload instructions:", file=sys.stderr)
        print(SPEC["hint"], file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        doc = load_required_json(merged_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Run scripts/03_merge.py first.", file=sys.stderr)
        sys.exit(1)

    stats = enrich_document(doc, lookup, source=csv_path.name)
    print(f"\nMatched: {stats['matched']}")
    print(f"Updated: {stats['updated']}")
    print(f"Population backfilled: {stats['populationBackfilled']}")
    print(f"Not found: {stats['notFound']}")
    for name in stats["notFoundSample"]:
        print(f"  - {name}")

    write_json(doc, merged_path)
    print(f"\nSaved: {merged_path}")


if __name__ == "__main__":
    main()
    sys.exit(0)
