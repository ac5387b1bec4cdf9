"""
Add Census Bureau population and centroids to real-data.json.

Fetches 2020 decennial county population and the 2023 county Gazetteer.
A failed fetch is reported and the other source is still applied.
Population is only filled where the record has none. CENSUS_API_KEY in
.env is used when present.

Usage: python scripts/05_add_census.py [merged_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.census.census import fetch_census_lookup
from src.configs.sources import MERGED_FILE, PROCESSED_DIR
from src.coordinate_enricher.enricher import enrich_document
from src.dataset_io.files import load_required_json, resolve_path, write_json

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Add Census population and centroids to the merged dataset")
    parser.add_argument("merged", nargs="?", default=f"{PROCESSED_DIR}/{MERGED_FILE}", help="Merged JSON to update")
    args = parser.parse_args()

    merged_path = resolve_path(args.merged, project_root)
    try:
        doc = load_required_json(merged_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Run scripts/03_merge.py first.", file=sys.stderr)
        sys.exit(1)

    print("Fetching Census population and Gazetteer...")
    lookup, errors = fetch_census_lookup()
    if not lookup:
        print("Error: no Census data could be fetched", file=sys.stderr)
        for err in errors:
            print(f"  {err}", file=sys.stderr)
        sys.exit(1)

    stats = enrich_document(doc, lookup, source="census.gov", metadata_key="censusEnrichment")
    stats["errors"] = errors
    print(f"\nMatched: {stats['matched']}")
    print(f"Updated: {stats['updated']}")
    print(f"Population backfilled: {stats['populationBackfilled']}")
    print(f"Not found: {stats['notFound']}")

    write_json(doc, merged_path)
    print(f"\nSaved: {merged_path}")


if __name__ == "__main__":
    main()
    sys.exit(0)
