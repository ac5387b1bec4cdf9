"""
Pipeline: build real-data.json from the raw spreadsheets.

Runs parse (AFCARS, sources, metrics, organizations) -> audit -> merge ->
coordinate enrichment in order and stops at the first failing stage. A
failed audit blocks the merge. Enrichment is skipped when the county CSV
is absent; pass a path that does not exist to skip it on purpose.

Usage: python scripts/pipeline_build_dataset.py [out_dir] [csv_file]

The description and Census stages need network access and are run
separately (02_generate_org_descriptions.py, 05_add_census.py).
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.auditor.audit import format_summary, run_audit
from src.configs.sources import AUDIT_REPORT_FILE, MERGED_FILE, PARSED_FILES, PROCESSED_DIR, SOURCES
from src.coordinate_enricher.enricher import enrich_document, load_coordinate_lookup
from src.dataset_io.files import resolve_path, write_json
from src.reconciler.merge import merge
from src.source_parser import parse_afcars, parse_metrics, parse_organizations, parse_sources

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

PARSE_STAGES = [
    ("afcars", parse_afcars),
    ("sources", parse_sources),
    ("metrics", parse_metrics),
    ("organizations", parse_organizations),
]


def run_parse(out_dir: Path) -> None:
    for key, parse in PARSE_STAGES:
        logger.info(f"Parsing {key}")
        doc = parse(base_path=project_root)
        write_json(doc, out_dir / PARSED_FILES[key])


def run_enrich(doc: dict, csv_path: Path) -> dict | None:
    """Add county coordinates when the gazetteer CSV is present; None when skipped."""
    if not csv_path.exists():
        logger.warning(f"{csv_path} not found, coordinate enrichment skipped")
        return None
    return enrich_document(doc, load_coordinate_lookup(csv_path), source=csv_path.name)


def build_parser() -> argparse.ArgumentParser:
    csv_default = SOURCES["county_coordinates"]["path"]
    parser = argparse.ArgumentParser(description="Build the merged dataset from raw spreadsheets")
    parser.add_argument("out_dir", nargs="?", default=PROCESSED_DIR, help=f"Output directory (default: {PROCESSED_DIR})")
    parser.add_argument("csv", nargs="?", default=csv_default, help=f"County coordinates CSV (default: {csv_default})")
    return parser


def main() -> int:
    args = build_parser().parse_args()

    out_dir = resolve_path(args.out_dir, project_root)

    try:
        run_parse(out_dir)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: parse failed: {e}", file=sys.stderr)
        return 1

    report = run_audit(out_dir)
    write_json(report.to_dict(), out_dir / AUDIT_REPORT_FILE)
    print(format_summary(report))
    if report.exit_code != 0:
        print("Error: audit failed, merge not run", file=sys.stderr)
        return 1

    try:
        doc = merge(out_dir)
    except FileNotFoundError as e:
        print(f"Error: merge failed: {e}", file=sys.stderr)
        return 1

    run_enrich(doc, resolve_path(args.csv, project_root))

    output_path = write_json(doc, out_dir / MERGED_FILE)
    print(f"\nSaved: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
