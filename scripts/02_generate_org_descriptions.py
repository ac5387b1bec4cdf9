"""
Generate one-line organization descriptions from their websites.

Reads orgs-and-networks.json, writes org-descriptions.json (consumed by
the merge). Organizations that already have a description in an existing
output file are skipped, so an interrupted run can be resumed. Progress
is saved every 10 organizations.

Requires OPENAI_API_KEY in .env (OPENAI_MODEL optional).

Usage: python scripts/02_generate_org_descriptions.py [orgs_file] [output_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.sources import DESCRIPTIONS_FILE, PARSED_FILES, PROCESSED_DIR
from src.dataset_io.files import load_json, resolve_path, write_json
from src.org_descriptions import describer

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Generate organization descriptions with an LLM")
    parser.add_argument(
        "orgs", nargs="?", default=f"{PROCESSED_DIR}/{PARSED_FILES['organizations']}", help="Parsed organizations JSON"
    )
    parser.add_argument(
        "output", nargs="?", default=f"{PROCESSED_DIR}/{DESCRIPTIONS_FILE}", help="Descriptions JSON path"
    )
    args = parser.parse_args()

    orgs_path = resolve_path(args.orgs, project_root)
    output_path = resolve_path(args.output, project_root)

    orgs_doc = load_json(orgs_path)
    if orgs_doc is None:
        print(f"Error: input not found: {orgs_path}", file=sys.stderr)
        print("Run scripts/01_parse_orgs.py first.", file=sys.stderr)
        sys.exit(1)
    try:
        client = describer.get_client()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    existing = (load_json(output_path) or {}).get("descriptions", {})
    organizations = orgs_doc.get("organizations", [])
    print(f"Found {len(organizations)} organizations, {len(existing)} already in {output_path.name}")

    def save(descriptions: dict) -> None:
        write_json(describer.build_descriptions_document(descriptions, orgs_path.name), output_path)
        print(f"  [Saved progress to {output_path}]")

    descriptions = describer.describe_organizations(organizations, existing=existing, save=save, client=client)
    doc = describer.build_descriptions_document(descriptions, orgs_path.name)
    write_json(doc, output_path)

    meta = doc["metadata"]
    print("\n=== Summary ===")
    print(f"Total organizations: {len(organizations)}")
    print(f"Descriptions: {meta['succeeded']} succeeded, {meta['failed']} failed")
    print(f"Output written to: {output_path}")


if __name__ == "__main__":
    main()
    sys.exit(0)
