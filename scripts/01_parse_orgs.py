"""
Parse MTE_Master_Data.xlsx into orgs-and-networks.json.

Reads three sheets:
- Master: organizations with location, coordinates, category and activities
- Network Members: which organizations belong to which networks
- Counties Served: which counties each organization serves

Usage: python scripts/01_parse_orgs.py [input_file] [output_file]
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.sources import SOURCES
from src.dataset_io.files import file_size_kb, resolve_path, write_json
from src.source_parser.organizations import parse_organizations

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

SPEC = SOURCES["organizations"]


def main():
    parser = argparse.ArgumentParser(description="Parse the organization roster into orgs-and-networks.json")
    parser.add_argument("input", nargs="?", default=SPEC["path"], help=f"Master workbook (default: {SPEC['path']})")
    parser.add_argument("output", nargs="?", default=SPEC["output"], help=f"Output JSON (default: {SPEC['output']})")
    args = parser.parse_args()

    input_path = resolve_path(args.input, project_root)
    output_path = resolve_path(args.output, project_root)
    print(f"Input:  {input_path}")
    print(f"Output: {output_path}")

    try:
        doc = parse_organizations(input_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(SPEC["hint"], file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    meta = doc["metadata"]
    stats = meta["stats"]
    print(f"\nOrganizations: {meta['organizationCount']} ({meta['skippedMasterRows']} unnamed rows skipped)")
    print(f"  With coordinates: {stats['withCoordinates']}")
    print(f"  With website: {stats['withWebsite']}")
    print(f"  With activities: {stats['withActivities']}")
    print(f"  With network memberships: {stats['withNetworkMemberships']}")
    print(f"  With counties served: {stats['withCountiesServed']}")
    print(f"Networks: {meta['networkCount']}")
    memberships = meta["networkMemberships"]
    print(f"Memberships matched: {memberships['total']}, skipped: {memberships['skipped']}, blank: {memberships['blank']}")
    counties = meta["countiesServed"]
    print(f"Counties served matched: {counties['matched']}, skipped: {counties['skipped']}, blank: {counties['blank']}")
    print("Categories:")
    for cat, n in sorted(meta["categories"].items(), key=lambda kv: -kv[1])[:10]:
        print(f"  {cat}: {n}")

    write_json(doc, output_path)
    print(f"\nSaved: {output_path} ({file_size_kb(output_path):.1f} KB)")


if __name__ == "__main__":
    main()
    sys.exit(0)
