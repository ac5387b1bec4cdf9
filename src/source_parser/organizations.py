"""
Organization roster parser.

Master is the authoritative list of organizations. Network Members and
Counties Served rows are attached to a Master organization by
case-insensitive exact name match; rows naming an organization that is
not in Master are dropped and counted. There is no fuzzy matching.
"""

import logging
from pathlib import Path

import pandas as pd

from src.configs.sources import SOURCES
from src.dataset_io.files import generated_at, resolve_path
from src.source_parser.reader import apply_schema, read_table

logger = logging.getLogger(__name__)

SPEC = SOURCES["organizations"]
SHEETS = SPEC["sheets"]
SKIPPED_NAMES_LOGGED = 5


def _log_skipped(kind: str, names: list[str]) -> None:
    if not names:
        return
    shown = names if len(names) <= SKIPPED_NAMES_LOGGED else names[:3]
    more = "" if len(names) <= SKIPPED_NAMES_LOGGED else f" ... and {len(names) - 3} more"
    logger.warning(f"{len(names)} {kind} rows skipped (org not in Master): {shown}{more}")


def _log_blank(kind: str, count: int, missing: str) -> None:
    if count:
        logger.warning(f"{count} {kind} rows skipped (no {missing})")


def build_organization(row: dict) -> dict:
    has_coords = row["lat"] is not None and row["lng"] is not None
    return {
        "id": row["id"],
        "name": row["name"],
        "isOrganization": row["isOrganization"],
        "isNetwork": row["isNetwork"],
        "address": {
            "street": row["street"],
            "city": row["city"],
            "state": row["state"],
            "zip": row["zip"],
            "county": row["countyName"] or row["county"],
        },
        "coordinates": {"lat": row["lat"], "lng": row["lng"]} if has_coords else None,
        "website": row["website"],
        "category": row["category"],
        "activities": [label for field, label in SPEC["activities"].items() if row[field]],
        "officialFosterMinistry": row["officialFosterMinistry"],
        "contact": {
            "name": row["contactName"],
            "title": row["contactTitle"],
            "email": row["contactEmail"],
        },
        "onMap": row["onMap"],
        "networkMemberships": [],
        "countiesServed": [],
    }


def parse_master(rows: list[dict]) -> tuple[list[dict], dict[str, dict]]:
    """Organizations in sheet order plus a lower-cased name index."""
    organizations = []
    by_name: dict[str, dict] = {}
    blank = 0
    for row in rows:
        if row["name"] is None:
            blank += 1
            continue
        org = build_organization(row)
        key = org["name"].lower()
        if key in by_name:
            logger.warning(f"Duplicate organization name in Master: {org['name']}")
        else:
            by_name[key] = org
        organizations.append(org)
    _log_blank("Master", blank, "organization name")
    return organizations, by_name


def attach_network_members(rows: list[dict], by_name: dict[str, dict]) -> dict:
    """Attach memberships to organizations and collect networks in first-seen order.

    A network is recorded even when none of its rows resolve to a Master
    organization, in which case it has zero members.
    """
    networks: dict[str, dict] = {}
    matched = 0
    blank = 0
    skipped_orgs: list[str] = []
    for row in rows:
        if row["orgName"] is None or row["network"] is None:
            blank += 1
            continue
        network = networks.setdefault(row["network"], {"name": row["network"], "members": []})
        org = by_name.get(row["orgName"].lower())
        if org is None:
            skipped_orgs.append(row["orgName"])
            continue
        org["networkMemberships"].append({
            "network": row["network"],
            "fellowshipCohort": row["fellowshipCohort"],
            "mouParticipant": row["mouParticipant"],
            "addedToMap": row["addedToMap"],
            "membershipOnMap": row["membershipOnMap"],
        })
        # canonical Master spelling
        network["members"].append(org["name"])
        matched += 1

    _log_skipped("Network Members", skipped_orgs)
    _log_blank("Network Members", blank, "organization or network name")
    networks_list = [
        {"name": n["name"], "memberCount": len(n["members"]), "members": n["members"]}
        for n in networks.values()
    ]
    return {
        "networks": networks_list,
        "matched": matched,
        "skipped": len(skipped_orgs),
        "skippedOrgs": skipped_orgs,
        "blank": blank,
    }


def attach_counties_served(rows: list[dict], by_name: dict[str, dict]) -> dict:
    matched = 0
    blank = 0
    skipped_orgs: list[str] = []
    for row in rows:
        if row["orgName"] is None or row["county"] is None:
            blank += 1
            continue
        org = by_name.get(row["orgName"].lower())
        if org is None:
            skipped_orgs.append(row["orgName"])
            continue
        org["countiesServed"].append({
            "county": row["county"],
            "state": row["state"],
            "countyState": row["countyState"],
        })
        matched += 1
    _log_skipped("Counties Served", skipped_orgs)
    _log_blank("Counties Served", blank, "organization or county name")
    return {"matched": matched, "skipped": len(skipped_orgs), "blank": blank}


def parse_organizations_sheets(
    master: pd.DataFrame,
    network_members: pd.DataFrame,
    counties_served: pd.DataFrame,
    source_name: str = "MTE_Master_Data.xlsx",
) -> dict:
    """Join the three roster sheets into {metadata, organizations, networks}."""
    master_rows = apply_schema(master, SHEETS["master"]["columns"], "Master")
    organizations, by_name = parse_master(master_rows)
    logger.info(f"Parsed {len(organizations)} organizations")

    network_results = attach_network_members(
        apply_schema(network_members, SHEETS["network_members"]["columns"], "Network Members"), by_name
    )
    county_results = attach_counties_served(
        apply_schema(counties_served, SHEETS["counties_served"]["columns"], "Counties Served"), by_name
    )

    categories: dict[str, int] = {}
    for o in organizations:
        cat = o["category"] or "Unknown"
        categories[cat] = categories.get(cat, 0) + 1

    metadata = {
        "source": source_name,
        "generated": generated_at(),
        "organizationCount": len(organizations),
        "skippedMasterRows": sum(1 for r in master_rows if r["name"] is None),
        "networkCount": len(network_results["networks"]),
        "stats": {
            "withCoordinates": sum(1 for o in organizations if o["coordinates"] is not None),
            "withWebsite": sum(1 for o in organizations if o["website"] is not None),
            "withActivities": sum(1 for o in organizations if o["activities"]),
            "withNetworkMemberships": sum(1 for o in organizations if o["networkMemberships"]),
            "withCountiesServed": sum(1 for o in organizations if o["countiesServed"]),
        },
        "categories": categories,
        "networkMemberships": {
            "total": network_results["matched"],
            "skipped": network_results["skipped"],
            "skippedOrgs": network_results["skippedOrgs"],
            "blank": network_results["blank"],
        },
        "countiesServed": county_results,
    }
    return {"metadata": metadata, "organizations": organizations, "networks": network_results["networks"]}


def parse_organizations(path: str | Path = SPEC["path"], base_path: Path | None = None) -> dict:
    path = resolve_path(path, base_path)
    frames = {key: read_table(path, SPEC, sheet=sheet["sheet"]) for key, sheet in SHEETS.items()}
    logger.info(
        "Read "
        + ", ".join(f"{SHEETS[k]['sheet']}: {len(df)} rows" for k, df in frames.items())
        + f" from {path.name}"
    )
    return parse_organizations_sheets(
        frames["master"], frames["network_members"], frames["counties_served"], source_name=path.name
    )
