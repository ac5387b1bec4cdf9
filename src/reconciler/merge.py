"""
Reconciler: merge the four parser outputs into one dashboard document.

State entries are built in layers. AFCARS fills `afcars`, Sources fills
`source` and Metrics fills `counties`. A layer may create a missing state
entry but only ever writes its own slice, so Sources and Metrics can be
applied in either order with the same result.

National totals are per-year sums over AFCARS records, excluding the
codes in NATIONAL_EXCLUDED. A null cell or a state missing for a year
adds nothing, so a gap understates that year's total.
"""

import copy
import logging
import math
from pathlib import Path

import pandas as pd

from src.configs.sources import DESCRIPTIONS_FILE, PARSED_FILES
from src.configs.states import NATIONAL_EXCLUDED, STATE_NAMES, state_code
from src.dataset_io.files import generated_at, load_json, load_required_json

logger = logging.getLogger(__name__)

AFCARS_STATE_FIELDS = [
    "childrenInCare",
    "childrenInFosterCare",
    "childrenInKinshipCare",
    "childrenWaitingForAdoption",
    "childrenAdopted",
    "reunificationRate",
    "familyPreservationCases",
]

NATIONAL_FIELDS = [
    "childrenInCare",
    "childrenInFosterCare",
    "childrenInKinshipCare",
    "childrenWaitingForAdoption",
    "childrenAdopted",
    "familyPreservationCases",
]

COUNTY_FIELDS = [
    "population",
    "childrenInCare",
    "childrenInFosterCare",
    "childrenInKinshipCare",
    "childrenPlacedOutOfCounty",
    "fosterKinshipHomes",
    "fosterHomes",
    "kinshipHomes",
    "childrenWaitingForAdoption",
    "reunificationRate",
    "familyPreservationCases",
    "churches",
    "childrenAdopted",
]


def _ensure_state(states: dict, code: str, fallback_name: str | None = None) -> dict:
    if code not in states:
        states[code] = {
            "abbreviation": code,
            "name": STATE_NAMES.get(code, fallback_name or code),
            "source": None,
            "afcars": {},
            "counties": {},
        }
    return states[code]


def layer_afcars(states: dict, records: list[dict]) -> None:
    for r in records:
        entry = _ensure_state(states, r["state"])
        entry["afcars"][r["year"]] = {f: r.get(f) for f in AFCARS_STATE_FIELDS}


def layer_sources(states: dict, records: list[dict]) -> list[str]:
    """Attach source info by full state name. Returns names with no state code."""
    unmatched = []
    for r in records:
        code = state_code(r["state"])
        if code is None:
            unmatched.append(r["state"])
            continue
        entry = _ensure_state(states, code, r["state"])
        entry["source"] = {
            "dataDate": r.get("dataDate"),
            "dataYear": r.get("dataYear"),
            "sourceAgency": r.get("sourceAgency"),
            "sourceUrl": r.get("sourceUrl"),
            "definitions": dict(r.get("definitions") or {}),
        }
    if unmatched:
        logger.warning(f"Sources rows with no state code dropped: {unmatched}")
    return unmatched


def layer_metrics(states: dict, records: list[dict]) -> int:
    """Attach geography rows keyed by '{geography}_{year}'. Returns the number of replaced rows."""
    replaced = 0
    for r in records:
        entry = _ensure_state(states, r["state"], r.get("stateName"))
        key = f"{r['geography']}_{r['year']}"
        if key in entry["counties"]:
            replaced += 1
            logger.warning(f"{r['state']}: repeated geography '{key}', later row kept")
        county = {"name": r["geography"], "geographyType": r["geographyType"], "year": r["year"]}
        for f in COUNTY_FIELDS:
            county[f] = r.get(f)
        entry["counties"][key] = county
    return replaced


def finalize_states(states: dict) -> dict:
    """Turn each state's keyed county map into a list in first-seen order."""
    for entry in states.values():
        if isinstance(entry["counties"], dict):
            entry["counties"] = list(entry["counties"].values())
    return states


def build_states(afcars: list[dict], sources: list[dict], metrics: list[dict]) -> tuple[dict, dict]:
    """Layer AFCARS, Sources and Metrics into state entries.

    Returns:
        (states keyed by code, layer stats)
    """
    states: dict = {}
    layer_afcars(states, afcars)
    unmatched = layer_sources(states, sources)
    replaced = layer_metrics(states, metrics)
    finalize_states(states)
    return states, {"unmatchedSourceStates": unmatched, "replacedCountyRows": replaced}


def calculate_national_totals(records: list[dict]) -> dict:
    """Per-year totals over non-excluded states; every AFCARS year gets an entry."""
    if not records:
        return {}
    df = pd.DataFrame(records)
    years = sorted(int(y) for y in df["year"].dropna().unique())
    national = {y: {"year": y, **{f: 0 for f in NATIONAL_FIELDS}, "stateCount": 0} for y in years}

    us = df[~df["state"].isin(NATIONAL_EXCLUDED)].copy()
    for f in NATIONAL_FIELDS:
        if f not in us.columns:
            us[f] = float("nan")
        us[f] = pd.to_numeric(us[f], errors="coerce")
    sums = us.groupby("year")[NATIONAL_FIELDS].sum()
    counts = us.groupby("year").size()
    for year, row in sums.iterrows():
        totals = national[int(year)]
        for f in NATIONAL_FIELDS:
            totals[f] = int(round(row[f]))
        totals["stateCount"] = int(counts[year])
    return national


def merge_descriptions(organizations: list[dict], descriptions_doc: dict | None) -> int:
    """Copy generated descriptions onto organizations by exact name. Returns how many were added."""
    if not descriptions_doc or not descriptions_doc.get("descriptions"):
        return 0
    merged = 0
    for org in organizations:
        desc = descriptions_doc["descriptions"].get(org["name"])
        if desc and desc.get("description"):
            org["generatedDescription"] = desc["description"]
            merged += 1
    return merged


def _is_metric_value(value) -> bool:
    if value is None:
        return True
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def check_consumer_contract(doc: dict) -> list[str]:
    """Checks the dashboard relies on; returns one message per violation."""
    violations = []
    afcars_years = set()
    for code, entry in doc["states"].items():
        for year, values in entry["afcars"].items():
            afcars_years.add(int(year))
            for f, v in values.items():
                if not _is_metric_value(v):
                    violations.append(f"{code} afcars {year} {f}: not a finite number or null ({v!r})")
        seen = set()
        for county in entry["counties"]:
            key = (county["name"], county["year"])
            if key in seen:
                violations.append(f"{code}: duplicate county key {county['name']}_{county['year']}")
            seen.add(key)
            for f in COUNTY_FIELDS:
                if not _is_metric_value(county.get(f)):
                    violations.append(
                        f"{code} {county['name']} {county['year']} {f}: not a finite number or null ({county.get(f)!r})"
                    )
    national_years = {int(y) for y in doc["national"]}
    for year in sorted(afcars_years - national_years):
        violations.append(f"national: no entry for AFCARS year {year}")
    for v in violations:
        logger.warning(f"Contract violation: {v}")
    return violations


def build_merged_document(
    afcars: dict,
    sources: dict,
    metrics: dict,
    orgs: dict,
    descriptions: dict | None = None,
) -> dict:
    """Merge parsed documents into {metadata, national, states, organizations, networks}."""
    national = calculate_national_totals(afcars["data"])
    states, layer_stats = build_states(afcars["data"], sources["data"], metrics["data"])

    organizations = copy.deepcopy(orgs["organizations"])
    networks = copy.deepcopy(orgs["networks"])
    desc_merged = merge_descriptions(organizations, descriptions)

    county_records = sum(len(s["counties"]) for s in states.values())
    doc = {
        "metadata": {
            "generated": generated_at(),
            "sources": {
                "afcars": afcars.get("metadata"),
                "sources": sources.get("metadata"),
                "metrics": metrics.get("metadata"),
                "organizations": orgs.get("metadata"),
            },
            "enrichment": {
                "descriptions": (
                    {"source": DESCRIPTIONS_FILE, "merged": desc_merged} if descriptions else None
                ),
            },
            "counts": {
                "states": len(states),
                "countyRecords": county_records,
                "organizations": len(organizations),
                "organizationsWithDescriptions": desc_merged,
                "networks": len(networks),
            },
            **layer_stats,
        },
        "national": national,
        "states": states,
        "organizations": organizations,
        "networks": networks,
    }
    doc["metadata"]["contractViolations"] = check_consumer_contract(doc)
    logger.info(
        f"Merged {len(states)} states, {county_records} county records, "
        f"{len(organizations)} organizations, {len(networks)} networks"
    )
    return doc


def merge(data_dir: str | Path) -> dict:
    """Load the parsed files from `data_dir` and merge them.

    Raises:
        FileNotFoundError: one of the four parsed files is missing.
    """
    data_dir = Path(data_dir)
    docs = {key: load_required_json(data_dir / name) for key, name in PARSED_FILES.items()}
    descriptions = load_json(data_dir / DESCRIPTIONS_FILE)
    if descriptions is None:
        logger.info(f"{DESCRIPTIONS_FILE} not found, organizations keep no generated descriptions")
    return build_merged_document(
        docs["afcars"], docs["sources"], docs["metrics"], docs["organizations"], descriptions
    )
