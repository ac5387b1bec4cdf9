"""
Attach centroid coordinates to every geography record of a merged document.

County records join the county gazetteer on '{state}_{normalized name}'.
Region, city, district and district-office records use the hand-maintained
NON_COUNTY_COORDINATES table instead. Population is filled from the
gazetteer only where the record has none. Running the enrichment again
over its own output changes nothing.
"""

import logging
import re
from pathlib import Path

import pandas as pd

from src.configs.non_county_coordinates import NON_COUNTY_COORDINATES
from src.configs.sources import SOURCES
from src.configs.states import DEFAULT_GEOGRAPHY_TYPE, state_code
from src.dataset_io.files import generated_at
from src.source_parser.reader import apply_schema, read_table, resolve_columns

logger = logging.getLogger(__name__)

SPEC = SOURCES["county_coordinates"]
NOT_FOUND_SAMPLE = 10

COUNTY_SUFFIX = re.compile(r"\s+(county|parish|borough|census area|municipality)$")
CURLY_APOSTROPHES = re.compile(r"[‘’]")
SEPARATORS = re.compile(r"[-.]")
WHITESPACE = re.compile(r"\s+")


def normalize_county_name(name: str) -> str:
    """'St. Mary's Parish' -> "st mary's"; 'Miami-Dade County' -> 'miami dade'."""
    s = str(name).strip().lower()
    s = COUNTY_SUFFIX.sub("", s)
    s = CURLY_APOSTROPHES.sub("'", s)
    s = SEPARATORS.sub(" ", s)
    return WHITESPACE.sub(" ", s).strip()


def county_key(state: str, county: str) -> str:
    return f"{state}_{normalize_county_name(county)}"


def build_coordinate_lookup(df: pd.DataFrame) -> dict[str, dict]:
    """Gazetteer rows -> {'{state}_{normalized county}': {lat, lng, population}}.

    Rows without a resolvable state, a county name or both coordinates are skipped.
    """
    mapping, _ = resolve_columns(list(df.columns), SPEC["columns"])
    if "stateId" not in mapping and "stateName" not in mapping:
        raise ValueError("County coordinates: missing required column(s): state_id or state_name")
    rows = apply_schema(df, SPEC["columns"], "County coordinates")
    lookup = {}
    for row in rows:
        code = state_code(row["stateName"]) or row["stateId"]
        if not code or not row["county"] or row["lat"] is None or row["lng"] is None:
            continue
        lookup[county_key(code, row["county"])] = {
            "lat": row["lat"],
            "lng": row["lng"],
            "population": row["population"],
        }
    return lookup


def load_coordinate_lookup(path: str | Path) -> dict[str, dict]:
    """Read the county gazetteer CSV at `path`.

    Raises:
        FileNotFoundError: the CSV does not exist.
    """
    df = read_table(Path(path), SPEC)
    lookup = build_coordinate_lookup(df)
    logger.info(f"Read {len(df)} gazetteer rows, {len(lookup)} usable county entries")
    return lookup


def find_coordinates(lookup: dict[str, dict], state: str, county: dict) -> dict | None:
    geo_type = county.get("geographyType") or DEFAULT_GEOGRAPHY_TYPE
    if geo_type != DEFAULT_GEOGRAPHY_TYPE:
        coords = NON_COUNTY_COORDINATES.get(state, {}).get(county["name"])
        return dict(coords) if coords else None
    return lookup.get(county_key(state, county["name"]))


def enrich_document(
    doc: dict,
    lookup: dict[str, dict],
    source: str,
    metadata_key: str = "coordinateEnrichment",
) -> dict:
    """Set `coordinates` (and missing `population`) on each geography record in place.

    Returns the stats block also stored at doc['metadata'][metadata_key].
    """
    matched = 0
    updated = 0
    backfilled = 0
    not_found = []
    for code, entry in doc["states"].items():
        for county in entry["counties"]:
            found = find_coordinates(lookup, code, county)
            if found is None:
                not_found.append(f"{county['name']}, {code} ({county.get('geographyType')}, {county.get('year')})")
                continue
            matched += 1
            changed = False
            if found.get("lat") is not None and found.get("lng") is not None:
                coords = {"lat": found["lat"], "lng": found["lng"]}
                if county.get("coordinates") != coords:
                    county["coordinates"] = coords
                    changed = True
            if county.get("population") is None and found.get("population") is not None:
                county["population"] = found["population"]
                backfilled += 1
                changed = True
            if changed:
                updated += 1

    if not_found:
        logger.warning(f"{len(not_found)} geography records without coordinates, e.g. {not_found[:5]}")
    stats = {
        "source": source,
        "generated": generated_at(),
        "matched": matched,
        "updated": updated,
        "notFound": len(not_found),
        "notFoundSample": not_found[:NOT_FOUND_SAMPLE],
        "populationBackfilled": backfilled,
    }
    doc.setdefault("metadata", {})[metadata_key] = stats
    logger.info(f"Coordinates: {matched} matched, {updated} updated, {len(not_found)} not found")
    return stats
