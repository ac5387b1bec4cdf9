"""Tests for src.coordinate_enricher.enricher."""

import copy
import sys
from pathlib import Path

import pandas as pd
import pytest

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.non_county_coordinates import NON_COUNTY_COORDINATES
from src.coordinate_enricher.enricher import (
    build_coordinate_lookup,
    county_key,
    enrich_document,
    find_coordinates,
    load_coordinate_lookup,
    normalize_county_name,
)

GAZETTEER = pd.DataFrame([
    {"county": "Travis", "state_id": "TX", "state_name": "Texas", "lat": 30.33, "lng": -97.78, "population": 1290188},
    {"county": "St. Mary", "state_id": "LA", "state_name": "Louisiana", "lat": 29.63, "lng": -91.47, "population": 49406},
    {"county": "Miami-Dade", "state_id": "FL", "state_name": "Florida", "lat": 25.61, "lng": -80.5, "population": 2701767},
    {"county": "Nowhere", "state_id": "TX", "state_name": "Texas", "lat": None, "lng": None, "population": 10},
])


def county(name, year=2025, geography_type="county", **extra):
    rec = {"name": name, "geographyType": geography_type, "year": year, "population": None}
    rec.update(extra)
    return rec


def merged_doc():
    return {
        "metadata": {},
        "states": {
            "TX": {"counties": [county("Travis County"), county("Atlantis"), county("Travis", year=2024, population=5)]},
            "LA": {"counties": [county("St Mary Parish")]},
            "WA": {"counties": [county("Region 1", geography_type="region"), county("Region 9", geography_type="region")]},
        },
    }


# --- normalize_county_name ---


@pytest.mark.parametrize("raw, expected", [
    ("Travis County", "travis"),
    ("  TRAVIS  ", "travis"),
    ("St. Mary Parish", "st mary"),
    ("Miami-Dade County", "miami dade"),
    ("Ketchikan Gateway Borough", "ketchikan gateway"),
    ("Bethel Census Area", "bethel"),
    ("Prince George’s County", "prince george's"),
])
def test_normalize_county_name(raw, expected):
    assert normalize_county_name(raw) == expected


def test_county_key():
    assert county_key("TX", "Travis County") == "TX_travis"


# --- build_coordinate_lookup ---


def test_lookup_from_gazetteer_rows():
    lookup = build_coordinate_lookup(GAZETTEER)
    assert lookup["TX_travis"] == {"lat": 30.33, "lng": -97.78, "population": 1290188}
    assert "LA_st mary" in lookup
    assert "FL_miami dade" in lookup
    assert "TX_nowhere" not in lookup


def test_lookup_state_id_only():
    lookup = build_coordinate_lookup(GAZETTEER.drop(columns=["state_name"]))
    assert "TX_travis" in lookup


def test_lookup_without_state_column_raises():
    with pytest.raises(ValueError, match="state_id or state_name"):
        build_coordinate_lookup(GAZETTEER.drop(columns=["state_id", "state_name"]))


def test_load_coordinate_lookup_missing_csv(tmp_path):
    with pytest.raises(FileNotFoundError, match="uscounties.csv"):
        load_coordinate_lookup(tmp_path / "uscounties.csv")


def test_load_coordinate_lookup_csv(tmp_path):
    path = tmp_path / "uscounties.csv"
    GAZETTEER.to_csv(path, index=False)
    assert len(load_coordinate_lookup(path)) == 3


# --- find_coordinates ---


def test_find_coordinates_non_county_uses_table():
    lookup = build_coordinate_lookup(GAZETTEER)
    found = find_coordinates(lookup, "WA", county("Region 1", geography_type="region"))
    assert found == dict(NON_COUNTY_COORDINATES["WA"]["Region 1"])


def test_find_coordinates_non_county_ignores_gazetteer():
    lookup = {"WA_region 1": {"lat": 1.0, "lng": 1.0, "population": 1}}
    assert find_coordinates(lookup, "WA", county("Region 9", geography_type="region")) is None


# --- enrich_document ---


def test_enrich_sets_coordinates_and_stats():
    doc = merged_doc()
    stats = enrich_document(doc, build_coordinate_lookup(GAZETTEER), source="uscounties.csv")
    travis = doc["states"]["TX"]["counties"][0]
    assert travis["coordinates"] == {"lat": 30.33, "lng": -97.78}
    assert stats["matched"] == 4
    assert stats["updated"] == 4
    assert stats["notFound"] == 2
    assert stats["notFoundSample"] == ["Atlantis, TX (county, 2025)", "Region 9, WA (region, 2025)"]
    assert doc["metadata"]["coordinateEnrichment"] is stats


def test_enrich_population_only_backfilled_when_missing():
    doc = merged_doc()
    stats = enrich_document(doc, build_coordinate_lookup(GAZETTEER), source="uscounties.csv")
    counties = doc["states"]["TX"]["counties"]
    assert counties[0]["population"] == 1290188
    assert counties[2]["population"] == 5
    assert stats["populationBackfilled"] == 2


def test_enrich_is_idempotent():
    lookup = build_coordinate_lookup(GAZETTEER)
    doc = merged_doc()
    first = enrich_document(doc, lookup, source="uscounties.csv")
    after_first = copy.deepcopy(doc["states"])
    second = enrich_document(doc, lookup, source="uscounties.csv")
    assert doc["states"] == after_first
    assert second["updated"] == 0
    assert second["populationBackfilled"] == 0
    assert second["notFound"] == first["notFound"]
    assert second["matched"] == first["matched"]


def test_enrich_custom_metadata_key():
    doc = merged_doc()
    enrich_document(doc, {}, source="census.gov", metadata_key="censusEnrichment")
    assert doc["metadata"]["censusEnrichment"]["source"] == "census.gov"
    assert "coordinateEnrichment" not in doc["metadata"]


def test_enrich_population_only_lookup_leaves_coordinates():
    # county rows only: non-county rows always resolve through the fixed table
    doc = {"metadata": {}, "states": {"TX": {"counties": [county("Travis County"), county("Atlantis")]}}}
    stats = enrich_document(doc, {"TX_travis": {"population": 7}}, source="census.gov")
    travis = doc["states"]["TX"]["counties"][0]
    assert "coordinates" not in travis
    assert travis["population"] == 7
    assert stats["matched"] == 1
    assert stats["updated"] == 1
    assert stats["notFound"] == 1


def test_enrich_non_county_rows_ignore_lookup():
    doc = {"metadata": {}, "states": {"WA": {"counties": [county("Region 1", geography_type="region")]}}}
    stats = enrich_document(doc, {}, source="census.gov")
    assert doc["states"]["WA"]["counties"][0]["coordinates"] == dict(NON_COUNTY_COORDINATES["WA"]["Region 1"])
    assert stats["updated"] == 1
