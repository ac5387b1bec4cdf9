"""Tests for src.census.census (network calls are patched)."""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.census import census
from src.census.census import (
    combine_lookups,
    fetch_census_lookup,
    parse_gazetteer,
    parse_population_rows,
)

POPULATION_ROWS = [
    ["NAME", "P1_001N", "state", "county"],
    ["Travis County, Texas", "1290188", "48", "453"],
    ["St. Mary Parish, Louisiana", "49406", "22", "101"],
    ["Bethel Census Area, Alaska", "18666", "02", "050"],
    ["Nowhere County, Atlantis", "5", "99", "001"],
    ["Malformed row"],
]

GAZETTEER_TEXT = "\n".join([
    "USPS\tGEOID\tANSICODE\tNAME\tALAND\tAWATER\tALAND_SQMI\tAWATER_SQMI\tINTPTLAT\tINTPTLONG",
    "TX\t48453\t01384012\tTravis County\t2647\t66\t1022\t25\t30.334\t-97.781",
    "LA\t22101\t00559540\tSt. Mary Parish\t1441\t1188\t556\t458\t29.630\t-91.470",
    "TX\t48999\t00000000\tShort Row",
])


def response(json_data=None, text=""):
    r = MagicMock()
    r.json.return_value = json_data
    r.text = text
    r.raise_for_status.return_value = None
    return r


# --- parsing ---


def test_parse_population_rows():
    lookup = parse_population_rows(POPULATION_ROWS)
    assert lookup == {
        "TX_travis": {"population": 1290188},
        "LA_st mary": {"population": 49406},
        "AK_bethel": {"population": 18666},
    }


def test_parse_gazetteer():
    lookup = parse_gazetteer(GAZETTEER_TEXT)
    assert lookup == {
        "TX_travis": {"lat": 30.334, "lng": -97.781},
        "LA_st mary": {"lat": 29.630, "lng": -91.470},
    }


def test_combine_lookups_merges_fields():
    combined = combine_lookups(
        {"TX_travis": {"population": 1}},
        {"TX_travis": {"lat": 2.0, "lng": 3.0}, "TX_bexar": {"lat": 4.0, "lng": 5.0}},
    )
    assert combined["TX_travis"] == {"population": 1, "lat": 2.0, "lng": 3.0}
    assert combined["TX_bexar"] == {"lat": 4.0, "lng": 5.0}


# --- fetching ---


@patch("src.census.census.time.sleep")
@patch("src.census.census.requests.get")
def test_fetch_census_lookup(mock_get, mock_sleep):
    mock_get.side_effect = [response(json_data=POPULATION_ROWS), response(text=GAZETTEER_TEXT)]
    lookup, errors = fetch_census_lookup()
    assert errors == []
    assert lookup["TX_travis"] == {"population": 1290188, "lat": 30.334, "lng": -97.781}
    assert lookup["AK_bethel"] == {"population": 18666}
    assert mock_get.call_args_list[0].kwargs["timeout"] == census.REQUEST_TIMEOUT


@patch("src.census.census.time.sleep")
@patch("src.census.census.requests.get")
def test_fetch_census_lookup_partial_failure(mock_get, mock_sleep):
    mock_get.side_effect = [requests.exceptions.ConnectionError("offline"), response(text=GAZETTEER_TEXT)]
    lookup, errors = fetch_census_lookup()
    assert len(errors) == 1
    assert errors[0].startswith("population:")
    assert lookup["TX_travis"] == {"lat": 30.334, "lng": -97.781}


@patch("src.census.census.time.sleep")
@patch("src.census.census.requests.get")
def test_fetch_population_uses_api_key(mock_get, mock_sleep, monkeypatch):
    monkeypatch.setenv("CENSUS_API_KEY", "abc123")
    mock_get.return_value = response(json_data=POPULATION_ROWS)
    census.fetch_population()
    params = mock_get.call_args.kwargs["params"]
    assert params["key"] == "abc123"
    assert params["for"] == "county:*"


@patch("src.census.census.time.sleep")
@patch("src.census.census.requests.get")
def test_fetch_population_without_api_key(mock_get, mock_sleep, monkeypatch):
    monkeypatch.delenv("CENSUS_API_KEY", raising=False)
    mock_get.return_value = response(json_data=POPULATION_ROWS)
    census.fetch_population()
    assert "key" not in mock_get.call_args.kwargs["params"]
