"""Tests for src.source_parser.definitions."""

import sys
from pathlib import Path

import pandas as pd
import pytest

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.source_parser.definitions import parse_sources, parse_sources_frame


# --- parse_sources_frame ---


def test_reference_frame(sources_frame):
    doc = parse_sources_frame(sources_frame)
    meta = doc["metadata"]
    assert meta["stateCount"] == 51
    assert meta["statesWithUrl"] == 51
    assert meta["dataYearDistribution"] == {"2024": 51}
    assert meta["definitionCoverage"]["childrenInCare"] == 51
    assert meta["definitionCoverage"]["churches"] == 0
    assert meta["issues"] == []


def test_record_shape(sources_frame):
    rec = parse_sources_frame(sources_frame)["data"][0]
    assert rec == {
        "state": "Alabama",
        "dataDate": "2024-01-15",
        "dataYear": 2024,
        "sourceAgency": "Alabama Department of Human Services",
        "sourceUrl": "https://dhs.al.gov/data",
        "definitions": {"childrenInCare": "Children in out-of-home care on the last day of the month"},
    }


def test_known_typo_kept_and_reported(sources_frame):
    df = sources_frame.copy()
    df.loc[df["Unnamed: 0"] == "Pennsylvania", "Unnamed: 0"] = "Pennslyvania"
    doc = parse_sources_frame(df)
    assert any(r["state"] == "Pennslyvania" for r in doc["data"])
    assert doc["metadata"]["issues"] == ['Typo found: "Pennslyvania" should be "Pennsylvania"']


def test_check_when_note_removed_from_agency(sources_frame):
    df = sources_frame.copy()
    df.loc[0, "Source"] = "(check when back in the office)"
    doc = parse_sources_frame(df)
    assert doc["data"][0]["sourceAgency"] is None


def test_blank_state_rows_skipped(sources_frame):
    df = sources_frame.copy()
    df.loc[0, "Unnamed: 0"] = None
    doc = parse_sources_frame(df)
    assert doc["metadata"]["skippedRows"] == 1
    assert doc["metadata"]["stateCount"] == 50


def test_unknown_year_bucket(sources_frame):
    df = sources_frame.copy()
    df["Date of Data Collection"] = df["Date of Data Collection"].astype(object)
    df.loc[0, "Date of Data Collection"] = "not reported"
    doc = parse_sources_frame(df)
    assert doc["data"][0]["dataYear"] is None
    assert doc["metadata"]["dataYearDistribution"]["unknown"] == 1


def test_state_column_header_alias(sources_frame):
    df = sources_frame.rename(columns={"Unnamed: 0": "State"})
    assert parse_sources_frame(df)["metadata"]["stateCount"] == 51


def test_missing_source_column_raises(sources_frame):
    with pytest.raises(ValueError, match="sourceAgency"):
        parse_sources_frame(sources_frame.drop(columns=["Source"]))


# --- parse_sources ---


def test_parse_sources_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_sources(tmp_path / "Sources_and_Definitions.xlsx")


def test_parse_sources_unnamed_state_column(tmp_path, sources_frame):
    path = tmp_path / "Sources_and_Definitions.xlsx"
    header = [None, *sources_frame.columns[1:]]
    grid = pd.DataFrame([header, *sources_frame.values.tolist()])
    grid.to_excel(path, header=False, index=False, engine="openpyxl")
    doc = parse_sources(path)
    assert doc["metadata"]["stateCount"] == 51
    assert doc["data"][0]["state"] == "Alabama"
