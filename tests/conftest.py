"""Shared fixtures: small workbooks shaped like the real exports.

The AFCARS, metrics and roster frames are sized so that the parsed files
pass every audit check in src.configs.ground_truth.
"""

import sys
from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.configs.sources import PARSED_FILES
from src.configs.states import STATE_NAMES
from src.dataset_io.files import write_json
from src.source_parser import (
    parse_afcars_frame,
    parse_metrics_workbook,
    parse_organizations_sheets,
    parse_sources_frame,
)
from src.source_parser.metrics import build_metrics_document

AFCARS_HEADERS = [
    "State", "Year", "Children in Care", "Children in Foster Care", "Children in Kinship Care",
    "Children Waiting For Adoption", "Number of Adoptions", "Biological Reunification Rate",
    "Family Preservation Cases", "Number of Licensed Homes",
]
METRICS_HEADERS = [
    "County", "County Population", "Number of Children in Care",
    "Biological Family Reunification Rate", "Number of Churches",
]


def build_afcars_frame() -> pd.DataFrame:
    # 2023 without PR: CA 44468 + TX 6284 + 49 x 6272 = 358080 in care,
    # 50 x 1087 + 1130 = 55480 adopted
    rows = []
    for year in (2021, 2022, 2023):
        for code in STATE_NAMES:
            if code == "CA":
                in_care, adopted = 44468, 1087
            elif code == "TX":
                in_care, adopted = 6284, 1130
            elif code == "PR":
                in_care, adopted = 3100, 200
            else:
                in_care, adopted = 6272, 1087
            if year != 2023:
                in_care -= 50
            fpc = None if year == 2021 and code in ("AL", "AK") else 300
            rows.append([code, year, in_care, in_care - 1000, 1000, 400, adopted, 0.45, fpc, 900])
    return pd.DataFrame(rows, columns=AFCARS_HEADERS)


def build_sources_frame() -> pd.DataFrame:
    rows = []
    for code, name in STATE_NAMES.items():
        if code == "PR":
            continue
        rows.append({
            "Unnamed: 0": name,
            "Date of Data Collection": datetime(2024, 1, 15),
            "Source": f"{name} Department of Human Services",
            "Source Hyperlink": f"https://dhs.{code.lower()}.gov/data",
            "Number of Children in Care": "Children in out-of-home care on the last day of the month",
        })
    return pd.DataFrame(rows)


def metrics_grid(geographies: list[str], title_rows: int = 0, label: str = "County") -> pd.DataFrame:
    """Raw sheet grid: optional title rows, header row, one row per geography."""
    width = len(METRICS_HEADERS)
    rows = [["Title", *([None] * (width - 1))] for _ in range(title_rows)]
    rows.append([label, *METRICS_HEADERS[1:]])
    for i, geo in enumerate(geographies):
        in_care = None if i % 10 == 0 else 10 + i
        rows.append([geo, 5000 + i, in_care, "45%", 3])
    return pd.DataFrame(rows)


def build_metrics_grids() -> dict[int, dict[str, pd.DataFrame]]:
    texas_2025 = [f"TX County {i}" for i in range(254)] + ["Central Office", "Total"]
    return {
        2024: {
            "Texas": metrics_grid([f"TX County {i}" for i in range(10)]),
        },
        2025: {
            "Instructions": pd.DataFrame([["Read me"]]),
            "Texas": metrics_grid(texas_2025, title_rows=2),
            "Texas Data": pd.DataFrame([["raw"]]),
            "Georgia": metrics_grid([f"GA County {i}" for i in range(159)]),
            "Kentucky": metrics_grid([f"KY County {i}" for i in range(120)], title_rows=1),
            "Washington": metrics_grid(["Region 1", "Region 2"], label="Region"),
        },
    }


def build_org_sheets() -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    master_rows = []
    for i in range(400):
        has_coords = i < 150
        master_rows.append({
            "id": i + 1,
            "name": f"Org {i}",
            "is_organization": "yes",
            "is_network": "no",
            "city": "Austin",
            "state": "TX",
            "zip": 78701.0,
            "latitude": 30.0 + i * 0.01 if has_coords else None,
            "longitude": -97.0 if has_coords else None,
            "website": f"org{i}.org" if i % 2 == 0 else None,
            "category": "Church" if i % 3 == 0 else "Nonprofit",
            "activity_support": 1 if i % 4 == 0 else 0,
            "activity_bio": "Yes" if i % 5 == 0 else None,
        })
    master = pd.DataFrame(master_rows)

    network_members = pd.DataFrame(
        [{"Organization/Ministry Name": f"org {i}", "Network Name": "Alpha Network"} for i in range(10)]
        + [
            {"Organization/Ministry Name": "Org 5", "Network Name": "Beta Network"},
            {"Organization/Ministry Name": "Ghost Org", "Network Name": "Ghost Network"},
        ]
    )
    counties_served = pd.DataFrame([
        {"name": "Org 0", "county": "Travis", "state": "TX", "county_state": "Travis, TX"},
        {"name": "Org 0", "county": "Hays", "state": "TX", "county_state": "Hays, TX"},
        {"name": "Nobody", "county": "Bexar", "state": "TX", "county_state": "Bexar, TX"},
    ])
    return master, network_members, counties_served


@pytest.fixture
def afcars_frame():
    return build_afcars_frame()


@pytest.fixture
def sources_frame():
    return build_sources_frame()


@pytest.fixture
def metrics_grids():
    return build_metrics_grids()


@pytest.fixture
def make_grid():
    return metrics_grid


@pytest.fixture
def org_sheets():
    return build_org_sheets()


@pytest.fixture
def parsed_docs():
    """The four parsed documents built from the reference frames."""
    grids = build_metrics_grids()
    results = {year: parse_metrics_workbook(g, year) for year, g in grids.items()}
    return {
        "afcars": parse_afcars_frame(build_afcars_frame()),
        "sources": parse_sources_frame(build_sources_frame()),
        "metrics": build_metrics_document(results, ["m2024.xlsx", "m2025.xlsx"]),
        "organizations": parse_organizations_sheets(*build_org_sheets()),
    }


@pytest.fixture
def parsed_dir(tmp_path, parsed_docs):
    """A data directory holding the four parsed JSON files."""
    for key, name in PARSED_FILES.items():
        write_json(parsed_docs[key], tmp_path / name)
    return tmp_path
