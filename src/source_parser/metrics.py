"""
Metrics parser: county / region level metrics, one workbook per year.

Each workbook has one sheet per state, named with the full state name.
A sheet may open with up to two title rows before the header row, and the
geography column is headed County, Region or District Office depending on
the state. Administrative sheets and raw "<State> Data" sheets are skipped.
"""

import logging
from pathlib import Path

import pandas as pd

from src.configs.ground_truth import GROUND_TRUTH
from src.configs.sources import SOURCES
from src.configs.states import geography_type_for, state_code
from src.dataset_io.files import generated_at, resolve_path
from src.source_parser.reader import (
    apply_schema,
    count_nulls,
    find_header_row,
    frame_from_grid,
    read_workbook_grids,
)

logger = logging.getLogger(__name__)

SPEC = SOURCES["metrics"]
GEOGRAPHY_LABELS = next(c["aliases"] for c in SPEC["columns"] if c["field"] == "geography")
METRIC_FIELDS = [c["field"] for c in SPEC["columns"] if c["field"] != "geography"]
NULL_COUNT_FIELDS = ["childrenInCare", "fosterKinshipHomes", "reunificationRate", "childrenAdopted", "churches"]
VERIFY_STATES = ["TX", "GA", "KY"]


def is_aggregate_row(geography: str | None) -> bool:
    """Blank, 'Central Office', 'Total' and 'data as of' footer rows carry no county data."""
    if geography is None:
        return True
    g = geography.strip().lower()
    return g in SPEC["aggregate_rows"] or "data as of" in g


def is_skipped_sheet(sheet_name: str) -> bool:
    if any(s in sheet_name for s in SPEC["skip_sheets"]):
        return True
    return SPEC["skip_sheet_suffix"] in sheet_name


def parse_state_sheet(grid: pd.DataFrame, sheet_name: str, year: int) -> tuple[list[dict], int]:
    """Parse one state sheet. Returns (records, dropped row count).

    Raises:
        ValueError: no header row in the scan window, or sheet name is not a state.
    """
    code = state_code(sheet_name)
    if code is None:
        raise ValueError(f"Sheet '{sheet_name}' is not a known state")
    header_idx = find_header_row(grid, GEOGRAPHY_LABELS, SPEC["header_scan_rows"], sheet_name)
    df = frame_from_grid(grid, header_idx)
    rows = apply_schema(df, SPEC["columns"], f"Metrics {year} sheet '{sheet_name}'")

    geo_type = geography_type_for(code)
    records = []
    dropped = 0
    for row in rows:
        if is_aggregate_row(row["geography"]):
            dropped += 1
            continue
        rec = {
            "state": code,
            "stateName": sheet_name,
            "geography": row["geography"],
            "geographyType": geo_type,
            "year": year,
        }
        for field in METRIC_FIELDS:
            rec[field] = row[field]
        records.append(rec)
    return records, dropped


def parse_metrics_workbook(grids: dict[str, pd.DataFrame], year: int) -> dict:
    """Parse every state sheet of one year's workbook."""
    records: list[dict] = []
    states: list[str] = []
    skipped_sheets: list[str] = []
    dropped = 0
    for sheet_name, grid in grids.items():
        if is_skipped_sheet(sheet_name):
            continue
        if state_code(sheet_name) is None:
            skipped_sheets.append(sheet_name)
            continue
        sheet_records, sheet_dropped = parse_state_sheet(grid, sheet_name, year)
        dropped += sheet_dropped
        if sheet_records:
            records.extend(sheet_records)
            states.append(state_code(sheet_name))

    logger.info(f"{year}: parsed {len(states)} states, {len(records)} geography records")
    if skipped_sheets:
        logger.warning(f"{year}: skipped {len(skipped_sheets)} non-state sheets: {skipped_sheets}")
    return {"records": records, "states": states, "skippedSheets": skipped_sheets, "droppedRows": dropped}


def build_metrics_document(results: dict[int, dict], source_names: list[str]) -> dict:
    """Combine per-year workbook results into {metadata, data}."""
    data = [r for year in sorted(results) for r in results[year]["records"]]
    states = {s for res in results.values() for s in res["states"]}

    by_year = {str(year): len(results[year]["records"]) for year in sorted(results)}
    by_geo_type: dict[str, int] = {}
    for r in data:
        by_geo_type[r["geographyType"]] = by_geo_type.get(r["geographyType"], 0) + 1

    verify_year = GROUND_TRUTH["metrics"]["year"]
    verification = {"year": verify_year}
    for code in VERIFY_STATES:
        verification[code] = sum(1 for r in data if r["state"] == code and r["year"] == verify_year)

    metadata = {
        "sources": source_names,
        "generated": generated_at(),
        "totalRecords": len(data),
        "stateCount": len(states),
        "byYear": by_year,
        "byGeographyType": by_geo_type,
        "verification": verification,
        "nullCounts": count_nulls(data, NULL_COUNT_FIELDS),
        "skippedSheets": {str(y): results[y]["skippedSheets"] for y in sorted(results)},
        "droppedRows": sum(res["droppedRows"] for res in results.values()),
    }
    return {"metadata": metadata, "data": data}


def parse_metrics(paths: dict[int, str | Path] | None = None, base_path: Path | None = None) -> dict:
    """Read and parse every year's workbook.

    Args:
        paths: year -> workbook path (default: SOURCES['metrics']['paths']).
        base_path: Project root for resolving relative paths.

    Raises:
        FileNotFoundError: any workbook is missing.
        ValueError: a state sheet has no recognizable header row.
    """
    paths = paths or SPEC["paths"]
    results = {}
    names = []
    for year, p in sorted(paths.items()):
        path = resolve_path(p, base_path)
        logger.info(f"Reading {year} file: {path.name}")
        grids = read_workbook_grids(path)
        logger.info(f"Found {len(grids)} sheets")
        results[year] = parse_metrics_workbook(grids, year)
        names.append(path.name)
    return build_metrics_document(results, names)
