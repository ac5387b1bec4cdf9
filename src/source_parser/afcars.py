"""
AFCARS parser: federal state-level foster care totals.

One sheet, one row per state and year (52 states including DC and PR,
three years). Every declared column is required.
"""

import logging
from pathlib import Path

import pandas as pd

from src.configs.ground_truth import GROUND_TRUTH
from src.configs.sources import SOURCES
from src.configs.states import NATIONAL_EXCLUDED
from src.dataset_io.files import generated_at, resolve_path
from src.source_parser.reader import apply_schema, count_nulls, read_table

logger = logging.getLogger(__name__)

SPEC = SOURCES["afcars"]
FIELDS = [c["field"] for c in SPEC["columns"]]


def verification_totals(records: list[dict], year: int) -> dict:
    """Children in care / adopted summed over non-excluded states for `year`; nulls add nothing."""
    df = pd.DataFrame(records, columns=FIELDS)
    rows = df[(df["year"] == year) & (~df["state"].isin(NATIONAL_EXCLUDED))]
    return {
        "year": year,
        "excludes": ",".join(sorted(NATIONAL_EXCLUDED)),
        "childrenInCare": int(pd.to_numeric(rows["childrenInCare"]).fillna(0).sum()),
        "childrenAdopted": int(pd.to_numeric(rows["childrenAdopted"]).fillna(0).sum()),
    }


def parse_afcars_frame(df: pd.DataFrame, source_name: str = "AFCARS.xlsx") -> dict:
    """Parse an AFCARS sheet (header in the first row) into {metadata, data}."""
    parsed = apply_schema(df, SPEC["columns"], "AFCARS")

    data = []
    skipped = 0
    for i, rec in enumerate(parsed):
        if rec["state"] is None or rec["year"] is None:
            # +2: header row and 1-based spreadsheet rows
            logger.warning(f"AFCARS row {i + 2}: missing state or year, skipped")
            skipped += 1
            continue
        rec["state"] = rec["state"].upper()
        data.append(rec)

    null_counts = count_nulls(data, FIELDS)
    years = sorted({r["year"] for r in data})
    states = sorted({r["state"] for r in data})

    metadata = {
        "source": source_name,
        "generated": generated_at(),
        "years": years,
        "stateCount": len(states),
        "recordCount": len(data),
        "skippedRows": skipped,
        "nullCounts": null_counts,
        "verification": verification_totals(data, GROUND_TRUTH["afcars"]["year"]),
    }
    logger.info(f"AFCARS: {len(data)} records, {len(states)} states, years {years}")
    return {"metadata": metadata, "data": data}


def parse_afcars(path: str | Path = SPEC["path"], base_path: Path | None = None) -> dict:
    """Read the AFCARS workbook at `path` and parse it.

    Raises:
        FileNotFoundError: the workbook does not exist.
        ValueError: a declared column is missing.
    """
    path = resolve_path(path, base_path)
    df = read_table(path, SPEC)
    logger.info(f"Read {len(df)} rows from {path.name}")
    return parse_afcars_frame(df, source_name=path.name)
