"""
Sources-and-definitions parser: per-state data provenance and metric definitions.

Rows are keyed by full state name (the first column has no header). The
name is kept as written; mapping it to a state code is the merge's job.
"""

import logging
from pathlib import Path

import pandas as pd

from src.configs.sources import SOURCES
from src.dataset_io.files import generated_at, resolve_path
from src.source_parser.reader import apply_schema, read_table
from src.source_parser.values import extract_year

logger = logging.getLogger(__name__)

SPEC = SOURCES["sources"]
DEFINITION_FIELDS = [c["field"] for c in SPEC["definition_columns"]]
EXPECTED_STATES = 51


def parse_sources_frame(df: pd.DataFrame, source_name: str = "Sources_and_Definitions.xlsx") -> dict:
    """Parse the sources sheet into {metadata, data}."""
    rows = apply_schema(df, SPEC["columns"], "Sources")
    # definition columns are all optional
    definitions = apply_schema(df, SPEC["definition_columns"], "Sources definitions")

    data = []
    issues = []
    skipped = 0
    for rec, defs in zip(rows, definitions):
        if rec["state"] is None:
            skipped += 1
            continue
        for typo, fixed in SPEC["known_typos"].items():
            if rec["state"] == typo:
                issues.append(f'Typo found: "{typo}" should be "{fixed}"')
        data.append({
            "state": rec["state"],
            "dataDate": rec["dataDate"],
            "dataYear": extract_year(rec["dataDate"]),
            "sourceAgency": rec["sourceAgency"],
            "sourceUrl": rec["sourceUrl"],
            "definitions": {k: v for k, v in defs.items() if v},
        })

    for issue in issues:
        logger.warning(issue)

    by_year: dict[str, int] = {}
    for d in data:
        key = str(d["dataYear"]) if d["dataYear"] else "unknown"
        by_year[key] = by_year.get(key, 0) + 1

    metadata = {
        "source": source_name,
        "generated": generated_at(),
        "stateCount": len(data),
        "statesWithUrl": sum(1 for d in data if d["sourceUrl"]),
        "skippedRows": skipped,
        "dataYearDistribution": by_year,
        "definitionCoverage": {
            f: sum(1 for d in data if d["definitions"].get(f)) for f in DEFINITION_FIELDS
        },
        "issues": issues,
    }
    if len(data) < EXPECTED_STATES:
        logger.warning(f"Only {len(data)} states found in {source_name}, expected {EXPECTED_STATES}")
    return {"metadata": metadata, "data": data}


def parse_sources(path: str | Path = SPEC["path"], base_path: Path | None = None) -> dict:
    path = resolve_path(path, base_path)
    df = read_table(path, SPEC)
    logger.info(f"Read {len(df)} rows from {path.name}")
    return parse_sources_frame(df, source_name=path.name)
