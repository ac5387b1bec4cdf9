"""
Generic reader: load a spreadsheet and map it onto a declared column schema.

Single entry point for every source type. Handles format (csv/xlsx), sheet
selection, header-row sniffing for sheets with leading title rows, header
alias resolution and per-type value parsing (see values.py).
"""

import logging
from pathlib import Path

import pandas as pd

from src.source_parser.values import parser_for

logger = logging.getLogger(__name__)


def _read_file(path: Path, spec: dict, sheet=None, header: int | None = 0):
    fmt = spec.get("format", "csv").lower()
    if fmt == "xlsx":
        read_kw: dict = {"engine": "openpyxl", "header": header}
        read_kw["sheet_name"] = sheet if sheet is not None else spec.get("sheet", 0)
        return pd.read_excel(path, **read_kw)
    if fmt == "csv":
        return pd.read_csv(path, header=header)
    raise ValueError(f"Unsupported format: {fmt}")


def require_file(path: Path) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data not found: {path}")
    return path


def read_table(path: Path, spec: dict, sheet=None) -> pd.DataFrame:
    """Read one sheet (or CSV) whose first row is the header."""
    path = require_file(path)
    df = _read_file(path, spec, sheet=sheet)
    df.columns = [str(c).strip() for c in df.columns]
    return df


def read_workbook_grids(path: Path) -> dict[str, pd.DataFrame]:
    """Read every sheet of a workbook as a raw grid (no header row), in sheet order."""
    path = require_file(path)
    return pd.read_excel(path, engine="openpyxl", sheet_name=None, header=None)


def find_header_row(grid: pd.DataFrame, labels: list[str], scan_rows: int, sheet_name: str) -> int:
    """Index of the first row within `scan_rows` holding one of `labels`."""
    wanted = set(labels)
    for i in range(min(scan_rows, len(grid))):
        cells = {str(c).strip() for c in grid.iloc[i].tolist() if not pd.isna(c)}
        if cells & wanted:
            return i
    raise ValueError(
        f"Sheet '{sheet_name}': no header row with any of {labels} "
        f"in the first {scan_rows} rows"
    )


def frame_from_grid(grid: pd.DataFrame, header_idx: int) -> pd.DataFrame:
    """Promote row `header_idx` of a raw grid to column names."""
    header = []
    for i, c in enumerate(grid.iloc[header_idx].tolist()):
        name = f"Unnamed: {i}" if pd.isna(c) or str(c).strip() == "" else str(c).strip()
        # repeated headers keep the first occurrence under the plain name
        if name in header:
            name = f"{name}.{i}"
        header.append(name)
    df = grid.iloc[header_idx + 1:].copy()
    df.columns = header
    return df.reset_index(drop=True)


def resolve_columns(columns: list[str], schema: list[dict]) -> tuple[dict[str, str], list[str]]:
    """Map each schema field to the first alias present in `columns`.

    Returns:
        (field -> header text, required fields with no matching header)
    """
    present = set(columns)
    mapping: dict[str, str] = {}
    missing: list[str] = []
    for col in schema:
        header = next((a for a in col["aliases"] if a in present), None)
        if header is not None:
            mapping[col["field"]] = header
        elif col.get("required"):
            missing.append(col["field"])
    return mapping, missing


def check_required(columns: list[str], schema: list[dict], source: str) -> dict[str, str]:
    mapping, missing = resolve_columns(columns, schema)
    if missing:
        wanted = {c["field"]: c["aliases"] for c in schema}
        detail = "; ".join(f"{f} (one of {wanted[f]})" for f in missing)
        raise ValueError(f"{source}: missing required column(s): {detail}")
    return mapping


def apply_schema(df: pd.DataFrame, schema: list[dict], source: str) -> list[dict]:
    """Parse every row of `df` into a record holding each declared field.

    Fields whose column is absent from the sheet are None on every row.
    Undeclared columns are dropped.
    """
    mapping = check_required(list(df.columns), schema, source)
    parsers = {c["field"]: parser_for(c["type"]) for c in schema}
    records = []
    for row in df.to_dict("records"):
        rec = {}
        for col in schema:
            field = col["field"]
            header = mapping.get(field)
            rec[field] = parsers[field](row[header]) if header is not None else parsers[field](None)
        records.append(rec)
    return records


def count_nulls(records: list[dict], fields: list[str]) -> dict[str, int]:
    return {f: sum(1 for r in records if r.get(f) is None) for f in fields}
