"""
JSON read/write shared by every stage.

Parsed frames carry numpy scalars and pandas timestamps; `write_json`
converts them so every output file is plain JSON.
"""

import json
import math
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd


def _to_builtin(value: Any) -> Any:
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        value = float(value)
        return None if math.isnan(value) or math.isinf(value) else value
    if isinstance(value, np.bool_):
        return bool(value)
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.isoformat()
    if isinstance(value, np.ndarray):
        return value.tolist()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def generated_at() -> str:
    """Current UTC time as an ISO-8601 string ending in 'Z'."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_path(path_str: str | Path, base_path: Path | None) -> Path:
    p = Path(path_str)
    if not p.is_absolute() and base_path is not None:
        return base_path / p
    return p


def load_json(path: Path) -> dict | None:
    """Load a JSON file, or None when it does not exist."""
    path = Path(path)
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_required_json(path: Path) -> dict:
    doc = load_json(path)
    if doc is None:
        raise FileNotFoundError(f"Data not found: {path}")
    return doc


def write_json(doc: dict, output_path: Path) -> Path:
    """Write `doc` as indented UTF-8 JSON, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2, ensure_ascii=False, default=_to_builtin)
    return output_path


def file_size_kb(path: Path) -> float:
    return Path(path).stat().st_size / 1024
