"""
Cell-level value parsers, one per declared column type.

Missing data stays missing: every parser returns None for an empty cell,
a null marker or a non-finite number. None of them ever substitutes 0.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Callable

import pandas as pd

# compared case-insensitively after strip
NULL_MARKERS = frozenset({"", "-", "*", "n/a", "nan"})

CHECK_WHEN_NOTE = re.compile(r"\s*\(check when.*?\)\s*", re.IGNORECASE)
YEAR_RUN = re.compile(r"(\d{4})")
TRUE_STRINGS = frozenset({"yes", "1", "true"})


def is_null(value: Any) -> bool:
    """True for None, NaN/NaT, non-finite floats and the text null markers."""
    if value is None:
        return True
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, str):
        return value.strip().lower() in NULL_MARKERS
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_number(value: Any) -> float | None:
    if is_null(value):
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        try:
            num = float(str(value).strip().replace(",", ""))
        except ValueError:
            return None
    return num if math.isfinite(num) else None


def parse_count(value: Any) -> int | None:
    num = parse_number(value)
    return None if num is None else int(round(num))


def parse_rate(value: Any) -> float | None:
    """Rate as a decimal fraction; '45%' and '45 %' become 0.45."""
    if isinstance(value, str) and value.strip().endswith("%"):
        num = parse_number(value.strip()[:-1])
        return None if num is None else num / 100
    return parse_number(value)


def parse_year(value: Any) -> int | None:
    num = parse_number(value)
    return None if num is None else int(num)


def clean_string(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # Excel hands back integer-like cells (ids, zips) as floats
        if value.is_integer():
            value = int(value)
    elif not isinstance(value, str) and is_null(value):
        return None
    s = str(value).strip()
    if s == "" or s.lower() == "nan":
        return None
    return s


def clean_text(value: Any) -> str | None:
    """Free text with embedded '(check when ...)' reviewer notes removed."""
    s = clean_string(value)
    if s is None:
        return None
    s = CHECK_WHEN_NOTE.sub(" ", s).strip()
    return s or None


def parse_flag(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value == 1
    return str(value).strip().lower() in TRUE_STRINGS


def parse_date(value: Any) -> str | None:
    """Excel date or parseable string -> 'YYYY-MM-DD'; other text is kept as-is."""
    if isinstance(value, (datetime, date)) and not is_null(value):
        return value.strftime("%Y-%m-%d")
    s = clean_text(value)
    if s is None:
        return None
    try:
        parsed = pd.to_datetime(s)
    except (ValueError, TypeError, OverflowError):
        return s
    if pd.isna(parsed):
        return s
    return parsed.strftime("%Y-%m-%d")


def extract_year(text: str | None) -> int | None:
    """First 4-digit run in `text`, e.g. 'FY 2023 (Oct)' -> 2023."""
    if not text:
        return None
    match = YEAR_RUN.search(text)
    return int(match.group(1)) if match else None


PARSERS: dict[str, Callable[[Any], Any]] = {
    "count": parse_count,
    "rate": parse_rate,
    "number": parse_number,
    "year": parse_year,
    "string": clean_string,
    "text": clean_text,
    "flag": parse_flag,
    "date": parse_date,
}


def parser_for(type_name: str) -> Callable[[Any], Any]:
    if type_name not in PARSERS:
        raise ValueError(f"Unknown column type: {type_name}")
    return PARSERS[type_name]
