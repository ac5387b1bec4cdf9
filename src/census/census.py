"""
Census Bureau county population and centroids.

- Population: 2020 decennial PL API (P1_001N), rows like
  ["Autauga County, Alabama", "58805", "01", "001"]
- Centroids: 2023 county Gazetteer, tab-separated with USPS, NAME,
  INTPTLAT and INTPTLONG columns

Both are keyed like the county gazetteer lookup in coordinate_enricher
so they go through the same join.
"""

import logging
import os
import time

import requests
from dotenv import load_dotenv

from src.configs.states import state_code
from src.coordinate_enricher.enricher import county_key
from src.source_parser.values import parse_count, parse_number

load_dotenv()

logger = logging.getLogger(__name__)

POPULATION_URL = "https://api.census.gov/data/2020/dec/pl"
POPULATION_PARAMS = {"get": "NAME,P1_001N", "for": "county:*"}
GAZETTEER_URL = (
    "https://www2.census.gov/geo/docs/maps-data/data/gazetteer/"
    "2023_Gazetteer/2023_gaz_counties_national.txt"
)
HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; FosterDataPipeline/1.0)"}
REQUEST_TIMEOUT = 30
REQUEST_DELAY = 1  # seconds between requests

# Gazetteer column positions
GAZ_USPS, GAZ_NAME, GAZ_LAT, GAZ_LNG = 0, 3, 8, 9


def fetch(url: str, params: dict | None = None) -> requests.Response:
    r = requests.get(url, params=params, headers=HEADERS, timeout=REQUEST_TIMEOUT)
    r.raise_for_status()
    time.sleep(REQUEST_DELAY)
    return r


def parse_population_rows(rows: list[list[str]]) -> dict[str, dict]:
    """PL API rows (header row first) -> {county key: {'population': int}}."""
    lookup = {}
    for row in rows[1:]:
        if len(row) < 2 or "," not in str(row[0]):
            continue
        county, state_name = (part.strip() for part in str(row[0]).rsplit(",", 1))
        code = state_code(state_name)
        population = parse_count(row[1])
        if code is None or population is None:
            continue
        lookup[county_key(code, county)] = {"population": population}
    return lookup


def parse_gazetteer(text: str) -> dict[str, dict]:
    """Gazetteer file text -> {county key: {'lat', 'lng'}}."""
    lookup = {}
    for line in text.splitlines()[1:]:
        parts = [p.strip() for p in line.split("\t")]
        if len(parts) <= GAZ_LNG:
            continue
        lat = parse_number(parts[GAZ_LAT])
        lng = parse_number(parts[GAZ_LNG])
        if not parts[GAZ_USPS] or not parts[GAZ_NAME] or lat is None or lng is None:
            continue
        lookup[county_key(parts[GAZ_USPS], parts[GAZ_NAME])] = {"lat": lat, "lng": lng}
    return lookup


def combine_lookups(*lookups: dict[str, dict]) -> dict[str, dict]:
    combined: dict[str, dict] = {}
    for lookup in lookups:
        for key, values in lookup.items():
            combined.setdefault(key, {}).update(values)
    return combined


def fetch_population() -> dict[str, dict]:
    params = dict(POPULATION_PARAMS)
    api_key = os.getenv("CENSUS_API_KEY")
    if api_key:
        params["key"] = api_key
    return parse_population_rows(fetch(POPULATION_URL, params=params).json())


def fetch_gazetteer() -> dict[str, dict]:
    return parse_gazetteer(fetch(GAZETTEER_URL).text)


def fetch_census_lookup() -> tuple[dict[str, dict], list[str]]:
    """Fetch both Census sources.

    A failed fetch is logged and recorded; the lookup holds whatever succeeded.

    Returns:
        (combined lookup, error messages)
    """
    parts = []
    errors = []
    for label, fetcher in (("population", fetch_population), ("gazetteer", fetch_gazetteer)):
        try:
            lookup = fetcher()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Census {label} fetch failed: {e}")
            errors.append(f"{label}: {e}")
            continue
        logger.info(f"Census {label}: {len(lookup)} counties")
        parts.append(lookup)
    return combine_lookups(*parts), errors
