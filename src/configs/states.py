"""
State reference tables shared by every pipeline stage.

- STATE_NAMES: 2-letter code -> full name (50 states + DC + PR)
- STATE_ABBREVS: full name -> 2-letter code
- GEOGRAPHY_TYPE: states that report below state level by something other than county
- NATIONAL_EXCLUDED: codes tracked per state but never folded into national totals
"""

from types import MappingProxyType

STATE_NAMES = MappingProxyType({
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "DC": "District of Columbia", "FL": "Florida", "GA": "Georgia", "HI": "Hawaii",
    "ID": "Idaho", "IL": "Illinois", "IN": "Indiana", "IA": "Iowa",
    "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine",
    "MD": "Maryland", "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota",
    "MS": "Mississippi", "MO": "Missouri", "MT": "Montana", "NE": "Nebraska",
    "NV": "Nevada", "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico",
    "NY": "New York", "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio",
    "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island",
    "SC": "South Carolina", "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas",
    "UT": "Utah", "VT": "Vermont", "VA": "Virginia", "WA": "Washington",
    "WV": "West Virginia", "WI": "Wisconsin", "WY": "Wyoming", "PR": "Puerto Rico",
})

STATE_ABBREVS = MappingProxyType({name: code for code, name in STATE_NAMES.items()})

# Every state not listed here reports by county
GEOGRAPHY_TYPE = MappingProxyType({
    "AK": "region",          # OCS regions
    "CT": "region",          # DCF regions R1-R6
    "NH": "city",            # district office cities
    "SD": "city",
    "VT": "districtOffice",
    "WA": "region",          # DCYF regions
    "DC": "district",
})

DEFAULT_GEOGRAPHY_TYPE = "county"

GEOGRAPHY_TYPES = frozenset({"county", "region", "district", "city", "districtOffice"})

NATIONAL_EXCLUDED = frozenset({"PR"})


def geography_type_for(state: str) -> str:
    """Geography type used for every row reported by `state`."""
    return GEOGRAPHY_TYPE.get(state, DEFAULT_GEOGRAPHY_TYPE)


def state_code(name: str | None) -> str | None:
    """Full state name -> 2-letter code, or None when the name is unknown."""
    if name is None:
        return None
    return STATE_ABBREVS.get(str(name).strip())
