"""
Figures the audit checks the parsed files against.

Verified by hand against the source spreadsheets. Counts and sums are
compared exactly (TOLERANCE = 0); a change in any source file that moves
one of these numbers must be reviewed and the figure updated here.
"""

from types import MappingProxyType

GROUND_TRUTH = MappingProxyType({
    "afcars": {
        "year": 2023,
        "excludes": "PR",
        "childrenInCare": 358080,
        "childrenAdopted": 55480,
        "caChildrenInCare": 44468,
        "totalRecords": 156,  # 52 states x 3 years
        "stateCount": 52,     # 50 + DC + PR
        "yearCount": 3,
    },
    "sources": {
        "minStates": 51,
    },
    "metrics": {
        "year": 2025,
        "tx": 254,
        "ga": 159,
        "ky": 120,
        "years": [2024, 2025],
    },
    "organizations": {
        "minOrganizations": 400,
        "minWithCoordinates": 150,
    },
})

TOLERANCE = 0

# below this share of states with a source URL the audit warns
URL_COVERAGE_WARNING = 0.9
