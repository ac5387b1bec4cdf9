"""Source parsers: one per spreadsheet source, all driven by the schemas in src.configs.sources."""

from src.source_parser.afcars import parse_afcars, parse_afcars_frame
from src.source_parser.definitions import parse_sources, parse_sources_frame
from src.source_parser.metrics import parse_metrics, parse_metrics_workbook
from src.source_parser.organizations import parse_organizations, parse_organizations_sheets

__all__ = [
    "parse_afcars",
    "parse_afcars_frame",
    "parse_sources",
    "parse_sources_frame",
    "parse_metrics",
    "parse_metrics_workbook",
    "parse_organizations",
    "parse_organizations_sheets",
]
