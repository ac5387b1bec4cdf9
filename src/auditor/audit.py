"""
Audit the parsed files against hand-verified ground truth before merging.

Every check lands in one list; the summary is always recomputed from that
list. Warnings count as passed and are reported separately. A missing
file is a failed `file_exists` check, never an exception.
"""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from src.configs.ground_truth import GROUND_TRUTH, TOLERANCE, URL_COVERAGE_WARNING
from src.configs.sources import PARSED_FILES
from src.configs.states import GEOGRAPHY_TYPES
from src.dataset_io.files import generated_at, load_json

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Check:
    category: str
    name: str
    expected: Any
    actual: Any
    passed: bool
    warning: bool = False
    message: str | None = None


class AuditReport:
    def __init__(self, data_dir: str | Path):
        self.data_dir = str(data_dir)
        self.timestamp = generated_at()
        self.checks: list[Check] = []

    def add_check(self, category: str, name: str, passed: bool, expected: Any, actual: Any, message: str | None = None) -> bool:
        self.checks.append(Check(category, name, expected, actual, bool(passed), False, message))
        return bool(passed)

    def add_warning(self, category: str, name: str, message: str, actual: Any = None) -> None:
        self.checks.append(Check(category, name, None, actual, True, True, message))

    @property
    def summary(self) -> dict:
        return {
            "total": len(self.checks),
            "passed": sum(1 for c in self.checks if c.passed),
            "failed": sum(1 for c in self.checks if not c.passed),
            "warnings": sum(1 for c in self.checks if c.warning),
        }

    @property
    def failed_checks(self) -> list[Check]:
        return [c for c in self.checks if not c.passed]

    def by_category(self) -> dict[str, dict]:
        out: dict[str, dict] = {}
        for c in self.checks:
            counts = out.setdefault(c.category, {"passed": 0, "failed": 0, "warnings": 0})
            counts["passed" if c.passed else "failed"] += 1
            if c.warning:
                counts["warnings"] += 1
        return out

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "dataDir": self.data_dir,
            "checks": [asdict(c) for c in self.checks],
            "summary": self.summary,
        }

    @property
    def exit_code(self) -> int:
        return 1 if self.failed_checks else 0


def _file_exists(report: AuditReport, category: str, doc: dict | None) -> bool:
    if doc is None:
        report.add_check(category, "file_exists", False, "file exists", "file not found")
        return False
    report.add_check(category, "file_exists", True, "file exists", "file exists")
    return True


def _matches(actual: int | float, expected: int | float) -> bool:
    return abs(actual - expected) <= TOLERANCE


# --- per-source audits ---

def audit_afcars(report: AuditReport, doc: dict | None) -> None:
    if not _file_exists(report, "afcars", doc):
        return
    truth = GROUND_TRUTH["afcars"]
    data = doc.get("data") or []

    report.add_check("afcars", "record_count", len(data) == truth["totalRecords"], truth["totalRecords"], len(data))
    states = {r.get("state") for r in data}
    report.add_check("afcars", "state_count", len(states) == truth["stateCount"], truth["stateCount"], len(states))
    years = {r.get("year") for r in data}
    report.add_check("afcars", "year_count", len(years) == truth["yearCount"], truth["yearCount"], len(years))

    us_year = [r for r in data if r.get("year") == truth["year"] and r.get("state") != truth["excludes"]]
    in_care = sum(r.get("childrenInCare") or 0 for r in us_year)
    adopted = sum(r.get("childrenAdopted") or 0 for r in us_year)
    report.add_check("afcars", "children_in_care_2023", _matches(in_care, truth["childrenInCare"]), truth["childrenInCare"], in_care)
    report.add_check("afcars", "children_adopted_2023", _matches(adopted, truth["childrenAdopted"]), truth["childrenAdopted"], adopted)

    ca = next((r for r in data if r.get("state") == "CA" and r.get("year") == truth["year"]), None)
    ca_in_care = (ca or {}).get("childrenInCare") or 0
    report.add_check(
        "afcars", "ca_children_in_care_2023", ca_in_care == truth["caChildrenInCare"], truth["caChildrenInCare"], ca_in_care
    )

    null_fpc = sum(1 for r in data if r.get("familyPreservationCases") is None)
    if null_fpc > 0:
        report.add_check("afcars", "null_preservation", True, "nulls preserved", f"{null_fpc} null values")
    else:
        report.add_warning("afcars", "null_preservation", "No null values found - verify this is expected")


def audit_sources(report: AuditReport, doc: dict | None) -> None:
    if not _file_exists(report, "sources", doc):
        return
    min_states = GROUND_TRUTH["sources"]["minStates"]
    data = doc.get("data") or []
    count = len(data)
    report.add_check("sources", "state_count", count >= min_states, f">= {min_states}", count)

    with_dates = sum(1 for r in data if r.get("dataDate"))
    if with_dates < count:
        report.add_warning("sources", "states_with_dates", f"{count - with_dates} states missing dates", f"{with_dates}/{count}")
    else:
        report.add_check("sources", "states_with_dates", True, "all states have dates", f"{with_dates}/{count}")

    with_urls = sum(1 for r in data if r.get("sourceUrl"))
    if with_urls < count * URL_COVERAGE_WARNING:
        report.add_warning("sources", "states_with_urls", f"Only {with_urls}/{count} states have source URLs", f"{with_urls}/{count}")
    else:
        report.add_check("sources", "states_with_urls", True, f">{URL_COVERAGE_WARNING:.0%} have URLs", f"{with_urls}/{count}")


def audit_metrics(report: AuditReport, doc: dict | None) -> None:
    if not _file_exists(report, "metrics", doc):
        return
    truth = GROUND_TRUTH["metrics"]
    data = doc.get("data") or []
    report.add_check("metrics", "has_records", len(data) > 0, "> 0 records", len(data))

    year_rows = [r for r in data if r.get("year") == truth["year"]]
    for code in ("tx", "ga", "ky"):
        count = sum(1 for r in year_rows if r.get("state") == code.upper())
        report.add_check("metrics", f"{code}_county_count_{truth['year']}", count == truth[code], truth[code], count)

    geo_types = sorted({r.get("geographyType") for r in data if r.get("geographyType")})
    unknown = [t for t in geo_types if t not in GEOGRAPHY_TYPES]
    report.add_check(
        "metrics", "geography_types", bool(geo_types) and not unknown, "valid geo types", ", ".join(geo_types),
        message=f"unknown types: {unknown}" if unknown else None,
    )

    null_in_care = sum(1 for r in data if r.get("childrenInCare") is None)
    if null_in_care > 0:
        report.add_check("metrics", "null_preservation", True, "nulls preserved", f"{null_in_care} null childrenInCare values")
    else:
        report.add_warning("metrics", "null_preservation", "No null childrenInCare - verify expected")

    years = sorted({r.get("year") for r in data if r.get("year") is not None})
    report.add_check(
        "metrics", "both_years_present", all(y in years for y in truth["years"]),
        " and ".join(str(y) for y in truth["years"]), ", ".join(str(y) for y in years),
    )


def audit_organizations(report: AuditReport, doc: dict | None) -> None:
    if not _file_exists(report, "orgs", doc):
        return
    truth = GROUND_TRUTH["organizations"]
    orgs = doc.get("organizations") or []
    networks = doc.get("networks") or []

    report.add_check(
        "orgs", "organization_count", len(orgs) >= truth["minOrganizations"], f">= {truth['minOrganizations']}", len(orgs)
    )
    with_coords = [o for o in orgs if o.get("coordinates")]
    report.add_check(
        "orgs", "with_coordinates", len(with_coords) >= truth["minWithCoordinates"],
        f">= {truth['minWithCoordinates']}", len(with_coords),
    )
    invalid = [
        o["name"] for o in with_coords
        if not (-90 <= o["coordinates"]["lat"] <= 90 and -180 <= o["coordinates"]["lng"] <= 180)
    ]
    report.add_check("orgs", "valid_coordinates", not invalid, "0 invalid", len(invalid))

    with_names = sum(1 for o in orgs if o.get("name") and o["name"].strip())
    report.add_check("orgs", "all_have_names", with_names == len(orgs), len(orgs), with_names)
    report.add_check("orgs", "has_networks", len(networks) > 0, "> 0", len(networks))

    with_memberships = sum(1 for o in orgs if o.get("networkMemberships"))
    if with_memberships > 0:
        report.add_check("orgs", "orgs_with_memberships", True, "> 0", with_memberships)
    else:
        report.add_warning("orgs", "orgs_with_memberships", "No orgs have network memberships")

    with_counties = sum(1 for o in orgs if o.get("countiesServed"))
    if with_counties > 0:
        report.add_check("orgs", "orgs_with_counties", True, "> 0", with_counties)
    else:
        report.add_warning("orgs", "orgs_with_counties", "No orgs have counties served data")

    for n in networks:
        if not n.get("members"):
            report.add_warning(
                "orgs", "empty_networks", f"Network '{n['name']}' has no members matched to Master", n["name"]
            )


def format_summary(report: AuditReport) -> str:
    """Per-category pass counts, then the failed checks with expected vs actual."""
    lines = []
    for category, counts in report.by_category().items():
        status = "FAIL" if counts["failed"] else "OK  "
        warn = f" ({counts['warnings']} warnings)" if counts["warnings"] else ""
        lines.append(f"{status} {category}: {counts['passed']}/{counts['passed'] + counts['failed']} passed{warn}")
    s = report.summary
    lines.append("")
    lines.append(f"Total: {s['passed']}/{s['total']} checks passed")
    if s["warnings"]:
        lines.append(f"Warnings: {s['warnings']}")
        for c in report.checks:
            if c.warning:
                lines.append(f"  {c.category}.{c.name}: {c.message}")
    if report.failed_checks:
        lines.append("")
        lines.append("FAILED CHECKS:")
        for c in report.failed_checks:
            lines.append(f"  {c.category}.{c.name}: expected {c.expected}, got {c.actual}")
    lines.append("")
    lines.append("AUDIT PASSED - safe to merge" if report.exit_code == 0 else "AUDIT FAILED - fix issues before merging")
    return "\n".join(lines)


def run_audit(data_dir: str | Path) -> AuditReport:
    """Audit the four parsed files found in `data_dir`."""
    data_dir = Path(data_dir)
    docs = {key: load_json(data_dir / name) for key, name in PARSED_FILES.items()}
    report = AuditReport(data_dir)
    audit_afcars(report, docs["afcars"])
    audit_sources(report, docs["sources"])
    audit_metrics(report, docs["metrics"])
    audit_organizations(report, docs["organizations"])
    s = report.summary
    logger.info(f"Audit: {s['passed']}/{s['total']} passed, {s['failed']} failed, {s['warnings']} warnings")
    return report
