"""Tests for src.auditor.audit."""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.auditor.audit import (
    AuditReport,
    audit_afcars,
    audit_metrics,
    audit_organizations,
    audit_sources,
    format_summary,
    run_audit,
)
from src.configs.sources import PARSED_FILES
from src.dataset_io.files import load_json


def check(report, category, name):
    return next(c for c in report.checks if c.category == category and c.name == name)


# --- AuditReport ---


def test_summary_is_derived_from_checks():
    report = AuditReport("data")
    report.add_check("afcars", "a", True, 1, 1)
    report.add_check("afcars", "b", False, 1, 2)
    report.add_warning("orgs", "c", "heads up")
    assert report.summary == {"total": 3, "passed": 2, "failed": 1, "warnings": 1}
    assert [c.name for c in report.failed_checks] == ["b"]
    assert report.exit_code == 1
    assert report.by_category() == {
        "afcars": {"passed": 1, "failed": 1, "warnings": 0},
        "orgs": {"passed": 1, "failed": 0, "warnings": 1},
    }


def test_empty_report_passes():
    report = AuditReport("data")
    assert report.exit_code == 0
    assert report.summary["total"] == 0


def test_to_dict():
    report = AuditReport("data")
    report.add_check("metrics", "has_records", True, "> 0 records", 5)
    out = report.to_dict()
    assert out["dataDir"] == "data"
    assert out["timestamp"].endswith("Z")
    assert out["checks"][0] == {
        "category": "metrics", "name": "has_records", "expected": "> 0 records", "actual": 5,
        "passed": True, "warning": False, "message": None,
    }
    assert out["summary"]["passed"] == 1


# --- run_audit ---


def test_reference_data_passes(parsed_dir):
    report = run_audit(parsed_dir)
    assert report.failed_checks == []
    assert report.exit_code == 0
    assert check(report, "afcars", "children_in_care_2023").actual == 358080
    assert check(report, "metrics", "tx_county_count_2025").actual == 254
    assert check(report, "metrics", "geography_types").actual == "county, region"


def test_reference_data_warns_on_empty_network(parsed_dir):
    report = run_audit(parsed_dir)
    warnings = [c for c in report.checks if c.warning]
    assert [(c.name, c.actual) for c in warnings] == [("empty_networks", "Ghost Network")]


def test_missing_file_is_failed_check(parsed_dir):
    (parsed_dir / PARSED_FILES["sources"]).unlink()
    report = run_audit(parsed_dir)
    failed = report.failed_checks
    assert [(c.category, c.name) for c in failed] == [("sources", "file_exists")]
    assert report.exit_code == 1


def test_ground_truth_mismatch_fails(parsed_dir):
    doc = load_json(parsed_dir / PARSED_FILES["afcars"])
    for r in doc["data"]:
        if r["state"] == "TX" and r["year"] == 2023:
            r["childrenInCare"] += 1
    report = AuditReport(parsed_dir)
    audit_afcars(report, doc)
    names = [c.name for c in report.failed_checks]
    assert names == ["children_in_care_2023"]
    assert check(report, "afcars", "children_in_care_2023").actual == 358081


def test_pr_not_counted_in_afcars_totals(parsed_dir):
    doc = load_json(parsed_dir / PARSED_FILES["afcars"])
    for r in doc["data"]:
        if r["state"] == "PR":
            r["childrenInCare"] = 999999
    report = AuditReport(parsed_dir)
    audit_afcars(report, doc)
    assert report.exit_code == 0


# --- per-source edge cases ---


def test_afcars_without_nulls_warns(parsed_docs):
    doc = parsed_docs["afcars"]
    for r in doc["data"]:
        r["familyPreservationCases"] = r["familyPreservationCases"] or 0
    report = AuditReport("data")
    audit_afcars(report, doc)
    assert check(report, "afcars", "null_preservation").warning


def test_sources_low_url_coverage_warns(parsed_docs):
    doc = parsed_docs["sources"]
    for r in doc["data"][:10]:
        r["sourceUrl"] = None
    report = AuditReport("data")
    audit_sources(report, doc)
    urls = check(report, "sources", "states_with_urls")
    assert urls.warning
    assert urls.actual == "41/51"


def test_metrics_unknown_geography_type_fails(parsed_docs):
    doc = parsed_docs["metrics"]
    doc["data"][0]["geographyType"] = "parish"
    report = AuditReport("data")
    audit_metrics(report, doc)
    geo = check(report, "metrics", "geography_types")
    assert not geo.passed
    assert geo.message == "unknown types: ['parish']"


def test_metrics_missing_year_fails(parsed_docs):
    doc = parsed_docs["metrics"]
    doc["data"] = [r for r in doc["data"] if r["year"] == 2025]
    report = AuditReport("data")
    audit_metrics(report, doc)
    assert not check(report, "metrics", "both_years_present").passed


def test_organizations_invalid_coordinates_fail(parsed_docs):
    doc = parsed_docs["organizations"]
    doc["organizations"][0]["coordinates"] = {"lat": 130.0, "lng": -97.0}
    report = AuditReport("data")
    audit_organizations(report, doc)
    assert [c.name for c in report.failed_checks] == ["valid_coordinates"]


# --- format_summary ---


def test_format_summary_lists_failures(parsed_dir):
    (parsed_dir / PARSED_FILES["metrics"]).unlink()
    text = format_summary(run_audit(parsed_dir))
    assert "FAIL metrics: 0/1 passed" in text
    assert "metrics.file_exists: expected file exists, got file not found" in text
    assert text.endswith("AUDIT FAILED - fix issues before merging")


def test_format_summary_passed(parsed_dir):
    text = format_summary(run_audit(parsed_dir))
    assert "OK   orgs:" in text
    assert "orgs.empty_networks: Network 'Ghost Network' has no members matched to Master" in text
    assert text.endswith("AUDIT PASSED - safe to merge")
