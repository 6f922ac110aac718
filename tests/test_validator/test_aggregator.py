"""Tests for diagnostic aggregation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pkgcheck.validator.aggregator import build_report
from pkgcheck.validator.models import Diagnostic, ReportStatus, Severity


def _d(severity: Severity, message: str) -> Diagnostic:
    return Diagnostic(severity=severity, message=message)


def test_empty_is_success() -> None:
    report = build_report([])
    assert report.status is ReportStatus.success
    assert report.exit_code == 0
    assert report.summary.total == 0
    assert report.success


def test_severity_major_order_keeps_emission_order() -> None:
    report = build_report([
        _d(Severity.info, "i1"),
        _d(Severity.error, "e1"),
        _d(Severity.warning, "w1"),
        _d(Severity.info, "i2"),
        _d(Severity.error, "e2"),
    ])
    assert [d.message for d in report.diagnostics] == ["e1", "e2", "w1", "i1", "i2"]
    assert report.summary.errors == 2
    assert report.summary.warnings == 1
    assert report.summary.info == 2
    assert report.summary.total == 5


def test_errors_fail_the_report() -> None:
    report = build_report([_d(Severity.warning, "w"), _d(Severity.error, "e")])
    assert report.status is ReportStatus.failed
    assert report.exit_code == 1
    assert not report.success


def test_warnings_only() -> None:
    report = build_report([_d(Severity.info, "i"), _d(Severity.warning, "w")])
    assert report.status is ReportStatus.warning
    assert report.exit_code == 0
    assert report.success


def test_info_only() -> None:
    report = build_report([_d(Severity.info, "i")])
    assert report.status is ReportStatus.success


def test_report_is_immutable() -> None:
    report = build_report([_d(Severity.info, "i")])
    with pytest.raises(ValidationError):
        report.exit_code = 1
    assert isinstance(report.diagnostics, tuple)
