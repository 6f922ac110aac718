"""Diagnostic aggregation: severity-major ordering, counts and verdict."""

from __future__ import annotations

from typing import Iterable

from pkgcheck.validator.models import (
    Diagnostic,
    ReportStatus,
    Severity,
    ValidationReport,
    ValidationSummary,
)

SEVERITY_ORDER = (Severity.error, Severity.warning, Severity.info)


def derive_status(errors: int, warnings: int) -> ReportStatus:
    if errors > 0:
        return ReportStatus.failed
    if warnings > 0:
        return ReportStatus.warning
    return ReportStatus.success


def build_report(diagnostics: Iterable[Diagnostic]) -> ValidationReport:
    """Order errors, then warnings, then info, keeping emission order within each."""
    buckets: dict[Severity, list[Diagnostic]] = {s: [] for s in SEVERITY_ORDER}
    for diagnostic in diagnostics:
        buckets[diagnostic.severity].append(diagnostic)

    ordered = tuple(d for severity in SEVERITY_ORDER for d in buckets[severity])
    summary = ValidationSummary(
        errors=len(buckets[Severity.error]),
        warnings=len(buckets[Severity.warning]),
        info=len(buckets[Severity.info]),
        total=len(ordered),
    )
    status = derive_status(summary.errors, summary.warnings)

    return ValidationReport(
        diagnostics=ordered,
        summary=summary,
        status=status,
        exit_code=1 if status is ReportStatus.failed else 0,
    )
