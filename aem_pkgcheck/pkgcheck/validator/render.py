"""Plain-text rendering of a validation report."""

from __future__ import annotations

from pkgcheck.validator.models import Severity, ValidationReport

REPORT_TITLE = "=== AEM Package Validation Report ==="

_PREFIXES = {
    Severity.error: "[ERROR]",
    Severity.warning: "[WARNING]",
    Severity.info: "[OK]",
}


def render_console_text(report: ValidationReport) -> str:
    """One line per diagnostic in report order, then summary and status lines."""
    lines = [REPORT_TITLE, ""]
    for diagnostic in report.diagnostics:
        line = f"{_PREFIXES[diagnostic.severity]} {diagnostic.message}"
        if diagnostic.source_file:
            line += f" ({diagnostic.source_file})"
        lines.append(line)

    summary = report.summary
    lines.append("")
    lines.append(
        f"Summary: {summary.errors} errors, {summary.warnings} warnings, {summary.info} info"
    )
    lines.append(f"Status: {report.status.value.upper()}")
    lines.append(f"Exit Code: {report.exit_code}")
    return "\n".join(lines) + "\n"
