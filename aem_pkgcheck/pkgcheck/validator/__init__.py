"""Validation engine for AEM content packages."""

from pkgcheck.validator.errors import ArchiveUnreadable, CorruptArchive, PackageCheckError
from pkgcheck.validator.models import (
    Diagnostic,
    ReportStatus,
    Severity,
    ValidationReport,
    ValidationRun,
    ValidationSummary,
)
from pkgcheck.validator.pipeline import validate, validate_archive
from pkgcheck.validator.render import render_console_text

__all__ = [
    "ArchiveUnreadable",
    "CorruptArchive",
    "Diagnostic",
    "PackageCheckError",
    "ReportStatus",
    "Severity",
    "ValidationReport",
    "ValidationRun",
    "ValidationSummary",
    "render_console_text",
    "validate",
    "validate_archive",
]
