"""Validation pipeline: orchestrates all package checks in sequence."""

from __future__ import annotations

import logging
from pathlib import Path

from pkgcheck.config import ValidatorOptions
from pkgcheck.validator.aggregator import build_report
from pkgcheck.validator.archive import PackageArchive
from pkgcheck.validator.content import check_content_tree
from pkgcheck.validator.filters import check_filters
from pkgcheck.validator.models import Diagnostic, ValidationReport
from pkgcheck.validator.project import resolve_project_context
from pkgcheck.validator.properties import check_properties
from pkgcheck.validator.queries import check_queries
from pkgcheck.validator.structure import check_structure

logger = logging.getLogger(__name__)


def load_archive(source: bytes | str | Path, name: str | None = None) -> PackageArchive:
    """Build the archive view from raw bytes or a file path.

    Raises ArchiveUnreadable (or its CorruptArchive subclass) if the
    package cannot be opened at all.
    """
    if isinstance(source, (bytes, bytearray)):
        return PackageArchive.from_bytes(bytes(source), name=name or "")
    return PackageArchive.open(source, name=name)


def validate_archive(
    archive: PackageArchive,
    options: ValidatorOptions | None = None,
) -> ValidationReport:
    """Run every check against an already decoded archive.

    Order: 1. Structure → 2. Filters → 3. Properties → 4. Content tree → 5. Queries.
    Every stage runs regardless of what earlier stages found.
    """
    options = options or ValidatorOptions()
    context = resolve_project_context(archive.name)
    logger.debug(
        "Validating %s (%d entries, project=%s)",
        archive.name, archive.count(), context.project_name,
    )

    diagnostics: list[Diagnostic] = []
    diagnostics.extend(check_structure(archive, context, options))
    diagnostics.extend(check_filters(archive, context))
    diagnostics.extend(check_properties(archive, context))
    diagnostics.extend(check_content_tree(archive, context))
    diagnostics.extend(check_queries(archive, context))

    report = build_report(diagnostics)
    logger.info(
        "Validated %s: status=%s errors=%d warnings=%d info=%d",
        archive.name or "<unnamed>",
        report.status.value,
        report.summary.errors,
        report.summary.warnings,
        report.summary.info,
    )
    return report


def validate(
    source: bytes | str | Path,
    name: str | None = None,
    options: ValidatorOptions | None = None,
) -> ValidationReport:
    """Validate a content package given as bytes or a path.

    `name` overrides the archive file name used for naming and project
    checks; for a path it defaults to the file's base name.
    """
    archive = load_archive(source, name)
    return validate_archive(archive, options)
