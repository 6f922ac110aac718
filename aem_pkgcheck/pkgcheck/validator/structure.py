"""Structural checks: archive size, file name, entry count, required directories."""

from __future__ import annotations

from pkgcheck.config import ValidatorOptions
from pkgcheck.validator.archive import PackageArchive
from pkgcheck.validator.models import Diagnostic, ProjectContext, Severity
from pkgcheck.validator.paths import CONTENT_ROOT, MANIFEST_DIR
from pkgcheck.validator.project import PACKAGE_NAME_HINT

REQUIRED_DIRS = (MANIFEST_DIR, CONTENT_ROOT)

CHECK_NAME = "structure"


def _mb(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}MB"


def _diag(severity: Severity, message: str) -> Diagnostic:
    return Diagnostic(severity=severity, message=message, check_name=CHECK_NAME)


def check_package_size(archive: PackageArchive, max_bytes: int) -> list[Diagnostic]:
    if archive.size > max_bytes:
        return [_diag(
            Severity.error,
            f"Package too large: {_mb(archive.size)} (maximum: {_mb(max_bytes)})",
        )]
    return [_diag(Severity.info, f"Package size: {_mb(archive.size)}")]


def check_package_name(archive: PackageArchive, context: ProjectContext) -> list[Diagnostic]:
    if not context.package_name_valid:
        return [_diag(
            Severity.error,
            f"Invalid package name: {archive.name or '<unnamed>'}. "
            f"Expected pattern: {PACKAGE_NAME_HINT}",
        )]
    return [_diag(Severity.info, f"Valid package name: {archive.name}")]


def check_entry_count(archive: PackageArchive, max_entries: int) -> list[Diagnostic]:
    count = archive.count()
    if count > max_entries:
        return [_diag(
            Severity.warning,
            f"Too many entries in package: {count} (recommended maximum: {max_entries})",
        )]
    return [_diag(Severity.info, f"Number of entries: {count}")]


def check_required_dirs(archive: PackageArchive) -> list[Diagnostic]:
    issues: list[Diagnostic] = []
    for required in REQUIRED_DIRS:
        if archive.has_prefix(required):
            issues.append(_diag(Severity.info, f"Required structure found: {required}"))
        else:
            issues.append(_diag(Severity.error, f"Required structure missing: {required}"))
    return issues


def check_structure(
    archive: PackageArchive,
    context: ProjectContext,
    options: ValidatorOptions | None = None,
) -> list[Diagnostic]:
    """Run every structural check in order."""
    options = options or ValidatorOptions()
    issues: list[Diagnostic] = []
    issues.extend(check_package_size(archive, options.max_package_bytes))
    issues.extend(check_package_name(archive, context))
    issues.extend(check_entry_count(archive, options.max_entries))
    issues.extend(check_required_dirs(archive))
    return issues
