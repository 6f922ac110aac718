"""Content tree scan: unwanted artifacts, OSGi configs and .content.xml properties."""

from __future__ import annotations

from pkgcheck.validator.archive import ArchiveEntry, PackageArchive
from pkgcheck.validator.content_node import (
    NodeScalar,
    build_content_tree,
    scalar_values,
    walk,
)
from pkgcheck.validator.errors import MarkupError
from pkgcheck.validator.markup import parse_entry
from pkgcheck.validator.models import Diagnostic, ProjectContext, Severity
from pkgcheck.validator.paths import CONTENT_DESCRIPTOR, CONTENT_ROOT

UNWANTED_FILES = {".DS_Store", "Thumbs.db", ".gitkeep", ".git"}

LAST_MODIFIED_BY = "cq:lastModifiedBy"
ADMIN_USER = "admin"
TEMPLATE = "cq:template"
DESIGN_PATH = "cq:designPath"
MIXIN_TYPES = "jcr:mixinTypes"
ALLOWED_MIXIN = "mix:versionable"

CHECK_NAME = "content"


def _diag(severity: Severity, message: str, source_file: str | None = None) -> Diagnostic:
    return Diagnostic(
        severity=severity, message=message, source_file=source_file, check_name=CHECK_NAME,
    )


def is_osgi_config(entry: ArchiveEntry) -> bool:
    segments = entry.directory_segments
    return "apps" in segments and "config" in segments


def check_content_node(entry: ArchiveEntry, context: ProjectContext) -> list[Diagnostic]:
    """Parse one .content.xml and check every key at every depth."""
    try:
        tree = build_content_tree(parse_entry(entry))
    except MarkupError as e:
        return [_diag(Severity.warning, f"Cannot parse {entry.path}: {e}")]

    issues: list[Diagnostic] = []
    project = context.project_name
    source = entry.path

    for key, value in walk(tree):
        if key == LAST_MODIFIED_BY:
            if isinstance(value, NodeScalar) and value.value == ADMIN_USER:
                issues.append(_diag(
                    Severity.warning,
                    f'Disallowed property: {LAST_MODIFIED_BY}="{ADMIN_USER}"',
                    source,
                ))

        elif key == TEMPLATE and project:
            if isinstance(value, NodeScalar) and project not in value.value:
                issues.append(_diag(
                    Severity.warning,
                    f"Template outside project: {value.value} (expected to contain '{project}')",
                    source,
                ))

        elif key == DESIGN_PATH and project:
            if isinstance(value, NodeScalar) and project not in value.value:
                issues.append(_diag(
                    Severity.warning,
                    f"Design path outside project: {value.value}",
                    source,
                ))

        elif key == MIXIN_TYPES:
            for mixin in scalar_values(value):
                if mixin != ALLOWED_MIXIN:
                    issues.append(_diag(Severity.warning, f"Disallowed mixin: {mixin}", source))

    return issues


def check_content_tree(archive: PackageArchive, context: ProjectContext) -> list[Diagnostic]:
    """Scan every entry beneath jcr_root/ in archive order.

    The jcr_root/ directory entry itself is structure, not content, and is
    not scanned.
    """
    entries = [e for e in archive.entries_with_prefix(CONTENT_ROOT) if e.path != CONTENT_ROOT]
    if not entries:
        return [_diag(Severity.warning, f"No content found in {CONTENT_ROOT}")]

    issues: list[Diagnostic] = []
    descriptors = 0
    osgi_configs = 0

    for entry in entries:
        if entry.file_name in UNWANTED_FILES:
            issues.append(_diag(Severity.warning, f"Unwanted file: {entry.path}"))
            continue

        if is_osgi_config(entry):
            osgi_configs += 1
            issues.append(_diag(Severity.error, f"OSGi configuration not allowed: {entry.path}"))
            continue

        if entry.file_name == CONTENT_DESCRIPTOR and not entry.is_directory:
            descriptors += 1
            issues.extend(check_content_node(entry, context))

    issues.append(_diag(Severity.info, f"{CONTENT_DESCRIPTOR} files analysed: {descriptors}"))
    if osgi_configs:
        issues.append(_diag(
            Severity.error,
            f"Total OSGi configurations found: {osgi_configs} (not allowed)",
        ))
    return issues
