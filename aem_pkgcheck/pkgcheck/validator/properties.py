"""Package metadata checks for META-INF/vault/properties.xml."""

from __future__ import annotations

import re

from pkgcheck.validator.archive import PackageArchive
from pkgcheck.validator.errors import MarkupError
from pkgcheck.validator.markup import XmlDocument, local_name, parse_entry
from pkgcheck.validator.models import Diagnostic, PackageProperties, ProjectContext, Severity
from pkgcheck.validator.paths import PROPERTIES_XML

REQUIRED_KEYS = ("name", "group", "version")

SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")

CHECK_NAME = "properties"


def _diag(severity: Severity, message: str, source_file: str | None = PROPERTIES_XML) -> Diagnostic:
    return Diagnostic(
        severity=severity, message=message, source_file=source_file, check_name=CHECK_NAME,
    )


def parse_properties(doc: XmlDocument) -> PackageProperties:
    """Read <entry key="...">value</entry> pairs from a Java XML properties document."""
    entries: dict[str, str] = {}
    if local_name(doc.root.tag) != "properties":
        return PackageProperties(entries=entries)
    for element in doc.root:
        if local_name(element.tag) != "entry":
            continue
        key = element.get("key")
        if key:
            entries[key] = element.text or ""
    return PackageProperties(entries=entries)


def check_properties_values(props: PackageProperties) -> list[Diagnostic]:
    issues: list[Diagnostic] = []
    for key in REQUIRED_KEYS:
        value = props.get(key)
        if value:
            issues.append(_diag(Severity.info, f"Property '{key}' found: {value}", source_file=None))
        else:
            issues.append(_diag(Severity.error, f"Required property '{key}' missing"))

    version = props.get("version")
    if version:
        if SEMVER_RE.match(version):
            issues.append(_diag(Severity.info, f"Valid version: {version}", source_file=None))
        else:
            issues.append(_diag(Severity.warning, f"Version is not semver (MAJOR.MINOR.PATCH): {version}"))
    return issues


def check_properties(archive: PackageArchive, context: ProjectContext) -> list[Diagnostic]:
    """Locate, parse and check the package properties document."""
    entry = archive.entry(PROPERTIES_XML)
    if entry is None:
        return [_diag(Severity.error, "properties.xml not found in META-INF/vault/", source_file=None)]

    issues = [_diag(Severity.info, "properties.xml found", source_file=None)]
    try:
        props = parse_properties(parse_entry(entry))
    except MarkupError as e:
        issues.append(_diag(Severity.error, f"Cannot parse properties.xml: {e}"))
        return issues

    issues.extend(check_properties_values(props))
    return issues
