"""Workspace filter checks for META-INF/vault/filter.xml."""

from __future__ import annotations

from pkgcheck.validator.archive import PackageArchive
from pkgcheck.validator.errors import MarkupError
from pkgcheck.validator.markup import XmlDocument, local_name, parse_entry
from pkgcheck.validator.models import Diagnostic, FilterRule, ProjectContext, Severity
from pkgcheck.validator.paths import FILTER_XML

FORBIDDEN_PREFIXES = ("/libs", "/etc")
GENERIC_ROOTS = ("/content", "/apps", "/conf")
PROJECT_AREAS = ("/content", "/apps", "/conf")

RULE_KINDS = ("include", "exclude")

CHECK_NAME = "filter"


def _diag(severity: Severity, message: str, source_file: str | None = FILTER_XML) -> Diagnostic:
    return Diagnostic(
        severity=severity, message=message, source_file=source_file, check_name=CHECK_NAME,
    )


def parse_filter_rules(doc: XmlDocument) -> list[FilterRule]:
    """Extract <filter> declarations in document order.

    A root element other than <workspaceFilter> declares no rules. A
    <filter> without a root attribute makes the document malformed.
    """
    if local_name(doc.root.tag) != "workspaceFilter":
        return []

    rules: list[FilterRule] = []
    for i, element in enumerate(doc.root):
        if local_name(element.tag) != "filter":
            continue
        root = element.get("root")
        if not root:
            raise MarkupError(f"filter #{i + 1} has no 'root' attribute")
        patterns = tuple(
            (local_name(child.tag), child.get("pattern", ""))
            for child in element
            if local_name(child.tag) in RULE_KINDS
        )
        rules.append(FilterRule(root=root, mode=element.get("mode"), rules=patterns))
    return rules


def project_prefixes(project_name: str) -> tuple[str, ...]:
    return tuple(f"{area}/{project_name}" for area in PROJECT_AREAS)


def check_filter_rules(rules: list[FilterRule], context: ProjectContext) -> list[Diagnostic]:
    """Evaluate each rule independently; duplicates are tracked per call."""
    issues: list[Diagnostic] = []
    if not rules:
        issues.append(_diag(Severity.warning, "No filters declared in filter.xml"))
        return issues

    seen: set[str] = set()
    for rule in rules:
        root = rule.root

        if root in seen:
            issues.append(_diag(Severity.error, f"Duplicate filter: {root}"))
            continue
        seen.add(root)

        if root.startswith(FORBIDDEN_PREFIXES):
            issues.append(_diag(Severity.error, f"Forbidden path in filter: {root}"))
            continue

        if root in GENERIC_ROOTS:
            suggestion = f"/content/{context.project_name or '<project>'}"
            issues.append(_diag(
                Severity.error,
                f"Filter too generic: {root}. Use a specific path such as {suggestion}",
            ))
            continue

        if context.project_name:
            if root.startswith(project_prefixes(context.project_name)):
                issues.append(_diag(Severity.info, f"Valid filter: {root}", source_file=None))
            else:
                issues.append(_diag(
                    Severity.warning,
                    f"Filter out of project scope '{context.project_name}': {root}",
                ))

    return issues


def check_filters(archive: PackageArchive, context: ProjectContext) -> list[Diagnostic]:
    """Locate, parse and check the workspace filter document."""
    entry = archive.entry(FILTER_XML)
    if entry is None:
        return [_diag(Severity.error, "filter.xml not found in META-INF/vault/", source_file=None)]

    issues = [_diag(Severity.info, "filter.xml found", source_file=None)]
    try:
        rules = parse_filter_rules(parse_entry(entry))
    except MarkupError as e:
        issues.append(_diag(Severity.error, f"Cannot parse filter.xml: {e}"))
        return issues

    issues.extend(check_filter_rules(rules, context))
    return issues
