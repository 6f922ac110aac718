"""Persisted GraphQL query checks for the project's configuration tree."""

from __future__ import annotations

import re

from pkgcheck.validator.archive import PackageArchive
from pkgcheck.validator.models import Diagnostic, ProjectContext, QueryFile, Severity
from pkgcheck.validator.paths import QUERY_EXTENSION, persisted_queries_dir

CONTENT_REF_RE = re.compile(r"/content/([a-zA-Z0-9-]+)")
QUERY_TOKEN_RE = re.compile(r"query\s+", re.IGNORECASE)

WILDCARD = "*"
COMMENT_MARKER = "#"

CHECK_NAME = "queries"


def _diag(severity: Severity, message: str, source_file: str | None = None) -> Diagnostic:
    return Diagnostic(
        severity=severity, message=message, source_file=source_file, check_name=CHECK_NAME,
    )


def find_query_files(archive: PackageArchive, project_name: str) -> list[QueryFile]:
    prefix = persisted_queries_dir(project_name)
    return [
        QueryFile(path=entry.path, text=entry.text())
        for entry in archive.entries_with_prefix(prefix)
        if entry.path.endswith(QUERY_EXTENSION) and not entry.is_directory
    ]


def check_query_file(query: QueryFile, project_name: str) -> list[Diagnostic]:
    issues: list[Diagnostic] = []
    source = query.path

    expected_prefix = f"{project_name}_"
    if not query.file_name.startswith(expected_prefix):
        issues.append(_diag(
            Severity.error,
            f"Invalid GraphQL query file name: {query.file_name}. "
            f"Must start with '{expected_prefix}'",
            source,
        ))
        return issues

    if WILDCARD in query.text:
        issues.append(_diag(Severity.error, "GraphQL query contains a wildcard (*)", source))

    for match in CONTENT_REF_RE.finditer(query.text):
        if match.group(1) != project_name:
            issues.append(_diag(
                Severity.error,
                f"Query references another project: {match.group(0)}",
                source,
            ))

    query_count = len(QUERY_TOKEN_RE.findall(query.text))
    if query_count > 1:
        issues.append(_diag(
            Severity.warning,
            f"File contains {query_count} queries (recommended: 1 per file)",
            source,
        ))
    elif query_count == 1:
        issues.append(_diag(Severity.info, f"Valid GraphQL query: {query.file_name}"))

    if not query.text.strip().startswith(COMMENT_MARKER):
        issues.append(_diag(
            Severity.info,
            "Recommended: start the query with a descriptive comment",
            source,
        ))

    return issues


def check_queries(archive: PackageArchive, context: ProjectContext) -> list[Diagnostic]:
    """Check persisted queries under conf/<project>/settings/graphql/persistentQueries/."""
    if not context.project_name:
        return []

    queries = find_query_files(archive, context.project_name)
    if not queries:
        return []

    issues = [_diag(Severity.info, f"Found {len(queries)} GraphQL queries")]
    for query in queries:
        issues.extend(check_query_file(query, context.project_name))
    return issues
