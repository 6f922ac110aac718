"""Project identity resolution from the package file name."""

from __future__ import annotations

import re

from pkgcheck.validator.models import ProjectContext

# Whole-name grammar: <slug>-(content|apps|conf)-YYYYMMDD-<anything>.zip
PACKAGE_NAME_RE = re.compile(r"^[a-z0-9-]+-(content|apps|conf)-\d{8}-.+\.zip$")

# Slug extraction, deliberately looser than PACKAGE_NAME_RE
PROJECT_NAME_RE = re.compile(r"^([a-z0-9-]+)-(content|apps|conf)-")

PACKAGE_NAME_HINT = "[a-z0-9-]+-(content|apps|conf)-YYYYMMDD-*.zip"


def is_valid_package_name(file_name: str) -> bool:
    return PACKAGE_NAME_RE.match(file_name) is not None


def extract_project_name(file_name: str) -> str | None:
    match = PROJECT_NAME_RE.match(file_name)
    return match.group(1) if match else None


def resolve_project_context(file_name: str) -> ProjectContext:
    """Derive the project context from an archive file name.

    Name validity and slug extraction are evaluated independently: a name
    that fails the strict grammar can still yield a project name, so scope
    checks keep running for imperfectly named packages.
    """
    return ProjectContext(
        project_name=extract_project_name(file_name),
        package_name_valid=is_valid_package_name(file_name),
    )
