"""Validation data models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Severity level for diagnostics."""

    error = "error"
    warning = "warning"
    info = "info"


class ReportStatus(str, Enum):
    """Overall verdict derived from the diagnostic counts."""

    success = "success"
    warning = "warning"
    failed = "failed"


class Diagnostic(BaseModel):
    """A single validation finding."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str
    source_file: str | None = None
    check_name: str = ""


class ValidationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    errors: int = 0
    warnings: int = 0
    info: int = 0
    total: int = 0


class ValidationReport(BaseModel):
    """Finalized result of one package validation run."""

    model_config = ConfigDict(frozen=True)

    diagnostics: tuple[Diagnostic, ...] = ()
    summary: ValidationSummary = Field(default_factory=ValidationSummary)
    status: ReportStatus = ReportStatus.success
    exit_code: int = 0

    @property
    def success(self) -> bool:
        return self.status is not ReportStatus.failed

    def by_severity(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is severity]


class ProjectContext(BaseModel):
    """Project identity inferred from the archive file name."""

    model_config = ConfigDict(frozen=True)

    project_name: str | None = None
    package_name_valid: bool = False

    @property
    def known(self) -> bool:
        return self.project_name is not None


class FilterRule(BaseModel):
    """One <filter> declaration from the workspace filter document."""

    model_config = ConfigDict(frozen=True)

    root: str
    mode: str | None = None
    rules: tuple[tuple[str, str], ...] = ()


class PackageProperties(BaseModel):
    """Flat key/value mapping from the package properties document."""

    entries: dict[str, str] = Field(default_factory=dict)

    def get(self, key: str) -> str | None:
        value = self.entries.get(key)
        return value or None


class QueryFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    text: str

    @property
    def file_name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


class ValidationRun(BaseModel):
    """A report plus the run metadata the orchestration layer attaches."""

    run_id: str
    package_name: str
    package_size: int
    project_name: str | None = None
    started_at: datetime
    ended_at: datetime
    duration_ms: int = 0
    report: ValidationReport
