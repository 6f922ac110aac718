"""Validation API endpoints."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from pkgcheck.config import ValidatorOptions
from pkgcheck.deps import get_options
from pkgcheck.validator import (
    ArchiveUnreadable,
    ValidationRun,
    render_console_text,
    validate_archive,
)
from pkgcheck.validator.archive import PackageArchive
from pkgcheck.validator.content import ALLOWED_MIXIN, UNWANTED_FILES
from pkgcheck.validator.filters import FORBIDDEN_PREFIXES, GENERIC_ROOTS
from pkgcheck.validator.project import PACKAGE_NAME_HINT, resolve_project_context
from pkgcheck.validator.properties import REQUIRED_KEYS
from pkgcheck.validator.structure import REQUIRED_DIRS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateResponse(BaseModel):
    run: ValidationRun
    console_text: str


class RulesResponse(BaseModel):
    """Fixed rule tables plus the limits currently in effect."""

    package_name_pattern: str
    required_dirs: list[str]
    forbidden_filter_prefixes: list[str]
    generic_filter_roots: list[str]
    required_properties: list[str]
    unwanted_files: list[str]
    allowed_mixin: str
    max_package_bytes: int
    max_entries: int


@router.post("/validate", response_model=ValidateResponse)
async def validate_package(
    file: UploadFile = File(...),
    options: ValidatorOptions = Depends(get_options),
) -> ValidateResponse:
    """Validate an uploaded content package and return the report."""
    started_at = datetime.now(timezone.utc)
    data = await file.read()
    package_name = file.filename or ""

    try:
        archive = await run_in_threadpool(PackageArchive.from_bytes, data, package_name)
    except ArchiveUnreadable as e:
        raise HTTPException(status_code=422, detail=str(e))

    report = await run_in_threadpool(validate_archive, archive, options)
    ended_at = datetime.now(timezone.utc)

    run = ValidationRun(
        run_id=str(uuid.uuid4()),
        package_name=package_name,
        package_size=archive.size,
        project_name=resolve_project_context(package_name).project_name,
        started_at=started_at,
        ended_at=ended_at,
        duration_ms=int((ended_at - started_at).total_seconds() * 1000),
        report=report,
    )
    logger.info("Run %s for %s finished: %s", run.run_id, package_name, report.status.value)
    return ValidateResponse(run=run, console_text=render_console_text(report))


@router.get("/validate/rules", response_model=RulesResponse)
async def get_rules(
    options: ValidatorOptions = Depends(get_options),
) -> RulesResponse:
    """Return the rule tables the validator enforces."""
    return RulesResponse(
        package_name_pattern=PACKAGE_NAME_HINT,
        required_dirs=list(REQUIRED_DIRS),
        forbidden_filter_prefixes=list(FORBIDDEN_PREFIXES),
        generic_filter_roots=list(GENERIC_ROOTS),
        required_properties=list(REQUIRED_KEYS),
        unwanted_files=sorted(UNWANTED_FILES),
        allowed_mixin=ALLOWED_MIXIN,
        max_package_bytes=options.max_package_bytes,
        max_entries=options.max_entries,
    )
