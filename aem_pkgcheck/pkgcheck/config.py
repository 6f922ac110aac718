"""Validator options: limits loaded from an options file or the environment."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MIB = 1024 * 1024

DEFAULT_MAX_PACKAGE_BYTES = 200 * MIB
DEFAULT_MAX_ENTRIES = 10_000


class ValidatorOptions(BaseModel):
    """Tunable limits. Rule tables are fixed and not configurable."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    max_package_bytes: int = Field(DEFAULT_MAX_PACKAGE_BYTES, gt=0)
    max_entries: int = Field(DEFAULT_MAX_ENTRIES, gt=0)
    log_level: str = "INFO"


def load_options() -> ValidatorOptions:
    """Load options from $PKGCHECK_OPTIONS_PATH (JSON) or env fallback."""
    opts_path = os.environ.get("PKGCHECK_OPTIONS_PATH", "/data/options.json")
    if Path(opts_path).exists():
        logger.debug("Loading options from %s", opts_path)
        return ValidatorOptions.model_validate(json.loads(Path(opts_path).read_text()))

    values: dict = {}
    if "PKGCHECK_MAX_PACKAGE_MB" in os.environ:
        values["max_package_bytes"] = int(os.environ["PKGCHECK_MAX_PACKAGE_MB"]) * MIB
    if "PKGCHECK_MAX_ENTRIES" in os.environ:
        values["max_entries"] = int(os.environ["PKGCHECK_MAX_ENTRIES"])
    if "PKGCHECK_LOG_LEVEL" in os.environ:
        values["log_level"] = os.environ["PKGCHECK_LOG_LEVEL"]
    return ValidatorOptions(**values)
