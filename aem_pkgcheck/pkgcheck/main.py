"""FastAPI application -- package validator entrypoint."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import pkgcheck.deps as deps
from pkgcheck import __version__
from pkgcheck.api.validate import router as validate_router
from pkgcheck.config import load_options

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load options and configure logging."""
    options = load_options()
    log_level = "DEBUG" if os.environ.get("PKGCHECK_DEV_MODE") else options.log_level
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    deps._options = options
    logger.info(
        "Package validator starting (max_package_bytes=%d, max_entries=%d)",
        options.max_package_bytes,
        options.max_entries,
    )

    yield

    deps._options = None


app = FastAPI(
    title="AEM Package Validator",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(validate_router)
