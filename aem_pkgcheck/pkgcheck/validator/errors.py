"""Exception types raised by the validation engine."""

from __future__ import annotations


class PackageCheckError(Exception):
    """Base class for all package validation errors."""


class ArchiveUnreadable(PackageCheckError):
    """The package could not be opened at all; no validation was attempted."""


class CorruptArchive(ArchiveUnreadable):
    """The package bytes exist but do not decode as a zip archive."""


class MarkupError(PackageCheckError):
    """An XML document inside the package is missing structure or fails to parse.

    Always converted to a diagnostic by the stage that reads the document.
    """
