"""Command-line entry point for CI pipelines."""

from __future__ import annotations

import argparse
import logging
import sys

from pkgcheck.config import load_options
from pkgcheck.validator import ArchiveUnreadable, render_console_text, validate

logger = logging.getLogger(__name__)

EXIT_UNREADABLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkgcheck",
        description="Validate an AEM content package against naming and content conventions.",
    )
    parser.add_argument("archive", help="Path to the package .zip")
    parser.add_argument(
        "--name",
        default=None,
        help="Package file name to validate against (defaults to the archive's base name)",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    options = load_options()
    logging.basicConfig(
        level="DEBUG" if args.verbose else options.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    try:
        report = validate(args.archive, name=args.name, options=options)
    except ArchiveUnreadable as e:
        print(f"pkgcheck: {e}", file=sys.stderr)
        return EXIT_UNREADABLE

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print(render_console_text(report), end="")
    return report.exit_code
