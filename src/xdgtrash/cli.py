# Filename: cli.py
# Author: Rich Lewis @RichLewis007
# Description: Command-line interface for xdg-trash. Moves each FILE argument into the
#              freedesktop.org trash and reports one diagnostic line per failure.

from __future__ import annotations

import argparse
import logging
import sys

from .errors import describe
from .services import config as config_service
from .services import logger as logger_service
from .services.trash import send_paths_to_trash

logger = logging.getLogger(__name__)

PROG = "trash"


def build_parser() -> argparse.ArgumentParser:
    # Create and configure the command-line argument parser.
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Move files and directories to the trash instead of deleting them.",
        epilog="Use -- before names that start with '-'.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="File, symlink or directory to move to the trash.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    # Entry point for the trash command.
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.files:
        print(f"{PROG}: missing operand", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    logger_service.configure(log_level=config_service.load_log_level())
    logger.debug("Starting with argv=%s", argv)

    try:
        root = config_service.ensure_trash_root()
    except OSError as exc:
        print(f"{PROG}: {describe(exc)}", file=sys.stderr)
        return 1
    logger.debug("Trash directory located at %s", root.path)

    deletion_date = config_service.deletion_timestamp()
    report = send_paths_to_trash(args.files, root, deletion_date)

    for failure in report.failed:
        print(f"{PROG}: {failure.argument}: {failure.error}", file=sys.stderr)

    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
