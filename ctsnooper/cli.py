#!/usr/bin/env python3
"""
ctsnooper CLI - Entry point for pip-installed package.

Handles config discovery, the log file and the prompts around a scan.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from . import __version__
from .config import load_config, validate_config
from .console import confirm_structures, set_console_title, terminal_width, wait_for_exit
from .logger import configure_logging
from .report_log import ReportLog
from .scanner import scan_file
from .scanner_types import ConfigError, ConsoleError, ScanError
from .scanner_utils import display_name

logger = logging.getLogger(__name__)


def log_file_path(path: Path | str, config: dict) -> Path:
    """Where the report for path is appended: <log_dir>/<basename><log_suffix>."""
    return Path(config["log_dir"]) / f"{display_name(path)}{config['log_suffix']}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctsnooper",
        description="Search for LuaScript, Code and Structure tags in .CT files",
    )
    parser.add_argument("path", type=Path, help="Path to ct file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_snooper(
    path: Path | str,
    config: dict,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Scan path and run the prompts. Returns the process exit code."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        set_console_title(config["console_title"], stdout)
    except ConsoleError as e:
        print(f"Error: {e}", file=stderr)
        return 1

    log_path = log_file_path(path, config)
    try:
        report_log = ReportLog.open(log_path, encoding=config["file_encoding"], stdout=stdout)
    except (OSError, LookupError) as e:
        print(f"Error: Failed to open log file {log_path}: {e}", file=stderr)
        return 1

    width = terminal_width(config["fallback_width"])
    try:
        with report_log:
            report = scan_file(path, config, report_log, width)
    except ScanError as e:
        logger.debug("Scan of %s aborted", path, exc_info=True)
        print(f"Error: {e}", file=stderr)
        return 1

    if report.structure_count:
        confirm_structures(report, width, config["fill_char"], stdin=stdin, stdout=stdout)

    if config["wait_for_exit"]:
        wait_for_exit(stdin=stdin, stdout=stdout)
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if not validate_config(config):
        print("Error: invalid ctsnooper configuration", file=sys.stderr)
        sys.exit(1)

    sys.exit(run_snooper(args.path, config))


if __name__ == "__main__":
    main()
