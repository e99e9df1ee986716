"""Terminal helpers: window title, width and the interactive prompts."""

import logging
import shutil
import subprocess
import sys
from typing import TextIO

from .scanner_types import ConsoleError, Report
from .scanner_utils import centered_rule

logger = logging.getLogger(__name__)


def set_console_title(title: str, stream: TextIO | None = None, platform: str | None = None) -> None:
    """Set the console window title.

    Windows goes through ``cmd /C title``; elsewhere an OSC escape is
    written, but only to a terminal.

    Raises:
        ConsoleError: the title command could not be run or written.
    """
    platform = platform or sys.platform
    stream = stream or sys.stdout

    if platform.startswith("win"):
        try:
            subprocess.run(["cmd", "/C", "title", title], capture_output=True)
        except OSError as e:
            raise ConsoleError(f"Failed to set console title: {e}") from e
        return

    if not getattr(stream, "isatty", lambda: False)():
        logger.debug("stdout is not a terminal, title not set")
        return
    try:
        stream.write(f"\x1b]0;{title}\x07")
        stream.flush()
    except OSError as e:
        raise ConsoleError(f"Failed to set console title: {e}") from e


def terminal_width(fallback: int = 80) -> int:
    """Usable rule width: terminal columns minus one."""
    columns = shutil.get_terminal_size((fallback, 24)).columns
    return max(columns - 1, 0)


def _read_answer(stdin: TextIO) -> str:
    return stdin.readline().strip()


def confirm_structures(
    report: Report,
    width: int,
    fill: str = "-",
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> bool:
    """Offer to print every structure line found. Nothing here is logged.

    Returns True when the structures were listed.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    print(centered_rule(fill, width, fill), file=stdout)
    print("Would you like to see all found structures? [y/n]", file=stdout, flush=True)
    answer = _read_answer(stdin)
    if not answer:
        print("Input was empty, return", file=stdout)
        return False
    if answer != "y":
        return False

    for line in report.structures:
        print(line, file=stdout)
    return True


def wait_for_exit(stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Keep the window open until Enter is pressed."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    print("Press Enter to exit...", file=stdout, flush=True)
    stdin.readline()
