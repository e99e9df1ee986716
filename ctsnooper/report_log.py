"""Report writer mirroring every report line to stdout and the log file."""

import logging
import sys
from pathlib import Path
from typing import TextIO

from .scanner_types import ScanError

logger = logging.getLogger(__name__)


class ReportLog:
    """Writes report lines to stdout and an append-only log file.

    The log stream is never truncated; each run adds its own block.
    """

    def __init__(self, log_stream: TextIO, stdout: TextIO | None = None):
        self.log_stream = log_stream
        self._stdout = stdout
        self.lines_written = 0

    @classmethod
    def open(cls, path: Path | str, encoding: str = "utf-8", stdout: TextIO | None = None) -> "ReportLog":
        """Open (create or append) the log file at path.

        OSError is left to the caller: failing here is a startup failure,
        not a scan failure.
        """
        path = Path(path)
        log_stream = open(path, "a", encoding=encoding)
        logger.debug("Appending report to %s", path)
        return cls(log_stream, stdout=stdout)

    @property
    def stdout(self) -> TextIO:
        # Resolved per call so redirected sys.stdout is honoured
        return self._stdout or sys.stdout

    def message(self, text: str) -> None:
        """Write one report line to both sinks."""
        try:
            print(text, file=self.stdout)
        except OSError as e:
            raise ScanError(f"Failed to write report to stdout: {e}") from e
        try:
            self.log_stream.write(text + "\n")
        except OSError as e:
            raise ScanError(f"Failed to write log file: {e}") from e
        self.lines_written += 1

    def close(self) -> None:
        try:
            self.log_stream.close()
        except OSError as e:
            raise ScanError(f"Failed to write log file: {e}") from e

    def __enter__(self) -> "ReportLog":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
