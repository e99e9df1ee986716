"""Diagnostic logging for ctsnooper.

Report output never goes through here (see report_log.ReportLog); this only
carries debug/warning/error diagnostics, on stderr.

Configuration via environment variables:
  CTSNOOPER_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
  CTSNOOPER_LOG_FILE: optional path to also write diagnostics to a file
"""

from __future__ import annotations

import logging
import os
import sys

ROOT_LOGGER = "ctsnooper"
_FORMAT = "%(levelname)s %(name)s: %(message)s"

_CONFIGURED = False


def configure_logging() -> logging.Logger:
    """Configure the ctsnooper root logger (idempotent)."""
    global _CONFIGURED  # noqa: PLW0603
    root = logging.getLogger(ROOT_LOGGER)
    if _CONFIGURED:
        return root
    _CONFIGURED = True

    level_name = os.environ.get("CTSNOOPER_LOG_LEVEL", "WARNING").upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(stderr_handler)

    log_file = os.environ.get("CTSNOOPER_LOG_FILE")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s " + _FORMAT))
        root.addHandler(file_handler)

    root.propagate = False
    return root
