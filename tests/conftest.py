"""Shared test fixtures for ctsnooper tests."""

import logging
import sys
from datetime import datetime

import pytest

import ctsnooper.logger


class _StdoutHandler(logging.Handler):
    """A handler that always writes to the *current* sys.stdout.

    Unlike StreamHandler(sys.stdout), this resolves sys.stdout at emit-time
    so it works with pytest's capsys fixture.
    """

    def emit(self, record):
        try:
            msg = self.format(record)
            sys.stdout.write(msg + "\n")
            sys.stdout.flush()
        except Exception:
            self.handleError(record)


@pytest.fixture(autouse=True)
def _setup_logging(monkeypatch):
    """Route all ctsnooper loggers to stdout so capsys can capture them."""
    handler = _StdoutHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger("ctsnooper")
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False
    # Keep main() from installing its stderr handler
    monkeypatch.setattr(ctsnooper.logger, "_CONFIGURED", True)

    yield

    root_logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Never pick up a developer's ctsnooper.yaml."""
    monkeypatch.delenv("CTSNOOPER_CONFIG", raising=False)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")


@pytest.fixture
def fixed_now():
    return datetime(2024, 5, 17, 13, 45, 9)


@pytest.fixture
def sample_ct(tmp_path):
    """A small but realistic Cheat Engine table."""
    content = "\n".join([
        '<?xml version="1.0" encoding="utf-8"?>',
        '<CheatTable CheatEngineTableVersion="45">',
        "  <CheatEntries>",
        "    <CheatEntry>",
        "      <AssemblerScript>[ENABLE]",
        "      </AssemblerScript>",
        "    </CheatEntry>",
        "  </CheatEntries>",
        '  <Structures StructVersion="2">',
        '    <Structure Name="Player" AutoFill="0" AutoCreate="1">',
        '    <Structure Name="Inventory" AutoFill="0" AutoCreate="1">',
        "  </Structures>",
        "  <LuaScript>",
        "  </LuaScript>",
        "</CheatTable>",
    ])
    path = tmp_path / "Game.CT"
    path.write_text(content + "\n", encoding="utf-8")
    return path
