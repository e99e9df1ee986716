"""Tests for ctsnooper.report_log.ReportLog."""

import io

import pytest

from ctsnooper.config import DEFAULT_CONFIG
from ctsnooper.report_log import ReportLog
from ctsnooper.scanner import scan_file
from ctsnooper.scanner_types import ScanError


class _BrokenStream(io.StringIO):
    def write(self, data):
        raise OSError(28, "No space left on device")


class _ClosedPipe(io.StringIO):
    def write(self, data):
        raise BrokenPipeError(32, "Broken pipe")


class TestReportLog:
    """Tests for the two-sink report writer."""

    def test_message_goes_to_both_sinks(self):
        stdout = io.StringIO()
        log = ReportLog(io.StringIO(), stdout=stdout)

        log.message("Filename: Game.CT")

        assert stdout.getvalue() == "Filename: Game.CT\n"
        assert log.log_stream.getvalue() == "Filename: Game.CT\n"
        assert log.lines_written == 1

    def test_defaults_to_current_stdout(self, capsys):
        log = ReportLog(io.StringIO())
        log.message("hello")
        assert capsys.readouterr().out == "hello\n"

    def test_write_failure_is_scan_error(self):
        log = ReportLog(_BrokenStream(), stdout=io.StringIO())
        with pytest.raises(ScanError, match="Failed to write log file"):
            log.message("x")

    def test_stdout_failure_is_scan_error(self):
        log = ReportLog(io.StringIO(), stdout=_ClosedPipe())
        with pytest.raises(ScanError, match="Failed to write report to stdout"):
            log.message("x")
        assert log.log_stream.getvalue() == ""

    def test_stdout_failure_during_scan_is_not_a_read_error(self, sample_ct):
        log = ReportLog(io.StringIO(), stdout=_ClosedPipe())
        with pytest.raises(ScanError) as exc:
            scan_file(sample_ct, DEFAULT_CONFIG, log, 40)
        assert "Failed to write report to stdout" in str(exc.value)
        assert "Failed to read" not in str(exc.value)
        assert isinstance(exc.value.__cause__, BrokenPipeError)

    def test_open_creates_file(self, tmp_path):
        path = tmp_path / "Game.CT_log.txt"
        with ReportLog.open(path, stdout=io.StringIO()) as log:
            log.message("first")
        assert path.read_text(encoding="utf-8") == "first\n"

    def test_open_appends(self, tmp_path):
        path = tmp_path / "Game.CT_log.txt"
        path.write_text("earlier run\n", encoding="utf-8")
        with ReportLog.open(path, stdout=io.StringIO()) as log:
            log.message("new run")
        assert path.read_text(encoding="utf-8") == "earlier run\nnew run\n"

    def test_open_failure_propagates(self, tmp_path):
        with pytest.raises(OSError):
            ReportLog.open(tmp_path / "no" / "such" / "dir.txt")

    def test_closed_on_exit(self, tmp_path):
        with ReportLog.open(tmp_path / "log.txt", stdout=io.StringIO()) as log:
            pass
        assert log.log_stream.closed


class TestRepeatedRuns:
    """Each run appends its own timestamped block."""

    def test_two_runs_accumulate(self, sample_ct, tmp_path, fixed_now):
        path = tmp_path / "Game.CT_log.txt"
        for _ in range(2):
            with ReportLog.open(path, stdout=io.StringIO()) as log:
                scan_file(sample_ct, DEFAULT_CONFIG, log, 40, now=fixed_now)

        content = path.read_text(encoding="utf-8")
        assert content.count("2024-05-17 13:45:09") == 2
        assert content.count("Summary") == 2
        first, second = content.split("Filename: Game.CT")[1:]
        assert "Total amount of Structures found: 2" in first
        assert "Total amount of Structures found: 2" in second
