"""
ctsnooper - Structure and script finder for Cheat Engine tables (.CT)

One linear pass over the table file:
1. Reports the declared encoding, table version and structure version
2. Counts LuaScript / Code / AssemblerScript blocks and named structures
3. Writes a timestamped block to stdout and <file>_log.txt

Usage:
    ctsnooper MyGame.CT
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from .config import DEFAULT_CONFIG
from .report_log import ReportLog
from .scanner_types import AttributeRule, Report, ScanError, TagRule
from .scanner_utils import attribute_value, centered_rule, display_name, strip_suffix

logger = logging.getLogger(__name__)

ATTRIBUTE_RULES = (
    AttributeRule("encoding", "encoding", 3, "Encoding: {value}"),
    AttributeRule("CheatEngineTableVersion", "ct_version", 2, "CT Version: v{value}"),
    AttributeRule("StructVersion", "struct_version", 2, "Structures Version: v{value}"),
)

# Evaluated top to bottom, first match wins
TAG_RULES = (
    TagRule("<LuaScript", "code", "Found LuaScript on line {line}"),
    TagRule("<Code", "code", "Found Code on line {line}"),
    TagRule("<AssemblerScript", "code", "Found AssemblerScript on line {line}"),
    TagRule("Structure Name", "structure", "Found Structure no. {ordinal} on line {line}"),
)

CHEAT_ENTRY_RULE = TagRule("<CheatEntry", "cheat_entry", "Found CheatEntry no. {ordinal} on line {line}")


def _setting(config: dict, key: str):
    return config.get(key, DEFAULT_CONFIG[key])


def tag_rules(config: dict) -> tuple[TagRule, ...]:
    """Ordered tag rules enabled by config."""
    if _setting(config, "count_cheat_entries"):
        return TAG_RULES + (CHEAT_ENTRY_RULE,)
    return TAG_RULES


def match_tag(line: str, rules: Iterable[TagRule]) -> TagRule | None:
    """Return the first rule whose marker occurs in line."""
    for rule in rules:
        if rule.marker in line:
            return rule
    return None


def _write_header(sink: ReportLog, filename: str, timestamp: str, config: dict, width: int) -> None:
    fill = _setting(config, "fill_char")
    sink.message(centered_rule(timestamp, width, fill))
    sink.message(f"Filename: {filename}")
    sink.message(f"Made for CT Version {_setting(config, 'ct_version')}")


def _write_summary(sink: ReportLog, report: Report, config: dict, width: int) -> None:
    sink.message(centered_rule("Summary", width, _setting(config, "fill_char")))
    sink.message(f"Total lines checked: {report.line_count}")
    sink.message(f"Total amount of Structures found: {report.structure_count}")
    if _setting(config, "count_cheat_entries"):
        sink.message(f"Total amount of CheatEntries found: {report.cheat_entry_count}")
    sink.message(f"Total amount of Scripts/Code found: {report.code_count}")
    if not report.structure_count:
        sink.message("No structures found.")


def scan_lines(
    lines: Iterable[str],
    filename: str,
    config: dict,
    sink: ReportLog,
    width: int,
    now: datetime | None = None,
) -> Report:
    """Scan CT file lines, reporting through sink as matches are found."""
    timestamp = (now or datetime.now()).strftime(_setting(config, "timestamp_format"))
    _write_header(sink, filename, timestamp, config, width)

    rules = tag_rules(config)
    matches: dict[str, list[str]] = {"code": [], "structure": [], "cheat_entry": []}
    declared: dict[str, str] = {}
    line_count = 0

    for line_number, line in enumerate(lines, 1):
        line_count = line_number
        line = line.rstrip("\n")

        for attr in ATTRIBUTE_RULES:
            value = attribute_value(line, attr.name)
            if value is None:
                continue
            value = strip_suffix(value, attr.suffix_len, attr.name, line_number)
            declared.setdefault(attr.field, value)
            sink.message(attr.template.format(value=value))

        rule = match_tag(line, rules)
        if rule is None:
            continue
        found = matches[rule.category]
        found.append(line)
        logger.debug("%s matched %r on line %d", filename, rule.marker, line_number)
        sink.message(rule.template.format(line=line_number, ordinal=len(found)))

    report = Report(
        timestamp=timestamp,
        filename=filename,
        line_count=line_count,
        structures=tuple(matches["structure"]),
        code_blocks=tuple(matches["code"]),
        cheat_entries=tuple(matches["cheat_entry"]),
        **declared,
    )
    _write_summary(sink, report, config, width)
    return report


def scan_file(filepath: Path | str, config: dict, sink: ReportLog, width: int, now: datetime | None = None) -> Report:
    """Scan a single CT file.

    The input is closed again before returning, on success and on error.
    Read failures (missing file, bad encoding) are raised as ScanError.
    """
    path = Path(filepath)
    try:
        with open(path, encoding=_setting(config, "file_encoding")) as f:
            return scan_lines(f, display_name(path), config, sink, width, now=now)
    except (OSError, UnicodeDecodeError) as e:
        raise ScanError(f"Failed to read {path}: {e}") from e
