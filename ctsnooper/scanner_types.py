"""Type definitions and errors for the ctsnooper scanner."""

from dataclasses import dataclass
from typing import NamedTuple


class ScanError(Exception):
    """Raised when a scan has to stop (unreadable input, log write failure)."""


class AttributeSuffixError(ScanError, ValueError):
    """Raised when an attribute value is shorter than its trailing delimiter."""


class ConfigError(ValueError):
    """Raised when a ctsnooper.yaml file cannot be loaded."""


class ConsoleError(OSError):
    """Raised when the console title cannot be set."""


class AttributeRule(NamedTuple):
    """Header attribute reported once per matching line."""

    name: str
    field: str  # Report field the first value is stored in
    suffix_len: int  # trailing delimiter chars glued to the value, e.g. '">'
    template: str


class TagRule(NamedTuple):
    """Tag marker counted by the line scanner.

    ``template`` is formatted with ``line`` (1-based line number) and
    ``ordinal`` (running count inside ``category``).
    """

    marker: str
    category: str  # "code", "structure" or "cheat_entry"
    template: str


@dataclass(frozen=True)
class Report:
    """Result of one pass over a CT file."""

    timestamp: str
    filename: str
    line_count: int
    structures: tuple[str, ...] = ()
    code_blocks: tuple[str, ...] = ()
    cheat_entries: tuple[str, ...] = ()
    encoding: str | None = None
    ct_version: str | None = None
    struct_version: str | None = None

    @property
    def structure_count(self) -> int:
        return len(self.structures)

    @property
    def code_count(self) -> int:
        return len(self.code_blocks)

    @property
    def cheat_entry_count(self) -> int:
        return len(self.cheat_entries)
