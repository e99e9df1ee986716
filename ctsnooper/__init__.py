# CT Snooper: structure and script finder for Cheat Engine tables
"""
ctsnooper - Find structures and scripts in Cheat Engine table (.CT) files.

Scans a table line by line and appends a timestamped report to
<file>_log.txt next to where it is run.
"""

__version__ = "1.0.0"

from .scanner import (
    ATTRIBUTE_RULES,
    TAG_RULES,
    match_tag,
    scan_file,
    scan_lines,
)
from .scanner_types import (
    AttributeSuffixError,
    ConfigError,
    ConsoleError,
    Report,
    ScanError,
)
from .scanner_utils import attribute_value, strip_suffix

__all__ = [
    "scan_file",
    "scan_lines",
    "match_tag",
    "attribute_value",
    "strip_suffix",
    "Report",
    "ScanError",
    "AttributeSuffixError",
    "ConfigError",
    "ConsoleError",
    "ATTRIBUTE_RULES",
    "TAG_RULES",
    "__version__",
]
