"""String helpers for the ctsnooper line scanner."""

from pathlib import Path

from .scanner_types import AttributeSuffixError

UNKNOWN_FILE = "Unknown file"


def attribute_value(line: str, attribute: str) -> str | None:
    """Return the value of ``attribute=`` in line, or None.

    Only the text between the first and the second ``attribute=`` is looked
    at. The value runs up to the next whitespace and loses any surrounding
    double quotes. Nothing checks that the match sits inside a real tag.
    """
    parts = line.split(f"{attribute}=")
    if len(parts) < 2:
        return None
    tokens = parts[1].split()
    if not tokens:
        return None
    return tokens[0].strip('"')


def strip_suffix(value: str, length: int, attribute: str = "value", line_number: int | None = None) -> str:
    """Drop a known trailing delimiter of ``length`` chars from value.

    Raises AttributeSuffixError when value is shorter than the delimiter.
    """
    if length < 0:
        raise ValueError(f"suffix length must be >= 0, got {length}")
    if len(value) < length:
        where = f" on line {line_number}" if line_number is not None else ""
        raise AttributeSuffixError(
            f"{attribute} value {value!r}{where} is shorter than its "
            f"{length}-character trailing delimiter"
        )
    return value[:len(value) - length]


def centered_rule(text: str, width: int, fill: str = "-") -> str:
    """Center text in a rule of ``width`` fill characters."""
    return f"{text:{fill}^{width}}"


def display_name(path: Path | str) -> str:
    """Base name of path, or "Unknown file" when it has none."""
    name = Path(path).name
    if name in ("", ".", ".."):
        return UNKNOWN_FILE
    return name
