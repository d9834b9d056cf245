"""
String parsing helpers used by the built-in constraints.

Cells are always strings (or None). These helpers never raise: an
unparseable value returns None so that callers can decide whether that
is a violation or a vacuous pass.
"""

import re
from typing import Optional

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER_RE = re.compile(r'^\s*[+-]?[0-9]+\s*$')
_NUMBER_RE = re.compile(r'^\s*[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?\s*$')


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty, or whitespace-only cells."""
    return value is None or value.strip() == ""


def parse_integer(value: Optional[str]) -> Optional[int]:
    """
    Parse a base-10 integer in the signed 64-bit range.

    Leading/trailing whitespace and a leading sign are accepted;
    separators, decimals, and underscores are not.

    Returns:
        The integer, or None if the value is not a valid integer
    """
    if value is None or not _INTEGER_RE.match(value):
        return None
    result = int(value)
    if result < INT64_MIN or result > INT64_MAX:
        return None
    return result


def parse_number(value: Optional[str]) -> Optional[float]:
    """
    Parse a decimal or floating point number ("12", "-0.5", "1e3", ".25").

    Returns:
        The number as float, or None if the value is not numeric
    """
    if value is None or not _NUMBER_RE.match(value):
        return None
    return float(value)
