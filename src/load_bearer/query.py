"""
Parsing of the delay query parameter.
"""

import re

from load_bearer.config.constants import DELAY_INT_MAX, DELAY_INT_MIN, DELAY_PARAMETER
from load_bearer.domain import RequestHandle

# Leading integer as C's atoi reads it: optional whitespace, optional sign, ASCII digits.
_LEADING_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")

# Anything longer than this many significant digits is out of range.
_MAX_DIGITS = len(str(DELAY_INT_MAX))


def lenient_int(value: str) -> int:
    """
    Parse the leading integer of a string, returning 0 when there is none.

    "250" -> 250, "250ms" -> 250, " 42" -> 42, "abc" -> 0, "" -> 0.
    Values outside a C int saturate at its bounds, so arbitrarily long
    digit strings never raise.
    """
    match = _LEADING_INTEGER.match(value)
    if match is None:
        return 0

    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return DELAY_INT_MIN if sign == "-" else DELAY_INT_MAX

    number = int(digits)
    if sign == "-":
        return max(-number, DELAY_INT_MIN)
    return min(number, DELAY_INT_MAX)


def requested_delay(request: RequestHandle) -> int:
    """
    Return the delay in milliseconds requested through the query string.

    Every parameter whose name starts with "delay" counts (so "delayed=5"
    matches too), and the last one in the query string wins. Missing or
    non-numeric values yield 0, and negative values are clamped to 0.

    Args:
        request: The request whose query string is inspected.

    Returns:
        int: The requested delay in milliseconds, never negative.
    """
    wait = 0
    for key, value in request.query.items():
        if key[: len(DELAY_PARAMETER)] == DELAY_PARAMETER:
            wait = lenient_int(value)
    return max(wait, 0)
