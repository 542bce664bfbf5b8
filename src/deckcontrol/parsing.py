# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Lenient numeric parsing for command line parameters.

Deck parameters are decoded the way the deck control tools always have:
the longest numeric prefix of the string is used and anything after it is
ignored. A string with no numeric prefix decodes to zero.
"""

import logging
import re

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)


def parse_int(value: str) -> int:
    """Parse the leading integer of a string.

    Example:
        >>> parse_int("12abc")
        12
        >>> parse_int("abc")
        0
    """
    match = _INT_PREFIX.match(value)
    if not match:
        logger.warning(f"'{value}' is not a valid integer, using 0")
        return 0
    if match.end() != len(value.rstrip()):
        logger.warning(f"Ignoring trailing characters in '{value}'")
    return int(match.group(1))


def parse_float(value: str) -> float:
    """Parse the leading floating point number of a string.

    Example:
        >>> parse_float("5.5")
        5.5
        >>> parse_float("-.25x")
        -0.25
    """
    match = _FLOAT_PREFIX.match(value)
    if not match:
        logger.warning(f"'{value}' is not a valid number, using 0.0")
        return 0.0
    if match.end() != len(value.rstrip()):
        logger.warning(f"Ignoring trailing characters in '{value}'")
    return float(match.group(1))
