# ABOUTME: Token to number coercion for the save file format
# ABOUTME: Every malformed or out-of-range token raises FileFormatError

import math
import re
from typing import List, Optional

from building_manager.errors import FileFormatError

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

# Integer fields hold 32-bit signed values
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def parse_int(token: Optional[str]) -> int:
    """Parse a base-10 integer token, rejecting blanks, spaces and decimals"""
    if token is None or not _INT_PATTERN.fullmatch(token):
        raise FileFormatError(f"invalid integer: {token!r}")
    value = int(token)
    if not INT_MIN <= value <= INT_MAX:
        raise FileFormatError(f"integer out of range: {token!r}")
    return value


def parse_non_negative_int(token: Optional[str]) -> int:
    value = parse_int(token)
    if value < 0:
        raise FileFormatError(f"expected a non-negative integer, got {value}")
    return value


def parse_positive_int(token: Optional[str]) -> int:
    value = parse_int(token)
    if value <= 0:
        raise FileFormatError(f"expected a positive integer, got {value}")
    return value


def parse_float(token: Optional[str]) -> float:
    """Parse a plain decimal token such as ``12.5`` or ``8``"""
    if token is None or not _DECIMAL_PATTERN.fullmatch(token):
        raise FileFormatError(f"invalid decimal: {token!r}")
    value = float(token)
    if not math.isfinite(value):
        raise FileFormatError(f"decimal out of range: {token!r}")
    return value


def parse_int_list(token: Optional[str]) -> List[int]:
    """Parse a comma separated list of integers such as ``12,40,7``"""
    if token is None:
        raise FileFormatError("missing integer list")
    return [parse_int(part) for part in token.split(",")]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (27.5 -> 28)"""
    return int(math.floor(value + 0.5))
