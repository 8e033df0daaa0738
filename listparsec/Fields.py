import math
import re
from typing import Optional

from .Parsec import Parsec
from .Prim import parse_attempt, parse_with_type

# Signed decimal integers: no whitespace, underscores or non-ASCII digits
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DOUBLE_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_DOUBLES = {
    "NaN": math.nan,
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}


def _bounded_int(bits: int):
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def convert(s: str) -> Optional[int]:
        if not _INTEGER_RE.fullmatch(s):
            return None
        n = int(s)
        return n if low <= n <= high else None
    return convert


def _to_double(s: str) -> Optional[float]:
    if s in _SPECIAL_DOUBLES:
        return _SPECIAL_DOUBLES[s]
    if not _DOUBLE_RE.fullmatch(s):
        return None
    return float(s)


def _to_boolean(s: str) -> Optional[bool]:
    return {"true": True, "false": False}.get(s.lower())


def byte() -> Parsec[int]:
    """A signed 8-bit integer."""
    return parse_attempt(_bounded_int(8), "not a byte")


def short() -> Parsec[int]:
    """A signed 16-bit integer."""
    return parse_attempt(_bounded_int(16), "not a short")


def integer() -> Parsec[int]:
    """A signed 32-bit integer."""
    return parse_attempt(_bounded_int(32), "not an int")


def long() -> Parsec[int]:
    """A signed 64-bit integer."""
    return parse_attempt(_bounded_int(64), "not a long")


def double() -> Parsec[float]:
    """A floating point number: decimal or scientific notation, NaN or [+-]Infinity."""
    return parse_attempt(_to_double, "not a double")


def boolean() -> Parsec[bool]:
    """'true' or 'false', in any case."""
    return parse_attempt(_to_boolean, "not a boolean")


def char() -> Parsec[str]:
    """A single character token."""
    return parse_with_type(_single_char, "not a char")


def _single_char(s: str) -> str:
    if len(s) != 1:
        raise ValueError(f"expected one character, got {len(s)}")
    return s
