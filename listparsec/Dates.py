"""Date and date-time field parsers.

Formats are written as CLDR / Joda-Time patterns ("yyyy-MM-dd",
"dd/MM/yyyy HH:mm:ss.SSS") and turned into ``strptime`` directives once, when
the parser is built. Pattern tokenizing (letters, literal runs, quoted text
and the '' escape) is done by Babel.

Supported pattern letters:

    Letter | Meaning                    | strptime
    -------|----------------------------|---------
    y, u   | year (yy: two digits)      | %Y, %y
    M, L   | month (MMM/MMMM: names)    | %m, %b, %B
    d      | day of month               | %d
    D      | day of year                | %j
    E      | weekday name               | %a, %A
    H, k   | hour 0-23                  | %H
    h, K   | hour 1-12                  | %I
    a      | AM/PM marker               | %p
    m      | minute                     | %M
    s      | second                     | %S
    S      | fraction of second         | %f
    Z, x, X| UTC offset                 | %z

Any other letter raises ValueError when the parser is built.
"""
from datetime import date, datetime
from functools import lru_cache

from babel.dates import tokenize_pattern

from .Parsec import Parsec
from .Prim import parse_with_type

DEFAULT_DATE_FORMAT = "yyyy-MM-dd"
DEFAULT_DATETIME_FORMAT = "yyyy-MM-dd HH:mm:ss"


def _directive(letter: str, width: int) -> str:
    if letter in "yu":
        return "%y" if width == 2 else "%Y"
    if letter in "ML":
        if width >= 4:
            return "%B"
        if width == 3:
            return "%b"
        return "%m"
    if letter == "E":
        return "%A" if width >= 4 else "%a"
    simple = {
        "d": "%d",
        "D": "%j",
        "H": "%H",
        "k": "%H",
        "h": "%I",
        "K": "%I",
        "a": "%p",
        "m": "%M",
        "s": "%S",
        "S": "%f",
        "Z": "%z",
        "x": "%z",
        "X": "%z",
    }
    if letter not in simple:
        raise ValueError(f"unsupported date pattern letter {letter * width!r}")
    return simple[letter]


@lru_cache(maxsize=64)
def to_strptime(pattern: str) -> str:
    """Translate a CLDR/Joda date pattern into a strptime format.

        >>> to_strptime("yyyy-MM-dd HH:mm:ss")
        '%Y-%m-%d %H:%M:%S'
        >>> to_strptime("d 'de' MMMM yyyy")
        '%d de %B %Y'
    """
    parts = []
    for kind, token in tokenize_pattern(pattern):
        if kind == "field":
            letter, width = token
            parts.append(_directive(letter, width))
        else:
            parts.append(token.replace("%", "%%"))
    return "".join(parts)


def _strptime(text: str, pattern: str) -> datetime:
    return datetime.strptime(text, to_strptime(pattern))


def local_date_format(pattern: str) -> Parsec[date]:
    """A date in the given CLDR/Joda pattern."""
    to_strptime(pattern)  # reject unsupported patterns up front
    return parse_with_type(
        lambda s: _strptime(s, pattern).date(),
        f"not a local date with format {pattern}",
    )


def local_datetime_format(pattern: str) -> Parsec[datetime]:
    """A date-time (naive, or offset-aware when the pattern has a Z/x/X field)."""
    to_strptime(pattern)
    return parse_with_type(
        lambda s: _strptime(s, pattern),
        f"not a local date time with format {pattern}",
    )


def local_date() -> Parsec[date]:
    """A date in the yyyy-MM-dd format."""
    return local_date_format(DEFAULT_DATE_FORMAT)


def local_datetime() -> Parsec[datetime]:
    """A date-time in the yyyy-MM-dd HH:mm:ss format."""
    return local_datetime_format(DEFAULT_DATETIME_FORMAT)

