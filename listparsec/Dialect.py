from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import List, Optional, Tuple

from .Dates import DEFAULT_DATE_FORMAT, DEFAULT_DATETIME_FORMAT, local_date_format, local_datetime_format
from .Delimited import split_row
from .Parsec import Parsec, ParseError, T
from .Prim import run_parser


@dataclass(frozen=True)
class Dialect:
    """
    Describes a delimited-text file: how a row splits into tokens, how
    multi-valued fields split into sub-fields, and how dates are written.
    """
    delimiter: str = ","                              # between fields of a row
    quotechar: str = '"'
    sub_delimiter: str = ","                          # inside a multi-valued field
    date_format: str = DEFAULT_DATE_FORMAT            # CLDR/Joda pattern
    datetime_format: str = DEFAULT_DATETIME_FORMAT
    strip: bool = False                               # trim whitespace around every token


# -----------------------------------------------------------
# Stock dialects
# -----------------------------------------------------------

csv_dialect = Dialect()

tsv_dialect = replace(csv_dialect, delimiter="\t")

# Pipe separated, as produced by most warehouse exports
psv_dialect = replace(csv_dialect, delimiter="|")


class RowParser:
    """
    Field parsers and a row driver bound to one Dialect.
    """
    def __init__(self, dialect: Dialect = csv_dialect):
        self.dialect = dialect

        # --- Dates ---
        self.local_date: Parsec[date] = local_date_format(dialect.date_format)
        self.local_datetime: Parsec[datetime] = local_datetime_format(dialect.datetime_format)

    def delimited(self, p: Parsec[str]) -> Parsec[List[str]]:
        """Split the field read by p on the dialect's sub-delimiter."""
        quotechar = self.dialect.quotechar
        return p.delimited(
            self.dialect.sub_delimiter,
            lambda text, delimiter: split_row(text, delimiter, quotechar),
        )

    def split(self, line: str) -> List[str]:
        """Break one raw line into tokens."""
        return split_row(line.rstrip("\r\n"), self.dialect.delimiter, self.dialect.quotechar)

    def run(self, parser: Parsec[T], line: str) -> Tuple[Optional[T], Optional[ParseError]]:
        """Split a raw line and run parser over all of its tokens."""
        if self.dialect.strip:
            parser = parser.preprocess(str.strip)
        return run_parser(parser, self.split(line))
