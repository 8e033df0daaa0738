# Core
from .Parsec import Parsec, State, ParseError, ParseResult, ErrorKind, Ok, Error, initial_state
from .Prim import (
    pure, fail, get_position, string, consume, consume_rest,
    value, value_or, parse_with_type, parse_attempt,
    parse, run_parser,
)

# Typed fields
from .Fields import byte, short, integer, long, double, boolean, char
from .Dates import (
    local_date, local_datetime, local_date_format, local_datetime_format,
    to_strptime, DEFAULT_DATE_FORMAT, DEFAULT_DATETIME_FORMAT,
)

# Sub-fields
from .Delimited import split_row

# Combinators
from .Combinators import (
    choice, count, sequence, record, optional_field,
    parser_trace, parser_traced,
)

# Dialects
from .Dialect import Dialect, RowParser, csv_dialect, tsv_dialect, psv_dialect
