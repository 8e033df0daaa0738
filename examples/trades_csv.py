import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from listparsec.Combinators import record
from listparsec.Dialect import Dialect, RowParser
from listparsec.Fields import double, integer
from listparsec.Prim import string

# 1. Row format
# Pipe separated, day-first dates, tags packed into one ';' separated field
rows = RowParser(Dialect(delimiter="|", sub_delimiter=";", date_format="dd/MM/yyyy", strip=True))


@dataclass
class Trade:
    symbol: str
    quantity: int
    price: float
    traded_on: date
    currency: Optional[str]
    tags: List[str]


# 2. Field parsers, one per column
trade = record(
    Trade,
    string().nonempty().label("symbol"),
    integer().label("quantity"),
    double().label("price"),
    rows.local_date.label("traded_on"),
    string().option().of_length_if_present(3).label("currency"),
    rows.delimited(string()).label("tags"),
)

SAMPLE = """\
ACME | 100 | 12.50 | 03/01/2024 | USD | block;"late; amended"
INIT | 20  | 7     | 04/01/2024 |     |
BAD  | ten | 1.0   | 05/01/2024 | EUR | x
WIDE | 5   | 1.0   | 05/01/2024 | EURO | x
"""

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    for line in SAMPLE.splitlines():
        result, err = rows.run(trade, line)
        if err:
            print("Parsing Failed:", err)
        else:
            print("Parsed:", result)
