from datetime import date, datetime

from listparsec.Combinators import record
from listparsec.Dialect import Dialect, RowParser, csv_dialect, psv_dialect, tsv_dialect
from listparsec.Fields import integer
from listparsec.Parsec import ErrorKind
from listparsec.Prim import string


def test_stock_dialects():
    assert csv_dialect.delimiter == ","
    assert tsv_dialect.delimiter == "\t"
    assert psv_dialect.delimiter == "|"
    assert psv_dialect.date_format == csv_dialect.date_format


def test_split_line():
    rows = RowParser(psv_dialect)
    assert rows.split("a|b|\r\n") == ["a", "b", ""]


def test_run_line():
    rows = RowParser()
    p = record(lambda name, n, d: (name, n, d), string(), integer(), rows.local_date)
    assert rows.run(p, '"Smith, J",3,2020-05-01') == (("Smith, J", 3, date(2020, 5, 1)), None)


def test_run_line_incomplete():
    res, err = RowParser().run(integer(), "1,2")
    assert err.kind is ErrorKind.INCOMPLETE_CONSUMPTION


def test_dialect_date_formats():
    rows = RowParser(Dialect(date_format="dd/MM/yyyy", datetime_format="dd/MM/yyyy HH:mm"))
    assert rows.run(rows.local_date, "03/02/2021")[0] == date(2021, 2, 3)
    assert rows.run(rows.local_datetime, "03/02/2021 10:30")[0] == datetime(2021, 2, 3, 10, 30)


def test_strip_dialect():
    rows = RowParser(Dialect(strip=True))
    assert rows.run(integer() >> integer(), " 1 , 2 ") == (2, None)
    assert RowParser().run(integer() >> integer(), " 1 , 2 ")[1] is not None


def test_sub_delimiter():
    rows = RowParser(Dialect(delimiter="|", sub_delimiter=";"))
    p = string() >> rows.delimited(string())
    assert rows.run(p, 'id|a;"b;c";d') == (["a", "b;c", "d"], None)
