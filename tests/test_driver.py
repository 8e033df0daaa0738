from hypothesis import given
from hypothesis import strategies as st

from listparsec.Fields import integer
from listparsec.Parsec import ErrorKind
from listparsec.Prim import consume_rest, fail, parse, run_parser, string


def test_run_parser_success():
    assert run_parser(integer(), ["42"]) == (42, None)


def test_run_parser_incomplete_consumption():
    res, err = run_parser(integer(), ["42", "99"])
    assert res is None
    assert err.kind is ErrorKind.INCOMPLETE_CONSUMPTION
    assert err.pos == 1
    assert "up to position 1" in str(err)
    assert "not consumed: ['99']" in str(err)
    assert "['42', '99']" in str(err)


def test_run_parser_failure_quotes_the_input():
    res, err = run_parser(string() >> integer(), ["a", "b"])
    assert res is None
    assert err.kind is ErrorKind.CONVERSION
    assert err.pos == 1
    assert str(err) == "a, b\nnot an int: 'b' (position: 1)"


def test_run_parser_failure_on_empty_input_is_bare():
    res, err = run_parser(integer(), [])
    assert err.kind is ErrorKind.INSUFFICIENT_INPUT
    assert str(err) == "not enough input, expected more than 0 fields."


def test_run_parser_explicit_failure():
    res, err = run_parser(fail("row rejected"), ["x"])
    assert err.kind is ErrorKind.EXPLICIT
    assert str(err) == "x\nrow rejected (position: 0)"


def test_incomplete_is_distinct_from_failure():
    # parse() has no full-consumption check, run_parser does
    assert parse(integer(), ["1", "2"]).is_ok
    assert run_parser(integer(), ["1", "2"])[1].kind is ErrorKind.INCOMPLETE_CONSUMPTION


@given(st.lists(st.text(max_size=5), max_size=8))
def test_consume_rest_always_completes(tokens):
    assert run_parser(consume_rest(), tokens) == (None, None)


def test_run_parser_accepts_any_sequence():
    assert run_parser(string() >> string(), ("a", "b")) == ("b", None)


def test_driver_logs_failures(caplog):
    caplog.set_level("DEBUG", logger="listparsec.Prim")
    run_parser(integer(), ["x"])
    assert "parse failed at position 0" in caplog.text
