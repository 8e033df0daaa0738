# tests/conftest.py
import pytest

from listparsec.Parsec import Error, Ok, ParseResult, State


def assert_result_eq(res1: ParseResult, res2: ParseResult):
    """
    Deep comparison of two ParseResults.
    """
    if isinstance(res1.reply, Ok):
        assert isinstance(res2.reply, Ok), "Reply mismatch: Ok vs Error"
        assert res1.reply.value == res2.reply.value
        assert res1.reply.state.pos == res2.reply.state.pos
        assert res1.reply.state.input == res2.reply.state.input
    else:
        assert isinstance(res2.reply, Error), "Reply mismatch: Error vs Ok"
        assert res1.reply.error == res2.reply.error


@pytest.fixture
def initial_state():
    def _make(tokens, pos=0):
        return State(tuple(tokens), pos)

    return _make
