# tests/test_laws.py
from hypothesis import given, strategies as st

from listparsec.Fields import integer
from listparsec.Parsec import State
from listparsec.Prim import fail, pure, string

from conftest import assert_result_eq

# Strategy to generate arbitrary values
vals = st.integers() | st.text()
rows = st.lists(st.text(max_size=5), max_size=6)


def run_p(p, tokens=()):
    """Helper to run a parser from position 0"""
    return p(State(tuple(tokens), 0))


# 1. Left Identity: return a >>= f  === f a
@given(vals, rows)
def test_monad_left_identity(v, tokens):
    f = lambda x: string().map(lambda s: (x, s))

    assert_result_eq(run_p(pure(v).bind(f), tokens), run_p(f(v), tokens))


# 2. Right Identity: m >>= return === m
@given(rows)
def test_monad_right_identity(tokens):
    m = string()

    assert_result_eq(run_p(m.bind(pure), tokens), run_p(m, tokens))


# 3. Associativity: (m >>= f) >>= g === m >>= (\x -> f x >>= g)
@given(st.lists(st.integers().map(str), max_size=4))
def test_monad_associativity(tokens):
    m = integer()
    f = lambda x: integer().map(lambda y: x + y)
    g = lambda z: pure(z * 2)

    lhs = m.bind(f).bind(g)
    rhs = m.bind(lambda x: f(x).bind(g))

    assert_result_eq(run_p(lhs, tokens), run_p(rhs, tokens))


# 4. map f === bind (pure . f)
@given(rows)
def test_map_is_bind_pure(tokens):
    f = lambda s: s.upper() + "!"

    assert_result_eq(run_p(string().map(f), tokens), run_p(string().bind(lambda s: pure(f(s))), tokens))


# 5. fail is a left zero for bind
@given(rows)
def test_fail_left_zero(tokens):
    calls = []

    def f(x):
        calls.append(x)
        return pure(x)

    assert_result_eq(run_p(fail("nope").bind(f), tokens), run_p(fail("nope"), tokens))
    assert calls == []
