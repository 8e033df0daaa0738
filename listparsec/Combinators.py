import logging
from typing import Any, Callable, List, Optional, Sequence

from .Parsec import Ok, Parsec, ParseResult, State, T
from .Prim import fail, pure

logger = logging.getLogger(__name__)


# 1. choice: Tries parsers in order until one succeeds
def choice(parsers: Sequence[Parsec[T]]) -> Parsec[T]:
    """
    Applies a list of parsers in order until one succeeds, each from the same state.
    Returns the value of the succeeding parser, or the last parser's failure.
    """
    if not parsers:
        return fail("no alternatives")
    result = parsers[0]
    for p in parsers[1:]:
        result = result | p
    return result


# 2. count: Parses n occurrences of a parser
def count(n: int, p: Parsec[T]) -> Parsec[List[T]]:
    """Applies p n times in sequence, returning the n values."""
    if n <= 0:
        return pure([])
    return sequence([p] * n)


# 3. sequence: Runs parsers one after the other
def sequence(parsers: Sequence[Parsec[Any]]) -> Parsec[List[Any]]:
    """
    Runs each parser in order, threading the state, and collects their values.
    Stops at the first failure.
    """
    def parse(state: State) -> ParseResult[List[Any]]:
        values = []
        current = state
        for p in parsers:
            res = p(current)
            if not isinstance(res.reply, Ok):
                return res
            values.append(res.reply.value)
            current = res.reply.state
        return ParseResult.ok(values, current)
    return Parsec(parse)


# 4. record: Builds an object from consecutive fields
def record(ctor: Callable[..., T], *parsers: Parsec[Any]) -> Parsec[T]:
    """
    Parses one field per parser and passes the values, in order, to ctor.

        record(Trade, string(), integer(), double())   # Trade(symbol, qty, price)
    """
    return sequence(parsers).map(lambda values: ctor(*values))


# 5. optional_field: Empty token means absent
def optional_field(p: Parsec[T]) -> Parsec[Optional[T]]:
    """Same as p.option(): an empty token gives None, anything else goes to p."""
    return p.option()


# 6. parserTrace: Debugging parser that logs the remaining tokens
def parser_trace(label_str: str) -> Parsec[None]:
    def parse(state: State) -> ParseResult[None]:
        logger.debug("%s: %r at position %d", label_str, list(state.input[:10]), state.pos)
        return ParseResult.ok(None, state)
    return Parsec(parse)


# 7. parserTraced: Logs entry, and logs again if p fails
def parser_traced(label_str: str, p: Parsec[T]) -> Parsec[T]:
    def parse(state: State) -> ParseResult[T]:
        parser_trace(label_str)(state)
        res = p(state)
        if not res.is_ok:
            logger.debug("%s failed at position %d: %s", label_str, res.error.pos, res.error.message)
        return res
    return Parsec(parse)
