import logging
from typing import Any, Callable, Optional, Sequence, Tuple

from .Parsec import ErrorKind, Error, Parsec, ParseError, ParseResult, State, T, initial_state

logger = logging.getLogger(__name__)


def pure(value: T) -> Parsec[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(state: State) -> ParseResult[T]:
        return ParseResult.ok(value, state)
    return Parsec(parse)


def fail(msg: str) -> Parsec[Any]:
    """A parser that always fails with a message, at the current position."""
    def parse(state: State) -> ParseResult[Any]:
        return ParseResult.failure(state.pos, msg, ErrorKind.EXPLICIT)
    return Parsec(parse)


def get_position() -> Parsec[int]:
    """The number of tokens consumed so far; consumes nothing (0 on empty input)."""
    def parse(state: State) -> ParseResult[int]:
        return ParseResult.ok(state.pos, state)
    return Parsec(parse)


def string() -> Parsec[str]:
    """Exactly one token, as is. Can only fail if the input is empty."""
    def parse(state: State) -> ParseResult[str]:
        if not state.input:
            return ParseResult.failure(
                state.pos,
                f"not enough input, expected more than {state.pos} fields.",
                ErrorKind.INSUFFICIENT_INPUT,
            )
        return ParseResult.ok(state.input[0], state.advance(1))
    return Parsec(parse)


def consume(n: int) -> Parsec[None]:
    """Skip n tokens."""
    if n < 0:
        raise ValueError(f"consume: cannot skip a negative number of tokens ({n})")

    def parse(state: State) -> ParseResult[None]:
        nominal = state.pos + n
        if n <= len(state.input):
            return ParseResult.ok(None, state.advance(n))
        # The position is reported as if the n tokens had been there
        return ParseResult.failure(
            nominal,
            f"not enough input, expected more than {nominal} fields.",
            ErrorKind.INSUFFICIENT_INPUT,
        )
    return Parsec(parse)


def consume_rest() -> Parsec[None]:
    """Skip every remaining token."""
    def parse(state: State) -> ParseResult[None]:
        return ParseResult.ok(None, state.advance(len(state.input)))
    return Parsec(parse)


def value(thunk: Callable[[], Tuple[Optional[T], Optional[str]]],
          kind: ErrorKind = ErrorKind.CONVERSION) -> Parsec[T]:
    """Lift a computation returning (value, error_message) into a parser.

    The computation runs each time the parser runs. A non-None message turns
    into a failure at the current position; nothing is consumed either way.
    """
    def parse(state: State) -> ParseResult[T]:
        result, message = thunk()
        if message is not None:
            return ParseResult.failure(state.pos, message, kind)
        return ParseResult.ok(result, state)
    return Parsec(parse)


def value_or(thunk: Callable[[], T], on_error: Callable[[Exception], str]) -> Parsec[T]:
    """Like value, for a computation that signals failure by raising."""
    def attempt() -> Tuple[Optional[T], Optional[str]]:
        try:
            return thunk(), None
        except Exception as e:  # converters may raise anything; report it as a parse failure
            return None, on_error(e)
    return value(attempt)


def parse_with_type(convert: Callable[[str], T], annotation: str) -> Parsec[T]:
    """A one-token parser from a converter that raises on bad input.

    A failed conversion is reported as "<annotation>: '<token>'" at the
    position of the offending token.
    """
    return get_position().bind(
        lambda start: string().bind(
            lambda s: _converted(start, lambda: convert(s), f"{annotation}: '{s}'")
        )
    )


def _converted(pos: int, thunk: Callable[[], T], message: str) -> Parsec[T]:
    # Failure is pinned to pos, the start of the token being converted.
    def parse(state: State) -> ParseResult[T]:
        try:
            result = thunk()
        except Exception:  # converters may raise anything; report it as a parse failure
            return ParseResult.failure(pos, message, ErrorKind.CONVERSION)
        return ParseResult.ok(result, state)
    return Parsec(parse)


def parse_attempt(convert: Callable[[str], Optional[T]], annotation: str) -> Parsec[T]:
    """A one-token parser from a converter that returns None on bad input."""
    def checked(s: str) -> T:
        result = convert(s)
        if result is None:
            raise ValueError(s)
        return result
    return parse_with_type(checked, annotation)


# --- Driver ---

def parse(parser: Parsec[T], tokens: Sequence[str]) -> ParseResult[T]:
    """Run a parser from position 0 without checking that all tokens were used."""
    return parser(initial_state(tokens))


def run_parser(parser: Parsec[T], tokens: Sequence[str]) -> Tuple[Optional[T], Optional[ParseError]]:
    """Run a parser over a whole row of tokens.

    Returns (value, None) when the parser succeeds and every token was
    consumed, otherwise (None, error). The error message quotes the input and
    the position, ready to be shown to a user.
    """
    tokens = list(tokens)
    result = parse(parser, tokens)

    if isinstance(result.reply, Error):
        err = result.reply.error
        if tokens:
            err = err.with_message(f"{', '.join(tokens)}\n{err.message} (position: {err.pos})")
        logger.debug("parse failed at position %d: %s", err.pos, err.message)
        return None, err

    rest = list(result.reply.state.input)
    if rest:
        pos = result.reply.state.pos
        err = ParseError(
            pos,
            f"Parsed successfully: {tokens} up to position {pos}\n"
            f" -> but the rest of the list was not consumed: {rest}",
            ErrorKind.INCOMPLETE_CONSUMPTION,
        )
        logger.debug("parse stopped at position %d with %d tokens left", pos, len(rest))
        return None, err

    return result.reply.value, None
