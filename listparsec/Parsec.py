from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from .Delimited import split_row

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


class ErrorKind(Enum):
    """Why a parse failed."""
    INSUFFICIENT_INPUT = auto()      # fewer tokens left than a primitive needs
    CONVERSION = auto()              # token text is not a valid value of the target type
    VALIDATION = auto()              # value parsed but broke a post-condition
    EXPLICIT = auto()                # fail(...) or a custom check
    INCOMPLETE_CONSUMPTION = auto()  # only produced by the driver


@dataclass(frozen=True)
class State:
    """Parser state: the tokens still to consume and how many were consumed so far."""
    input: Tuple[str, ...]
    pos: int = 0

    def advance(self, n: int) -> 'State':
        """Drop the first n tokens and move the position forward by n."""
        return State(self.input[n:], self.pos + n)

    def is_empty(self) -> bool:
        return not self.input


def initial_state(tokens: Sequence[str]) -> State:
    """Starting state for a whole row of tokens."""
    return State(tuple(tokens), 0)


@dataclass(frozen=True)
class ParseError:
    """A parse failure: 0-based token position, message and kind."""
    pos: int
    message: str
    kind: ErrorKind = ErrorKind.EXPLICIT

    def with_message(self, message: str) -> 'ParseError':
        return replace(self, message=message)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    state: State


@dataclass(frozen=True)
class Error:
    error: ParseError


Reply = Union[Ok, Error]


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Outcome of running a parser against a state."""
    reply: Reply

    @staticmethod
    def ok(value: T, state: State) -> 'ParseResult[T]':
        return ParseResult(Ok(value, state))

    @staticmethod
    def failure(pos: int, message: str, kind: ErrorKind = ErrorKind.EXPLICIT) -> 'ParseResult[Any]':
        return ParseResult(Error(ParseError(pos, message, kind)))

    @staticmethod
    def from_error(error: ParseError) -> 'ParseResult[Any]':
        return ParseResult(Error(error))

    @property
    def is_ok(self) -> bool:
        return isinstance(self.reply, Ok)

    @property
    def value(self) -> Optional[T]:
        return self.reply.value if isinstance(self.reply, Ok) else None

    @property
    def state(self) -> Optional[State]:
        return self.reply.state if isinstance(self.reply, Ok) else None

    @property
    def error(self) -> Optional[ParseError]:
        return self.reply.error if isinstance(self.reply, Error) else None


class Parsec(Generic[T]):
    """A parser over a list of string tokens.

    Wraps a pure function from State to ParseResult. A Parsec holds no mutable
    data, so the same instance can be run any number of times, from any thread.
    """
    def __init__(self, parse_fn: Callable[[State], ParseResult[T]]):
        self.parse_fn = parse_fn

    def __call__(self, state: State) -> ParseResult[T]:
        return self.parse_fn(state)

    # Functor map
    def map(self, f: Callable[[T], U]) -> 'Parsec[U]':
        def parse(state: State) -> ParseResult[U]:
            res = self(state)
            if isinstance(res.reply, Error):
                return res
            return ParseResult.ok(f(res.reply.value), res.reply.state)
        return Parsec(parse)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        def parse(state: State) -> ParseResult[U]:
            res = self(state)
            if isinstance(res.reply, Error):
                # Short-circuit: f is never called after a failure
                return res
            next_parser: 'Parsec[U]' = f(res.reply.value)
            return next_parser(res.reply.state)
        return Parsec(parse)

    # Alternative (|||). Both branches start from the same state.
    def __or__(self, other: 'Parsec[T]') -> 'Parsec[T]':
        def parse(state: State) -> ParseResult[T]:
            res = self(state)
            if res.is_ok:
                return res
            return other(state)
        return Parsec(parse)

    # Monadic bind also available as >>, or plain sequencing when given a parser
    def __rshift__(self, f: Union[Callable[[T], 'Parsec[U]'], 'Parsec[U]']) -> 'Parsec[U]':
        if isinstance(f, Parsec):
            return self > f
        return self.bind(f)

    # Sequence (*>)
    def __gt__(self, other: 'Parsec[U]') -> 'Parsec[U]':
        return self.bind(lambda _: other)

    # Sequence (<*)
    def __lt__(self, other: 'Parsec[U]') -> 'Parsec[T]':
        return self.bind(lambda a: other.map(lambda _: a))

    # Sequence (&), pairing both values
    def __and__(self, other: 'Parsec[U]') -> 'Parsec[Tuple[T, U]]':
        return self.bind(lambda a: other.map(lambda b: (a, b)))

    # Label (<?>): prefix failures with a field name
    def label(self, msg: str) -> 'Parsec[T]':
        def parse(state: State) -> ParseResult[T]:
            res = self(state)
            if isinstance(res.reply, Error):
                err = res.reply.error
                return ParseResult.from_error(err.with_message(f"{msg}: {err.message}"))
            return res
        return Parsec(parse)

    def preprocess(self, f: Callable[[str], str]) -> 'Parsec[T]':
        """Run this parser on the remaining tokens after mapping each of them through f."""
        def parse(state: State) -> ParseResult[T]:
            return self(State(tuple(f(token) for token in state.input), state.pos))
        return Parsec(parse)

    def _check(self, test: Callable[[T], Optional[str]]) -> 'Parsec[T]':
        # Fails with the message returned by test, at the last token this parser consumed.
        def parse(state: State) -> ParseResult[T]:
            res = self(state)
            if isinstance(res.reply, Error):
                return res
            problem = test(res.reply.value)
            if problem is not None:
                return ParseResult.failure(_last_token(state, res.reply.state), problem, ErrorKind.VALIDATION)
            return res
        return Parsec(parse)

    def nonempty(self) -> 'Parsec[str]':
        return self._check(
            lambda s: None if s else "Expected string to be non empty"
        )

    def of_length(self, length: int) -> 'Parsec[str]':
        return self._check(
            lambda s: None if len(s) == length
            else f"Expected string '{s}' to be of length {length}, got {len(s)}"
        )

    def of_length_if_present(self, length: int) -> 'Parsec[Optional[str]]':
        return self._check(
            lambda s: None if s is None or len(s) == length
            else f"Expected the optional string '{s}' to be of length {length} if it exists"
        )

    def option(self) -> 'Parsec[Optional[T]]':
        """Make this parser optional.

        An empty token means "absent": it is consumed and the result is None,
        without running this parser at all. Anything else is handed to this
        parser unchanged, so a parser that would accept "" can never see it here.
        """
        def parse(state: State) -> ParseResult[Optional[T]]:
            if state.input and state.input[0] == "":
                return ParseResult.ok(None, state.advance(1))
            return self(state)
        return Parsec(parse)

    def delimited(self,
                  delimiter: str = ",",
                  splitter: Optional[Callable[[str, str], List[str]]] = None) -> 'Parsec[List[str]]':
        """Split the string produced by this parser into sub-fields.

        No further tokens are consumed. An empty string gives an empty list.
        """
        if len(delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
        split_fn = splitter or split_row

        def parse(state: State) -> ParseResult[List[str]]:
            res = self(state)
            if isinstance(res.reply, Error):
                return res
            s = res.reply.value
            if not s:
                return ParseResult.ok([], res.reply.state)
            try:
                fields = list(split_fn(s, delimiter))
            except Exception as e:  # csv.Error, or whatever a custom splitter raises
                return ParseResult.failure(
                    _last_token(state, res.reply.state),
                    f"not a {delimiter!r} delimited field: '{s if len(s) <= 50 else s[:47] + '...'}' ({e})",
                    ErrorKind.CONVERSION,
                )
            return ParseResult.ok(fields, res.reply.state)
        return Parsec(parse)


def _last_token(before: State, after: State) -> int:
    # Position of the last token consumed between two states, or the start if none was.
    return max(before.pos, after.pos - 1)
