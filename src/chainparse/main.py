"""
The implementations of the parser classes and the combinators.
"""

from __future__ import annotations
from typing import Any, Callable, Final, Iterable, Iterator, Sequence

import enum
import logging

import chainparse.const as const
from chainparse.state import ParseState, new_state


logger = logging.getLogger(__name__)


def repeat(*, start: int = 0, step: int = 1) -> Iterator[int]:
    """
    `range()` with no end.
    """
    i = start
    while True:
        yield i
        i += step


BuildFunction = Callable[[Any, Sequence[Any]], Any]
"""`(value, matched) -> new value`"""
TestFunction = Callable[[Any, Sequence[Any]], Any]
"""`(value, matched) -> bool`"""
CharPredicate = Callable[[Any], Any]
"""`(char) -> bool`"""
RepeatPredicate = Callable[[Any, Sequence[Any], int], Any]
"""`(value, matched, index) -> bool`"""
AbsorbFunction = Callable[[Any, Any, Sequence[Any]], Any]
"""`(value, sub_value, sub_matched) -> new value`"""


class Parser:
    """
    Turns a `ParseState` into a new `ParseState`.

    Subclasses implement `_run()`. Call the parser itself (or use `run()`) to evaluate it.

    Composing:
    ```
    p * q       # sequence: matched text is p's followed by q's
    p / q       # sequence, but only q's matched text is kept
    p % f       # build: value = f(value, matched) once p succeeds
    p | q       # alternative: q is tried on the original state if p fails
    ```

    Strings are accepted wherever a parser is expected, and are converted with `literal()`.
    """

    oblivious: bool = False
    """If `True`, runs on the last successful snapshot when the chain it's in has failed."""
    inspects_failure: bool = False
    """If `True`, runs on a failed chain's current state as-is."""
    inspects_only: bool = False
    """If `True`, never contributes matched text, so the chain keeps its text even after `/`."""

    def __init__(self, name: str) -> None:
        self.name: str = name

    def _run(self, state: ParseState) -> ParseState:
        raise NotImplementedError("Subclasses must implement this method")

    def __call__(self, state: ParseState) -> ParseState:
        result = self._run(state)
        if result.ok:
            if result.last_good is not None:
                result = result.replace(last_good=None)
        elif state.ok and result.last_good is None:
            result = result.replace(last_good=state)
        return result

    def __mul__(self, other: ParserParameter) -> Chain:
        return Chain.extend(self, Link.SEQUENCE, convert_parameter(other))

    def __rmul__(self, other: ParserParameter) -> Chain:
        return Chain.extend(convert_parameter(other), Link.SEQUENCE, self)

    def __truediv__(self, other: ParserParameter) -> Chain:
        return Chain.extend(self, Link.DISCARD, convert_parameter(other))

    def __rtruediv__(self, other: ParserParameter) -> Chain:
        return Chain.extend(convert_parameter(other), Link.DISCARD, self)

    def __mod__(self, function: BuildFunction) -> Chain:
        if not callable(function):
            raise TypeError(f"Build functions must be callable, got {type(function).__name__}.")
        return Chain.extend(self, Link.BUILD, function)

    def __or__(self, other: ParserParameter) -> Alternative:
        return Alternative.of(self, convert_parameter(other))

    def __ror__(self, other: ParserParameter) -> Alternative:
        return Alternative.of(convert_parameter(other), self)

    def many(self, min_count: int = const.UNBOUNDED, max_count: int = const.UNBOUNDED) -> Many:
        """Same as `many(min_count, max_count, self)`."""
        return Many(min_count, max_count, self)

    def optional(self) -> Many:
        """Same as `optional(self)`."""
        return Many(0, 1, self)

    def morph(self, transform: Callable[[Sequence[Any]], Sequence[Any]]) -> Morph:
        """Same as `morph(transform, self)`."""
        return Morph(transform, self)

    def force(self) -> Force:
        """Same as `force(self)`."""
        return Force(self)

    def parse(self, src: Sequence[Any], value: Any = None) -> ParseState:
        """Same as `parse(self, src, value)`."""
        return parse(self, src, value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


ParserParameter = Parser | str


def convert_parameter(parser: ParserParameter) -> Parser:
    if isinstance(parser, str):
        return literal(parser)
    if not isinstance(parser, Parser):
        raise TypeError(f"Expected a parser or a string, got {type(parser).__name__}.")
    return parser


# chain algebra

class Link(enum.Enum):
    """How a link's result is folded into its chain."""
    SEQUENCE = "*"
    DISCARD = "/"
    BUILD = "%"


def _fold(link: Link, matched: Sequence[Any], addition: Sequence[Any]) -> Sequence[Any]:
    if link is Link.DISCARD:
        return addition
    return matched + addition # type: ignore[operator]


class Chain(Parser):
    """
    A sequence of parsers threading one state, built by `*`, `/` and `%`.

    Chains are flattened from the left, so `a * b / c % f` is a single chain of four links.
    Each link receives a state whose `matched` is the chain's matched text so far.

    While the chain is failed, only oblivious links (and links that inspect failure) run.

    A lookahead link (`make_reluctant()`, `make_greedy()`) that's followed by other parsers
    uses the rest of the chain as its continuation.
    """

    def __init__(self, links: tuple[tuple[Link, Any], ...]) -> None:
        super().__init__(" ".join(
            (f"{link.value} " if i else "") + (getattr(item, "__name__", "<build>") if link is Link.BUILD else item.name)
            for i, (link, item) in enumerate(links)
        ))
        self.links: Final[tuple[tuple[Link, Any], ...]] = links
        followed: list[bool] = []
        seen_parser = False
        for link, _ in reversed(links):
            followed.append(seen_parser)
            if link is not Link.BUILD:
                seen_parser = True
        followed.reverse()
        self._followed: Final[tuple[bool, ...]] = tuple(followed)

    @classmethod
    def extend(cls, left: Parser, link: Link, right: Any) -> Chain:
        if isinstance(left, Chain):
            links = left.links
        else:
            links = ((Link.SEQUENCE, left),)
        return cls(links + ((link, right),))

    def _run(self, state: ParseState) -> ParseState:
        return self._run_from(0, state, state.empty)

    def _run_from(self, start: int, state: ParseState, matched: Sequence[Any]) -> ParseState:
        for index in range(start, len(self.links)):
            link, item = self.links[index]
            if link is Link.BUILD:
                if state.ok:
                    state = state.replace(value=item(state.value, matched))
                continue
            if state.ok:
                if isinstance(item, Lookahead) and self._followed[index]:
                    return self._search(index, state, matched)
                result = item(state)
                if result.ok:
                    if not item.inspects_only:
                        matched = _fold(link, matched, result.matched)
                    result = result.replace(matched=matched)
            elif item.oblivious:
                result = item(state.last_good if state.last_good is not None else state)
                matched = result.matched
            elif item.inspects_failure:
                result = item(state)
            else:
                continue
            state = result
        return state

    def _search(self, index: int, state: ParseState, matched: Sequence[Any]) -> ParseState:
        link, lookahead = self.links[index]
        result: ParseState | None = None
        for tried, trial in enumerate(lookahead.trials(state), 1):
            joined = _fold(link, matched, trial.matched)
            result = self._run_from(index + 1, trial.replace(matched=joined), joined)
            if result.ok:
                logger.debug(
                    "%s lookahead %r committed to %d item(s) after %d trial(s)",
                    lookahead.mode, lookahead.parser, state.remaining - trial.remaining, tried,
                )
                return result
        if result is None:
            return self._run_from(index + 1, lookahead.parser(state), matched)
        return result


class Alternative(Parser):
    """
    Tries each option against the same state, returning the first success.

    If every option fails, the last option's result is returned.
    """

    def __init__(self, options: tuple[Parser, ...]) -> None:
        if len(options) < 2:
            raise ValueError("At least two parsers required.")
        super().__init__(" | ".join(option.name for option in options))
        self.options: Final[tuple[Parser, ...]] = options

    @classmethod
    def of(cls, left: Parser, right: Parser) -> Alternative:
        options: tuple[Parser, ...] = ()
        for parser in (left, right):
            if isinstance(parser, Alternative):
                options += parser.options
            else:
                options += (parser,)
        return cls(options)

    def _run(self, state: ParseState) -> ParseState:
        for option in self.options[:-1]:
            result = option(state)
            if result.ok:
                return result
        return self.options[-1](state)


# elementary steps

class Literal(Parser):
    def __init__(self, text: Sequence[Any], case_sensitive: bool = True) -> None:
        if not case_sensitive and not hasattr(text, "lower"):
            raise TypeError("Case insensitive literals must be strings or bytes.")
        super().__init__(repr(text) if case_sensitive else f"anycase({text!r})")
        self.text: Final[Sequence[Any]] = text
        self.case_sensitive: Final[bool] = case_sensitive

    def _run(self, state: ParseState) -> ParseState:
        chunk = state.peek(len(self.text))
        if chunk is not None:
            if chunk == self.text:
                return state.advance(len(self.text))
            if not self.case_sensitive and chunk.lower() == self.text.lower(): # type: ignore[attr-defined]
                return state.advance(len(self.text))
        return state.replace(matched=state.empty, ok=False)


class Outcome(Parser):
    """Unconditionally succeeds or fails without consuming anything."""

    inspects_only = True

    def __init__(self, ok: bool) -> None:
        super().__init__("succeed" if ok else "fail")
        self.ok: Final[bool] = ok

    def _run(self, state: ParseState) -> ParseState:
        return state.replace(matched=state.empty, ok=self.ok)


class Check(Parser):
    """
    Checks `predicate(value, matched)` without consuming anything.

    On success contributes no matched text, so the chain's matched text is left as it was,
    also after `/`.
    On failure the incoming state is returned as-is, with `ok` set to `False`.
    """

    inspects_only = True

    def __init__(self, predicate: TestFunction) -> None:
        super().__init__(f"test({getattr(predicate, '__name__', '...')})")
        self.predicate: Final[TestFunction] = predicate

    def _run(self, state: ParseState) -> ParseState:
        if self.predicate(state.value, state.matched):
            return state.replace(matched=state.empty, ok=True)
        return state.failed()


class Build(Parser):
    """Computes a new value from `function(value, matched)`. Can start a chain."""

    inspects_only = True

    def __init__(self, function: BuildFunction) -> None:
        super().__init__(f"build({getattr(function, '__name__', '...')})")
        self.function: Final[BuildFunction] = function

    def _run(self, state: ParseState) -> ParseState:
        return state.replace(value=self.function(state.value, state.matched), matched=state.empty)


class SingleChar(Parser):
    def __init__(self, predicate: CharPredicate) -> None:
        super().__init__(f"single_char({getattr(predicate, '__name__', '...')})")
        self.predicate: Final[CharPredicate] = predicate

    def _run(self, state: ParseState) -> ParseState:
        if state.at_end() or not self.predicate(state.src[state.pos]):
            return state.replace(matched=state.empty, ok=False)
        return state.advance(1)


class CharRun(Parser):
    """
    Consumes items while the predicate holds (or until it holds, if `until` is set).

    The item that stops the run is consumed too, but is only part of the matched text
    if `keep_terminator` is set. Always succeeds.
    """

    def __init__(self, predicate: CharPredicate, keep_terminator: bool, until: bool) -> None:
        super().__init__(
            f"{'char_until' if until else 'char_while'}({getattr(predicate, '__name__', '...')})"
        )
        self.predicate: Final[CharPredicate] = predicate
        self.keep_terminator: Final[bool] = keep_terminator
        self.until: Final[bool] = until

    def _run(self, state: ParseState) -> ParseState:
        src = state.src
        pos = state.pos
        while pos < state.end and bool(self.predicate(src[pos])) != self.until:
            pos += 1
        stop = pos
        if pos < state.end:
            pos += 1
            if self.keep_terminator:
                stop = pos
        return state.advance(pos - state.pos, src[state.pos:stop])


class Everything(Parser):
    def __init__(self) -> None:
        super().__init__("everything")

    def _run(self, state: ParseState) -> ParseState:
        return state.advance(state.remaining)


class EndOfInput(Parser):
    inspects_only = True

    def __init__(self) -> None:
        super().__init__("end_of_input")

    def _run(self, state: ParseState) -> ParseState:
        return state.replace(matched=state.empty, ok=state.at_end())


class FunctionParser(Parser):
    """A parser defined by a plain `state -> state` function. Create using `step()`."""

    def __init__(self, function: Callable[[ParseState], ParseState]) -> None:
        super().__init__(getattr(function, "__name__", "step"))
        self.function: Final[Callable[[ParseState], ParseState]] = function

    def _run(self, state: ParseState) -> ParseState:
        return self.function(state)


# structural combinators

class Many(Parser):
    """
    Repeats a parser until it fails or `max_count` runs succeeded.

    Succeeds if at least `min_count` runs succeeded. Negative bounds are unbounded.
    A run that succeeds without consuming anything is counted once and ends the repetition.
    """

    def __init__(self, min_count: int, max_count: int, parser: Parser) -> None:
        if 0 <= max_count < min_count:
            raise ValueError(f"The minimum count ({min_count}) exceeds the maximum count ({max_count}).")
        super().__init__(f"many({min_count}, {max_count}, {parser.name})")
        self.min_count: Final[int] = min_count
        self.max_count: Final[int] = max_count
        self.parser: Final[Parser] = parser

    def _run(self, state: ParseState) -> ParseState:
        matched = state.empty
        current = state
        count = 0
        while self.max_count < 0 or count < self.max_count:
            result = self.parser(current)
            if not result.ok:
                break
            count += 1
            matched = matched + result.matched # type: ignore[operator]
            progressed = result.remaining != current.remaining
            current = result.replace(matched=matched)
            if not progressed:
                break
        return current.replace(matched=matched, ok=count >= self.min_count)


class Repeat(Parser):
    """
    Repeats a parser while (or until, if `until` is set) `predicate(value, matched, index)` holds.

    The predicate is checked after every successful run with that run's matched text and
    0-based index. Stops early when the parser fails. Always succeeds.
    """

    def __init__(self, predicate: RepeatPredicate, parser: Parser, until: bool) -> None:
        super().__init__(f"{'repeat_until' if until else 'repeat_while'}({parser.name})")
        self.predicate: Final[RepeatPredicate] = predicate
        self.parser: Final[Parser] = parser
        self.until: Final[bool] = until

    def _run(self, state: ParseState) -> ParseState:
        matched = state.empty
        current = state
        for index in repeat():
            result = self.parser(current)
            if not result.ok:
                break
            matched = matched + result.matched # type: ignore[operator]
            progressed = result.remaining != current.remaining
            proceed = bool(self.predicate(result.value, result.matched, index)) != self.until
            current = result.replace(matched=matched)
            if not (proceed and progressed):
                break
        return current.replace(matched=matched, ok=True)


class Absorb(Parser):
    """
    Runs a sub-parser with its own built value, then merges it with `combine(value, sub_value, sub_matched)`.

    On failure the incoming state is returned as-is, with `ok` set to `False`.
    """

    def __init__(self, combine: AbsorbFunction, parser: Parser, initial: Any) -> None:
        super().__init__(f"absorb({parser.name})")
        self.combine: Final[AbsorbFunction] = combine
        self.parser: Final[Parser] = parser
        self.initial: Final[Any] = initial

    def _run(self, state: ParseState) -> ParseState:
        sub = self.parser(ParseState(state.src, self.initial, pos=state.pos, end=state.end))
        if not sub.ok:
            return state.failed()
        return state.replace(
            src=sub.src,
            pos=sub.pos,
            end=sub.end,
            matched=sub.matched,
            value=self.combine(state.value, sub.value, sub.matched),
            ok=True,
        )


class Morph(Parser):
    """Rewrites the matched text of a successful parser."""

    def __init__(self, transform: Callable[[Sequence[Any]], Sequence[Any]], parser: Parser) -> None:
        super().__init__(f"morph({parser.name})")
        self.transform: Final[Callable[[Sequence[Any]], Sequence[Any]]] = transform
        self.parser: Final[Parser] = parser

    def _run(self, state: ParseState) -> ParseState:
        result = self.parser(state)
        if not result.ok:
            return result
        return result.replace(matched=self.transform(result.matched))


class Force(Parser):
    """Moves the result of a parser onto a fresh buffer. See `ParseState.detach()`."""

    def __init__(self, parser: Parser) -> None:
        super().__init__(f"force({parser.name})")
        self.parser: Final[Parser] = parser

    def _run(self, state: ParseState) -> ParseState:
        return self.parser(state).detach()


class Forward(Parser):
    """
    A placeholder for a parser that's defined later. Used for recursive grammars.

    ```
    expr = Forward("expr")
    expr.define("(" * expr.optional() * ")")
    ```
    """

    def __init__(self, name: str = "forward") -> None:
        super().__init__(name)
        self.parser: Parser | None = None

    def define(self, parser: ParserParameter) -> Forward:
        self.parser = convert_parameter(parser)
        return self

    def _run(self, state: ParseState) -> ParseState:
        if self.parser is None:
            raise RuntimeError(f"Forward parser `{self.name}` was run before being defined.")
        return self.parser(state)

    def __repr__(self) -> str:
        return f"<Forward {self.name}>"


# chain modifiers

class NoConsume(Parser):
    """Reports the parser's outcome, but leaves the unconsumed input as it was."""

    def __init__(self, parser: Parser) -> None:
        super().__init__(f"no_consume({parser.name})")
        self.parser: Final[Parser] = parser

    def _run(self, state: ParseState) -> ParseState:
        return self.parser(state).replace(src=state.src, pos=state.pos, end=state.end)


class NoBuild(Parser):
    """Discards any change the parser makes to the built value."""

    def __init__(self, parser: Parser) -> None:
        super().__init__(f"no_build({parser.name})")
        self.parser: Final[Parser] = parser

    def _run(self, state: ParseState) -> ParseState:
        return self.parser(state).replace(value=state.value)


class Oblivious(Parser):
    oblivious = True

    def __init__(self, parser: Parser) -> None:
        super().__init__(f"oblivious({parser.name})")
        self.parser: Final[Parser] = parser

    def _run(self, state: ParseState) -> ParseState:
        return self.parser(state)


class Lookahead(Parser):
    """
    Base class of the backtracking modifiers.

    Inside a chain, the chain tries the rest of its links after each candidate match of the
    wrapped parser, in the order given by `_lengths()`, and commits to the first candidate
    that lets the rest succeed. Used on its own, behaves like the wrapped parser.

    The candidates are limited by the unrestricted match of the wrapped parser. A length is a
    candidate if the wrapped parser, run on the input cut to that length, consumes all of it.
    """

    mode: str = "lookahead"

    def __init__(self, parser: Parser) -> None:
        super().__init__(f"{self.mode}({parser.name})")
        self.parser: Final[Parser] = parser

    def _run(self, state: ParseState) -> ParseState:
        return self.parser(state)

    def _lengths(self, longest: int) -> Iterable[int]:
        raise NotImplementedError("Subclasses must implement this method")

    def trials(self, state: ParseState) -> Iterator[ParseState]:
        """Yields the candidate results of the wrapped parser, in trial order."""
        full = self.parser(state)
        if not full.ok:
            return
        longest = state.remaining - full.remaining
        for length in self._lengths(longest):
            if length == longest:
                yield full
                continue
            clipped = self.parser(state.replace(end=state.pos + length))
            if clipped.ok and clipped.remaining == 0:
                yield state.replace(
                    pos=state.pos + length,
                    matched=clipped.matched,
                    value=clipped.value,
                    ok=True,
                )


class Reluctant(Lookahead):
    mode = "reluctant"

    def _lengths(self, longest: int) -> Iterable[int]:
        return range(0, longest + 1)


class Greedy(Lookahead):
    mode = "greedy"

    def _lengths(self, longest: int) -> Iterable[int]:
        return range(longest, -1, -1)


# factories

def literal(text: Sequence[Any], case_sensitive: bool = True) -> Literal:
    """Matches `text` at the start of the unconsumed input."""
    return Literal(text, case_sensitive)

def anycase(text: Sequence[Any]) -> Literal:
    """Same as `literal(text, case_sensitive=False)`."""
    return Literal(text, case_sensitive=False)

succeed: Final[Parser] = Outcome(True)
"""Always succeeds. Consumes nothing."""

fail: Final[Parser] = Outcome(False)
"""Always fails. Consumes nothing."""

everything: Final[Parser] = Everything()
"""Consumes the rest of the input. Always succeeds."""

end_of_input: Final[Parser] = EndOfInput()
"""Succeeds if there's nothing left to parse. Consumes nothing."""

def test(predicate: TestFunction) -> Check:
    """Succeeds if `predicate(value, matched)` is true. Consumes nothing."""
    return Check(predicate)

def build(function: BuildFunction) -> Build:
    """
    Sets the value to `function(value, matched)`.

    Unlike `parser % function`, can be the first element of a chain.
    """
    return Build(function)

def single_char(predicate: CharPredicate) -> SingleChar:
    """Consumes one item if `predicate(item)` is true."""
    return SingleChar(predicate)

def char_while(predicate: CharPredicate, keep_terminator: bool = False) -> CharRun:
    """
    Consumes items while `predicate(item)` is true. Always succeeds.

    The first item that fails the predicate is consumed as well. It's only included in the
    matched text if `keep_terminator` is set.
    """
    return CharRun(predicate, keep_terminator, until=False)

def char_until(predicate: CharPredicate, keep_terminator: bool = False) -> CharRun:
    """
    Consumes items until `predicate(item)` is true. Always succeeds.

    The item that satisfies the predicate is consumed as well. It's only included in the
    matched text if `keep_terminator` is set.
    """
    return CharRun(predicate, keep_terminator, until=True)

def step(function: Callable[[ParseState], ParseState]) -> FunctionParser:
    """
    Turns a `state -> state` function into a parser. Can be used as a decorator.

    ```
    @step
    def digit(state: ParseState) -> ParseState:
        if state.at_end() or not state.src[state.pos].isdigit():
            return state.replace(matched=state.empty, ok=False)
        return state.advance(1)
    ```
    """
    return FunctionParser(function)

def many(min_count: int, max_count: int, parser: ParserParameter) -> Many:
    """
    Repeats `parser` at least `min_count` and at most `max_count` times.

    Use `const.UNBOUNDED` (or any negative number) for either bound to leave it open.
    """
    return Many(min_count, max_count, convert_parameter(parser))

def optional(parser: ParserParameter) -> Many:
    """Matches `parser` zero or one time."""
    return Many(0, 1, convert_parameter(parser))

def repeat_while(predicate: RepeatPredicate, parser: ParserParameter) -> Repeat:
    """Repeats `parser` while `predicate(value, matched, index)` holds after each run."""
    return Repeat(predicate, convert_parameter(parser), until=False)

def repeat_until(predicate: RepeatPredicate, parser: ParserParameter) -> Repeat:
    """Repeats `parser` until `predicate(value, matched, index)` holds after a run."""
    return Repeat(predicate, convert_parameter(parser), until=True)

def absorb(combine: AbsorbFunction, parser: ParserParameter, initial: Any = None) -> Absorb:
    """
    Runs `parser` with its own built value, starting from `initial`.

    On success the value becomes `combine(value, sub_value, sub_matched)`.
    """
    return Absorb(combine, convert_parameter(parser), initial)

def morph(transform: Callable[[Sequence[Any]], Sequence[Any]], parser: ParserParameter) -> Morph:
    return Morph(transform, convert_parameter(parser))

def force(parser: ParserParameter) -> Force:
    """
    Runs `parser`, then moves its result onto a fresh buffer holding only the unconsumed input.

    Positions are counted from the start of that buffer afterwards, so the `pos` and the
    line and column of a signal raised later refer to the text after the snapshot.
    """
    return Force(convert_parameter(parser))

snapshot = force

def no_consume(parser: ParserParameter) -> NoConsume:
    return NoConsume(convert_parameter(parser))

def no_build(parser: ParserParameter) -> NoBuild:
    return NoBuild(convert_parameter(parser))

def make_reluctant(parser: ParserParameter) -> Reluctant:
    """Inside a chain, matches as little as possible while still letting the rest of the chain succeed."""
    return Reluctant(convert_parameter(parser))

def make_greedy(parser: ParserParameter) -> Greedy:
    """Inside a chain, matches as much as possible while still letting the rest of the chain succeed."""
    return Greedy(convert_parameter(parser))

def make_oblivious(parser: ParserParameter) -> Oblivious:
    """
    Lets `parser` run after the chain it's in has failed.

    It's given the last successful state of the chain, and its result replaces the chain's.
    """
    return Oblivious(convert_parameter(parser))


# entry points

def run(parser: Parser, state: ParseState) -> ParseState:
    """
    Runs `parser` on `state`.

    Signals raised by the parser propagate to the caller.
    """
    logger.debug("Running %r on %d item(s)", parser, state.remaining)
    result = parser(state)
    logger.debug("%r %s with %d item(s) left", parser, "succeeded" if result.ok else "failed", result.remaining)
    return result

def parse(parser: ParserParameter, src: Sequence[Any], value: Any = None) -> ParseState:
    """Same as `run(parser, new_state(src, value))`."""
    return run(convert_parameter(parser), new_state(src, value))
