"""
Signals: typed exceptions that unwind past ordinary soft failure.

Soft failure (`ok = False`) is for everyday grammar mismatches, so that `|` can try the
other branch. Signals are for escaping the grammar, e.g. validation errors:

```
class BadNumber(ParseSignal):
    pass

number = many(1, const.UNBOUNDED, single_char(str.isdigit)) | throw_anyway(BadNumber, "Expected a number.")
lenient_number = catch(BadNumber, number, on_exception=succeed)
```
"""

from __future__ import annotations
from typing import Any, Literal, Self, Final

import logging

from chainparse.main import Parser, ParserParameter, convert_parameter
from chainparse.state import ParseState


logger = logging.getLogger(__name__)


class ParseSignal(Exception):
    """
    Base class of the signal kinds.

    Subclass it to define a kind. When raised by a throw step, the signal carries the state
    it was raised on and a note with the position.
    """

    def __init__(self, msg: str | None = None, *, state: ParseState | None = None) -> None:
        """
        `msg`: The reason for the signal.
        `state`: The state the signal was raised on.
        """
        if msg is None:
            super().__init__()
        else:
            super().__init__(msg)
        self.msg: str | None = msg
        self.state: ParseState | None = state
        if state is not None:
            self.append_pos_note(state)

    @property
    def pos(self) -> int | None:
        return None if self.state is None else self.state.pos

    def append_pos_note(self, state: ParseState, msg: str | None = None) -> Self:
        note: list[str] = [] if msg is None else [msg]

        if not isinstance(state.src, str):
            note.append(f"At position {state.pos}")
            self.add_note("\n".join(note))
            return self

        line, column = state.line_col()
        note.append(f"At position {state.pos} (line {line}, column {column})")

        lines = state.src.splitlines()
        if len(lines) > line-1:
            line_str = lines[line-1]
            if len(line_str) >= column:
                if column <= 20:
                    note.append(f"{line_str[:40]}\n{' '*(column-1)}^")
                else:
                    note.append(f"{line_str[(column-20):(column+20)]}\n{' '*20}^")
        self.add_note("\n".join(note))
        return self


SignalKinds = type[ParseSignal] | tuple[type[ParseSignal], ...]

_Trigger = Literal["success", "failure", "always"]


class Throw(Parser):
    """
    Raises a signal depending on the `ok` flag of the incoming state.

    Runs even when the chain it's in has failed. When it doesn't raise, it passes the state
    through without contributing any matched text.
    """

    inspects_failure = True
    inspects_only = True

    def __init__(self, kind: type[ParseSignal], msg: str | None, trigger: _Trigger) -> None:
        _check_kinds(kind)
        super().__init__(f"throw_on_{trigger}({kind.__name__})" if trigger != "always" else f"throw_anyway({kind.__name__})")
        self.kind: Final[type[ParseSignal]] = kind
        self.msg: Final[str | None] = msg
        self.trigger: Final[_Trigger] = trigger

    def _run(self, state: ParseState) -> ParseState:
        if self.trigger == "always" or state.ok == (self.trigger == "success"):
            raise self.kind(self.msg, state=state)
        if state.ok:
            return state.replace(matched=state.empty)
        return state


class Catch(Parser):
    """
    Intercepts signals of the given kinds raised while running `main`.

    The handler runs on the state from before `main`, so everything `main` consumed is
    given back. Without a handler, reports soft failure on that state.
    """

    def __init__(self, kind: SignalKinds, main: Parser, on_exception: Parser | None) -> None:
        _check_kinds(kind)
        super().__init__(f"catch({main.name})")
        self.kind: Final[SignalKinds] = kind
        self.main: Final[Parser] = main
        self.on_exception: Final[Parser | None] = on_exception

    def _run(self, state: ParseState) -> ParseState:
        try:
            return self.main(state)
        except self.kind as signal:
            logger.debug("Intercepted %s raised within %r at position %d", type(signal).__name__, self.main, state.pos)
            if self.on_exception is None:
                return state.failed()
            return self.on_exception(state)


def _check_kinds(kind: Any) -> None:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    if not kinds:
        raise ValueError("At least one signal kind required.")
    for k in kinds:
        if not (isinstance(k, type) and issubclass(k, ParseSignal)):
            raise TypeError(f"Signal kinds must be subclasses of ParseSignal, got {k!r}.")


def throw_on_success(kind: type[ParseSignal], msg: str | None = None) -> Throw:
    """Raises `kind` if the chain has succeeded so far."""
    return Throw(kind, msg, "success")

def throw_on_failure(kind: type[ParseSignal], msg: str | None = None) -> Throw:
    """Raises `kind` if the chain has failed so far."""
    return Throw(kind, msg, "failure")

def throw_anyway(kind: type[ParseSignal], msg: str | None = None) -> Throw:
    """Raises `kind` unconditionally."""
    return Throw(kind, msg, "always")

def catch(kind: SignalKinds, main: ParserParameter, on_exception: ParserParameter | None = None) -> Catch:
    """
    Runs `main`, intercepting signals of `kind` (a class or a tuple of classes).

    Other signals propagate.
    """
    return Catch(kind, convert_parameter(main), None if on_exception is None else convert_parameter(on_exception))
