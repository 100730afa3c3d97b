"""
The parse state that's threaded through every parser.
"""

from __future__ import annotations
from typing import Any, Generic, TypeVar, Final, Sequence


_ValueT = TypeVar("_ValueT")

_KEEP: Final[Any] = object()


class ParseState(Generic[_ValueT]):
    """
    An immutable snapshot of a parse in progress.

    The input is held as a buffer (`src`) plus two offsets. Every state derived from
    the same parse refers to the same buffer; only `detach()` copies it.

    ```
    state = new_state("foobar", 0)
    state.unconsumed    # "foobar"
    state.matched       # ""
    state.value         # 0
    state.ok            # True
    ```
    """

    __slots__ = ("src", "pos", "end", "matched", "value", "ok", "last_good")

    def __init__(
        self,
        src: Sequence[Any],
        value: _ValueT,
        *,
        pos: int = 0,
        end: int | None = None,
        matched: Sequence[Any] | None = None,
        ok: bool = True,
        last_good: ParseState[Any] | None = None,
    ) -> None:
        self.src: Final[Sequence[Any]] = src
        """The input buffer."""
        self.pos: Final[int] = pos
        """Offset of the first unconsumed item."""
        self.end: Final[int] = len(src) if end is None else end
        """Offset after the last item the parser may look at."""
        self.matched: Final[Sequence[Any]] = src[0:0] if matched is None else matched
        """The text attributed to the current chain link."""
        self.value: Final[_ValueT] = value
        """The built value."""
        self.ok: Final[bool] = ok
        """Soft success flag."""
        self.last_good: Final[ParseState[Any] | None] = last_good
        """The last successful snapshot of the chain. Only failed states carry one."""

    @property
    def unconsumed(self) -> Sequence[Any]:
        return self.src[self.pos:self.end]

    @property
    def remaining(self) -> int:
        """How many items are left to parse."""
        return self.end - self.pos

    @property
    def empty(self) -> Sequence[Any]:
        """An empty sequence of the input's type."""
        return self.src[0:0]

    def at_end(self) -> bool:
        """Whether there's nothing left to parse."""
        return self.pos >= self.end

    def has_chars(self, amount: int) -> bool:
        """Whether there are at least that many items left."""
        return self.pos + amount <= self.end

    def peek(self, amount: int) -> Sequence[Any] | None:
        """
        Retrieves the specified amount of items without consuming.

        If there aren't enough items, returns `None`.
        """
        if not self.has_chars(amount):
            return None
        return self.src[self.pos:self.pos+amount]

    def replace(
        self,
        *,
        src: Sequence[Any] | None = None,
        pos: int | None = None,
        end: int | None = None,
        matched: Sequence[Any] | None = None,
        value: Any = _KEEP,
        ok: bool | None = None,
        last_good: Any = _KEEP,
    ) -> ParseState[Any]:
        """Creates a copy of this state with the given fields changed."""
        return ParseState(
            self.src if src is None else src,
            self.value if value is _KEEP else value,
            pos=self.pos if pos is None else pos,
            end=self.end if end is None else end,
            matched=self.matched if matched is None else matched,
            ok=self.ok if ok is None else ok,
            last_good=self.last_good if last_good is _KEEP else last_good,
        )

    def advance(self, amount: int, matched: Sequence[Any] | None = None) -> ParseState[_ValueT]:
        """
        Consumes `amount` items and succeeds.

        `matched` defaults to the consumed items.
        """
        new_pos = min(self.pos + amount, self.end)
        if matched is None:
            matched = self.src[self.pos:new_pos]
        return self.replace(pos=new_pos, matched=matched, ok=True)

    def failed(self) -> ParseState[_ValueT]:
        """Creates a failed copy of this state."""
        return self.replace(ok=False)

    def detach(self) -> ParseState[_ValueT]:
        """
        Copies the unconsumed input and the matched text onto fresh buffers.

        The returned state no longer refers to the original buffer, so it can be
        released once nothing else uses it. Positions of the returned state start over
        from 0 at the first unconsumed item.
        """
        return ParseState(
            _copy(self.src[self.pos:self.end]),
            self.value,
            matched=_copy(self.matched),
            ok=self.ok,
            last_good=None if self.last_good is None else self.last_good.detach(),
        )

    def line_col(self) -> tuple[int, int]:
        """
        The 1-based line and column of the current position.

        Only meaningful for `str` inputs.
        """
        src = self.src
        if not isinstance(src, str):
            return (1, self.pos + 1)
        line = src.count("\n", 0, self.pos) + 1
        column = self.pos - src.rfind("\n", 0, self.pos) # works even when rfind returns -1
        return (line, column)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseState):
            return NotImplemented
        return (
            self.ok == other.ok
            and self.unconsumed == other.unconsumed
            and self.matched == other.matched
            and self.value == other.value
        )

    __hash__ = None # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"<{'ok' if self.ok else 'failed'} "
            f"matched={self.matched!r} unconsumed={self.unconsumed!r} value={self.value!r}>"
        )


def _copy(items: Sequence[Any]) -> Sequence[Any]:
    if isinstance(items, str):
        return "".join(list(items))
    if isinstance(items, bytes):
        return bytes(bytearray(items))
    return items[:]


def new_state(src: Sequence[Any], value: _ValueT) -> ParseState[_ValueT]:
    """Creates the initial state of a parse over `src`, starting from the built value `value`."""
    return ParseState(src, value)
