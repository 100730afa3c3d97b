"""Tests for the chain algebra: sequence, discard, build-attach and alternative."""

from __future__ import annotations

import pytest

import chainparse as cp

# ============================================================================
# SEQUENCE
# ============================================================================


class TestSequence:
    """Test `p * q`."""

    def test_concatenates_matched(self) -> None:
        """Matched text is left's followed by right's."""
        result = cp.parse(cp.literal("foo") * cp.literal("bar"), "foobarbaz")

        assert result.ok
        assert result.matched == "foobar"
        assert result.unconsumed == "baz"

    def test_strings_are_literals(self) -> None:
        """Strings on either side are converted to literals."""
        assert cp.parse("foo" * cp.literal("bar"), "foobar").matched == "foobar"
        assert cp.parse(cp.literal("foo") * "bar", "foobar").matched == "foobar"

    def test_left_failure_skips_right(self) -> None:
        """When the left side fails, the right side is never evaluated."""
        calls = []
        spy = cp.test(lambda value, matched: calls.append(matched) or True)

        result = cp.parse(cp.literal("x") * spy, "abc")

        assert not result.ok
        assert calls == []

    def test_left_failure_returned_unchanged(self) -> None:
        """The composite's failure is the left side's failure."""
        state = cp.new_state("abc", 3)

        assert cp.run(cp.literal("x") * "a", state) == cp.run(cp.literal("x"), state)

    def test_right_failure(self) -> None:
        """When the right side fails, its failed state is returned."""
        result = cp.parse(cp.literal("foo") * cp.literal("x"), "foobar")

        assert not result.ok
        assert result.matched == ""
        assert result.unconsumed == "bar"

    def test_value_threads_through(self) -> None:
        """Each step sees the value the previous one built."""
        parser = cp.build(lambda value, matched: value + 1) * cp.build(lambda value, matched: value * 10)

        assert cp.parse(parser, "", 1).value == 20

    def test_nested_right_chain(self) -> None:
        """A parenthesized chain keeps its own matched text rules."""
        parser = cp.literal("a") * (cp.literal("b") / cp.literal("c"))

        assert cp.parse(parser, "abc").matched == "ac"

    def test_chains_are_flattened(self) -> None:
        """Chaining from the left extends a single chain."""
        parser = cp.literal("a") * "b" / "c" % (lambda value, matched: value)

        assert isinstance(parser, cp.Chain)
        assert [link for link, _ in parser.links] == [cp.Link.SEQUENCE, cp.Link.SEQUENCE, cp.Link.DISCARD, cp.Link.BUILD]

    def test_chains_are_immutable(self) -> None:
        """Extending a chain doesn't change it."""
        base = cp.literal("a") * "b"
        longer = base * "c"

        assert cp.parse(base, "abc").matched == "ab"
        assert cp.parse(longer, "abc").matched == "abc"

    def test_rejects_non_parsers(self) -> None:
        """Only parsers and strings can be chained."""
        with pytest.raises(TypeError):
            cp.literal("a") * 3  # type: ignore[operator]

    def test_inspecting_steps_add_no_text(self) -> None:
        """A test inside a chain sees the chain's text and adds none."""
        parser = cp.literal("ab") * cp.test(lambda value, matched: matched == "ab") * "c"
        result = cp.parse(parser, "abcd")

        assert result.ok
        assert result.matched == "abc"


# ============================================================================
# SEQUENCE-DISCARD-LEFT
# ============================================================================


class TestDiscard:
    """Test `p / q`."""

    def test_keeps_right_matched(self) -> None:
        """Only the right side's matched text is kept."""
        result = cp.parse(cp.literal("foo") / cp.literal("bar"), "foobarbaz")

        assert result.ok
        assert result.matched == "bar"
        assert result.unconsumed == "baz"

    def test_discard_then_sequence(self) -> None:
        """Text after a discard is appended again."""
        result = cp.parse("(" / cp.literal("x") * ")", "(x)")

        assert result.matched == "x)"

    def test_left_failure_skips_right(self) -> None:
        """Discard short-circuits just like sequence."""
        calls = []
        spy = cp.test(lambda value, matched: calls.append(matched) or True)

        assert not cp.parse(cp.literal("x") / spy, "abc").ok
        assert calls == []

    def test_inspecting_steps_keep_matched(self) -> None:
        """Steps that only inspect don't discard the text before them."""
        checked = cp.parse(cp.literal("ab") / cp.test(lambda value, matched: matched == "ab"), "abc")
        built = cp.parse(cp.literal("ab") / cp.build(lambda value, matched: 1) / cp.succeed, "abc")

        assert checked.ok
        assert checked.matched == "ab"
        assert built.value == 1
        assert built.matched == "ab"
        assert built.unconsumed == "c"


# ============================================================================
# BUILD-ATTACH
# ============================================================================


class TestBuildAttach:
    """Test `p % f`."""

    def test_builds_from_matched(self) -> None:
        """The function receives the value and the matched text."""
        result = cp.parse(cp.literal("12") % (lambda value, matched: int(matched)), "123")

        assert result.value == 12
        assert result.matched == "12"

    def test_sees_chain_text(self) -> None:
        """The function receives the whole chain's matched text so far."""
        result = cp.parse(cp.literal("a") * "b" % (lambda value, matched: matched.upper()), "abc")

        assert result.value == "AB"
        assert result.matched == "ab"
        assert result.ok

    def test_skipped_on_failure(self) -> None:
        """The function isn't called when the chain has failed."""
        calls = []

        def record(value: int, matched: str) -> int:
            calls.append(matched)
            return 0

        result = cp.parse(cp.literal("x") % record, "abc", 5)

        assert not result.ok
        assert result.value == 5
        assert calls == []

    def test_requires_callable(self) -> None:
        """Only callables can be attached."""
        with pytest.raises(TypeError):
            cp.literal("a") % 3  # type: ignore[operator]

    def test_folds_into_next_step(self) -> None:
        """The built value is passed on to later links."""
        parser = cp.literal("1") % (lambda value, matched: int(matched)) * cp.test(lambda value, matched: value == 1)

        assert cp.parse(parser, "1").ok


# ============================================================================
# ALTERNATIVE
# ============================================================================


class TestAlternative:
    """Test `p | q`."""

    def test_prefers_left(self) -> None:
        """The left side wins when it succeeds."""
        result = cp.parse(cp.literal("ab") | cp.literal("a"), "abc")

        assert result.matched == "ab"

    def test_right_on_failure(self) -> None:
        """The right side runs when the left side fails."""
        result = cp.parse(cp.literal("x") | "ab", "abc")

        assert result.ok
        assert result.matched == "ab"
        assert result.unconsumed == "c"

    def test_right_sees_original_state(self) -> None:
        """The right side sees the original input, not the left's partial progress."""
        seen = []

        @cp.step
        def spy(state: cp.ParseState) -> cp.ParseState:
            seen.append(state.unconsumed)
            return state.replace(matched=state.empty)

        cp.parse((cp.literal("ab") * "x") | spy, "abcd")

        assert seen == ["abcd"]

    def test_both_fail(self) -> None:
        """The right side's failure is returned."""
        result = cp.parse(cp.literal("x") | "y", "abc")

        assert not result.ok
        assert result.unconsumed == "abc"

    def test_options_are_flattened(self) -> None:
        """Nested alternatives are merged."""
        parser = cp.literal("a") | "b" | "c"

        assert isinstance(parser, cp.Alternative)
        assert len(parser.options) == 3
        assert cp.parse(parser, "c").ok

    def test_string_on_the_left(self) -> None:
        """A string on the left of `|` is converted to a literal."""
        assert cp.parse("a" | cp.literal("b"), "b").ok

    def test_needs_two_options(self) -> None:
        """An alternative of a single parser is rejected."""
        with pytest.raises(ValueError):
            cp.Alternative((cp.literal("a"),))

    def test_inside_chain(self) -> None:
        """Alternatives compose with chains."""
        parser = cp.literal("<") * (cp.literal("a") | "b") * ">"

        assert cp.parse(parser, "<b>").matched == "<b>"
        assert not cp.parse(parser, "<c>").ok
