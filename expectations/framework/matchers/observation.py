"""
Observation matchers.

These wrap a deferred action instead of a value and run it exactly once
per evaluation:

- ChangeMatcher reads state, runs the action, reads state again
- ErrorMatcher runs the action and inspects what it raised
- OutputMatcher runs the action with a standard stream captured
"""

import copy
import types
from collections.abc import MutableMapping, MutableSequence, MutableSet
from dataclasses import dataclass, replace
from functools import partial
from typing import Any, Callable, Optional

from ..capture import STDERR, STDOUT, OutputSink
from ..errors import ConstructionError
from ..subjects import DeferredAction, describe_subject
from .base import (
    ExpectedSlot,
    MatchResult,
    Matcher,
    PendingMatcher,
    describe_expected,
    expected,
    loose_equal,
    match_value,
)


@dataclass(frozen=True)
class ObservationMatcher(Matcher):
    """Base for matchers whose subject is a deferred action."""

    accepts_values = False
    accepts_actions = True

    def _observed(self, passed: bool, action: DeferredAction, detail: str = "") -> MatchResult:
        actual_description = describe_subject(action, self.settings)
        diagnostic = f"expected {actual_description} {self.describe()}"
        if detail:
            diagnostic = f"{diagnostic}\n  {detail}"
        return MatchResult(passed, actual_description, diagnostic)


# =============================================================================
# Change
# =============================================================================

def _read_attribute(obj: Any, name: str) -> Any:
    value = getattr(obj, name)
    # change(items, "__len__") reads the method's result
    if isinstance(value, (types.MethodType, types.BuiltinMethodType, types.MethodWrapperType)):
        return value()
    return value


def _snapshot(value: Any) -> Any:
    """Copy mutable containers so an in-place change is still detected."""
    if isinstance(value, (MutableSequence, MutableMapping, MutableSet)):
        return copy.copy(value)
    return value


@dataclass(frozen=True)
class ChangeMatcher(ObservationMatcher):
    """
    Observe a state reader before and after the action.

    Without modifiers the state must change. from_/to check the before and
    after states (to alone checks only the after state). by, by_at_least
    and by_at_most bound the numeric delta after - before.
    """
    reader: Callable[[], Any]
    label: str
    from_slot: Optional[ExpectedSlot] = None
    to_slot: Optional[ExpectedSlot] = None
    by_delta: Any = None
    by_at_least_delta: Any = None
    by_at_most_delta: Any = None

    def from_(self, value: Any) -> "ChangeMatcher":
        return replace(self, from_slot=expected(value))

    def to(self, value: Any) -> "ChangeMatcher":
        return replace(self, to_slot=expected(value))

    def by(self, delta: Any) -> "ChangeMatcher":
        return replace(self, by_delta=delta)

    def by_at_least(self, delta: Any) -> "ChangeMatcher":
        return replace(self, by_at_least_delta=delta)

    def by_at_most(self, delta: Any) -> "ChangeMatcher":
        return replace(self, by_at_most_delta=delta)

    def observe(self, action: DeferredAction) -> MatchResult:
        before = _snapshot(self.reader())
        action.run()
        after = _snapshot(self.reader())

        failures = []
        if self.from_slot is not None and not match_value(self.from_slot, before):
            failures.append(f"expected before state {describe_expected(self.from_slot, self.settings)}")
        if self.to_slot is not None and not match_value(self.to_slot, after):
            failures.append(f"expected after state {describe_expected(self.to_slot, self.settings)}")

        bounds = [
            (self.by_delta, lambda d, n: d == n, "exactly"),
            (self.by_at_least_delta, lambda d, n: d >= n, "at least"),
            (self.by_at_most_delta, lambda d, n: d <= n, "at most"),
        ]
        if any(bound is not None for bound, _, _ in bounds):
            try:
                delta = after - before
            except TypeError as e:
                failures.append(f"cannot compute a delta: {e}")
            else:
                for bound, check, wording in bounds:
                    if bound is None:
                        continue
                    try:
                        within = bool(check(delta, bound))
                    except TypeError as e:
                        failures.append(f"cannot compare the delta: {e}")
                        continue
                    if not within:
                        failures.append(
                            f"expected a change of {wording} {self.describe_value(bound)}, "
                            f"got {self.describe_value(delta)}"
                        )

        if not self._has_final_constraint() and loose_equal(before, after):
            failures.append("did not change")

        detail = f"before: {self.describe_value(before)}, after: {self.describe_value(after)}"
        if failures:
            detail = "; ".join(failures) + f" ({detail})"
        return self._observed(not failures, action, detail)

    def _has_final_constraint(self) -> bool:
        return any(
            value is not None
            for value in (self.to_slot, self.by_delta, self.by_at_least_delta, self.by_at_most_delta)
        )

    def phrase(self) -> str:
        text = f"change {self.label}"
        if self.from_slot is not None:
            text += f" from {describe_expected(self.from_slot, self.settings)}"
        if self.to_slot is not None:
            text += f" to {describe_expected(self.to_slot, self.settings)}"
        if self.by_delta is not None:
            text += f" by {self.describe_value(self.by_delta)}"
        if self.by_at_least_delta is not None:
            text += f" by at least {self.describe_value(self.by_at_least_delta)}"
        if self.by_at_most_delta is not None:
            text += f" by at most {self.describe_value(self.by_at_most_delta)}"
        return text


def change(target: Any, attribute: Optional[str] = None) -> ChangeMatcher:
    """
    change(accessor) observes a zero-argument reader; change(obj, "name")
    observes an attribute (a method is called).
    """
    if attribute is not None:
        if not isinstance(attribute, str):
            raise ConstructionError(f"Attribute name must be a string, got {attribute!r}")
        label = f"{type(target).__name__}.{attribute}"
        return ChangeMatcher(partial(_read_attribute, target, attribute), label)
    if not callable(target):
        raise ConstructionError(
            f"change() needs a zero-argument reader or an object and attribute name, got {target!r}"
        )
    return ChangeMatcher(target, f"result of {getattr(target, '__name__', 'reader')}")


# =============================================================================
# Errors
# =============================================================================

@dataclass(frozen=True)
class ErrorMatcher(ObservationMatcher):
    """
    The action must raise an error of expected_type (any Exception when
    None) whose message satisfies message_slot. Errors of another type
    propagate.
    """
    expected_type: Optional[type] = None
    message_slot: Optional[ExpectedSlot] = None

    def __post_init__(self):
        if self.expected_type is not None and not (
            isinstance(self.expected_type, type) and issubclass(self.expected_type, BaseException)
        ):
            raise ConstructionError(f"Expected an exception type, got {self.expected_type!r}")

    def with_message(self, message: Any) -> "ErrorMatcher":
        return replace(self, message_slot=expected(message))

    def observe(self, action: DeferredAction) -> MatchResult:
        try:
            action.run()
        except BaseException as error:
            if not isinstance(error, self.expected_type or Exception):
                raise
            raised = f"raised {type(error).__name__}: {error}"
            if self.message_slot is not None and not match_value(self.message_slot, str(error)):
                return self._observed(False, action, f"{raised} (message did not match)")
            return self._observed(True, action, raised)
        return self._observed(False, action, "nothing was raised")

    def negation_error(self) -> Optional[str]:
        if self.expected_type is not None or self.message_slot is not None:
            return (
                f"'not_to {self.phrase()}' is not supported: a negated raise_error "
                f"must not specify an error type or message"
            )
        return None

    def phrase(self) -> str:
        text = f"raise {self.expected_type.__name__}" if self.expected_type else "raise an error"
        if self.message_slot is not None:
            text += f" with message {describe_expected(self.message_slot, self.settings)}"
        return text


def raise_error(expected_type: Any = None, message: Any = None) -> ErrorMatcher:
    """
    raise_error(), raise_error(KeyError), raise_error(KeyError, "msg") or
    raise_error("msg"); the message may be a literal, pattern or matcher.
    """
    if isinstance(expected_type, BaseException):
        raise ConstructionError(
            f"raise_error() needs an exception type, not an instance: "
            f"use raise_error({type(expected_type).__name__}, {str(expected_type)!r})"
        )
    if expected_type is not None and not isinstance(expected_type, type):
        if message is not None:
            raise ConstructionError(f"Expected an exception type, got {expected_type!r}")
        expected_type, message = None, expected_type
    matcher = ErrorMatcher(expected_type)
    if message is not None:
        matcher = matcher.with_message(message)
    return matcher


raise_exception = raise_error


# =============================================================================
# Output
# =============================================================================

@dataclass(frozen=True)
class OutputMatcher(ObservationMatcher):
    """Capture a stream while the action runs and match what was written."""
    sink: OutputSink
    content_slot: Optional[ExpectedSlot] = None

    def observe(self, action: DeferredAction) -> MatchResult:
        with self.sink.capture() as buffer:
            action.run()
        captured = buffer.getvalue()

        if self.content_slot is None:
            passed = captured != ""
        else:
            passed = match_value(self.content_slot, captured)
        return self._observed(passed, action, f"captured {self.describe_value(captured)}")

    def phrase(self) -> str:
        if self.content_slot is None:
            return f"output to {self.sink.stream}"
        return f"output {describe_expected(self.content_slot, self.settings)} to {self.sink.stream}"


@dataclass(frozen=True)
class OutputBuilder(PendingMatcher):
    """output(...) before its stream is chosen."""
    content_slot: Optional[ExpectedSlot] = None

    missing = ".to_stdout() or .to_stderr()"

    def to_stdout(self) -> OutputMatcher:
        return OutputMatcher(STDOUT, self.content_slot)

    def to_stderr(self) -> OutputMatcher:
        return OutputMatcher(STDERR, self.content_slot)

    def to_sink(self, sink: OutputSink) -> OutputMatcher:
        return OutputMatcher(sink, self.content_slot)

    def phrase(self) -> str:
        return "output"


def output(content: Any = None) -> OutputBuilder:
    """Output matcher; content may be a literal, pattern or matcher."""
    return OutputBuilder(None if content is None else expected(content))
