"""
Matcher base classes.

A Matcher is an immutable predicate-with-description. Value matchers
implement match(actual); observation matchers implement observe(action).
evaluate(subject) dispatches on the subject type.

Any argument a matcher compares against is normalised into an expected
slot when the matcher is built:

    Literal(value)      compared by loose equality
    MatcherRef(matcher) evaluated against the actual value

and resolved by match_value().
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from ..errors import ConstructionError
from ..settings import MatcherSettings, get_settings
from ..subjects import DeferredAction, Subject, Value, as_subject


@dataclass(frozen=True)
class MatchResult:
    """Outcome of evaluating one matcher against one subject."""
    passed: bool
    actual_description: str
    diagnostic: str = ""

    def __bool__(self) -> bool:
        return self.passed


@dataclass(frozen=True)
class Matcher:
    """Base class for all matchers."""
    settings: MatcherSettings = field(
        default_factory=get_settings, repr=False, compare=False, kw_only=True,
    )

    # Subject kinds this matcher can evaluate
    accepts_values = True
    accepts_actions = False

    def evaluate(self, subject: Subject) -> MatchResult:
        subject = as_subject(subject)
        self.check_subject(subject)
        if isinstance(subject, DeferredAction):
            return self.observe(subject)
        return self.match(subject.value)

    def check_subject(self, subject: Subject) -> None:
        """Raise ConstructionError if this matcher cannot evaluate the subject."""
        if isinstance(subject, DeferredAction) and not self.accepts_actions:
            raise ConstructionError(
                f"Matcher '{self.phrase()}' does not accept a deferred action; "
                f"pass a value to expect()"
            )
        if isinstance(subject, Value) and not self.accepts_values:
            raise ConstructionError(
                f"Matcher '{self.phrase()}' requires a deferred action; "
                f"wrap the subject in DeferredAction or use expect_action()"
            )

    def match(self, actual: Any) -> MatchResult:
        raise NotImplementedError

    def observe(self, action: DeferredAction) -> MatchResult:
        raise NotImplementedError

    def phrase(self) -> str:
        """Verb phrase without the leading 'to', e.g. 'be > 9'."""
        raise NotImplementedError

    def describe(self) -> str:
        return f"to {self.phrase()}"

    def describe_negated(self) -> str:
        return f"not to {self.phrase()}"

    def negation_error(self) -> Optional[str]:
        """Reason this matcher cannot be negated, or None."""
        return None

    def describe_value(self, value: Any) -> str:
        return self.settings.describe_value(value)

    def _result(self, passed: bool, actual: Any, detail: str = "") -> MatchResult:
        actual_description = self.describe_value(actual)
        diagnostic = f"expected {actual_description} {self.describe()}"
        if detail:
            diagnostic = f"{diagnostic}\n  {detail}"
        return MatchResult(passed, actual_description, diagnostic)

    # Composition

    def and_(self, other: "Matcher") -> "Matcher":
        from .composite import AndMatcher
        return AndMatcher(self, other)

    def or_(self, other: "Matcher") -> "Matcher":
        from .composite import OrMatcher
        return OrMatcher(self, other)

    def __and__(self, other: "Matcher") -> "Matcher":
        return self.and_(other)

    def __or__(self, other: "Matcher") -> "Matcher":
        return self.or_(other)

    def __invert__(self) -> "Matcher":
        from .composite import NotMatcher
        return NotMatcher(self)


class PendingMatcher:
    """
    A matcher builder still missing a required modifier.

    Handing one to the driver is a ConstructionError.
    """
    missing = ""

    def phrase(self) -> str:
        raise NotImplementedError

    def incomplete_message(self) -> str:
        return f"Matcher '{self.phrase()}' is incomplete: call {self.missing}"


@dataclass(frozen=True)
class Literal:
    """An expected value compared by loose equality."""
    value: Any


@dataclass(frozen=True)
class MatcherRef:
    """An expected value that is itself a matcher."""
    matcher: Matcher


ExpectedSlot = Union[Literal, MatcherRef]


def require_matcher(value: Any) -> Matcher:
    """Return value if it is a complete matcher, else raise ConstructionError."""
    if isinstance(value, PendingMatcher):
        raise ConstructionError(value.incomplete_message())
    if not isinstance(value, Matcher):
        raise ConstructionError(f"Expected a matcher, got {value!r}")
    return value


def expected(value: Any) -> ExpectedSlot:
    """Normalise an expected argument into a slot."""
    if isinstance(value, (Literal, MatcherRef)):
        return value
    if isinstance(value, (Matcher, PendingMatcher)):
        matcher = require_matcher(value)
        if not matcher.accepts_values:
            raise ConstructionError(
                f"Matcher '{matcher.phrase()}' observes actions and cannot be used as an argument"
            )
        return MatcherRef(matcher)
    if isinstance(value, re.Pattern):
        from .builtin import PatternMatcher
        return MatcherRef(PatternMatcher(value))
    return Literal(value)


def loose_equal(expected_value: Any, actual: Any) -> bool:
    """Identity or ==; an == that raises or is not a plain truth value means unequal."""
    if expected_value is actual:
        return True
    try:
        return bool(expected_value == actual)
    except Exception:
        return False


def match_value(slot: ExpectedSlot, actual: Any) -> bool:
    """Resolve an expected slot against an actual value."""
    if isinstance(slot, MatcherRef):
        return slot.matcher.evaluate(Value(actual)).passed
    return loose_equal(slot.value, actual)


def describe_expected(slot: ExpectedSlot, settings: MatcherSettings) -> str:
    if isinstance(slot, MatcherRef):
        return f"({slot.matcher.phrase()})"
    return settings.describe_value(slot.value)
