"""
Matcher combinators: negation, conjunction, disjunction and the
all-elements quantifier.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import ConstructionError
from ..subjects import Subject, Value, as_subject
from .base import MatchResult, Matcher, require_matcher


@dataclass(frozen=True)
class NotMatcher(Matcher):
    """
    Inverts another matcher.

    The inner matcher is evaluated exactly once, so a deferred action
    under a negated observation matcher still runs once.
    """
    inner: Matcher

    def __post_init__(self):
        require_matcher(self.inner)
        reason = self.inner.negation_error()
        if reason:
            raise ConstructionError(reason)

    @property
    def accepts_values(self) -> bool:
        return self.inner.accepts_values

    @property
    def accepts_actions(self) -> bool:
        return self.inner.accepts_actions

    def evaluate(self, subject: Subject) -> MatchResult:
        subject = as_subject(subject)
        self.check_subject(subject)
        result = self.inner.evaluate(subject)
        diagnostic = f"expected {result.actual_description} {self.describe()}"
        # Keep the inner detail lines, e.g. which error was raised
        detail = result.diagnostic.partition("\n")[2]
        if detail:
            diagnostic = f"{diagnostic}\n{detail}"
        return MatchResult(not result.passed, result.actual_description, diagnostic)

    def phrase(self) -> str:
        return f"not {self.inner.phrase()}"

    def describe(self) -> str:
        return self.inner.describe_negated()

    def describe_negated(self) -> str:
        return self.inner.describe()

    def negation_error(self) -> Optional[str]:
        return None

    def __invert__(self) -> Matcher:
        return self.inner


def _require_value_matcher(matcher: Any, combinator: str) -> Matcher:
    matcher = require_matcher(matcher)
    if not matcher.accepts_values:
        raise ConstructionError(
            f"'{matcher.phrase()}' observes an action and cannot be combined with '{combinator}'"
        )
    return matcher


@dataclass(frozen=True)
class AndMatcher(Matcher):
    """Both operands must pass; the diagnostic names each failed branch."""
    left: Matcher
    right: Matcher

    def __post_init__(self):
        _require_value_matcher(self.left, "and")
        _require_value_matcher(self.right, "and")

    def match(self, actual: Any) -> MatchResult:
        left = self.left.evaluate(Value(actual))
        right = self.right.evaluate(Value(actual))
        failures = [
            f"{side} failed: {result.diagnostic}"
            for side, result in (("left", left), ("right", right))
            if not result.passed
        ]
        return self._result(not failures, actual, "\n  ".join(failures))

    def phrase(self) -> str:
        return f"{self.left.phrase()} and {self.right.phrase()}"


@dataclass(frozen=True)
class OrMatcher(Matcher):
    """Either operand must pass; on failure both branches are reported."""
    left: Matcher
    right: Matcher

    def __post_init__(self):
        _require_value_matcher(self.left, "or")
        _require_value_matcher(self.right, "or")

    def match(self, actual: Any) -> MatchResult:
        left = self.left.evaluate(Value(actual))
        right = self.right.evaluate(Value(actual))
        passed = left.passed or right.passed
        detail = ""
        if not passed:
            detail = f"left failed: {left.diagnostic}\n  right failed: {right.diagnostic}"
        return self._result(passed, actual, detail)

    def phrase(self) -> str:
        return f"{self.left.phrase()} or {self.right.phrase()}"


@dataclass(frozen=True)
class AllMatcher(Matcher):
    """Every element of an ordered sequence must satisfy the inner matcher."""
    inner: Matcher

    def __post_init__(self):
        _require_value_matcher(self.inner, "all")

    def match(self, actual: Any) -> MatchResult:
        if isinstance(actual, (str, bytes)) or not isinstance(actual, Sequence):
            return self._result(False, actual, "subject is not an ordered sequence")

        for index, element in enumerate(actual):
            result = self.inner.evaluate(Value(element))
            if not result.passed:
                return self._result(
                    False, actual,
                    f"element at index {index} failed: {result.diagnostic}",
                )
        return self._result(True, actual)

    def phrase(self) -> str:
        return f"all {self.inner.phrase()}"


def not_(matcher: Matcher) -> NotMatcher:
    return NotMatcher(matcher)


def all_(matcher: Matcher) -> AllMatcher:
    """Quantifier over the elements of a sequence."""
    return AllMatcher(matcher)
