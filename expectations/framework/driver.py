"""
Evaluation driver.

    expect(10).to(be > 9)
    expect(items).not_to(include(4))
    expect_action(lambda: 1 / 0).to(raise_error(ZeroDivisionError))

A failed expectation raises ExpectationFailure; a passing one has no
observable effect.
"""

import logging
from typing import Any, Callable, Optional

from .errors import ExpectationFailure
from .matchers.base import MatchResult, Matcher, require_matcher
from .matchers.composite import NotMatcher
from .subjects import DeferredAction, Subject, Value, as_subject

logger = logging.getLogger(__name__)


def evaluate(subject: Any, matcher: Matcher) -> MatchResult:
    """
    Evaluate a matcher against a subject and return the result.

    Intended for runners that record outcomes instead of raising. Raises
    ConstructionError for an incomplete matcher or a subject kind the
    matcher does not accept.
    """
    matcher = require_matcher(matcher)
    return matcher.evaluate(as_subject(subject))


class Expectation:
    """Handle returned by expect(); drives one subject through matchers."""

    def __init__(self, subject: Subject):
        self.subject = subject

    def to(self, matcher: Matcher, message: Optional[str] = None) -> None:
        """Raise ExpectationFailure unless the matcher accepts the subject."""
        matcher = require_matcher(matcher)
        self._check(matcher, negated=False, message=message)

    def not_to(self, matcher: Matcher, message: Optional[str] = None) -> None:
        """Raise ExpectationFailure if the matcher accepts the subject."""
        negated = NotMatcher(require_matcher(matcher))
        self._check(negated, negated=True, message=message)

    to_not = not_to

    def _check(self, matcher: Matcher, negated: bool, message: Optional[str]) -> None:
        result = matcher.evaluate(self.subject)
        logger.debug(
            "expect %s %s: %s",
            result.actual_description, matcher.describe(), "pass" if result.passed else "fail",
        )
        if result.passed:
            return

        if isinstance(self.subject, Value):
            actual = self.subject.value
        else:
            actual = self.subject
        raise ExpectationFailure(
            message or result.diagnostic,
            description=matcher.describe(),
            negated=negated,
            actual=actual,
        )


def expect(subject: Any) -> Expectation:
    """
    Start an expectation.

    A DeferredAction subject is observed (its effects, not its return
    value); anything else is matched as a value.
    """
    return Expectation(as_subject(subject))


def expect_action(fn: Callable[[], Any]) -> Expectation:
    """Start an expectation about the effects of running fn."""
    return Expectation(DeferredAction(fn))
