"""
Catalogue Evaluator

Evaluates declared expectations and records their outcomes.
"""

from dataclasses import dataclass
from typing import List

from ..driver import evaluate
from ..matchers.composite import NotMatcher
from .schema import Catalogue, ExpectationSpec


@dataclass
class ExpectationResult:
    """Result of evaluating a single declared expectation."""
    description: str
    passed: bool
    message: str

    def __str__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"[{status}] {self.description}: {self.message}"


def evaluate_expectation(spec: ExpectationSpec) -> ExpectationResult:
    """
    Evaluate a single declared expectation.

    Args:
        spec: The expectation to evaluate

    Returns:
        ExpectationResult with pass/fail status and the matcher diagnostic
    """
    matcher = NotMatcher(spec.matcher) if spec.negate else spec.matcher
    result = evaluate(spec.subject, matcher)
    return ExpectationResult(
        description=spec.description or f"{result.actual_description} {matcher.describe()}",
        passed=result.passed,
        message=result.diagnostic,
    )


def evaluate_catalogue(catalogue: Catalogue) -> List[ExpectationResult]:
    """Evaluate every expectation in a catalogue, in declaration order."""
    return [evaluate_expectation(spec) for spec in catalogue.expectations]


def catalogue_passed(results: List[ExpectationResult]) -> bool:
    """Check if all expectations passed."""
    return all(r.passed for r in results)
