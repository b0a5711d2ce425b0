"""
Evaluation Driver Tests

Tests for:
- expect(...).to / not_to / to_not
- ExpectationFailure contents
- Construction errors raised before evaluation
- expect_action and evaluate()
"""

import logging

import pytest

from expectations import (
    ConstructionError,
    DeferredAction,
    ExpectationFailure,
    be,
    be_between,
    change,
    contain_exactly,
    end_with,
    eq,
    evaluate,
    expect,
    expect_action,
    include,
    match,
    output,
    raise_error,
    start_with,
)


# =============================================================================
# Passing and Failing Expectations
# =============================================================================

class TestExpect:
    def test_passing_expectation_returns_none(self):
        assert expect(10).to(be > 9) is None
        assert expect([1, 2, 3]).not_to(include(4)) is None
        assert expect([1, 2, 3]).to_not(include(4)) is None

    def test_failure_message(self):
        """A failure carries the rendered diagnostic."""
        with pytest.raises(ExpectationFailure) as exc_info:
            expect(5).to(be > 9)
        failure = exc_info.value
        assert str(failure) == "expected 5 to be > 9"
        assert failure.description == "to be > 9"
        assert failure.negated is False
        assert failure.actual == 5

    def test_negated_failure_message(self):
        with pytest.raises(ExpectationFailure) as exc_info:
            expect(10).not_to(be > 9)
        failure = exc_info.value
        assert str(failure) == "expected 10 not to be > 9"
        assert failure.description == "not to be > 9"
        assert failure.negated is True

    def test_failure_is_an_assertion_error(self):
        """Test runners report failures, not errors."""
        with pytest.raises(AssertionError):
            expect(1).to(eq(2))

    def test_custom_message_replaces_diagnostic(self):
        with pytest.raises(ExpectationFailure, match="^bad total$"):
            expect(3).to(eq(4), "bad total")

    def test_compound_expectations(self):
        expect("food").to(start_with("f") & end_with("d"))
        expect("food").to(match("^f") | match("^g"))
        with pytest.raises(ExpectationFailure, match="right failed"):
            expect("food").to(start_with("f") & end_with("x"))

    def test_collection_expectations(self):
        expect([1, 2, 3]).to(contain_exactly(3, 2, 1))
        expect(1.5).to(be_between(1, 2).inclusive())


# =============================================================================
# Construction Errors
# =============================================================================

class TestConstructionErrors:
    def test_pending_matcher_rejected(self):
        with pytest.raises(ConstructionError, match="incomplete"):
            expect(1.5).to(be_between(1, 2))
        with pytest.raises(ConstructionError):
            expect(1).to(be)

    def test_non_matcher_rejected(self):
        with pytest.raises(ConstructionError, match="Expected a matcher"):
            expect(1).to(1)

    def test_constrained_raise_error_not_negatable(self):
        """The action is never run."""
        calls = []
        with pytest.raises(ConstructionError):
            expect_action(lambda: calls.append(1)).not_to(raise_error(ValueError))
        assert calls == []

    def test_value_subject_with_observation_matcher(self):
        with pytest.raises(ConstructionError, match="requires a deferred action"):
            expect(lambda: 1 / 0).to(raise_error())

    def test_action_subject_with_value_matcher(self):
        with pytest.raises(ConstructionError, match="does not accept a deferred action"):
            expect_action(lambda: 1).to(eq(1))


# =============================================================================
# Deferred Actions
# =============================================================================

class TestActions:
    def test_expect_action(self):
        expect_action(lambda: 1 / 0).to(raise_error(ZeroDivisionError))
        expect_action(lambda: 1 / 1).not_to(raise_error())

    def test_explicit_deferred_action(self):
        expect(DeferredAction(lambda: print("hi"))).to(output("hi\n").to_stdout())

    def test_change(self):
        state = {"count": 0}

        def bump():
            state["count"] += 1

        expect_action(bump).to(change(lambda: state["count"]).by(1))
        assert state["count"] == 1

    def test_failure_actual_is_the_action(self):
        action = DeferredAction(lambda: None)
        with pytest.raises(ExpectationFailure) as exc_info:
            expect(action).to(raise_error())
        assert exc_info.value.actual is action
        assert "nothing was raised" in str(exc_info.value)

    def test_negated_observation_runs_action_once(self):
        calls = []
        expect_action(lambda: calls.append(1)).not_to(raise_error())
        assert calls == [1]


# =============================================================================
# evaluate()
# =============================================================================

class TestEvaluate:
    def test_returns_result_without_raising(self):
        result = evaluate(5, be > 9)
        assert not result.passed
        assert result.diagnostic == "expected 5 to be > 9"
        assert evaluate(10, be > 9).passed

    def test_incomplete_matcher_rejected(self):
        with pytest.raises(ConstructionError):
            evaluate(5, be_between(1, 9))

    def test_logs_outcome(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="expectations"):
            expect(10).to(be > 9)
        assert "pass" in caplog.text
