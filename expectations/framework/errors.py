"""
Error taxonomy for the expectation framework.
"""

from typing import Any


class ExpectationFailure(AssertionError):
    """
    A matcher did not accept its subject.

    Subclasses AssertionError so test runners report it as a failure
    rather than an error.
    """

    def __init__(
        self,
        diagnostic: str,
        description: str = "",
        negated: bool = False,
        actual: Any = None,
    ):
        super().__init__(diagnostic)
        self.diagnostic = diagnostic
        self.description = description
        self.negated = negated
        self.actual = actual


class ConstructionError(Exception):
    """Invalid matcher configuration, detected before any evaluation."""
    pass


class CaptureConflictError(ConstructionError):
    """An output capture was requested while another one is active."""
    pass


class CatalogueError(Exception):
    """Error during expectation catalogue validation."""
    pass
