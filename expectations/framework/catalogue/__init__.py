"""
Expectation catalogues.

Declares value expectations in YAML and evaluates them through the
matcher library.
"""

from .schema import Catalogue, ExpectationSpec
from .parser import parse_catalogue, load_catalogue
from .registry import MATCHER_BUILDERS, build_matcher, register_matcher_builder
from .evaluator import (
    ExpectationResult,
    catalogue_passed,
    evaluate_catalogue,
    evaluate_expectation,
)

__all__ = [
    # Schema
    "Catalogue",
    "ExpectationSpec",
    # Parser
    "parse_catalogue",
    "load_catalogue",
    # Registry
    "MATCHER_BUILDERS",
    "build_matcher",
    "register_matcher_builder",
    # Evaluator
    "ExpectationResult",
    "catalogue_passed",
    "evaluate_catalogue",
    "evaluate_expectation",
]
