"""
Expectation Framework

A composable matcher and observation framework driven by
expect(subject).to(matcher).
"""

from .errors import (
    CaptureConflictError,
    CatalogueError,
    ConstructionError,
    ExpectationFailure,
)
from .settings import (
    DEFAULT_SETTINGS,
    MatcherSettings,
    configure,
    get_settings,
    load_settings,
    parse_settings,
    reset_settings,
)
from .subjects import DeferredAction, Value
from .capture import OutputSink
from .driver import Expectation, evaluate, expect, expect_action
from .matchers import *  # noqa: F401,F403
from .matchers import __all__ as _matcher_names
from .catalogue import (
    Catalogue,
    ExpectationResult,
    ExpectationSpec,
    catalogue_passed,
    evaluate_catalogue,
    evaluate_expectation,
    load_catalogue,
    parse_catalogue,
    register_matcher_builder,
)

__all__ = [
    # Errors
    "CaptureConflictError",
    "CatalogueError",
    "ConstructionError",
    "ExpectationFailure",
    # Settings
    "DEFAULT_SETTINGS",
    "MatcherSettings",
    "configure",
    "get_settings",
    "load_settings",
    "parse_settings",
    "reset_settings",
    # Subjects
    "DeferredAction",
    "Value",
    # Capture
    "OutputSink",
    # Driver
    "Expectation",
    "evaluate",
    "expect",
    "expect_action",
    # Catalogues
    "Catalogue",
    "ExpectationResult",
    "ExpectationSpec",
    "catalogue_passed",
    "evaluate_catalogue",
    "evaluate_expectation",
    "load_catalogue",
    "parse_catalogue",
    "register_matcher_builder",
] + list(_matcher_names)
