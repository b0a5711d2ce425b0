"""
Expectation Catalogue Tests

Tests for:
- YAML catalogue parsing
- Matcher builder registry
- Catalogue evaluation and results
"""

import pytest

from expectations.framework.catalogue import (
    MATCHER_BUILDERS,
    ExpectationResult,
    build_matcher,
    catalogue_passed,
    evaluate_catalogue,
    evaluate_expectation,
    load_catalogue,
    parse_catalogue,
    register_matcher_builder,
)
from expectations.framework.catalogue.schema import ExpectationSpec
from expectations.framework.errors import CatalogueError
from expectations.framework.matchers import NotMatcher, contain_exactly, eq, satisfy


SAMPLE_CATALOGUE = """
name: inventory
description: Inventory invariants

expectations:
  - description: stock count is positive
    subject: 12
    matcher:
      type: be_gt
      expected: 0

  - subject: [3, 1, 2]
    matcher:
      type: contain_exactly
      items: [1, 2, 3]

  - subject: {sku: A-100, qty: 4}
    matcher:
      type: include
      entries:
        sku: A-100
        qty: {type: be_between, lo: 1, hi: 10, mode: inclusive}

  - subject: warehouse-7
    matcher:
      type: and
      matchers:
        - {type: start_with, items: [warehouse]}
        - {type: match, pattern: "-[0-9]+$"}

  - subject: [2, 4, 6]
    matcher:
      type: all
      matcher: {type: be_even}

  - subject: 17
    negate: true
    matcher:
      type: eql
      expected: 17.0
"""


# =============================================================================
# Parsing
# =============================================================================

class TestCatalogueParsing:
    def test_parse_sample(self):
        catalogue = parse_catalogue(SAMPLE_CATALOGUE)
        assert catalogue.name == "inventory"
        assert catalogue.description == "Inventory invariants"
        assert len(catalogue.expectations) == 6
        assert catalogue.expectations[0].description == "stock count is positive"
        assert catalogue.expectations[5].negate is True

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "catalogue.yaml"
        path.write_text(SAMPLE_CATALOGUE)
        assert load_catalogue(str(path)).name == "inventory"

    def test_missing_name(self):
        with pytest.raises(CatalogueError, match="Missing required field: name"):
            parse_catalogue("expectations: []")

    def test_not_a_mapping(self):
        with pytest.raises(CatalogueError, match="mapping"):
            parse_catalogue("- 1")

    def test_missing_subject(self):
        with pytest.raises(CatalogueError, match="Expectation 0: missing required field: subject"):
            parse_catalogue("""
name: broken
expectations:
  - matcher: {type: be_truthy}
""")

    def test_unknown_matcher_type(self):
        with pytest.raises(CatalogueError, match="Expectation 0: Unknown matcher type: be_great"):
            parse_catalogue("""
name: broken
expectations:
  - subject: 1
    matcher: {type: be_great}
""")


# =============================================================================
# Builder Registry
# =============================================================================

class TestBuildMatcher:
    def test_builds_equal_matcher(self):
        assert build_matcher({"type": "match_array", "items": [3, 2, 1]}) == contain_exactly(3, 2, 1)

    def test_nested_matchers(self):
        matcher = build_matcher({"type": "not", "matcher": {"type": "eq", "expected": 3}})
        assert matcher == NotMatcher(eq(3))

    def test_type_names(self):
        matcher = build_matcher({"type": "be_instance_of", "class": "str"})
        assert matcher.evaluate("text").passed
        with pytest.raises(CatalogueError, match="Unknown type"):
            build_matcher({"type": "be_kind_of", "class": "NoSuchType"})

    def test_missing_type(self):
        with pytest.raises(CatalogueError, match="needs a 'type'"):
            build_matcher({"expected": 1})

    def test_missing_parameter(self):
        with pytest.raises(CatalogueError, match="Missing required parameter: expected"):
            build_matcher({"type": "eq"})

    def test_invalid_between_mode(self):
        with pytest.raises(CatalogueError, match="Invalid be_between mode"):
            build_matcher({"type": "be_between", "lo": 1, "hi": 2, "mode": "open"})

    def test_construction_errors_are_wrapped(self):
        with pytest.raises(CatalogueError, match="Invalid 'include' matcher"):
            build_matcher({"type": "include"})

    def test_combinator_needs_two_matchers(self):
        with pytest.raises(CatalogueError, match="at least two"):
            build_matcher({"type": "or", "matchers": [{"type": "be_odd"}]})

    def test_register_custom_builder(self):
        @register_matcher_builder("be_positive")
        def build_be_positive(params):
            return satisfy(lambda v: v > 0, "be positive")

        try:
            matcher = build_matcher({"type": "be_positive"})
            assert matcher.evaluate(3).passed
            assert matcher.describe() == "to be positive"
        finally:
            del MATCHER_BUILDERS["be_positive"]


# =============================================================================
# Evaluation
# =============================================================================

class TestCatalogueEvaluation:
    def test_sample_passes(self):
        results = evaluate_catalogue(parse_catalogue(SAMPLE_CATALOGUE))
        assert len(results) == 6
        assert catalogue_passed(results), [str(r) for r in results]

    def test_failure_is_recorded_not_raised(self):
        catalogue = parse_catalogue("""
name: evens
expectations:
  - subject: [2, 3, 4]
    matcher:
      type: all
      matcher: {type: be_even}
""")
        results = evaluate_catalogue(catalogue)
        assert not catalogue_passed(results)
        assert "element at index 1 failed" in results[0].message

    def test_default_description(self):
        result = evaluate_expectation(ExpectationSpec(subject=17, matcher=eq(17.0), negate=True))
        assert result.description == "17 not to eq 17.0"
        assert not result.passed

    def test_result_str(self):
        result = ExpectationResult(description="stock", passed=True, message="ok")
        assert str(result) == "[PASS] stock: ok"
        assert str(ExpectationResult("stock", False, "bad")) == "[FAIL] stock: bad"
