"""
Matcher Builder Registry

Maps catalogue matcher types to functions that build matchers from their
declared parameters.
"""

import builtins
from typing import Any, Callable, Dict, List

from ..errors import CatalogueError, ConstructionError
from ..matchers import builtin as m
from ..matchers.base import Matcher
from ..matchers.composite import AllMatcher, AndMatcher, NotMatcher, OrMatcher


# Builder(params) -> Matcher
MatcherBuilder = Callable[[Dict[str, Any]], Matcher]


# Global registry of matcher builders
MATCHER_BUILDERS: Dict[str, MatcherBuilder] = {}


def register_matcher_builder(matcher_type: str):
    """
    Decorator to register a matcher builder.

    Usage:
        @register_matcher_builder("be_positive")
        def build_be_positive(params):
            return satisfy(lambda v: v > 0, "be positive")
    """
    def decorator(func: MatcherBuilder) -> MatcherBuilder:
        MATCHER_BUILDERS[matcher_type] = func
        return func
    return decorator


def build_matcher(data: Dict[str, Any]) -> Matcher:
    """Build a matcher from a mapping with a `type` key and its parameters."""
    if not isinstance(data, dict) or "type" not in data:
        raise CatalogueError(f"Matcher declaration needs a 'type': {data!r}")

    matcher_type = data["type"]
    builder = MATCHER_BUILDERS.get(matcher_type)
    if builder is None:
        raise CatalogueError(
            f"Unknown matcher type: {matcher_type}. Valid types: {sorted(MATCHER_BUILDERS)}"
        )

    params = {k: v for k, v in data.items() if k != "type"}
    try:
        return builder(params)
    except ConstructionError as e:
        raise CatalogueError(f"Invalid '{matcher_type}' matcher: {e}") from e


def _value(value: Any) -> Any:
    """A mapping with a `type` key is a nested matcher; anything else is literal."""
    if isinstance(value, dict) and "type" in value:
        return build_matcher(value)
    return value


def _values(values: Any) -> List[Any]:
    if not isinstance(values, list):
        values = [values]
    return [_value(v) for v in values]


def _require(params: Dict[str, Any], key: str) -> Any:
    if key not in params:
        raise CatalogueError(f"Missing required parameter: {key}")
    return params[key]


def _type_named(name: str) -> type:
    target = getattr(builtins, name, None)
    if not isinstance(target, type):
        raise CatalogueError(f"Unknown type: {name}")
    return target


# =============================================================================
# Built-in Matcher Builders
# =============================================================================

@register_matcher_builder("eq")
def build_eq(params: Dict[str, Any]) -> Matcher:
    return m.eq(_require(params, "expected"))


@register_matcher_builder("eql")
def build_eql(params: Dict[str, Any]) -> Matcher:
    return m.eql(_require(params, "expected"))


@register_matcher_builder("equal")
def build_equal(params: Dict[str, Any]) -> Matcher:
    return m.equal(_require(params, "expected"))


@register_matcher_builder("be_true")
def build_be_true(params: Dict[str, Any]) -> Matcher:
    return m.be(True)


@register_matcher_builder("be_false")
def build_be_false(params: Dict[str, Any]) -> Matcher:
    return m.be(False)


@register_matcher_builder("be_truthy")
def build_be_truthy(params: Dict[str, Any]) -> Matcher:
    return m.be_truthy()


@register_matcher_builder("be_falsey")
def build_be_falsey(params: Dict[str, Any]) -> Matcher:
    return m.be_falsey()


@register_matcher_builder("be_nil")
def build_be_nil(params: Dict[str, Any]) -> Matcher:
    return m.be_nil()


@register_matcher_builder("be_gt")
def build_be_gt(params: Dict[str, Any]) -> Matcher:
    return m.be > _require(params, "expected")


@register_matcher_builder("be_ge")
def build_be_ge(params: Dict[str, Any]) -> Matcher:
    return m.be >= _require(params, "expected")


@register_matcher_builder("be_lt")
def build_be_lt(params: Dict[str, Any]) -> Matcher:
    return m.be < _require(params, "expected")


@register_matcher_builder("be_le")
def build_be_le(params: Dict[str, Any]) -> Matcher:
    return m.be <= _require(params, "expected")


@register_matcher_builder("be_between")
def build_be_between(params: Dict[str, Any]) -> Matcher:
    builder = m.be_between(_require(params, "lo"), _require(params, "hi"))
    mode = _require(params, "mode")
    if mode == "inclusive":
        return builder.inclusive()
    if mode == "exclusive":
        return builder.exclusive()
    raise CatalogueError(f"Invalid be_between mode: {mode}. Valid modes: ['inclusive', 'exclusive']")


@register_matcher_builder("be_within")
def build_be_within(params: Dict[str, Any]) -> Matcher:
    return m.be_within(_require(params, "delta")).of(_require(params, "of"))


@register_matcher_builder("cover")
def build_cover(params: Dict[str, Any]) -> Matcher:
    return m.cover(*_values(_require(params, "values")))


@register_matcher_builder("include")
def build_include(params: Dict[str, Any]) -> Matcher:
    items = _values(params.get("items", []))
    entries = {k: _value(v) for k, v in params.get("entries", {}).items()}
    if entries:
        items.append(entries)
    return m.include(*items)


@register_matcher_builder("start_with")
def build_start_with(params: Dict[str, Any]) -> Matcher:
    return m.start_with(*_values(_require(params, "items")))


@register_matcher_builder("end_with")
def build_end_with(params: Dict[str, Any]) -> Matcher:
    return m.end_with(*_values(_require(params, "items")))


@register_matcher_builder("contain_exactly")
@register_matcher_builder("match_array")
def build_contain_exactly(params: Dict[str, Any]) -> Matcher:
    return m.contain_exactly(*_values(_require(params, "items")))


@register_matcher_builder("match")
def build_match(params: Dict[str, Any]) -> Matcher:
    return m.match(_require(params, "pattern"))


@register_matcher_builder("be_instance_of")
def build_be_instance_of(params: Dict[str, Any]) -> Matcher:
    return m.be_instance_of(_type_named(_require(params, "class")))


@register_matcher_builder("be_kind_of")
def build_be_kind_of(params: Dict[str, Any]) -> Matcher:
    return m.be_kind_of(_type_named(_require(params, "class")))


@register_matcher_builder("respond_to")
def build_respond_to(params: Dict[str, Any]) -> Matcher:
    names = _require(params, "names")
    if isinstance(names, str):
        names = [names]
    return m.respond_to(*names)


@register_matcher_builder("have_attributes")
def build_have_attributes(params: Dict[str, Any]) -> Matcher:
    attributes = _require(params, "attributes")
    return m.have_attributes({k: _value(v) for k, v in attributes.items()})


@register_matcher_builder("be_odd")
def build_be_odd(params: Dict[str, Any]) -> Matcher:
    return m.be_odd()


@register_matcher_builder("be_even")
def build_be_even(params: Dict[str, Any]) -> Matcher:
    return m.be_even()


@register_matcher_builder("not")
def build_not(params: Dict[str, Any]) -> Matcher:
    return NotMatcher(build_matcher(_require(params, "matcher")))


@register_matcher_builder("all")
def build_all(params: Dict[str, Any]) -> Matcher:
    return AllMatcher(build_matcher(_require(params, "matcher")))


def _fold(params: Dict[str, Any], combine) -> Matcher:
    declared = _require(params, "matchers")
    if not isinstance(declared, list) or len(declared) < 2:
        raise CatalogueError("'matchers' must list at least two matchers")
    matchers = [build_matcher(d) for d in declared]
    combined = matchers[0]
    for matcher in matchers[1:]:
        combined = combine(combined, matcher)
    return combined


@register_matcher_builder("and")
def build_and(params: Dict[str, Any]) -> Matcher:
    return _fold(params, AndMatcher)


@register_matcher_builder("or")
def build_or(params: Dict[str, Any]) -> Matcher:
    return _fold(params, OrMatcher)
