"""
Built-in matchers.

Contains:
- Equivalence (eq, eql, equal) and truth matchers (be, be_truthy, be_nil)
- Comparison, range, tolerance and cover matchers
- Collection matchers (include, start_with, end_with, contain_exactly)
- Pattern, type, respond_to, attribute and predicate matchers
"""

import operator
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..errors import ConstructionError
from .base import (
    ExpectedSlot,
    Literal,
    MatchResult,
    Matcher,
    MatcherRef,
    PendingMatcher,
    describe_expected,
    expected,
    loose_equal,
    match_value,
)


def _join_phrases(parts: List[str]) -> str:
    """Join descriptions the way a sentence lists them."""
    if len(parts) <= 1:
        return "".join(parts)
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return ", ".join(parts[:-1]) + f", and {parts[-1]}"


def _is_string(value: Any) -> bool:
    return isinstance(value, (str, bytes))


# =============================================================================
# Equivalence and truth
# =============================================================================

class Equivalence(Enum):
    LOOSE = "eq"
    STRICT = "eql"
    IDENTITY = "equal"


@dataclass(frozen=True)
class EquivalenceMatcher(Matcher):
    """Loose (==), strict (same type and ==) or identity (is) equivalence."""
    expected_value: Any
    mode: Equivalence = Equivalence.LOOSE

    def match(self, actual: Any) -> MatchResult:
        if self.mode is Equivalence.IDENTITY:
            passed = actual is self.expected_value
            detail = ""
            if not passed and loose_equal(self.expected_value, actual):
                detail = "values are equal but are different objects"
            return self._result(passed, actual, detail)

        passed = loose_equal(self.expected_value, actual)
        if self.mode is Equivalence.STRICT:
            passed = actual is self.expected_value or (
                type(actual) is type(self.expected_value) and passed
            )
        return self._result(passed, actual)

    def phrase(self) -> str:
        value = self.describe_value(self.expected_value)
        if self.mode is Equivalence.IDENTITY:
            return f"equal {value} (same object)"
        return f"{self.mode.value} {value}"


class Truth(Enum):
    TRUE = "be true"
    FALSE = "be false"
    TRUTHY = "be truthy"
    FALSEY = "be falsey"
    NIL = "be nil"


@dataclass(frozen=True)
class TruthMatcher(Matcher):
    """
    Boolean identity (TRUE, FALSE), truthiness against the configured falsy
    set (TRUTHY, FALSEY), or the None sentinel (NIL).
    """
    kind: Truth

    def match(self, actual: Any) -> MatchResult:
        if self.kind is Truth.TRUE:
            passed = actual is True
        elif self.kind is Truth.FALSE:
            passed = actual is False
        elif self.kind is Truth.TRUTHY:
            passed = not self.settings.is_falsy(actual)
        elif self.kind is Truth.FALSEY:
            passed = self.settings.is_falsy(actual)
        else:
            passed = actual is None
        return self._result(passed, actual)

    def phrase(self) -> str:
        return self.kind.value


def eq(value: Any) -> EquivalenceMatcher:
    """Loose equality: 17 matches 17.0."""
    return EquivalenceMatcher(value, Equivalence.LOOSE)


def eql(value: Any) -> EquivalenceMatcher:
    """Strict equality: same type and value, 17 does not match 17.0."""
    return EquivalenceMatcher(value, Equivalence.STRICT)


def equal(value: Any) -> EquivalenceMatcher:
    """Identity: the subject must be the very same object."""
    return EquivalenceMatcher(value, Equivalence.IDENTITY)


def be_truthy() -> TruthMatcher:
    return TruthMatcher(Truth.TRUTHY)


def be_falsey() -> TruthMatcher:
    return TruthMatcher(Truth.FALSEY)


def be_nil() -> TruthMatcher:
    return TruthMatcher(Truth.NIL)


be_falsy = be_falsey
be_none = be_nil


# =============================================================================
# Comparison, range, tolerance, cover
# =============================================================================

_COMPARISONS: Dict[str, Callable[[Any, Any], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


@dataclass(frozen=True)
class ComparisonMatcher(Matcher):
    """Compare the subject to a bound using its native ordering."""
    op: str
    bound: Any

    def __post_init__(self):
        if self.op not in _COMPARISONS:
            raise ConstructionError(f"Unknown comparison operator: {self.op}")

    def match(self, actual: Any) -> MatchResult:
        try:
            passed = bool(_COMPARISONS[self.op](actual, self.bound))
        except TypeError as e:
            return self._result(False, actual, f"values are not comparable: {e}")
        return self._result(passed, actual)

    def phrase(self) -> str:
        return f"be {self.op} {self.describe_value(self.bound)}"


@dataclass(frozen=True)
class RangeMatcher(Matcher):
    lo: Any
    hi: Any
    inclusive: bool

    def match(self, actual: Any) -> MatchResult:
        try:
            if self.inclusive:
                passed = self.lo <= actual <= self.hi
            else:
                passed = self.lo < actual < self.hi
        except TypeError as e:
            return self._result(False, actual, f"values are not comparable: {e}")
        return self._result(bool(passed), actual)

    def phrase(self) -> str:
        mode = "inclusive" if self.inclusive else "exclusive"
        return (
            f"be between {self.describe_value(self.lo)} and "
            f"{self.describe_value(self.hi)} ({mode})"
        )


@dataclass(frozen=True)
class RangeBuilder(PendingMatcher):
    """be_between(lo, hi) before its mode is chosen."""
    lo: Any
    hi: Any

    missing = ".inclusive() or .exclusive()"

    def inclusive(self) -> RangeMatcher:
        return RangeMatcher(self.lo, self.hi, inclusive=True)

    def exclusive(self) -> RangeMatcher:
        return RangeMatcher(self.lo, self.hi, inclusive=False)

    def phrase(self) -> str:
        return f"be between {self.lo!r} and {self.hi!r}"


@dataclass(frozen=True)
class ToleranceMatcher(Matcher):
    """Passes when abs(actual - center) <= delta."""
    center: Any
    delta: Any

    def match(self, actual: Any) -> MatchResult:
        try:
            difference = abs(actual - self.center)
        except TypeError as e:
            return self._result(False, actual, f"cannot subtract: {e}")
        try:
            passed = bool(difference <= self.delta)
        except TypeError as e:
            return self._result(False, actual, f"values are not comparable: {e}")
        return self._result(passed, actual, f"difference was {self.describe_value(difference)}")

    def phrase(self) -> str:
        return f"be within {self.describe_value(self.delta)} of {self.describe_value(self.center)}"


@dataclass(frozen=True)
class ToleranceBuilder(PendingMatcher):
    """be_within(delta) before its target is given."""
    delta: Any

    missing = ".of(target)"

    def __post_init__(self):
        # Zero of the delta's own type, e.g. timedelta()
        try:
            negative = self.delta < type(self.delta)()
        except TypeError as e:
            raise ConstructionError(f"be_within delta must be comparable with zero: {e}") from e
        if negative:
            raise ConstructionError(f"be_within delta must not be negative, got {self.delta!r}")

    def of(self, target: Any) -> ToleranceMatcher:
        return ToleranceMatcher(target, self.delta)

    def phrase(self) -> str:
        return f"be within {self.delta!r}"


@dataclass(frozen=True)
class CoverMatcher(Matcher):
    """Range membership by bounds rather than by enumerating the range."""
    values: Tuple[Any, ...]

    def match(self, actual: Any) -> MatchResult:
        uncovered = []
        for value in self.values:
            try:
                if isinstance(actual, range) and actual.step > 0:
                    covered = actual.start <= value < actual.stop
                elif isinstance(actual, range):
                    covered = actual.stop < value <= actual.start
                else:
                    covered = value in actual
            except TypeError as e:
                return self._result(False, actual, f"cannot test membership: {e}")
            if not covered:
                uncovered.append(value)

        detail = f"not covered: {self.describe_value(uncovered)}" if uncovered else ""
        return self._result(not uncovered, actual, detail)

    def phrase(self) -> str:
        return "cover " + _join_phrases([self.describe_value(v) for v in self.values])


def be_between(lo: Any, hi: Any) -> RangeBuilder:
    return RangeBuilder(lo, hi)


def be_within(delta: Any) -> ToleranceBuilder:
    return ToleranceBuilder(delta)


def cover(*values: Any) -> CoverMatcher:
    if not values:
        raise ConstructionError("cover() needs at least one value")
    return CoverMatcher(values)


class BeProxy(PendingMatcher):
    """
    The `be` entry point.

    be(x) is identity, be(True)/be(False)/be(None) are the truth matchers,
    be() is truthiness, and `be > 9` style comparisons build comparison
    matchers.
    """

    missing = "be(value) or a comparison such as `be > 9`"

    def __init__(self, wrap: Optional[Callable[[Matcher], Matcher]] = None):
        self._wrap = wrap or (lambda matcher: matcher)

    def __call__(self, *args: Any) -> Matcher:
        if len(args) > 1:
            raise ConstructionError(f"be() takes at most one value, got {len(args)}")
        if not args:
            return self._wrap(be_truthy())
        value = args[0]
        if value is True:
            return self._wrap(TruthMatcher(Truth.TRUE))
        if value is False:
            return self._wrap(TruthMatcher(Truth.FALSE))
        if value is None:
            return self._wrap(TruthMatcher(Truth.NIL))
        return self._wrap(equal(value))

    def __gt__(self, bound: Any) -> Matcher:
        return self._wrap(ComparisonMatcher(">", bound))

    def __ge__(self, bound: Any) -> Matcher:
        return self._wrap(ComparisonMatcher(">=", bound))

    def __lt__(self, bound: Any) -> Matcher:
        return self._wrap(ComparisonMatcher("<", bound))

    def __le__(self, bound: Any) -> Matcher:
        return self._wrap(ComparisonMatcher("<=", bound))

    def __eq__(self, value: Any) -> Matcher:
        return self._wrap(eq(value))

    def __ne__(self, value: Any):
        raise ConstructionError("`be != x` is not supported; use not_to(be == x)")

    __hash__ = object.__hash__

    def phrase(self) -> str:
        return "be"


be = BeProxy()


# =============================================================================
# Collections
# =============================================================================

class Collection(Enum):
    INCLUDE = "include"
    START_WITH = "start with"
    END_WITH = "end with"
    CONTAIN_EXACTLY = "contain exactly"


def _find_key(mapping: Mapping, key: Any) -> Tuple[bool, Any]:
    """Find a key equal to `key` and of the same type."""
    for candidate in mapping:
        if type(candidate) is type(key) and loose_equal(key, candidate):
            return True, candidate
    return False, None


def _perfect_assignment(
    slots: Tuple[ExpectedSlot, ...], elements: List[Any],
) -> Tuple[List[int], List[int]]:
    """
    Assign each expected slot to a distinct matching element.

    Returns (unmatched slot indexes, unmatched element indexes); both are
    empty when the collections hold the same multiset.
    """
    fits = [[match_value(slot, element) for element in elements] for slot in slots]
    owner: List[Optional[int]] = [None] * len(elements)

    def assign(i: int, seen: set) -> bool:
        for j in range(len(elements)):
            if not fits[i][j] or j in seen:
                continue
            seen.add(j)
            if owner[j] is None or assign(owner[j], seen):
                owner[j] = i
                return True
        return False

    unmatched_slots = [i for i in range(len(slots)) if not assign(i, set())]
    unmatched_elements = [j for j, o in enumerate(owner) if o is None]
    return unmatched_slots, unmatched_elements


@dataclass(frozen=True)
class EntriesSlot:
    """include(mapping) argument: each key paired with its expected slot."""
    entries: Tuple[Tuple[Any, ExpectedSlot], ...]


IncludeSlot = Union[Literal, MatcherRef, EntriesSlot]


def _include_slot(item: Any) -> IncludeSlot:
    if isinstance(item, Mapping):
        return EntriesSlot(tuple((key, expected(value)) for key, value in item.items()))
    return expected(item)


def _entries_match(slot: EntriesSlot, actual: Mapping) -> bool:
    for key, value_slot in slot.entries:
        found, actual_key = _find_key(actual, key)
        if not found or not match_value(value_slot, actual[actual_key]):
            return False
    return True


def _element_matches(slot: IncludeSlot, element: Any) -> bool:
    if isinstance(slot, EntriesSlot):
        # A sequence element must hold exactly these entries
        return (
            isinstance(element, Mapping)
            and len(element) == len(slot.entries)
            and _entries_match(slot, element)
        )
    return match_value(slot, element)


def _describe_include_slot(slot: IncludeSlot, settings) -> str:
    if isinstance(slot, EntriesSlot):
        parts = [
            f"{settings.describe_value(key)}: {describe_expected(value_slot, settings)}"
            for key, value_slot in slot.entries
        ]
        return "{" + ", ".join(parts) + "}"
    return describe_expected(slot, settings)


@dataclass(frozen=True)
class CollectionMatcher(Matcher):
    """Membership, prefix, suffix and same-multiset matching."""
    kind: Collection
    elements: Tuple[IncludeSlot, ...]

    def match(self, actual: Any) -> MatchResult:
        if self.kind is Collection.INCLUDE:
            return self._match_include(actual)
        if self.kind is Collection.CONTAIN_EXACTLY:
            return self._match_exactly(actual)
        return self._match_position(actual)

    def phrase(self) -> str:
        parts = [_describe_include_slot(slot, self.settings) for slot in self.elements]
        return f"{self.kind.value} {_join_phrases(parts)}"

    def _match_include(self, actual: Any) -> MatchResult:
        if isinstance(actual, Mapping):
            missing = [slot for slot in self.elements if not self._mapping_includes(actual, slot)]
        elif _is_string(actual):
            missing = [slot for slot in self.elements if not self._string_includes(actual, slot)]
        else:
            try:
                items = list(actual)
            except TypeError:
                return self._result(False, actual, "subject is not a collection")
            missing = [
                slot for slot in self.elements
                if not any(_element_matches(slot, item) for item in items)
            ]

        detail = ""
        if missing:
            detail = "missing: " + ", ".join(
                _describe_include_slot(s, self.settings) for s in missing
            )
        return self._result(not missing, actual, detail)

    @staticmethod
    def _mapping_includes(actual: Mapping, slot: IncludeSlot) -> bool:
        if isinstance(slot, EntriesSlot):
            return _entries_match(slot, actual)
        if isinstance(slot, MatcherRef):
            return any(match_value(slot, key) for key in actual)
        found, _ = _find_key(actual, slot.value)
        return found

    @staticmethod
    def _string_includes(actual: Any, slot: IncludeSlot) -> bool:
        if not isinstance(slot, Literal) or not isinstance(slot.value, type(actual)):
            return False
        return slot.value in actual

    def _match_position(self, actual: Any) -> MatchResult:
        at_start = self.kind is Collection.START_WITH

        if _is_string(actual):
            if len(self.elements) != 1 or isinstance(self.elements[0], MatcherRef):
                return self._result(False, actual, "a string subject needs a single string argument")
            affix = self.elements[0].value
            if not isinstance(affix, type(actual)):
                return self._result(False, actual, f"cannot compare {type(actual).__name__} "
                                                   f"with {type(affix).__name__}")
            passed = actual.startswith(affix) if at_start else actual.endswith(affix)
            return self._result(passed, actual)

        if not isinstance(actual, Sequence):
            return self._result(False, actual, "subject is not an ordered sequence")

        count = len(self.elements)
        if len(actual) < count:
            return self._result(False, actual, f"subject has only {len(actual)} elements")
        window = list(actual[:count]) if at_start else list(actual[len(actual) - count:])
        passed = all(match_value(slot, item) for slot, item in zip(self.elements, window))
        return self._result(passed, actual)

    def _match_exactly(self, actual: Any) -> MatchResult:
        if _is_string(actual) or isinstance(actual, Mapping):
            return self._result(False, actual, "subject is not a collection of elements")
        try:
            items = list(actual)
        except TypeError:
            return self._result(False, actual, "subject is not a collection")

        unmatched_slots, extra = _perfect_assignment(self.elements, items)
        details = []
        if unmatched_slots:
            missing = [describe_expected(self.elements[i], self.settings) for i in unmatched_slots]
            details.append("missing: " + ", ".join(missing))
        if extra:
            details.append("extra: " + ", ".join(self.describe_value(items[j]) for j in extra))
        return self._result(not details, actual, "; ".join(details))


def include(*items: Any, **entries: Any) -> CollectionMatcher:
    """
    Membership test.

    Sequences check element presence, strings check substrings, mappings
    check keys or key/value entries (keys must match in type as well).
    """
    if entries:
        items = items + (entries,)
    if not items:
        raise ConstructionError("include() needs at least one expected item")
    return CollectionMatcher(Collection.INCLUDE, tuple(_include_slot(i) for i in items))


def start_with(*items: Any) -> CollectionMatcher:
    if not items:
        raise ConstructionError("start_with() needs at least one expected item")
    return CollectionMatcher(Collection.START_WITH, tuple(expected(i) for i in items))


def end_with(*items: Any) -> CollectionMatcher:
    if not items:
        raise ConstructionError("end_with() needs at least one expected item")
    return CollectionMatcher(Collection.END_WITH, tuple(expected(i) for i in items))


def contain_exactly(*items: Any) -> CollectionMatcher:
    """Same elements as the arguments, in any order."""
    return CollectionMatcher(Collection.CONTAIN_EXACTLY, tuple(expected(i) for i in items))


def match_array(items: Any) -> CollectionMatcher:
    """contain_exactly taking a single collection argument."""
    if _is_string(items) or isinstance(items, Mapping):
        raise ConstructionError(f"match_array() needs a collection of elements, got {items!r}")
    return contain_exactly(*items)


# =============================================================================
# Patterns, types and attributes
# =============================================================================

@dataclass(frozen=True)
class PatternMatcher(Matcher):
    """re.search against string subjects; other subjects never match."""
    pattern: Any

    def __post_init__(self):
        if isinstance(self.pattern, (str, bytes)):
            object.__setattr__(self, "pattern", re.compile(self.pattern))
        elif not isinstance(self.pattern, re.Pattern):
            raise ConstructionError(f"match() needs a string or compiled pattern, got {self.pattern!r}")

    def match(self, actual: Any) -> MatchResult:
        if not isinstance(actual, type(self.pattern.pattern)):
            return self._result(False, actual, f"{type(actual).__name__} subjects are not matched")
        return self._result(self.pattern.search(actual) is not None, actual)

    def phrase(self) -> str:
        return f"match /{self.pattern.pattern}/"


class TypeCheck(Enum):
    EXACT = "be an instance of"
    KIND = "be a kind of"


@dataclass(frozen=True)
class TypeMatcher(Matcher):
    """Exact type (EXACT) or type/ancestor/ABC membership (KIND)."""
    kind: TypeCheck
    target_type: Any

    def __post_init__(self):
        if not isinstance(self.target_type, type):
            raise ConstructionError(f"Expected a type, got {self.target_type!r}")

    def match(self, actual: Any) -> MatchResult:
        if self.kind is TypeCheck.EXACT:
            passed = type(actual) is self.target_type
        else:
            passed = isinstance(actual, self.target_type)
        return self._result(passed, actual, f"actual type is {type(actual).__name__}")

    def phrase(self) -> str:
        return f"{self.kind.value} {self.target_type.__name__}"


@dataclass(frozen=True)
class RespondToMatcher(Matcher):
    names: Tuple[str, ...]

    def match(self, actual: Any) -> MatchResult:
        missing = [name for name in self.names if not hasattr(actual, name)]
        detail = f"missing: {', '.join(missing)}" if missing else ""
        return self._result(not missing, actual, detail)

    def phrase(self) -> str:
        return "respond to " + _join_phrases([f"#{name}" for name in self.names])


@dataclass(frozen=True)
class AttributeMatcher(Matcher):
    """Each named attribute must exist and match its expected slot."""
    expected_attributes: Tuple[Tuple[str, ExpectedSlot], ...]

    def match(self, actual: Any) -> MatchResult:
        mismatches = []
        for name, slot in self.expected_attributes:
            if not hasattr(actual, name):
                mismatches.append(f"{name}: attribute missing")
                continue
            value = getattr(actual, name)
            if not match_value(slot, value):
                mismatches.append(
                    f"{name}: expected {describe_expected(slot, self.settings)}, "
                    f"got {self.describe_value(value)}"
                )
        return self._result(not mismatches, actual, "; ".join(mismatches))

    def phrase(self) -> str:
        parts = [
            f"{name}={describe_expected(slot, self.settings)}"
            for name, slot in self.expected_attributes
        ]
        return "have attributes " + ", ".join(parts)


@dataclass(frozen=True)
class PredicateMatcher(Matcher):
    """Passes when fn(actual) is truthy; an exception from fn is a failure."""
    fn: Callable[[Any], Any]
    description: Optional[str] = None

    def match(self, actual: Any) -> MatchResult:
        try:
            passed = bool(self.fn(actual))
        except Exception as e:
            return self._result(False, actual, f"predicate raised {type(e).__name__}: {e}")
        return self._result(passed, actual)

    def phrase(self) -> str:
        if self.description:
            return self.description
        return f"satisfy {getattr(self.fn, '__name__', 'predicate')}"


def match(pattern: Any) -> PatternMatcher:
    return PatternMatcher(pattern)


match_regex = match


def be_instance_of(target_type: type) -> TypeMatcher:
    return TypeMatcher(TypeCheck.EXACT, target_type)


def be_kind_of(target_type: type) -> TypeMatcher:
    return TypeMatcher(TypeCheck.KIND, target_type)


be_an_instance_of = be_instance_of
be_a_kind_of = be_kind_of
be_a = be_kind_of
be_an = be_kind_of


def respond_to(*names: str) -> RespondToMatcher:
    if not names:
        raise ConstructionError("respond_to() needs at least one name")
    return RespondToMatcher(tuple(names))


def have_attributes(attributes: Optional[Dict[str, Any]] = None, **kwargs: Any) -> AttributeMatcher:
    merged = dict(attributes or {})
    merged.update(kwargs)
    if not merged:
        raise ConstructionError("have_attributes() needs at least one attribute")
    return AttributeMatcher(tuple((name, expected(value)) for name, value in merged.items()))


def satisfy(fn: Callable[[Any], Any], description: Optional[str] = None) -> PredicateMatcher:
    if not callable(fn):
        raise ConstructionError(f"satisfy() needs a callable, got {fn!r}")
    return PredicateMatcher(fn, description)


def _is_odd(value: Any) -> bool:
    return isinstance(value, int) and value % 2 == 1


def _is_even(value: Any) -> bool:
    return isinstance(value, int) and value % 2 == 0


def be_odd() -> PredicateMatcher:
    return PredicateMatcher(_is_odd, "be odd")


def be_even() -> PredicateMatcher:
    return PredicateMatcher(_is_even, "be even")


def with_settings(matcher: Matcher, **overrides: Any) -> Matcher:
    """Copy of a matcher using different settings."""
    return replace(matcher, settings=replace(matcher.settings, **overrides))
