"""
Matcher library.

Provides the Matcher abstraction, the built-in matchers, combinators,
observation matchers and noun-phrase aliases.
"""

from .base import (
    Literal,
    MatchResult,
    Matcher,
    MatcherRef,
    PendingMatcher,
    expected,
    match_value,
)
from .builtin import (
    AttributeMatcher,
    CollectionMatcher,
    ComparisonMatcher,
    CoverMatcher,
    EquivalenceMatcher,
    PatternMatcher,
    PredicateMatcher,
    RangeMatcher,
    RespondToMatcher,
    ToleranceMatcher,
    TruthMatcher,
    TypeMatcher,
    be,
    be_a,
    be_a_kind_of,
    be_an,
    be_an_instance_of,
    be_between,
    be_even,
    be_falsey,
    be_falsy,
    be_instance_of,
    be_kind_of,
    be_nil,
    be_none,
    be_odd,
    be_truthy,
    be_within,
    contain_exactly,
    cover,
    end_with,
    eq,
    eql,
    equal,
    have_attributes,
    include,
    match,
    match_array,
    match_regex,
    respond_to,
    satisfy,
    start_with,
    with_settings,
)
from .composite import (
    AllMatcher,
    AndMatcher,
    NotMatcher,
    OrMatcher,
    all_,
    not_,
)
from .observation import (
    ChangeMatcher,
    ErrorMatcher,
    OutputMatcher,
    change,
    output,
    raise_error,
    raise_exception,
)
from .aliases import (
    a_collection_containing_exactly,
    a_collection_ending_with,
    a_collection_including,
    a_collection_starting_with,
    a_falsey_value,
    a_kind_of,
    a_nil_value,
    a_string_ending_with,
    a_string_including,
    a_string_matching,
    a_string_starting_with,
    a_truthy_value,
    a_value,
    a_value_between,
    a_value_within,
    an_instance_of,
    an_object_eq_to,
    an_object_having_attributes,
    an_object_responding_to,
    an_object_satisfying,
)

__all__ = [
    # Core
    "Literal",
    "MatchResult",
    "Matcher",
    "MatcherRef",
    "PendingMatcher",
    "expected",
    "match_value",
    # Built-in
    "AttributeMatcher",
    "CollectionMatcher",
    "ComparisonMatcher",
    "CoverMatcher",
    "EquivalenceMatcher",
    "PatternMatcher",
    "PredicateMatcher",
    "RangeMatcher",
    "RespondToMatcher",
    "ToleranceMatcher",
    "TruthMatcher",
    "TypeMatcher",
    "be",
    "be_a",
    "be_a_kind_of",
    "be_an",
    "be_an_instance_of",
    "be_between",
    "be_even",
    "be_falsey",
    "be_falsy",
    "be_instance_of",
    "be_kind_of",
    "be_nil",
    "be_none",
    "be_odd",
    "be_truthy",
    "be_within",
    "contain_exactly",
    "cover",
    "end_with",
    "eq",
    "eql",
    "equal",
    "have_attributes",
    "include",
    "match",
    "match_array",
    "match_regex",
    "respond_to",
    "satisfy",
    "start_with",
    "with_settings",
    # Combinators
    "AllMatcher",
    "AndMatcher",
    "NotMatcher",
    "OrMatcher",
    "all_",
    "not_",
    # Observation
    "ChangeMatcher",
    "ErrorMatcher",
    "OutputMatcher",
    "change",
    "output",
    "raise_error",
    "raise_exception",
    # Aliases
    "a_collection_containing_exactly",
    "a_collection_ending_with",
    "a_collection_including",
    "a_collection_starting_with",
    "a_falsey_value",
    "a_kind_of",
    "a_nil_value",
    "a_string_ending_with",
    "a_string_including",
    "a_string_matching",
    "a_string_starting_with",
    "a_truthy_value",
    "a_value",
    "a_value_between",
    "a_value_within",
    "an_instance_of",
    "an_object_eq_to",
    "an_object_having_attributes",
    "an_object_responding_to",
    "an_object_satisfying",
]
