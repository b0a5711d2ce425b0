"""
Noun-phrase aliases.

Aliases behave exactly like the matcher they wrap but read better when
passed as arguments to other matchers:

    start_with(a_string_starting_with("a"))   # instead of start_with(start_with("a"))
    start_with(a_value <= 2)                   # instead of start_with(be <= 2)
"""

from dataclasses import dataclass
from typing import Any, Union

from ..subjects import Subject, as_subject
from . import builtin
from .base import MatchResult, Matcher, PendingMatcher


@dataclass(frozen=True)
class AliasedMatcher(Matcher):
    """A matcher whose description replaces `old` with `new`."""
    base: Matcher
    old: str
    new: str

    @property
    def accepts_values(self) -> bool:
        return self.base.accepts_values

    @property
    def accepts_actions(self) -> bool:
        return self.base.accepts_actions

    def evaluate(self, subject: Subject) -> MatchResult:
        # Failure text keeps the verb form; the alias only renames the phrase
        subject = as_subject(subject)
        self.check_subject(subject)
        return self.base.evaluate(subject)

    def describe(self) -> str:
        return self.base.describe()

    def describe_negated(self) -> str:
        return self.base.describe_negated()

    def phrase(self) -> str:
        return self.base.phrase().replace(self.old, self.new, 1)

    def negation_error(self):
        return self.base.negation_error()

    def __getattr__(self, name: str) -> Any:
        # Forward fluent modifiers and keep the alias on what they return
        if name.startswith("_"):
            raise AttributeError(name)
        return _forward(getattr(self.base, name), self.old, self.new)


class AliasedPending(PendingMatcher):
    """A pending builder whose completed matcher is aliased."""

    def __init__(self, base: PendingMatcher, old: str, new: str):
        self.base = base
        self.old = old
        self.new = new
        self.missing = base.missing

    def phrase(self) -> str:
        return self.base.phrase().replace(self.old, self.new, 1)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name == "base":
            raise AttributeError(name)
        return _forward(getattr(self.base, name), self.old, self.new)


def _forward(attribute: Any, old: str, new: str) -> Any:
    if not callable(attribute):
        return attribute

    def modifier(*args, **kwargs):
        return alias(attribute(*args, **kwargs), old, new)

    return modifier


def alias(target: Any, old: str, new: str) -> Union[Matcher, PendingMatcher, Any]:
    """Alias a matcher or pending builder; anything else is returned unchanged."""
    if isinstance(target, Matcher):
        return AliasedMatcher(target, old, new)
    if isinstance(target, PendingMatcher):
        return AliasedPending(target, old, new)
    return target


a_value = builtin.BeProxy(wrap=lambda matcher: alias(matcher, "be", "a value"))


def a_value_within(delta: Any):
    return alias(builtin.be_within(delta), "be within", "a value within")


def a_value_between(lo: Any, hi: Any):
    return alias(builtin.be_between(lo, hi), "be between", "a value between")


def a_string_starting_with(*items: Any) -> Matcher:
    return alias(builtin.start_with(*items), "start with", "a string starting with")


def a_string_ending_with(*items: Any) -> Matcher:
    return alias(builtin.end_with(*items), "end with", "a string ending with")


def a_string_matching(pattern: Any) -> Matcher:
    return alias(builtin.match(pattern), "match", "a string matching")


def a_string_including(*items: Any) -> Matcher:
    return alias(builtin.include(*items), "include", "a string including")


def a_collection_including(*items: Any, **entries: Any) -> Matcher:
    return alias(builtin.include(*items, **entries), "include", "a collection including")


def a_collection_starting_with(*items: Any) -> Matcher:
    return alias(builtin.start_with(*items), "start with", "a collection starting with")


def a_collection_ending_with(*items: Any) -> Matcher:
    return alias(builtin.end_with(*items), "end with", "a collection ending with")


def a_collection_containing_exactly(*items: Any) -> Matcher:
    return alias(builtin.contain_exactly(*items), "contain exactly", "a collection containing exactly")


def an_object_having_attributes(attributes=None, **kwargs: Any) -> Matcher:
    return alias(builtin.have_attributes(attributes, **kwargs), "have attributes", "an object having attributes")


def an_object_eq_to(value: Any) -> Matcher:
    return alias(builtin.eq(value), "eq", "an object eq to")


def an_object_satisfying(fn, description=None) -> Matcher:
    return alias(builtin.satisfy(fn, description), "satisfy", "an object satisfying")


def an_object_responding_to(*names: str) -> Matcher:
    return alias(builtin.respond_to(*names), "respond to", "an object responding to")


def an_instance_of(target_type: type) -> Matcher:
    return alias(builtin.be_instance_of(target_type), "be an instance of", "an instance of")


def a_kind_of(target_type: type) -> Matcher:
    return alias(builtin.be_kind_of(target_type), "be a kind of", "a kind of")


def a_truthy_value() -> Matcher:
    return alias(builtin.be_truthy(), "be truthy", "a truthy value")


def a_falsey_value() -> Matcher:
    return alias(builtin.be_falsey(), "be falsey", "a falsey value")


def a_nil_value() -> Matcher:
    return alias(builtin.be_nil(), "be nil", "a nil value")
