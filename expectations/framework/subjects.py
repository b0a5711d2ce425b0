"""
Subjects under test.

A subject is either an immediate value or a deferred action. The driver
dispatches on these types; a plain callable is an ordinary value.
"""

from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class Value:
    """An immediate value under test."""
    value: Any


@dataclass(frozen=True)
class DeferredAction:
    """A zero-argument, side-effecting operation whose effects are observed."""
    fn: Callable[[], Any]

    def run(self) -> Any:
        return self.fn()

    @property
    def name(self) -> str:
        return getattr(self.fn, "__name__", repr(self.fn))


Subject = Union[Value, DeferredAction]


def as_subject(subject: Any) -> Subject:
    """Wrap anything that is not already a subject as a Value."""
    if isinstance(subject, (Value, DeferredAction)):
        return subject
    return Value(subject)


def describe_subject(subject: Subject, settings) -> str:
    if isinstance(subject, DeferredAction):
        return f"<action {subject.name}>"
    return settings.describe_value(subject.value)
