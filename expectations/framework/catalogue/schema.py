"""
Catalogue schema definitions.
"""

from dataclasses import dataclass, field
from typing import Any, List

from ..matchers.base import Matcher


@dataclass
class ExpectationSpec:
    """One declared expectation: a value subject and the matcher it must satisfy."""
    subject: Any
    matcher: Matcher
    description: str = ""
    negate: bool = False


@dataclass
class Catalogue:
    """A named collection of declared expectations."""
    name: str
    description: str = ""
    expectations: List[ExpectationSpec] = field(default_factory=list)
