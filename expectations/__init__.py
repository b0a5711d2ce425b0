"""
Expectations

Expectation matching for tests: matchers, combinators and observation
of side effects.
"""

import logging

from .framework import *  # noqa: F401,F403
from .framework import __all__

logging.getLogger(__name__).addHandler(logging.NullHandler())
