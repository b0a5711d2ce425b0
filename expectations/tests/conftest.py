"""
Pytest configuration for expectation framework tests.

Every test starts and ends with the default matcher settings.
"""

import pytest

from expectations.framework.settings import reset_settings


@pytest.fixture(autouse=True)
def default_settings():
    """Restore default settings around each test."""
    reset_settings()
    yield
    reset_settings()
