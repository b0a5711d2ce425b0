"""
Matcher Settings Tests

Tests for:
- Default settings
- YAML settings parsing and loading
- configure() and construction-time capture
"""

import pytest

from expectations.framework.errors import ConstructionError
from expectations.framework.matchers import be_falsey, be_truthy, eq
from expectations.framework.settings import (
    DEFAULT_SETTINGS,
    MatcherSettings,
    configure,
    get_settings,
    load_settings,
    parse_settings,
    reset_settings,
)


# =============================================================================
# Defaults
# =============================================================================

class TestDefaults:
    def test_default_values(self):
        settings = get_settings()
        assert settings is DEFAULT_SETTINGS
        assert settings.falsy_values == (None, False)
        assert settings.max_repr_length == 200

    def test_falsy_set_uses_identity(self):
        """0 and empty containers are truthy."""
        settings = MatcherSettings()
        assert settings.is_falsy(None)
        assert settings.is_falsy(False)
        assert not settings.is_falsy(0)
        assert not settings.is_falsy("")
        assert not settings.is_falsy([])

    def test_describe_value_truncates(self):
        settings = MatcherSettings(max_repr_length=10)
        assert settings.describe_value("ab") == "'ab'"
        assert settings.describe_value("abcdefghijkl") == "'abcdef..."


# =============================================================================
# YAML Parsing
# =============================================================================

class TestParseSettings:
    def test_parse(self):
        settings = parse_settings("""
falsy_values: [null]
max_repr_length: 40
""")
        assert settings.falsy_values == (None,)
        assert settings.max_repr_length == 40

    def test_empty_document_gives_defaults(self):
        assert parse_settings("") == DEFAULT_SETTINGS

    def test_unknown_key_rejected(self):
        with pytest.raises(ConstructionError, match="Unknown settings"):
            parse_settings("colour: true")

    def test_non_mapping_rejected(self):
        with pytest.raises(ConstructionError, match="mapping"):
            parse_settings("- 1\n- 2")

    def test_repr_length_too_small(self):
        with pytest.raises(ConstructionError, match="at least 4"):
            parse_settings("max_repr_length: 3")

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("max_repr_length: 12\n")
        assert load_settings(str(path)).max_repr_length == 12


# =============================================================================
# Active Settings
# =============================================================================

class TestConfigure:
    def test_overrides_apply_to_current_settings(self):
        configure(max_repr_length=20)
        configure(falsy_values=(None,))
        settings = get_settings()
        assert settings.max_repr_length == 20
        assert settings.falsy_values == (None,)

    def test_full_settings_replace(self):
        custom = MatcherSettings(max_repr_length=50)
        assert configure(custom) is custom
        assert get_settings() is custom

    def test_reset(self):
        configure(max_repr_length=20)
        assert reset_settings() is DEFAULT_SETTINGS

    def test_matchers_capture_settings_at_construction(self):
        """Reconfiguring does not affect a matcher that already exists."""
        before = be_truthy()
        configure(falsy_values=(None,))
        after = be_truthy()
        assert not before.evaluate(False).passed
        assert after.evaluate(False).passed
        assert not be_falsey().evaluate(False).passed

    def test_truncation_in_diagnostics(self):
        configure(max_repr_length=8)
        result = eq("x").evaluate("abcdefghijkl")
        assert not result.passed
        assert result.actual_description == "'abcd..."

    def test_loaded_settings_drive_matchers(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("falsy_values: [null]\n")
        configure(load_settings(str(path)))
        assert be_truthy().evaluate(False).passed
