"""
Matcher settings.

Settings are captured by matchers when they are constructed, so changing
the active settings never affects a matcher that already exists.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConstructionError


@dataclass(frozen=True)
class MatcherSettings:
    """Configuration shared by the built-in matchers."""
    # Values treated as false by be_truthy/be_falsey, compared by identity
    falsy_values: Tuple[Any, ...] = (None, False)
    # Longest value repr shown in a diagnostic before truncation
    max_repr_length: int = 200

    def is_falsy(self, value: Any) -> bool:
        return any(value is falsy for falsy in self.falsy_values)

    def describe_value(self, value: Any) -> str:
        """Render a value for a diagnostic, truncated to max_repr_length."""
        text = repr(value)
        if len(text) > self.max_repr_length:
            return text[: self.max_repr_length - 3] + "..."
        return text


DEFAULT_SETTINGS = MatcherSettings()

_active_settings = DEFAULT_SETTINGS


def get_settings() -> MatcherSettings:
    """Return the settings new matchers will capture."""
    return _active_settings


def configure(settings: Optional[MatcherSettings] = None, **overrides) -> MatcherSettings:
    """
    Replace the active settings.

    Either pass a complete MatcherSettings or keyword overrides applied to
    the current settings.
    """
    global _active_settings
    base = settings if settings is not None else _active_settings
    _active_settings = replace(base, **overrides) if overrides else base
    return _active_settings


def reset_settings() -> MatcherSettings:
    """Restore the default settings."""
    global _active_settings
    _active_settings = DEFAULT_SETTINGS
    return _active_settings


def parse_settings(yaml_content: str) -> MatcherSettings:
    """Parse settings from YAML content."""
    data = yaml.safe_load(yaml_content) or {}
    return _parse_settings_dict(data)


def load_settings(file_path: str) -> MatcherSettings:
    """Load settings from a YAML file."""
    with open(file_path, 'r') as f:
        return parse_settings(f.read())


def _parse_settings_dict(data: Dict[str, Any]) -> MatcherSettings:
    if not isinstance(data, dict):
        raise ConstructionError(f"Settings must be a mapping, got {type(data).__name__}")

    unknown = set(data) - {"falsy_values", "max_repr_length"}
    if unknown:
        raise ConstructionError(f"Unknown settings: {sorted(unknown)}")

    settings = DEFAULT_SETTINGS
    if "falsy_values" in data:
        settings = replace(settings, falsy_values=tuple(data["falsy_values"]))
    if "max_repr_length" in data:
        max_len = int(data["max_repr_length"])
        if max_len < 4:
            raise ConstructionError(f"max_repr_length must be at least 4, got {max_len}")
        settings = replace(settings, max_repr_length=max_len)

    return settings
