# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""
Config validation helper for filterexpr.
Validates the user's config.py against expected structure and types.
"""

from typing import Any, Optional, cast

from torrentfilter.compiler import CONNECTIVES

# Required top-level sections
REQUIRED_SECTIONS = ["DEFAULT"]

# Expected types for DEFAULT keys (for type validation, not required)
DEFAULT_KEY_TYPES: dict[str, tuple[type, ...]] = {
    "filter_connective": (str,),
    "suppress_warnings": (bool,),
    "debug": (bool,),
    "case_sensitive_search": (bool,),
}

UNKNOWN_KEY = "Unknown key - it will be ignored"


class ConfigValidationError(Exception):
    """Raised when config validation fails with critical errors."""

    pass


class ConfigWarning:
    """A config problem that does not stop the run, tied to a section and optionally one key."""

    def __init__(self, section: str, message: str, key: Optional[str] = None) -> None:
        self.section = section
        self.message = message
        self.key = key

    @property
    def location(self) -> str:
        return f"[{self.section}][{self.key}]" if self.key else f"[{self.section}]"

    def __str__(self) -> str:
        return f"{self.location} {self.message}"


def validate_config(config: Any) -> tuple[bool, list[str], list[ConfigWarning]]:
    """
    Validate the config dictionary structure and types.

    Returns:
        Tuple of (is_valid, errors, warnings)
        - is_valid: True if config passes critical validation
        - errors: List of critical error messages
        - warnings: List of non-critical warnings
    """
    errors: list[str] = []
    warnings: list[ConfigWarning] = []

    if not isinstance(config, dict):
        errors.append(f"Config must be a dictionary, got {type(config).__name__}")
        return False, errors, warnings

    config_dict = cast(dict[str, Any], config)

    for section in REQUIRED_SECTIONS:
        if section not in config_dict:
            errors.append(f"Missing required config section: '{section}'")
        elif not isinstance(config_dict[section], dict):
            errors.append(f"Config section '{section}' must be a dictionary, got {type(config_dict[section]).__name__}")

    if errors:
        return False, errors, warnings

    default_errors, default_warnings = _validate_default_section(cast(dict[str, Any], config_dict["DEFAULT"]))
    errors.extend(default_errors)
    warnings.extend(default_warnings)

    warnings.extend(
        [ConfigWarning(section, f"Unknown config section '{section}' - this may be intentional") for section in config_dict if section not in REQUIRED_SECTIONS]
    )

    return not errors, errors, warnings


def _validate_default_section(default: dict[str, Any]) -> tuple[list[str], list[ConfigWarning]]:
    """Validate the DEFAULT config section."""
    errors: list[str] = []
    warnings: list[ConfigWarning] = []

    for key, value in default.items():
        expected_types = DEFAULT_KEY_TYPES.get(key)
        if expected_types is None:
            warnings.append(ConfigWarning("DEFAULT", UNKNOWN_KEY, key))
        elif value is not None and not isinstance(value, expected_types):
            expected = " or ".join(t.__name__ for t in expected_types)
            warnings.append(ConfigWarning("DEFAULT", f"Expected type {expected}, got {type(value).__name__}", key))

    connective = default.get("filter_connective")
    if isinstance(connective, str) and connective.strip().lower() not in CONNECTIVES:
        errors.append(f"DEFAULT['filter_connective'] must be one of {', '.join(CONNECTIVES)}, got '{connective}'")

    return errors, warnings


def summarize_warnings(warnings: list[ConfigWarning]) -> list[str]:
    """
    One line per (section, message), listing every key it was raised for.

    Two unknown keys read as: [DEFAULT][foo, bar] Unknown key - it will be ignored
    """
    keys_by_problem: dict[tuple[str, str], list[str]] = {}
    for warning in warnings:
        keys = keys_by_problem.setdefault((warning.section, warning.message), [])
        if warning.key:
            keys.append(warning.key)

    return [f"[{section}][{', '.join(keys)}] {message}" if keys else f"[{section}] {message}" for (section, message), keys in keys_by_problem.items()]


def describe_validation(errors: list[str], warnings: list[ConfigWarning]) -> str:
    """Text shown for a validation run: the errors if there are any, then the summarized warnings."""
    lines = [f"Config error: {error}" for error in errors]
    lines.extend(f"Config warning: {line}" for line in summarize_warnings(warnings))
    if not errors:
        lines.append(f"Config validation passed with {len(warnings)} warning(s)." if warnings else "Config validation passed.")
    return "\n".join(lines)
