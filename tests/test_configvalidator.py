# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""Tests for config validation."""

from __future__ import annotations

from typing import Any

from torrentfilter.configvalidator import ConfigWarning, describe_validation, summarize_warnings, validate_config


def _config(**default: Any) -> dict[str, Any]:
    section: dict[str, Any] = {
        "filter_connective": "and",
        "suppress_warnings": False,
        "debug": False,
        "case_sensitive_search": False,
    }
    section.update(default)
    return {"DEFAULT": section}


class TestValidateConfig:
    def test_example_shape_is_valid(self) -> None:
        is_valid, errors, warnings = validate_config(_config())
        assert is_valid is True
        assert errors == []
        assert warnings == []

    def test_not_a_dict(self) -> None:
        is_valid, errors, _ = validate_config(None)
        assert is_valid is False
        assert "Config must be a dictionary" in errors[0]

    def test_missing_default(self) -> None:
        is_valid, errors, _ = validate_config({})
        assert is_valid is False
        assert errors == ["Missing required config section: 'DEFAULT'"]

    def test_bad_connective_is_an_error(self) -> None:
        is_valid, errors, _ = validate_config(_config(filter_connective="xor"))
        assert is_valid is False
        assert "filter_connective" in errors[0]

    def test_or_connective(self) -> None:
        assert validate_config(_config(filter_connective="OR"))[0] is True

    def test_wrong_type_is_a_warning(self) -> None:
        is_valid, _, warnings = validate_config(_config(debug="yes"))
        assert is_valid is True
        assert str(warnings[0]) == "[DEFAULT][debug] Expected type bool, got str"

    def test_unknown_section_and_keys(self) -> None:
        config = _config(tmdb_api="x")
        config["TRACKERS"] = {}
        _, _, warnings = validate_config(config)
        messages = [str(w) for w in warnings]
        assert "[DEFAULT][tmdb_api] Unknown key - it will be ignored" in messages
        assert "[TRACKERS] Unknown config section 'TRACKERS' - this may be intentional" in messages


class TestFormatting:
    def test_warning_location(self) -> None:
        assert str(ConfigWarning("DEFAULT", "Unknown key - it will be ignored", "a")) == "[DEFAULT][a] Unknown key - it will be ignored"
        assert str(ConfigWarning("TRACKERS", "Unknown config section")) == "[TRACKERS] Unknown config section"

    def test_summary_combines_keys(self) -> None:
        warnings = [
            ConfigWarning("DEFAULT", "Unknown key - it will be ignored", "a"),
            ConfigWarning("DEFAULT", "Expected type bool, got str", "debug"),
            ConfigWarning("DEFAULT", "Unknown key - it will be ignored", "b"),
        ]
        assert summarize_warnings(warnings) == [
            "[DEFAULT][a, b] Unknown key - it will be ignored",
            "[DEFAULT][debug] Expected type bool, got str",
        ]

    def test_passed(self) -> None:
        assert describe_validation([], []) == "Config validation passed."

    def test_passed_with_warnings(self) -> None:
        text = describe_validation([], [ConfigWarning("DEFAULT", "Unknown key - it will be ignored", "a")])
        assert text == "Config warning: [DEFAULT][a] Unknown key - it will be ignored\nConfig validation passed with 1 warning(s)."

    def test_errors_listed(self) -> None:
        text = describe_validation(["broken"], [])
        assert text == "Config error: broken"

    def test_describes_a_real_run(self) -> None:
        _, errors, warnings = validate_config(_config(filter_connective="xor", extra=1))
        lines = describe_validation(errors, warnings).splitlines()
        assert lines[0].startswith("Config error: DEFAULT['filter_connective']")
        assert lines[1] == "Config warning: [DEFAULT][extra] Unknown key - it will be ignored"
        assert len(lines) == 2
