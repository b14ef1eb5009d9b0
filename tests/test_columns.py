# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""Tests for the column type registry and field remapping."""

from __future__ import annotations

import pytest

from torrentfilter.columns import (
    COLUMN_TO_QB_FIELD,
    DEFAULT_REGISTRY,
    ColumnRegistry,
    ColumnType,
    available_operations,
    column_type,
    default_operation,
    field_name,
)


class TestColumnType:
    @pytest.mark.parametrize(
        ("column_id", "expected"),
        [
            ("size", "size"),
            ("amount_left", "size"),
            ("upspeed", "speed"),
            ("dl_limit", "speed"),
            ("eta", "duration"),
            ("reannounce", "duration"),
            ("progress", "percentage"),
            ("ratio", "number"),
            ("num_complete", "number"),
            ("added_on", "date"),
            ("private", "boolean"),
            ("state", "enum"),
            ("name", "string"),
            ("tags", "string"),
        ],
    )
    def test_known_columns(self, column_id: str, expected: ColumnType) -> None:
        assert column_type(column_id) == expected

    def test_unknown_column_is_string(self) -> None:
        assert column_type("not_a_column") == "string"


class TestFieldName:
    def test_direct_lookup(self) -> None:
        assert field_name("seeding_time") == "SeedingTime"

    def test_remapped_counters(self) -> None:
        assert field_name("num_seeds") == "NumComplete"
        assert field_name("num_leechs") == "NumIncomplete"

    def test_unknown_column(self) -> None:
        assert field_name("not_a_column") is None

    def test_every_column_has_a_field(self) -> None:
        assert all(field_name(column_id) for column_id in DEFAULT_REGISTRY.columns)


class TestRegistry:
    def test_tables_are_read_only(self) -> None:
        registry = ColumnRegistry({"size": "size"}, {"size": "Size"}, {})
        with pytest.raises(TypeError):
            registry._fields["extra"] = "Extra"  # type: ignore[index]

    def test_registry_is_independent_of_source_dict(self) -> None:
        fields = {"size": "Size"}
        registry = ColumnRegistry({}, fields, {})
        fields["size"] = "Changed"
        assert registry.field_name_of("size") == "Size"

    def test_remap_applies_before_lookup(self) -> None:
        registry = ColumnRegistry({"total": "number"}, {"total": "Total"}, {"live": "total"})
        assert registry.resolve("live") == "total"
        assert registry.field_name_of("live") == "Total"
        assert registry.type_of(registry.resolve("live")) == "number"

    def test_default_registry_matches_field_table(self) -> None:
        assert set(DEFAULT_REGISTRY.columns) == set(COLUMN_TO_QB_FIELD)


class TestOperations:
    @pytest.mark.parametrize(
        ("col_type", "expected"),
        [
            ("size", "gt"),
            ("speed", "gt"),
            ("duration", "gt"),
            ("percentage", "gt"),
            ("number", "gt"),
            ("date", "gt"),
            ("enum", "eq"),
            ("boolean", "eq"),
            ("string", "contains"),
        ],
    )
    def test_default_operation(self, col_type: ColumnType, expected: str) -> None:
        assert default_operation(col_type) == expected

    def test_numeric_operations(self) -> None:
        assert available_operations("size") == ["eq", "ne", "gt", "ge", "lt", "le", "between"]

    def test_date_operations(self) -> None:
        assert available_operations("date") == ["eq", "gt", "lt", "between"]

    def test_enum_operations(self) -> None:
        assert available_operations("enum") == ["eq", "ne"]

    def test_string_operations(self) -> None:
        assert available_operations("string") == ["eq", "ne", "contains", "notContains", "startsWith", "endsWith"]

    def test_default_is_always_available(self) -> None:
        for col_type in ("size", "speed", "duration", "percentage", "number", "date", "boolean", "enum", "string"):
            assert default_operation(col_type) in available_operations(col_type)  # type: ignore[arg-type]

    def test_returned_list_is_a_copy(self) -> None:
        ops = available_operations("string")
        ops.append("between")
        assert "between" not in available_operations("string")
