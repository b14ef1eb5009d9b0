# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""Tests for unit conversion and operand parsing."""

from __future__ import annotations

import math
from typing import Optional

import pytest

from torrentfilter.units import (
    convert_date_to_timestamp,
    convert_duration_to_seconds,
    convert_percentage_to_fraction,
    convert_size_to_bytes,
    format_number,
    parse_date,
    parse_number,
)


class TestParseNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("2", 2.0), (" 2.5 ", 2.5), ("-1", -1.0), (".5", 0.5), ("1e3", 1000.0), ("+4", 4.0)],
    )
    def test_numbers(self, raw: str, expected: float) -> None:
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "1,5", "1_000", "inf", "nan", "0x10", "2GiB", None])
    def test_not_numbers(self, raw: Optional[str]) -> None:
        assert parse_number(raw) is None


class TestFormatNumber:
    def test_integers_have_no_decimal_point(self) -> None:
        assert format_number(3.0) == "3"

    def test_fractions_are_shortest_repr(self) -> None:
        assert format_number(0.25) == "0.25"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1e-05, "0.00001"),
            (1e-06, "0.000001"),
            (1e-07, "1e-7"),
            (1.5e-07, "1.5e-7"),
            (123.456, "123.456"),
            (-0.5, "-0.5"),
            (100.0, "100"),
            (1e16, "10000000000000000"),
            (1e21, "1e+21"),
            (1.5e21, "1.5e+21"),
            (0.0, "0"),
        ],
    )
    def test_decimal_range_and_exponents(self, value: float, expected: str) -> None:
        assert format_number(value) == expected


class TestSizes:
    @pytest.mark.parametrize(
        ("unit", "multiplier"),
        [("B", 1), ("KiB", 1024), ("MiB", 1024 ** 2), ("GiB", 1024 ** 3), ("TiB", 1024 ** 4)],
    )
    def test_binary_multipliers(self, unit: str, multiplier: int) -> None:
        assert convert_size_to_bytes(3, unit) == 3 * multiplier
        assert convert_size_to_bytes(3, f"{unit}/s") == 3 * multiplier

    def test_floors_toward_zero(self) -> None:
        assert convert_size_to_bytes(1.9999, "B") == 1
        assert isinstance(convert_size_to_bytes(0.5, "KiB"), int)


class TestDurations:
    def test_multipliers(self) -> None:
        assert convert_duration_to_seconds(2, "seconds") == 2
        assert convert_duration_to_seconds(2, "minutes") == 120
        assert convert_duration_to_seconds(2, "hours") == 7200
        assert convert_duration_to_seconds(2, "days") == 172800

    def test_floors(self) -> None:
        assert convert_duration_to_seconds(1.25, "seconds") == 1


class TestPercentages:
    def test_not_floored(self) -> None:
        assert convert_percentage_to_fraction(12.5) == 0.125


class TestDates:
    def test_date_only_is_utc_midnight(self) -> None:
        assert convert_date_to_timestamp("2024-01-01") == 1704067200

    def test_offsets_are_honoured(self) -> None:
        assert convert_date_to_timestamp("2024-01-01T02:00:00+02:00") == 1704067200

    def test_naive_date_time_is_utc(self) -> None:
        assert convert_date_to_timestamp("2024-01-01T00:00:30.900") == 1704067230

    def test_invalid_date_is_nan(self) -> None:
        assert math.isnan(convert_date_to_timestamp("2024-13-45"))
        assert math.isnan(convert_date_to_timestamp(""))

    def test_parse_date_is_aware(self) -> None:
        parsed = parse_date("2024-04-25T14:30:00Z")
        assert parsed is not None
        assert parsed.utcoffset() is not None
