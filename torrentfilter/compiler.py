# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""
Compile torrent table column filters into qBittorrent filter expressions.

Examples:
- {"columnId": "ratio", "operation": "gt", "value": "2"} => Ratio > 2
- {"columnId": "name", "operation": "contains", "value": "linux"} => Name contains "linux"
- {"columnId": "size", "operation": "gt", "value": "10", "sizeUnit": "GiB"} => Size > 10737418240
- {"columnId": "added_on", "operation": "gt", "value": "2024-01-01"} => AddedOn > 1704067200
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional, TypedDict

from rich.markup import escape

from torrentfilter.columns import DEFAULT_REGISTRY, ColumnRegistry, ColumnType
from torrentfilter.console import console
from torrentfilter.units import (
    DURATION_MULTIPLIERS,
    UNIT_MULTIPLIERS,
    convert_date_to_timestamp,
    convert_duration_to_seconds,
    convert_percentage_to_fraction,
    convert_size_to_bytes,
    format_number,
    parse_number,
)


class ColumnFilter(TypedDict, total=False):
    columnId: str
    operation: str
    value: str
    value2: str
    sizeUnit: str
    sizeUnit2: str
    speedUnit: str
    speedUnit2: str
    durationUnit: str
    durationUnit2: str
    caseSensitive: bool


class FilterResult(TypedDict):
    expr: Optional[str]
    error: Optional[str]


UNKNOWN_COLUMN = "unknown_column"
UNKNOWN_OPERATION = "unknown_operation"
MISSING_VALUE2 = "missing_value2"
INVALID_NUMBER = "invalid_number"
INVALID_DATE = "invalid_date"
INVALID_UNIT = "invalid_unit"

OPERATION_TO_EXPR: dict[str, str] = {
    "eq": "==",
    "ne": "!=",
    "gt": ">",
    "ge": ">=",
    "lt": "<",
    "le": "<=",
    "between": "between",
    "contains": "contains",
    "notContains": "not contains",
    "startsWith": "startsWith",
    "endsWith": "endsWith",
}

CONNECTIVES: dict[str, str] = {
    "and": "&&",
    "&&": "&&",
    "or": "||",
    "||": "||",
}

# Always compared as quoted text, even when the value looks numeric
QUOTED_COLUMNS = frozenset({"name", "state", "category", "tags", "tracker", "save_path", "infohash_v1", "infohash_v2"})

# Not stored as strings by qBittorrent, must go through string() before text functions
STRING_CAST_COLUMNS = frozenset({"state"})

# column type -> (unit key, base unit, multiplier table)
_UNIT_KEYS: dict[str, tuple[str, str, dict[str, int]]] = {
    "size": ("sizeUnit", "B", UNIT_MULTIPLIERS),
    "speed": ("speedUnit", "B/s", UNIT_MULTIPLIERS),
    "duration": ("durationUnit", "seconds", DURATION_MULTIPLIERS),
}


def escape_expr_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _ok(expr: str) -> FilterResult:
    return {"expr": expr, "error": None}


def _failed(error: str) -> FilterResult:
    return {"expr": None, "error": error}


class FilterCompiler:
    def __init__(self, config: Optional[Mapping[str, Any]] = None, registry: ColumnRegistry = DEFAULT_REGISTRY) -> None:
        default = dict((config or {}).get("DEFAULT", {}))
        self.registry = registry
        self.connective = str(default.get("filter_connective", "and"))
        self.suppress_warnings = bool(default.get("suppress_warnings", False))
        self.debug = bool(default.get("debug", False))

    def _warn(self, message: str) -> None:
        if not self.suppress_warnings:
            console.print(f"[yellow]{escape(message)}[/yellow]", highlight=False)

    def _unit(self, column_filter: ColumnFilter, col_type: ColumnType, secondary: bool) -> Optional[str]:
        unit_key, base_unit, table = _UNIT_KEYS[col_type]
        unit = column_filter.get(unit_key) or base_unit
        if secondary:
            unit = column_filter.get(f"{unit_key}2") or unit
        if unit not in table:
            return None
        return unit

    def _operand(self, column_filter: ColumnFilter, col_type: ColumnType, raw: str, secondary: bool = False) -> tuple[Optional[str], Optional[str]]:
        """Convert one operand to the interpreter's base unit, returning (literal, error)."""
        if col_type == "date":
            timestamp = convert_date_to_timestamp(raw)
            if math.isnan(timestamp):
                return None, INVALID_DATE
            return str(int(timestamp)), None

        number = parse_number(raw)
        if number is None:
            return None, INVALID_NUMBER

        if col_type in _UNIT_KEYS:
            unit = self._unit(column_filter, col_type, secondary)
            if unit is None:
                return None, INVALID_UNIT
            if col_type == "duration":
                return str(convert_duration_to_seconds(number, unit)), None
            return str(convert_size_to_bytes(number, unit)), None

        if col_type == "percentage":
            return format_number(convert_percentage_to_fraction(number)), None
        return format_number(number), None

    def compile_result(self, column_filter: ColumnFilter) -> FilterResult:
        """Compile one filter into an expression fragment, or the reason it was dropped."""
        column_id = str(column_filter.get("columnId") or "")
        operation = str(column_filter.get("operation") or "")
        value = str(column_filter.get("value") or "")

        effective_id = self.registry.resolve(column_id)
        field = self.registry.field_name_of(column_id)
        if not field:
            self._warn(f"Unknown column ID: {column_id}")
            return _failed(UNKNOWN_COLUMN)

        operator = OPERATION_TO_EXPR.get(operation)
        if not operator:
            self._warn(f"Unknown operation: {operation}")
            return _failed(UNKNOWN_OPERATION)

        col_type = self.registry.type_of(effective_id)

        if operation == "between":
            value2 = column_filter.get("value2")
            if not value2:
                self._warn(f"Between operation requires value2 for column {column_id}")
                return _failed(MISSING_VALUE2)
            high: Optional[str] = None
            low, error = self._operand(column_filter, col_type, value)
            if low is not None:
                high, error = self._operand(column_filter, col_type, str(value2), secondary=True)
            if low is None or high is None:
                self._warn(f"Invalid range values for {col_type} column {column_id}: {value!r}, {value2!r}")
                return _failed(error or INVALID_NUMBER)
            return _ok(f"({field} >= {low} && {field} <= {high})")

        if col_type in ("size", "speed", "duration", "date", "percentage"):
            literal, error = self._operand(column_filter, col_type, value)
            if literal is None:
                self._warn(f"Invalid value for {col_type} column {column_id}: {value!r}")
                return _failed(error or INVALID_NUMBER)
            return _ok(f"{field} {operator} {literal}")

        if col_type == "boolean":
            bool_value = "true" if value.lower() == "true" else "false"
            return _ok(f"{field} {operator} {bool_value}")

        needs_quotes = parse_number(value) is None or column_id in QUOTED_COLUMNS
        if not needs_quotes:
            return _ok(f"{field} {operator} {value.strip()}")

        escaped = escape_expr_value(value)
        needs_cast = column_id in STRING_CAST_COLUMNS
        # only lower() needs the string() cast, plain comparisons match the state token as is
        if column_filter.get("caseSensitive") is False and (col_type == "string" or needs_cast):
            field_ref = f"string({field})" if needs_cast else field
            return _ok(f'lower({field_ref}) {operator} "{escaped.lower()}"')
        return _ok(f'{field} {operator} "{escaped}"')

    def compile_filter(self, column_filter: ColumnFilter) -> Optional[str]:
        expr = self.compile_result(column_filter)["expr"]
        if self.debug:
            console.log(f"[cyan]Compiled filter {escape(str(dict(column_filter)))} -> {escape(str(expr))}")
        return expr

    def compile_filters(self, filters: Optional[Iterable[ColumnFilter]], connective: Optional[str] = None) -> Optional[str]:
        """
        Join every compilable filter with the connective (default from config, usually "and").
        Returns None when nothing compiles, which callers treat as no filter.
        """
        if not filters:
            return None

        token = (connective or self.connective).strip().lower()
        joiner = CONNECTIVES.get(token)
        if joiner is None:
            self._warn(f"Unrecognised connective {token!r}, joining with it as given")
            joiner = token

        parts = [expr for expr in (self.compile_filter(f) for f in filters) if expr is not None]
        if not parts:
            return None
        return f" {joiner} ".join(parts)


default_compiler = FilterCompiler()


def compile_filter(column_filter: ColumnFilter) -> Optional[str]:
    return default_compiler.compile_filter(column_filter)


def compile_filter_result(column_filter: ColumnFilter) -> FilterResult:
    return default_compiler.compile_result(column_filter)


def compile_filters(filters: Optional[Iterable[ColumnFilter]], connective: str = "and") -> Optional[str]:
    return default_compiler.compile_filters(filters, connective)
