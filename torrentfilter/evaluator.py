# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""
Evaluate column filters against records held in memory.

Indexer search results cannot be filtered by qBittorrent, so the same filter
definitions are applied here as plain predicates. Unlike the compiler, a
malformed operand lets every record through instead of dropping the filter.
"""

import math
from collections.abc import Iterable, Mapping
from datetime import timezone
from typing import Any, Callable, Optional, TypedDict, Union

from typing_extensions import TypeAlias

from torrentfilter.columns import DEFAULT_REGISTRY, ColumnRegistry
from torrentfilter.compiler import STRING_CAST_COLUMNS, ColumnFilter
from torrentfilter.units import (
    DURATION_MULTIPLIERS,
    UNIT_MULTIPLIERS,
    convert_date_to_timestamp,
    convert_duration_to_seconds,
    convert_percentage_to_fraction,
    convert_size_to_bytes,
    parse_date,
    parse_number,
)


class SearchResult(TypedDict, total=False):
    title: str
    indexer: str
    size: int
    seeders: int
    categoryId: int
    categoryName: str
    source: str
    collection: str
    group: str
    publishDate: str
    downloadVolumeFactor: float


class TorrentRecord(TypedDict, total=False):
    name: str
    size: int
    total_size: int
    progress: float
    state: str
    num_seeds: int
    num_complete: int
    num_leechs: int
    num_incomplete: int
    dlspeed: int
    upspeed: int
    eta: int
    time_active: int
    seeding_time: int
    ratio: float
    ratio_limit: float
    popularity: float
    category: str
    tags: str
    added_on: int
    completion_on: int
    seen_complete: int
    last_activity: int
    tracker: str
    dl_limit: int
    up_limit: int
    downloaded: int
    uploaded: int
    downloaded_session: int
    uploaded_session: int
    amount_left: int
    completed: int
    save_path: str
    availability: float
    infohash_v1: str
    infohash_v2: str
    reannounce: int
    private: bool
    priority: int
    instanceName: str


CategoryMap: TypeAlias = Mapping[int, str]
Number: TypeAlias = Union[int, float]

SEARCH_RESULT_FIELDS: dict[str, Callable[[SearchResult, CategoryMap], Any]] = {
    "title": lambda result, _: result.get("title"),
    "indexer": lambda result, _: result.get("indexer"),
    "size": lambda result, _: result.get("size"),
    "seeders": lambda result, _: result.get("seeders"),
    "category": lambda result, categories: categories.get(result.get("categoryId", -1)) or result.get("categoryName") or "",
    "source": lambda result, _: result.get("source") or "",
    "collection": lambda result, _: result.get("collection") or "",
    "group": lambda result, _: result.get("group") or "",
    "published": lambda result, _: result.get("publishDate"),
    "freeleech": lambda result, _: result.get("downloadVolumeFactor") == 0,
}

NUMERIC_SEARCH_COLUMNS = frozenset({"size", "seeders"})


def _compare(actual: Any, operation: str, expected: Any, expected2: Any = None) -> bool:
    if operation == "eq":
        return bool(actual == expected)
    if operation == "ne":
        return bool(actual != expected)
    if operation == "gt":
        return bool(actual > expected)
    if operation == "ge":
        return bool(actual >= expected)
    if operation == "lt":
        return bool(actual < expected)
    if operation == "le":
        return bool(actual <= expected)
    if operation == "between":
        return bool(expected <= actual <= expected2)
    return True


def _match_text(actual: str, operation: str, expected: str) -> bool:
    if operation == "eq":
        return actual == expected
    if operation == "ne":
        return actual != expected
    if operation == "contains":
        return expected in actual
    if operation == "notContains":
        return expected not in actual
    if operation == "startsWith":
        return actual.startswith(expected)
    if operation == "endsWith":
        return actual.endswith(expected)
    return True


def _numeric_operands(column_filter: ColumnFilter, unit_key: Optional[str] = None) -> Optional[tuple[Number, Optional[Number]]]:
    """Parse value/value2, scaling by size unit when one is set. None means fail open."""
    first = parse_number(column_filter.get("value"))
    if first is None:
        return None
    raw_second = column_filter.get("value2")
    second = parse_number(raw_second) if raw_second else None

    unit = column_filter.get(unit_key) if unit_key else None
    if unit:
        if unit not in UNIT_MULTIPLIERS:
            return None
        unit2 = column_filter.get(f"{unit_key}2") or unit
        if unit2 not in UNIT_MULTIPLIERS:
            return None
        scaled_first: Number = convert_size_to_bytes(first, unit)
        scaled_second: Optional[Number] = convert_size_to_bytes(second, unit2) if second is not None else None
        return scaled_first, scaled_second
    return first, second


def _match_numeric(actual: Any, column_filter: ColumnFilter, unit_key: Optional[str]) -> bool:
    try:
        number = float(actual)
    except (TypeError, ValueError):
        return False

    operands = _numeric_operands(column_filter, unit_key)
    if operands is None:
        return True
    first, second = operands
    operation = column_filter.get("operation", "")
    if operation == "between" and second is None:
        return True
    return _compare(number, operation, first, second)


def _match_published(actual: Any, column_filter: ColumnFilter) -> bool:
    published = parse_date(str(actual))
    compare = parse_date(column_filter.get("value"))
    if compare is None:
        return True
    if published is None:
        return False

    operation = column_filter.get("operation", "")
    if operation == "eq":
        # calendar day, not instant
        return published.astimezone(timezone.utc).date() == compare.astimezone(timezone.utc).date()
    if operation == "gt":
        return published > compare
    if operation == "lt":
        return published < compare
    if operation == "between":
        compare2 = parse_date(column_filter.get("value2"))
        if compare2 is None:
            return True
        return compare <= published <= compare2
    return True


def _match_freeleech(result: SearchResult, column_filter: ColumnFilter) -> bool:
    factor = result.get("downloadVolumeFactor")
    selected = [token.strip() for token in str(column_filter.get("value") or "").split(",")]
    if not any(selected):
        return True

    for token in selected:
        if token == "true":
            matched = factor == 0
        elif token == "false":
            matched = factor == 1
        else:
            number = parse_number(token)
            matched = number is not None and factor == number
        if matched:
            return True
    return False


def _match_string(actual: Any, column_filter: ColumnFilter, case_sensitive: bool) -> bool:
    operation = column_filter.get("operation", "")
    value = str(column_filter.get("value") or "")
    text = str(actual) if case_sensitive else str(actual).lower()

    if "," in value and operation in ("eq", "contains"):
        tokens = [token.strip() for token in value.split(",") if token.strip()]
        if not tokens:
            return True
        for token in tokens:
            expected = token if case_sensitive else token.lower()
            if _match_text(text, operation, expected):
                return True
        return False

    expected = value if case_sensitive else value.lower()
    return _match_text(text, operation, expected)


def matches(result: SearchResult, column_filter: ColumnFilter, category_map: Optional[CategoryMap] = None, case_sensitive_default: bool = False) -> bool:
    """
    Check one indexer search result against one filter.

    Columns without an accessor are not filterable for search results and
    always match. A record missing the filtered field never matches.
    """
    column_id = column_filter.get("columnId", "")
    accessor = SEARCH_RESULT_FIELDS.get(column_id)
    if accessor is None:
        return True

    actual = accessor(result, category_map or {})
    if actual is None:
        return False

    if column_id in NUMERIC_SEARCH_COLUMNS:
        return _match_numeric(actual, column_filter, "sizeUnit" if column_id == "size" else None)
    if column_id == "published":
        return _match_published(actual, column_filter)
    if column_id == "freeleech":
        return _match_freeleech(result, column_filter)

    case_sensitive = column_filter.get("caseSensitive")
    if case_sensitive is None:
        case_sensitive = case_sensitive_default
    return _match_string(actual, column_filter, bool(case_sensitive))


def filter_search_results(results: Iterable[SearchResult], filters: Iterable[ColumnFilter], category_map: Optional[CategoryMap] = None, case_sensitive_default: bool = False) -> list[SearchResult]:
    active = list(filters)
    return [result for result in results if all(matches(result, f, category_map, case_sensitive_default) for f in active)]


def _torrent_operand(column_filter: ColumnFilter, col_type: str, raw: Optional[str], secondary: bool = False) -> Optional[Number]:
    if col_type == "date":
        timestamp = convert_date_to_timestamp(raw)
        return None if math.isnan(timestamp) else timestamp

    number = parse_number(raw)
    if number is None:
        return None
    if col_type in ("size", "speed"):
        unit_key, base_unit = ("sizeUnit", "B") if col_type == "size" else ("speedUnit", "B/s")
        unit = column_filter.get(unit_key) or base_unit
        if secondary:
            unit = column_filter.get(f"{unit_key}2") or unit
        return convert_size_to_bytes(number, unit) if unit in UNIT_MULTIPLIERS else None
    if col_type == "duration":
        unit = column_filter.get("durationUnit") or "seconds"
        if secondary:
            unit = column_filter.get("durationUnit2") or unit
        return convert_duration_to_seconds(number, unit) if unit in DURATION_MULTIPLIERS else None
    if col_type == "percentage":
        return convert_percentage_to_fraction(number)
    return number


def matches_torrent(torrent: Mapping[str, Any], column_filter: ColumnFilter, registry: ColumnRegistry = DEFAULT_REGISTRY) -> bool:
    """
    Check one torrent record the way qBittorrent would evaluate the compiled expression.

    Used for torrents already held locally (e.g. the cross-instance list).
    """
    column_id = column_filter.get("columnId", "")
    operation = column_filter.get("operation", "")
    if registry.field_name_of(column_id) is None:
        return True

    effective_id = registry.resolve(column_id)
    if effective_id not in torrent or torrent[effective_id] is None:
        return False
    actual = torrent[effective_id]
    col_type = registry.type_of(effective_id)
    value = column_filter.get("value") or ""

    if col_type in ("size", "speed", "duration", "date", "percentage", "number"):
        if operation not in ("eq", "ne", "gt", "ge", "lt", "le", "between"):
            return True
        first = _torrent_operand(column_filter, col_type, value)
        second = None
        if operation == "between":
            raw_second = column_filter.get("value2")
            second = _torrent_operand(column_filter, col_type, raw_second, secondary=True) if raw_second else None
            if second is None:
                return True
        if first is None:
            return True
        try:
            number = float(actual)
        except (TypeError, ValueError):
            return False
        return _compare(number, operation, first, second)

    if col_type == "boolean":
        expected = value.lower() == "true"
        if operation == "eq":
            return bool(actual) == expected
        if operation == "ne":
            return bool(actual) != expected
        return True

    case_folded = column_filter.get("caseSensitive") is False and (col_type == "string" or column_id in STRING_CAST_COLUMNS)
    text = str(actual).lower() if case_folded else str(actual)
    expected_text = value.lower() if case_folded else value
    return _match_text(text, operation, expected_text)


def filter_torrents(torrents: Iterable[Mapping[str, Any]], filters: Iterable[ColumnFilter], registry: ColumnRegistry = DEFAULT_REGISTRY) -> list[Mapping[str, Any]]:
    active = list(filters)
    return [torrent for torrent in torrents if all(matches_torrent(torrent, f, registry) for f in active)]

