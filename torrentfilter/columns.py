# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""
Column registry for torrent list filtering.

Maps the column ids used by the torrent table to the semantic type that drives
unit conversion, and to the field name understood by qBittorrent's expression
interpreter. Both tables are built once at import time and exposed read-only.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal, Optional

from typing_extensions import TypeAlias

ColumnType: TypeAlias = Literal["size", "speed", "duration", "percentage", "number", "date", "boolean", "enum", "string"]
FilterOperation: TypeAlias = Literal["eq", "ne", "gt", "ge", "lt", "le", "between", "contains", "notContains", "startsWith", "endsWith"]

COLUMN_TYPES: tuple[ColumnType, ...] = ("size", "speed", "duration", "percentage", "number", "date", "boolean", "enum", "string")
FILTER_OPERATIONS: tuple[FilterOperation, ...] = ("eq", "ne", "gt", "ge", "lt", "le", "between", "contains", "notContains", "startsWith", "endsWith")

SIZE_COLUMNS = ("size", "total_size", "downloaded", "uploaded", "downloaded_session", "uploaded_session", "amount_left", "completed")
SPEED_COLUMNS = ("dlspeed", "upspeed", "dl_limit", "up_limit")
DURATION_COLUMNS = ("eta", "time_active", "seeding_time", "reannounce")
PERCENTAGE_COLUMNS = ("progress",)
NUMERIC_COLUMNS = ("ratio", "ratio_limit", "popularity", "num_seeds", "num_complete", "num_leechs", "num_incomplete", "availability", "priority")
DATE_COLUMNS = ("added_on", "completion_on", "seen_complete", "last_activity")
BOOLEAN_COLUMNS = ("private",)
ENUM_COLUMNS = ("state",)

NUMERIC_OPERATIONS: tuple[FilterOperation, ...] = ("eq", "ne", "gt", "ge", "lt", "le", "between")
DATE_OPERATIONS: tuple[FilterOperation, ...] = ("eq", "gt", "lt", "between")
BOOLEAN_OPERATIONS: tuple[FilterOperation, ...] = ("eq", "ne")
STRING_OPERATIONS: tuple[FilterOperation, ...] = ("eq", "ne", "contains", "notContains", "startsWith", "endsWith")

COLUMN_TO_QB_FIELD: dict[str, str] = {
    "name": "Name",
    "size": "Size",
    "total_size": "TotalSize",
    "progress": "Progress",
    "state": "State",
    "num_seeds": "NumSeeds",
    "num_complete": "NumComplete",
    "num_leechs": "NumLeechs",
    "num_incomplete": "NumIncomplete",
    "dlspeed": "DlSpeed",
    "upspeed": "UpSpeed",
    "eta": "ETA",
    "time_active": "TimeActive",
    "seeding_time": "SeedingTime",
    "ratio": "Ratio",
    "ratio_limit": "RatioLimit",
    "popularity": "Popularity",
    "category": "Category",
    "tags": "Tags",
    "added_on": "AddedOn",
    "completion_on": "CompletionOn",
    "seen_complete": "SeenComplete",
    "last_activity": "LastActivity",
    "tracker": "Tracker",
    "dl_limit": "DlLimit",
    "up_limit": "UpLimit",
    "downloaded": "Downloaded",
    "uploaded": "Uploaded",
    "downloaded_session": "DownloadedSession",
    "uploaded_session": "UploadedSession",
    "amount_left": "AmountLeft",
    "completed": "Completed",
    "save_path": "SavePath",
    "availability": "Availability",
    "infohash_v1": "InfohashV1",
    "infohash_v2": "InfohashV2",
    "reannounce": "Reannounce",
    "private": "Private",
    "priority": "Priority",
    "instanceName": "InstanceName",  # cross-instance view
}

# Connected peer counts are sorted by their swarm totals, so filter on those too
FILTER_COLUMN_REMAP: dict[str, str] = {
    "num_seeds": "num_complete",
    "num_leechs": "num_incomplete",
}


def _build_type_map() -> dict[str, ColumnType]:
    groups: list[tuple[tuple[str, ...], ColumnType]] = [
        (SIZE_COLUMNS, "size"),
        (SPEED_COLUMNS, "speed"),
        (DURATION_COLUMNS, "duration"),
        (PERCENTAGE_COLUMNS, "percentage"),
        (NUMERIC_COLUMNS, "number"),
        (DATE_COLUMNS, "date"),
        (BOOLEAN_COLUMNS, "boolean"),
        (ENUM_COLUMNS, "enum"),
    ]
    type_map: dict[str, ColumnType] = {}
    for columns, column_type in groups:
        for column_id in columns:
            type_map[column_id] = column_type
    return type_map


class ColumnRegistry:
    """
    Read-only lookup of column types and interpreter field names.

    The remap table is applied by `resolve` before the field name lookup, the
    type of a remapped column is that of its target.
    """

    def __init__(self, types: Mapping[str, ColumnType], fields: Mapping[str, str], remap: Mapping[str, str]) -> None:
        self._types: Mapping[str, ColumnType] = MappingProxyType(dict(types))
        self._fields: Mapping[str, str] = MappingProxyType(dict(fields))
        self._remap: Mapping[str, str] = MappingProxyType(dict(remap))

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def resolve(self, column_id: str) -> str:
        return self._remap.get(column_id, column_id)

    def type_of(self, column_id: str) -> ColumnType:
        return self._types.get(column_id, "string")

    def field_name_of(self, column_id: str) -> Optional[str]:
        return self._fields.get(self.resolve(column_id))


DEFAULT_REGISTRY = ColumnRegistry(_build_type_map(), COLUMN_TO_QB_FIELD, FILTER_COLUMN_REMAP)


def column_type(column_id: str) -> ColumnType:
    return DEFAULT_REGISTRY.type_of(column_id)


def field_name(column_id: str) -> Optional[str]:
    return DEFAULT_REGISTRY.field_name_of(column_id)


def default_operation(col_type: ColumnType) -> FilterOperation:
    if col_type in ("size", "speed", "duration", "percentage", "number", "date"):
        return "gt"
    if col_type in ("enum", "boolean"):
        return "eq"
    return "contains"


def available_operations(col_type: ColumnType) -> list[FilterOperation]:
    if col_type in ("size", "speed", "duration", "percentage", "number"):
        return list(NUMERIC_OPERATIONS)
    if col_type == "date":
        return list(DATE_OPERATIONS)
    if col_type in ("enum", "boolean"):
        return list(BOOLEAN_OPERATIONS)
    return list(STRING_OPERATIONS)
