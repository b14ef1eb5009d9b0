# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import json
import os
from typing import Any, cast

import aiofiles

from torrentfilter.compiler import ColumnFilter
from torrentfilter.exceptions import FilterDefinitionException

STRING_KEYS = ("columnId", "operation", "value", "value2", "sizeUnit", "sizeUnit2", "speedUnit", "speedUnit2", "durationUnit", "durationUnit2")
REQUIRED_KEYS = ("columnId", "operation", "value")


def parse_filter(raw: Any, index: int = 0) -> ColumnFilter:
    if not isinstance(raw, dict):
        raise FilterDefinitionException(f"Filter #{index} must be an object, got {type(raw).__name__}")
    entry = cast(dict[str, Any], raw)

    for key in REQUIRED_KEYS:
        if key not in entry:
            raise FilterDefinitionException(f"Filter #{index} is missing '{key}'")

    column_filter: dict[str, Any] = {}
    for key in STRING_KEYS:
        if key not in entry or entry[key] is None:
            continue
        value = entry[key]
        # numbers typed straight into JSON are accepted as their text form
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = json.dumps(value)
        if not isinstance(value, str):
            raise FilterDefinitionException(f"Filter #{index} key '{key}' must be a string, got {type(value).__name__}")
        column_filter[key] = value

    if "caseSensitive" in entry and entry["caseSensitive"] is not None:
        if not isinstance(entry["caseSensitive"], bool):
            raise FilterDefinitionException(f"Filter #{index} key 'caseSensitive' must be a boolean")
        column_filter["caseSensitive"] = entry["caseSensitive"]

    return cast(ColumnFilter, column_filter)


def parse_filters(document: Any) -> list[ColumnFilter]:
    """
    Validate a decoded filter document.

    Accepts either a list of filters or a single filter object.
    """
    if isinstance(document, dict):
        document = [document]
    if not isinstance(document, list):
        raise FilterDefinitionException()
    return [parse_filter(entry, index) for index, entry in enumerate(cast(list[Any], document))]


async def load_json(source: str) -> Any:
    """Decode inline JSON, or read and decode a JSON file."""
    text = source.strip()
    if not text.startswith(("[", "{")):
        if not os.path.exists(source):
            raise FileNotFoundError(f"No such file: {source}")
        async with aiofiles.open(source, encoding='utf-8') as f:
            text = await f.read()
    return json.loads(text)


async def load_filters(source: str) -> list[ColumnFilter]:
    return parse_filters(await load_json(source))
