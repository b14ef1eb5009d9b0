# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from typing import Any


class FilterDefinitionException(Exception):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        default_message = "Filter definitions must be a list of objects with columnId, operation and value"
        # keep caller supplied messages, fall back to the generic one
        if args:
            super().__init__(*args, **kwargs)
        else:
            super().__init__(default_message, **kwargs)


class ConfigLoadException(Exception):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        default_message = "An error occurred while loading config.py"
        if args:
            super().__init__(*args, **kwargs)
        else:
            super().__init__(default_message, **kwargs)
