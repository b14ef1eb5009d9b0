# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from torrentfilter.columns import available_operations, column_type, default_operation, field_name
from torrentfilter.compiler import ColumnFilter, FilterCompiler, FilterResult, compile_filter, compile_filter_result, compile_filters
from torrentfilter.evaluator import filter_search_results, filter_torrents, matches, matches_torrent

__version__ = "1.0.0"

__all__ = [
    "ColumnFilter",
    "FilterCompiler",
    "FilterResult",
    "available_operations",
    "column_type",
    "compile_filter",
    "compile_filter_result",
    "compile_filters",
    "default_operation",
    "field_name",
    "filter_search_results",
    "filter_torrents",
    "matches",
    "matches_torrent",
]
