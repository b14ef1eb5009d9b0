# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
config = {
    "DEFAULT": {

        # How filters are joined when several are given: "and" or "or"
        # "and" emits &&, "or" emits ||
        "filter_connective": "and",

        # Set true to hide warnings about filters that were dropped
        # (unknown columns, bad numbers or dates, between without a second value)
        "suppress_warnings": False,

        # Print every compiled fragment
        "debug": False,

        # Search result filters without caseSensitive compare text case-insensitively
        # Set true to make them case-sensitive instead
        "case_sensitive_search": False,
    },
}
