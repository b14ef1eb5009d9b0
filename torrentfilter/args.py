# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import argparse
from collections.abc import Sequence
from typing import Any

from torrentfilter import __version__
from torrentfilter.compiler import CONNECTIVES


class Args:
    """
    Parse Args
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config

    def build_parser(self) -> argparse.ArgumentParser:
        default = self.config.get("DEFAULT", {})
        parser = argparse.ArgumentParser(
            prog="filterexpr.py",
            description="Compile torrent column filters into qBittorrent expressions, or apply them to local records.",
        )
        parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
        parser.add_argument("-debug", "--debug", action="store_true", default=bool(default.get("debug", False)), help="Print every compiled fragment")
        parser.add_argument("-q", "--quiet", action="store_true", default=bool(default.get("suppress_warnings", False)), dest="suppress_warnings", help="Hide warnings about dropped filters")
        commands = parser.add_subparsers(dest="command", required=True)

        compile_parser = commands.add_parser("compile", help="Print the expression for a list of filters")
        compile_parser.add_argument("filters", help="JSON file, or inline JSON starting with [ or {")
        compile_parser.add_argument("-c", "--connective", choices=sorted(CONNECTIVES), default=str(default.get("filter_connective", "and")), help="How filters are joined")

        match_parser = commands.add_parser("match", help="Print the records that pass every filter")
        match_parser.add_argument("filters", help="JSON file, or inline JSON starting with [ or {")
        match_parser.add_argument("records", help="JSON list of records, file or inline")
        match_parser.add_argument("-k", "--kind", choices=["search", "torrent"], default="search", help="Record shape: indexer search results or torrents")
        match_parser.add_argument("--categories", help="JSON object mapping category id to name")
        match_parser.add_argument("--case-sensitive", action="store_true", default=bool(default.get("case_sensitive_search", False)), dest="case_sensitive", help="Compare search result text case-sensitively unless a filter says otherwise")

        columns_parser = commands.add_parser("columns", help="List filterable columns")
        columns_parser.add_argument("column", nargs="?", help="Only show this column")

        return parser

    def parse(self, argv: Sequence[str]) -> argparse.Namespace:
        return self.build_parser().parse_args(list(argv))
