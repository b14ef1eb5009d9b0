#!/usr/bin/env python3
# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import argparse
import asyncio
import importlib.util
import json
import os
import sys
from collections.abc import Sequence
from typing import Any, Optional, cast

from rich.markup import escape
from rich.table import Table

from torrentfilter.args import Args
from torrentfilter.columns import DEFAULT_REGISTRY, available_operations, default_operation
from torrentfilter.compiler import FilterCompiler
from torrentfilter.configvalidator import ConfigValidationError, describe_validation, validate_config
from torrentfilter.console import console
from torrentfilter.evaluator import filter_search_results, filter_torrents
from torrentfilter.exceptions import ConfigLoadException, FilterDefinitionException
from torrentfilter.filters import load_filters, load_json

base_dir = os.path.abspath(os.path.dirname(__file__))


def load_config(path: Optional[str] = None) -> dict[str, Any]:
    """Load data/config.py, falling back to data/example-config.py."""
    if path is None:
        path = os.path.join(base_dir, "data", "config.py")
        if not os.path.exists(path):
            path = os.path.join(base_dir, "data", "example-config.py")
        if not os.path.exists(path):
            # installed without the data directory
            return {"DEFAULT": {}}

    spec = importlib.util.spec_from_file_location("filterexpr_config", path)
    if spec is None or spec.loader is None:
        raise ConfigLoadException(f"Cannot load config from {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except (OSError, SyntaxError) as e:
        raise ConfigLoadException(f"Failed to load {path}: {e}") from e

    config = getattr(module, "config", None)
    is_valid, errors, warnings = validate_config(config)
    if not is_valid:
        raise ConfigValidationError(describe_validation(errors, warnings))
    if warnings and not cast(dict[str, Any], config)["DEFAULT"].get("suppress_warnings", False):
        console.print(f"[yellow]{escape(describe_validation(errors, warnings))}[/yellow]")
    return cast(dict[str, Any], config)


def columns_table(column: Optional[str] = None) -> Table:
    table = Table(title="Filterable columns", show_header=True, header_style="bold cyan")
    table.add_column("Column", style="cyan")
    table.add_column("Field", style="magenta")
    table.add_column("Type")
    table.add_column("Default")
    table.add_column("Operations")

    for column_id in DEFAULT_REGISTRY.columns:
        if column and column_id != column:
            continue
        col_type = DEFAULT_REGISTRY.type_of(DEFAULT_REGISTRY.resolve(column_id))
        table.add_row(
            column_id,
            DEFAULT_REGISTRY.field_name_of(column_id) or "",
            col_type,
            default_operation(col_type),
            ", ".join(available_operations(col_type)),
        )
    return table


async def run(args: argparse.Namespace, config: dict[str, Any]) -> int:
    effective = {"DEFAULT": {**config.get("DEFAULT", {}), "debug": args.debug, "suppress_warnings": args.suppress_warnings}}

    if args.command == "columns":
        if args.column and DEFAULT_REGISTRY.field_name_of(args.column) is None:
            console.print(f"[red]Unknown column: {escape(args.column)}[/red]")
            return 1
        console.print(columns_table(args.column))
        return 0

    filters = await load_filters(args.filters)

    if args.command == "compile":
        compiler = FilterCompiler(effective)
        expr = compiler.compile_filters(filters, args.connective)
        if expr is None:
            console.print("[yellow]No usable filters, nothing to filter on[/yellow]")
            return 0
        console.print(expr, markup=False, highlight=False, soft_wrap=True)
        return 0

    records = await load_json(args.records)
    if not isinstance(records, list):
        console.print("[red]Records must be a JSON list[/red]")
        return 1

    if args.kind == "torrent":
        matched: list[Any] = list(filter_torrents(records, filters))
    else:
        category_map: dict[int, str] = {}
        if args.categories:
            raw_categories = await load_json(args.categories)
            if not isinstance(raw_categories, dict):
                console.print("[red]Categories must be a JSON object of id to name[/red]")
                return 1
            try:
                category_map = {int(key): str(name) for key, name in cast(dict[str, Any], raw_categories).items()}
            except ValueError:
                console.print("[red]Category ids must be integers[/red]")
                return 1
        matched = list(filter_search_results(records, filters, category_map, args.case_sensitive))

    if args.debug:
        console.log(f"[cyan]{len(matched)} of {len(records)} records matched")
    console.print_json(json.dumps(matched))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = load_config()
    except (ConfigLoadException, ConfigValidationError) as e:
        console.print(f"[bold red]{escape(str(e))}[/bold red]")
        return 1

    args = Args(config).parse(sys.argv[1:] if argv is None else argv)
    try:
        return asyncio.run(run(args, config))
    except FilterDefinitionException as e:
        console.print(f"[bold red]Invalid filters: {escape(str(e))}[/bold red]")
    except FileNotFoundError as e:
        console.print(f"[bold red]{escape(str(e))}[/bold red]")
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Invalid JSON: {escape(str(e))}[/bold red]")
    return 1


if __name__ == "__main__":
    sys.exit(main())
