"""
Command-line interface for view lineage v1.0.

This module provides a command-line interface for listing the base columns
used by information views, finding the views that use given base columns,
and dumping the parsed node table of a single view.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style, init
from tabulate import tabulate

from view_lineage import (
    BaseColumnUsageAnalyzer,
    DictViewCatalog,
    ErrorMode,
    LineageConfig,
    ViewLineageAnalyzer,
    XmlParser,
)
from view_lineage.catalog.provider import ViewCatalog
from view_lineage.exceptions import LineageError
from view_lineage.models.dom import DomNode
from view_lineage.models.result import LineageResult, dependency_edges_to_dict

logger = logging.getLogger(__name__)

USE_COLOR = True
QUIET = False

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARSE_FAILURES = 2

TABLE_HEADERS = ["Schema", "Table", "Column", "Views"]


def _colored(color: str, msg: str) -> str:
    if USE_COLOR:
        return f"{color}{msg}{Style.RESET_ALL}"
    return msg


def print_success(msg: str) -> None:
    """Print success message."""
    if not QUIET:
        print(_colored(Fore.GREEN, f"[OK] {msg}"))


def print_error(msg: str) -> None:
    """Print error message."""
    print(_colored(Fore.RED, f"[ERROR] {msg}"), file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    print(_colored(Fore.YELLOW, f"[WARN] {msg}"), file=sys.stderr)


def print_info(msg: str) -> None:
    """Print info message."""
    if not QUIET:
        print(_colored(Fore.CYAN, msg))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="view-lineage",
        description="Base column lineage for information views - v1.0",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Base columns of all views in a package
  %(prog)s catalog.json --package acme.sales

  # Only calculation views, without dependency expansion
  %(prog)s catalog.json --package acme.%% --suffix calculationview --no-recursive

  # Which views use SALES.ORDERS.AMOUNT
  %(prog)s catalog.json --usage-schema SALES --usage-table ORDERS --usage-column AMOUNT

  # Node table of one view
  %(prog)s catalog.json --dump-dom acme.sales/AT_CUSTOMER

  # Export as JSON
  %(prog)s catalog.json --package acme.sales --export lineage.json

Name arguments are LIKE patterns: '%%' matches any run of characters and
'_' any single character.
        """,
    )

    # === Input parameters ===
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument(
        "catalog_file", help="Catalog export file (JSON format)"
    )

    # === Query parameters ===
    query_group = parser.add_argument_group("Query Options")
    query_group.add_argument(
        "--package", "-p", metavar="PATTERN", help="Package id pattern"
    )
    query_group.add_argument(
        "--object",
        default="%",
        metavar="PATTERN",
        help="View name pattern (default: %%)",
    )
    query_group.add_argument(
        "--suffix",
        default="%",
        metavar="PATTERN",
        help="Object suffix pattern (default: %%)",
    )
    query_group.add_argument(
        "--no-recursive",
        action="store_true",
        help="Do not analyze the views the matched views depend on",
    )
    query_group.add_argument(
        "--usage-schema",
        metavar="PATTERN",
        help="Find views using base columns in schemas matching this pattern",
    )
    query_group.add_argument(
        "--usage-table",
        default="%",
        metavar="PATTERN",
        help="Base table pattern for usage mode (default: %%)",
    )
    query_group.add_argument(
        "--usage-column",
        default="%",
        metavar="PATTERN",
        help="Base column pattern for usage mode (default: %%)",
    )
    query_group.add_argument(
        "--dump-dom",
        metavar="PACKAGE/OBJECT",
        help="Print the parsed node table of one view",
    )

    # === Output parameters ===
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--format",
        "-f",
        choices=["pretty", "table", "json"],
        default="pretty",
        help="Output format (default: pretty)",
    )
    output_group.add_argument(
        "--export", "-o", metavar="FILE", help="Export the result as JSON to file"
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )

    # === Configuration parameters ===
    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--on-parse-error",
        choices=ErrorMode.values(),
        default=ErrorMode.WARN.value,
        help="What to do with views whose XML does not parse (default: warn)",
    )
    config_group.add_argument(
        "--keep-whitespace",
        action="store_true",
        help="Keep whitespace-only text nodes",
    )
    config_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI main entry point.

    Supported commands:
        # Base columns of matching views
        view-lineage catalog.json --package acme.sales

        # Views using matching base columns
        view-lineage catalog.json --usage-schema SALES --usage-table ORDERS

        # Node table of one view
        view-lineage catalog.json --dump-dom acme.sales/AT_CUSTOMER

    Exit status is 0 on success, 1 on errors and 2 when the run finished
    but some views could not be parsed.
    """
    global USE_COLOR, QUIET

    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.package or args.usage_schema or args.dump_dom):
        parser.error("one of --package, --usage-schema or --dump-dom is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.no_color:
        USE_COLOR = False
    else:
        init(autoreset=True)
    QUIET = args.format == "json"

    try:
        # 1. Load catalog
        catalog_path = Path(args.catalog_file)
        if not catalog_path.exists():
            print_error(f"File not found: {args.catalog_file}")
            sys.exit(EXIT_ERROR)

        print_info(f"Loading catalog from: {catalog_path}")
        catalog = DictViewCatalog.from_json(catalog_path)

        # 2. Configure analyzer
        config = LineageConfig(
            on_parse_error=ErrorMode(args.on_parse_error),
            recursive=not args.no_recursive,
            strip_whitespace_text=not args.keep_whitespace,
        )

        # 3. Handle commands
        if args.dump_dom:
            sys.exit(handle_dump_dom(catalog, args.dump_dom, config, args.format))

        if args.usage_schema:
            print_info("Finding base column usage...")
            result = BaseColumnUsageAnalyzer(catalog, config).find_usage(
                args.usage_schema,
                args.usage_table,
                args.usage_column,
                package_pattern=args.package or "%",
                object_pattern=args.object,
                suffix_pattern=args.suffix,
            )
        else:
            print_info("Analyzing views...")
            result = ViewLineageAnalyzer(catalog, config).analyze(
                args.package, args.object, args.suffix
            )

        print_success(
            f"Analysis complete! {len(result.views)} view(s), "
            f"{len(result.table)} base column(s)."
        )
        handle_result(result, args.format)
        if args.format == "pretty":
            show_dependencies(result)

        # 4. Export (if needed)
        if args.export:
            handle_export(result, args.export)

        # 5. Show warnings (if any)
        show_warnings(result)

        if not result.succeeded:
            sys.exit(EXIT_PARSE_FAILURES)

    except LineageError as e:
        print_error(f"Lineage analysis failed: {e}")
        sys.exit(EXIT_ERROR)


def parse_view_ref(ref: str) -> tuple[str, str]:
    """
    Parse view reference string.

    Args:
        ref: Format "package/object"

    Returns:
        (package_id, object_name)

    Raises:
        ValueError: If format is incorrect
    """
    package_id, sep, object_name = ref.rpartition("/")
    if not sep or not package_id or not object_name:
        raise ValueError(
            f"Invalid view reference: '{ref}'. "
            f"Expected format: 'package_id/object_name'"
        )
    return package_id, object_name


def handle_dump_dom(
    catalog: ViewCatalog, view_ref: str, config: LineageConfig, format: str
) -> int:
    """Handle --dump-dom command."""
    try:
        package_id, object_name = parse_view_ref(view_ref)
    except ValueError as e:
        print_error(str(e))
        return EXIT_ERROR

    views = [
        view
        for view in catalog.find_views(package_id, object_name, "%")
        if view.package_id == package_id and view.object_name == object_name
    ]
    if not views:
        print_error(f"View not found: {view_ref}")
        return EXIT_ERROR

    view = views[0]
    outcome = XmlParser(config.strip_whitespace_text).try_parse(view.cdata)

    if format == "json":
        print(
            json.dumps(
                {
                    "view": view.view_id,
                    "nodes": [node.to_dict() for node in outcome.nodes],
                    "error": outcome.error.to_dict() if outcome.error else None,
                },
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        print_info(f"\nNode table of {view} ({len(outcome.nodes)} nodes):\n")
        print(_node_table(outcome.nodes))

    if outcome.error is not None:
        print_error(f"Failed to parse {view}: {outcome.error.message}")
        return EXIT_PARSE_FAILURES
    return EXIT_OK


def _node_table(nodes: List[DomNode]) -> str:
    rows = [
        [
            node.node_id,
            node.parent_node_id,
            node.node_type.name,
            node.node_name,
            node.node_value,
            node.pos,
            node.length,
        ]
        for node in nodes
    ]
    return tabulate(
        rows,
        headers=["Id", "Parent", "Type", "Name", "Value", "Pos", "Len"],
        tablefmt="simple",
    )


def handle_result(result: LineageResult, format: str) -> None:
    """Show the lineage rows."""
    if format == "json":
        print(result.to_json(indent=2))
        return

    rows = result.rows()
    if not rows:
        print_warning("No base columns found")
        return

    if format == "table":
        print(
            tabulate(
                [
                    [row.schema_name, row.table_name, row.column_name, row.views_text]
                    for row in rows
                ],
                headers=TABLE_HEADERS,
                tablefmt="github",
            )
        )
        return

    # pretty: group by base table
    print_info("\n" + "=" * 60)
    print_info("Base Columns")
    print_info("=" * 60 + "\n")
    current_table = None
    for row in rows:
        table = f"{row.schema_name}.{row.table_name}"
        if table != current_table:
            if current_table is not None:
                print()
            print(_colored(Fore.YELLOW, f"{table}:"))
            current_table = table
        print(f"  - {row.column_name} <- {row.views_text}")


def show_dependencies(result: LineageResult) -> None:
    """Show the view dependency edges followed during resolution."""
    edges = dependency_edges_to_dict(result.graph)
    if not edges:
        return

    print_info("\nView Dependencies:\n")
    for edge in edges:
        relations = ", ".join(edge["relations"])
        print(f"  {edge['dependent']} -> {edge['base']} ({relations})")


def handle_export(result: LineageResult, output_file: str) -> None:
    """Export the result as JSON."""
    output_path = Path(output_file)

    print_info(f"\nExporting lineage to: {output_path}")
    try:
        output_path.write_text(result.to_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise LineageError(f"Failed to export to {output_path}: {e}") from e
    print_success(f"Exported to {output_path}")


def show_warnings(result: LineageResult) -> None:
    """Show warning messages."""
    warnings = result.warnings.get_all()
    if warnings:
        print_warning(f"{len(warnings)} warning(s):")
        for i, warning in enumerate(warnings, 1):
            print(f"  {i}. {warning}", file=sys.stderr)


if __name__ == "__main__":
    main()
