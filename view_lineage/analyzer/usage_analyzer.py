"""
Base column usage analysis.

This module defines the BaseColumnUsageAnalyzer class, which answers the
reverse question of ViewLineageAnalyzer: given base table and column
patterns, which views use those columns.
"""

import logging
from typing import Optional

from view_lineage.analyzer.view_analyzer import ViewLineageAnalyzer
from view_lineage.catalog.provider import ViewCatalog
from view_lineage.models.config import LineageConfig
from view_lineage.models.result import LineageResult
from view_lineage.utils.patterns import MATCH_ALL, matches_like

logger = logging.getLogger(__name__)


class BaseColumnUsageAnalyzer:
    """Lists the views that use base columns matching given patterns.

    The catalog's table dependency relation yields the views directly
    depending on matching tables. Each of them is analyzed on its own (with
    the usual one-hop expansion when recursive), rows are restricted to the
    requested schema, table and column patterns, and the per-view results
    are merged. Merging is a set union per column, so a view reached from
    several starting points is listed once.

    Usage:
        usage = BaseColumnUsageAnalyzer(catalog)
        result = usage.find_usage("SALES", "ORDERS", "AMOUNT")
    """

    def __init__(
        self,
        catalog: ViewCatalog,
        config: Optional[LineageConfig] = None,
    ) -> None:
        self.catalog = catalog
        self.analyzer = ViewLineageAnalyzer(catalog, config)

    def find_usage(
        self,
        schema_pattern: str,
        table_pattern: str = MATCH_ALL,
        column_pattern: str = MATCH_ALL,
        package_pattern: str = MATCH_ALL,
        object_pattern: str = MATCH_ALL,
        suffix_pattern: str = MATCH_ALL,
        recursive: Optional[bool] = None,
    ) -> LineageResult:
        """Find views using base columns matching the patterns.

        Args:
            schema_pattern: LIKE pattern for the base table schema.
            table_pattern: LIKE pattern for the base table name.
            column_pattern: LIKE pattern for the base column name.
            package_pattern: LIKE pattern restricting the dependent views'
                packages.
            object_pattern: LIKE pattern restricting the dependent views'
                names.
            suffix_pattern: LIKE pattern restricting the dependent views'
                object suffix.
            recursive: Passed on to ViewLineageAnalyzer.analyze.

        Returns:
            Merged LineageResult restricted to matching columns.

        Raises:
            ViewParseError: In fail mode, for the first view that does not
                parse.
            CatalogError: If the catalog cannot be read or has no table
                dependency relation.
        """
        result = LineageResult()
        dependents = self.catalog.table_dependents(schema_pattern, table_pattern)
        logger.debug(
            "%d view(s) depend on tables matching %s.%s",
            len(dependents),
            schema_pattern,
            table_pattern,
        )

        for package_id, object_name in dependents:
            if not (
                matches_like(package_id, package_pattern)
                and matches_like(object_name, object_pattern)
            ):
                continue

            view_result = self.analyzer.analyze(
                package_id, object_name, suffix_pattern, recursive=recursive
            )
            view_result.table = view_result.table.filter(
                schema_pattern, table_pattern, column_pattern
            )
            result = result.merge(view_result)

        return result
