"""
View lineage analyzer.

This module defines the ViewLineageAnalyzer class, which runs the whole
pipeline for one set of name patterns: resolve the view set, parse each
view's XML, match the known view shapes and aggregate the base columns
found into a LineageResult.
"""

import logging
from typing import Iterable, Optional

from view_lineage.catalog.provider import ViewCatalog
from view_lineage.exceptions import ViewParseError, XmlParseError
from view_lineage.extractor.lineage_extractor import LineageExtractor
from view_lineage.models.config import ErrorMode, LineageConfig
from view_lineage.models.result import LineageResult, ViewFailure
from view_lineage.models.view import ViewRecord
from view_lineage.resolver.view_set_resolver import ResolvedViewSet, ViewSetResolver
from view_lineage.utils.patterns import MATCH_ALL

logger = logging.getLogger(__name__)


class ViewLineageAnalyzer:
    """Base column lineage for analytic, attribute and calculation views.

    Views are analyzed one at a time, each parsed independently. What
    happens when a view's XML cannot be parsed depends on
    ``config.on_parse_error``: FAIL raises ViewParseError and abandons the
    batch, WARN and IGNORE record a ViewFailure on the result and carry on.
    Catalog errors always propagate.

    Usage:
        catalog = DictViewCatalog.from_json("catalog.json")
        analyzer = ViewLineageAnalyzer(catalog)
        result = analyzer.analyze("acme.sales", "CV_%")
        for row in result.rows():
            print(row.schema_name, row.table_name, row.column_name, row.views_text)
    """

    def __init__(
        self,
        catalog: ViewCatalog,
        config: Optional[LineageConfig] = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or LineageConfig()
        self.resolver = ViewSetResolver(catalog)
        self.extractor = LineageExtractor(self.config)

    def resolve(
        self,
        package_pattern: str,
        object_pattern: str = MATCH_ALL,
        suffix_pattern: str = MATCH_ALL,
        recursive: Optional[bool] = None,
    ) -> ResolvedViewSet:
        """Resolve the view set without analyzing it."""
        if recursive is None:
            recursive = self.config.recursive
        return self.resolver.resolve(
            package_pattern, object_pattern, suffix_pattern, recursive=recursive
        )

    def analyze(
        self,
        package_pattern: str,
        object_pattern: str = MATCH_ALL,
        suffix_pattern: str = MATCH_ALL,
        recursive: Optional[bool] = None,
    ) -> LineageResult:
        """List the base columns the matching views depend on.

        Args:
            package_pattern: LIKE pattern for the package id.
            object_pattern: LIKE pattern for the view name.
            suffix_pattern: LIKE pattern for the object suffix.
            recursive: Also analyze the views the matched views depend on
                (one hop). Defaults to ``config.recursive``.

        Returns:
            LineageResult with one row per referenced base column and the
            dependency edges followed while resolving the view set.

        Raises:
            ViewParseError: In fail mode, for the first view that does not
                parse.
            CatalogError: If the catalog cannot be read.
        """
        view_set = self.resolve(
            package_pattern, object_pattern, suffix_pattern, recursive
        )
        result = self.analyze_views(view_set.views)
        result.graph = view_set.graph
        return result

    def analyze_views(self, views: Iterable[ViewRecord]) -> LineageResult:
        """Analyze an explicit list of views.

        Raises:
            ViewParseError: In fail mode, for the first view that does not
                parse.
        """
        result = LineageResult()
        for view in views:
            result.views.append(view)
            if not view.is_supported:
                result.warnings.add_unsupported_view(view.view_id, view.object_suffix)
                continue

            try:
                columns = self.extractor.extract(view)
            except XmlParseError as e:
                self._handle_parse_error(result, view, e)
                continue

            result.table.update(view.view_id, columns)

        logger.debug(
            "Analyzed %d view(s): %d base column(s), %d failure(s)",
            len(result.views),
            len(result.table),
            len(result.failures),
        )
        return result

    def _handle_parse_error(
        self, result: LineageResult, view: ViewRecord, error: XmlParseError
    ) -> None:
        record = error.to_record()
        if self.config.on_parse_error == ErrorMode.FAIL:
            raise ViewParseError(view, record) from error

        failure = ViewFailure(view=view, error=record)
        result.failures.append(failure)
        if self.config.on_parse_error == ErrorMode.WARN:
            result.warnings.add_parse_failure(
                view.view_id, record.message, record.position
            )
            logger.warning(failure.describe())
