"""
Tests for BaseColumnUsageAnalyzer.
"""

import pytest

from view_lineage import (
    BaseColumnUsageAnalyzer,
    CatalogError,
    DictViewCatalog,
    ErrorMode,
    LineageConfig,
    ViewCatalog,
    ViewParseError,
)


class TestBaseColumnUsageAnalyzer:
    """Tests for base column usage lookup."""

    def test_single_column(self, catalog):
        result = BaseColumnUsageAnalyzer(catalog).find_usage("SALES", "ORDERS", "AMOUNT")

        assert [(row.column_name, row.views_text) for row in result.rows()] == [
            ("AMOUNT", "acme.sales/AN_ORDERS, acme.sales/CV_ORDERS")
        ]

    def test_whole_table(self, catalog):
        result = BaseColumnUsageAnalyzer(catalog).find_usage("SALES", "ORDERS")

        assert [row.column_name for row in result.rows()] == ["AMOUNT", "ORDER_ID", "REGION"]

    def test_rows_restricted_to_requested_table(self, catalog):
        """Base views pulled in by expansion do not leak other tables."""
        result = BaseColumnUsageAnalyzer(catalog).find_usage("SALES", "ORDERS")

        assert {row.table_name for row in result.rows()} == {"ORDERS"}

    def test_views_deduplicated(self, catalog):
        result = BaseColumnUsageAnalyzer(catalog).find_usage("SALES")

        identities = [view.identity for view in result.views]
        assert len(identities) == len(set(identities))
        assert len(identities) == 3

    def test_package_filter(self, catalog):
        result = BaseColumnUsageAnalyzer(catalog).find_usage(
            "SALES", "ORDERS", package_pattern="acme.sales", object_pattern="AN_%"
        )

        assert {row.views_text for row in result.rows()} == {"acme.sales/AN_ORDERS"}

    def test_no_dependents(self, catalog):
        result = BaseColumnUsageAnalyzer(catalog).find_usage("HR")

        assert result.rows() == []
        assert result.views == []

    def test_without_expansion(self, catalog):
        result = BaseColumnUsageAnalyzer(catalog).find_usage(
            "SALES", "CUSTOMER", recursive=False
        )

        assert {row.views_text for row in result.rows()} == {"acme.sales/AT_CUSTOMER"}

    def test_dependencies_merged(self, catalog):
        result = BaseColumnUsageAnalyzer(catalog).find_usage("SALES", "ORDERS")

        edges = {
            (edge["dependent"], edge["base"]) for edge in result.to_dict()["dependencies"]
        }
        assert edges == {
            ("acme.sales/CV_ORDERS", "acme.sales/AT_CUSTOMER"),
            ("acme.sales/CV_ORDERS", "acme.sales/AN_ORDERS"),
        }

    def test_parse_failures_carried(self, catalog_dict):
        catalog_dict["table_dependencies"].append(
            {
                "dependent_object_name": "acme.broken/CV_BROKEN",
                "base_schema_name": "SALES",
                "base_object_name": "ORDERS",
            }
        )
        result = BaseColumnUsageAnalyzer(DictViewCatalog(catalog_dict)).find_usage(
            "SALES", "ORDERS"
        )

        assert [f.view.object_name for f in result.failures] == ["CV_BROKEN"]
        assert len(result.rows()) == 3

    def test_fail_mode(self, catalog_dict):
        catalog_dict["table_dependencies"].append(
            {
                "dependent_object_name": "acme.broken/CV_BROKEN",
                "base_schema_name": "SALES",
                "base_object_name": "ORDERS",
            }
        )
        usage = BaseColumnUsageAnalyzer(
            DictViewCatalog(catalog_dict), LineageConfig(on_parse_error=ErrorMode.FAIL)
        )
        with pytest.raises(ViewParseError):
            usage.find_usage("SALES", "ORDERS")

    def test_catalog_without_table_dependencies(self):
        class ViewsOnlyCatalog(ViewCatalog):
            def find_views(self, package_pattern, object_pattern, suffix_pattern):
                return []

            def dependency_edges(self, view):
                return []

            def cross_reference_edges(self, view):
                return []

        with pytest.raises(CatalogError):
            BaseColumnUsageAnalyzer(ViewsOnlyCatalog()).find_usage("SALES")
