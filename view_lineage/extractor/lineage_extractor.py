"""
Base column extraction from view XML.

This module defines the LineageExtractor class, which parses a view's XML
definition and pattern-matches the node table against the known view
shapes to recover the (schema, table, column) triples the view reads.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from view_lineage.models.config import LineageConfig
from view_lineage.models.dom import DomNode
from view_lineage.models.lineage import BaseColumnRef
from view_lineage.models.view import ViewKind, ViewRecord
from view_lineage.parser.dom_index import DomIndex
from view_lineage.parser.xml_parser import XmlParser

logger = logging.getLogger(__name__)

BASE_TABLE_DATASOURCE = "DATA_BASE_TABLE"


@dataclass(frozen=True)
class BaseTableDataSource:
    """A calculation view data source reading a database table directly."""

    id: str
    schema_name: str
    table_name: str


class LineageExtractor:
    """Recovers base columns referenced by a single view.

    Analytic and attribute views name their base columns on mapping
    elements (``keyMapping``, ``measureMapping``) carrying ``schemaName``,
    ``columnObjectName`` and ``columnName`` attributes.

    Calculation views declare base tables as ``DataSource`` elements of
    type ``DATA_BASE_TABLE`` with a ``columnObject`` child, and refer to
    them by id in two ways:

    * ``<input node="#ID"><mapping source="COLUMN" .../></input>``
    * an element with ``columnObjectName="ID"`` and ``columnName="COLUMN"``

    A column that is referenced but not used further down the view's data
    flow is still reported.

    Usage:
        extractor = LineageExtractor()
        columns = extractor.extract(view)   # raises XmlParseError
    """

    def __init__(
        self,
        config: Optional[LineageConfig] = None,
        parser: Optional[XmlParser] = None,
    ) -> None:
        self.config = config or LineageConfig()
        self.parser = parser or XmlParser(
            strip_whitespace_text=self.config.strip_whitespace_text
        )

    def extract(self, view: ViewRecord) -> Set[BaseColumnRef]:
        """Parse a view and return the base columns it references.

        Args:
            view: View record with its XML definition.

        Returns:
            Set of referenced base columns. Empty for unsupported kinds.

        Raises:
            XmlParseError: If the view's XML cannot be parsed.
        """
        nodes = self.parser.parse(view.cdata or "")
        return self.extract_from_nodes(view, nodes)

    def extract_from_nodes(
        self, view: ViewRecord, nodes: List[DomNode]
    ) -> Set[BaseColumnRef]:
        """Pattern-match an already parsed node table of a view."""
        index = DomIndex(nodes)
        kind = view.kind
        if kind in (ViewKind.ANALYTIC, ViewKind.ATTRIBUTE):
            columns = self.match_mappings(index)
        elif kind is ViewKind.CALCULATION:
            columns = self.match_calculation_view(index)
        else:
            logger.debug("No lineage pattern for %s", view)
            return set()

        logger.debug("%s references %d base column(s)", view, len(columns))
        return columns

    def match_mappings(self, index: DomIndex) -> Set[BaseColumnRef]:
        """Match mapping elements of analytic and attribute views.

        A mapping missing any of the three attributes is skipped.
        """
        columns: Set[BaseColumnRef] = set()
        for name in self.config.mapping_elements:
            for element in index.elements(name):
                attributes = index.attributes(element.node_id)
                column = _column_from_attributes(
                    attributes.get("schemaName"),
                    attributes.get("columnObjectName"),
                    attributes.get("columnName"),
                )
                if column is not None:
                    columns.add(column)
        return columns

    def match_calculation_view(self, index: DomIndex) -> Set[BaseColumnRef]:
        """Match base table data sources and their column references."""
        data_sources = self.find_base_table_data_sources(index)
        if not data_sources:
            return set()

        columns: Set[BaseColumnRef] = set()
        columns.update(self._match_input_mappings(index, data_sources))
        columns.update(self._match_column_object_references(index, data_sources))
        return columns

    def find_base_table_data_sources(
        self, index: DomIndex
    ) -> Dict[str, List[BaseTableDataSource]]:
        """Find ``DataSource`` elements reading database tables, keyed by id."""
        data_sources: Dict[str, List[BaseTableDataSource]] = {}
        for element in index.elements("DataSource"):
            attributes = index.attributes(element.node_id)
            source_id = attributes.get("id")
            if attributes.get("type") != BASE_TABLE_DATASOURCE or source_id is None:
                continue

            for column_object in index.child_elements(element.node_id, "columnObject"):
                table = index.attributes(column_object.node_id)
                schema_name = table.get("schemaName")
                table_name = table.get("columnObjectName")
                if schema_name is None or table_name is None:
                    continue
                data_sources.setdefault(source_id, []).append(
                    BaseTableDataSource(source_id, schema_name, table_name)
                )
        return data_sources

    def _match_input_mappings(
        self,
        index: DomIndex,
        data_sources: Dict[str, List[BaseTableDataSource]],
    ) -> Set[BaseColumnRef]:
        columns: Set[BaseColumnRef] = set()
        for node_attribute in index.attribute_nodes("node"):
            value = node_attribute.node_value or ""
            if not value.startswith("#"):
                continue
            sources = data_sources.get(value[1:])
            if not sources:
                continue

            # mapping elements are siblings of the node attribute
            for mapping in index.child_elements(node_attribute.parent_node_id, "mapping"):
                column_name = index.attribute(mapping.node_id, "source")
                if column_name is None:
                    continue
                for source in sources:
                    columns.add(
                        BaseColumnRef(source.schema_name, source.table_name, column_name)
                    )
        return columns

    def _match_column_object_references(
        self,
        index: DomIndex,
        data_sources: Dict[str, List[BaseTableDataSource]],
    ) -> Set[BaseColumnRef]:
        columns: Set[BaseColumnRef] = set()
        for reference in index.attribute_nodes("columnObjectName"):
            sources = data_sources.get(reference.node_value or "")
            if not sources:
                continue
            column_name = index.attribute(reference.parent_node_id, "columnName")
            if column_name is None:
                continue
            for source in sources:
                columns.add(
                    BaseColumnRef(source.schema_name, source.table_name, column_name)
                )
        return columns


def _column_from_attributes(
    schema_name: Optional[str],
    table_name: Optional[str],
    column_name: Optional[str],
) -> Optional[BaseColumnRef]:
    if schema_name is None or table_name is None or column_name is None:
        return None
    return BaseColumnRef(schema_name, table_name, column_name)
