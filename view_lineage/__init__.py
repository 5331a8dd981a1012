"""
View Lineage v1.0

Base column lineage for analytic, attribute and calculation views.
Parses the XML definitions stored in the repository catalog and reports
which physical table columns each view reads.

Example:
    >>> from view_lineage import DictViewCatalog, ViewLineageAnalyzer
    >>> catalog = DictViewCatalog.from_json("catalog.json")
    >>> result = ViewLineageAnalyzer(catalog).analyze("acme.sales", "CV_%")
    >>> for row in result.rows():
    ...     print(row.schema_name, row.table_name, row.column_name, row.views_text)
"""

from view_lineage.version import __version__, __version_info__

__author__ = "View Lineage Contributors"

from view_lineage.analyzer.usage_analyzer import BaseColumnUsageAnalyzer
from view_lineage.analyzer.view_analyzer import ViewLineageAnalyzer
from view_lineage.catalog.dbapi_provider import DbApiViewCatalog
from view_lineage.catalog.dict_provider import DictViewCatalog
from view_lineage.catalog.provider import ViewCatalog
from view_lineage.exceptions import (
    CatalogError,
    ErrorCode,
    LineageError,
    MalformedAttributesError,
    TokenizationError,
    UnknownEntityError,
    ViewParseError,
    XmlParseError,
)
from view_lineage.extractor.lineage_extractor import LineageExtractor
from view_lineage.models.config import ErrorMode, LineageConfig
from view_lineage.models.dom import DomNode, NodeType, ParseErrorRecord, ParseOutcome
from view_lineage.models.lineage import BaseColumnRef, LineageRow, LineageTable
from view_lineage.models.result import LineageResult, ViewFailure
from view_lineage.models.view import ViewKind, ViewRecord
from view_lineage.parser.dom_index import DomIndex
from view_lineage.parser.entities import decode_entities
from view_lineage.parser.xml_parser import XmlParser, parse_xml
from view_lineage.resolver.view_set_resolver import ResolvedViewSet, ViewSetResolver

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Analyzers
    "ViewLineageAnalyzer",
    "BaseColumnUsageAnalyzer",
    "LineageExtractor",
    "ViewSetResolver",
    "ResolvedViewSet",
    # Configuration
    "LineageConfig",
    "ErrorMode",
    # Results
    "LineageResult",
    "ViewFailure",
    "LineageTable",
    "LineageRow",
    "BaseColumnRef",
    # Parser
    "XmlParser",
    "parse_xml",
    "decode_entities",
    "DomIndex",
    "DomNode",
    "NodeType",
    "ParseOutcome",
    "ParseErrorRecord",
    # Catalog
    "ViewCatalog",
    "DictViewCatalog",
    "DbApiViewCatalog",
    "ViewRecord",
    "ViewKind",
    # Exceptions
    "LineageError",
    "XmlParseError",
    "TokenizationError",
    "MalformedAttributesError",
    "UnknownEntityError",
    "CatalogError",
    "ViewParseError",
    "ErrorCode",
]
