"""
Data models for view lineage extraction.

This package contains the core data structures: the DOM node table, catalog
view records, base column lineage, configuration and run results.
"""

from view_lineage.models.config import ErrorMode, LineageConfig
from view_lineage.models.dom import DomNode, NodeType, ParseErrorRecord, ParseOutcome
from view_lineage.models.lineage import BaseColumnRef, LineageRow, LineageTable
from view_lineage.models.result import LineageResult, ViewFailure
from view_lineage.models.view import ViewKind, ViewRecord

__all__ = [
    "BaseColumnRef",
    "DomNode",
    "ErrorMode",
    "LineageConfig",
    "LineageResult",
    "LineageRow",
    "LineageTable",
    "NodeType",
    "ParseErrorRecord",
    "ParseOutcome",
    "ViewFailure",
    "ViewKind",
    "ViewRecord",
]
