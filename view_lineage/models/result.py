"""
Lineage run result model.

This module defines the LineageResult class, which holds the aggregated
base column lineage of a run together with the views analyzed and the
parse failures recorded along the way.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

import networkx as nx

from view_lineage.models.dom import ParseErrorRecord
from view_lineage.models.lineage import LineageRow, LineageTable
from view_lineage.models.view import ViewRecord
from view_lineage.utils.warnings import WarningCollector


def merge_dependency_graphs(first: nx.DiGraph, second: nx.DiGraph) -> nx.DiGraph:
    """Union two dependency graphs; relations of shared edges are unioned."""
    graph = nx.compose(first, second)
    for u, v, data in first.edges(data=True):
        if second.has_edge(u, v):
            graph.edges[u, v]["relations"] = set(data.get("relations", ())) | set(
                second.edges[u, v].get("relations", ())
            )
    return graph


def dependency_edges_to_dict(graph: nx.DiGraph) -> List[Dict[str, Any]]:
    """Serialize dependency edges as dependent/base view ids and relations."""
    return [
        {
            "dependent": graph.nodes[u]["view"].view_id,
            "base": graph.nodes[v]["view"].view_id,
            "relations": sorted(data.get("relations", ())),
        }
        for u, v, data in graph.edges(data=True)
    ]


@dataclass(frozen=True)
class ViewFailure:
    """A parse error recorded against the view it occurred in.

    Attributes:
        view: The view whose XML failed to parse.
        error: Structured parse error record.
    """

    view: ViewRecord
    error: ParseErrorRecord

    def describe(self) -> str:
        where = (
            f" at offset {self.error.position}"
            if self.error.position is not None
            else ""
        )
        return f"failed to parse view {self.view.view_id}{where}: {self.error.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "view": self.view.view_id,
            "object_suffix": self.view.object_suffix,
            **self.error.to_dict(),
        }


@dataclass
class LineageResult:
    """Result of a lineage run.

    An empty ``table`` with no ``failures`` means no view referenced a
    matching base column. Runs aborted in fail mode raise instead of
    returning a result.

    Attributes:
        table: Aggregated base column lineage.
        views: Views that were analyzed, in analysis order.
        failures: Views whose XML could not be parsed.
        warnings: Warnings and errors collected during the run.
        graph: View dependency edges followed while resolving the view set,
            as built by ViewSetResolver.

    Example:
        >>> result = analyzer.analyze("acme.sales", "AT_CUSTOMER")
        >>> result.succeeded
        True
        >>> [row.views_text for row in result.rows()]
        ['acme.sales/AT_CUSTOMER']
    """

    table: LineageTable = field(default_factory=LineageTable)
    views: List[ViewRecord] = field(default_factory=list)
    failures: List[ViewFailure] = field(default_factory=list)
    warnings: WarningCollector = field(default_factory=WarningCollector)
    graph: nx.DiGraph = field(default_factory=nx.DiGraph)

    @property
    def succeeded(self) -> bool:
        """True when every analyzed view parsed."""
        return not self.failures

    def rows(self) -> List[LineageRow]:
        return self.table.rows()

    def merge(self, other: LineageResult) -> LineageResult:
        """Combine two results; lineage is unioned, views deduplicated."""
        views = list({view.identity: view for view in self.views + other.views}.values())
        failures = list(dict.fromkeys(self.failures + other.failures))
        warnings = WarningCollector()
        warnings.extend(self.warnings)
        warnings.extend(other.warnings)
        return LineageResult(
            table=self.table.merge(other.table),
            views=views,
            failures=failures,
            warnings=warnings,
            graph=merge_dependency_graphs(self.graph, other.graph),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (for serialization)."""
        return {
            "columns": self.table.to_dict(),
            "views": [view.view_id for view in self.views],
            "failures": [failure.to_dict() for failure in self.failures],
            "warnings": [
                {
                    "level": warning.level,
                    "message": warning.message,
                    "context": warning.context,
                }
                for warning in self.warnings.get_all()
            ],
            "dependencies": dependency_edges_to_dict(self.graph),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
