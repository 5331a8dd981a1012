"""
View set resolution.

This module defines the ViewSetResolver class, which decides which catalog
views a lineage run analyzes: the views matching the name patterns, plus,
when expansion is requested, the views those depend on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

import networkx as nx

from view_lineage.catalog.provider import ViewCatalog
from view_lineage.models.result import dependency_edges_to_dict
from view_lineage.models.view import ViewRecord
from view_lineage.utils.patterns import MATCH_ALL

logger = logging.getLogger(__name__)

DEPENDENCY_RELATION = "dependency"
CROSS_REFERENCE_RELATION = "cross_reference"


@dataclass
class ResolvedViewSet:
    """The views selected for one lineage run.

    Attributes:
        top_level: Views matching the name patterns, in catalog order.
        base: Views added by the dependency expansion, excluding views
            already in ``top_level``.
        graph: networkx DiGraph with an edge dependent -> base for every
            edge followed during expansion. Nodes are ViewRecord identity
            tuples; node attribute ``view`` holds the record and edge
            attribute ``relations`` the catalog relations that produced it.
    """

    top_level: List[ViewRecord] = field(default_factory=list)
    base: List[ViewRecord] = field(default_factory=list)
    graph: nx.DiGraph = field(default_factory=nx.DiGraph)

    @property
    def views(self) -> List[ViewRecord]:
        """All selected views, top-level views first, without duplicates."""
        return self.top_level + self.base

    def view_ids(self) -> List[str]:
        return [view.view_id for view in self.views]

    def base_views_of(self, view: ViewRecord) -> List[ViewRecord]:
        """Return the base views recorded for a top-level view."""
        if view.identity not in self.graph:
            return []
        return [
            self.graph.nodes[node]["view"]
            for node in self.graph.successors(view.identity)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "top_level": [view.view_id for view in self.top_level],
            "base": [view.view_id for view in self.base],
            "edges": dependency_edges_to_dict(self.graph),
        }

    def __iter__(self) -> Iterator[ViewRecord]:
        return iter(self.views)

    def __len__(self) -> int:
        return len(self.top_level) + len(self.base)


class ViewSetResolver:
    """Resolves name patterns into the set of views to analyze.

    Expansion follows dependency and cross-reference edges exactly one hop
    from the top-level views. A view two hops away is not included, even
    with ``recursive=True``.

    Usage:
        resolver = ViewSetResolver(catalog)
        view_set = resolver.resolve("acme.sales", "CV_%", recursive=True)
        for view in view_set:
            ...
    """

    def __init__(self, catalog: ViewCatalog) -> None:
        self.catalog = catalog

    def resolve(
        self,
        package_pattern: str,
        object_pattern: str = MATCH_ALL,
        suffix_pattern: str = MATCH_ALL,
        recursive: bool = True,
    ) -> ResolvedViewSet:
        """Select the views to analyze.

        Args:
            package_pattern: LIKE pattern for the package id.
            object_pattern: LIKE pattern for the view name.
            suffix_pattern: LIKE pattern for the object suffix.
            recursive: If True, add the views the matched views depend on
                (one hop, both catalog relations).

        Returns:
            ResolvedViewSet, deduplicated by view identity.

        Raises:
            CatalogError: If the catalog cannot be read.
        """
        view_set = ResolvedViewSet()
        seen: Dict[Tuple[str, str, str], ViewRecord] = {}

        for view in self.catalog.find_views(
            package_pattern, object_pattern, suffix_pattern
        ):
            if not view.is_supported or view.identity in seen:
                continue
            seen[view.identity] = view
            view_set.top_level.append(view)
            view_set.graph.add_node(view.identity, view=view)

        logger.debug(
            "Matched %d top-level view(s) for %s/%s.%s",
            len(view_set.top_level),
            package_pattern,
            object_pattern,
            suffix_pattern,
        )
        if not recursive:
            return view_set

        for view in view_set.top_level:
            for relation, base_views in (
                (DEPENDENCY_RELATION, self.catalog.dependency_edges(view)),
                (CROSS_REFERENCE_RELATION, self.catalog.cross_reference_edges(view)),
            ):
                for base_view in base_views:
                    if not base_view.is_supported:
                        continue
                    self._add_edge(view_set.graph, view, base_view, relation)
                    if base_view.identity not in seen:
                        seen[base_view.identity] = base_view
                        view_set.base.append(base_view)

        logger.debug("Expansion added %d base view(s)", len(view_set.base))
        return view_set

    @staticmethod
    def _add_edge(
        graph: nx.DiGraph, dependent: ViewRecord, base: ViewRecord, relation: str
    ) -> None:
        if base.identity not in graph:
            graph.add_node(base.identity, view=base)
        if graph.has_edge(dependent.identity, base.identity):
            graph.edges[dependent.identity, base.identity]["relations"].add(relation)
        else:
            graph.add_edge(dependent.identity, base.identity, relations={relation})
