"""
Abstract view catalog interface.

This module defines the ViewCatalog abstract base class. A catalog exposes
the view definitions stored in the repository together with the two
relations recording which views a view depends on. The lineage pipeline
only reads from the catalog.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from view_lineage.exceptions import CatalogError
from view_lineage.models.view import ViewRecord


class ViewCatalog(ABC):
    """Abstract interface for view catalogs.

    Implementations can read the catalog from various sources, such as:
    - The repository tables of a live database (see DbApiViewCatalog)
    - An exported JSON document (see DictViewCatalog)

    All patterns are SQL LIKE patterns (``%`` and ``_`` wildcards).

    Example:
        >>> class MyCatalog(ViewCatalog):
        ...     def find_views(self, package_pattern, object_pattern, suffix_pattern):
        ...         return []
        ...     def dependency_edges(self, view):
        ...         return []
        ...     def cross_reference_edges(self, view):
        ...         return []
    """

    @abstractmethod
    def find_views(
        self, package_pattern: str, object_pattern: str, suffix_pattern: str
    ) -> List[ViewRecord]:
        """Return the views whose identity matches the three patterns.

        Args:
            package_pattern: LIKE pattern for the package id.
            object_pattern: LIKE pattern for the object name.
            suffix_pattern: LIKE pattern for the object suffix.

        Returns:
            Matching view records, each carrying its XML definition.

        Raises:
            CatalogError: If the catalog cannot be read.
        """

    @abstractmethod
    def dependency_edges(self, view: ViewRecord) -> List[ViewRecord]:
        """Return the base views of a view from the object dependency relation.

        Args:
            view: The dependent view.

        Returns:
            View records the given view depends on. Objects that are not
            stored as views in the catalog are left out.

        Raises:
            CatalogError: If the catalog cannot be read.
        """

    @abstractmethod
    def cross_reference_edges(self, view: ViewRecord) -> List[ViewRecord]:
        """Return the base views of a view from the cross-reference relation.

        Args:
            view: The referencing view.

        Returns:
            View records referenced by the given view.

        Raises:
            CatalogError: If the catalog cannot be read.
        """

    def table_dependents(
        self, schema_pattern: str, table_pattern: str
    ) -> List[Tuple[str, str]]:
        """Return views that directly depend on matching base tables.

        This is optional; it backs base column usage lookups. The default
        implementation raises CatalogError.

        Args:
            schema_pattern: LIKE pattern for the base table's schema.
            table_pattern: LIKE pattern for the base table's name.

        Returns:
            Distinct (package_id, object_name) pairs.

        Raises:
            CatalogError: If the catalog cannot answer the query.
        """
        raise CatalogError(
            f"{type(self).__name__} does not expose table dependencies"
        )
