"""
Dictionary-based view catalog implementation.

This module defines the DictViewCatalog class, which implements the
ViewCatalog interface over an in-memory dictionary that mirrors the
repository relations. This is useful for testing, for offline analysis of
an exported catalog, and for the command line tool.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple, Union

from view_lineage.catalog.provider import ViewCatalog
from view_lineage.exceptions import CatalogError
from view_lineage.models.view import ViewRecord
from view_lineage.utils.patterns import matches_like


class DictViewCatalog(ViewCatalog):
    """View catalog that reads catalog relations from a dictionary.

    The dictionary holds up to four lists, named after the repository
    relations they mirror:

    * ``views``: ``package_id``, ``object_name``, ``object_suffix`` and
      ``cdata`` (the XML definition) of each active object.
    * ``dependencies``: ``dependent_object_name`` and ``base_object_name``,
      both written as ``package/object``.
    * ``cross_references``: ``from_package_id``, ``from_object_name``,
      ``from_object_suffix``, ``to_package_id``, ``to_object_name``,
      ``to_object_suffix``.
    * ``table_dependencies``: ``dependent_object_name`` (``package/object``),
      ``base_schema_name``, ``base_object_name``.

    Example:
        >>> catalog = DictViewCatalog({
        ...     "views": [{
        ...         "package_id": "acme",
        ...         "object_name": "AT_CUSTOMER",
        ...         "object_suffix": "attributeview",
        ...         "cdata": "<attribute/>",
        ...     }]
        ... })
        >>> [v.view_id for v in catalog.find_views("acme", "%", "%")]
        ['acme/AT_CUSTOMER']
    """

    def __init__(self, catalog_dict: Dict[str, List[Dict[str, Any]]]) -> None:
        """Initialize a DictViewCatalog.

        Args:
            catalog_dict: Dictionary of catalog relations as described in
                the class docstring. Missing relations count as empty.

        Raises:
            TypeError: If catalog_dict is not a dictionary.
            CatalogError: If a row lacks a required key.
        """
        if not isinstance(catalog_dict, dict):
            raise TypeError("catalog_dict must be a dictionary")

        try:
            self.views: List[ViewRecord] = [
                ViewRecord(
                    package_id=row["package_id"],
                    object_name=row["object_name"],
                    object_suffix=row["object_suffix"],
                    cdata=row.get("cdata") or "",
                )
                for row in catalog_dict.get("views", [])
            ]
            self.dependencies: List[Tuple[str, str]] = [
                (row["dependent_object_name"], row["base_object_name"])
                for row in catalog_dict.get("dependencies", [])
            ]
            self.cross_references: List[Tuple[Tuple[str, str, str], Tuple[str, str, str]]] = [
                (
                    (row["from_package_id"], row["from_object_name"], row["from_object_suffix"]),
                    (row["to_package_id"], row["to_object_name"], row["to_object_suffix"]),
                )
                for row in catalog_dict.get("cross_references", [])
            ]
            self.table_dependencies: List[Tuple[str, str, str]] = [
                (row["dependent_object_name"], row["base_schema_name"], row["base_object_name"])
                for row in catalog_dict.get("table_dependencies", [])
            ]
        except KeyError as e:
            raise CatalogError(f"Catalog row is missing required key {e}") from e

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "DictViewCatalog":
        """Load a catalog exported as JSON.

        Raises:
            CatalogError: If the file cannot be read or is not valid JSON.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise CatalogError(f"Failed to load catalog from {path}: {e}") from e
        if not isinstance(data, dict):
            raise CatalogError(f"Catalog file {path} must contain a JSON object")
        return cls(data)

    def find_views(
        self, package_pattern: str, object_pattern: str, suffix_pattern: str
    ) -> List[ViewRecord]:
        return [
            view
            for view in self.views
            if matches_like(view.package_id, package_pattern)
            and matches_like(view.object_name, object_pattern)
            and matches_like(view.object_suffix, suffix_pattern)
        ]

    def dependency_edges(self, view: ViewRecord) -> List[ViewRecord]:
        base_names = [
            base for dependent, base in self.dependencies if dependent == view.view_id
        ]
        return list(self._views_named(base_names))

    def cross_reference_edges(self, view: ViewRecord) -> List[ViewRecord]:
        targets = {
            target for source, target in self.cross_references if source == view.identity
        }
        return [candidate for candidate in self.views if candidate.identity in targets]

    def table_dependents(
        self, schema_pattern: str, table_pattern: str
    ) -> List[Tuple[str, str]]:
        dependents: Dict[Tuple[str, str], None] = {}
        for dependent, schema_name, table_name in self.table_dependencies:
            if matches_like(schema_name, schema_pattern) and matches_like(
                table_name, table_pattern
            ):
                package_id, _, object_name = dependent.partition("/")
                dependents[(package_id, object_name)] = None
        return list(dependents)

    def _views_named(self, view_ids: Iterable[str]) -> Iterable[ViewRecord]:
        wanted = set(view_ids)
        for view in self.views:
            if view.view_id in wanted:
                yield view
