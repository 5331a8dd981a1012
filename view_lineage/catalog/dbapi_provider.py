"""
DB-API view catalog implementation.

This module defines the DbApiViewCatalog class, which reads view
definitions and dependency relations from the repository tables of a live
database through any DB-API 2.0 connection using ``qmark`` parameters
(hdbcli, sqlite3, ...).
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from view_lineage.catalog.provider import ViewCatalog
from view_lineage.exceptions import CatalogError
from view_lineage.models.view import SUPPORTED_SUFFIXES, ViewRecord

logger = logging.getLogger(__name__)

# schema and object type of activated information views
RUNTIME_SCHEMA = "_SYS_BIC"
VIEW_OBJECT_TYPE = "VIEW"
TABLE_OBJECT_TYPE = "TABLE"
DIRECT_DEPENDENCY = 1


class DbApiViewCatalog(ViewCatalog):
    """View catalog backed by the repository tables of a database.

    Attributes:
        connection: Open DB-API 2.0 connection.
        active_object_table: Table of active repository objects.
        dependencies_table: Generic object dependency table.
        cross_reference_table: Repository object cross-reference table.

    Example:
        >>> from hdbcli import dbapi
        >>> connection = dbapi.connect(address="hana", port=30015, user="u", password="p")
        >>> catalog = DbApiViewCatalog(connection)
        >>> views = catalog.find_views("acme.sales%", "%", "%")
    """

    def __init__(
        self,
        connection: Any,
        active_object_table: str = "_SYS_REPO.ACTIVE_OBJECT",
        dependencies_table: str = "OBJECT_DEPENDENCIES",
        cross_reference_table: str = "_SYS_REPO.ACTIVE_OBJECTCROSSREF",
    ) -> None:
        self.connection = connection
        self.active_object_table = active_object_table
        self.dependencies_table = dependencies_table
        self.cross_reference_table = cross_reference_table

    def find_views(
        self, package_pattern: str, object_pattern: str, suffix_pattern: str
    ) -> List[ViewRecord]:
        placeholders = ", ".join("?" for _ in SUPPORTED_SUFFIXES)
        sql = (
            f"SELECT package_id, object_name, object_suffix, cdata "
            f"FROM {self.active_object_table} "
            f"WHERE package_id LIKE ? AND object_name LIKE ? AND object_suffix LIKE ? "
            f"AND object_suffix IN ({placeholders}) "
            f"ORDER BY package_id, object_name, object_suffix"
        )
        rows = self._query(
            sql, (package_pattern, object_pattern, suffix_pattern, *SUPPORTED_SUFFIXES)
        )
        return [self._to_view(row) for row in rows]

    def dependency_edges(self, view: ViewRecord) -> List[ViewRecord]:
        sql = (
            f"SELECT base_object_name FROM {self.dependencies_table} "
            f"WHERE dependent_object_name = ? "
            f"AND dependent_schema_name = ? AND dependent_object_type = ? "
            f"AND base_schema_name = ? AND base_object_type = ?"
        )
        rows = self._query(
            sql,
            (
                view.view_id,
                RUNTIME_SCHEMA,
                VIEW_OBJECT_TYPE,
                RUNTIME_SCHEMA,
                VIEW_OBJECT_TYPE,
            ),
        )
        base_views: List[ViewRecord] = []
        for (base_object_name,) in rows:
            package_id, _, object_name = base_object_name.partition("/")
            base_views.extend(self._active_objects(package_id, object_name))
        return base_views

    def cross_reference_edges(self, view: ViewRecord) -> List[ViewRecord]:
        sql = (
            f"SELECT ao.package_id, ao.object_name, ao.object_suffix, ao.cdata "
            f"FROM {self.cross_reference_table} cr "
            f"INNER JOIN {self.active_object_table} ao "
            f"ON ao.package_id = cr.to_package_id "
            f"AND ao.object_name = cr.to_object_name "
            f"AND ao.object_suffix = cr.to_object_suffix "
            f"WHERE cr.from_package_id = ? AND cr.from_object_name = ? "
            f"AND cr.from_object_suffix = ? "
            f"ORDER BY ao.package_id, ao.object_name, ao.object_suffix"
        )
        rows = self._query(sql, view.identity)
        return [self._to_view(row) for row in rows]

    def table_dependents(
        self, schema_pattern: str, table_pattern: str
    ) -> List[Tuple[str, str]]:
        sql = (
            f"SELECT DISTINCT dependent_object_name FROM {self.dependencies_table} "
            f"WHERE base_schema_name LIKE ? AND base_object_name LIKE ? "
            f"AND dependency_type = ? AND base_object_type = ? "
            f"AND dependent_schema_name = ? AND dependent_object_type = ? "
            f"ORDER BY dependent_object_name"
        )
        rows = self._query(
            sql,
            (
                schema_pattern,
                table_pattern,
                DIRECT_DEPENDENCY,
                TABLE_OBJECT_TYPE,
                RUNTIME_SCHEMA,
                VIEW_OBJECT_TYPE,
            ),
        )
        dependents: List[Tuple[str, str]] = []
        for (dependent_object_name,) in rows:
            package_id, _, object_name = dependent_object_name.partition("/")
            dependents.append((package_id, object_name))
        return dependents

    def _active_objects(self, package_id: str, object_name: str) -> List[ViewRecord]:
        placeholders = ", ".join("?" for _ in SUPPORTED_SUFFIXES)
        sql = (
            f"SELECT package_id, object_name, object_suffix, cdata "
            f"FROM {self.active_object_table} "
            f"WHERE package_id = ? AND object_name = ? "
            f"AND object_suffix IN ({placeholders})"
        )
        rows = self._query(sql, (package_id, object_name, *SUPPORTED_SUFFIXES))
        return [self._to_view(row) for row in rows]

    def _query(self, sql: str, params: Sequence[Any]) -> List[Tuple[Any, ...]]:
        logger.debug("Catalog query: %s %s", sql, list(params))
        cursor = None
        try:
            cursor = self.connection.cursor()
            cursor.execute(sql, tuple(params))
            return list(cursor.fetchall())
        except Exception as e:
            raise CatalogError(f"Catalog query failed: {e}") from e
        finally:
            if cursor is not None:
                cursor.close()

    @staticmethod
    def _to_view(row: Sequence[Any]) -> ViewRecord:
        package_id, object_name, object_suffix, cdata = row
        return ViewRecord(
            package_id=package_id,
            object_name=object_name,
            object_suffix=object_suffix,
            cdata=_read_lob(cdata),
        )


def _read_lob(value: Optional[Any]) -> str:
    """Return LOB column values as text; drivers may hand back LOB objects."""
    if value is None:
        return ""
    if hasattr(value, "read"):
        value = value.read()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)
