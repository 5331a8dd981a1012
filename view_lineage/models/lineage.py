"""
Base column lineage models.

This module defines BaseColumnRef, LineageRow and LineageTable. A
LineageTable aggregates, per base column, the set of views that reference
it. Merging tables is a set union per column, so it is associative,
commutative and idempotent: merging the same view twice never duplicates
its identifier.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

from view_lineage.utils.patterns import matches_like

VIEW_SEPARATOR = ", "


@dataclass(frozen=True, order=True)
class BaseColumnRef:
    """Reference to a physical column of a stored table.

    Example:
        >>> ref = BaseColumnRef("SALES", "ORDERS", "AMOUNT")
        >>> ref.to_qualified_name()
        'SALES.ORDERS.AMOUNT'
    """

    schema_name: str
    table_name: str
    column_name: str

    def to_qualified_name(self) -> str:
        return f"{self.schema_name}.{self.table_name}.{self.column_name}"

    def __str__(self) -> str:
        return self.to_qualified_name()


@dataclass(frozen=True)
class LineageRow:
    """One output row: a base column and the views referencing it.

    Attributes:
        schema_name: Schema of the base table.
        table_name: Name of the base table.
        column_name: Name of the base column.
        views: Sorted, distinct ``package/object`` identifiers.
    """

    schema_name: str
    table_name: str
    column_name: str
    views: tuple[str, ...] = ()

    @classmethod
    def from_views_text(
        cls, schema_name: str, table_name: str, column_name: str, views: str
    ) -> "LineageRow":
        """Build a row from a ``", "``-joined view list."""
        view_ids = {view for view in views.split(VIEW_SEPARATOR) if view}
        return cls(schema_name, table_name, column_name, tuple(sorted(view_ids)))

    @property
    def column(self) -> BaseColumnRef:
        return BaseColumnRef(self.schema_name, self.table_name, self.column_name)

    @property
    def views_text(self) -> str:
        """The view list joined with ``", "`` as the catalog procedures return it."""
        return VIEW_SEPARATOR.join(self.views)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_name": self.schema_name,
            "table_name": self.table_name,
            "column_name": self.column_name,
            "views": self.views_text,
        }


class LineageTable:
    """Aggregated base column lineage.

    Maps each BaseColumnRef to the set of view identifiers that reference
    it. Rows come out sorted by schema, table and column, with each view
    list sorted as well, so output is deterministic regardless of the order
    in which views were analyzed.

    Example:
        >>> table = LineageTable()
        >>> table.add(BaseColumnRef("S", "T", "C"), "pkg/view1")
        >>> table.add(BaseColumnRef("S", "T", "C"), "pkg/view1")
        >>> table.rows()[0].views_text
        'pkg/view1'
    """

    def __init__(self) -> None:
        self._views: Dict[BaseColumnRef, Set[str]] = {}

    def add(self, column: BaseColumnRef, view_id: str) -> None:
        """Record that a view references a base column.

        Args:
            column: The referenced base column.
            view_id: ``package/object`` identifier of the view.
        """
        self._views.setdefault(column, set()).add(view_id)

    def update(self, view_id: str, columns: Iterable[BaseColumnRef]) -> None:
        """Record all base columns referenced by one view."""
        for column in columns:
            self.add(column, view_id)

    def merge(self, other: "LineageTable") -> "LineageTable":
        """Return a new table holding the union of both tables.

        Args:
            other: Another LineageTable.

        Returns:
            New LineageTable; neither operand is modified.
        """
        merged = LineageTable()
        for source in (self, other):
            for column, views in source._views.items():
                merged._views.setdefault(column, set()).update(views)
        return merged

    def __or__(self, other: "LineageTable") -> "LineageTable":
        return self.merge(other)

    def filter(
        self,
        schema_pattern: Optional[str] = None,
        table_pattern: Optional[str] = None,
        column_pattern: Optional[str] = None,
    ) -> "LineageTable":
        """Return a new table restricted to columns matching LIKE patterns."""
        filtered = LineageTable()
        for column, views in self._views.items():
            if (
                matches_like(column.schema_name, schema_pattern)
                and matches_like(column.table_name, table_pattern)
                and matches_like(column.column_name, column_pattern)
            ):
                filtered._views[column] = set(views)
        return filtered

    def views_for(self, column: BaseColumnRef) -> List[str]:
        """Return the sorted view identifiers referencing a column."""
        return sorted(self._views.get(column, ()))

    def columns(self) -> List[BaseColumnRef]:
        return sorted(self._views)

    def rows(self) -> List[LineageRow]:
        """Return one LineageRow per distinct base column, sorted."""
        return [
            LineageRow(
                schema_name=column.schema_name,
                table_name=column.table_name,
                column_name=column.column_name,
                views=tuple(sorted(self._views[column])),
            )
            for column in sorted(self._views)
        ]

    @classmethod
    def from_rows(cls, rows: Iterable[LineageRow]) -> "LineageTable":
        """Rebuild a table from rows, e.g. rows produced by an earlier run."""
        table = cls()
        for row in rows:
            for view_id in row.views:
                table.add(row.column, view_id)
        return table

    def to_dict(self) -> List[Dict[str, Any]]:
        return [row.to_dict() for row in self.rows()]

    def __len__(self) -> int:
        return len(self._views)

    def __iter__(self) -> Iterator[LineageRow]:
        return iter(self.rows())

    def __contains__(self, column: object) -> bool:
        return column in self._views

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineageTable):
            return NotImplemented
        return self._views == other._views

    def __repr__(self) -> str:
        return f"LineageTable({len(self._views)} columns)"
