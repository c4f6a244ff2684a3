"""Lookup of catalog tables and columns by name."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..shared import InconsistentSchemaError
from .ir import Catalog, Column, Identifier, Table


@dataclass(frozen=True, slots=True)
class TableEntry:
    table: Table
    columns: dict[str, Column] = field(default_factory=dict)


class TableMap:
    """Catalog tables indexed by table name, then by column name."""

    __slots__ = ("_entries",)

    def __init__(self, entries: dict[str, TableEntry]) -> None:
        self._entries = entries

    @classmethod
    def build(cls, catalog: Catalog) -> TableMap:
        entries: dict[str, TableEntry] = {}
        for schema in catalog.schemas:
            for table in schema.tables:
                entries[table.rel.name] = TableEntry(
                    table=table,
                    columns={column.name: column for column in table.columns},
                )
        return cls(entries)

    def find_table(self, identifier: Identifier | None) -> Table | None:
        if identifier is None:
            return None
        entry = self._entries.get(identifier.name)
        return entry.table if entry is not None else None

    def find_column(self, column: Column) -> Column | None:
        """Find the schema declaration of a column that names its table.

        Returns None when the column has no table reference or either the
        table or the column is unknown.
        """
        if column.table is None:
            return None
        entry = self._entries.get(column.table.name)
        if entry is None:
            return None
        return entry.columns.get(column.name)

    def require_table(self, identifier: Identifier, query_name: str) -> Table:
        """Find a table a query depends on.

        Raises:
            InconsistentSchemaError: If the catalog has no such table.
        """
        table = self.find_table(identifier)
        if table is None:
            raise InconsistentSchemaError(
                "embedded table is not in the catalog",
                identifier.name,
                query_name,
            )
        return table

    def __len__(self) -> int:
        return len(self._entries)
