"""
Support for ``sqlc.embed``.

sqlc expands ``sqlc.embed(t)`` into ``t.a, t.b, t.c``. When two embedded
tables share a column name, D1 returns only one of them, so every embedded
column is aliased as ``t.a AS t_a`` and unflattened again in the generated
mapping code.
"""

from __future__ import annotations

from typing import Iterator

from ..shared import InconsistentSchemaError, embed_column_name
from .ir import Column, Query
from .table_map import TableMap


def embedded_fields(
    column: Column,
    table_map: TableMap,
    query_name: str,
) -> Iterator[tuple[str, Column]]:
    """Yield ``(flattened name, table column)`` for an embed column."""
    table = table_map.require_table(column.embed_table, query_name)
    for table_column in table.columns:
        yield embed_column_name(table.rel.name, table_column.name), table_column


def rewrite_embeds(query: Query, table_map: TableMap) -> str:
    """Return the query text with every embedded column aliased.

    The whole ``t.a, t.b, t.c`` list is replaced in one step; replacing
    column by column would also hit ``t.id`` inside ``t.idx``.

    Raises:
        InconsistentSchemaError: If an embedded table is unknown or its
            column list does not appear in the query text.
    """
    text = query.text
    for column in query.columns:
        if not column.is_embed:
            continue

        table_name = column.embed_table.name
        olds: list[str] = []
        news: list[str] = []
        for alias, table_column in embedded_fields(column, table_map, query.name):
            reference = f"{table_name}.{table_column.name}"
            olds.append(reference)
            news.append(f"{reference} AS {alias}")

        old = ", ".join(olds)
        if old not in text:
            raise InconsistentSchemaError(
                f"embedded column list '{old}' not found in query text",
                table_name,
                query.name,
            )
        text = text.replace(old, ", ".join(news), 1)

    return text
