"""
Per-query decision of which types a generated function needs.

Both the type declarations and the function body read the same
``QueryShape``, so the command kind is only ever switched on here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..shared import (
    UnsupportedCommandError,
    params_type_name,
    property_name,
    raw_row_type_name,
    row_type_name,
)
from .ir import Query


class Command(Enum):
    """How a query is executed."""

    EXEC = ":exec"
    ONE = ":one"
    MANY = ":many"

    @classmethod
    def parse(cls, value: str, query_name: str | None = None) -> Command:
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedCommandError(value, query_name) from None


def needs_raw_type(query: Query) -> bool:
    """Whether D1's row has to be translated into the public row type.

    That is the case when a column is renamed by camel-casing or when an
    embedded table has to be nested.
    """
    return any(
        column.is_embed or column.name != property_name(column.name)
        for column in query.columns
    )


@dataclass(frozen=True, slots=True)
class QueryShape:
    """Types involved in one generated query function.

    Attributes:
        command: Execution mode of the query.
        params_type: Name of the arguments type, None without parameters.
        row_type: Name of the public row type, None for ``:exec``.
        raw_row_type: Name of the row type as D1 returns it, None when D1's
            rows can be returned as they are.
        return_type: Type the generated function resolves to.
        result_type: Type argument of ``first``/``all``, None for ``:exec``.
    """

    command: Command
    params_type: str | None
    row_type: str | None
    raw_row_type: str | None
    return_type: str
    result_type: str | None

    @property
    def needs_raw(self) -> bool:
        return self.raw_row_type is not None

    @property
    def primitive_call(self) -> str:
        """The D1PreparedStatement call executing the query."""
        if self.command is Command.ONE:
            return f"first<{self.result_type}>()"
        if self.command is Command.MANY:
            return f"all<{self.result_type}>()"
        return "run()"


def resolve_shape(query: Query) -> QueryShape:
    """Decide the types generated for a query.

    Raises:
        UnsupportedCommandError: If the query's command is not
            ``:exec``, ``:one`` or ``:many``.
    """
    command = Command.parse(query.cmd, query.name)
    params_type = params_type_name(query.name) if query.params else None

    if command is Command.EXEC:
        return QueryShape(
            command=command,
            params_type=params_type,
            row_type=None,
            raw_row_type=None,
            return_type="D1Result",
            result_type=None,
        )

    row_type = row_type_name(query.name)
    raw_row_type = raw_row_type_name(query.name) if needs_raw_type(query) else None
    fetched = raw_row_type or row_type

    if command is Command.ONE:
        return_type = f"{row_type} | null"
        result_type = f"{fetched} | null"
    else:
        return_type = f"D1Result<{row_type}>"
        result_type = fetched

    return QueryShape(
        command=command,
        params_type=params_type,
        row_type=row_type,
        raw_row_type=raw_row_type,
        return_type=return_type,
        result_type=result_type,
    )
