"""
Support for ``sqlc.slice``.

D1 binds parameters positionally and cannot bind a list. sqlc compiles
``id IN (sqlc.slice(ids))`` to ``id IN (/*SLICE:ids*/?)`` while the other
parameters keep their numbers, e.g.::

    SELECT id, a, b FROM foo WHERE a = ?1 AND id IN (/*SLICE:ids*/?) AND b = ?3

The generated function replaces the marker at call time. The first element
keeps the number sqlc reserved for the slice and the remaining elements get
new numbers after every existing one, so for ``ids`` of length 3::

    SELECT id, a, b FROM foo WHERE a = ?1 AND id IN (?2, ?4, ?5) AND b = ?3

``expanded_param`` and ``expand_query`` are the Python renditions of the
emitted TypeScript and define what it does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Mapping, Sequence

from ..shared import property_name
from .ir import Parameter, Query

EXPANDED_PARAM_FUNCTION: Final[str] = "expandedParam"


def slice_marker(column_name: str) -> str:
    """Text sqlc leaves in the query in place of a slice parameter."""
    return f"(/*SLICE:{column_name}*/?)"


@dataclass(frozen=True, slots=True)
class SliceExpansion:
    """Runtime rewrite of one slice parameter."""

    marker: str
    number: int
    prop_name: str


def plan_slices(query: Query) -> list[SliceExpansion]:
    """List the slice parameters of a query in parameter order."""
    return [
        SliceExpansion(
            marker=slice_marker(param.column.name),
            number=param.number,
            prop_name=property_name(param.column.name),
        )
        for param in query.params
        if param.column.is_sqlc_slice
    ]


def bind_args(query: Query) -> str:
    """Render the argument list passed to ``bind``.

    A slice parameter contributes only its first element here.
    """
    args = []
    for param in query.params:
        arg = f"args.{property_name(param.column.name)}"
        if param.column.is_sqlc_slice:
            arg += "[0]"
        args.append(arg)
    return ", ".join(args)


def expanded_param(number: int, length: int, last: int) -> str:
    """Placeholder list for a slice of ``length`` elements.

    Args:
        number: Placeholder number sqlc assigned to the slice.
        length: Number of elements bound at call time.
        last: Count of values bound so far; new numbers start after it.
    """
    numbers = [number]
    for i in range(1, length):
        numbers.append(last + i)
    return "(" + ", ".join(f"?{n}" for n in numbers) + ")"


def expand_query(
    text: str,
    params: Sequence[Parameter],
    values: Mapping[str, Any],
) -> tuple[str, list[Any]]:
    """Apply the call-time rewrite to a query.

    Args:
        text: Compiled query text containing slice markers.
        params: The query's parameters.
        values: Argument values keyed by property name.

    Returns:
        The rewritten text and the values to bind, in bind order.
    """
    bound: list[Any] = []
    for param in params:
        value = values[property_name(param.column.name)]
        bound.append(value[0] if param.column.is_sqlc_slice else value)

    for param in params:
        if not param.column.is_sqlc_slice:
            continue
        value = values[property_name(param.column.name)]
        text = text.replace(
            slice_marker(param.column.name),
            expanded_param(param.number, len(value), len(bound)),
            1,
        )
        bound.extend(value[1:])

    return text, bound
