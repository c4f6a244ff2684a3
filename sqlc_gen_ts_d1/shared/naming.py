"""Naming utilities for code generation.

Every generated identifier is derived from a snake_case database name by the
functions in this module. They are pure and cached, so repeated lookups for
the same column or query are free.
"""

from __future__ import annotations

from functools import lru_cache


@lru_cache(maxsize=1024)
def to_upper_camel(value: str) -> str:
    """Convert a snake_case string to UpperCamelCase.

    Only the first letter of each segment is touched; empty segments from
    leading, trailing or doubled underscores are skipped.

    Examples:
        >>> to_upper_camel("display_name")
        'DisplayName'
        >>> to_upper_camel("_user__id_")
        'UserId'
        >>> to_upper_camel("displayName")
        'DisplayName'
    """
    return "".join(part[:1].upper() + part[1:] for part in value.split("_") if part)


@lru_cache(maxsize=1024)
def to_lower_camel(value: str) -> str:
    """Convert a snake_case string to lowerCamelCase.

    Examples:
        >>> to_lower_camel("display_name")
        'displayName'
        >>> to_lower_camel("GetAccount")
        'getAccount'
    """
    upper = to_upper_camel(value)
    return upper[:1].lower() + upper[1:]


def model_type_name(table_name: str) -> str:
    """Name of the type emitted into models.ts for a table."""
    return to_upper_camel(table_name)


def property_name(column_name: str) -> str:
    """Name of the TypeScript property for a column."""
    return to_lower_camel(column_name)


def const_query_name(query_name: str) -> str:
    """Name of the constant holding a query's SQL text."""
    return f"{to_lower_camel(query_name)}Query"


def params_type_name(query_name: str) -> str:
    return f"{query_name}Params"


def row_type_name(query_name: str) -> str:
    return f"{query_name}Row"


def raw_row_type_name(query_name: str) -> str:
    """Name of the row type as D1 returns it, before renaming and nesting."""
    return f"Raw{query_name}Row"


def embed_column_name(table_name: str, column_name: str) -> str:
    """Alias given to a column of an embedded table in the rewritten SQL."""
    # A single underscore can still clash with a real column called e.g. users_id.
    return f"{table_name}_{column_name}"


def function_name(query_name: str) -> str:
    return to_lower_camel(query_name)
