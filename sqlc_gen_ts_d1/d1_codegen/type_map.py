"""Mapping from SQLite column types to TypeScript types."""

from __future__ import annotations

from typing import Final, Iterable, Mapping

from .ir import Column, Override

# https://developers.cloudflare.com/d1/platform/client-api/#type-conversion
DEFAULT_TS_TYPES: Final[dict[str, str]] = {
    "NULL": "null",
    "REAL": "number",
    "INTEGER": "number",
    "TEXT": "string",
    "DATETIME": "string",
    "JSON": "string",
    "BLOB": "ArrayBuffer",
}

FALLBACK_TS_TYPE: Final[str] = "number | string"


class TsTypeMap:
    """Resolves the TypeScript type of a column.

    Lookups are case-insensitive on the database type name. Unknown types
    resolve to ``FALLBACK_TS_TYPE`` instead of failing.
    """

    __slots__ = ("_types",)

    def __init__(self, types: Mapping[str, str]) -> None:
        self._types = {key.upper(): value for key, value in types.items()}

    @classmethod
    def build(cls, overrides: Iterable[Override] = ()) -> TsTypeMap:
        """Merge user overrides on top of the defaults. Overrides win."""
        types = dict(DEFAULT_TS_TYPES)
        for override in overrides:
            types[override.db_type.upper()] = override.code_type
        return cls(types)

    def base_type(self, db_type: str) -> str:
        return self._types.get(db_type.upper(), FALLBACK_TS_TYPE)

    def to_ts_type(self, column: Column) -> str:
        ts_type = self.base_type(column.db_type)
        if column.is_sqlc_slice:
            if "|" in ts_type:
                ts_type = f"({ts_type})"
            ts_type += "[]"
        if not column.not_null:
            ts_type += " | null"
        return ts_type

    def __contains__(self, db_type: str) -> bool:
        return db_type.upper() in self._types
