"""
Intermediate representation handed to the plugin by sqlc.

The classes mirror the plugin protocol messages closely enough to be built
from sqlc's protojson output (``format: json`` process plugins) or from a
hand-written YAML request fixture. They are immutable: a request is decoded
once and never changed while code is generated from it.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..shared import RequestError


def _camel(key: str) -> str:
    first, *rest = key.split("_")
    return first + "".join(part.capitalize() for part in rest)


def _get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Look a field up by its proto name, falling back to the JSON name."""
    if key in data:
        value = data[key]
    else:
        value = data.get(_camel(key), default)
    return default if value is None else value


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise RequestError(f"'{what}' must be a mapping, got {type(value).__name__}")
    return value


def _items(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = _get(data, key, [])
    if not isinstance(value, list):
        raise RequestError(f"'{key}' must be a list, got {type(value).__name__}")
    return [_mapping(item, key) for item in value]


def _bytes(value: Any, what: str) -> bytes:
    """Decode a protojson bytes field.

    Request fixtures may spell plugin options as a plain mapping; that is
    encoded to the JSON object sqlc itself would have sent.
    """
    if value is None or value == "":
        return b""
    if isinstance(value, bytes):
        return value
    if isinstance(value, Mapping):
        return json.dumps(dict(value), separators=(",", ":")).encode("utf-8")
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise RequestError(f"'{what}' is not valid base64: {e}") from e
    raise RequestError(f"'{what}' must be base64 text, got {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class Identifier:
    """A schema-qualified name. Two identifiers are equal when their names are."""

    name: str = ""
    schema: str = field(default="", compare=False)
    catalog: str = field(default="", compare=False)

    @classmethod
    def from_dict(cls, data: Any) -> Identifier | None:
        if data is None:
            return None
        data = _mapping(data, "identifier")
        return cls(
            name=str(_get(data, "name", "")),
            schema=str(_get(data, "schema", "")),
            catalog=str(_get(data, "catalog", "")),
        )


@dataclass(frozen=True, slots=True)
class Column:
    """A table column, result column or parameter column.

    A column with a non-empty ``embed_table`` stands for every column of that
    table (``sqlc.embed``).
    """

    name: str
    not_null: bool = False
    is_array: bool = False
    type: Identifier = field(default_factory=Identifier)
    table: Identifier | None = None
    is_sqlc_slice: bool = False
    embed_table: Identifier | None = None
    original_name: str = ""
    comment: str = ""

    @property
    def is_embed(self) -> bool:
        return self.embed_table is not None and self.embed_table.name != ""

    @property
    def db_type(self) -> str:
        return self.type.name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Column:
        return cls(
            name=str(_get(data, "name", "")),
            not_null=bool(_get(data, "not_null", False)),
            is_array=bool(_get(data, "is_array", False)),
            type=Identifier.from_dict(_get(data, "type")) or Identifier(),
            table=Identifier.from_dict(_get(data, "table")),
            is_sqlc_slice=bool(_get(data, "is_sqlc_slice", False)),
            embed_table=Identifier.from_dict(_get(data, "embed_table")),
            original_name=str(_get(data, "original_name", "")),
            comment=str(_get(data, "comment", "")),
        )


@dataclass(frozen=True, slots=True)
class Table:
    rel: Identifier
    columns: tuple[Column, ...] = ()
    comment: str = ""

    @property
    def name(self) -> str:
        return self.rel.name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Table:
        return cls(
            rel=Identifier.from_dict(_get(data, "rel")) or Identifier(),
            columns=tuple(Column.from_dict(c) for c in _items(data, "columns")),
            comment=str(_get(data, "comment", "")),
        )


@dataclass(frozen=True, slots=True)
class Schema:
    name: str = ""
    tables: tuple[Table, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Schema:
        return cls(
            name=str(_get(data, "name", "")),
            tables=tuple(Table.from_dict(t) for t in _items(data, "tables")),
        )


@dataclass(frozen=True, slots=True)
class Catalog:
    name: str = ""
    default_schema: str = ""
    schemas: tuple[Schema, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Catalog:
        data = _mapping(data, "catalog")
        return cls(
            name=str(_get(data, "name", "")),
            default_schema=str(_get(data, "default_schema", "")),
            schemas=tuple(Schema.from_dict(s) for s in _items(data, "schemas")),
        )


@dataclass(frozen=True, slots=True)
class Parameter:
    """A query parameter bound to the positional placeholder ``?<number>``."""

    number: int
    column: Column

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Parameter:
        return cls(
            number=int(_get(data, "number", 0)),
            column=Column.from_dict(_mapping(_get(data, "column"), "column")),
        )


@dataclass(frozen=True, slots=True)
class Query:
    name: str
    cmd: str
    text: str
    columns: tuple[Column, ...] = ()
    params: tuple[Parameter, ...] = ()
    filename: str = ""
    comments: tuple[str, ...] = ()

    @property
    def has_slice_params(self) -> bool:
        return any(p.column.is_sqlc_slice for p in self.params)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Query:
        comments = _get(data, "comments", [])
        return cls(
            name=str(_get(data, "name", "")),
            cmd=str(_get(data, "cmd", "")),
            text=str(_get(data, "text", "")),
            columns=tuple(Column.from_dict(c) for c in _items(data, "columns")),
            params=tuple(Parameter.from_dict(p) for p in _items(data, "params")),
            filename=str(_get(data, "filename", "")),
            comments=tuple(str(c) for c in comments),
        )


@dataclass(frozen=True, slots=True)
class Override:
    """A user supplied mapping from a database type to a TypeScript type."""

    db_type: str
    code_type: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Override:
        return cls(
            db_type=str(_get(data, "db_type", "")),
            code_type=str(_get(data, "code_type", "")),
        )


@dataclass(frozen=True, slots=True)
class Settings:
    version: str = ""
    engine: str = ""
    overrides: tuple[Override, ...] = ()
    wasm_sha256: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Settings:
        data = _mapping(data, "settings")
        codegen = _mapping(_get(data, "codegen"), "codegen")
        wasm = _mapping(_get(codegen, "wasm"), "wasm")
        return cls(
            version=str(_get(data, "version", "")),
            engine=str(_get(data, "engine", "")),
            overrides=tuple(Override.from_dict(o) for o in _items(data, "overrides")),
            wasm_sha256=str(_get(wasm, "sha256", "")),
        )


@dataclass(frozen=True, slots=True)
class GenerateRequest:
    settings: Settings = field(default_factory=Settings)
    catalog: Catalog = field(default_factory=Catalog)
    queries: tuple[Query, ...] = ()
    sqlc_version: str = ""
    plugin_options: bytes = b""
    global_options: bytes = b""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenerateRequest:
        """Build a request from its decoded JSON or YAML form.

        Raises:
            RequestError: If the structure does not match the plugin protocol.
        """
        data = _mapping(data, "request")
        return cls(
            settings=Settings.from_dict(_get(data, "settings")),
            catalog=Catalog.from_dict(_get(data, "catalog")),
            queries=tuple(Query.from_dict(q) for q in _items(data, "queries")),
            sqlc_version=str(_get(data, "sqlc_version", "")),
            plugin_options=_bytes(_get(data, "plugin_options"), "plugin_options"),
            global_options=_bytes(_get(data, "global_options"), "global_options"),
        )


@dataclass(frozen=True, slots=True)
class File:
    """A generated output file."""

    name: str
    contents: bytes
