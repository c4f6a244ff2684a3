"""
D1 Code Generator - Generates TypeScript for Cloudflare D1 from sqlc queries.

Two files are produced from one sqlc code generation request:
- models.ts, one type per catalog table
- querier.ts, the SQL text, argument and row types and a function per query

The whole response is rendered in memory; nothing is written unless every
query generated successfully.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path
from typing import Final, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .. import __version__
from ..shared import (
    GeneratorError,
    const_query_name,
    encode_response,
    function_name,
    load_request,
    model_type_name,
    property_name,
    read_request,
)
from .embed import embedded_fields, rewrite_embeds
from .ir import File, GenerateRequest, Query, Table
from .options import GeneratorOptions
from .shapes import QueryShape, resolve_shape
from .slices import EXPANDED_PARAM_FUNCTION, SliceExpansion, bind_args, plan_slices
from .table_map import TableMap
from .type_map import TsTypeMap

# Template configuration
TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"

DEFAULT_REVISION: Final[str] = "HEAD"


@dataclass(frozen=True, slots=True)
class Field:
    """A property of a generated TypeScript type."""

    name: str
    ts_type: str


@dataclass(frozen=True, slots=True)
class ModelSpec:
    """A type generated into models.ts."""

    name: str
    fields: tuple[Field, ...]


@dataclass(frozen=True, slots=True)
class BannerMeta:
    """Provenance written at the top of every generated file."""

    sqlc_version: str
    version: str
    revision: str


@dataclass(frozen=True, slots=True)
class QueryContext:
    """Everything the querier template needs for one query."""

    name: str
    const_name: str
    function_name: str
    text: str
    shape: QueryShape
    params: tuple[Field, ...] = ()
    row_fields: tuple[Field, ...] = ()
    raw_fields: tuple[Field, ...] = ()
    mapping: tuple[str, ...] = ()
    slices: tuple[SliceExpansion, ...] = ()
    bind_args: str = ""
    model_imports: frozenset[str] = field(default_factory=frozenset)


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
            enable_async=False,
        )
        self.template_env.filters["quote"] = _quote
        # Pre-compile templates
        self._models_template = self.template_env.get_template("models.ts.j2")
        self._querier_template = self.template_env.get_template("querier.ts.j2")

    @property
    def models_template(self):
        return self._models_template

    @property
    def querier_template(self):
        return self._querier_template


@lru_cache(maxsize=256)
def _quote(value: str) -> str:
    """Quote a string for TypeScript literal embedding. Cached for performance."""
    return json.dumps(value)


def _template_literal(value: str) -> str:
    """Escape text for the body of a TypeScript template literal."""
    return value.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def _banner_meta(request: GenerateRequest) -> BannerMeta:
    return BannerMeta(
        sqlc_version=request.sqlc_version,
        version=__version__,
        revision=request.settings.wasm_sha256 or DEFAULT_REVISION,
    )


def _build_model(table: Table, type_map: TsTypeMap) -> ModelSpec:
    return ModelSpec(
        name=model_type_name(table.rel.name),
        fields=tuple(
            Field(property_name(column.name), type_map.to_ts_type(column))
            for column in table.columns
        ),
    )


def _param_fields(
    query: Query,
    type_map: TsTypeMap,
    table_map: TableMap,
) -> tuple[Field, ...]:
    """Build the fields of a query's argument type.

    A parameter is only nullable when written with ``sqlc.narg``, but a
    parameter standing for a column the schema declares nullable accepts
    null as well.
    """
    fields = []
    for param in query.params:
        column = param.column
        ts_type = type_map.to_ts_type(column)
        if column.not_null:
            declared = table_map.find_column(column)
            if declared is not None and not declared.not_null:
                ts_type += " | null"
        fields.append(Field(property_name(column.name), ts_type))
    return tuple(fields)


def _row_fields(
    query: Query,
    type_map: TsTypeMap,
) -> tuple[tuple[Field, ...], frozenset[str]]:
    """Build the public row fields and the models they reference."""
    fields = []
    models = set()
    for column in query.columns:
        if column.is_embed:
            ts_type = model_type_name(column.embed_table.name)
            models.add(ts_type)
        else:
            ts_type = type_map.to_ts_type(column)
        fields.append(Field(property_name(column.name), ts_type))
    return tuple(fields), frozenset(models)


def _raw_fields(
    query: Query,
    type_map: TsTypeMap,
    table_map: TableMap,
) -> tuple[Field, ...]:
    """Build the row fields as D1 returns them, embeds flattened."""
    fields = []
    for column in query.columns:
        if column.is_embed:
            for alias, table_column in embedded_fields(column, table_map, query.name):
                fields.append(Field(alias, type_map.to_ts_type(table_column)))
        else:
            fields.append(Field(column.name, type_map.to_ts_type(column)))
    return tuple(fields)


def _mapping_lines(query: Query, table_map: TableMap) -> tuple[str, ...]:
    """Render the object literal translating ``raw`` into the public row.

    Lines are relative to the literal's indentation.
    """
    lines = []
    for column in query.columns:
        prop = property_name(column.name)
        if column.is_embed:
            lines.append(f"// sqlc.embed({prop})")
            lines.append(f"{prop}: {{")
            for alias, table_column in embedded_fields(column, table_map, query.name):
                lines.append(f"  {property_name(table_column.name)}: raw.{alias},")
            lines.append("},")
        else:
            lines.append(f"{prop}: raw.{column.name},")
    return tuple(lines)


def _build_query(
    query: Query,
    type_map: TsTypeMap,
    table_map: TableMap,
) -> QueryContext:
    """Resolve everything generated for a single query.

    Raises:
        GeneratorError: If the query cannot be generated.
    """
    shape = resolve_shape(query)
    text = rewrite_embeds(query, table_map)

    row_fields: tuple[Field, ...] = ()
    model_imports: frozenset[str] = frozenset()
    if shape.row_type is not None:
        row_fields, model_imports = _row_fields(query, type_map)

    raw_fields: tuple[Field, ...] = ()
    mapping: tuple[str, ...] = ()
    if shape.needs_raw:
        raw_fields = _raw_fields(query, type_map, table_map)
        mapping = _mapping_lines(query, table_map)

    return QueryContext(
        name=query.name,
        const_name=const_query_name(query.name),
        function_name=function_name(query.name),
        text=_template_literal(f"-- name: {query.name} {query.cmd}\n{text}"),
        shape=shape,
        params=_param_fields(query, type_map, table_map),
        row_fields=row_fields,
        raw_fields=raw_fields,
        mapping=mapping,
        slices=tuple(plan_slices(query)),
        bind_args=bind_args(query),
        model_imports=model_imports,
    )


def render_models(
    request: GenerateRequest,
    type_map: TsTypeMap,
    ctx: GeneratorContext,
) -> str:
    """Render models.ts, one type per table in catalog order."""
    models = [
        _build_model(table, type_map)
        for schema in request.catalog.schemas
        for table in schema.tables
    ]
    return ctx.models_template.render(meta=_banner_meta(request), models=models)


def render_querier(
    request: GenerateRequest,
    options: GeneratorOptions,
    type_map: TsTypeMap,
    table_map: TableMap,
    ctx: GeneratorContext,
) -> str:
    """Render querier.ts with the queries in request order."""
    queries = [_build_query(query, type_map, table_map) for query in request.queries]

    model_imports: set[str] = set()
    for query in queries:
        model_imports.update(query.model_imports)

    return ctx.querier_template.render(
        meta=_banner_meta(request),
        options=options,
        queries=queries,
        model_imports=sorted(model_imports),
        needs_expanded_param=any(query.slices for query in queries),
        expanded_param=EXPANDED_PARAM_FUNCTION,
    )


def generate(
    request: GenerateRequest,
    ctx: GeneratorContext | None = None,
) -> list[File]:
    """Generate the TypeScript files for a request.

    Args:
        request: The decoded sqlc request.
        ctx: Template context to reuse between runs.

    Returns:
        models.ts and querier.ts.

    Raises:
        GeneratorError: If the options are malformed or a query is
            inconsistent with the catalog.
    """
    ctx = ctx or GeneratorContext()
    options = GeneratorOptions.from_plugin_options(request.plugin_options)
    type_map = TsTypeMap.build(request.settings.overrides)
    table_map = TableMap.build(request.catalog)

    models = render_models(request, type_map, ctx)
    querier = render_querier(request, options, type_map, table_map, ctx)

    return [
        File(name="models.ts", contents=models.encode("utf-8")),
        File(name="querier.ts", contents=querier.encode("utf-8")),
    ]


def run_plugin(argv: Sequence[str] | None = None) -> None:
    """sqlc process plugin entry point.

    sqlc passes the RPC method name as an argument; it is not needed since
    this plugin serves only code generation. The request is read as JSON
    from stdin and the response written as JSON to stdout.
    """
    try:
        request = GenerateRequest.from_dict(read_request(sys.stdin.buffer))
        files = generate(request)
    except GeneratorError as e:
        print(f"error generating output: {e}", file=sys.stderr)
        raise SystemExit(2) from e

    sys.stdout.buffer.write(encode_response(files))
    sys.stdout.buffer.flush()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for rendering a request fixture to a directory."""
    parser = argparse.ArgumentParser(
        description="Generate TypeScript D1 code from a sqlc request file",
    )
    parser.add_argument(
        "request",
        type=Path,
        help="Request file (JSON, or YAML with .yaml/.yml suffix)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("src/gen/sqlc"),
        help="Directory to write models.ts and querier.ts into",
    )
    parser.add_argument(
        "--options",
        default=None,
        help="Plugin options replacing the ones in the request",
    )

    args = parser.parse_args(argv)

    try:
        request = GenerateRequest.from_dict(load_request(args.request))
        if args.options is not None:
            request = replace(request, plugin_options=args.options.encode("utf-8"))

        files = generate(request)

        out_dir = args.out.resolve()
        out_dir.mkdir(parents=True, exist_ok=True)
        for file in files:
            (out_dir / file.name).write_bytes(file.contents)

        print(f"Generated {len(files)} file(s) into {out_dir}")
    except GeneratorError as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
