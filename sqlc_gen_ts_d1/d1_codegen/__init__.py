"""D1 Code Generator - Generates TypeScript for Cloudflare D1 from sqlc queries."""

from .main import (
    Field,
    ModelSpec,
    QueryContext,
    GeneratorContext,
    generate,
    run_plugin,
)
from .type_map import DEFAULT_TS_TYPES, FALLBACK_TS_TYPE

__all__ = [
    "Field",
    "ModelSpec",
    "QueryContext",
    "GeneratorContext",
    "generate",
    "run_plugin",
    "DEFAULT_TS_TYPES",
    "FALLBACK_TS_TYPE",
]
