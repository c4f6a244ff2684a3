"""Shared utilities for the code generator."""

from .request_loader import (
    encode_response,
    load_request,
    parse_request,
    read_request,
)
from .naming import (
    to_upper_camel,
    to_lower_camel,
    model_type_name,
    property_name,
    const_query_name,
    params_type_name,
    row_type_name,
    raw_row_type_name,
    embed_column_name,
    function_name,
)
from .errors import (
    GeneratorError,
    OptionsError,
    RequestError,
    InconsistentSchemaError,
    UnsupportedCommandError,
)

__all__ = [
    # Request loading
    "encode_response",
    "load_request",
    "parse_request",
    "read_request",
    # Naming utilities
    "to_upper_camel",
    "to_lower_camel",
    "model_type_name",
    "property_name",
    "const_query_name",
    "params_type_name",
    "row_type_name",
    "raw_row_type_name",
    "embed_column_name",
    "function_name",
    # Errors
    "GeneratorError",
    "OptionsError",
    "RequestError",
    "InconsistentSchemaError",
    "UnsupportedCommandError",
]
