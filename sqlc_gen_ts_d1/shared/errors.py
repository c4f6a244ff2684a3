"""Custom exceptions for the code generator."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    def __init__(self, message: str, query_name: str | None = None) -> None:
        self.query_name = query_name
        full_message = f"{message}" if not query_name else f"[{query_name}] {message}"
        super().__init__(full_message)


class OptionsError(GeneratorError):
    """Raised when the plugin options payload cannot be parsed."""


class RequestError(GeneratorError):
    """Raised when a code generation request is malformed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class InconsistentSchemaError(GeneratorError):
    """Raised when a query refers to schema objects the catalog does not have."""

    def __init__(
        self,
        message: str,
        table_name: str,
        query_name: str | None = None,
    ) -> None:
        self.table_name = table_name
        super().__init__(f"Table '{table_name}': {message}", query_name)


class UnsupportedCommandError(GeneratorError):
    """Raised for a query command this generator has no shape for."""

    def __init__(self, command: str, query_name: str | None = None) -> None:
        self.command = command
        super().__init__(f"Unsupported command '{command}'", query_name)
