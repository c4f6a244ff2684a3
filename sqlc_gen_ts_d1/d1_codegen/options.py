"""Plugin options, parsed once from the raw bytes sqlc forwards."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Final

from ..shared import OptionsError

DEFAULT_WORKERS_TYPES: Final[str] = "2022-11-30"
WORKERS_TYPES_PACKAGE: Final[str] = "@cloudflare/workers-types"


def _unquote(text: str) -> str:
    """Strip the quoting sqlc applies to a scalar options value."""
    if len(text) >= 2 and text[0] == text[-1] == "`":
        return text[1:-1]
    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            value = json.loads(text)
        except ValueError as e:
            raise OptionsError(f"Invalid quoted options string: {e}") from e
        if isinstance(value, str):
            return value
    raise OptionsError(f"Options must be a quoted string or a JSON object, got {text!r}")


def parse_plugin_options(raw: bytes) -> dict[str, str]:
    """Parse plugin options into a flat mapping.

    Two encodings are accepted:

    - a JSON object of strings: ``{"workers-types": "2023-07-01"}``
    - a quoted ``key=value`` list: ``"workers-types=2023-07-01,workers-types-v3=1"``

    Raises:
        OptionsError: If the payload is neither.
    """
    if not raw:
        return {}

    try:
        text = raw.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise OptionsError(f"Options are not valid UTF-8: {e}") from e

    if not text:
        return {}

    if text.startswith("{"):
        try:
            data = json.loads(text)
        except ValueError as e:
            raise OptionsError(f"Invalid options JSON: {e}") from e
        if not isinstance(data, dict):
            raise OptionsError("Options JSON must be an object")
        for key, value in data.items():
            if not isinstance(value, str):
                raise OptionsError(
                    f"Option '{key}' must be a string, got {type(value).__name__}"
                )
        return data

    options: dict[str, str] = {}
    for pair in _unquote(text).split(","):
        key, _, value = pair.partition("=")
        options[key] = value
    return options


@dataclass(frozen=True, slots=True)
class GeneratorOptions:
    """Settings that change the shape of the generated code.

    Attributes:
        workers_types: Version segment of the ``@cloudflare/workers-types``
            import path. Empty imports the package root.
        workers_types_v3: Target workers-types v3+, where the D1 types are
            ambient (no import) and ``D1Result.results`` may be undefined.
    """

    workers_types: str = DEFAULT_WORKERS_TYPES
    workers_types_v3: bool = False

    @classmethod
    def from_plugin_options(cls, raw: bytes) -> GeneratorOptions:
        options = parse_plugin_options(raw)
        return cls(
            workers_types=options.get("workers-types", DEFAULT_WORKERS_TYPES),
            workers_types_v3=options.get("workers-types-v3") == "1",
        )

    @property
    def workers_types_package(self) -> str:
        if not self.workers_types:
            return WORKERS_TYPES_PACKAGE
        return f"{WORKERS_TYPES_PACKAGE}/{self.workers_types}"
