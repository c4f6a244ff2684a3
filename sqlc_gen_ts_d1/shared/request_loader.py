"""Reading code generation requests and writing responses."""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Protocol

import yaml

from .errors import RequestError


class NamedBlob(Protocol):
    name: str
    contents: bytes


def parse_request(raw: bytes | str, source: str | None = None) -> dict[str, Any]:
    """Parse a JSON encoded request.

    Args:
        raw: The request payload.
        source: Where the payload came from, for error messages.

    Returns:
        The decoded request mapping.

    Raises:
        RequestError: If the payload is not a JSON object.
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise RequestError(f"Invalid JSON: {e}", source) from e

    if not isinstance(data, dict):
        raise RequestError("Request root must be a mapping", source)

    return data


def read_request(stream: BinaryIO) -> dict[str, Any]:
    """Read a whole request from a binary stream, typically stdin."""
    return parse_request(stream.read(), "<stdin>")


def load_request(request_path: Path) -> dict[str, Any]:
    """Load a request from a YAML or JSON file.

    Args:
        request_path: Path to the request file.

    Returns:
        The parsed request dictionary.

    Raises:
        RequestError: If the file cannot be read or parsed.
    """
    try:
        content = request_path.read_text(encoding="utf-8")
    except OSError as e:
        raise RequestError(f"Failed to read request file: {e}", str(request_path)) from e

    if request_path.suffix.lower() not in {".yml", ".yaml"}:
        return parse_request(content, str(request_path))

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise RequestError(f"Invalid YAML: {e}", str(request_path)) from e

    if not isinstance(data, dict):
        raise RequestError("Request root must be a mapping", str(request_path))

    return data


def encode_response(files: Iterable[NamedBlob]) -> bytes:
    """Encode generated files the way sqlc expects a JSON plugin response."""
    payload = {
        "files": [
            {
                "name": file.name,
                "contents": base64.b64encode(file.contents).decode("ascii"),
            }
            for file in files
        ]
    }
    return json.dumps(payload).encode("utf-8")
