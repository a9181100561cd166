"""
JSON body parsing shared by the HTTP route and the serverless adapter.

Mirrors the defaults of a typical JSON body-parsing middleware: non-JSON
content types and empty bodies become an empty object, and only objects or
arrays are accepted at the top level.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from ..core.errors import BodyParseError


def _reject_constant(name: str) -> Any:
    raise BodyParseError(f"Request body contains non-JSON constant {name}")


def is_json_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def parse_json_body(raw: bytes, content_type: Optional[str], max_bytes: int) -> Any:
    """
    Decode a raw request body into a JSON object or array.

    Args:
        raw: Request body bytes
        content_type: Value of the Content-Type header, if any
        max_bytes: Largest body accepted

    Returns:
        The parsed object or array, or an empty dict when there is nothing to parse

    Raises:
        BodyParseError: If the body is too large, not valid JSON (NaN and Infinity included), or a bare scalar
    """
    if not is_json_content_type(content_type) or not raw:
        return {}

    if len(raw) > max_bytes:
        raise BodyParseError(f"Request body of {len(raw)} bytes exceeds limit of {max_bytes}")

    try:
        parsed = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise BodyParseError(f"Request body is not valid JSON: {exc}") from exc

    if not isinstance(parsed, (dict, list)):
        raise BodyParseError(
            f"Request body must be a JSON object or array, got {type(parsed).__name__}"
        )
    return parsed
