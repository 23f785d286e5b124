"""Decoding of PDP response bodies."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Union

from .errors import MalformedResponse

JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not a valid JSON value")


def decode_as_tree(content: bytes) -> JsonValue:
    """Parse the whole body, keeping nested objects, arrays and scalars."""
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise MalformedResponse(f"PDP response is not valid JSON: {exc}") from exc


def decode_as_map(content: bytes) -> Dict[str, JsonValue]:
    value = decode_as_tree(content)
    if not isinstance(value, dict):
        raise MalformedResponse(f"Expected a JSON object from the PDP, got {type(value).__name__}")
    return value


def as_text(node: JsonValue) -> str:
    """Render a scalar node as text; containers render as compact JSON."""
    if node is None:
        return ""
    if isinstance(node, bool):
        return "true" if node else "false"
    if isinstance(node, str):
        return node
    if isinstance(node, (dict, list)):
        return json.dumps(node, separators=(",", ":"))
    return str(node)


__all__ = ["JsonValue", "decode_as_tree", "decode_as_map", "as_text"]
