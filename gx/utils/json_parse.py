"""
JSON parsing utilities.

Function-call arguments come from the model as untyped JSON.  They are
decoded into a plain dict here; each tool then applies its own coercion
rules instead of relying on a fixed record shape.
"""

import json
from typing import Any, Dict, Mapping


def parse_arguments(raw: Any) -> Dict[str, Any]:
    """Decode a function-call argument payload into a dict.

    Accepts a JSON string, an existing mapping, or ``None``/empty (no
    arguments).  Raises ``ValueError`` when the payload is not a JSON
    object.
    """
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if not isinstance(raw, str):
        raise ValueError(f"unsupported argument payload of type {type(raw).__name__}")
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"failed to decode arguments: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"arguments must be a JSON object, got {type(data).__name__}")
    return data


def to_json(value: Any, indent: int = 2) -> str:
    """Serialise *value* for transcripts, falling back to ``str`` for odd types."""
    return json.dumps(value, indent=indent, ensure_ascii=False, default=str)


__all__ = ["parse_arguments", "to_json"]
