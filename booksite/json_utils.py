"""JSON serialization helpers using optional orjson."""

from __future__ import annotations

try:
    import orjson  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - optional dependency
    orjson = None  # type: ignore[assignment]

import json


def json_dumps(data: object) -> str:
    """Serialize data to a compact JSON string.

    Both backends produce the same separators so pages rendered with or
    without orjson are byte-identical.

    Args:
        data: Data structure to serialize.

    Returns:
        JSON representation of ``data``.
    """

    if orjson is not None:
        return orjson.dumps(data).decode()
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))

