"""Helpers for safe debug logging.

Persisted blobs carry personal and medical details (names, free-text
notes). Nothing from them should reach a DEBUG log verbatim, so log
call sites pass payloads through :func:`redact_for_log` or log the
shape summary from :func:`summarize_blob` instead.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_NAME_KEYS: frozenset[str] = frozenset({"name", "firstname", "lastname", "first_name", "last_name"})
_FREE_TEXT_KEYS: frozenset[str] = frozenset({"notes"})


def _initial(value: Any) -> str:
    text = str(value).strip()
    return f"{text[0]}." if text else ""


def redact_for_log(value: Any, *, _depth: int = 0) -> Any:
    """Return a copy of *value* with names reduced to initials and notes elided."""
    if _depth > 20:
        return "<max-depth>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            lowered = key.lower()
            if lowered in _NAME_KEYS and v is not None:
                redacted[key] = _initial(v)
            elif lowered in _FREE_TEXT_KEYS and v is not None:
                redacted[key] = f"<notes:{len(str(v))} chars>"
            else:
                redacted[key] = redact_for_log(v, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, _depth=_depth + 1) for v in value]

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    return value


def summarize_blob(blob: Any) -> dict[str, int]:
    """Counts of scenes, firefighters and vitals entries in a raw state blob."""
    summary = {"scenes": 0, "firefighters": 0, "vitals": 0}
    if not isinstance(blob, Mapping):
        return summary
    scenes = blob.get("scenes")
    # Legacy blobs are a single flat scene.
    containers = scenes if isinstance(scenes, list) else [blob]
    if isinstance(scenes, list):
        summary["scenes"] = len(scenes)
    for container in containers:
        if not isinstance(container, Mapping):
            continue
        for key in ("firefighters", "vitals"):
            items = container.get(key)
            if isinstance(items, list):
                summary[key] += len(items)
    return summary
