"""JSONPath helpers for addressing a single node."""

from __future__ import annotations

from collections.abc import Sequence

from .errors import PathNotFound

NodePath = Sequence[str | int]


def format_path(path: NodePath | None = None) -> str:
    """Render a node path in bracket notation.

    >>> format_path(["customer", 0, "id"])
    '$["customer"][0]["id"]'
    """
    if not path:
        return "$"
    parts: list[str] = []
    for seg in path:
        # bool is an int subclass but never a valid index
        if isinstance(seg, int) and not isinstance(seg, bool):
            parts.append(f"[{seg}]")
        else:
            parts.append(f'["{seg}"]')
    return "$" + "".join(parts)


def parse_path(text: str) -> list[str | int]:
    """Parse a single-node JSONPath back into segments.

    Supports:
    - $ (root)
    - .key (child)
    - ["key"] / ['key'] (quoted child)
    - [n] (array index)
    """
    text = text.strip()
    if not text.startswith("$"):
        raise ValueError("JSONPath must start with $")

    remaining = text[1:]
    segments: list[str | int] = []
    while remaining:
        seg, remaining = _next_segment(remaining)
        segments.append(seg)
    return segments


def _next_segment(path: str) -> tuple[str | int, str]:
    """Extract the next segment from path. Returns (segment, remaining)."""
    if path.startswith("["):
        if path[1:2] in ("'", '"'):
            quote = path[1]
            end = path.find(quote + "]", 2)
            if end == -1:
                raise ValueError("Unclosed bracket")
            return path[2:end], path[end + 2 :]
        end = path.find("]")
        if end == -1:
            raise ValueError("Unclosed bracket")
        index_str = path[1:end].strip()
        if not index_str.isdigit():
            raise ValueError(f"Invalid array index: {index_str!r}")
        return int(index_str), path[end + 1 :]

    if path.startswith("."):
        rest = path[1:]
        end = len(rest)
        for i, ch in enumerate(rest):
            if ch in ".[":
                end = i
                break
        if end == 0:
            raise ValueError("Empty key in path")
        return rest[:end], rest[end:]

    raise ValueError(f"Unexpected character in path: {path[0]!r}")


def _step(current: object, key: str | int) -> tuple[bool, object]:
    if isinstance(current, dict) and isinstance(key, str):
        if key in current:
            return True, current[key]
    elif isinstance(current, list) and isinstance(key, int):
        if 0 <= key < len(current):
            return True, current[key]
    return False, None


def resolve_path(data: object, path: NodePath) -> object:
    """Get the value at a given path in data, raising PathNotFound on a miss."""
    current = data
    for key in path:
        found, current = _step(current, key)
        if not found:
            raise PathNotFound(format_path(path), key)
    return current
