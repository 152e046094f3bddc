"""Field rows: the flattened view of one node and its editable mapping."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

Scalar = str | int | float | bool | None


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_composite(self) -> bool:
        return self in (FieldType.ARRAY, FieldType.OBJECT)


@dataclass(frozen=True)
class FieldRow:
    """One leaf field of a node as displayed.

    ``key`` is None when the node itself is a bare scalar (or an array
    element). Composite rows carry their child count as ``value``.
    """

    key: str | None
    value: Scalar
    type: FieldType


def field_type_of(value: object) -> FieldType:
    """Classify a parsed JSON value."""
    # bool subclasses int, check it first
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if value is None:
        return FieldType.NULL
    if isinstance(value, (int, float)):
        return FieldType.NUMBER
    if isinstance(value, dict):
        return FieldType.OBJECT
    if isinstance(value, list):
        return FieldType.ARRAY
    return FieldType.STRING


def _row(key: str | None, value: object) -> FieldRow:
    kind = field_type_of(value)
    if kind.is_composite:
        return FieldRow(key, len(value), kind)  # type: ignore[arg-type]
    return FieldRow(key, value, kind)  # type: ignore[arg-type]


def rows_for_value(value: object) -> list[FieldRow]:
    """Flatten one node into the rows a graph view would display.

    Objects give one row per key. Arrays give one key-less row per
    element. Scalars give a single key-less row.
    """
    if isinstance(value, dict):
        return [_row(k, v) for k, v in value.items()]
    if isinstance(value, list):
        return [_row(None, v) for v in value]
    return [_row(None, value)]


def normalize_rows(rows: Sequence[FieldRow]) -> dict[str, Scalar]:
    """Return a plain key -> value mapping, dropping array and object fields.

    A single key-less row is a bare scalar node and maps to ``{"value": ...}``.
    Rows without a key are otherwise skipped; duplicate keys keep the last row.
    """
    if not rows:
        return {}
    if len(rows) == 1 and not rows[0].key:
        return {"value": rows[0].value}

    result: dict[str, Scalar] = {}
    for row in rows:
        if row.type in (FieldType.ARRAY, FieldType.OBJECT):
            continue
        if row.key:
            result[row.key] = row.value
    return result
