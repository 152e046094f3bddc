"""Write edited field strings back into a JSON document at a node path.

Edits arrive as strings (whatever the user typed). Each one is coerced back
to the type the field had before editing:

    number   "2"      -> 2        ("abc" stays "abc")
    boolean  "false"  -> False    ("no"  stays "no")
    null     "null"   -> None     (""    stays "")
    string   "t"      -> "t"

The kind of each field is normally recorded when the edit session starts
(see ``value_kind_of``) and passed in as ``kinds``. Fields without a recorded
kind fall back to the value currently stored in the document.

Patching never mutates its input. Only the containers along the path are
rebuilt; every untouched subtree is shared with the input document.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from enum import Enum, auto

from ._jsonpath import NodePath, format_path, resolve_path
from .errors import MalformedDocument, NonObjectTarget, PathNotFound
from .rows import field_type_of

logger = logging.getLogger(__name__)


class ValueKind(Enum):
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()
    STRING = auto()


def value_kind_of(value: object) -> ValueKind:
    """Return the coercion kind for a scalar value."""
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if value is None:
        return ValueKind.NULL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    return ValueKind.STRING


def to_edit_text(value: object) -> str:
    """Render a scalar in the string form shown in an edit field."""
    if isinstance(value, str):
        return value
    # true / false / null / numbers, as JSON spells them
    return json.dumps(value)


def _parse_number(text: str) -> int | float | None:
    try:
        value = json.loads(text)
    except ValueError:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def coerce(text: str, kind: ValueKind) -> object:
    """Convert an edited string back to ``kind``, keeping the raw string on failure.

    Numbers follow the JSON grammar: ".5", "1.", "+1" and "01" are not
    numbers and stay strings. NaN and Infinity stay strings as well.
    """
    if kind is ValueKind.NUMBER:
        number = _parse_number(text)
        return text if number is None else number
    if kind is ValueKind.BOOLEAN:
        if text == "true":
            return True
        if text == "false":
            return False
        return text
    if kind is ValueKind.NULL:
        return None if text == "null" else text
    return text


def _apply_edits(
    target: dict,
    edits: Mapping[str, str],
    kinds: Mapping[str, ValueKind] | None,
) -> dict:
    updated = dict(target)
    for field, text in edits.items():
        if field in target and field_type_of(target[field]).is_composite:
            logger.debug("skipping composite field %r", field)
            continue
        if kinds is not None and field in kinds:
            kind = kinds[field]
        elif field in target:
            kind = value_kind_of(target[field])
        else:
            kind = ValueKind.STRING
        updated[field] = coerce(text, kind)
    return updated


def _assoc(container: object, key: str | int, value: object) -> object:
    """Return a shallow copy of container with key set to value."""
    if isinstance(container, dict):
        copy = dict(container)
    else:
        copy = list(container)  # type: ignore[call-overload]
    copy[key] = value
    return copy


def patch_document(
    document: object,
    path: NodePath,
    edits: Mapping[str, str],
    kinds: Mapping[str, ValueKind] | None = None,
    *,
    strict: bool = False,
    root_fields: bool = False,
) -> object:
    """Return a new document with ``edits`` applied to the object at ``path``.

    An empty path replaces the whole document with ``edits`` as plain
    strings. With ``root_fields`` set and an object at the root, the edits
    are applied field by field instead, like any other object target.

    A missing intermediate segment raises PathNotFound. When the target is
    missing or is not an object the call is a no-op, unless ``strict`` is
    set, in which case PathNotFound / NonObjectTarget is raised.
    """
    if not path:
        if root_fields and isinstance(document, dict):
            return _apply_edits(document, edits, kinds)
        return dict(edits)

    path_text = format_path(path)
    parents: list[object] = [document]
    current = document
    for key in path[:-1]:
        try:
            current = resolve_path(current, [key])
        except PathNotFound:
            raise PathNotFound(path_text, key) from None
        parents.append(current)

    parent = parents[-1]
    last = path[-1]
    try:
        target = resolve_path(parent, [last])
    except PathNotFound:
        if strict:
            raise PathNotFound(path_text, last) from None
        logger.debug("no node at %s, nothing to patch", path_text)
        return document

    if not isinstance(target, dict):
        if strict:
            raise NonObjectTarget(path_text, field_type_of(target).value)
        logger.debug("node at %s is not an object, nothing to patch", path_text)
        return document

    value: object = _apply_edits(target, edits, kinds)
    for container, key in zip(reversed(parents), reversed(path)):
        value = _assoc(container, key, value)
    return value


def patch_document_text(
    text: str,
    path: NodePath,
    edits: Mapping[str, str],
    kinds: Mapping[str, ValueKind] | None = None,
    *,
    strict: bool = False,
    root_fields: bool = False,
    indent: int = 2,
) -> str:
    """Parse ``text``, patch it, and serialize the result."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDocument(str(exc)) from exc
    patched = patch_document(
        document, path, edits, kinds, strict=strict, root_fields=root_fields
    )
    return json.dumps(patched, indent=indent, ensure_ascii=False)
