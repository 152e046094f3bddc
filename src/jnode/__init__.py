"""Inspect one node of a JSON document and edit its scalar fields in place."""

from ._jsonpath import format_path, parse_path
from .errors import MalformedDocument, NonObjectTarget, PatchError, PathNotFound
from .patch import ValueKind, coerce, patch_document, patch_document_text
from .rows import FieldRow, FieldType, normalize_rows, rows_for_value
from .session import EditSession, SelectedNode, SelectionStore, SessionState

__all__ = [
    "EditSession",
    "FieldRow",
    "FieldType",
    "MalformedDocument",
    "NonObjectTarget",
    "PatchError",
    "PathNotFound",
    "SelectedNode",
    "SelectionStore",
    "SessionState",
    "ValueKind",
    "coerce",
    "format_path",
    "normalize_rows",
    "parse_path",
    "patch_document",
    "patch_document_text",
    "rows_for_value",
]
