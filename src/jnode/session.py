"""Node selection and the edit session that writes field edits back."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum, auto

from ._jsonpath import NodePath, format_path, resolve_path
from .document import DocumentAccessor
from .errors import MalformedDocument, PatchError
from .patch import ValueKind, patch_document_text, to_edit_text, value_kind_of
from .rows import FieldRow, Scalar, normalize_rows, rows_for_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectedNode:
    rows: tuple[FieldRow, ...]
    path: tuple[str | int, ...]
    is_object: bool = False


def node_at(document: object, path: NodePath) -> SelectedNode:
    """Build the selected-node view for ``path`` inside a parsed document."""
    value = resolve_path(document, path)
    return SelectedNode(
        tuple(rows_for_value(value)), tuple(path), isinstance(value, dict)
    )


class SelectionStore:
    """Holds the currently selected node and notifies listeners on change."""

    def __init__(self) -> None:
        self.selected: SelectedNode | None = None
        self._listeners: list[Callable[[SelectedNode | None], None]] = []

    def subscribe(self, listener: Callable[[SelectedNode | None], None]) -> None:
        self._listeners.append(listener)

    def select(self, node: SelectedNode | None) -> None:
        self.selected = node
        for listener in list(self._listeners):
            listener(node)

    def select_path(self, document_text: str, path: NodePath) -> SelectedNode:
        """Parse ``document_text`` and select the node at ``path``."""
        try:
            document = json.loads(document_text)
        except json.JSONDecodeError as exc:
            raise MalformedDocument(str(exc)) from exc
        node = node_at(document, path)
        self.select(node)
        return node

    def clear(self) -> None:
        self.select(None)


class SessionState(Enum):
    VIEWING = auto()
    EDITING = auto()


@dataclass(frozen=True)
class EditableField:
    key: str
    text: str
    kind: ValueKind


class EditSession:
    """Viewing/editing state machine for the selected node.

    VIEWING --begin_edit--> EDITING --commit/cancel--> VIEWING.
    Closing the modal or selecting another node drops back to VIEWING and
    discards uncommitted edits. A failed commit stays in EDITING and keeps
    the edits, with the reason in ``last_error``.
    """

    def __init__(
        self,
        document: DocumentAccessor,
        selection: SelectionStore,
        *,
        indent: int = 2,
    ) -> None:
        self.document = document
        self.selection = selection
        self.indent = indent
        self.state = SessionState.VIEWING
        self.last_error: PatchError | None = None
        self._fields: dict[str, EditableField] = {}
        self._snapshot: dict[str, EditableField] = {}
        selection.subscribe(self.on_selection_changed)

    # -- Views -------------------------------------------------------------

    @property
    def node(self) -> SelectedNode | None:
        return self.selection.selected

    @property
    def editing(self) -> bool:
        return self.state is SessionState.EDITING

    @property
    def fields(self) -> dict[str, str]:
        return {key: f.text for key, f in self._fields.items()}

    @property
    def pending_edits(self) -> dict[str, str]:
        """Fields whose text differs from the value captured at begin_edit."""
        return {
            key: f.text
            for key, f in self._fields.items()
            if key in self._snapshot and self._snapshot[key].text != f.text
        }

    @property
    def has_unsaved_changes(self) -> bool:
        return self.editing and bool(self.pending_edits)

    def display_values(self) -> dict[str, Scalar]:
        if self.node is None:
            return {}
        return normalize_rows(self.node.rows)

    @property
    def can_edit(self) -> bool:
        """True when the node has fields and a save could land somewhere.

        Only objects and the root hold editable fields; a scalar array
        element or an array would always fail with NonObjectTarget.
        """
        if self.node is None or not self.display_values():
            return False
        return self.node.is_object or not self.node.path

    @property
    def path_text(self) -> str:
        return format_path(self.node.path if self.node else None)

    # -- Transitions -------------------------------------------------------

    def begin_edit(self) -> bool:
        if self.editing or self.node is None:
            return False
        values = normalize_rows(self.node.rows)
        self._fields = {
            key: EditableField(key, to_edit_text(value), value_kind_of(value))
            for key, value in values.items()
        }
        self._snapshot = dict(self._fields)
        self.last_error = None
        self.state = SessionState.EDITING
        logger.debug("editing %s (%d fields)", self.path_text, len(self._fields))
        return True

    def set_field(self, key: str, text: str) -> bool:
        if not self.editing or key not in self._fields:
            return False
        self._fields[key] = replace(self._fields[key], text=text)
        return True

    def cancel(self) -> bool:
        if not self.editing:
            return False
        self._fields = dict(self._snapshot)
        self.last_error = None
        self.state = SessionState.VIEWING
        logger.debug("edit of %s cancelled", self.path_text)
        return True

    def commit(self) -> bool:
        """Write the live fields into the document. Returns True on success."""
        if not self.editing or self.node is None:
            return False
        path = self.node.path
        edits = {key: f.text for key, f in self._fields.items()}
        kinds = {key: f.kind for key, f in self._fields.items()}
        try:
            text = patch_document_text(
                self.document.get_document_text(),
                path,
                edits,
                kinds,
                strict=True,
                root_fields=True,
                indent=self.indent,
            )
        except PatchError as exc:
            self.last_error = exc
            logger.warning("save of %s failed: %s", format_path(path), exc)
            return False

        self.document.set_document_text(text, mark_dirty=True)
        self.last_error = None
        self._snapshot = dict(self._fields)
        self.state = SessionState.VIEWING
        logger.info("saved %d fields at %s", len(edits), format_path(path))
        self._refresh_selection(text, path)
        return True

    def close(self) -> None:
        """The host modal closed: drop any edits and return to viewing."""
        if self.editing:
            logger.debug("discarding edits of %s", self.path_text)
        self.state = SessionState.VIEWING
        self.last_error = None
        self._fields = {}
        self._snapshot = {}

    def on_selection_changed(self, node: SelectedNode | None) -> None:
        self.close()

    def _refresh_selection(self, text: str, path: NodePath) -> None:
        # Re-read the node so the displayed rows match the committed values.
        try:
            self.selection.select_path(text, path)
        except PatchError:
            # Root replacement can leave the old path behind; fall back to root.
            self.selection.select_path(text, [])
