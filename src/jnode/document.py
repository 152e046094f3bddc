"""Document accessor: the single owner of the full JSON text."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class DocumentAccessor(Protocol):
    def get_document_text(self) -> str: ...

    def set_document_text(self, text: str, *, mark_dirty: bool) -> None: ...


def format_json(content: str, indent: int = 2) -> str:
    """Pretty-print document text for display; unparsable text is shown as is."""
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        return content
    return json.dumps(parsed, indent=indent, ensure_ascii=False)


class TextDocument:
    """In-memory document text with a dirty flag and optional backing file."""

    def __init__(self, text: str = "{}", file_path: str = "") -> None:
        self._text = text
        self.file_path = file_path
        self.dirty = False
        self._listeners: list[Callable[[str], None]] = []

    @classmethod
    def from_file(cls, file_path: str) -> TextDocument:
        text = Path(file_path).read_text(encoding="utf-8")
        return cls(text, file_path=file_path)

    def get_document_text(self) -> str:
        return self._text

    def set_document_text(self, text: str, *, mark_dirty: bool) -> None:
        self._text = text
        if mark_dirty:
            self.dirty = True
        for listener in list(self._listeners):
            listener(text)

    def subscribe(self, listener: Callable[[str], None]) -> None:
        """Call ``listener(text)`` whenever the text is replaced."""
        self._listeners.append(listener)

    def save(self, file_path: str = "") -> str:
        """Write the text to disk and clear the dirty flag. Returns the path."""
        target = file_path or self.file_path
        if not target:
            raise ValueError("No file name")
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self._text, encoding="utf-8")
        self.file_path = str(path)
        self.dirty = False
        logger.info("saved %s", self.file_path)
        return self.file_path
