"""Errors raised while patching a document at a node path."""

from __future__ import annotations


class PatchError(Exception):
    """Base class for failures that abort a commit without touching the document."""


class MalformedDocument(PatchError):
    """The stored document text is not valid JSON."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Document is not valid JSON: {detail}")
        self.detail = detail


class PathNotFound(PatchError):
    """A path segment does not resolve inside the document."""

    def __init__(self, path: str, segment: str | int) -> None:
        super().__init__(f"Path {path} not found (missing segment {segment!r})")
        self.path = path
        self.segment = segment


class NonObjectTarget(PatchError):
    """The node at the path is not an object, so it has no editable fields."""

    def __init__(self, path: str, actual_type: str) -> None:
        super().__init__(f"Node at {path} is {actual_type}, not an object")
        self.path = path
        self.actual_type = actual_type
