"""Terminal app: browse a JSON document as a tree and edit one node at a time."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.syntax import Syntax
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.logging import TextualHandler
from textual.widgets import Footer, Header, Static, Tree
from textual.widgets.tree import TreeNode

from ._jsonpath import parse_path
from .document import TextDocument, format_json
from .errors import PatchError
from .modal import NodeModal
from .patch import to_edit_text
from .session import EditSession, SelectionStore

logger = logging.getLogger(__name__)


def node_label(key: str | int | None, value: object) -> Text:
    """Tree label for a value: ``key: scalar`` or ``key {n}`` / ``key [n]``."""
    prefix = "$" if key is None else str(key)
    if isinstance(value, dict):
        return Text.assemble((prefix, "bold"), f" {{{len(value)}}}")
    if isinstance(value, list):
        return Text.assemble((prefix, "bold"), f" [{len(value)}]")
    return Text.assemble((prefix, "bold"), ": ", to_edit_text(value))


class NodeInspectorApp(App):
    """Tree of the document on the left, highlighted JSON on the right."""

    CSS = """
    #tree {
        width: 2fr;
        border: solid $accent;
    }
    #document-view {
        width: 3fr;
        border: solid $accent 50%;
    }
    """

    TITLE = "JSON Node Inspector"
    BINDINGS = [
        ("ctrl+s", "save", "Save"),
        ("q", "quit", "Quit"),
    ]
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        document: TextDocument,
        *,
        read_only: bool = False,
        indent: int = 2,
        initial_path: list[str | int] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.document = document
        self.read_only = read_only
        self.indent = indent
        self.initial_path = initial_path
        self.selection = SelectionStore()
        self.session = EditSession(document, self.selection, indent=indent)
        document.subscribe(self._on_document_changed)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal():
            yield Tree(Text("$"), id="tree")
            with VerticalScroll(id="document-view"):
                yield Static(id="document")
        yield Footer()

    def on_mount(self) -> None:
        self._reload()
        self.query_one("#tree").focus()
        if self.initial_path is not None:
            self.open_node(self.initial_path)

    def _update_title(self) -> None:
        name = self.document.file_path or "[new]"
        dirty = " [+]" if self.document.dirty else ""
        ro = " [RO]" if self.read_only else ""
        self.sub_title = name + dirty + ro

    def _reload(self) -> None:
        text = self.document.get_document_text()
        self.query_one("#document", Static).update(
            Syntax(
                format_json(text, self.indent),
                "json",
                theme="monokai",
                line_numbers=True,
            )
        )
        tree = self.query_one("#tree", Tree)
        tree.clear()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            tree.root.set_label(Text("$ (invalid JSON)"))
            tree.root.data = None
            self.notify(f"Invalid JSON: {exc}", severity="error", timeout=6)
            self._update_title()
            return
        tree.root.set_label(node_label(None, data))
        tree.root.data = ()
        self._populate(tree.root, data, ())
        tree.root.expand()
        self._update_title()

    def _populate(self, parent: TreeNode, value: object, path: tuple) -> None:
        if isinstance(value, dict):
            items = list(value.items())
        elif isinstance(value, list):
            items = list(enumerate(value))
        else:
            return
        for key, child in items:
            child_path = path + (key,)
            if isinstance(child, (dict, list)):
                node = parent.add(node_label(key, child), data=child_path)
                self._populate(node, child, child_path)
            elif isinstance(value, dict):
                # Object fields open their owning object
                parent.add_leaf(node_label(key, child), data=path)
            else:
                parent.add_leaf(node_label(key, child), data=child_path)

    def _on_document_changed(self, text: str) -> None:
        self._reload()

    def open_node(self, path) -> None:
        """Select the node at ``path`` and show it in the node modal."""
        try:
            self.selection.select_path(self.document.get_document_text(), path)
        except PatchError as exc:
            logger.warning("cannot open node: %s", exc)
            self.notify(str(exc), severity="error", timeout=6)
            return
        self.push_screen(NodeModal(self.session, read_only=self.read_only))

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        if event.node.data is not None:
            self.open_node(list(event.node.data))

    def action_save(self) -> None:
        if self.read_only:
            self.notify("Read-only document", severity="warning")
            return
        try:
            saved = self.document.save()
        except ValueError:
            self.notify("No file name to save to", severity="warning")
            return
        except OSError as exc:
            self.notify(f"Save failed: {exc}", severity="error", timeout=6)
            return
        self._update_title()
        self.notify(f"Saved: {saved}", severity="information")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="jnode",
        description="Inspect and edit JSON nodes in Textual",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="",
        help="JSON file to open",
    )
    parser.add_argument(
        "--node",
        default=None,
        help='open the node at this path, e.g. $["customer"][0]',
    )
    parser.add_argument(
        "-R", "--read-only",
        action="store_true",
        default=False,
        help="open in read-only mode",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="indent used when writing the document back (default: 2)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for the textual devtools console",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, handlers=[TextualHandler()])

    initial_path = None
    if args.node is not None:
        try:
            initial_path = parse_path(args.node)
        except ValueError as exc:
            parser.error(f"--node: {exc}")

    file_path: str = args.file
    document = TextDocument("{}")
    if file_path:
        path = Path(file_path)
        try:
            if path.exists():
                document = TextDocument.from_file(file_path)
            else:
                # New file: start with an empty object
                document = TextDocument("{}", file_path=file_path)
        except OSError as exc:
            print(f"jnode: {exc}", file=sys.stderr)
            sys.exit(1)

    app = NodeInspectorApp(
        document,
        read_only=args.read_only,
        indent=args.indent,
        initial_path=initial_path,
    )
    app.run()


if __name__ == "__main__":
    main()
