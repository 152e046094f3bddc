"""Tests for the app and modal helpers."""

import json
from types import SimpleNamespace

from jnode.app import NodeInspectorApp, node_label
from jnode.document import TextDocument
from jnode.modal import NodeModal, render_content
from jnode.session import EditSession, SelectionStore, SessionState


class TestNodeLabel:
    def test_scalar(self):
        assert node_label("id", 5).plain == "id: 5"
        assert node_label("ok", True).plain == "ok: true"
        assert node_label("n", None).plain == "n: null"

    def test_containers(self):
        assert node_label("items", [1, 2, 3]).plain == "items [3]"
        assert node_label(0, {"a": 1}).plain == "0 {1}"

    def test_root(self):
        assert node_label(None, {}).plain == "$ {0}"

    def test_brackets_not_markup(self):
        assert node_label("[b]x[/b]", "v").plain == "[b]x[/b]: v"


class TestRenderContent:
    def test_render_content(self):
        syntax = render_content({"x": 1, "y": None})
        assert json.loads(syntax.code) == {"x": 1, "y": None}
        assert '\n  "x": 1' in syntax.code


class TestNodeInspectorApp:
    def test_init_wires_session(self):
        doc = TextDocument('{"a": {"x": 1}}')
        app = NodeInspectorApp(doc, indent=4)
        assert app.session.document is doc
        assert app.session.indent == 4
        assert app.selection.selected is None



def _press(button_id: str):
    return SimpleNamespace(button=SimpleNamespace(id=button_id))


class TestNodeModalHandlers:
    """Button and close handlers, driven on a stand-in screen."""

    def _make_screen(self, text='{"a": {"x": 1}}', path=("a",)):
        document = TextDocument(text)
        selection = SelectionStore()
        session = EditSession(document, selection)
        selection.select_path(text, list(path))
        notices = []
        screen = SimpleNamespace(
            session=session,
            notices=notices,
            dismissed=[],
            refreshed=[],
            notify=lambda message, **kw: notices.append((message, kw.get("severity"))),
            _show_fields=lambda: None,
        )
        screen._refresh_view = lambda: screen.refreshed.append(True)
        screen.dismiss = lambda result=None: screen.dismissed.append(result)
        screen.action_close = lambda: NodeModal.action_close(screen)
        return document, session, screen

    def test_edit_then_save(self):
        document, session, screen = self._make_screen()
        NodeModal.on_button_pressed(screen, _press("edit"))
        assert session.state is SessionState.EDITING
        session.set_field("x", "2")
        NodeModal.on_button_pressed(screen, _press("save"))
        assert json.loads(document.get_document_text()) == {"a": {"x": 2}}
        assert screen.notices[-1][1] == "information"
        assert screen.refreshed

    def test_failed_save_notifies_error(self):
        document, session, screen = self._make_screen()
        NodeModal.on_button_pressed(screen, _press("edit"))
        document.set_document_text("{broken", mark_dirty=False)
        NodeModal.on_button_pressed(screen, _press("save"))
        message, severity = screen.notices[-1]
        assert severity == "error"
        assert message.startswith("Save failed:")
        assert session.state is SessionState.EDITING

    def test_cancel(self):
        document, session, screen = self._make_screen()
        NodeModal.on_button_pressed(screen, _press("edit"))
        session.set_field("x", "9")
        NodeModal.on_button_pressed(screen, _press("cancel"))
        assert session.state is SessionState.VIEWING
        assert document.get_document_text() == '{"a": {"x": 1}}'

    def test_close_discards_and_warns(self):
        document, session, screen = self._make_screen()
        NodeModal.on_button_pressed(screen, _press("edit"))
        session.set_field("x", "9")
        NodeModal.on_button_pressed(screen, _press("close"))
        assert session.state is SessionState.VIEWING
        assert session.fields == {}
        assert screen.dismissed == [None]
        assert screen.notices[-1][1] == "warning"
        assert document.get_document_text() == '{"a": {"x": 1}}'

    def test_close_without_edits_is_quiet(self):
        _, _, screen = self._make_screen()
        NodeModal.action_close(screen)
        assert screen.dismissed == [None]
        assert screen.notices == []
