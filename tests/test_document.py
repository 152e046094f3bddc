"""Tests for the in-memory document accessor."""

import pytest

from jnode.document import DocumentAccessor, TextDocument, format_json


class TestFormatJson:
    def test_format_simple(self):
        assert format_json('{"a":1}') == '{\n  "a": 1\n}'

    def test_format_invalid_json(self):
        assert format_json("not json") == "not json"

    def test_format_indent(self):
        assert format_json('{"a":1}', indent=4) == '{\n    "a": 1\n}'


class TestTextDocument:
    def test_is_accessor(self):
        assert isinstance(TextDocument(), DocumentAccessor)

    def test_set_marks_dirty(self):
        doc = TextDocument('{"a": 1}')
        doc.set_document_text('{"a": 2}', mark_dirty=True)
        assert doc.get_document_text() == '{"a": 2}'
        assert doc.dirty is True

    def test_set_without_dirty(self):
        doc = TextDocument()
        doc.set_document_text("[]", mark_dirty=False)
        assert doc.dirty is False

    def test_subscribe(self):
        doc = TextDocument()
        seen = []
        doc.subscribe(seen.append)
        doc.set_document_text("[]", mark_dirty=True)
        assert seen == ["[]"]

    def test_save_and_load(self, tmp_path):
        target = tmp_path / "sub" / "data.json"
        doc = TextDocument('{"a": 1}')
        doc.set_document_text('{"a": 2}', mark_dirty=True)
        saved = doc.save(str(target))
        assert saved == str(target)
        assert doc.dirty is False
        assert target.read_text(encoding="utf-8") == '{"a": 2}'

        loaded = TextDocument.from_file(str(target))
        assert loaded.get_document_text() == '{"a": 2}'
        assert loaded.file_path == str(target)

    def test_save_without_name(self):
        with pytest.raises(ValueError):
            TextDocument().save()
