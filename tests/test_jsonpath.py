"""Tests for node path formatting and lookup."""

import pytest

from jnode._jsonpath import format_path, parse_path, resolve_path
from jnode.errors import PathNotFound


class TestFormatPath:
    def test_none_is_root(self):
        assert format_path(None) == "$"

    def test_no_argument_is_root(self):
        assert format_path() == "$"

    def test_empty_is_root(self):
        assert format_path([]) == "$"

    def test_mixed_segments(self):
        assert format_path(["customer", 0, "id"]) == '$["customer"][0]["id"]'

    def test_single_index(self):
        assert format_path([3]) == "$[3]"

    def test_digit_string_is_quoted(self):
        assert format_path(["0"]) == '$["0"]'

    def test_tuple_path(self):
        assert format_path(("a", "b")) == '$["a"]["b"]'

    def test_key_with_spaces(self):
        assert format_path(["first name"]) == '$["first name"]'


class TestParsePath:
    def test_root(self):
        assert parse_path("$") == []

    def test_dot_keys(self):
        assert parse_path("$.config.nested") == ["config", "nested"]

    def test_brackets(self):
        assert parse_path('$["customer"][0]["id"]') == ["customer", 0, "id"]

    def test_single_quotes(self):
        assert parse_path("$['a b'][2]") == ["a b", 2]

    def test_mixed(self):
        assert parse_path("$.items[1].name") == ["items", 1, "name"]

    def test_format_output_parses_back(self):
        path = ["customer", 0, "id"]
        assert parse_path(format_path(path)) == path

    def test_must_start_with_dollar(self):
        with pytest.raises(ValueError):
            parse_path("a.b")

    def test_unclosed_bracket(self):
        with pytest.raises(ValueError):
            parse_path("$[0")

    def test_bad_index(self):
        with pytest.raises(ValueError):
            parse_path("$[x]")

    def test_empty_key(self):
        with pytest.raises(ValueError):
            parse_path("$..a")


class TestLookup:
    DATA = {"a": [{"b": 1}, None], "c": {"d": "e"}}

    def test_resolve_nested(self):
        assert resolve_path(self.DATA, ["a", 0, "b"]) == 1

    def test_resolve_root(self):
        assert resolve_path(self.DATA, []) is self.DATA

    def test_resolve_missing_raises(self):
        with pytest.raises(PathNotFound) as exc_info:
            resolve_path(self.DATA, ["c", "zz"])
        assert exc_info.value.segment == "zz"
        assert exc_info.value.path == '$["c"]["zz"]'

    def test_resolve_into_scalar_raises(self):
        with pytest.raises(PathNotFound):
            resolve_path(self.DATA, ["c", "d", "e"])
