"""
Tests for docdiff.formats — loading documents and writing results.
"""

import sys
import os
import json
import logging
import pytest

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from docdiff.core import Array, Bool, Null, Number, Object, String, diff
from docdiff.errors import DocDiffError, DocumentNotFoundError, OutputError, ParseError
from docdiff.formats import (
    MISSING, from_python, to_python, from_json, to_json,
    load_document, compare_files, write_result, default_output_path,
)

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
ORIGINAL_PATH = os.path.join(DATA_DIR, "original.json")
MODIFIED_PATH = os.path.join(DATA_DIR, "modified.json")


# ═══════════════════════════════════════════════════════════════════
#  PYTHON OBJECTS
# ═══════════════════════════════════════════════════════════════════

class TestFromPython:

    def test_primitives(self):
        assert from_python(None) == Null()
        assert from_python(True) == Bool(True)
        assert from_python(42) == Number(42)
        assert from_python(3.14) == Number(3.14)
        assert from_python("hello") == String("hello")

    def test_bool_is_not_number(self):
        assert from_python(True) != Number(1)
        assert isinstance(from_python(False), Bool)

    def test_containers(self):
        assert from_python([1, "a"]) == Array((Number(1), String("a")))
        assert from_python((1,)) == Array((Number(1),))
        assert from_python({"x": None}) == Object({"x": Null()})

    def test_keys_become_strings(self):
        assert from_python({1: "x"}) == Object({"1": String("x")})

    def test_missing_key_is_omitted(self):
        assert from_python({"a": MISSING}) == Object()
        assert from_python({"a": MISSING, "b": 1}) == Object({"b": Number(1)})

    def test_missing_in_list_keeps_position(self):
        assert from_python([1, MISSING]) == Array((Number(1), Null()))

    def test_missing_vs_null(self):
        """A key bound to no value reads as absent, so null shows up as new."""
        result = diff(from_python({"a": MISSING}), from_python({"a": None}))
        assert to_python(result) == {"a": None}

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite(self, value):
        with pytest.raises(ValueError):
            from_python(value)

    @pytest.mark.parametrize("value", [{1, 2}, object(), b"bytes"])
    def test_rejects_other_types(self, value):
        with pytest.raises(TypeError):
            from_python(value)


class TestToPython:

    def test_round_trip(self):
        obj = {
            "users": [{"name": "Alice", "age": 30}, {"name": "Bob", "age": 25.5}],
            "meta": {"version": 2, "active": True, "note": None},
        }
        assert to_python(from_python(obj)) == obj

    def test_absent(self):
        assert to_python(None) is None

    def test_unchanged_positions_default_to_null(self):
        result = Array((None, Number(5), None))
        assert to_python(result) == [None, 5, None]

    def test_unchanged_marker(self):
        result = Array((None, Array((None, Number(5))), Null()))
        assert to_python(result, unchanged="<unchanged>") == [
            "<unchanged>", ["<unchanged>", 5], None,
        ]

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            to_python("not a document")


# ═══════════════════════════════════════════════════════════════════
#  JSON TEXT
# ═══════════════════════════════════════════════════════════════════

class TestJson:

    def test_parse(self):
        doc = from_json('{"key": [1, 2.5, "x"], "flag": true, "nested": {"x": null}}')
        assert doc == Object({
            "key": Array((Number(1), Number(2.5), String("x"))),
            "flag": Bool(True),
            "nested": Object({"x": Null()}),
        })

    def test_keeps_key_order(self):
        doc = from_json('{"b": 1, "a": 2}')
        assert list(doc.entries) == ["b", "a"]

    def test_serialize(self):
        text = to_json(from_json('{"a": [1, true, null]}'), indent=None)
        assert json.loads(text) == {"a": [1, True, None]}

    def test_serialize_diff_result(self):
        result = diff(from_json("[1, 2, 3]"), from_json("[1, 5, 3]"))
        assert json.loads(to_json(result)) == [None, 5, None]
        assert json.loads(to_json(result, unchanged="=")) == ["=", 5, "="]

    def test_serialize_non_ascii(self):
        assert to_json(String("naïve"), indent=None) == '"naïve"'

    def test_syntax_error_location(self):
        with pytest.raises(ParseError) as info:
            from_json('{\n  "a": 1\n  "b": 2\n}', source="broken.json")
        err = info.value
        assert err.source == "broken.json"
        assert err.line == 3
        assert isinstance(err.column, int)
        assert str(err).startswith("broken.json:3:")

    def test_trailing_comma(self):
        with pytest.raises(ParseError):
            from_json('{"a": 1,}')

    def test_empty_text(self):
        with pytest.raises(ParseError):
            from_json("")

    @pytest.mark.parametrize("text", ["NaN", "[Infinity]", '{"a": -Infinity}'])
    def test_rejects_non_finite_literals(self, text):
        with pytest.raises(ParseError) as info:
            from_json(text, source="x.json")
        assert info.value.source == "x.json"

    def test_too_deep(self):
        depth = 100000
        with pytest.raises(ParseError) as info:
            from_json("[" * depth + "]" * depth)
        assert "recursion limit" in str(info.value)

    @pytest.mark.parametrize("text", ['{"a": 1e400}', "[-1e400]", "1E+999"])
    def test_rejects_overflowing_numbers(self, text):
        with pytest.raises(ParseError) as info:
            from_json(text, source="big.json")
        assert info.value.source == "big.json"
        assert "out of range" in str(info.value)

    def test_large_but_finite_number(self):
        assert from_json("1e300") == Number(1e300)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            from_json("{")
        assert issubclass(ParseError, DocDiffError)


# ═══════════════════════════════════════════════════════════════════
#  FILES
# ═══════════════════════════════════════════════════════════════════

class TestLoadDocument:

    def test_load(self):
        doc = load_document(ORIGINAL_PATH)
        assert to_python(doc)["version"] == "1.0.0"

    def test_missing_file(self, tmp_path):
        path = tmp_path / "nope.json"
        with pytest.raises(DocumentNotFoundError) as info:
            load_document(path)
        assert info.value.path == path
        assert isinstance(info.value, FileNotFoundError)

    def test_directory_is_not_a_document(self, tmp_path):
        with pytest.raises(DocumentNotFoundError):
            load_document(tmp_path)

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"a": }', encoding="utf-8")
        with pytest.raises(ParseError) as info:
            load_document(path)
        assert info.value.source == str(path)
        assert info.value.line == 1

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"a": "\xe9"}')
        with pytest.raises(ParseError):
            load_document(path)


class TestCompareFiles:

    def test_example_files(self):
        result = to_python(compare_files(ORIGINAL_PATH, MODIFIED_PATH))
        assert result["version"] == "1.0.1"
        assert result["settings"]["timeout"] == 60
        assert result["settings"]["features"]["caching"] is True
        assert result["tags"] == ["stable", "production", "updated"]
        assert result["metadata"]["author"] == "Jane Smith"

    def test_same_file(self):
        assert compare_files(ORIGINAL_PATH, ORIGINAL_PATH) is None

    def test_missing_file_is_logged_and_raised(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="docdiff.formats"):
            with pytest.raises(DocumentNotFoundError):
                compare_files(ORIGINAL_PATH, tmp_path / "missing.json")
        assert "Error comparing JSON files" in caplog.text

    def test_overflowing_number_is_logged_and_raised(self, tmp_path, caplog):
        path = tmp_path / "big.json"
        path.write_text('{"a": 1e400}', encoding="utf-8")
        with caplog.at_level(logging.ERROR, logger="docdiff.formats"):
            with pytest.raises(ParseError):
                compare_files(ORIGINAL_PATH, path)
        assert "out of range" in caplog.text


class TestWriteResult:

    def test_default_output_path(self, tmp_path):
        assert default_output_path(tmp_path / "a.json") == tmp_path / "diff_output.json"
        assert default_output_path("a.json", "out.json").name == "out.json"

    def test_absent_result_writes_nothing(self, tmp_path):
        path = tmp_path / "diff_output.json"
        assert write_result(None, path) is False
        assert not path.exists()

    def test_writes_json(self, tmp_path):
        path = tmp_path / "nested" / "diff_output.json"
        assert write_result(from_python({"b": 3}), path) is True
        assert json.loads(path.read_text(encoding="utf-8")) == {"b": 3}

    def test_unchanged_marker(self, tmp_path):
        path = tmp_path / "out.json"
        write_result(Array((None, Number(5))), path, unchanged="-")
        assert json.loads(path.read_text(encoding="utf-8")) == ["-", 5]

    def test_unwritable(self, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(OutputError) as info:
            write_result(Number(1), blocker / "out.json")
        assert isinstance(info.value, OSError)
        assert info.value.path == blocker / "out.json"
