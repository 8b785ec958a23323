"""Tests for utility functions."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from occtx.exceptions import ContextFileError
from occtx.exceptions import InvalidNameError
from occtx.utils import atomic_write
from occtx.utils import dump_json
from occtx.utils import parse_json_object
from occtx.utils import strip_comment_lines
from occtx.utils import validate_context_name


class TestValidateContextName:
    """Test validate_context_name function."""

    @pytest.mark.parametrize("name", ["work", "home-2", "my_context", "prod.eu", "a"])
    def test_valid_names(self, name):
        """Test ordinary names are accepted."""
        validate_context_name(name)

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b", "/abs", ".hidden", ".occtx-state", "a\x00b"])
    def test_invalid_names(self, name):
        """Test unsafe names are rejected."""
        with pytest.raises(InvalidNameError):
            validate_context_name(name)

    def test_empty_name_message(self):
        """Test the empty-name message is specific."""
        with pytest.raises(InvalidNameError, match="cannot be empty"):
            validate_context_name("")


class TestStripCommentLines:
    """Test strip_comment_lines function."""

    def test_no_comments(self):
        """Test text without comments is unchanged."""
        text = '{\n  "a": 1\n}'
        assert strip_comment_lines(text) == text

    def test_header_removed(self):
        """Test a leading comment header is removed."""
        text = '// opencode context: work\n// Format: JSONC\n{\n  "a": 1\n}'
        assert json.loads(strip_comment_lines(text)) == {"a": 1}

    def test_indented_comment_removed(self):
        """Test comments with leading whitespace are removed."""
        text = '{\n    // inline note\n  "a": 1\n}'
        assert json.loads(strip_comment_lines(text)) == {"a": 1}

    def test_trailing_comment_kept(self):
        """Test a comment after content on the same line is not stripped."""
        text = '{"url": "http://example.com"}'
        assert strip_comment_lines(text) == text

    def test_quoted_marker_kept(self):
        """Test a string value starting with the marker inside quotes survives."""
        text = '{\n  "path": "//server/share"\n}'
        assert json.loads(strip_comment_lines(text)) == {"path": "//server/share"}

    def test_strip_is_line_oriented(self):
        """Test any line whose text starts with the marker is dropped wholesale."""
        text = '{\n  "a": 1,\n  // "b": 2,\n  "c": 3\n}'
        assert json.loads(strip_comment_lines(text)) == {"a": 1, "c": 3}


class TestParseJsonObject:
    """Test parse_json_object function."""

    def test_object(self):
        """Test an object is returned as a dict."""
        assert parse_json_object('{"theme": "dark"}') == {"theme": "dark"}

    def test_bytes(self):
        """Test bytes input is accepted."""
        assert parse_json_object(b'{"a": [1, 2]}') == {"a": [1, 2]}

    @pytest.mark.parametrize("text", ["[1, 2]", '"str"', "42", "null"])
    def test_non_object_rejected(self, text):
        """Test top-level values other than objects are rejected."""
        with pytest.raises(ValueError):
            parse_json_object(text)

    def test_malformed_rejected(self):
        """Test malformed JSON is rejected."""
        with pytest.raises(ValueError):
            parse_json_object("{not json")


class TestDumpJson:
    """Test dump_json function."""

    def test_two_space_indent(self):
        """Test output uses two-space indentation."""
        assert dump_json({"a": {"b": 1}}) == '{\n  "a": {\n    "b": 1\n  }\n}'

    def test_key_order_preserved(self):
        """Test keys keep insertion order."""
        assert list(json.loads(dump_json({"z": 1, "a": 2}))) == ["z", "a"]

    def test_unicode_not_escaped(self):
        """Test non-ASCII text is written as-is."""
        assert "café" in dump_json({"name": "café"})


class TestAtomicWrite:
    """Test atomic_write function."""

    @pytest.fixture
    def tmpdir_path(self):
        """Create a temporary directory."""
        with TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    def test_writes_text(self, tmpdir_path):
        """Test text content is written as UTF-8."""
        target = tmpdir_path / "file.json"
        atomic_write(target, '{"name": "café"}')
        assert target.read_text(encoding="utf-8") == '{"name": "café"}'

    def test_writes_bytes(self, tmpdir_path):
        """Test bytes content is written verbatim."""
        target = tmpdir_path / "file.json"
        atomic_write(target, b"\x00raw")
        assert target.read_bytes() == b"\x00raw"

    def test_replaces_existing(self, tmpdir_path):
        """Test an existing file is replaced."""
        target = tmpdir_path / "file.json"
        target.write_text("old")
        atomic_write(target, "new")
        assert target.read_text() == "new"

    def test_no_temp_file_left(self, tmpdir_path):
        """Test the temp sibling does not survive a successful write."""
        target = tmpdir_path / "file.json"
        atomic_write(target, "content")
        assert not (tmpdir_path / "file.json.tmp").exists()
        assert [p.name for p in tmpdir_path.iterdir()] == ["file.json"]

    def test_missing_parent_raises(self, tmpdir_path):
        """Test failure is reported as ContextFileError."""
        target = tmpdir_path / "missing" / "file.json"
        with pytest.raises(ContextFileError):
            atomic_write(target, "content")
        assert not target.exists()

    def test_failed_rename_keeps_original(self, tmpdir_path, monkeypatch):
        """Test the target is untouched when the rename step fails."""
        target = tmpdir_path / "file.json"
        target.write_text("original")

        def failing_replace(src, dst):
            raise OSError("simulated crash")

        monkeypatch.setattr("occtx.utils.os.replace", failing_replace)

        with pytest.raises(ContextFileError, match="simulated crash"):
            atomic_write(target, "replacement")

        assert target.read_text() == "original"
        assert not (tmpdir_path / "file.json.tmp").exists()
