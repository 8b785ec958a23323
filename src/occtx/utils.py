"""Utility functions for occtx."""

import json
import os
from pathlib import Path
from typing import Any

from .exceptions import ContextFileError
from .exceptions import InvalidNameError

COMMENT_MARKER = "//"
TEMP_SUFFIX = ".tmp"


def validate_context_name(name: str) -> None:
    """Check that a context name is safe to use as a filename.

    Args:
        name: Candidate context name

    Raises:
        InvalidNameError: If the name is empty, is ``.`` or ``..``, contains a
            path separator or null byte, or starts with ``.``

    Examples:
        >>> validate_context_name("work")
        >>> validate_context_name("../etc")
        Traceback (most recent call last):
        ...
        occtx.exceptions.InvalidNameError: context name cannot contain path separators
    """
    if not name:
        raise InvalidNameError("context name cannot be empty")
    if "/" in name or "\\" in name:
        raise InvalidNameError("context name cannot contain path separators")
    if "\x00" in name:
        raise InvalidNameError("context name cannot contain null bytes")
    if name in (".", ".."):
        raise InvalidNameError("context name cannot be '.' or '..'")
    if name.startswith("."):
        raise InvalidNameError("context name cannot start with '.'")


def strip_comment_lines(text: str) -> str:
    """Drop every line whose trimmed content starts with ``//``.

    This is line-oriented, not a tokenizer: a string value that sits on its
    own line and begins with ``//`` is removed as well.

    Examples:
        >>> strip_comment_lines('// header\\n{"a": 1}')
        '{"a": 1}'
    """
    lines = text.split("\n")
    return "\n".join(line for line in lines if not line.strip().startswith(COMMENT_MARKER))


def parse_json_object(text: str | bytes) -> dict[str, Any]:
    """Parse JSON text that must hold an object.

    Raises:
        ValueError: If the text is not JSON or the top level is not an object
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def dump_json(data: Any) -> str:
    """Pretty-print with two-space indent, keeping key order."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def atomic_write(path: Path, content: str | bytes) -> None:
    """Replace ``path`` with ``content`` without exposing a partial file.

    Content goes to a ``<path>.tmp`` sibling first and is renamed over the
    target. The rename is the commit point; on failure the temp file is
    removed and the target is left as it was.

    Args:
        path: Destination file (parent directory must exist)
        content: Text (written as UTF-8) or raw bytes

    Raises:
        ContextFileError: If writing or renaming fails
    """
    data = content.encode("utf-8") if isinstance(content, str) else content
    temp_path = path.with_name(path.name + TEMP_SUFFIX)

    try:
        with open(temp_path, "wb") as f:
            f.write(data)
        os.replace(temp_path, path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise ContextFileError(f"Failed to write {path}: {e}") from e
