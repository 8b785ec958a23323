"""Data models for occtx."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .exceptions import InvalidFormatError


class Scope(Enum):
    """Context scope enumeration.

    Selects which of the two parallel path sets an operation works on.
    """

    GLOBAL = "global"
    PROJECT = "project"


class ContextFormat(Enum):
    """On-disk format of a saved context.

    Each member carries its user-facing value, file extension and display name.
    """

    JSON = ("json", ".json", "JSON")
    JSONC = ("jsonc", ".jsonc", "JSONC")

    def __init__(self, label: str, extension: str, display_name: str):
        self.label = label
        self.extension = extension
        self.display_name = display_name

    def __str__(self) -> str:
        return self.label

    @property
    def has_header(self) -> bool:
        """Whether contexts created in this format carry a comment header."""
        return self is ContextFormat.JSONC

    @classmethod
    def parse(cls, text: str) -> "ContextFormat":
        """Parse a user-supplied format string such as ``"jsonc"``.

        Raises:
            InvalidFormatError: If the string names no supported format
        """
        wanted = text.strip().lower()
        for fmt in cls:
            if fmt.label == wanted:
                return fmt
        raise InvalidFormatError(f"invalid format '{text}'. Supported formats: {supported_formats()}")

    @classmethod
    def from_path(cls, path: Path) -> "ContextFormat | None":
        """Return the format matching a file's extension, or None."""
        for fmt in cls:
            if path.suffix == fmt.extension:
                return fmt
        return None


def supported_formats() -> str:
    """Comma-separated list of format names, for help and error text."""
    return ", ".join(fmt.label for fmt in ContextFormat)


@dataclass
class Context:
    """A named, saved configuration.

    Attributes:
        name: Context name, derived from the filename without extension
        file_path: Absolute path of the context file
        data: Parsed document; only populated when the context is read
    """

    name: str
    file_path: Path
    data: dict[str, Any] | None = None

    @property
    def format(self) -> ContextFormat:
        return ContextFormat.from_path(self.file_path) or ContextFormat.JSON


@dataclass
class State:
    """Two-slot history of the current and previous context names.

    Empty strings mean "none". Names are not checked against the repository
    here; a stale ``previous`` is only detected when switching back to it.
    """

    current: str = ""
    previous: str = ""

    def set_current(self, name: str) -> None:
        """Make ``name`` current, shifting the old current into previous."""
        self.previous = self.current
        self.current = name

    def unset(self) -> None:
        """Clear current, remembering it as previous."""
        self.previous = self.current
        self.current = ""

    def swap_to_previous(self) -> bool:
        """Exchange current and previous.

        Returns:
            False (state unchanged) if there is no previous context, else True
        """
        if not self.previous:
            return False
        self.current, self.previous = self.previous, self.current
        return True

    def rename_references(self, old_name: str, new_name: str) -> bool:
        """Point any slot holding ``old_name`` at ``new_name``.

        Returns:
            True if either slot changed
        """
        updated = False
        if self.current == old_name:
            self.current = new_name
            updated = True
        if self.previous == old_name:
            self.previous = new_name
            updated = True
        return updated

    def to_dict(self) -> dict[str, str]:
        """Serializable form; empty slots are omitted."""
        data = {}
        if self.current:
            data["current"] = self.current
        if self.previous:
            data["previous"] = self.previous
        return data
