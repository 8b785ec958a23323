"""Storage of named context files within one contexts directory."""

import logging
import os
from datetime import datetime
from pathlib import Path

from .exceptions import ContextExistsError
from .exceptions import ContextFileError
from .exceptions import ContextNotFoundError
from .exceptions import InvalidContentError
from .exceptions import SourceInvalidError
from .models import Context
from .models import ContextFormat
from .paths import DIR_MODE
from .paths import STATE_FILE_NAME
from .utils import atomic_write
from .utils import dump_json
from .utils import parse_json_object
from .utils import strip_comment_lines
from .utils import validate_context_name

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_header(name: str, fmt: ContextFormat, created: datetime | None = None) -> str:
    """Comment header written at the top of newly created JSONC contexts."""
    created = created or datetime.now()
    return (
        f"// opencode context: {name}\n"
        f"// Format: {fmt.display_name}\n"
        f"// Created: {created.strftime(TIMESTAMP_FORMAT)}\n"
    )


class ContextRepository:
    """Lists, reads, creates, deletes and renames context files.

    Contexts are ``<name>.json`` or ``<name>.jsonc`` files directly inside
    ``contexts_dir``. When both exist for a name, ``.json`` wins.

    Args:
        contexts_dir: Directory holding the context files
    """

    def __init__(self, contexts_dir: Path):
        self.contexts_dir = contexts_dir

    # ===== Reads =====

    def list(self) -> list[Context]:
        """List saved contexts without reading their content.

        Returns:
            Contexts sorted by filename; empty if the directory does not exist
        """
        if not self.contexts_dir.is_dir():
            return []

        try:
            entries = sorted(self.contexts_dir.iterdir())
        except OSError as e:
            raise ContextFileError(f"Failed to list contexts in {self.contexts_dir}: {e}") from e

        contexts = []
        for entry in entries:
            if entry.is_dir() or entry.name == STATE_FILE_NAME:
                continue
            fmt = ContextFormat.from_path(entry)
            if fmt is None:
                continue
            contexts.append(Context(name=entry.name[: -len(fmt.extension)], file_path=entry))
        return contexts

    def find(self, name: str) -> Path | None:
        """Return the file backing ``name``, probing ``.json`` then ``.jsonc``."""
        validate_context_name(name)
        for fmt in ContextFormat:
            candidate = self._path_for(name, fmt)
            if candidate.is_file():
                return candidate
        return None

    def exists(self, name: str) -> bool:
        return self.find(name) is not None

    def load(self, name: str) -> tuple[Context, bytes]:
        """Read a context once, returning the parsed context and its raw bytes.

        The bytes are exactly the ones that were validated, comments included.

        Raises:
            InvalidNameError: If the name is unsafe
            ContextNotFoundError: If no file exists for the name
            InvalidContentError: If the content is not a JSON object
        """
        path = self._resolve(name)
        raw = self._read_bytes(path)
        text = raw.decode("utf-8", errors="replace")

        if ContextFormat.from_path(path) is ContextFormat.JSONC:
            text = strip_comment_lines(text)

        try:
            data = parse_json_object(text)
        except ValueError as e:
            raise InvalidContentError(f"invalid JSON in context '{name}': {e}") from e

        return Context(name=name, file_path=path, data=data), raw

    def get(self, name: str) -> Context:
        """Read and parse a context."""
        context, _ = self.load(name)
        return context

    def read_raw(self, name: str) -> bytes:
        """Exact bytes of a valid context file, for show and export."""
        _, raw = self.load(name)
        return raw

    # ===== Writes =====

    def create(self, name: str, fmt: ContextFormat, source_path: Path) -> Context:
        """Save the JSON at ``source_path`` as a new context.

        Args:
            name: New context name
            fmt: Format to store the context in
            source_path: Active configuration to copy from

        Raises:
            InvalidNameError: If the name is unsafe
            ContextExistsError: If a context with this name exists in any format
            SourceInvalidError: If the source is missing or not a JSON object
        """
        validate_context_name(name)
        self._ensure_dir()
        self._check_available(name)

        if not source_path.is_file():
            raise SourceInvalidError(f"no active opencode.json found at {source_path}")
        try:
            data = parse_json_object(self._read_bytes(source_path))
        except ValueError as e:
            raise SourceInvalidError(f"current opencode.json is not valid JSON: {e}") from e

        content = dump_json(data)
        if fmt.has_header:
            content = format_header(name, fmt) + content

        path = self._path_for(name, fmt)
        atomic_write(path, content)
        logger.info(f"Created context '{name}' ({fmt.display_name}) from {source_path}")
        return Context(name=name, file_path=path, data=data)

    def import_json(self, name: str, text: str) -> Context:
        """Save JSON text as a new plain ``.json`` context.

        Raises:
            InvalidNameError: If the name is unsafe
            ContextExistsError: If a context with this name exists in any format
            InvalidContentError: If the text is empty or not a JSON object
        """
        validate_context_name(name)
        if not text.strip():
            raise InvalidContentError("no input provided")
        try:
            data = parse_json_object(text)
        except ValueError as e:
            raise InvalidContentError(f"invalid JSON: {e}") from e

        self._ensure_dir()
        self._check_available(name)

        path = self._path_for(name, ContextFormat.JSON)
        atomic_write(path, dump_json(data))
        logger.info(f"Imported context '{name}'")
        return Context(name=name, file_path=path, data=data)

    def delete(self, name: str) -> None:
        """Remove a context file. Does not consult the state."""
        path = self._resolve(name)
        try:
            path.unlink()
        except OSError as e:
            raise ContextFileError(f"Failed to delete context '{name}': {e}") from e
        logger.info(f"Deleted context '{name}'")

    def rename(self, old_name: str, new_name: str) -> Context:
        """Rename a context file, keeping its format.

        The file is moved, not rewritten, so a JSONC header still names the
        old context.

        Raises:
            InvalidNameError: If either name is unsafe
            ContextNotFoundError: If ``old_name`` does not exist
            ContextExistsError: If ``new_name`` exists in any format
        """
        validate_context_name(old_name)
        validate_context_name(new_name)

        old_path = self._resolve(old_name)
        self._check_available(new_name)

        fmt = ContextFormat.from_path(old_path) or ContextFormat.JSON
        new_path = self._path_for(new_name, fmt)
        try:
            os.rename(old_path, new_path)
        except OSError as e:
            raise ContextFileError(f"Failed to rename context '{old_name}' to '{new_name}': {e}") from e

        logger.info(f"Renamed context '{old_name}' to '{new_name}'")
        return Context(name=new_name, file_path=new_path)

    # ===== Private Helpers =====

    def _path_for(self, name: str, fmt: ContextFormat) -> Path:
        return self.contexts_dir / f"{name}{fmt.extension}"

    def _resolve(self, name: str) -> Path:
        path = self.find(name)
        if path is None:
            raise ContextNotFoundError(f"context '{name}' not found")
        return path

    def _check_available(self, name: str) -> None:
        for fmt in ContextFormat:
            if self._path_for(name, fmt).exists():
                raise ContextExistsError(f"context '{name}' already exists ({fmt.display_name} format)")

    def _ensure_dir(self) -> None:
        try:
            self.contexts_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise ContextFileError(f"Failed to create directory {self.contexts_dir}: {e}") from e

    @staticmethod
    def _read_bytes(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise ContextFileError(f"Failed to read {path}: {e}") from e
