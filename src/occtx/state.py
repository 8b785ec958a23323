"""Persistence for the current/previous context state file."""

import logging
from pathlib import Path

from .exceptions import ContextFileError
from .models import State
from .utils import atomic_write
from .utils import dump_json
from .utils import parse_json_object

logger = logging.getLogger(__name__)


def load_state(path: Path) -> State:
    """Load state from disk.

    A missing file is an empty state. A file that does not hold the expected
    two-field object is also treated as empty: the state is advisory history
    and must not block other commands.

    Args:
        path: State file path

    Returns:
        Loaded state, or an empty State

    Raises:
        ContextFileError: If the file exists but cannot be read
    """
    if not path.exists():
        return State()

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.warning(f"Ignoring undecodable state file {path}")
        return State()
    except OSError as e:
        raise ContextFileError(f"Failed to read state from {path}: {e}") from e

    try:
        data = parse_json_object(text)
    except ValueError as e:
        logger.warning(f"Ignoring corrupt state file {path}: {e}")
        return State()

    current = data.get("current")
    previous = data.get("previous")
    current = "" if current is None else current
    previous = "" if previous is None else previous
    if not isinstance(current, str) or not isinstance(previous, str):
        logger.warning(f"Ignoring state file {path} with non-string fields")
        return State()

    return State(current=current, previous=previous)


def save_state(state: State, path: Path) -> None:
    """Write state atomically, creating the parent directory if needed.

    Args:
        state: State to persist
        path: State file path

    Raises:
        ContextFileError: If the directory or file cannot be written
    """
    try:
        path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        raise ContextFileError(f"Failed to create directory {path.parent}: {e}") from e

    atomic_write(path, dump_json(state.to_dict()))
    logger.debug(f"Saved state to {path}: {state}")
