"""Context manager orchestrating paths, repository and state."""

import logging
from pathlib import Path

from .exceptions import ContextFileError
from .exceptions import CurrentContextProtectedError
from .exceptions import InvalidNameError
from .exceptions import NoPreviousContextError
from .exceptions import StalePreviousError
from .models import Context
from .models import ContextFormat
from .models import Scope
from .paths import DIR_MODE
from .paths import ContextPaths
from .repository import ContextRepository
from .state import load_state
from .state import save_state
from .utils import atomic_write
from .utils import validate_context_name

logger = logging.getLogger(__name__)


class ContextManager:
    """Switches, creates and maintains contexts within one scope.

    Context files are always changed before the state file is saved, so an
    operation that fails part way leaves the state describing the files as
    they were. State is loaded fresh for every operation and never cached.

    Args:
        paths: Resolved paths for both scopes
        scope: Scope this manager operates on (default: GLOBAL)
    """

    def __init__(self, paths: ContextPaths, scope: Scope = Scope.GLOBAL):
        """Initialize context manager with injected paths.

        Args:
            paths: ContextPaths defining where contexts and state live
            scope: Which path set to use
        """
        self.paths = paths
        self.scope = scope
        self.repository = ContextRepository(paths.contexts_dir(scope))

    @classmethod
    def for_scope(cls, scope: Scope = Scope.GLOBAL) -> "ContextManager":
        """Create a manager with paths resolved from the environment."""
        return cls(ContextPaths.from_environment(), scope)

    @property
    def contexts_dir(self) -> Path:
        return self.paths.contexts_dir(self.scope)

    @property
    def active_config_path(self) -> Path:
        return self.paths.active_config(self.scope)

    @property
    def state_file_path(self) -> Path:
        return self.paths.state_file(self.scope)

    # ===== Reads =====

    def list_contexts(self) -> list[Context]:
        return self.repository.list()

    def get(self, name: str) -> Context:
        return self.repository.get(name)

    def read_raw(self, name: str) -> bytes:
        """Raw content of a context, for show and export."""
        return self.repository.read_raw(name)

    def current(self) -> str:
        """Name of the current context, or "" if none is set."""
        return load_state(self.state_file_path).current

    def contexts_exist(self, scope: Scope | None = None) -> bool:
        """Whether a scope (default: this manager's) has any saved context."""
        return self.paths.contexts_exist(scope or self.scope)

    # ===== Switching =====

    def switch(self, name: str) -> Context:
        """Make ``name`` the active configuration.

        Raises:
            InvalidNameError, ContextNotFoundError, InvalidContentError: If the
                context cannot be resolved; nothing is changed in that case
        """
        context, content = self.repository.load(name)

        active = self.active_config_path
        try:
            active.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise ContextFileError(f"Failed to create directory {active.parent}: {e}") from e
        atomic_write(active, content)

        state = load_state(self.state_file_path)
        state.set_current(name)
        save_state(state, self.state_file_path)

        logger.info(f"Switched to context '{name}' in {self.scope.value} scope")
        return context

    def switch_to_previous(self) -> Context:
        """Switch back to the previous context.

        The swapped state is not saved on its own; ``switch`` records the
        final current/previous pair. If the previous context has disappeared
        the state file is left untouched.

        Raises:
            NoPreviousContextError: If no previous context is recorded
            StalePreviousError: If the previous context no longer exists
        """
        state = load_state(self.state_file_path)
        if not state.swap_to_previous():
            raise NoPreviousContextError("no previous context available")

        target = state.current
        try:
            exists = self.repository.exists(target)
        except InvalidNameError:
            exists = False
        if not exists:
            raise StalePreviousError(f"previous context '{target}' no longer exists")

        return self.switch(target)

    def unset(self) -> None:
        """Remove the active configuration and clear the current context."""
        active = self.active_config_path
        try:
            active.unlink(missing_ok=True)
        except OSError as e:
            raise ContextFileError(f"Failed to remove {active}: {e}") from e

        state = load_state(self.state_file_path)
        state.unset()
        save_state(state, self.state_file_path)
        logger.info(f"Unset current context in {self.scope.value} scope")

    # ===== Maintenance =====

    def create(self, name: str, fmt: ContextFormat = ContextFormat.JSON) -> Context:
        """Save the current active configuration as a new context."""
        return self.repository.create(name, fmt, self.active_config_path)

    def import_context(self, name: str, text: str) -> Context:
        """Save JSON text (e.g. read from stdin) as a new context."""
        return self.repository.import_json(name, text)

    def delete(self, name: str) -> None:
        """Delete a context unless it is the current one.

        Raises:
            CurrentContextProtectedError: If ``name`` is the current context
        """
        validate_context_name(name)
        state = load_state(self.state_file_path)
        if state.current == name:
            raise CurrentContextProtectedError(
                f"cannot delete current context '{name}'. Switch to another context first"
            )
        self.repository.delete(name)

    def rename(self, old_name: str, new_name: str) -> Context:
        """Rename a context and update state references to it."""
        context = self.repository.rename(old_name, new_name)

        state = load_state(self.state_file_path)
        if state.rename_references(old_name, new_name):
            save_state(state, self.state_file_path)
        return context
