"""Filesystem layout for global and project contexts."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ContextFileError
from .exceptions import ResolutionError
from .models import ContextFormat
from .models import Scope

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = Path(".config") / "opencode"
PROJECT_DIR_NAME = "opencode"
SETTINGS_DIR_NAME = "settings"
ACTIVE_CONFIG_NAME = "opencode.json"
STATE_FILE_NAME = ".occtx-state.json"
DIR_MODE = 0o755


@dataclass(frozen=True)
class ContextPaths:
    """Paths for both context scopes.

    Immutable value computed once per invocation. Applications normally build
    it with ``from_environment``; tests inject paths directly.

    Attributes:
        global_config_dir: ~/.config/opencode
        global_contexts_dir: ~/.config/opencode/settings
        global_active_config: ~/.config/opencode/opencode.json
        global_state_file: ~/.config/opencode/settings/.occtx-state.json
        project_config_dir: ./opencode
        project_contexts_dir: ./opencode/settings
        project_active_config: ./opencode.json
        project_state_file: ./opencode/settings/.occtx-state.json

    Note:
        The project active config sits at the project's top level, not under
        ``./opencode/`` where saved contexts live.
    """

    global_config_dir: Path
    global_contexts_dir: Path
    global_active_config: Path
    global_state_file: Path
    project_config_dir: Path
    project_contexts_dir: Path
    project_active_config: Path
    project_state_file: Path

    @classmethod
    def from_roots(cls, home: Path, cwd: Path) -> "ContextPaths":
        """Build the layout under explicit home and working directories."""
        global_config_dir = home / CONFIG_DIR_NAME
        global_contexts_dir = global_config_dir / SETTINGS_DIR_NAME
        project_config_dir = cwd / PROJECT_DIR_NAME
        project_contexts_dir = project_config_dir / SETTINGS_DIR_NAME

        return cls(
            global_config_dir=global_config_dir,
            global_contexts_dir=global_contexts_dir,
            global_active_config=global_config_dir / ACTIVE_CONFIG_NAME,
            global_state_file=global_contexts_dir / STATE_FILE_NAME,
            project_config_dir=project_config_dir,
            project_contexts_dir=project_contexts_dir,
            project_active_config=cwd / ACTIVE_CONFIG_NAME,
            project_state_file=project_contexts_dir / STATE_FILE_NAME,
        )

    @classmethod
    def from_environment(cls, home: Path | None = None, cwd: Path | None = None) -> "ContextPaths":
        """Resolve paths from the user's home and the current directory.

        Args:
            home: Override for the home directory
            cwd: Override for the working directory

        Raises:
            ResolutionError: If either directory cannot be determined
        """
        try:
            home = home if home is not None else Path.home()
        except (RuntimeError, KeyError, OSError) as e:
            raise ResolutionError(f"Cannot determine home directory: {e}") from e

        try:
            cwd = cwd if cwd is not None else Path.cwd()
        except OSError as e:
            raise ResolutionError(f"Cannot determine working directory: {e}") from e

        paths = cls.from_roots(home.absolute(), cwd.absolute())
        logger.debug(f"Resolved context paths: global={paths.global_config_dir}, project={paths.project_config_dir}")
        return paths

    def config_dir(self, scope: Scope) -> Path:
        return self.project_config_dir if scope is Scope.PROJECT else self.global_config_dir

    def contexts_dir(self, scope: Scope) -> Path:
        return self.project_contexts_dir if scope is Scope.PROJECT else self.global_contexts_dir

    def active_config(self, scope: Scope) -> Path:
        return self.project_active_config if scope is Scope.PROJECT else self.global_active_config

    def state_file(self, scope: Scope) -> Path:
        return self.project_state_file if scope is Scope.PROJECT else self.global_state_file

    def ensure_directories(self, scope: Scope) -> None:
        """Create the root and settings directories for a scope if absent.

        Raises:
            ContextFileError: If a directory cannot be created
        """
        for directory in (self.config_dir(scope), self.contexts_dir(scope)):
            try:
                directory.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            except OSError as e:
                raise ContextFileError(f"Failed to create directory {directory}: {e}") from e
        logger.debug(f"Ensured {scope.value} directories under {self.config_dir(scope)}")

    def contexts_exist(self, scope: Scope) -> bool:
        """Check whether a scope holds at least one saved context.

        Only meant for user-facing hints; unreadable directories count as empty.
        """
        directory = self.contexts_dir(scope)
        try:
            entries = list(directory.iterdir())
        except OSError:
            return False

        for entry in entries:
            if entry.name.startswith("."):
                continue
            if ContextFormat.from_path(entry) is not None and entry.is_file():
                return True
        return False
