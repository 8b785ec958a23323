"""occtx: context storage and switching for opencode configurations.

This library manages named configuration snapshots ("contexts") in two scopes:
- Global (~/.config/opencode/settings/, activated into ~/.config/opencode/opencode.json)
- Project (./opencode/settings/, activated into ./opencode.json)

Switching copies a saved context over the active configuration and records
the current and previous context names in a small state file, so the
previous context is always one step away.

Public API:
    ContextManager: Main class for context operations
    ContextPaths: Dataclass holding the paths of both scopes
    ContextRepository: File storage for one contexts directory
    Scope: Enum for GLOBAL/PROJECT scopes
    ContextFormat: Enum for JSON/JSONC context files
    Context, State: Data models
    load_state, save_state: State file persistence
    ContextError and subclasses: Exception types

Example:
    ```python
    from occtx import ContextFormat, ContextManager, Scope

    manager = ContextManager.for_scope(Scope.GLOBAL)

    manager.create("work", ContextFormat.JSONC)
    manager.switch("work")
    manager.switch("home")
    manager.switch_to_previous()  # back to "work"
    ```
"""

from .exceptions import ContextError
from .exceptions import ContextExistsError
from .exceptions import ContextFileError
from .exceptions import ContextNotFoundError
from .exceptions import CurrentContextProtectedError
from .exceptions import InvalidContentError
from .exceptions import InvalidFormatError
from .exceptions import InvalidNameError
from .exceptions import NoPreviousContextError
from .exceptions import ResolutionError
from .exceptions import SourceInvalidError
from .exceptions import StalePreviousError
from .manager import ContextManager
from .models import Context
from .models import ContextFormat
from .models import Scope
from .models import State
from .models import supported_formats
from .paths import ContextPaths
from .repository import ContextRepository
from .state import load_state
from .state import save_state
from .utils import validate_context_name

__version__ = "0.1.0"

__all__ = [
    "ContextManager",
    "ContextPaths",
    "ContextRepository",
    "Scope",
    "ContextFormat",
    "Context",
    "State",
    "load_state",
    "save_state",
    "supported_formats",
    "validate_context_name",
    "ContextError",
    "ContextExistsError",
    "ContextFileError",
    "ContextNotFoundError",
    "CurrentContextProtectedError",
    "InvalidContentError",
    "InvalidFormatError",
    "InvalidNameError",
    "NoPreviousContextError",
    "ResolutionError",
    "SourceInvalidError",
    "StalePreviousError",
]
