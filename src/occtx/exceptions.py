"""Exceptions for occtx."""


class ContextError(Exception):
    """Base exception for context errors."""

    pass


class ResolutionError(ContextError):
    """Home or working directory could not be determined."""

    pass


class ContextFileError(ContextError):
    """Error reading, writing or moving a context-related file."""

    pass


class InvalidNameError(ContextError):
    """Context name is unsafe to use as a filename."""

    pass


class InvalidFormatError(ContextError):
    """Unknown context format string."""

    pass


class ContextNotFoundError(ContextError):
    """Named context does not exist in the resolved scope."""

    pass


class ContextExistsError(ContextError):
    """Create, import or rename target already exists."""

    pass


class InvalidContentError(ContextError):
    """Stored or supplied content is not a well-formed JSON object."""

    pass


class SourceInvalidError(InvalidContentError):
    """Active configuration is missing or malformed when creating a context."""

    pass


class CurrentContextProtectedError(ContextError):
    """Attempted to delete the context that is currently active."""

    pass


class NoPreviousContextError(ContextError):
    """There is no previous context to switch back to."""

    pass


class StalePreviousError(ContextError):
    """Previous context recorded in state no longer exists."""

    pass
