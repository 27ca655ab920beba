# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
#   ContextRepoError
#   ├── OperationError           backend failures, raised ONLY by ApiClient
#   ├── UnhandledOperationError  unknown tool name, raised by the dispatcher
#   ├── ResourceNotFoundError    unknown resource URI, raised by the provider
#   └── ConfigurationError       bad/missing environment at startup (fatal)
#
# Per-invocation errors never escape the dispatcher: they are rendered into
# an error ToolResult.  ConfigurationError is the only one that stops the
# process.
# =============================================================================

from core.models import ErrorKind


class ContextRepoError(Exception):
    """Base class for every error this package raises on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OperationError(ContextRepoError):
    """A backend call failed; ``kind`` says how."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    def __repr__(self) -> str:
        return f"OperationError(kind={self.kind.value!r}, message={self.message!r})"


class UnhandledOperationError(ContextRepoError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ResourceNotFoundError(ContextRepoError):
    def __init__(self, uri: str):
        super().__init__(f"Unknown resource: {uri}")
        self.uri = uri


class ConfigurationError(ContextRepoError):
    pass
