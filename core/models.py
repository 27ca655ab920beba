# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the adapter)
# =============================================================================
#
# Every value that crosses a layer boundary has a dataclass here:
#   - OperationDescriptor / ArgumentSpec  →  what callers can discover
#   - BackendRequest                      →  what we send to the Context Repo API
#   - ToolResult / TextContent            →  what callers always get back
#   - ResourceDescriptor / ResourceContents → the resources/list + read shapes
#
# None of these are persisted.  They live for one invocation and are gone.
# The only long-lived values are the catalog (built once at import) and the
# Settings object (core/config.py).
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Enumerations
# -----------------------------------------------------------------------------
class HttpMethod(str, Enum):
    """HTTP verbs the backend understands."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"


class ErrorKind(str, Enum):
    """Classification of a failed backend call (see core/api_client.py)."""

    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    UNKNOWN = "unknown"


# -----------------------------------------------------------------------------
# ArgumentSpec / OperationDescriptor — the discoverable catalog entries
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ArgumentSpec:
    """One named argument of an operation."""

    name: str
    type: str                              # JSON Schema type: "string", "number", ...
    description: str
    required: bool = False
    enum: Optional[tuple[str, ...]] = None
    items: Optional[str] = None            # element type when type == "array"

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type}
        if self.items:
            schema["items"] = {"type": self.items}
        if self.enum:
            schema["enum"] = list(self.enum)
        schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class OperationDescriptor:
    """A named, schema-described operation exposed to MCP clients.

    The descriptor is purely informational: the dispatcher never validates
    arguments against it.  Argument well-formedness is the transport's job.
    """

    name: str
    description: str
    arguments: tuple[ArgumentSpec, ...] = ()

    @property
    def required(self) -> list[str]:
        return [arg.name for arg in self.arguments if arg.required]

    def input_schema(self) -> dict[str, Any]:
        """Render the JSON Schema object advertised in tools/list."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {arg.name: arg.to_schema() for arg in self.arguments},
        }
        if self.required:
            schema["required"] = self.required
        return schema


# -----------------------------------------------------------------------------
# InvocationRequest / BackendRequest — one inbound call, one outbound call
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class InvocationRequest:
    """An inbound tools/call, consumed once by the dispatcher."""

    operation_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BackendRequest:
    """The HTTP request an operation translates its arguments into."""

    method: HttpMethod
    path: str                              # may include "?query=string"
    body: Optional[dict[str, Any]] = None


# -----------------------------------------------------------------------------
# ToolResult — the ONLY value returned to the caller for an invocation
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = "text"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ToolResult:
    """Uniform success-or-error envelope.

    Success and failure have the same shape so the caller-facing contract
    does not depend on the outcome.  Errors carry only a human-readable
    message; no structured error code is exposed.
    """

    content: tuple[TextContent, ...]
    is_error: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=(TextContent(text),))

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=(TextContent(f"Error: {message}"),), is_error=True)

    @property
    def first_text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [block.to_dict() for block in self.content],
            "isError": self.is_error,
        }


# -----------------------------------------------------------------------------
# Resources — resources/list entries and resources/read contents
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    name: str
    description: str
    mime_type: str = "application/json"

    def to_dict(self) -> dict[str, str]:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


@dataclass(frozen=True)
class ResourceContents:
    uri: str
    mime_type: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"uri": self.uri, "mimeType": self.mime_type, "text": self.text}
