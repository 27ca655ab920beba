# =============================================================================
# core/catalog.py  —  The Operation Catalog (what MCP clients can discover)
# =============================================================================
#
# Eighteen operations in four families, in a fixed order:
#
#   prompt      list / get / create / update / delete
#   collection  list / get / create / update / delete / add_to / remove_from
#   document    list / get / create / update / delete
#   search      search_context_repo
#
# The descriptions here are read by the calling LLM to decide WHEN to call a
# tool, so they say what the tool does and what it returns.
#
# The catalog is for discovery only.  core/dispatcher.py does not consult it
# to validate arguments.
# =============================================================================

from typing import Optional

from core.models import ArgumentSpec, OperationDescriptor

_LIMIT_DESCRIPTION = "Maximum number of results to return (default: 20, max: 100)"
_ITEM_TYPES = ("document", "prompt")


def _arg(name: str, type_: str, description: str, required: bool = False, **extra) -> ArgumentSpec:
    return ArgumentSpec(name=name, type=type_, description=description, required=required, **extra)


# -----------------------------------------------------------------------------
# Prompt operations
# -----------------------------------------------------------------------------
_PROMPT_OPERATIONS = (
    OperationDescriptor(
        name="list_prompts",
        description="List all prompts with optional search. Returns prompt titles, descriptions, and IDs.",
        arguments=(
            _arg("search", "string", "Search term to filter prompts by title or description"),
            _arg("limit", "number", _LIMIT_DESCRIPTION),
        ),
    ),
    OperationDescriptor(
        name="get_prompt",
        description="Get the full details of a specific prompt including its content, parameters, and variables.",
        arguments=(
            _arg("promptId", "string", "The unique ID of the prompt to retrieve", required=True),
        ),
    ),
    OperationDescriptor(
        name="create_prompt",
        description="Create a new prompt template. Prompts can include variables using ${variableName} syntax.",
        arguments=(
            _arg("title", "string", "Title of the prompt", required=True),
            _arg("description", "string", "Brief description of what the prompt does", required=True),
            _arg("content", "string", "The prompt template content. Use ${variableName} for variables.", required=True),
            _arg("engine", "string", "Target AI model (e.g., 'gpt-4', 'claude-3', 'gemini-pro')", required=True),
        ),
    ),
    OperationDescriptor(
        name="update_prompt",
        description="Update an existing prompt. Only provide the fields you want to change.",
        arguments=(
            _arg("promptId", "string", "The unique ID of the prompt to update", required=True),
            _arg("title", "string", "New title (optional)"),
            _arg("description", "string", "New description (optional)"),
            _arg("content", "string", "New content (optional)"),
            _arg("changeLog", "string", "Description of what changed (for version history)"),
        ),
    ),
    OperationDescriptor(
        name="delete_prompt",
        description="Permanently delete a prompt. This action cannot be undone.",
        arguments=(
            _arg("promptId", "string", "The unique ID of the prompt to delete", required=True),
        ),
    ),
)


# -----------------------------------------------------------------------------
# Collection operations
# -----------------------------------------------------------------------------
_COLLECTION_OPERATIONS = (
    OperationDescriptor(
        name="list_collections",
        description="List all collections you have access to. Collections organize prompts and documents.",
        arguments=(
            _arg("search", "string", "Search term to filter collections by name or description"),
            _arg("limit", "number", _LIMIT_DESCRIPTION),
        ),
    ),
    OperationDescriptor(
        name="get_collection",
        description="Get details of a specific collection including its items.",
        arguments=(
            _arg("collectionId", "string", "The unique ID of the collection", required=True),
            _arg("includeItems", "boolean", "Include list of items in the collection (default: false)"),
        ),
    ),
    OperationDescriptor(
        name="create_collection",
        description="Create a new collection to organize prompts and documents.",
        arguments=(
            _arg("name", "string", "Name of the collection", required=True),
            _arg("description", "string", "Description of what the collection contains"),
            _arg("color", "string", "Color code for the collection (e.g., #f97316)"),
            _arg("icon", "string", "Emoji icon for the collection"),
        ),
    ),
    OperationDescriptor(
        name="update_collection",
        description="Update a collection's metadata.",
        arguments=(
            _arg("collectionId", "string", "The unique ID of the collection to update", required=True),
            _arg("name", "string", "New name for the collection"),
            _arg("description", "string", "New description"),
            _arg("color", "string", "New color code"),
            _arg("icon", "string", "New emoji icon"),
        ),
    ),
    OperationDescriptor(
        name="delete_collection",
        description="Delete a collection. Items in the collection are not deleted.",
        arguments=(
            _arg("collectionId", "string", "The unique ID of the collection to delete", required=True),
        ),
    ),
    OperationDescriptor(
        name="add_to_collection",
        description="Add documents or prompts to a collection.",
        arguments=(
            _arg("collectionId", "string", "The collection to add items to", required=True),
            _arg("itemIds", "array", "Array of document or prompt IDs to add", required=True, items="string"),
            _arg("itemType", "string", "Type of items being added", required=True, enum=_ITEM_TYPES),
        ),
    ),
    OperationDescriptor(
        name="remove_from_collection",
        description="Remove documents or prompts from a collection.",
        arguments=(
            _arg("collectionId", "string", "The collection to remove items from", required=True),
            _arg("itemIds", "array", "Array of document or prompt IDs to remove", required=True, items="string"),
            _arg("itemType", "string", "Type of items being removed", required=True, enum=_ITEM_TYPES),
        ),
    ),
)


# -----------------------------------------------------------------------------
# Document operations
# -----------------------------------------------------------------------------
_DOCUMENT_OPERATIONS = (
    OperationDescriptor(
        name="list_documents",
        description="List documents, optionally filtered by collection.",
        arguments=(
            _arg("collectionId", "string", "Filter to documents in a specific collection"),
            _arg("search", "string", "Search term to filter documents by title"),
            _arg("limit", "number", _LIMIT_DESCRIPTION),
        ),
    ),
    OperationDescriptor(
        name="get_document",
        description="Get the full content of a specific document.",
        arguments=(
            _arg("documentId", "string", "The unique ID of the document to retrieve", required=True),
        ),
    ),
    OperationDescriptor(
        name="create_document",
        description="Create a new text document.",
        arguments=(
            _arg("title", "string", "Title of the document", required=True),
            _arg("content", "string", "The document content (plain text or markdown)", required=True),
            _arg("tags", "array", "Tags for categorizing the document", items="string"),
        ),
    ),
    OperationDescriptor(
        name="update_document",
        description="Update an existing document. Only provide fields you want to change.",
        arguments=(
            _arg("documentId", "string", "The unique ID of the document to update", required=True),
            _arg("title", "string", "New title (optional)"),
            _arg("content", "string", "New content (optional)"),
            _arg("changeLog", "string", "Description of what changed (for version history)"),
        ),
    ),
    OperationDescriptor(
        name="delete_document",
        description="Permanently delete a document. This action cannot be undone.",
        arguments=(
            _arg("documentId", "string", "The unique ID of the document to delete", required=True),
        ),
    ),
)


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
_SEARCH_OPERATIONS = (
    OperationDescriptor(
        name="search_context_repo",
        description=(
            "Search across all prompts, documents, and collections. "
            "Uses semantic search by default for natural language understanding."
        ),
        arguments=(
            _arg("query", "string", "The search query", required=True),
            _arg(
                "type",
                "string",
                "Filter by type (default: all)",
                enum=("prompts", "documents", "collections", "all"),
            ),
            _arg(
                "semantic",
                "boolean",
                "Use semantic search for natural language understanding (default: true). "
                "Set to false for exact literal matching.",
            ),
        ),
    ),
)


OPERATION_CATALOG: tuple[OperationDescriptor, ...] = (
    _PROMPT_OPERATIONS + _COLLECTION_OPERATIONS + _DOCUMENT_OPERATIONS + _SEARCH_OPERATIONS
)


def index_by_name(descriptors: tuple[OperationDescriptor, ...]) -> dict[str, OperationDescriptor]:
    index: dict[str, OperationDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.name in index:
            raise ValueError(f"Duplicate operation name in catalog: {descriptor.name}")
        index[descriptor.name] = descriptor
    return index


_BY_NAME = index_by_name(OPERATION_CATALOG)


def list_operations() -> tuple[OperationDescriptor, ...]:
    """Return every operation descriptor, in catalog order."""
    return OPERATION_CATALOG


def get_operation(name: str) -> Optional[OperationDescriptor]:
    return _BY_NAME.get(name)
