# =============================================================================
# core/operations.py  —  Operation Table (argument → HTTP → text)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   For every catalog entry, defines a small Operation record:
#
#     build(args)                    → BackendRequest   (what to send)
#     render(payload, args)          → str              (what the caller sees)
#     expand(client, payload, args)  → payload          (optional follow-up call)
#
#   The dispatcher (core/dispatcher.py) looks the name up in OPERATIONS and
#   runs build → ApiClient → expand → render.  Each piece is a plain function
#   so it can be tested on its own, without HTTP.
#
# RESPONSE ENVELOPE:
#   The backend wraps entities as {"data": ...}.  Search adds {"meta": ...}.
#   Renderers unwrap "data" via _data().
#
# LIST OPERATIONS NEVER FORWARD FULL RECORDS:
#   Each list renderer keeps only a documented subset of fields
#   (_PROMPT_SUMMARY, _COLLECTION_SUMMARY, _DOCUMENT_SUMMARY).
# =============================================================================

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional
from urllib.parse import quote, urlencode

from core.errors import OperationError
from core.models import BackendRequest, ErrorKind, HttpMethod

Args = Mapping[str, Any]
Builder = Callable[[Args], BackendRequest]
Renderer = Callable[[Any, Args], str]
Expander = Callable[[Any, Any, Args], Awaitable[Any]]

# Prompt descriptions in search hits are cut to this many characters.
DESCRIPTION_PREVIEW_LENGTH = 100
COLLECTION_ITEMS_LIMIT = 50


@dataclass(frozen=True)
class Operation:
    """How one named operation talks to the backend."""

    name: str
    build: Builder
    render: Renderer
    expand: Optional[Expander] = None


# =============================================================================
# Shared helpers
# =============================================================================
def to_json(value: Any) -> str:
    """Pretty-print a payload the way callers see it (2-space indent)."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _with_query(path: str, params: list[tuple[str, Any]]) -> str:
    if not params:
        return path
    return f"{path}?{urlencode([(key, _query_value(value)) for key, value in params])}"


def _present(args: Args, *pairs: tuple[str, str]) -> list[tuple[str, Any]]:
    """(query name, argument name) pairs whose argument is set and truthy."""
    return [(query_key, args[arg_key]) for query_key, arg_key in pairs if args.get(arg_key)]


def _path_id(args: Args, key: str) -> str:
    value = args.get(key)
    if value is None or value == "":
        raise ValueError(f"Missing required argument: {key}")
    return quote(str(value), safe="")


def _pick(args: Args, keys: tuple[str, ...]) -> dict[str, Any]:
    return {key: args[key] for key in keys if key in args}


def _without(args: Args, key: str) -> dict[str, Any]:
    return {name: value for name, value in args.items() if name != key}


def _data(payload: Any) -> Any:
    if not isinstance(payload, dict) or "data" not in payload:
        raise OperationError(ErrorKind.UNKNOWN, "Unexpected API response: missing 'data' field")
    return payload["data"]


def _summarize(items: Any, fields: tuple[tuple[str, str], ...]) -> list[dict[str, Any]]:
    """Reduce each record to ``fields`` (output name, source name)."""
    return [
        {out_key: item[src_key] for out_key, src_key in fields if src_key in item}
        for item in items or []
    ]


# =============================================================================
# Generic family builders / renderers
# =============================================================================
def _get_builder(collection_path: str, id_key: str) -> Builder:
    def build(args: Args) -> BackendRequest:
        return BackendRequest(HttpMethod.GET, f"{collection_path}/{_path_id(args, id_key)}")
    return build


def _update_builder(collection_path: str, id_key: str) -> Builder:
    def build(args: Args) -> BackendRequest:
        return BackendRequest(
            HttpMethod.PATCH,
            f"{collection_path}/{_path_id(args, id_key)}",
            _without(args, id_key),
        )
    return build


def _delete_builder(collection_path: str, id_key: str) -> Builder:
    def build(args: Args) -> BackendRequest:
        return BackendRequest(HttpMethod.DELETE, f"{collection_path}/{_path_id(args, id_key)}")
    return build


def _render_record(payload: Any, args: Args) -> str:
    return to_json(_data(payload))


def _list_renderer(fields: tuple[tuple[str, str], ...]) -> Renderer:
    def render(payload: Any, args: Args) -> str:
        return to_json(_summarize(_data(payload), fields))
    return render


def _created_renderer(family: str, label_key: str) -> Renderer:
    def render(payload: Any, args: Args) -> str:
        return f'✓ Created {family} "{args.get(label_key)}"\n\nID: {_data(payload).get("_id")}'
    return render


def _deleted_renderer(family: str, id_key: str) -> Renderer:
    def render(payload: Any, args: Args) -> str:
        return f"✓ Deleted {family} {args.get(id_key)}"
    return render


# =============================================================================
# Prompts
# =============================================================================
_PROMPT_SUMMARY = (("id", "_id"), ("title", "title"), ("description", "description"), ("engine", "engine"))


def _build_list_prompts(args: Args) -> BackendRequest:
    # Prompts filter with "q"; collections and documents use "search".
    params = _present(args, ("q", "search"), ("limit", "limit"))
    return BackendRequest(HttpMethod.GET, _with_query("/v1/prompts", params))


def _build_create_prompt(args: Args) -> BackendRequest:
    body = _pick(args, ("title", "description", "content", "engine"))
    body["parameters"] = {}
    body["variables"] = []
    return BackendRequest(HttpMethod.POST, "/v1/prompts", body)


def _render_update_prompt(payload: Any, args: Args) -> str:
    data = _data(payload)
    return f'✓ Updated prompt "{data.get("title")}"\n\nNew version: {data.get("currentVersion")}'


# =============================================================================
# Collections
# =============================================================================
_COLLECTION_SUMMARY = (("id", "id"), ("name", "name"), ("description", "description"), ("itemCount", "itemCount"))


def _build_list_collections(args: Args) -> BackendRequest:
    params = _present(args, ("search", "search"), ("limit", "limit"))
    return BackendRequest(HttpMethod.GET, _with_query("/v1/collections", params))


async def _expand_collection_items(client: Any, payload: Any, args: Args) -> Any:
    """Second, conditional GET for get_collection(includeItems=true).

    The condition is the caller's argument, never the first response.
    """
    if not args.get("includeItems"):
        return payload
    collection_id = _path_id(args, "collectionId")
    items = await client.execute(
        HttpMethod.GET,
        _with_query(f"/v1/collections/{collection_id}/items", [("limit", COLLECTION_ITEMS_LIMIT)]),
    )
    return {**payload, "data": {**_data(payload), "items": _data(items)}}


def _build_create_collection(args: Args) -> BackendRequest:
    body = _pick(args, ("name", "description", "color", "icon"))
    return BackendRequest(HttpMethod.POST, "/v1/collections", body)


def _render_update_collection(payload: Any, args: Args) -> str:
    return f'✓ Updated collection "{_data(payload).get("name")}"'


def _membership_builder(method: HttpMethod) -> Builder:
    # add → POST, remove → PUT.  The backend defines the asymmetry.
    def build(args: Args) -> BackendRequest:
        return BackendRequest(
            method,
            f"/v1/collections/{_path_id(args, 'collectionId')}/items",
            {"itemIds": args.get("itemIds"), "itemType": args.get("itemType")},
        )
    return build


def _render_add_to_collection(payload: Any, args: Args) -> str:
    data = _data(payload)
    return (
        f"✓ Added {data.get('added')} item(s) to collection\n\n"
        f"Already in collection: {data.get('alreadyInCollection')}"
    )


def _render_remove_from_collection(payload: Any, args: Args) -> str:
    return f"✓ Removed {_data(payload).get('removed')} item(s) from collection"


# =============================================================================
# Documents
# =============================================================================
_DOCUMENT_SUMMARY = (("id", "id"), ("title", "title"), ("status", "status"))


def _build_list_documents(args: Args) -> BackendRequest:
    params = _present(args, ("collectionId", "collectionId"), ("search", "search"), ("limit", "limit"))
    return BackendRequest(HttpMethod.GET, _with_query("/v1/documents", params))


def _build_create_document(args: Args) -> BackendRequest:
    body = _pick(args, ("title", "content"))
    body["tags"] = args.get("tags") or []
    return BackendRequest(HttpMethod.POST, "/v1/documents", body)


def _render_update_document(payload: Any, args: Args) -> str:
    return f'✓ Updated document "{_data(payload).get("title")}"'


# =============================================================================
# Search
# =============================================================================
def _build_search(args: Args) -> BackendRequest:
    params: list[tuple[str, Any]] = [("q", args.get("query", ""))]
    if args.get("type"):
        params.append(("type", args["type"]))
    # Semantic is the backend default; only an explicit False is sent.
    if args.get("semantic") is False:
        params.append(("semantic", "false"))
    return BackendRequest(HttpMethod.GET, _with_query("/v1/search", params))


def _score(hit: Mapping[str, Any]) -> str:
    return f"{float(hit.get('score') or 0):.2f}"


def _prompt_hit(hit: Mapping[str, Any]) -> str:
    description = hit.get("description") or ""
    preview = description[:DESCRIPTION_PREVIEW_LENGTH]
    ellipsis = "..." if len(description) > DESCRIPTION_PREVIEW_LENGTH else ""
    return f"- **{hit.get('title')}** (score: {_score(hit)}) - {preview}{ellipsis}"


def _document_hit(hit: Mapping[str, Any]) -> str:
    return f"- **{hit.get('title')}** (score: {_score(hit)})"


def _collection_hit(hit: Mapping[str, Any]) -> str:
    return f"- **{hit.get('name')}** (score: {_score(hit)}, {hit.get('matchedItems')} matched items)"


_SEARCH_SECTIONS = (
    ("prompts", "Prompts", _prompt_hit),
    ("documents", "Documents", _document_hit),
    ("collections", "Collections", _collection_hit),
)


def _render_search(payload: Any, args: Args) -> str:
    data = _data(payload) or {}
    query = args.get("query", "")

    sections = []
    for key, label, line in _SEARCH_SECTIONS:
        hits = data.get(key) or []
        if hits:
            lines = "\n".join(line(hit) for hit in hits)
            sections.append(f"### {label} ({len(hits)})\n{lines}")

    if not sections:
        return f'No results found for "{query}".'

    meta = payload.get("meta") or {}
    if meta.get("semantic"):
        header = f'## Semantic Search Results for "{query}"'
    else:
        header = f'## Search Results for "{query}"'
    return header + "\n\n" + "\n\n".join(sections)


# =============================================================================
# The table
# =============================================================================
_OPERATION_LIST = (
    # prompts
    Operation("list_prompts", _build_list_prompts, _list_renderer(_PROMPT_SUMMARY)),
    Operation("get_prompt", _get_builder("/v1/prompts", "promptId"), _render_record),
    Operation("create_prompt", _build_create_prompt, _created_renderer("prompt", "title")),
    Operation("update_prompt", _update_builder("/v1/prompts", "promptId"), _render_update_prompt),
    Operation("delete_prompt", _delete_builder("/v1/prompts", "promptId"), _deleted_renderer("prompt", "promptId")),
    # collections
    Operation("list_collections", _build_list_collections, _list_renderer(_COLLECTION_SUMMARY)),
    Operation(
        "get_collection",
        _get_builder("/v1/collections", "collectionId"),
        _render_record,
        expand=_expand_collection_items,
    ),
    Operation("create_collection", _build_create_collection, _created_renderer("collection", "name")),
    Operation(
        "update_collection", _update_builder("/v1/collections", "collectionId"), _render_update_collection
    ),
    Operation(
        "delete_collection",
        _delete_builder("/v1/collections", "collectionId"),
        _deleted_renderer("collection", "collectionId"),
    ),
    Operation("add_to_collection", _membership_builder(HttpMethod.POST), _render_add_to_collection),
    Operation("remove_from_collection", _membership_builder(HttpMethod.PUT), _render_remove_from_collection),
    # documents
    Operation("list_documents", _build_list_documents, _list_renderer(_DOCUMENT_SUMMARY)),
    Operation("get_document", _get_builder("/v1/documents", "documentId"), _render_record),
    Operation("create_document", _build_create_document, _created_renderer("document", "title")),
    Operation("update_document", _update_builder("/v1/documents", "documentId"), _render_update_document),
    Operation(
        "delete_document",
        _delete_builder("/v1/documents", "documentId"),
        _deleted_renderer("document", "documentId"),
    ),
    # search
    Operation("search_context_repo", _build_search, _render_search),
)

OPERATIONS: dict[str, Operation] = {operation.name: operation for operation in _OPERATION_LIST}
