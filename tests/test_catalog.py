import pytest

from core.catalog import OPERATION_CATALOG, get_operation, index_by_name, list_operations
from core.models import ArgumentSpec, OperationDescriptor
from core.operations import OPERATIONS


CATALOG_ORDER = [
    "list_prompts",
    "get_prompt",
    "create_prompt",
    "update_prompt",
    "delete_prompt",
    "list_collections",
    "get_collection",
    "create_collection",
    "update_collection",
    "delete_collection",
    "add_to_collection",
    "remove_from_collection",
    "list_documents",
    "get_document",
    "create_document",
    "update_document",
    "delete_document",
    "search_context_repo",
]


def test_catalog_lists_every_operation_in_order():
    names = [op.name for op in list_operations()]
    assert names == CATALOG_ORDER
    assert len(names) == 18
    assert list_operations() is OPERATION_CATALOG


def test_every_catalog_entry_has_an_operation():
    assert [op.name for op in list_operations()] == list(OPERATIONS)


def test_every_entry_has_a_description_and_object_schema():
    for descriptor in list_operations():
        schema = descriptor.input_schema()
        assert descriptor.description
        assert schema["type"] == "object"
        assert set(schema["properties"]) == {arg.name for arg in descriptor.arguments}


@pytest.mark.parametrize(
    "name, required",
    [
        ("list_prompts", []),
        ("get_prompt", ["promptId"]),
        ("create_prompt", ["title", "description", "content", "engine"]),
        ("add_to_collection", ["collectionId", "itemIds", "itemType"]),
        ("create_document", ["title", "content"]),
        ("search_context_repo", ["query"]),
    ],
)
def test_required_arguments(name, required):
    descriptor = get_operation(name)
    assert descriptor.required == required
    assert descriptor.input_schema().get("required", []) == required


def test_schema_omits_empty_required_list():
    assert "required" not in get_operation("list_documents").input_schema()


def test_array_and_enum_arguments_render_into_schema():
    properties = get_operation("remove_from_collection").input_schema()["properties"]
    assert properties["itemIds"]["type"] == "array"
    assert properties["itemIds"]["items"] == {"type": "string"}
    assert properties["itemType"]["enum"] == ["document", "prompt"]


def test_unknown_name_is_none():
    assert get_operation("explode") is None


def test_duplicate_names_are_rejected():
    twice = (
        OperationDescriptor("same", "first"),
        OperationDescriptor("same", "second", (ArgumentSpec("x", "string", "x"),)),
    )
    with pytest.raises(ValueError):
        index_by_name(twice)
