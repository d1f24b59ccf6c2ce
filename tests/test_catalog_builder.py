import json

import pytest
from pydantic import ValidationError

from swagger_mcp.core.exceptions import DescriptionFetchError, DescriptionParseError
from swagger_mcp.models.tool import Catalog, ParameterDescriptor, ToolDefinition
from swagger_mcp.services.catalog_builder import build_catalog, coarse_type, discover, synthesize_tool_id
from swagger_mcp.services.description_parser import parse_description
from tests.conftest import (
    ITEMS_OPENAPI30,
    ITEMS_URL,
    ORDERS_OPENAPI31,
    ORDERS_URL,
    PETSTORE_SWAGGER2,
    PETSTORE_URL,
    serve,
)


def _catalog(text: str) -> Catalog:
    document, _ = parse_description(text)
    return build_catalog(document, source="test")


@pytest.mark.parametrize("method,path,expected", [
    ("GET", "/pets/{petId}", "get_pets_by_petId"),
    ("get", "/pets", "get_pets"),
    ("DELETE", "/users/{id}/orders/{orderId}", "delete_users_by_id_orders_by_orderId"),
    ("POST", "/v1/store.items-list", "post_v1_store_items_list"),
    ("PUT", "/", "put_"),
])
def test_synthesize_tool_id(method, path, expected):
    assert synthesize_tool_id(method, path) == expected


@pytest.mark.parametrize("source,expected", [
    (None, "string"),
    ("integer", "integer"),
    ("long", "integer"),
    ("double", "number"),
    ("number", "number"),
    ("boolean", "boolean"),
    ("object", "object"),
    ("array", "array"),
    ("file", "string"),
    ("STRING", "string"),
])
def test_coarse_type(source, expected):
    assert coarse_type(source) == expected


def test_petstore_catalog_ids_and_order():
    catalog = _catalog(PETSTORE_SWAGGER2)

    assert list(catalog) == [
        "listPets",
        "addPet",
        "get_pets_by_petId",
        "deletePet",
        "updatePetPartially",
        "get_store_inventory",
    ]
    assert catalog.version == "2.0"
    assert catalog.server_url == "https://petstore.example.com/v2"
    assert catalog.title == "Petstore"


def test_summary_fallbacks():
    catalog = _catalog(PETSTORE_SWAGGER2)

    assert catalog["listPets"].summary == "List all pets"
    assert catalog["addPet"].summary == "Add a new pet to the store"
    assert catalog["get_store_inventory"].summary == "get_store_inventory"


def test_request_body_becomes_synthetic_body_parameter():
    catalog = _catalog(PETSTORE_SWAGGER2)
    add_pet = catalog["addPet"]

    assert add_pet.parameters == (
        ParameterDescriptor(name="body", location="body", required=True, type="object", description="Request body"),
    )
    assert add_pet.has_request_body() is True
    assert catalog["listPets"].has_request_body() is False


def test_body_parameter_is_appended_after_declared_parameters():
    catalog = _catalog(ITEMS_OPENAPI30)
    replace_item = catalog["replaceItem"]

    assert [(p.name, p.location) for p in replace_item.parameters] == [
        ("itemId", "path"),
        ("X-Request-Id", "header"),
        ("body", "body"),
    ]
    assert replace_item.http_method == "PUT"
    assert replace_item.body_parameter().name == "body"


def test_query_parameter_descriptor():
    catalog = _catalog(ITEMS_OPENAPI30)

    assert catalog["listItems"].parameters == (
        ParameterDescriptor(name="tag", location="query", required=False, type="string"),
    )


def test_unsupported_locations_are_skipped():
    catalog = _catalog(PETSTORE_SWAGGER2)
    orders = _catalog(ORDERS_OPENAPI31)

    assert [p.name for p in catalog["updatePetPartially"].parameters] == ["petId"]
    assert [p.name for p in orders["get_users_by_id_orders_by_orderId"].parameters] == ["id", "orderId", "expand"]


def test_openapi31_catalog():
    catalog = _catalog(ORDERS_OPENAPI31)
    tool = catalog["get_users_by_id_orders_by_orderId"]

    assert tool.summary == "Fetch one order of a user"
    assert [(p.name, p.type) for p in tool.path_parameters()] == [("id", "integer"), ("orderId", "integer")]
    assert tool.query_parameters()[0].type == "array"


def test_discovery_is_deterministic():
    first = _catalog(PETSTORE_SWAGGER2)
    second = _catalog(PETSTORE_SWAGGER2)

    assert first == second
    assert list(first) == list(second)


def test_zero_paths_yield_empty_catalog():
    catalog = _catalog(json.dumps({"swagger": "2.0", "info": {"title": "t", "version": "1"}, "paths": {}}))

    assert len(catalog) == 0
    assert catalog.tools() == ()


def test_duplicate_ids_last_write_wins():
    text = json.dumps({
        "openapi": "3.0.0",
        "info": {"title": "t", "version": "1"},
        "paths": {
            "/a": {"get": {"operationId": "same", "summary": "first"}},
            "/b": {"get": {"operationId": "same", "summary": "second"}},
        },
    })
    catalog = _catalog(text)

    assert len(catalog) == 1
    assert catalog["same"].path == "/b"
    assert catalog["same"].summary == "second"


def test_duplicate_parameter_names_keep_first_declaration():
    text = json.dumps({
        "openapi": "3.0.0",
        "info": {"title": "t", "version": "1"},
        "paths": {"/a/{id}": {"get": {"operationId": "dup", "parameters": [
            {"name": "id", "in": "path", "required": True},
            {"name": "id", "in": "query"},
        ]}}},
    })
    tool = _catalog(text)["dup"]

    assert [(p.name, p.location) for p in tool.parameters] == [("id", "path")]


def test_catalog_and_definitions_are_immutable():
    catalog = _catalog(PETSTORE_SWAGGER2)

    with pytest.raises(TypeError):
        catalog["new"] = catalog["listPets"]
    with pytest.raises(ValidationError):
        catalog["listPets"].summary = "changed"


def test_tool_definition_rejects_two_body_parameters():
    body = ParameterDescriptor(name="body", location="body", required=True, type="object")
    with pytest.raises(ValidationError):
        ToolDefinition(id="x", summary="x", path="/x", http_method="POST", parameters=(body, body))


def test_discover_end_to_end():
    with serve({PETSTORE_URL: PETSTORE_SWAGGER2, ITEMS_URL: ITEMS_OPENAPI30, ORDERS_URL: ORDERS_OPENAPI31}) as client:
        petstore = discover(PETSTORE_URL, client=client)
        items = discover(ITEMS_URL, client=client)

    assert petstore.source == PETSTORE_URL
    assert len(petstore) == 6
    assert items["listItems"].parameters[0].location == "query"
    assert items.server_url == "https://items.example.com/api"


def test_discover_propagates_errors():
    with serve({PETSTORE_URL: "{ not: [ valid"}) as client:
        with pytest.raises(DescriptionParseError):
            discover(PETSTORE_URL, client=client)
        with pytest.raises(DescriptionFetchError):
            discover("https://nowhere.example.com/swagger.json", client=client)
