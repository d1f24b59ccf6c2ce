"""
Shared description documents and HTTP fakes for the test suite.

All network traffic is served by httpx.MockTransport, so no test touches a real server.
"""
import json
from typing import Callable, Dict, Optional

import httpx
import pytest

from swagger_mcp.core.config import Settings
from swagger_mcp.core.tool_registry import ToolRegistry
from swagger_mcp.services.endpoint_invoker import EndpointInvoker


PETSTORE_URL = "https://petstore.example.com/v2/swagger.json"
ITEMS_URL = "https://items.example.com/docs/openapi.yaml"
ORDERS_URL = "https://orders.example.com/openapi.json"
WIDGETS_URL = "https://docs.example.com/openapi.json"


PETSTORE_SWAGGER2 = json.dumps({
    "swagger": "2.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "host": "petstore.example.com",
    "basePath": "/v2",
    "schemes": ["https", "http"],
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "summary": "List all pets",
                "parameters": [
                    {"name": "limit", "in": "query", "type": "integer", "description": "How many items to return"},
                    {"name": "tags", "in": "query", "type": "array", "items": {"type": "string"}},
                ],
            },
            "post": {
                "operationId": "addPet",
                "description": "Add a new pet to the store",
                "parameters": [
                    {"name": "pet", "in": "body", "required": True, "schema": {"$ref": "#/definitions/Pet"}},
                ],
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True, "type": "integer"},
            ],
            "get": {
                "summary": "Find pet by ID",
            },
            "delete": {
                "operationId": "deletePet",
                "parameters": [
                    {"name": "api_key", "in": "header", "type": "string"},
                ],
            },
            "patch": {
                "operationId": "updatePetPartially",
                "parameters": [
                    {"name": "name", "in": "formData", "type": "string"},
                ],
            },
        },
        "/store/inventory": {
            "get": {},
        },
    },
    "definitions": {
        "Pet": {"type": "object", "properties": {"name": {"type": "string"}}},
    },
})


ITEMS_OPENAPI30 = """
openapi: 3.0.3
info:
  title: Items
  version: "1.0"
servers:
  - url: /api
paths:
  /items:
    get:
      operationId: listItems
      parameters:
        - name: tag
          in: query
          schema:
            type: string
  /items/{itemId}:
    put:
      operationId: replaceItem
      summary: Replace an item
      parameters:
        - $ref: '#/components/parameters/ItemId'
        - name: X-Request-Id
          in: header
          schema:
            $ref: '#/components/schemas/RequestId'
      requestBody:
        content:
          application/json:
            schema:
              type: object
components:
  parameters:
    ItemId:
      name: itemId
      in: path
      required: true
      description: Identifier of the item
      schema:
        type: integer
  schemas:
    RequestId:
      type: string
"""


ORDERS_OPENAPI31 = json.dumps({
    "openapi": "3.1.0",
    "info": {"title": "Orders", "version": "2.0"},
    "servers": [
        {"url": "https://{region}.orders.example.com/v1", "variables": {"region": {"default": "eu"}}},
    ],
    "paths": {
        "/users/{id}/orders/{orderId}": {
            "get": {
                "description": "Fetch one order of a user",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": ["integer", "null"]}},
                    {"name": "orderId", "in": "path", "required": True, "schema": {"type": "integer"}},
                    {"name": "session", "in": "cookie", "schema": {"type": "string"}},
                    {"name": "expand", "in": "query", "schema": {"items": {"type": "string"}}},
                ],
            },
        },
    },
})


WIDGETS_OPENAPI30 = json.dumps({
    "openapi": "3.0.1",
    "info": {"title": "Widgets", "version": "1.0"},
    "servers": [{"url": "https://api.example.com/v1"}],
    "paths": {
        "/widgets": {
            "get": {
                "operationId": "listWidgets",
                "parameters": [{"name": "self", "in": "query", "schema": {"type": "string"}}],
            },
        },
    },
})


def make_settings(**overrides) -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None, **overrides)


def serve(documents: Dict[str, str], content_type: str = "application/json") -> httpx.Client:
    """A synchronous client that answers GET requests for the given URLs."""
    def handler(request: httpx.Request) -> httpx.Response:
        text = documents.get(str(request.url))
        if text is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=text, headers={"content-type": content_type})

    return httpx.Client(transport=httpx.MockTransport(handler))


def async_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def settings() -> Settings:
    return make_settings(SWAGGER_API_URL=PETSTORE_URL)


@pytest.fixture
def description_client() -> httpx.Client:
    client = serve({
        PETSTORE_URL: PETSTORE_SWAGGER2,
        ITEMS_URL: ITEMS_OPENAPI30,
        ORDERS_URL: ORDERS_OPENAPI31,
    })
    yield client
    client.close()


class RecordingHandler:
    """Mock transport handler that records requests and replies with a fixed response."""

    def __init__(self, status_code: int = 200, text: str = "ok", exception: Optional[Exception] = None):
        self.status_code = status_code
        self.text = text
        self.exception = exception
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exception is not None:
            raise self.exception
        return httpx.Response(self.status_code, text=self.text)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_registry(handler, **overrides) -> ToolRegistry:
    """A ToolRegistry that discovers from the mock description server and invokes through `handler`."""
    overrides.setdefault("SWAGGER_API_URL", PETSTORE_URL)
    config = make_settings(**overrides)
    return ToolRegistry(
        config,
        invoker=EndpointInvoker(config, client=async_client(handler)),
        client=serve({PETSTORE_URL: PETSTORE_SWAGGER2, ITEMS_URL: ITEMS_OPENAPI30, WIDGETS_URL: WIDGETS_OPENAPI30}),
    )
