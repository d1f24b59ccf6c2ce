# The module is to turn a parsed API description into the catalog of tools.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

import re
from typing import List, Optional

import httpx

from swagger_mcp.models.tool import Catalog, ParameterDescriptor, ToolDefinition
from swagger_mcp.services.description_parser import ParsedDocument, ParsedOperation, load_description
from swagger_mcp.utils.logger import console

SUPPORTED_LOCATIONS = ("path", "query", "header")

_PLACEHOLDER = re.compile(r"\{(\w+)\}")
_NON_WORD = re.compile(r"\W")


def synthesize_tool_id(method: str, path: str) -> str:
    """
    Builds a stable tool id from an HTTP method and a path template,
    e.g. GET /pets/{petId} -> get_pets_by_petId.
    """
    normalized = _NON_WORD.sub("_", _PLACEHOLDER.sub(r"by_\1", path))
    return method.lower() + normalized


def coarse_type(source_type: Optional[str]) -> str:
    """Maps a declared schema type onto the coarse JSON types tools use."""
    if source_type is None:
        return "string"
    source_type = source_type.lower()
    if source_type in ("integer", "int", "long"):
        return "integer"
    if source_type in ("number", "float", "double"):
        return "number"
    if source_type in ("boolean", "object", "array"):
        return source_type
    return "string"


def build_tool(operation: ParsedOperation) -> ToolDefinition:
    tool_id = operation.operation_id or synthesize_tool_id(operation.method, operation.path)

    parameters: List[ParameterDescriptor] = []
    seen = set()
    for param in operation.parameters:
        if param.location not in SUPPORTED_LOCATIONS:
            console.warning(f"Tool '{tool_id}': skipping parameter '{param.name}' "
                            f"with unsupported location '{param.location}'.")
            continue
        if param.name in seen:
            console.warning(f"Tool '{tool_id}': duplicate parameter name '{param.name}' "
                            f"in '{param.location}', keeping the first declaration.")
            continue
        seen.add(param.name)
        parameters.append(ParameterDescriptor(
            name=param.name,
            location=param.location,
            required=param.required,
            type=coarse_type(param.type),
            description=param.description,
        ))

    # If there is a request body, add a tool parameter for it (as "body")
    if operation.has_request_body:
        if "body" in seen:
            console.warning(f"Tool '{tool_id}': parameter 'body' is shadowed by the request body.")
            parameters = [p for p in parameters if p.name != "body"]
        parameters.append(ParameterDescriptor(
            name="body", location="body", required=True, type="object", description="Request body",
        ))

    return ToolDefinition(
        id=tool_id,
        summary=operation.summary or operation.description or tool_id,
        path=operation.path,
        http_method=operation.method.upper(),
        parameters=tuple(parameters),
    )


def build_catalog(document: ParsedDocument, source: Optional[str] = None) -> Catalog:
    """
    Builds one ToolDefinition per operation, in document order.
    A document without paths yields an empty catalog.
    """
    if not document.operations:
        console.warning(f"Swagger/OpenAPI description '{source}' has no operations.")

    tools: List[ToolDefinition] = []
    ids = set()
    for operation in document.operations:
        tool = build_tool(operation)
        if tool.id in ids:
            console.warning(f"Duplicate tool id '{tool.id}' ({tool.http_method} {tool.path}) replaces an earlier definition.")
        ids.add(tool.id)
        tools.append(tool)
        console.debug(f"Discovered tool: id={tool.id}, method={tool.http_method}, path={tool.path}")

    catalog = Catalog(tools, source=source, version=document.version,
                      server_url=document.server_url, title=document.title)
    console.info(f"Total {len(catalog)} tools loaded from Swagger/OpenAPI '{source}'.")
    return catalog


def discover(locator: str, client: Optional[httpx.Client] = None, timeout: float = 10.0) -> Catalog:
    """
    Runs one discovery pass: fetch, parse and build the catalog.

    Raises:
        DescriptionFetchError: If the description cannot be fetched.
        DescriptionParseError: If the description cannot be parsed.
    """
    document, _ = load_description(locator, client=client, timeout=timeout)
    return build_catalog(document, source=locator)
