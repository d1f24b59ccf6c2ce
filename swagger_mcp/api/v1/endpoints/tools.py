# The module is to define the API endpoints for listing, describing and invoking tools.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from swagger_mcp.core.exceptions import DiscoveryError, UnknownToolError
from swagger_mcp.core.tool_registry import ToolRegistry, tool_registry
from swagger_mcp.models.api_models import InvokeRequest, RefreshResponse, ToolInfo
from swagger_mcp.models.tool import ToolDefinition, ToolResult
from swagger_mcp.services.schema_synthesizer import schema_for
from swagger_mcp.tools.base_tool import DefinitionFormat
from swagger_mcp.utils.logger import console

router = APIRouter()

# HTTP status of an invocation failure, by error code.
_FAILURE_STATUS = {
    "unknown_tool": 404,
    "unresolved_path_parameter": 400,
    "invalid_argument": 400,
    "unsupported_method": 400,
    "upstream_http_error": 502,
    "transport_error": 502,
    "timeout": 504,
}


def get_tool_registry() -> ToolRegistry:
    return tool_registry


def _lookup(registry: ToolRegistry, tool_id: str) -> ToolDefinition:
    try:
        return registry.get(tool_id)
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("", response_model=List[ToolInfo], summary="List Tools")
def list_tools(registry: ToolRegistry = Depends(get_tool_registry)):
    """Returns every discovered tool with its input schema."""
    return [ToolInfo(definition=tool, input_schema=schema_for(tool)) for tool in registry.catalog.values()]


@router.get("/definitions", summary="Tool Definitions")
def list_definitions(format: DefinitionFormat = "openai",
                     registry: ToolRegistry = Depends(get_tool_registry)) -> List[Dict[str, Any]]:
    """Returns the tools in OpenAI function-calling format, or as an MCP tools listing with format=mcp."""
    return registry.get_definitions(format)


@router.post("/refresh", response_model=RefreshResponse, summary="Refresh Tools")
def refresh_tools(registry: ToolRegistry = Depends(get_tool_registry)):
    """
    Re-runs discovery against the configured description.
    The current tools stay available if discovery fails.
    """
    try:
        catalog = registry.refresh()
    except DiscoveryError as e:
        console.error(f"Tool refresh failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return RefreshResponse(source=catalog.source, version=catalog.version,
                           tool_count=len(catalog), tools=list(catalog))


@router.get("/{tool_id}", response_model=ToolInfo, summary="Get Tool")
def get_tool(tool_id: str, registry: ToolRegistry = Depends(get_tool_registry)):
    tool = _lookup(registry, tool_id)
    return ToolInfo(definition=tool, input_schema=schema_for(tool))


@router.get("/{tool_id}/schema", summary="Get Tool Input Schema")
def get_tool_schema(tool_id: str, registry: ToolRegistry = Depends(get_tool_registry)) -> Dict[str, Any]:
    return schema_for(_lookup(registry, tool_id))


@router.post("/{tool_id}/invoke", response_model=ToolResult, summary="Invoke Tool")
async def invoke_tool(tool_id: str, request: InvokeRequest, registry: ToolRegistry = Depends(get_tool_registry)):
    """
    Performs the HTTP call behind a tool and returns the upstream response body.
    """
    console.info(f"Received invocation request for tool: {tool_id}")
    result = await registry.invoke(tool_id, request.arguments, base_url=request.base_url)
    status_code = _FAILURE_STATUS.get(result.error.code, 500) if result.error else 200
    return JSONResponse(status_code=status_code, content=result.model_dump())
