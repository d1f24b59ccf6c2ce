# Discovers the tools of the configured API and dispatches invocations to them.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 2.0.0

import threading
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

import httpx

from swagger_mcp.core.config import Settings, get_settings
from swagger_mcp.core.exceptions import InvocationError, UnknownToolError
from swagger_mcp.models.tool import Catalog, ToolDefinition, ToolError, ToolResult
from swagger_mcp.services import catalog_builder
from swagger_mcp.services.endpoint_invoker import EndpointInvoker, resolve_base_url
from swagger_mcp.tools.base_tool import DefinitionFormat
from swagger_mcp.tools.openapi_tool import OpenApiTool
from swagger_mcp.utils.logger import console


class _Snapshot(NamedTuple):
    catalog: Catalog
    tools: Mapping[str, OpenApiTool]


class ToolRegistry:
    """
    Owns the current tool catalog and invokes tools by id.

    Each discovery pass builds a complete new catalog and publishes it with a
    single reference swap, so readers never see a partially built one.
    """
    def __init__(self, settings: Optional[Settings] = None, invoker: Optional[EndpointInvoker] = None,
                 client: Optional[httpx.Client] = None):
        self._settings = settings or get_settings()
        self._invoker = invoker or EndpointInvoker(self._settings)
        self._client = client
        self._refresh_lock = threading.Lock()
        self._state = _Snapshot(Catalog(), MappingProxyType({}))

    @property
    def catalog(self) -> Catalog:
        return self._state.catalog

    @property
    def tools(self) -> Mapping[str, OpenApiTool]:
        return self._state.tools

    def discover(self, locator: Optional[str] = None) -> Catalog:
        """
        Runs a discovery pass and publishes the resulting catalog.
        On failure the previously published catalog stays in place.

        Raises:
            DiscoveryError: If the description cannot be fetched or parsed.
        """
        locator = locator or self._settings.SWAGGER_API_URL
        with self._refresh_lock:
            catalog = catalog_builder.discover(locator, client=self._client,
                                               timeout=max(self._settings.REQUEST_TIMEOUT, 10.0))
            base_url = resolve_base_url(self._settings, server_url=catalog.server_url)
            tools = {tool.id: OpenApiTool(tool, self._invoker, base_url) for tool in catalog.tools()}
            self._state = _Snapshot(catalog, MappingProxyType(tools))
        console.success(f"Tool discovery complete. Found {len(catalog)} tools: {list(catalog)}")
        return catalog

    def refresh(self) -> Catalog:
        return self.discover(self._settings.SWAGGER_API_URL)

    def get(self, tool_id: str) -> ToolDefinition:
        try:
            return self._state.catalog[tool_id]
        except KeyError:
            raise UnknownToolError(tool_id) from None

    def get_definitions(self, format: DefinitionFormat = "openai") -> List[Dict[str, Any]]:
        """Returns the descriptors of all tools, in function-calling or MCP listing shape."""
        return [tool.get_definition(format) for tool in self._state.tools.values()]

    async def invoke(self, tool_id: str, arguments: Optional[Mapping[str, Any]] = None,
                     base_url: Optional[str] = None) -> ToolResult:
        """
        Invokes a tool by id. Failures are returned as error results, never raised.
        """
        state = self._state
        arguments = dict(arguments or {})
        try:
            tool = state.tools.get(tool_id)
            if tool is None:
                raise UnknownToolError(tool_id)
            if base_url is not None:
                # The invoker rejects an override that is not an absolute URL
                content = await self._invoker.invoke(tool.definition, arguments, base_url=base_url)
            else:
                content = await tool.execute(**arguments)
            return ToolResult(tool_id=tool_id, content=content)

        except InvocationError as e:
            console.error(f"Error invoking tool {tool_id}: code={e.code}, method={e.method}, "
                          f"path={e.path}, parameter={e.parameter}, error={e.message}")
            return ToolResult(
                tool_id=tool_id,
                is_error=True,
                content=f"Tool invocation failed for '{tool_id}'. Reason: {e.message}",
                error=ToolError(
                    code=e.code,
                    message=e.message,
                    tool_id=e.tool_id or tool_id,
                    method=e.method,
                    path=e.path,
                    parameter=e.parameter,
                    status_code=getattr(e, "upstream_status", None),
                ),
            )
        except Exception as e:
            console.exception(f"Unexpected error while invoking tool '{tool_id}'.")
            return ToolResult(
                tool_id=tool_id,
                is_error=True,
                content=f"Tool invocation failed for '{tool_id}'. Reason: {e.__class__.__name__}",
                error=ToolError(code="internal_error", message=e.__class__.__name__, tool_id=tool_id),
            )

    async def aclose(self):
        await self._invoker.aclose()


# Create a singleton instance for global use throughout the application.
tool_registry = ToolRegistry()
