# The module is to define the tool that wraps one operation of a described REST API.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

from typing import Any, Dict, Optional

from swagger_mcp.models.tool import ToolDefinition
from swagger_mcp.services.endpoint_invoker import EndpointInvoker
from swagger_mcp.services.schema_synthesizer import schema_for
from .base_tool import BaseTool


class OpenApiTool(BaseTool):
    """
    A tool backed by one HTTP operation discovered from a Swagger/OpenAPI description.
    Executing it performs the request and returns the response body.
    """

    def __init__(self, definition: ToolDefinition, invoker: EndpointInvoker, base_url: Optional[str] = None):
        self.definition = definition
        self.name = definition.id
        self.description = definition.summary or f"{definition.http_method} {definition.path}"
        self.input_schema: Dict[str, Any] = schema_for(definition)
        self._invoker = invoker
        self._base_url = base_url

    async def execute(self, /, **kwargs) -> str:
        return await self._invoker.invoke(self.definition, kwargs, base_url=self._base_url)
