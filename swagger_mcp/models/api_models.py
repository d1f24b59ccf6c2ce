# The module is to define the API models for the application.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.2.0

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from swagger_mcp.models.tool import ToolDefinition


class ToolInfo(BaseModel):
    """
    Defines one entry of the /v1/tools listing.
    Attributes:
        definition (ToolDefinition): The discovered tool.
        input_schema (dict): The JSON schema of the tool's arguments.
    """
    definition: ToolDefinition
    input_schema: Dict[str, Any]


class InvokeRequest(BaseModel):
    """
    Defines the request body for the /v1/tools/{tool_id}/invoke endpoint.
    Attributes:
        arguments (dict): The tool arguments, keyed by parameter name.
        base_url (Optional[str]): Overrides the API root for this call only.
    """
    arguments: Dict[str, Any] = Field(default_factory=dict, description="The tool arguments, keyed by parameter name.")
    base_url: Optional[str] = Field(default=None, description="Overrides the API root for this call only.")


class RefreshResponse(BaseModel):
    """Defines the response body for the /v1/tools/refresh endpoint."""
    source: Optional[str]
    version: Optional[str]
    tool_count: int
    tools: List[str]
