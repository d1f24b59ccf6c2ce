# The module is to derive the JSON input schema of a tool from its parameters.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

import json
from typing import Any, Dict, List

from swagger_mcp.models.tool import ToolDefinition

BODY_DESCRIPTION = "JSON payload body (see API spec for fields)"


def schema_for(tool: ToolDefinition) -> Dict[str, Any]:
    """
    Builds the input schema of a tool: one property per non-body parameter,
    plus an object-typed 'body' property when the tool takes a request body.
    Only declared properties are accepted.
    """
    properties: Dict[str, Any] = {}
    required: List[str] = []

    for param in tool.parameters:
        if param.location == "body":
            continue
        prop: Dict[str, Any] = {"type": param.type}
        if param.type == "array":
            prop["items"] = {}
        if param.description:
            prop["description"] = param.description
        properties[param.name] = prop
        if param.required:
            required.append(param.name)

    if tool.has_request_body():
        properties["body"] = {"type": "object", "description": BODY_DESCRIPTION}
        required.append("body")

    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    schema["additionalProperties"] = False
    return schema


def schema_json(tool: ToolDefinition) -> str:
    return json.dumps(schema_for(tool), ensure_ascii=False)
