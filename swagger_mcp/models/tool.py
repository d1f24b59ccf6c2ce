# The module is to define the normalized tool model built from an API description.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

ParameterLocation = Literal["path", "query", "header", "body"]
ParameterType = Literal["string", "integer", "number", "boolean", "object", "array"]

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")


class ParameterDescriptor(BaseModel):
    """
    Describes one argument of a tool and where it goes in the outgoing request.
    Attributes:
        name (str): The argument name.
        location (ParameterLocation): path, query, header or body.
        required (bool): Whether the argument must be supplied.
        type (ParameterType): The coarse JSON type of the argument.
        description (Optional[str]): Free text from the description document.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="The argument name.")
    location: ParameterLocation = Field(..., description="Where the argument is placed in the request.")
    required: bool = Field(default=False, description="Whether the argument must be supplied.")
    type: ParameterType = Field(default="string", description="The coarse JSON type of the argument.")
    description: Optional[str] = Field(default=None, description="Free text from the description document.")


class ToolDefinition(BaseModel):
    """
    One API operation exposed as a tool.
    Attributes:
        id (str): Unique tool id (operationId or synthesized from method and path).
        summary (str): Human-readable description of the tool.
        path (str): URL path template with {name} placeholders.
        http_method (str): Upper-case HTTP verb.
        parameters (Tuple[ParameterDescriptor, ...]): Parameters in discovery order.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    summary: str
    path: str
    http_method: str
    parameters: Tuple[ParameterDescriptor, ...] = ()

    @model_validator(mode="after")
    def _single_body(self) -> "ToolDefinition":
        if sum(1 for p in self.parameters if p.location == "body") > 1:
            raise ValueError(f"Tool '{self.id}' declares more than one body parameter.")
        return self

    def has_request_body(self) -> bool:
        return sum(1 for p in self.parameters if p.location == "body") == 1

    def parameters_in(self, location: ParameterLocation) -> Tuple[ParameterDescriptor, ...]:
        return tuple(p for p in self.parameters if p.location == location)

    def path_parameters(self) -> Tuple[ParameterDescriptor, ...]:
        return self.parameters_in("path")

    def query_parameters(self) -> Tuple[ParameterDescriptor, ...]:
        return self.parameters_in("query")

    def header_parameters(self) -> Tuple[ParameterDescriptor, ...]:
        return self.parameters_in("header")

    def body_parameter(self) -> Optional[ParameterDescriptor]:
        body = self.parameters_in("body")
        return body[0] if body else None


class Catalog(Mapping):
    """
    The immutable mapping of tool id to ToolDefinition produced by one discovery pass.

    Iteration follows document order. When two operations resolve to the same id,
    the later one replaces the earlier one.
    """

    def __init__(self, tools: Iterable[ToolDefinition] = (), source: Optional[str] = None,
                 version: Optional[str] = None, server_url: Optional[str] = None,
                 title: Optional[str] = None):
        entries: Dict[str, ToolDefinition] = {}
        for tool in tools:
            entries[tool.id] = tool
        self._tools = MappingProxyType(entries)
        self.source = source
        self.version = version
        self.server_url = server_url
        self.title = title

    def __getitem__(self, tool_id: str) -> ToolDefinition:
        return self._tools[tool_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"Catalog(source={self.source!r}, version={self.version!r}, tools={len(self)})"

    def tools(self) -> Tuple[ToolDefinition, ...]:
        return tuple(self._tools.values())


class ToolError(BaseModel):
    """Structured description of a failed invocation."""
    code: str
    message: str
    tool_id: Optional[str] = None
    method: Optional[str] = None
    path: Optional[str] = None
    parameter: Optional[str] = None
    status_code: Optional[int] = Field(default=None, description="Upstream HTTP status, when one was received.")


class ToolResult(BaseModel):
    """
    The outcome of one tool invocation.
    Attributes:
        tool_id (str): The invoked tool.
        is_error (bool): Whether the invocation failed.
        content (Optional[str]): The response body, or the failure message.
        error (Optional[ToolError]): Failure details when is_error is True.
    """
    tool_id: str
    is_error: bool = False
    content: Optional[str] = None
    error: Optional[ToolError] = None
