# The module is to execute one tool against the live API described by the catalog.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

import json
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

import httpx

from swagger_mcp.core.config import DEFAULT_API_BASE_URL, Settings, get_settings
from swagger_mcp.core.exceptions import (
    ArgumentTypeError,
    InvalidBaseUrlError,
    TransportError,
    UnresolvedPathParameterError,
    UnsupportedMethodError,
    UpstreamHttpError,
)
from swagger_mcp.models.arguments import to_header_value, to_path_segment, to_query_values
from swagger_mcp.models.tool import SUPPORTED_METHODS, ToolDefinition
from swagger_mcp.utils.logger import console

DELETE_MARKER = "Deleted"

# Conventional file names of a description document; a base URL ending in one targets the document, not the API.
DESCRIPTION_SUFFIXES = ("/swagger.json", "/swagger.yaml")

_PLACEHOLDER = re.compile(r"\{([^{}/]+)\}")


def strip_description_suffix(url: str) -> str:
    """Drops a trailing /swagger.json or /swagger.yaml segment from a URL."""
    parts = urlsplit(url)
    for suffix in DESCRIPTION_SUFFIXES:
        if parts.path.endswith(suffix):
            return urlunsplit((parts.scheme, parts.netloc, parts.path[: -len(suffix)], "", ""))
    return url


def is_absolute_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def resolve_base_url(settings: Settings, override: Optional[str] = None,
                     server_url: Optional[str] = None) -> str:
    """
    Picks the API root for an invocation: the per-call override, then the
    configured API_BASE_URL, then the servers declared by the description,
    then the description URL itself.
    """
    for candidate in (override, settings.API_BASE_URL, server_url, settings.SWAGGER_API_URL):
        if candidate and is_absolute_url(candidate):
            return strip_description_suffix(candidate)
    return DEFAULT_API_BASE_URL


class EndpointInvoker:
    """
    Executes ToolDefinitions over a shared httpx.AsyncClient.

    The invoker holds no per-call state; one instance serves concurrent invocations.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.REQUEST_TIMEOUT),
            follow_redirects=True,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    def build_request(self, tool: ToolDefinition, arguments: Optional[Mapping[str, Any]] = None,
                      base_url: Optional[str] = None) -> httpx.Request:
        """
        Builds the outgoing request for a tool without sending it.

        Raises:
            UnsupportedMethodError: If the tool's verb is not GET, POST, PUT or DELETE.
            InvalidBaseUrlError: If base_url is not an absolute http(s) URL.
            UnresolvedPathParameterError: If a path placeholder has no argument.
            ArgumentTypeError: If an argument value cannot be serialized.
        """
        arguments = dict(arguments or {})
        method = tool.http_method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(method, tool_id=tool.id, path=tool.path)

        if base_url is not None and not is_absolute_url(base_url):
            raise InvalidBaseUrlError(base_url, tool_id=tool.id, method=method, path=tool.path)
        base = strip_description_suffix(base_url) if base_url else resolve_base_url(self._settings)
        url = base.rstrip("/") + self._resolve_path(tool, arguments)

        content = None
        headers = self._headers(tool, arguments)
        if method in ("POST", "PUT") and tool.has_request_body() and "body" in arguments:
            content = json.dumps(arguments["body"], ensure_ascii=False).encode("utf-8")
            headers["Content-Type"] = "application/json"

        return self._client.build_request(
            method, url, params=self._query(tool, arguments), headers=headers, content=content,
        )

    async def invoke(self, tool: ToolDefinition, arguments: Optional[Mapping[str, Any]] = None,
                     base_url: Optional[str] = None) -> str:
        """
        Sends exactly one request for the tool and returns the response body,
        or the 'Deleted' marker for DELETE operations.

        Raises:
            InvocationError: One of its subclasses on any failure.
        """
        request = self.build_request(tool, arguments, base_url)
        method = request.method
        console.info(f"Invoking endpoint for tool id={tool.id}, path='{tool.path}', method={method}, "
                     f"arguments={sorted(arguments or {})}")

        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request to {tool.path} timed out after {self._settings.REQUEST_TIMEOUT}s.",
                timeout=True, tool_id=tool.id, method=method, path=tool.path,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                self._redact(f"Request to {tool.path} failed: {e.__class__.__name__}: {e}"),
                tool_id=tool.id, method=method, path=tool.path,
            ) from e

        if response.is_client_error or response.is_server_error:
            console.error(f"Error response from endpoint: tool id={tool.id}, status={response.status_code}")
            raise UpstreamHttpError(response.status_code, self._redact(response.text),
                                    tool_id=tool.id, method=method, path=tool.path)

        console.success(f"{method} to {tool.path} successful")
        if method == "DELETE":
            return DELETE_MARKER
        return response.text

    def _resolve_path(self, tool: ToolDefinition, arguments: Dict[str, Any]) -> str:
        path = tool.path
        for param in tool.path_parameters():
            if param.name not in arguments:
                continue
            try:
                segment = to_path_segment(arguments[param.name])
            except TypeError as e:
                raise ArgumentTypeError(param.name, str(e), tool_id=tool.id,
                                        method=tool.http_method, path=tool.path) from e
            if segment is not None:
                path = path.replace("{" + param.name + "}", segment)

        unresolved = _PLACEHOLDER.search(path)
        if unresolved:
            raise UnresolvedPathParameterError(unresolved.group(1), tool_id=tool.id,
                                               method=tool.http_method, path=tool.path)
        return path

    def _query(self, tool: ToolDefinition, arguments: Dict[str, Any]) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        for param in tool.query_parameters():
            if param.name not in arguments:
                continue
            try:
                values = to_query_values(arguments[param.name])
            except TypeError as e:
                raise ArgumentTypeError(param.name, str(e), tool_id=tool.id,
                                        method=tool.http_method, path=tool.path) from e
            params.extend((param.name, value) for value in values)
        return params

    def _headers(self, tool: ToolDefinition, arguments: Dict[str, Any]) -> httpx.Headers:
        headers = httpx.Headers()
        for param in tool.header_parameters():
            if param.name not in arguments:
                continue
            try:
                value = to_header_value(arguments[param.name])
            except TypeError as e:
                raise ArgumentTypeError(param.name, str(e), tool_id=tool.id,
                                        method=tool.http_method, path=tool.path) from e
            if value is not None:
                headers[param.name] = value

        auth = self._settings.auth_header()
        if auth:
            headers[auth[0]] = auth[1]
        # Add all custom headers from config; later names replace earlier ones
        for name, value in self._settings.REST_HEADERS.items():
            headers[name] = value
        return headers

    def _redact(self, text: str) -> str:
        token = self._settings.AUTH_TOKEN_VALUE
        secret = token.get_secret_value() if token else None
        if secret and secret in text:
            return text.replace(secret, "***")
        return text
