# The module is to define the error taxonomy for discovery and invocation.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

from typing import Optional


class SwaggerMcpError(Exception):
    """Base class for every error raised by the server."""


# --- Discovery errors: fatal to a discovery pass ---

class DiscoveryError(SwaggerMcpError):
    """Raised when a discovery pass cannot produce a catalog."""


class DescriptionFetchError(DiscoveryError):
    """The description document is unreachable or is not text."""

    def __init__(self, locator: str, reason: str):
        self.locator = locator
        self.reason = reason
        super().__init__(f"Could not fetch API description from '{locator}': {reason}")


class DescriptionParseError(DiscoveryError):
    """No parser backend accepted the description document."""


# --- Invocation errors: recovered at the invocation boundary ---

class InvocationError(SwaggerMcpError):
    """
    Base class for failures of a single tool invocation.
    Attributes:
        code (str): A stable machine-readable error code.
        tool_id (Optional[str]): The tool being invoked.
        method (Optional[str]): The HTTP method of the tool.
        path (Optional[str]): The path template of the tool.
    """
    code: str = "invocation_error"

    def __init__(self, message: str, tool_id: Optional[str] = None,
                 method: Optional[str] = None, path: Optional[str] = None):
        self.message = message
        self.tool_id = tool_id
        self.method = method
        self.path = path
        super().__init__(message)

    @property
    def parameter(self) -> Optional[str]:
        return None


class UnknownToolError(InvocationError):
    code = "unknown_tool"

    def __init__(self, tool_id: str):
        super().__init__(f"No tool with id: {tool_id}", tool_id=tool_id)


class UnresolvedPathParameterError(InvocationError):
    code = "unresolved_path_parameter"

    def __init__(self, parameter: str, tool_id: Optional[str] = None,
                 method: Optional[str] = None, path: Optional[str] = None):
        self._parameter = parameter
        super().__init__(
            f"Missing value for path parameter '{parameter}' in '{path}'.",
            tool_id=tool_id, method=method, path=path,
        )

    @property
    def parameter(self) -> Optional[str]:
        return self._parameter


class ArgumentTypeError(InvocationError):
    code = "invalid_argument"

    def __init__(self, parameter: str, type_name: str, tool_id: Optional[str] = None,
                 method: Optional[str] = None, path: Optional[str] = None):
        self._parameter = parameter
        super().__init__(
            f"Argument '{parameter}' has unsupported type '{type_name}'.",
            tool_id=tool_id, method=method, path=path,
        )

    @property
    def parameter(self) -> Optional[str]:
        return self._parameter


class InvalidBaseUrlError(InvocationError):
    """A per-call API root that is not an absolute http(s) URL."""
    code = "invalid_argument"

    def __init__(self, base_url: str, tool_id: Optional[str] = None,
                 method: Optional[str] = None, path: Optional[str] = None):
        self.base_url = base_url
        super().__init__(
            f"Base URL '{base_url}' must be an absolute http(s) URL.",
            tool_id=tool_id, method=method, path=path,
        )

    @property
    def parameter(self) -> Optional[str]:
        return "base_url"


class UnsupportedMethodError(InvocationError):
    code = "unsupported_method"

    def __init__(self, method: str, tool_id: Optional[str] = None, path: Optional[str] = None):
        super().__init__(f"Unsupported HTTP method: {method}",
                         tool_id=tool_id, method=method, path=path)


class UpstreamHttpError(InvocationError):
    """The upstream API answered with a 4xx or 5xx status."""
    code = "upstream_http_error"

    def __init__(self, upstream_status: int, body: str, tool_id: Optional[str] = None,
                 method: Optional[str] = None, path: Optional[str] = None):
        self.upstream_status = upstream_status
        self.body = body
        super().__init__(
            f"API call failed with status {upstream_status} and body: {body}",
            tool_id=tool_id, method=method, path=path,
        )


class TransportError(InvocationError):
    """Timeout, connection failure or malformed response."""
    code = "transport_error"

    def __init__(self, message: str, timeout: bool = False, tool_id: Optional[str] = None,
                 method: Optional[str] = None, path: Optional[str] = None):
        self.timeout = timeout
        if timeout:
            self.code = "timeout"
        super().__init__(message, tool_id=tool_id, method=method, path=path)
