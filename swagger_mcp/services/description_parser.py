# The module is to fetch Swagger/OpenAPI descriptions and parse them into a version-neutral document.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Tuple
from urllib.parse import urljoin, urlsplit

import httpx
import yaml
from pydantic import BaseModel, Field

from swagger_mcp.core.exceptions import DescriptionFetchError, DescriptionParseError
from swagger_mcp.utils.logger import console

# Operation keys of a Path Item object, in the order the formats list them.
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Substrings of a Content-Type header that mark a textual description document.
TEXT_CONTENT_MARKERS = ("text/", "json", "yaml", "javascript")

_OPENAPI_31 = re.compile(r"3\.1(\.\d+)?([-+].*)?")
_OPENAPI_30 = re.compile(r"3\.0(\.\d+)?([-+].*)?")


class ParsedParameter(BaseModel):
    name: str
    location: str = Field(..., description="The raw 'in' value from the document.")
    required: bool = False
    type: Optional[str] = Field(default=None, description="The raw schema type, if one was declared.")
    description: Optional[str] = None


class ParsedOperation(BaseModel):
    path: str
    method: str
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: List[ParsedParameter] = Field(default_factory=list)
    has_request_body: bool = False


class ParsedDocument(BaseModel):
    """
    A description document reduced to what tool discovery needs.
    Attributes:
        version (str): The declared 'swagger' or 'openapi' version.
        title (Optional[str]): The API title from the info object.
        server_url (Optional[str]): The API root declared by the document.
        operations (List[ParsedOperation]): Operations in document order.
    """
    version: str
    title: Optional[str] = None
    server_url: Optional[str] = None
    operations: List[ParsedOperation] = Field(default_factory=list)


def load_document(text: str) -> Any:
    """Loads description text as JSON, falling back to YAML."""
    try:
        return json.loads(text)
    except ValueError:
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DescriptionParseError(f"Description is neither valid JSON nor valid YAML: {e}") from e


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def detect_version(text: str) -> str:
    """
    Returns the top-level 'openapi' or 'swagger' version of a description,
    or 'unknown' when the text has neither.
    """
    try:
        document = load_document(text)
    except DescriptionParseError:
        return "unknown"
    if not isinstance(document, dict):
        return "unknown"
    for field in ("openapi", "swagger"):
        if document.get(field) is not None:
            return str(document[field])
    return "unknown"


def is_openapi_31(version: str) -> bool:
    return bool(_OPENAPI_31.fullmatch(version.strip()))


class _RefResolver:
    """Follows local JSON references ('#/...') within one document."""

    def __init__(self, document: Dict[str, Any]):
        self._document = document

    def resolve(self, node: Any) -> Any:
        seen = set()
        while isinstance(node, dict) and "$ref" in node:
            ref = node["$ref"]
            if not isinstance(ref, str) or not ref.startswith("#/") or ref in seen:
                return None
            seen.add(ref)
            node = self._lookup(ref)
        return node

    def _lookup(self, ref: str) -> Any:
        target: Any = self._document
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, dict) or part not in target:
                return None
            target = target[part]
        return target


class DescriptionBackend(ABC):
    """
    A parser for one family of description-format versions.
    Subclasses validate the document root, read parameter types and locate the API root.
    """
    name: str

    def parse(self, text: str) -> ParsedDocument:
        document = load_document(text)
        if not isinstance(document, dict):
            raise DescriptionParseError("Description root must be an object.")
        version = self.validate(document)
        resolver = _RefResolver(document)
        info = document["info"]
        return ParsedDocument(
            version=version,
            title=info.get("title") if isinstance(info.get("title"), str) else None,
            server_url=self.server_url(document),
            operations=list(self._operations(document, resolver)),
        )

    @abstractmethod
    def validate(self, document: Dict[str, Any]) -> str:
        """Checks the required top-level fields and returns the declared version."""

    @abstractmethod
    def server_url(self, document: Dict[str, Any]) -> Optional[str]:
        """Returns the API root declared by the document, possibly relative."""

    def _require_info(self, document: Dict[str, Any]):
        if not isinstance(document.get("info"), dict):
            raise DescriptionParseError("Description is missing the required 'info' object.")

    def _operations(self, document: Dict[str, Any], resolver: _RefResolver) -> Iterator[ParsedOperation]:
        paths = document.get("paths") or {}
        for path, path_item in paths.items():
            path_item = resolver.resolve(path_item)
            if not isinstance(path_item, dict):
                console.warning(f"Skipping path '{path}': path item is not an object.")
                continue
            shared = path_item.get("parameters") or []
            for method, operation in path_item.items():
                if str(method).lower() not in HTTP_METHODS or not isinstance(operation, dict):
                    continue
                yield self._operation(str(path), str(method), operation, shared, resolver)

    def _operation(self, path: str, method: str, operation: Dict[str, Any],
                   shared: List[Any], resolver: _RefResolver) -> ParsedOperation:
        # Operation-level parameters override path-level ones with the same name and location.
        merged: Dict[Tuple[str, str], Dict[str, Any]] = {}
        for raw in list(shared) + list(operation.get("parameters") or []):
            param = resolver.resolve(raw)
            if not isinstance(param, dict) or "name" not in param or "in" not in param:
                console.warning(f"Skipping unresolvable parameter on {method.upper()} {path}.")
                continue
            merged[(str(param["name"]), str(param["in"]))] = param

        parameters: List[ParsedParameter] = []
        has_body = operation.get("requestBody") is not None
        for (name, location), param in merged.items():
            if location == "body":
                has_body = True
                continue
            parameters.append(ParsedParameter(
                name=name,
                location=location,
                required=bool(param.get("required", False)),
                type=self._parameter_type(param, resolver),
                description=_text(param.get("description")),
            ))

        operation_id = operation.get("operationId")
        return ParsedOperation(
            path=path,
            method=method.upper(),
            operation_id=str(operation_id) if operation_id is not None else None,
            summary=_text(operation.get("summary")),
            description=_text(operation.get("description")),
            parameters=parameters,
            has_request_body=has_body,
        )

    def _parameter_type(self, param: Dict[str, Any], resolver: _RefResolver) -> Optional[str]:
        if "schema" in param:
            return self._schema_type(resolver.resolve(param["schema"]))
        return self._schema_type(param)

    def _schema_type(self, schema: Any) -> Optional[str]:
        if not isinstance(schema, dict):
            return None
        declared = schema.get("type")
        if isinstance(declared, str):
            return declared
        if "properties" in schema:
            return "object"
        if "items" in schema:
            return "array"
        return None

    def _servers_url(self, document: Dict[str, Any]) -> Optional[str]:
        servers = document.get("servers") or []
        if not isinstance(servers, list) or not servers or not isinstance(servers[0], dict):
            return None
        url = servers[0].get("url")
        if not isinstance(url, str):
            return None
        for name, variable in (servers[0].get("variables") or {}).items():
            if isinstance(variable, dict) and "default" in variable:
                url = url.replace("{" + str(name) + "}", str(variable["default"]))
        return url


class LegacyOrV3Parser(DescriptionBackend):
    """Swagger 2.0 and OpenAPI 3.0.x."""
    name = "swagger-2/openapi-3.0"

    def validate(self, document: Dict[str, Any]) -> str:
        if document.get("swagger") is not None:
            version = str(document["swagger"])
            if not version.startswith("2."):
                raise DescriptionParseError(f"Unsupported Swagger version '{version}'.")
        elif document.get("openapi") is not None:
            version = str(document["openapi"])
            if not _OPENAPI_30.fullmatch(version):
                raise DescriptionParseError(f"Unsupported OpenAPI version '{version}' for this parser.")
        else:
            raise DescriptionParseError("Description declares neither 'swagger' nor 'openapi'.")
        self._require_info(document)
        if not isinstance(document.get("paths"), dict):
            raise DescriptionParseError("Description is missing the required 'paths' object.")
        return version

    def server_url(self, document: Dict[str, Any]) -> Optional[str]:
        if document.get("swagger") is None:
            return self._servers_url(document)
        host = document.get("host")
        base_path = document.get("basePath") or ""
        if host:
            schemes = document.get("schemes") or ["https"]
            return f"{schemes[0]}://{host}{base_path}"
        return base_path or None


class V31Parser(DescriptionBackend):
    """OpenAPI 3.1.x, where 'paths' is optional and schema types may be lists."""
    name = "openapi-3.1"

    def validate(self, document: Dict[str, Any]) -> str:
        version = str(document.get("openapi") or "")
        if not is_openapi_31(version):
            raise DescriptionParseError(f"Unsupported OpenAPI version '{version or 'missing'}' for this parser.")
        self._require_info(document)
        if not any(document.get(field) is not None for field in ("paths", "components", "webhooks")):
            raise DescriptionParseError("Description must declare at least one of 'paths', 'components' or 'webhooks'.")
        if document.get("paths") is not None and not isinstance(document["paths"], dict):
            raise DescriptionParseError("'paths' must be an object.")
        return version

    def server_url(self, document: Dict[str, Any]) -> Optional[str]:
        return self._servers_url(document)

    def _schema_type(self, schema: Any) -> Optional[str]:
        if isinstance(schema, dict) and isinstance(schema.get("type"), list):
            declared = [t for t in schema["type"] if t != "null"]
            return str(declared[0]) if declared else None
        return super()._schema_type(schema)


def select_backend(version: str) -> DescriptionBackend:
    return V31Parser() if is_openapi_31(version) else LegacyOrV3Parser()


def parse_description(text: str) -> Tuple[ParsedDocument, str]:
    """
    Parses description text with the backend matching its version.

    The other backend is tried when the selected one rejects the document.

    Raises:
        DescriptionParseError: If neither backend accepts the document.
    """
    version = detect_version(text)
    primary = select_backend(version)
    fallback = LegacyOrV3Parser() if isinstance(primary, V31Parser) else V31Parser()
    console.info(f"Detected description version '{version}', parsing with the {primary.name} parser.")

    errors = []
    for backend in (primary, fallback):
        try:
            return backend.parse(text), version
        except DescriptionParseError as e:
            console.debug(f"The {backend.name} parser rejected the description: {e}")
            errors.append(f"{backend.name}: {e}")
    raise DescriptionParseError("Failed to parse API description. " + "; ".join(errors))


def fetch_description(locator: str, client: Optional[httpx.Client] = None, timeout: float = 10.0) -> str:
    """
    Downloads a description document over HTTP(S).

    Raises:
        DescriptionFetchError: If the source is unreachable, answers with an
            error status or serves non-text content.
    """
    try:
        scheme = urlsplit(locator).scheme
    except ValueError as e:
        raise DescriptionFetchError(locator, f"malformed locator: {e}") from e
    if scheme not in ("http", "https"):
        raise DescriptionFetchError(locator, "only http(s) locators are supported")

    console.info(f"Loading Swagger/OpenAPI description from URL: {locator}")
    try:
        if client is None:
            with httpx.Client(timeout=timeout, follow_redirects=True) as owned_client:
                response = owned_client.get(locator)
        else:
            response = client.get(locator)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        raise DescriptionFetchError(locator, str(e) or e.__class__.__name__) from e

    if not response.is_success:
        raise DescriptionFetchError(locator, f"HTTP status {response.status_code}")
    content_type = response.headers.get("content-type", "").lower()
    if content_type and not any(marker in content_type for marker in TEXT_CONTENT_MARKERS):
        raise DescriptionFetchError(locator, f"non-text content type '{content_type}'")
    text = response.text
    if "\x00" in text:
        raise DescriptionFetchError(locator, "response body is not text")
    return text


def resolve_server_url(server_url: Optional[str], locator: Optional[str]) -> Optional[str]:
    """Resolves a relative server URL against the description locator."""
    if not server_url:
        return None
    if urlsplit(server_url).scheme or not locator:
        return server_url
    return urljoin(locator, server_url)


def load_description(locator: str, client: Optional[httpx.Client] = None,
                     timeout: float = 10.0) -> Tuple[ParsedDocument, str]:
    """Fetches and parses the description at the locator."""
    text = fetch_description(locator, client=client, timeout=timeout)
    document, version = parse_description(text)
    server_url = resolve_server_url(document.server_url, locator)
    return document.model_copy(update={"server_url": server_url}), version
