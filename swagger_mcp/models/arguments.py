# The module is to classify tool argument values and serialize them into request parts.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.1.0

import json
from enum import Enum
from typing import Any, List, Optional
from urllib.parse import quote


class ArgumentKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"
    MAP = "map"
    NULL = "null"


def classify(value: Any) -> Optional[ArgumentKind]:
    """
    Returns the kind of a decoded JSON argument value, or None when the value
    is not one of the supported kinds.
    """
    if value is None:
        return ArgumentKind.NULL
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return ArgumentKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ArgumentKind.NUMBER
    if isinstance(value, str):
        return ArgumentKind.STRING
    if isinstance(value, (list, tuple)):
        return ArgumentKind.LIST
    if isinstance(value, dict):
        return ArgumentKind.MAP
    return None


def _scalar_text(value: Any, kind: ArgumentKind) -> str:
    if kind is ArgumentKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ArgumentKind.NUMBER:
        return str(value)
    if kind is ArgumentKind.STRING:
        return value
    if kind is ArgumentKind.MAP:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    if kind is ArgumentKind.LIST:
        return ",".join(to_text(item) for item in value)
    return ""


def to_text(value: Any) -> str:
    """
    The plain string form of an argument value.

    Raises:
        TypeError: If the value is not a supported argument kind.
    """
    kind = classify(value)
    if kind is None:
        raise TypeError(type(value).__name__)
    return _scalar_text(value, kind)


def to_path_segment(value: Any) -> Optional[str]:
    """Percent-encoded path segment for a value; None for a null value."""
    if classify(value) is ArgumentKind.NULL:
        return None
    return quote(to_text(value), safe="")


def to_query_values(value: Any) -> List[str]:
    """
    Query string values for an argument: one per list item, none for null.
    """
    kind = classify(value)
    if kind is None:
        raise TypeError(type(value).__name__)
    if kind is ArgumentKind.NULL:
        return []
    if kind is ArgumentKind.LIST:
        return [to_text(item) for item in value if item is not None]
    return [_scalar_text(value, kind)]


def to_header_value(value: Any) -> Optional[str]:
    if classify(value) is ArgumentKind.NULL:
        return None
    return to_text(value)
