"""Parsing entry points, DOM bridge and library adapters."""

from .adapters import (
    IntegrationAdapter,
    LxmlAdapter,
    MinidomAdapter,
    from_lxml,
    get_adapter,
    list_available_adapters,
    register_adapter,
    to_lxml,
)
from .bridge import from_dom, to_dom
from .parser import parse, parse_file, parse_string, serialize_dom

__all__ = [
    "IntegrationAdapter",
    "LxmlAdapter",
    "MinidomAdapter",
    "from_lxml",
    "get_adapter",
    "list_available_adapters",
    "register_adapter",
    "to_lxml",
    "from_dom",
    "to_dom",
    "parse",
    "parse_file",
    "parse_string",
    "serialize_dom",
]
