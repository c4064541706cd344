"""Fluent XML.

An in-memory XML document model with a fluent construction API, a
deterministic pretty-printing writer, depth-first visitors and conversion to
and from ``xml.dom.minidom``.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file(), document(), element()
- Level 2: Tree objects - Document, Element and the content nodes
- Level 3: Bridges - to_dom(), from_dom() and the lxml adapter
"""

__version__ = "0.1.0"
__author__ = "Fluent XML Team"

# Level 1: Simple functions
from .api import parse, parse_file, parse_string

# Level 3: Bridges and adapters
from .api import from_dom, from_lxml, serialize_dom, to_dom, to_lxml

# Errors and configuration
from .shared import (
    ConversionFailureError,
    DomConfig,
    FluentXMLError,
    StructuralStateError,
    UnsupportedInputError,
    WriterConfig,
)

# Level 2: Tree objects and nested-call factories
from .tree import (
    CDATA,
    Attribute,
    CallbackVisitor,
    Comment,
    Declaration,
    Document,
    Element,
    Text,
    Visitor,
    attr,
    cdata,
    comment,
    declaration,
    document,
    element,
    text,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "parse",
    "parse_string",
    "parse_file",
    "document",
    "element",
    "declaration",
    "attr",
    "text",
    "cdata",
    "comment",

    # Level 2: Tree objects
    "Attribute",
    "CDATA",
    "Comment",
    "Declaration",
    "Document",
    "Element",
    "Text",
    "Visitor",
    "CallbackVisitor",

    # Level 3: Bridges
    "to_dom",
    "from_dom",
    "to_lxml",
    "from_lxml",
    "serialize_dom",

    # Errors and configuration
    "FluentXMLError",
    "StructuralStateError",
    "UnsupportedInputError",
    "ConversionFailureError",
    "DomConfig",
    "WriterConfig",
]
