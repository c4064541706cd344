"""In-memory document tree for fluent XML construction.

Key Components:
    Document: Top-level container with declaration, comments and root element
    Element: Named node with ordered attributes and children
    Text, CDATA, Comment: Leaf content nodes
    Visitor: Depth-first traversal contract
    XMLWriter: Deterministic pretty-printing writer
"""

from .factories import (
    attr,
    cdata,
    comment,
    declaration,
    document,
    element,
    text,
)
from .kinds import NodeKind
from .nodes import (
    CDATA,
    Attribute,
    Comment,
    Content,
    Declaration,
    Document,
    Element,
    Item,
    Node,
    Text,
)
from .visitor import CallbackVisitor, ElementCollector, Visitor
from .writer import XMLWriter, escape, to_string

__all__ = [
    "Attribute",
    "CDATA",
    "Comment",
    "Content",
    "Declaration",
    "Document",
    "Element",
    "Item",
    "Node",
    "NodeKind",
    "Text",
    "CallbackVisitor",
    "ElementCollector",
    "Visitor",
    "XMLWriter",
    "escape",
    "to_string",
    "attr",
    "cdata",
    "comment",
    "declaration",
    "document",
    "element",
    "text",
]
