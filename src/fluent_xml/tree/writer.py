"""Deterministic pretty-printing writer for document trees.

Output rules:
    - A declaration is ``<?xml version="V" encoding="E"?>``; absent fields are
      left out entirely.
    - An element without children is written self-closing: ``<name a="v" />``.
    - An element whose only child is a text node is written on one line:
      ``<name>text</name>``.
    - Any other element gets its opening tag, each child one level deeper,
      then its closing tag.
    - Text and attribute values are escaped; CDATA and comment payloads are
      written verbatim and must be kept well-formed by the caller.
    - A content node whose payload is None writes nothing.
"""

import io
from typing import IO, Callable, Dict, Optional

from fluent_xml.shared.config import DEFAULT_WRITER_CONFIG, WriterConfig

from .kinds import NodeKind
from .nodes import (
    CDATA,
    Comment,
    Declaration,
    Document,
    Element,
    Item,
    Text,
)

_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
}


def escape(value: Optional[str]) -> str:
    """Escape ``<``, ``>``, ``&`` and ``"``; None becomes an empty string."""
    if not value:
        return ""
    return "".join(_ESCAPES.get(char, char) for char in value)


class XMLWriter:
    """Render items as indented XML text."""

    def __init__(self, config: Optional[WriterConfig] = None) -> None:
        self.config = config or DEFAULT_WRITER_CONFIG
        self._renderers: Dict[NodeKind, Callable[[Item, IO[str], int], None]] = {
            NodeKind.DOCUMENT: self._write_document,  # type: ignore[dict-item]
            NodeKind.DECLARATION: self._write_declaration,  # type: ignore[dict-item]
            NodeKind.ELEMENT: self._write_element,  # type: ignore[dict-item]
            NodeKind.TEXT: self._write_text,  # type: ignore[dict-item]
            NodeKind.CDATA: self._write_cdata,  # type: ignore[dict-item]
            NodeKind.COMMENT: self._write_comment,  # type: ignore[dict-item]
        }

    def write(self, item: Item, stream: IO[str], depth: int = 0) -> None:
        """Write ``item`` to ``stream`` indented ``depth`` levels."""
        if depth < 0:
            raise ValueError("depth must be >= 0")
        renderer = self._renderers.get(getattr(item, "kind", None))  # type: ignore[arg-type]
        if renderer is None:
            raise TypeError(f"Cannot write object of type {type(item).__name__}")
        renderer(item, stream, depth)

    def _indent(self, stream: IO[str], depth: int) -> None:
        stream.write(self.config.indent * depth)

    def _write_document(self, document: Document, stream: IO[str], depth: int) -> None:
        for item in document.children:
            self.write(item, stream, depth)

    def _write_declaration(
        self, declaration: Declaration, stream: IO[str], depth: int
    ) -> None:
        stream.write("<?xml")
        if declaration.version is not None:
            stream.write(f' version="{declaration.version}"')
        if declaration.encoding is not None:
            stream.write(f' encoding="{declaration.encoding}"')
        stream.write("?>")
        stream.write(self.config.newline)

    def _write_attributes(self, element: Element, stream: IO[str]) -> None:
        for attribute in element.attributes:
            stream.write(f' {attribute.name}="{escape(attribute.value)}"')

    def _write_element(self, element: Element, stream: IO[str], depth: int) -> None:
        newline = self.config.newline
        self._indent(stream, depth)
        stream.write(f"<{element.name}")
        self._write_attributes(element, stream)
        children = element.children
        if not children:
            stream.write(" />")
            stream.write(newline)
            return

        stream.write(">")
        if len(children) == 1 and isinstance(children[0], Text):
            self._write_text(children[0], stream, 0)
        else:
            stream.write(newline)
            for child in children:
                self.write(child, stream, depth + 1)
            self._indent(stream, depth)
        stream.write(f"</{element.name}>")
        stream.write(newline)

    def _write_text(self, node: Text, stream: IO[str], depth: int) -> None:
        if node.text is None:
            return
        self._indent(stream, depth)
        stream.write(escape(node.text))

    def _write_cdata(self, node: CDATA, stream: IO[str], depth: int) -> None:
        if node.text is None:
            return
        self._indent(stream, depth)
        stream.write(f"<![CDATA[{node.text}]]>")
        stream.write(self.config.newline)

    def _write_comment(self, node: Comment, stream: IO[str], depth: int) -> None:
        if node.text is None:
            return
        self._indent(stream, depth)
        stream.write(f"<!-- {node.text} -->")
        stream.write(self.config.newline)


def to_string(item: Item, config: Optional[WriterConfig] = None) -> str:
    """Return the canonical text of ``item`` written at depth 0."""
    buffer = io.StringIO()
    XMLWriter(config).write(item, buffer, 0)
    return buffer.getvalue()
