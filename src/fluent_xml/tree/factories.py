"""Nested-call constructors for building documents in a single expression.

Example:
    >>> doc = document(
    ...     comment("This is the structure for a person"),
    ...     element("person",
    ...         element("first-name", "Mike"),
    ...         element("addresses",
    ...             element("address", attr("location", "Home"),
    ...                 element("city", "Richmond"))),
    ...     ),
    ... )
    >>> doc.root.child("first-name").text
    'Mike'
"""

from typing import Optional, Union

from fluent_xml.shared.errors import StructuralStateError

from .nodes import (
    CDATA,
    Attribute,
    Comment,
    Declaration,
    Document,
    Element,
    Item,
    Node,
    Text,
)

ElementContent = Union[str, Attribute, Node, None]


def declaration(
    version: Optional[str] = "1.0", encoding: Optional[str] = "UTF-8"
) -> Declaration:
    return Declaration(version, encoding)


def attr(name: str, value: Optional[str]) -> Attribute:
    return Attribute(name, value)


def text(value: Optional[str]) -> Text:
    return Text(value)


def cdata(value: Optional[str]) -> CDATA:
    return CDATA(value)


def comment(value: Optional[str]) -> Comment:
    return Comment(value)


def element(name: str, *content: ElementContent) -> Element:
    """Build an element from a mix of strings, attributes and child nodes.

    Strings become text children, attributes are set (replacing an earlier
    attribute of the same name) and nodes are appended. None is skipped.
    """
    result = Element(name)
    for part in content:
        if part is None:
            continue
        if isinstance(part, str):
            result.add_text(part)
        elif isinstance(part, Attribute):
            result.remove_attribute(part.name)
            result.add_attribute(part)
        elif isinstance(part, Node):
            result.add(part)
        else:
            raise TypeError(f"Unsupported element content: {type(part).__name__}")
    return result


def document(*items: Optional[Item]) -> Document:
    """Build a document from a declaration, comments and one root element.

    A declaration replaces the default one. The first element becomes the
    root; a second element raises ``StructuralStateError``.
    """
    result = Document()
    for item in items:
        if item is None:
            continue
        if isinstance(item, Declaration):
            result.set_declaration(item)
        elif isinstance(item, Element):
            if result.root is not None:
                raise StructuralStateError(
                    f"Document already has a root element <{result.root.name}>"
                )
            result.set_root(item)
        elif isinstance(item, Comment):
            result.add(item)
        else:
            raise TypeError(
                f"Unsupported top-level item: {type(item).__name__}"
            )
    return result
