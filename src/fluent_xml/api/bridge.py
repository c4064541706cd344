"""Bidirectional conversion between the document model and ``xml.dom.minidom``.

Only elements, attributes, text, CDATA sections and comments exist on both
sides. The XML declaration is not a DOM node: going to the DOM it is dropped,
coming back its version and encoding are read from the DOM document (as set by
the parser). Any other DOM node kind is rejected with
``UnsupportedInputError`` rather than silently dropped.
"""

from typing import Any, Callable, Dict, List, Optional, Union
from xml.dom import DOMException, Node as DomNode, minidom

from fluent_xml.shared import (
    DEFAULT_DOM_CONFIG,
    ConversionFailureError,
    DomConfig,
    UnsupportedInputError,
    get_logger,
)
from fluent_xml.tree.kinds import NodeKind
from fluent_xml.tree.nodes import (
    CDATA,
    Comment,
    Declaration,
    Document,
    Element,
    Item,
    Node,
    Text,
)

# DOM node types that carry character data we keep
_TEXT_TYPES = (DomNode.TEXT_NODE,)

_DOM_TYPE_NAMES = {
    DomNode.ATTRIBUTE_NODE: "attribute",
    DomNode.ENTITY_REFERENCE_NODE: "entity reference",
    DomNode.ENTITY_NODE: "entity",
    DomNode.PROCESSING_INSTRUCTION_NODE: "processing instruction",
    DomNode.DOCUMENT_TYPE_NODE: "document type",
    DomNode.DOCUMENT_FRAGMENT_NODE: "document fragment",
    DomNode.NOTATION_NODE: "notation",
}


def _dom_type_name(dom_node: Any) -> str:
    node_type = getattr(dom_node, "nodeType", None)
    return _DOM_TYPE_NAMES.get(node_type, f"node type {node_type!r}")


class _ToDom:
    """Single walk over the model producing one DOM node per model node."""

    def __init__(self, owner: minidom.Document, config: DomConfig) -> None:
        self.owner = owner
        self.config = config
        self.converted = 0
        self._converters: Dict[NodeKind, Callable[[Any], Optional[Any]]] = {
            NodeKind.ELEMENT: self._element,
            NodeKind.TEXT: self._text,
            NodeKind.CDATA: self._cdata,
            NodeKind.COMMENT: self._comment,
        }

    def convert(self, node: Item) -> Optional[Any]:
        converter = self._converters.get(getattr(node, "kind", None))  # type: ignore[arg-type]
        if converter is None:
            raise TypeError(f"No DOM representation for {type(node).__name__}")
        self.converted += 1
        return converter(node)

    def _element(self, element: Element) -> Any:
        dom_element = self.owner.createElement(element.name)
        for attribute in element.attributes:
            value = attribute.value if attribute.value is not None else ""
            dom_element.setAttribute(attribute.name, value)
        for child in element.children:
            dom_child = self.convert(child)
            if dom_child is not None:
                dom_element.appendChild(dom_child)
        return dom_element

    def _text(self, node: Text) -> Optional[Any]:
        if node.text is None:
            return None
        return self.owner.createTextNode(node.text)

    def _cdata(self, node: CDATA) -> Optional[Any]:
        if node.text is None:
            return None
        return self.owner.createCDATASection(node.text)

    def _comment(self, node: Comment) -> Optional[Any]:
        if node.text is None:
            return None
        data = f" {node.text} " if self.config.pad_comments else node.text
        return self.owner.createComment(data)


def to_dom(
    item: Item,
    config: Optional[DomConfig] = None,
    dom_document: Optional[minidom.Document] = None,
    correlation_id: Optional[str] = None
) -> Any:
    """Convert a model item into its DOM counterpart.

    Args:
        item: Document, element or content node to convert
        config: Conversion options
        dom_document: Owner document for node conversion; a new one is created
            when omitted. Ignored when ``item`` is a Document.
        correlation_id: Optional correlation ID for request tracking

    Returns:
        A new ``minidom.Document`` for a Document, otherwise a DOM node owned
        by ``dom_document`` (or None for a content node with no payload).

    Raises:
        TypeError: If ``item`` is a bare Declaration.
        ConversionFailureError: If the DOM implementation rejects the tree,
            e.g. a top-level text node.
    """
    config = config or DEFAULT_DOM_CONFIG
    logger = get_logger(__name__, correlation_id, "to_dom")

    if isinstance(item, Declaration):
        raise TypeError("A declaration has no DOM node representation")

    try:
        if isinstance(item, Document):
            owner = minidom.getDOMImplementation().createDocument(None, None, None)
            converter = _ToDom(owner, config)
            for top_level in item.children:
                if isinstance(top_level, Declaration):
                    continue
                dom_node = converter.convert(top_level)
                if dom_node is not None:
                    owner.appendChild(dom_node)
            result: Any = owner
        else:
            if dom_document is None:
                dom_document = minidom.getDOMImplementation().createDocument(
                    None, None, None
                )
            converter = _ToDom(dom_document, config)
            result = converter.convert(item)
    except DOMException as e:
        logger.error(
            "DOM implementation rejected the tree",
            extra={"item_type": type(item).__name__},
        )
        raise ConversionFailureError(
            f"Failed to create a DOM tree from {type(item).__name__}: {e}"
        ) from e

    logger.debug(
        "Converted model to DOM",
        extra={"item_type": type(item).__name__, "nodes": converter.converted},
    )
    return result


class _FromDom:
    """Inverse walk: DOM nodes to model nodes."""

    def __init__(self, config: DomConfig) -> None:
        self.config = config
        self.converted = 0

    def node(self, dom_node: Any) -> Node:
        node_type = getattr(dom_node, "nodeType", None)
        self.converted += 1
        if node_type == DomNode.ELEMENT_NODE:
            return self.element(dom_node)
        if node_type == DomNode.TEXT_NODE:
            return Text(dom_node.data)
        if node_type == DomNode.CDATA_SECTION_NODE:
            return CDATA(dom_node.data)
        if node_type == DomNode.COMMENT_NODE:
            return Comment(self._comment_text(dom_node.data))
        raise UnsupportedInputError(
            f"Unable to handle DOM nodes of kind '{_dom_type_name(dom_node)}'",
            node_type=_dom_type_name(dom_node),
        )

    def element(self, dom_element: Any) -> Element:
        element = Element(dom_element.tagName)
        attributes = dom_element.attributes
        for index in range(attributes.length):
            dom_attribute = attributes.item(index)
            element.set_attribute(dom_attribute.name, dom_attribute.value)
        for dom_child in self._significant_children(dom_element.childNodes):
            element.add(self.node(dom_child))
        return element

    def document(self, dom_document: Any) -> Document:
        document = Document()
        version = getattr(dom_document, "version", None)
        encoding = getattr(dom_document, "encoding", None)
        if version is not None or encoding is not None:
            document.set_declaration(Declaration(version, encoding))

        for dom_child in dom_document.childNodes:
            if dom_child.nodeType == DomNode.ELEMENT_NODE:
                document.set_root(self.element(dom_child))
            elif dom_child.nodeType == DomNode.COMMENT_NODE:
                document.add(Comment(self._comment_text(dom_child.data)))
            else:
                raise UnsupportedInputError(
                    "Unable to handle top-level DOM nodes of kind "
                    f"'{_dom_type_name(dom_child)}'",
                    node_type=_dom_type_name(dom_child),
                )
        return document

    def _significant_children(self, dom_children: List[Any]) -> List[Any]:
        children = list(dom_children)
        if not self.config.strip_ignorable_whitespace:
            return children
        if all(child.nodeType in _TEXT_TYPES for child in children):
            return children
        return [
            child for child in children
            if not (child.nodeType in _TEXT_TYPES and not child.data.strip())
        ]

    def _comment_text(self, data: str) -> str:
        if (
            self.config.pad_comments
            and len(data) >= 2
            and data.startswith(" ")
            and data.endswith(" ")
        ):
            return data[1:-1]
        return data


def from_dom(
    dom_node: Any,
    config: Optional[DomConfig] = None,
    correlation_id: Optional[str] = None
) -> Union[Document, Node]:
    """Convert a DOM document or node into the model.

    Args:
        dom_node: ``minidom`` document, element, text, CDATA or comment node
        config: Conversion options
        correlation_id: Optional correlation ID for request tracking

    Returns:
        A Document for a DOM document, otherwise the matching model node.

    Raises:
        UnsupportedInputError: If the DOM subtree contains a node kind the
            model cannot represent (processing instruction, doctype, ...).
    """
    config = config or DEFAULT_DOM_CONFIG
    logger = get_logger(__name__, correlation_id, "from_dom")
    converter = _FromDom(config)

    try:
        if getattr(dom_node, "nodeType", None) == DomNode.DOCUMENT_NODE:
            result: Union[Document, Node] = converter.document(dom_node)
        else:
            result = converter.node(dom_node)
    except UnsupportedInputError as e:
        logger.warning(
            "Rejected unsupported DOM input",
            extra={"node_type": e.node_type},
        )
        raise

    logger.debug(
        "Converted DOM to model",
        extra={"result_type": type(result).__name__, "nodes": converter.converted},
    )
    return result
