"""Integration adapters for exchanging documents with other XML libraries.

Every adapter converts in both directions between the model and a target
library's tree. ``minidom`` is always available and is the reference DOM
bridge; ``lxml`` is offered for callers whose pipeline already uses it.

lxml keeps character data in ``text``/``tail`` slots instead of text nodes.
Consecutive text and CDATA nodes therefore share a slot, and CDATA survives
as a CDATA block only when it is the first character data of an element;
everywhere else it is merged as plain text.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, Union

from fluent_xml.shared import (
    DEFAULT_DOM_CONFIG,
    DomConfig,
    UnsupportedInputError,
    get_logger,
)
from fluent_xml.tree.nodes import (
    Comment,
    Declaration,
    Document,
    Element,
    Item,
    Node,
    Text,
)

from .bridge import from_dom, to_dom


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters."""

    name: str = ""

    def __init__(
        self,
        config: Optional[DomConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the integration adapter.

        Args:
            config: Conversion options shared by both directions
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or DEFAULT_DOM_CONFIG
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def to_target(self, item: Item) -> Any:
        """Convert a model item to the target library's representation."""

    @abstractmethod
    def from_target(self, target_data: Any) -> Union[Document, Node]:
        """Convert the target library's representation to the model."""


class MinidomAdapter(IntegrationAdapter):
    """Adapter for ``xml.dom.minidom``; delegates to the DOM bridge."""

    name = "minidom"

    def is_available(self) -> bool:
        return True

    def to_target(self, item: Item) -> Any:
        return to_dom(item, self.config, correlation_id=self.correlation_id)

    def from_target(self, target_data: Any) -> Union[Document, Node]:
        return from_dom(target_data, self.config, self.correlation_id)


class LxmlAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with ``lxml.etree``."""

    name = "lxml"

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    # Model -> lxml

    def to_target(self, item: Item) -> Any:
        """Convert a Document to an ``_ElementTree``, a node to an lxml node.

        Raises:
            TypeError: For a declaration, a document without a root element,
                or a bare text node (lxml has no standalone text nodes).
        """
        from lxml import etree

        if isinstance(item, Document):
            return self._document_to_lxml(item, etree)
        if isinstance(item, Element):
            return self._element_to_lxml(item, etree)
        if isinstance(item, Comment):
            return etree.Comment(self._pad(item.text or ""))
        raise TypeError(f"No lxml node representation for {type(item).__name__}")

    def _document_to_lxml(self, document: Document, etree: Any) -> Any:
        if document.root is None:
            raise TypeError("lxml needs a root element to build a tree")
        root = self._element_to_lxml(document.root, etree)
        tree = etree.ElementTree(root)
        items = [item for item in document.children if not isinstance(item, Declaration)]
        position = next(i for i, item in enumerate(items) if item is document.root)
        for item in reversed(items[:position]):
            if isinstance(item, Comment) and item.text is not None:
                root.addprevious(etree.Comment(self._pad(item.text)))
        for item in reversed(items[position + 1:]):
            if isinstance(item, Comment) and item.text is not None:
                root.addnext(etree.Comment(self._pad(item.text)))
        self._logger.debug("Converted document to lxml", extra={"root": root.tag})
        return tree

    def _element_to_lxml(self, element: Element, etree: Any) -> Any:
        target = etree.Element(element.name)
        for attribute in element.attributes:
            value = attribute.value if attribute.value is not None else ""
            target.set(attribute.name, value)

        last_child = None
        for child in element.children:
            if isinstance(child, Element):
                last_child = self._element_to_lxml(child, etree)
                target.append(last_child)
            elif isinstance(child, Comment):
                if child.text is None:
                    continue
                last_child = etree.Comment(self._pad(child.text))
                target.append(last_child)
            elif child.text is not None:
                self._append_character_data(target, last_child, child, etree)
        return target

    def _append_character_data(
        self, target: Any, last_child: Any, node: Node, etree: Any
    ) -> None:
        payload = node.text  # type: ignore[attr-defined]
        if last_child is None:
            if target.text is None and not isinstance(node, Text):
                target.text = etree.CDATA(payload)
            else:
                target.text = (target.text or "") + payload
        else:
            last_child.tail = (last_child.tail or "") + payload

    # lxml -> model

    def from_target(self, target_data: Any) -> Union[Document, Node]:
        """Convert an lxml ``_ElementTree`` to a Document, an element to a node.

        Raises:
            UnsupportedInputError: For processing instructions and entities.
        """
        from lxml import etree

        if isinstance(target_data, etree._ElementTree):
            return self._document_from_lxml(target_data, etree)
        return self._node_from_lxml(target_data, etree)

    def _document_from_lxml(self, tree: Any, etree: Any) -> Document:
        document = Document()
        docinfo = tree.docinfo
        if docinfo.xml_version or docinfo.encoding:
            document.set_declaration(
                Declaration(docinfo.xml_version or None, docinfo.encoding or None)
            )
        root = tree.getroot()
        for sibling in reversed(list(root.itersiblings(preceding=True))):
            document.add(self._top_level_from_lxml(sibling, etree))
        document.set_root(self._node_from_lxml(root, etree))  # type: ignore[arg-type]
        for sibling in root.itersiblings():
            document.add(self._top_level_from_lxml(sibling, etree))
        return document

    def _top_level_from_lxml(self, node: Any, etree: Any) -> Comment:
        converted = self._node_from_lxml(node, etree)
        if not isinstance(converted, Comment):
            raise UnsupportedInputError(
                "Only comments may appear beside the root element",
                node_type=type(node).__name__,
            )
        return converted

    def _node_from_lxml(self, node: Any, etree: Any) -> Node:
        if node.tag is etree.Comment:
            return Comment(self._unpad(node.text or ""))
        if node.tag is etree.ProcessingInstruction or node.tag is etree.Entity:
            raise UnsupportedInputError(
                f"Unable to handle lxml nodes of type '{type(node).__name__}'",
                node_type=type(node).__name__,
            )

        element = Element(node.tag)
        for name, value in node.attrib.items():
            element.set_attribute(name, value)

        children: List[Node] = []
        if node.text:
            children.append(Text(node.text))
        for child in node:
            children.append(self._node_from_lxml(child, etree))
            if child.tail:
                children.append(Text(child.tail))
        for child in self._significant(children):
            element.add(child)
        return element

    def _significant(self, children: List[Node]) -> List[Node]:
        if not self.config.strip_ignorable_whitespace:
            return children
        if all(isinstance(child, Text) for child in children):
            return children
        return [
            child for child in children
            if not (isinstance(child, Text) and not (child.text or "").strip())
        ]

    def _pad(self, text: str) -> str:
        return f" {text} " if self.config.pad_comments else text

    def _unpad(self, text: str) -> str:
        if self.config.pad_comments and len(text) >= 2 and text[0] == text[-1] == " ":
            return text[1:-1]
        return text


class AdapterRegistry:
    """Thread-safe name -> adapter class registry."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        if not adapter_class.name:
            raise ValueError("Adapter class must define a name")
        with self._lock:
            self._adapters[adapter_class.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        config: Optional[DomConfig] = None,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Return a new adapter instance, or None if unknown or unavailable."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        adapter = adapter_class(config, correlation_id)
        return adapter if adapter.is_available() else None

    def list_available_adapters(self) -> List[str]:
        with self._lock:
            classes = list(self._adapters.values())
        return [cls.name for cls in classes if cls().is_available()]


# Global adapter registry instance
_adapter_registry = AdapterRegistry()
_adapter_registry.register(MinidomAdapter)
_adapter_registry.register(LxmlAdapter)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    config: Optional[DomConfig] = None,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance, or None if unavailable."""
    return _adapter_registry.get_adapter(adapter_name, config, correlation_id)


def list_available_adapters() -> List[str]:
    """Names of registered adapters whose target library is importable."""
    return _adapter_registry.list_available_adapters()


def to_lxml(item: Item, config: Optional[DomConfig] = None) -> Any:
    """Convert a model item to lxml (see ``LxmlAdapter.to_target``)."""
    return LxmlAdapter(config).to_target(item)


def from_lxml(node: Any, config: Optional[DomConfig] = None) -> Union[Document, Node]:
    """Convert an lxml tree or node to the model (see ``LxmlAdapter.from_target``)."""
    return LxmlAdapter(config).from_target(node)
