"""Document tree model with a fluent construction API.

The tree is made of ``Item`` subclasses. A ``Document`` owns its top-level
items, an ``Element`` owns its attributes and child nodes, and every item keeps
a non-owning (weak) link back to its parent for upward navigation.

Ownership contract:
    A node has at most one parent. Inserting a node that already has a parent
    moves it: it is detached from the old parent first. The tree must stay
    acyclic; this is not re-validated on every insertion, so never add an
    element to one of its own descendants.

Thread safety:
    There is no internal locking. Mutation must be serialized by the caller;
    read-only traversals may run concurrently on a tree nobody is mutating.
"""

import weakref
from typing import IO, TYPE_CHECKING, Any, List, Optional

from fluent_xml.shared.config import WriterConfig
from fluent_xml.shared.errors import StructuralStateError

from .kinds import NodeKind
from .visitor import ElementCollector, VisitorLike, as_visitor

if TYPE_CHECKING:
    from xml.dom import minidom


class Item:
    """Base class of everything that can be placed in a document."""

    kind: NodeKind

    def __init__(self) -> None:
        self._parent_ref: Optional["weakref.ReferenceType[Item]"] = None

    @property
    def parent(self) -> Optional["Item"]:
        """Parent container, or None for a detached item."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _set_parent(self, parent: Optional["Item"]) -> None:
        """Set the parent link. Only container mutations call this."""
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    def _detach(self) -> None:
        """Remove this item from its current parent, if any."""
        parent = self.parent
        if parent is not None:
            parent.remove(self)  # type: ignore[attr-defined]

    def document(self) -> Optional["Document"]:
        """Return the owning document, or None if the topmost ancestor isn't one.

        Parent links are weak references, so the caller must keep the document
        alive. ``Document().create_root("p").document()`` returns None once the
        temporary document has been collected, and so does ``parent``.
        """
        item: Item = self
        parent = item.parent
        while parent is not None:
            item = parent
            parent = item.parent
        return item if isinstance(item, Document) else None

    def visit(self, visitor: VisitorLike) -> None:
        """Visit this item. Leaves have nothing to descend into."""
        as_visitor(visitor).visit(self)

    def write(
        self,
        stream: IO[str],
        depth: int = 0,
        config: Optional[WriterConfig] = None
    ) -> None:
        """Write the pretty-printed form of this item to ``stream``."""
        from .writer import XMLWriter

        XMLWriter(config).write(self, stream, depth)

    def to_xml(self, config: Optional[WriterConfig] = None) -> str:
        """Return the canonical string form of this item."""
        from .writer import to_string

        return to_string(self, config)

    def __str__(self) -> str:
        return self.to_xml()


class Node(Item):
    """An item that can be a child of an element."""


class Declaration(Item):
    """The ``<?xml ...?>`` prolog of a document."""

    kind = NodeKind.DECLARATION

    def __init__(
        self,
        version: Optional[str] = "1.0",
        encoding: Optional[str] = "UTF-8"
    ) -> None:
        super().__init__()
        self.version = version
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"Declaration(version={self.version!r}, encoding={self.encoding!r})"


class Content(Node):
    """Leaf node carrying a single, possibly None, string payload."""

    def __init__(self, text: Optional[str]) -> None:
        super().__init__()
        self.text = text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.text!r})"


class Text(Content):
    """Character data; escaped on output."""

    kind = NodeKind.TEXT


class CDATA(Content):
    """A CDATA section; written verbatim between its delimiters."""

    kind = NodeKind.CDATA


class Comment(Content):
    """A comment; written verbatim between its delimiters."""

    kind = NodeKind.COMMENT


class Attribute:
    """A name/value pair owned by one element."""

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: Optional[str]) -> None:
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"Attribute({self.name!r}, {self.value!r})"


class Element(Node):
    """A named node with ordered attributes and ordered child nodes.

    An element with no children is kept in a distinct "no children" state
    (serialized self-closing); removing the last child returns it to that state.
    """

    kind = NodeKind.ELEMENT

    def __init__(self, name: str, text: Optional[str] = None) -> None:
        super().__init__()
        if not name:
            raise ValueError("Element name cannot be empty")
        self.name = name
        self._attributes: Optional[List[Attribute]] = None
        self._children: Optional[List[Node]] = None
        if text is not None:
            self.add_text(text)

    def __repr__(self) -> str:
        return f"<Element {self.name!r} at {id(self):#x}>"

    # Attributes

    @property
    def attributes(self) -> List[Attribute]:
        """Attributes in insertion order (a copy of the internal list)."""
        return list(self._attributes or ())

    def add_attribute(self, attribute: Attribute) -> "Element":
        """Append ``attribute`` without checking for an existing name."""
        if not isinstance(attribute, Attribute):
            raise TypeError("attribute must be an Attribute instance")
        if self._attributes is None:
            self._attributes = []
        self._attributes.append(attribute)
        return self

    def set_attribute(self, name: str, value: Optional[str]) -> "Element":
        """Set attribute ``name``, replacing an existing one of the same name."""
        self.remove_attribute(name)
        return self.add_attribute(Attribute(name, value))

    def set_attributes(self, *pairs: Optional[str]) -> "Element":
        """Set attributes from a flat ``name, value, name, value, ...`` sequence.

        Raises:
            ValueError: If an odd number of arguments is given; nothing is set.
        """
        if len(pairs) % 2:
            raise ValueError(
                f"set_attributes expects name/value pairs, got {len(pairs)} values"
            )
        for index in range(0, len(pairs), 2):
            self.set_attribute(pairs[index], pairs[index + 1])  # type: ignore[arg-type]
        return self

    def attribute(self, name: str) -> Optional[Attribute]:
        """Return the first attribute called ``name``, or None."""
        for attribute in self._attributes or ():
            if attribute.name == name:
                return attribute
        return None

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of attribute ``name``, or ``default``."""
        attribute = self.attribute(name)
        return default if attribute is None else attribute.value

    attribute_value = get

    def remove_attribute(self, name: str) -> Optional[Attribute]:
        """Remove and return the first attribute called ``name``, or None."""
        attribute = self.attribute(name)
        if attribute is not None:
            self.discard_attribute(attribute)
        return attribute

    def discard_attribute(self, attribute: Attribute) -> None:
        """Remove this exact attribute instance if present."""
        if not self._attributes:
            return
        for index, existing in enumerate(self._attributes):
            if existing is attribute:
                del self._attributes[index]
                break
        if not self._attributes:
            self._attributes = None

    # Children

    @property
    def children(self) -> List[Node]:
        """Child nodes in document order (a copy of the internal list)."""
        return list(self._children or ())

    @property
    def has_children(self) -> bool:
        return bool(self._children)

    def add(self, node: Node) -> Node:
        """Append ``node`` and take ownership of it. Returns ``node``."""
        if not isinstance(node, Node):
            raise TypeError("Child must be an Element or Content node")
        node._detach()
        if self._children is None:
            self._children = []
        node._set_parent(self)
        self._children.append(node)
        return node

    def remove(self, node: Node) -> bool:
        """Detach ``node``; returns False if it isn't a child of this element."""
        if not self._children:
            return False
        for index, child in enumerate(self._children):
            if child is node:
                del self._children[index]
                node._set_parent(None)
                if not self._children:
                    self._children = None
                return True
        return False

    def e(self, name: str, text: Optional[str] = None) -> "Element":
        """Create, append and return a child element."""
        child = Element(name, text)
        self.add(child)
        return child

    def add_text(self, text: Optional[str]) -> Text:
        """Create, append and return a text node."""
        node = Text(text)
        self.add(node)
        return node

    def cdata(self, text: Optional[str]) -> CDATA:
        """Create, append and return a CDATA section."""
        node = CDATA(text)
        self.add(node)
        return node

    def comment(self, text: Optional[str]) -> Comment:
        """Create, append and return a comment."""
        node = Comment(text)
        self.add(node)
        return node

    # Text convenience

    def _sole_text_node(self) -> Optional[Text]:
        if not self._children:
            return None
        if len(self._children) > 1:
            raise StructuralStateError(
                f"Element <{self.name}> has {len(self._children)} children, "
                "expected at most one text node"
            )
        node = self._children[0]
        if not isinstance(node, Text):
            raise StructuralStateError(
                f"Element <{self.name}> has a non-text child: {node!r}"
            )
        return node

    @property
    def text(self) -> Optional[str]:
        """Payload of the sole text child; None when there are no children.

        Raises:
            StructuralStateError: If there are several children or the only
                child isn't a text node.
        """
        node = self._sole_text_node()
        return None if node is None else node.text

    @text.setter
    def text(self, value: Optional[str]) -> None:
        self.set_text(value)

    def set_text(self, text: Optional[str]) -> "Element":
        """Set the payload of the sole text child, creating it if needed."""
        node = self._sole_text_node()
        if node is None:
            self.add_text(text)
        else:
            node.text = text
        return self

    # Navigation

    def find_children(self, name: str) -> List["Element"]:
        """All direct child elements called ``name``, in document order."""
        return [
            node for node in self._children or ()
            if isinstance(node, Element) and node.name == name
        ]

    def child(self, name: str) -> Optional["Element"]:
        """The single direct child element called ``name``, or None.

        Raises:
            StructuralStateError: If more than one direct child matches.
        """
        matches = self.find_children(name)
        if len(matches) > 1:
            raise StructuralStateError(
                f"Element <{self.name}> has {len(matches)} children named '{name}'"
            )
        return matches[0] if matches else None

    def child_text(self, name: str) -> Optional[str]:
        """Text of ``child(name)``, or None if there is no such child."""
        child = self.child(name)
        return None if child is None else child.text

    def descendants(self, name: str) -> List["Element"]:
        """Every element called ``name`` below this one, in pre-order."""
        collector = ElementCollector(name)
        for node in self._children or ():
            node.visit(collector)
        return collector.elements

    def descendants_text(self, name: str) -> List[Optional[str]]:
        """Texts of ``descendants(name)``.

        Equal texts are reported once, at the position of their first
        occurrence, even when they come from different elements.
        """
        return list(dict.fromkeys(node.text for node in self.descendants(name)))

    def visit(self, visitor: VisitorLike) -> None:
        visitor = as_visitor(visitor)
        if visitor.visit(self) and self._children:
            for node in list(self._children):
                node.visit(visitor)

    def to_dom(self, dom_document: "minidom.Document", config: Any = None) -> Any:
        """Convert this subtree into nodes owned by ``dom_document``."""
        from fluent_xml.api.bridge import to_dom

        return to_dom(self, config=config, dom_document=dom_document)


class Document(Item):
    """Top-level container: declaration, comments and exactly one root element."""

    kind = NodeKind.DOCUMENT

    def __init__(self) -> None:
        super().__init__()
        self._items: List[Item] = []
        self._root: Optional[Element] = None
        self._declaration: Optional[Declaration] = None
        self.set_declaration(Declaration("1.0", "UTF-8"))

    def __repr__(self) -> str:
        root = self._root.name if self._root is not None else None
        return f"<Document root={root!r} items={len(self._items)}>"

    @property
    def children(self) -> List[Item]:
        """Top-level items in order (a copy of the internal list)."""
        return list(self._items)

    @property
    def root(self) -> Optional[Element]:
        return self._root

    @property
    def declaration(self) -> Optional[Declaration]:
        return self._declaration

    def create_root(self, name: str, text: Optional[str] = None) -> Element:
        """Create, insert and designate the root element.

        Raises:
            StructuralStateError: If the document already has a root.
        """
        if self._root is not None:
            raise StructuralStateError(
                f"Document already has a root element <{self._root.name}>"
            )
        root = Element(name, text)
        self.set_root(root)
        return root

    def set_root(self, element: Optional[Element]) -> None:
        """Replace the root in place, append a first root, or remove it (None)."""
        if element is not None and not isinstance(element, Element):
            raise TypeError("Root must be an Element instance")
        current = self._root
        if element is current:
            return
        if current is not None:
            if element is None:
                self.remove(current)
            else:
                element._detach()
                index = self._index(current)
                current._set_parent(None)
                element._set_parent(self)
                self._items[index] = element
        elif element is not None:
            self.add(element)
        self._root = element

    def set_declaration(self, declaration: Optional[Declaration]) -> None:
        """Replace the declaration; a new one is always placed first."""
        if declaration is not None and not isinstance(declaration, Declaration):
            raise TypeError("declaration must be a Declaration instance")
        if self._declaration is not None:
            self.remove(self._declaration)
        if declaration is not None:
            declaration._detach()
            declaration._set_parent(self)
            self._items.insert(0, declaration)
        self._declaration = declaration

    def comment(self, text: Optional[str]) -> "Document":
        """Append a top-level comment and return the document."""
        self.add(Comment(text))
        return self

    def add(self, item: Item) -> Item:
        """Append ``item`` to the top-level sequence without any checks."""
        if not isinstance(item, Item) or isinstance(item, Document):
            raise TypeError("Document items must be declarations or nodes")
        item._detach()
        item._set_parent(self)
        self._items.append(item)
        return item

    def remove(self, item: Item) -> bool:
        """Detach ``item``; clears the root/declaration slot it occupied."""
        for index, existing in enumerate(self._items):
            if existing is item:
                del self._items[index]
                item._set_parent(None)
                if item is self._root:
                    self._root = None
                if item is self._declaration:
                    self._declaration = None
                return True
        return False

    def _index(self, item: Item) -> int:
        for index, existing in enumerate(self._items):
            if existing is item:
                return index
        raise ValueError(f"{item!r} is not an item of this document")

    def visit(self, visitor: VisitorLike) -> None:
        visitor = as_visitor(visitor)
        if visitor.visit(self):
            for item in list(self._items):
                item.visit(visitor)

    def to_dom(self, config: Any = None) -> "minidom.Document":
        """Convert to a new ``xml.dom.minidom`` document."""
        from fluent_xml.api.bridge import to_dom

        return to_dom(self, config=config)

    @classmethod
    def from_dom(cls, dom_document: Any, config: Any = None) -> "Document":
        """Build a document from an ``xml.dom.minidom`` document."""
        from fluent_xml.api.bridge import from_dom

        result = from_dom(dom_document, config=config)
        if not isinstance(result, Document):
            raise TypeError("from_dom expected a DOM document node")
        return result


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
    "Text",
]
