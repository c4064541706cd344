"""Depth-first visitor protocol for document trees.

Traversal is pre-order: a container visits itself first and descends into its
children only when ``visit`` returned ``True``. Returning ``False`` prunes that
subtree but never stops traversal of siblings or of the ancestors' remaining
children.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Dict, List, Union

from .kinds import NodeKind

if TYPE_CHECKING:
    from .nodes import Element, Item


class Visitor(ABC):
    """Single-method traversal contract."""

    @abstractmethod
    def visit(self, item: "Item") -> bool:
        """Handle ``item`` and return whether to descend into its children."""


class CallbackVisitor(Visitor):
    """Adapt a plain callable to the visitor protocol.

    A callback returning ``None`` is treated as ``True`` so that simple
    collecting lambdas keep descending.
    """

    def __init__(self, callback: Callable[["Item"], object]) -> None:
        self._callback = callback

    def visit(self, item: "Item") -> bool:
        result = self._callback(item)
        return True if result is None else bool(result)


class ElementCollector(Visitor):
    """Collect every element with a given name, once, in visiting order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._seen: Dict[int, "Element"] = {}

    def visit(self, item: "Item") -> bool:
        if item.kind is NodeKind.ELEMENT and item.name == self.name:  # type: ignore[attr-defined]
            self._seen.setdefault(id(item), item)  # type: ignore[arg-type]
        return True

    @property
    def elements(self) -> List["Element"]:
        """Matched elements in pre-order."""
        return list(self._seen.values())


VisitorLike = Union[Visitor, Callable[["Item"], object]]


def as_visitor(visitor: VisitorLike) -> Visitor:
    """Return ``visitor`` unchanged, or wrap a bare callable.

    Objects with their own ``visit(item)`` are accepted without subclassing
    ``Visitor``. Document items also have a ``visit`` method, but theirs takes
    a visitor, so they are refused here.
    """
    if isinstance(visitor, Visitor):
        return visitor
    if isinstance(getattr(visitor, "kind", None), NodeKind):
        raise TypeError(
            f"{type(visitor).__name__} is a document item, not a visitor"
        )
    if hasattr(visitor, "visit"):
        return visitor  # type: ignore[return-value]
    if callable(visitor):
        return CallbackVisitor(visitor)
    raise TypeError("visitor must implement visit(item) or be callable")
