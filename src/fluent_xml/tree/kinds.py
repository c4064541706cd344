"""Closed set of node kinds understood by the writer, visitor and bridges."""

from enum import Enum, auto


class NodeKind(Enum):
    """Tag carried by every item class."""

    DOCUMENT = auto()
    DECLARATION = auto()
    ELEMENT = auto()
    TEXT = auto()
    CDATA = auto()
    COMMENT = auto()
