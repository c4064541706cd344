"""Exception types raised by the fluent XML document model.

Every error raised on purpose by this package derives from ``FluentXMLError``
so callers can catch the whole family with a single ``except`` clause.
"""

from typing import Optional


class FluentXMLError(Exception):
    """Base class for all fluent XML errors."""


class StructuralStateError(FluentXMLError):
    """Raised when an operation's precondition on tree shape is violated.

    Examples are creating a second root element, reading ``text`` from an
    element with several children, or an ambiguous ``child(name)`` lookup.
    """


class UnsupportedInputError(FluentXMLError, ValueError):
    """Raised when external input contains a node kind the model cannot hold."""

    def __init__(self, message: str, node_type: Optional[str] = None) -> None:
        super().__init__(message)
        self.node_type = node_type


class ConversionFailureError(FluentXMLError):
    """Raised when the external parser or DOM implementation itself fails.

    The original exception is always chained as ``__cause__``.
    """

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source
