"""Shared utilities for the fluent XML document model.

This module provides the error taxonomy, configuration objects and logging
helpers used across the tree and api layers.
"""

from .config import (
    DEFAULT_DOM_CONFIG,
    DEFAULT_WRITER_CONFIG,
    DomConfig,
    WriterConfig,
)
from .errors import (
    ConversionFailureError,
    FluentXMLError,
    StructuralStateError,
    UnsupportedInputError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DEFAULT_DOM_CONFIG",
    "DEFAULT_WRITER_CONFIG",
    "DomConfig",
    "WriterConfig",
    "ConversionFailureError",
    "FluentXMLError",
    "StructuralStateError",
    "UnsupportedInputError",
    "CorrelationLogger",
    "get_logger",
]
