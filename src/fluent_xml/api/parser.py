"""Parsing entry points built on ``xml.dom.minidom``.

The parser itself is an external collaborator: markup is turned into a DOM
tree by ``minidom`` and then converted with ``from_dom``. Any failure inside
the parser is wrapped in ``ConversionFailureError``; unsupported node kinds in
otherwise well-formed input raise ``UnsupportedInputError`` from the bridge.
"""

import logging
import time
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional, TextIO, Union
from xml.dom import DOMException, minidom
from xml.parsers.expat import ExpatError

from fluent_xml.shared import (
    ConversionFailureError,
    DomConfig,
    get_logger,
)
from fluent_xml.tree.nodes import Document

from .bridge import from_dom

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, TextIO, Path]

# Constants for API operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000

_PARSER_ERRORS = (ExpatError, DOMException, OSError, UnicodeError)


def _build(
    load: Callable[[], Any],
    source: str,
    config: Optional[DomConfig],
    correlation_id: Optional[str]
) -> Document:
    """Run the DOM parser, then convert its output into a Document."""
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "parse")

    try:
        dom_document = load()
    except _PARSER_ERRORS as e:
        logger.error(
            "XML parser failed",
            extra={"source": source, "error_type": type(e).__name__},
        )
        raise ConversionFailureError(
            f"Failed to parse a document from the provided {source}: {e}",
            source=source,
        ) from e

    try:
        document = Document.from_dom(dom_document, config)
    finally:
        dom_document.unlink()

    logger.info(
        "Parsed document",
        extra={
            "source": source,
            "root": document.root.name if document.root is not None else None,
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
        },
    )
    return document


def parse_string(
    xml_string: Union[str, bytes],
    config: Optional[DomConfig] = None,
    correlation_id: Optional[str] = None
) -> Document:
    """Parse a document from markup text.

    Args:
        xml_string: XML content as string or bytes
        config: DOM conversion options
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The parsed Document

    Raises:
        ConversionFailureError: If the markup is not well-formed.
        UnsupportedInputError: If it contains e.g. a processing instruction.

    Examples:
        >>> doc = parse_string('<person><first-name>Mike</first-name></person>')
        >>> doc.root.child_text('first-name')
        'Mike'
    """
    if not isinstance(xml_string, (str, bytes)):
        raise TypeError("xml_string must be str or bytes")
    logger = get_logger(__name__, correlation_id, "parse_string")
    if logger.is_enabled_for(logging.DEBUG):
        logger.debug(
            "Parsing string input",
            extra={"preview": xml_string[:PREVIEW_LENGTH], "length": len(xml_string)},
        )
    return _build(
        lambda: minidom.parseString(xml_string), "string", config, correlation_id
    )


def parse_file(
    file_path: Union[str, Path],
    config: Optional[DomConfig] = None,
    correlation_id: Optional[str] = None
) -> Document:
    """Parse a document from a file on disk.

    Raises:
        ConversionFailureError: If the file can't be read or isn't well-formed.
    """
    path = Path(file_path)
    return _build(
        lambda: minidom.parse(str(path)), f"file {path}", config, correlation_id
    )


def parse(
    input_data: InputType,
    config: Optional[DomConfig] = None,
    correlation_id: Optional[str] = None
) -> Document:
    """Parse a document from markup, a ``Path`` or a file-like object.

    A ``str`` is always treated as markup, never as a file name; pass a
    ``Path`` or use ``parse_file`` for files.
    """
    if isinstance(input_data, (str, bytes)):
        return parse_string(input_data, config, correlation_id)
    if isinstance(input_data, Path):
        return parse_file(input_data, config, correlation_id)
    if hasattr(input_data, "read"):
        return _build(
            lambda: minidom.parse(input_data), "reader", config, correlation_id
        )
    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def serialize_dom(dom_node: Any, correlation_id: Optional[str] = None) -> str:
    """Serialize a DOM tree with ``minidom``'s own writer.

    Used to cross-check this package's conversions against the reference
    serializer.
    """
    try:
        return dom_node.toxml()
    except (DOMException, ValueError, TypeError) as e:
        get_logger(__name__, correlation_id, "serialize_dom").error(
            "DOM serializer failed", extra={"error_type": type(e).__name__}
        )
        raise ConversionFailureError(f"Failed to serialize DOM tree: {e}") from e
