"""Configuration classes for serialization and DOM conversion.

Both objects are plain validated dataclasses; the defaults reproduce the
canonical output format, so most callers never construct one explicitly.
"""

from dataclasses import dataclass, replace

_ALLOWED_NEWLINES = ("\n", "\r\n")


@dataclass(frozen=True)
class WriterConfig:
    """Configuration for the pretty-printing writer."""

    indent: str = "  "       # Emitted once per depth level
    newline: str = "\n"      # Line terminator after each rendered line

    def __post_init__(self) -> None:
        """Validate writer configuration."""
        if self.indent.strip(" \t"):
            raise ValueError("indent must contain only spaces or tabs")
        if self.newline not in _ALLOWED_NEWLINES:
            raise ValueError("newline must be '\\n' or '\\r\\n'")

    def with_indent(self, indent: str) -> "WriterConfig":
        """Return a copy using a different indentation unit."""
        return replace(self, indent=indent)


@dataclass(frozen=True)
class DomConfig:
    """Configuration for conversion to and from DOM trees."""

    # Drop whitespace-only text that sits beside element, comment or CDATA
    # siblings. Such text is pretty-print indentation, not content.
    strip_ignorable_whitespace: bool = True
    # Comments are written as "<!-- text -->"; one space of padding on each
    # side is added going to the DOM and removed coming back.
    pad_comments: bool = True


DEFAULT_WRITER_CONFIG = WriterConfig()
DEFAULT_DOM_CONFIG = DomConfig()
