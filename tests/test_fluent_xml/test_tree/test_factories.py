"""Tests for nested-call document construction."""

import pytest

from fluent_xml.shared import StructuralStateError
from fluent_xml.tree import (
    Comment,
    Text,
    attr,
    cdata,
    comment,
    declaration,
    document,
    element,
    text,
)


class TestElementFactory:
    """Test element() content handling."""

    def test_mixed_content(self) -> None:
        """Test strings, attributes and nodes are routed correctly."""
        address = element(
            "address",
            attr("location", "Home"),
            element("address", "100 Main St."),
            element("city", "Richmond"),
        )

        assert address.get("location") == "Home"
        assert address.child_text("city") == "Richmond"
        assert len(address.children) == 2

    def test_repeated_attribute_replaces(self) -> None:
        """Test a later attribute of the same name wins."""
        node = element("a", attr("k", "1"), attr("k", "2"))

        assert [a.value for a in node.attributes] == ["2"]

    def test_leaf_factories(self) -> None:
        """Test text, cdata and comment factories build detached nodes."""
        node = element("a", text("t"), cdata("c"), comment("n"), None)

        assert [type(child).__name__ for child in node.children] == ["Text", "CDATA", "Comment"]
        assert isinstance(node.children[0], Text)

    def test_unsupported_content(self) -> None:
        """Test other objects are rejected."""
        with pytest.raises(TypeError, match="Unsupported element content"):
            element("a", 3)  # type: ignore[arg-type]


class TestDocumentFactory:
    """Test document() assembly."""

    def test_building_example(self) -> None:
        """Test the comment plus nested person example renders as expected."""
        doc = document(
            comment("This is the structure for a person"),
            element("person",
                element("first-name", "Mike"),
                element("addresses",
                    element("address", attr("location", "Home"),
                        element("city", "Richmond")),
                ),
            ),
        )

        assert isinstance(doc.children[1], Comment)
        assert doc.root.name == "person"
        assert str(doc) == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<!-- This is the structure for a person -->\n"
            "<person>\n"
            "  <first-name>Mike</first-name>\n"
            "  <addresses>\n"
            '    <address location="Home">\n'
            "      <city>Richmond</city>\n"
            "    </address>\n"
            "  </addresses>\n"
            "</person>\n"
        )

    def test_explicit_declaration_replaces_default(self) -> None:
        """Test a declaration argument takes the first slot."""
        doc = document(declaration("1.1", None), element("a"))

        assert doc.declaration.version == "1.1"
        assert str(doc) == '<?xml version="1.1"?>\n<a />\n'

    def test_second_root_rejected(self) -> None:
        """Test two elements can't both be the root."""
        with pytest.raises(StructuralStateError):
            document(element("a"), element("b"))

    def test_top_level_text_rejected(self) -> None:
        """Test bare text isn't accepted at the top level."""
        with pytest.raises(TypeError, match="Unsupported top-level item"):
            document(text("loose"))
