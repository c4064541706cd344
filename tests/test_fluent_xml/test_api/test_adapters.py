"""Tests for the library integration adapters."""

from typing import Any

import pytest

from fluent_xml.api.adapters import (
    AdapterRegistry,
    IntegrationAdapter,
    LxmlAdapter,
    MinidomAdapter,
    from_lxml,
    get_adapter,
    list_available_adapters,
    to_lxml,
)
from fluent_xml.shared import UnsupportedInputError
from fluent_xml.tree import (
    CDATA,
    Comment,
    Document,
    Element,
    Item,
    Text,
)

etree = pytest.importorskip("lxml.etree")


class EchoAdapter(IntegrationAdapter):
    """Adapter returning its input, for registry tests."""

    name = "echo"

    def is_available(self) -> bool:
        return True

    def to_target(self, item: Item) -> Any:
        return item

    def from_target(self, target_data: Any) -> Any:
        return target_data


class TestRegistry:
    """Test adapter lookup."""

    def test_builtin_adapters_available(self) -> None:
        """Test minidom and lxml adapters are registered."""
        assert isinstance(get_adapter("minidom"), MinidomAdapter)
        assert isinstance(get_adapter("lxml"), LxmlAdapter)
        assert {"minidom", "lxml"} <= set(list_available_adapters())

    def test_unknown_adapter(self) -> None:
        """Test an unknown name yields None."""
        assert get_adapter("nope") is None

    def test_register_custom_adapter(self) -> None:
        """Test a private registry accepts a new adapter class."""
        registry = AdapterRegistry()
        registry.register(EchoAdapter)

        adapter = registry.get_adapter("echo", correlation_id="req-1")

        assert isinstance(adapter, EchoAdapter)
        assert adapter.correlation_id == "req-1"

    def test_register_requires_name(self) -> None:
        """Test adapter classes must be named."""
        class Nameless(EchoAdapter):
            name = ""

        with pytest.raises(ValueError, match="must define a name"):
            AdapterRegistry().register(Nameless)

    def test_minidom_adapter_round_trip(self) -> None:
        """Test the minidom adapter delegates to the DOM bridge."""
        adapter = MinidomAdapter()
        element = Element("a", "x")

        back = adapter.from_target(adapter.to_target(element))

        assert str(back) == "<a>x</a>\n"


class TestToLxml:
    """Test model to lxml conversion."""

    def test_element_with_comment(self) -> None:
        """Test attributes, children and padded comments."""
        element = Element("a").set_attribute("x", "1")
        element.e("b", "t")
        element.comment("c")

        assert etree.tostring(to_lxml(element)) == b'<a x="1"><b>t</b><!-- c --></a>'

    def test_leading_cdata(self) -> None:
        """Test CDATA as first character data stays a CDATA block."""
        element = Element("a")
        element.cdata("x<y")

        assert etree.tostring(to_lxml(element)) == b"<a><![CDATA[x<y]]></a>"

    def test_text_after_child_goes_to_tail(self) -> None:
        """Test character data after a child becomes that child's tail."""
        element = Element("a")
        element.e("b")
        element.add_text("tail")
        element.cdata("+more")

        assert etree.tostring(to_lxml(element)) == b"<a><b/>tail+more</a>"

    def test_document_keeps_top_level_comments(self) -> None:
        """Test comments before and after the root are placed around it."""
        doc = Document()
        doc.comment("before")
        doc.create_root("root")
        doc.comment("after")

        tree = to_lxml(doc)
        root = tree.getroot()

        assert root.tag == "root"
        assert root.getprevious().text == " before "
        assert root.getnext().text == " after "

    def test_document_without_root_rejected(self) -> None:
        """Test lxml trees need a root element."""
        with pytest.raises(TypeError, match="root element"):
            to_lxml(Document())

    def test_bare_text_rejected(self) -> None:
        """Test a standalone text node has no lxml counterpart."""
        with pytest.raises(TypeError):
            to_lxml(Text("x"))


class TestFromLxml:
    """Test lxml to model conversion."""

    def test_text_and_tails(self) -> None:
        """Test text and tail slots become text nodes around children."""
        node = etree.fromstring('<a k="v">hi<b/>there<!-- c --></a>')

        element = from_lxml(node)

        assert element.get("k") == "v"
        assert [type(child) for child in element.children] == [Text, Element, Text, Comment]
        assert element.children[2].text == "there"
        assert element.children[3].text == "c"

    def test_ignorable_whitespace_stripped(self) -> None:
        """Test indentation text is dropped as with the DOM bridge."""
        node = etree.fromstring("<a>\n  <b>x</b>\n</a>")

        element = from_lxml(node)

        assert [child.name for child in element.children] == ["b"]

    def test_processing_instruction_rejected(self) -> None:
        """Test processing instructions are unsupported."""
        node = etree.fromstring("<a><?pi x?></a>")

        with pytest.raises(UnsupportedInputError):
            from_lxml(node)

    def test_element_tree_to_document(self) -> None:
        """Test an element tree converts to a document with its comments."""
        tree = etree.fromstring("<!-- note --><person><n>Bob</n></person>").getroottree()

        doc = from_lxml(tree)

        assert isinstance(doc, Document)
        assert doc.root.child_text("n") == "Bob"
        comments = [item for item in doc.children if isinstance(item, Comment)]
        assert [c.text for c in comments] == ["note"]

    def test_round_trip_through_lxml(self) -> None:
        """Test a built element survives to_lxml then from_lxml."""
        element = Element("a").set_attribute("k", "v")
        element.e("b", "x")
        element.comment("note")

        back = from_lxml(to_lxml(element))

        assert str(back) == str(element)
        assert not isinstance(back.children[-1], CDATA)
