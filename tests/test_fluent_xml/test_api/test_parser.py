"""Tests for the parsing entry points and round-trip stability."""

import io
import logging
from pathlib import Path
from xml.dom import minidom
from xml.parsers.expat import ExpatError

import pytest

from fluent_xml import (
    ConversionFailureError,
    Document,
    UnsupportedInputError,
    parse,
    parse_file,
    parse_string,
    serialize_dom,
)

SAMPLE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    "<!-- note -->\n"
    "<person>\n"
    "  <first-name>Bob</first-name>\n"
    "</person>\n"
)


def build_navigation_document() -> Document:
    doc = Document()
    doc.comment("This is the structure for a person")
    person = doc.create_root("person")
    person.e("first-name", "Bob")
    person.e("last-name").set_text("Jones")
    person.comment("This is the structure for addresses")
    addresses = person.e("addresses")
    home = addresses.e("address").set_attribute("location", "Home")
    home.e("address", "100 Main St")
    home.e("city", "Richmond")
    home.e("zip", "23233")
    work = addresses.e("address").set_attributes("location", "Work", "note", "<M & M>")
    work.e("city", "Another Place")
    work.e("empty")
    addresses.cdata("This is a cdata section! <test> of cdata!")
    return doc


class TestParseString:
    """Test parsing markup text."""

    def test_parse_sample(self) -> None:
        """Test the sample document parses into the expected tree."""
        doc = parse_string(SAMPLE)

        assert doc.declaration.version == "1.0"
        assert doc.declaration.encoding == "UTF-8"
        assert doc.children[1].text == "note"
        assert doc.root.child_text("first-name") == "Bob"
        assert doc.root.document() is doc

    def test_bytes_input(self) -> None:
        """Test bytes are accepted as markup."""
        doc = parse_string(b"<a><b>1</b></a>")

        assert doc.root.child_text("b") == "1"

    def test_malformed_input_wrapped(self) -> None:
        """Test parser failures surface as ConversionFailureError."""
        with pytest.raises(ConversionFailureError, match="provided string") as excinfo:
            parse_string("<a><b></a>")

        assert isinstance(excinfo.value.__cause__, ExpatError)
        assert excinfo.value.source == "string"

    def test_unsupported_node_propagates(self) -> None:
        """Test well-formed input with a processing instruction is rejected."""
        with pytest.raises(UnsupportedInputError):
            parse_string("<a><?pi x?></a>")

    def test_rejects_non_text(self) -> None:
        """Test only str and bytes are accepted."""
        with pytest.raises(TypeError):
            parse_string(42)  # type: ignore[arg-type]

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a wrapped failure is logged with its component."""
        with caplog.at_level(logging.ERROR, logger="fluent_xml.api.parser"):
            with pytest.raises(ConversionFailureError):
                parse_string("<unclosed>")

        record = caplog.records[-1]
        assert record.getMessage() == "XML parser failed"
        assert record.component == "parse"

    def test_preview_logged_only_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the input preview record depends on the debug level."""
        with caplog.at_level(logging.INFO, logger="fluent_xml.api.parser"):
            parse_string("<a/>")
        assert not [r for r in caplog.records if r.getMessage() == "Parsing string input"]

        caplog.clear()
        with caplog.at_level(logging.DEBUG, logger="fluent_xml.api.parser"):
            parse_string("<a/>", correlation_id="req-7")

        record = next(r for r in caplog.records if r.getMessage() == "Parsing string input")
        assert record.preview == "<a/>"
        assert record.length == 4
        assert record.correlation_id == "req-7"


class TestRoundTrip:
    """Test serialize -> parse -> serialize is stable."""

    def test_sample_round_trip(self) -> None:
        """Test the sample text survives parse and re-serialization."""
        assert str(parse_string(SAMPLE)) == SAMPLE

    def test_built_document_round_trip(self) -> None:
        """Test a document with comments, CDATA and escapes is stable."""
        text = str(build_navigation_document())

        first = parse_string(text)
        second = parse_string(str(first))

        assert str(first) == text
        assert str(second) == text

    def test_empty_text_child_settles_after_one_pass(self) -> None:
        """Test an empty sole text child reparses as a self-closing element."""
        doc = Document()
        doc.create_root("a").set_text("")
        first = str(doc)

        second = str(parse_string(first))
        third = str(parse_string(second))

        assert first.endswith("<a></a>\n")
        assert second.endswith("<a />\n")
        assert third == second

    def test_queries_after_round_trip(self) -> None:
        """Test navigation works the same on the parsed copy."""
        doc = parse_string(str(build_navigation_document()))

        assert len(doc.root.descendants("address")) == 3
        assert doc.root.descendants_text("city") == ["Richmond", "Another Place"]
        work = doc.root.child("addresses").find_children("address")[1]
        assert work.get("note") == "<M & M>"


class TestOtherSources:
    """Test files, paths and readers."""

    def test_parse_file(self, tmp_path: Path) -> None:
        """Test parsing a file path."""
        path = tmp_path / "person.xml"
        path.write_text(SAMPLE, encoding="utf-8")

        assert str(parse_file(path)) == SAMPLE
        assert str(parse_file(str(path))) == SAMPLE

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unreadable file is wrapped."""
        with pytest.raises(ConversionFailureError) as excinfo:
            parse_file(tmp_path / "missing.xml")

        assert isinstance(excinfo.value.__cause__, OSError)

    def test_parse_dispatch(self, tmp_path: Path) -> None:
        """Test parse() routes markup, paths and readers."""
        path = tmp_path / "a.xml"
        path.write_text("<a/>", encoding="utf-8")

        assert parse("<a/>").root.name == "a"
        assert parse(path).root.name == "a"
        assert parse(io.StringIO("<a/>")).root.name == "a"
        assert parse(io.BytesIO(b"<a/>")).root.name == "a"

    def test_parse_unknown_type(self) -> None:
        """Test unsupported input types are refused."""
        with pytest.raises(TypeError, match="Unsupported input type"):
            parse(3.5)  # type: ignore[arg-type]


class TestSerializeDom:
    """Test the reference serializer wrapper."""

    def test_matches_minidom(self) -> None:
        """Test it returns minidom's own output."""
        dom = minidom.parseString("<a><b>x</b></a>")

        assert serialize_dom(dom) == dom.toxml()

    def test_failure_wrapped(self) -> None:
        """Test serializer errors are wrapped."""
        dom = minidom.parseString("<a/>")
        dom.documentElement.appendChild(dom.createComment("bad -- comment"))

        with pytest.raises(ConversionFailureError):
            serialize_dom(dom)
