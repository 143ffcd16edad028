"""Unit tests for the lxml-backed XML event reader."""

import io

import pytest
from lxml import etree

from smev.transform.events import (
    Attribute,
    Characters,
    Comment,
    EndDocument,
    EndElement,
    ProcessingInstruction,
    QualifiedName,
    StartDocument,
    StartElement,
)
from smev.transform.reader import XMLEventReader

DOCUMENT = (
    b'<?xml version="1.0" encoding="UTF-8"?>'
    b'<a xmlns="urn:x" xmlns:p="urn:p" p:k="v" plain="1">'
    b"x &amp; y<!-- c --><?pi data?>tail"
    b"</a>"
)


def read_all(data: bytes, **kwargs):
    with XMLEventReader(io.BytesIO(data), **kwargs) as reader:
        return list(reader)


class TestXMLEventReader:
    """Tests for XMLEventReader event production."""

    def test_produces_events_in_document_order(self):
        events = read_all(DOCUMENT)

        assert events[0] == StartDocument()
        assert isinstance(events[1], StartElement)
        assert events[1].name == QualifiedName("urn:x", "a")
        assert events[2:] == [
            Characters("x & y"),
            Comment(" c "),
            ProcessingInstruction("pi", "data"),
            Characters("tail"),
            EndElement(QualifiedName("urn:x", "a")),
            EndDocument(),
        ]

    def test_start_element_carries_attributes(self):
        start = read_all(DOCUMENT)[1]
        assert set(start.attributes) == {
            Attribute(QualifiedName("urn:p", "k"), "v"),
            Attribute(QualifiedName(None, "plain"), "1"),
        }

    def test_namespace_declarations_are_not_attributes(self):
        start = read_all(DOCUMENT)[1]
        assert all(a.name.local_name not in ("xmlns", "p") for a in start.attributes)

    def test_small_chunks_yield_the_same_events(self):
        assert read_all(DOCUMENT, chunk_size=1) == read_all(DOCUMENT)

    def test_text_split_by_entities_is_one_event(self):
        events = read_all(b'<a xmlns="urn:x">1 &lt; 2 &amp;&amp; 3 &gt; 2</a>', chunk_size=3)
        assert Characters("1 < 2 && 3 > 2") in events
        assert sum(isinstance(e, Characters) for e in events) == 1

    def test_attribute_entities_are_expanded(self):
        start = read_all(b'<a xmlns="urn:x" k="a &amp; b &lt;&#38;&#x41;"/>')[1]
        assert start.attributes == (Attribute(QualifiedName(None, "k"), "a & b <&A"),)

    def test_decodes_utf8(self):
        text = "Привет, СМЭВ"
        events = read_all(f'<a xmlns="urn:x">{text}</a>'.encode("utf-8"))
        assert Characters(text) in events

    def test_element_without_namespace_has_none(self):
        events = read_all(b"<root/>")
        assert events[1] == StartElement(QualifiedName(None, "root"))

    def test_malformed_document_raises(self):
        with pytest.raises(etree.XMLSyntaxError):
            read_all(b'<a xmlns="urn:x"><b></a>')

    def test_empty_document_raises(self):
        with pytest.raises(etree.XMLSyntaxError):
            read_all(b"")

    def test_rejects_non_positive_chunk_size(self):
        with pytest.raises(ValueError):
            XMLEventReader(io.BytesIO(DOCUMENT), chunk_size=0)

    def test_closed_reader_cannot_be_iterated(self):
        reader = XMLEventReader(io.BytesIO(DOCUMENT))
        reader.close()
        with pytest.raises(ValueError):
            list(reader)

    def test_close_leaves_source_open(self):
        source = io.BytesIO(DOCUMENT)
        with XMLEventReader(source) as reader:
            list(reader)
        assert not source.closed
