"""
Streaming XML event reader built on an lxml parser target.

The reader feeds the source in chunks to an ``lxml.etree.XMLParser`` whose
target records parse callbacks as events, then hands them out in document
order. Consecutive character data callbacks are merged into a single
``Characters`` event so a text node is never split at entity or buffer
boundaries.

Predefined and internal DTD entities are expanded; external entities and
network access are blocked.
"""

from collections import deque
from typing import BinaryIO, Iterator

from lxml import etree

from .events import (
    Attribute,
    Characters,
    Comment,
    EndDocument,
    EndElement,
    Event,
    ProcessingInstruction,
    QualifiedName,
    StartDocument,
    StartElement,
)
from .namespaces import ENCODING

DEFAULT_CHUNK_SIZE = 64 * 1024


class _EventCollector:
    """lxml parser target turning SAX-style callbacks into events."""

    def __init__(self):
        self.events = deque()
        self._text = []

    def _flush_text(self):
        if self._text:
            self.events.append(Characters("".join(self._text)))
            self._text = []

    def start(self, tag, attrib):
        self._flush_text()
        attributes = tuple(
            Attribute(QualifiedName.from_tag(key), value) for key, value in attrib.items()
        )
        self.events.append(StartElement(QualifiedName.from_tag(tag), attributes))

    def end(self, tag):
        self._flush_text()
        self.events.append(EndElement(QualifiedName.from_tag(tag)))

    def data(self, data):
        self._text.append(data)

    def comment(self, text):
        self._flush_text()
        self.events.append(Comment(text))

    def pi(self, target, data=None):
        self._flush_text()
        self.events.append(ProcessingInstruction(target, data or ""))

    def close(self):
        self._flush_text()
        self.events.append(EndDocument())


class XMLEventReader:
    """
    Pull events from a UTF-8 XML byte stream.

    The caller keeps ownership of ``source``; :meth:`close` releases the
    parser only.

    Example:
        >>> import io
        >>> with XMLEventReader(io.BytesIO(b'<a xmlns="urn:x"/>')) as reader:
        ...     [type(event).__name__ for event in reader]
        ['StartDocument', 'StartElement', 'EndElement', 'EndDocument']
    """

    def __init__(self, source: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE, huge_tree: bool = False):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self._source = source
        self._chunk_size = chunk_size
        self._collector = _EventCollector()
        self._parser = etree.XMLParser(
            target=self._collector,
            encoding=ENCODING,
            resolve_entities="internal",
            no_network=True,
            huge_tree=huge_tree,
            remove_comments=False,
            remove_pis=False,
        )
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __iter__(self) -> Iterator[Event]:
        if self._closed:
            raise ValueError("Reader is closed")

        yield StartDocument()

        while True:
            chunk = self._source.read(self._chunk_size)
            if not chunk:
                break
            self._parser.feed(chunk)
            yield from self._drain()

        self._parser.close()
        yield from self._drain()

    def _drain(self) -> Iterator[Event]:
        events = self._collector.events
        while events:
            yield events.popleft()

    def close(self):
        if self._closed:
            return
        self._closed = True
        self._collector.events.clear()
        self._parser = None
