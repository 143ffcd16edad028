"""
UTF-8 byte serializer for XML events.

A start tag is left open after ``StartElement`` so that the following
``Namespace`` and ``Attribute`` events land inside it. Character data (even
empty) or a nested start closes it with ``>``; an ``EndElement`` arriving
while it is still open produces ``/>``. No XML declaration is written.
"""

from typing import BinaryIO
from xml.sax.saxutils import escape

from .errors import CanonicalizationError
from .events import (
    Attribute,
    Characters,
    EndElement,
    Event,
    Namespace,
    StartElement,
)
from .namespaces import ENCODING

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def escape_text(data: str) -> str:
    return escape(data)


def escape_attribute(value: str) -> str:
    return escape(value, _ATTRIBUTE_ENTITIES)


class XMLEventWriter:
    """Write events to a binary stream owned by the caller."""

    def __init__(self, stream: BinaryIO, encoding: str = ENCODING):
        self._stream = stream
        self._encoding = encoding
        self._open_elements = []
        self._tag_open = False
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _write(self, text: str):
        self._stream.write(text.encode(self._encoding))

    def _close_start_tag(self):
        if self._tag_open:
            self._write(">")
            self._tag_open = False

    def _write_attribute(self, attribute: Attribute):
        self._write(f' {attribute.name.prefixed}="{escape_attribute(attribute.value)}"')

    def add(self, event: Event):
        if self._closed:
            raise CanonicalizationError("Writer is closed")

        if isinstance(event, StartElement):
            self._close_start_tag()
            self._write(f"<{event.name.prefixed}")
            for attribute in event.attributes:
                self._write_attribute(attribute)
            self._open_elements.append(event.name.prefixed)
            self._tag_open = True

        elif isinstance(event, Namespace):
            if not self._tag_open:
                raise CanonicalizationError(f"Namespace {event.prefix} outside of a start tag")
            self._write(f' xmlns:{event.prefix}="{escape_attribute(event.uri)}"')

        elif isinstance(event, Attribute):
            if not self._tag_open:
                raise CanonicalizationError(f"Attribute {event.name.prefixed} outside of a start tag")
            self._write_attribute(event)

        elif isinstance(event, Characters):
            self._close_start_tag()
            if event.data:
                self._write(escape_text(event.data))

        elif isinstance(event, EndElement):
            if not self._open_elements:
                raise CanonicalizationError(f"End tag {event.name.prefixed} without an open element")
            self._open_elements.pop()
            if self._tag_open:
                self._write("/>")
                self._tag_open = False
            else:
                self._write(f"</{event.name.prefixed}>")

        # Document boundaries, comments and processing instructions are not written

    def flush(self):
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()

    def close(self):
        if self._closed:
            return
        self._closed = True
        self.flush()
