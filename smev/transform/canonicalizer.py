"""
Scope-stack canonicalizer for the SMEV XML-signature transform.

The canonicalizer rewrites a parsed event stream so that documents differing
only in prefix spelling, attribute order or whitespace-only text produce the
same output events:

1. Whitespace-only character data is dropped; other text passes unchanged.
2. Every namespace gets a synthesized prefix ``ns1``, ``ns2``, ... declared
   on the shallowest element where it is first used and reused by all
   descendants while that element is open.
3. Attributes are sorted: namespaced before unqualified, namespaced by
   (URI, local name), unqualified by local name.
4. Comments, processing instructions and standalone attribute or namespace
   events are never emitted.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from .errors import UnboundNamespaceError
from .events import (
    Attribute,
    Characters,
    EndDocument,
    EndElement,
    Event,
    Namespace,
    QualifiedName,
    StartDocument,
    StartElement,
)
from .namespaces import FIRST_PREFIX_INDEX, PREFIX_STEM
from .validators import require_namespace

logger = logging.getLogger(__name__)

# Blank means only control characters and space, U+0000 to U+0020
_TRIMMABLE = "".join(chr(code) for code in range(0x21))


def is_significant_text(data: str) -> bool:
    """True when character data has content besides leading/trailing blanks."""
    return bool(data.strip(_TRIMMABLE))


def _code_units(text: str) -> bytes:
    # Big-endian UTF-16 bytes compare in the same order as UTF-16 code units
    return text.encode("utf-16-be", "surrogatepass")


def attribute_sort_key(attribute: Attribute) -> tuple:
    """Sort key placing namespaced attributes first, by (URI, local name)."""
    name = attribute.name
    if name.has_namespace:
        return (0, _code_units(name.namespace), _code_units(name.local_name))
    return (1, b"", _code_units(name.local_name))


class ScopeStack:
    """One list of namespace bindings per open element.

    Each list holds only the bindings introduced by that element; inherited
    bindings are found by searching the enclosing scopes.
    """

    def __init__(self):
        self._scopes: List[List[Namespace]] = []

    def __len__(self) -> int:
        return len(self._scopes)

    def push(self) -> List[Namespace]:
        scope: List[Namespace] = []
        self._scopes.append(scope)
        return scope

    def pop(self) -> List[Namespace]:
        return self._scopes.pop()

    def find_prefix(self, uri: str) -> Optional[str]:
        for scope in reversed(self._scopes):
            for binding in scope:
                if binding.uri == uri:
                    return binding.prefix
        return None


class Canonicalizer:
    """Single-use canonicalizer: owns one scope stack and one prefix counter.

    Create a new instance for every document; :func:`canonicalize` does this.
    """

    def __init__(self):
        self._scopes = ScopeStack()
        self._prefix_index = FIRST_PREFIX_INDEX

    def process(self, event: Event) -> List[Event]:
        """Return the output events for one input event.

        The whole result for an event is computed before it is returned, so a
        failure never leaves half of an element's output behind.
        """
        if isinstance(event, Characters):
            return [event] if is_significant_text(event.data) else []
        if isinstance(event, StartElement):
            return self._start_element(event)
        if isinstance(event, EndElement):
            return self._end_element(event)
        if isinstance(event, (StartDocument, EndDocument)):
            return [event]
        # Attributes are handled with their start element only
        return []

    def _next_prefix(self) -> str:
        prefix = f"{PREFIX_STEM}{self._prefix_index}"
        self._prefix_index += 1
        return prefix

    def _resolve(self, uri: str, scope: List[Namespace]) -> str:
        prefix = self._scopes.find_prefix(uri)
        if prefix is None:
            prefix = self._next_prefix()
            scope.append(Namespace(prefix, uri))
            logger.debug("Bound %s to %s at depth %d", prefix, uri, len(self._scopes))
        return prefix

    def _start_element(self, event: StartElement) -> List[Event]:
        scope = self._scopes.push()

        uri = require_namespace(event.name)
        prefix = self._resolve(uri, scope)
        start = StartElement(QualifiedName(uri, event.name.local_name, prefix))

        attributes = []
        for attribute in sorted(event.attributes, key=attribute_sort_key):
            name = attribute.name
            if name.has_namespace:
                attribute_prefix = self._resolve(name.namespace, scope)
                name = QualifiedName(name.namespace, name.local_name, attribute_prefix)
            else:
                name = QualifiedName(None, name.local_name)
            attributes.append(Attribute(name, attribute.value))

        return [start, *scope, *attributes]

    def _end_element(self, event: EndElement) -> List[Event]:
        uri = require_namespace(event.name)
        prefix = self._scopes.find_prefix(uri)
        if prefix is None:
            raise UnboundNamespaceError(uri, event.name.local_name)

        self._scopes.pop()
        # The empty marker closes any still-open start tag, so the writer
        # always produces an explicit end tag
        return [
            Characters(""),
            EndElement(QualifiedName(uri, event.name.local_name, prefix)),
        ]


def canonicalize(events: Iterable[Event]) -> Iterator[Event]:
    """
    Canonicalize an XML event stream.

    Args:
        events: Parse events in document order, each start element carrying
            its attributes

    Yields:
        Canonical output events: start elements followed by their namespace
        declarations and sorted attributes, significant text, and end
        elements preceded by an empty ``Characters`` marker

    Raises:
        MissingNamespaceError: An element has no namespace URI
        UnboundNamespaceError: An end element does not match an open scope

    Example:
        >>> from smev.transform.events import QualifiedName, StartElement, EndElement
        >>> name = QualifiedName("urn:x", "Foo")
        >>> [type(e).__name__ for e in canonicalize([StartElement(name), EndElement(name)])]
        ['StartElement', 'Namespace', 'Characters', 'EndElement']
    """
    canonicalizer = Canonicalizer()
    for event in events:
        yield from canonicalizer.process(event)
