"""
XML event model shared by the reader, the canonicalizer and the writer.

Events mirror a pull-parser stream: a document is a flat, ordered sequence of
start/end markers, character data and the attribute/namespace events that
follow an output start tag.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .namespaces import split_tag


@dataclass(frozen=True)
class QualifiedName:
    """(namespace URI, local name) with an optional serialization prefix.

    An empty namespace string means the same as no namespace.
    """

    namespace: Optional[str]
    local_name: str
    prefix: str = ""

    @classmethod
    def from_tag(cls, tag: str) -> "QualifiedName":
        namespace, local_name = split_tag(tag)
        return cls(namespace or None, local_name)

    @property
    def has_namespace(self) -> bool:
        return bool(self.namespace)

    @property
    def prefixed(self) -> str:
        if self.prefix:
            return f"{self.prefix}:{self.local_name}"
        return self.local_name


@dataclass(frozen=True)
class StartDocument:
    pass


@dataclass(frozen=True)
class EndDocument:
    pass


@dataclass(frozen=True)
class Attribute:
    name: QualifiedName
    value: str


@dataclass(frozen=True)
class Namespace:
    prefix: str
    uri: str


@dataclass(frozen=True)
class StartElement:
    name: QualifiedName
    attributes: Tuple[Attribute, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EndElement:
    name: QualifiedName


@dataclass(frozen=True)
class Characters:
    data: str


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class ProcessingInstruction:
    target: str
    data: str = ""


Event = Union[
    StartDocument,
    EndDocument,
    StartElement,
    EndElement,
    Characters,
    Attribute,
    Namespace,
    Comment,
    ProcessingInstruction,
]
