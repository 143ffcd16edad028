"""Canonicalizing transform for SMEV XML signatures."""

from .canonicalizer import Canonicalizer, ScopeStack, attribute_sort_key, canonicalize
from .errors import (
    CanonicalizationError,
    MissingNamespaceError,
    TransformationError,
    UnboundNamespaceError,
    XMLSecurityError,
)
from .namespaces import ALGORITHM_URN
from .reader import XMLEventReader
from .serializer import XMLEventWriter
from .transform import SignatureInput, SmevTransform, TransformSpi, transform_bytes

__all__ = [
    "ALGORITHM_URN",
    "CanonicalizationError",
    "Canonicalizer",
    "MissingNamespaceError",
    "ScopeStack",
    "SignatureInput",
    "SmevTransform",
    "TransformSpi",
    "TransformationError",
    "UnboundNamespaceError",
    "XMLEventReader",
    "XMLEventWriter",
    "XMLSecurityError",
    "attribute_sort_key",
    "canonicalize",
    "transform_bytes",
]
