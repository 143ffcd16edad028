"""
The urn://smev-gov-ru/xmldsig/transform signature transform.

Hosts select a transform by its URI and call :meth:`TransformSpi.perform_transform`
with the octets of the signed reference; :class:`SmevTransform` parses them,
canonicalizes the event stream and serializes the result as UTF-8.
"""

import io
import logging
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from lxml import etree

from ..config import TransformSettings
from .canonicalizer import canonicalize
from .errors import CanonicalizationError, TransformationError
from .namespaces import ALGORITHM_URN
from .reader import XMLEventReader
from .serializer import XMLEventWriter
from .validators import validate_octets

logger = logging.getLogger(__name__)


class SignatureInput:
    """Octets flowing between signature transforms."""

    def __init__(self, data: bytes):
        self._data = validate_octets(data)

    @property
    def octets(self) -> bytes:
        return self._data

    def get_octet_stream(self) -> BinaryIO:
        return io.BytesIO(self._data)


class TransformSpi(ABC):
    """Contract a signature transform implements for its host registry."""

    @abstractmethod
    def get_uri(self) -> str:
        """Return the algorithm URI the transform is registered under."""

    @abstractmethod
    def perform_transform(self, signature_input: SignatureInput) -> SignatureInput:
        """Transform ``signature_input`` and return the result."""


class SmevTransform(TransformSpi):
    """SMEV canonicalizing transform.

    Instances hold configuration only; every call builds its own reader,
    writer and canonicalizer, so one instance can serve concurrent calls.
    """

    def __init__(self, settings: Optional[TransformSettings] = None):
        self.settings = settings or TransformSettings()

    def get_uri(self) -> str:
        return ALGORITHM_URN

    def perform_transform(self, signature_input: SignatureInput) -> SignatureInput:
        result = io.BytesIO()
        self.process(signature_input.get_octet_stream(), result)
        return SignatureInput(result.getvalue())

    def process(self, src: BinaryIO, dst: BinaryIO) -> None:
        """
        Canonicalize the XML document read from ``src`` into ``dst``.

        Both streams belong to the caller and stay open. The event reader and
        writer created here are released on every exit path.

        Args:
            src: Binary stream with a UTF-8 XML document
            dst: Binary stream receiving the canonical form

        Raises:
            TransformationError: The document is malformed, has an element
                without a namespace, or reading/writing failed. Anything
                already written to ``dst`` must be discarded.
        """
        count = 0
        try:
            with XMLEventReader(
                src,
                chunk_size=self.settings.read_chunk_size,
                huge_tree=self.settings.huge_tree,
            ) as reader, XMLEventWriter(dst) as writer:
                for event in canonicalize(reader):
                    writer.add(event)
                    count += 1
        except etree.XMLSyntaxError as e:
            raise TransformationError(
                f"Malformed XML: {e}", msg_id="transform.malformedInput"
            ) from e
        except CanonicalizationError as e:
            raise TransformationError(str(e), msg_id="transform.invalidOutput") from e
        except OSError as e:
            raise TransformationError(f"I/O failure: {e}", msg_id="transform.io") from e

        logger.debug("Canonicalized document into %d events", count)


def transform_bytes(data: bytes, settings: Optional[TransformSettings] = None) -> bytes:
    """
    Return the canonical form of an XML document.

    Example:
        >>> transform_bytes(b'<a:Foo xmlns:a="urn:x"> <a:Bar/> </a:Foo>')
        b'<ns1:Foo xmlns:ns1="urn:x"><ns1:Bar></ns1:Bar></ns1:Foo>'
    """
    transform = SmevTransform(settings)
    return transform.perform_transform(SignatureInput(data)).octets
