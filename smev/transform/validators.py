from .errors import MissingNamespaceError, TransformationError
from .events import QualifiedName


def require_namespace(name: QualifiedName) -> str:
    """Return the namespace URI of an element name, failing if it has none."""
    if not name.has_namespace:
        raise MissingNamespaceError(name.local_name)
    return name.namespace


def validate_octets(data) -> bytes:
    """
    Gate for transform input.
    The transform consumes exactly these bytes.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("XML must be bytes")

    if not data:
        raise TransformationError("Empty XML", msg_id="transform.emptyInput")

    return bytes(data)
