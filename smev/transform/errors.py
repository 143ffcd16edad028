"""Failure types reported by the transform to its host."""

from typing import Optional


class XMLSecurityError(Exception):
    """Base class for signature-pipeline failures.

    ``msg_id`` is an optional machine-readable identifier the host can map
    onto its own error catalogue.
    """

    def __init__(self, message: str = "", msg_id: Optional[str] = None):
        super().__init__(message or msg_id or "Missing message string")
        self._msg_id = msg_id

    @property
    def msg_id(self) -> str:
        if self._msg_id is None:
            return "Missing message ID"
        return self._msg_id


class CanonicalizationError(XMLSecurityError):
    """The output event sequence cannot be serialized."""


class TransformationError(XMLSecurityError):
    """The transform failed; any output already written is unusable."""


class MissingNamespaceError(TransformationError):
    """An element carries no namespace URI."""

    def __init__(self, local_name: str):
        super().__init__(
            f"No namespace elements are not supported: <{local_name}>",
            msg_id="transform.missingNamespace",
        )
        self.local_name = local_name


class UnboundNamespaceError(TransformationError):
    """An end element refers to a namespace with no binding in scope."""

    def __init__(self, namespace: str, local_name: str):
        super().__init__(
            f"Namespace {namespace!r} of </{local_name}> is not bound in any open scope",
            msg_id="transform.unboundNamespace",
        )
        self.namespace = namespace
        self.local_name = local_name
