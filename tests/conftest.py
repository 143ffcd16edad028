"""Shared builders and fixtures for transform tests."""

import pytest
from lxml import etree

from smev.transform import SmevTransform
from smev.transform.events import Attribute, QualifiedName

# =============================================================================
# Shared Test Constants
# =============================================================================

URN_X = "urn:x"
URN_Y = "urn:y"
SMEV_TYPES_NS = "urn://x-artefacts-smev-gov-ru/services/message-exchange/types/1.2"
DS_NS = "http://www.w3.org/2000/09/xmldsig#"
XML_NS = "http://www.w3.org/XML/1998/namespace"

EXPECTED_SIGNED_REQUEST = (
    b'<ns1:SendRequestRequest xmlns:ns1="' + SMEV_TYPES_NS.encode() + b'">'
    b'<ns1:SenderProvidedRequestData Id="SIGNED_BY_CONSUMER">'
    b"<ns1:MessageID>db0486d0-3c08-11e5-95e2-d4c9eff07b77</ns1:MessageID>"
    b"</ns1:SenderProvidedRequestData>"
    b'<ns2:Signature xmlns:ns2="http://www.w3.org/2000/09/xmldsig#">'
    b"<ns2:SignedInfo>"
    b'<ns2:CanonicalizationMethod Algorithm="http://www.w3.org/2001/10/xml-exc-c14n#">'
    b"</ns2:CanonicalizationMethod>"
    b"</ns2:SignedInfo>"
    b"<ns2:SignatureValue>  c2lnbmF0dXJl  </ns2:SignatureValue>"
    b"</ns2:Signature>"
    b"</ns1:SendRequestRequest>"
)

EXPECTED_FOO = (
    b'<ns1:Foo xmlns:ns1="urn:x" xmlns:ns2="urn:y" ns2:id="2" val="1">'
    b"<ns1:Bar></ns1:Bar>"
    b"</ns1:Foo>"
)


def qname(namespace, tag):
    return etree.QName(namespace, tag)


def ds(tag):
    return etree.QName(DS_NS, tag)


def name(namespace, local_name):
    return QualifiedName(namespace, local_name)


def attr(namespace, local_name, value):
    return Attribute(QualifiedName(namespace, local_name), value)


def build_foo(prefix_x="a", prefix_y="b", reverse_attributes=False, pretty=False) -> bytes:
    """Build <Foo> with one namespaced and one plain attribute and a <Bar/> child."""
    attributes = [(qname(URN_Y, "id").text, "2"), ("val", "1")]
    if reverse_attributes:
        attributes.reverse()

    root = etree.Element(qname(URN_X, "Foo"), nsmap={prefix_x: URN_X, prefix_y: URN_Y})
    for key, value in attributes:
        root.set(key, value)

    etree.SubElement(root, qname(URN_X, "Bar"))

    return etree.tostring(root, encoding="utf-8", pretty_print=pretty)


def build_signed_request(prefix="ds", pretty=False) -> bytes:
    """Build a request with a nested ds:Signature block and mixed text."""
    root = etree.Element(
        qname(SMEV_TYPES_NS, "SendRequestRequest"),
        nsmap={None: SMEV_TYPES_NS, prefix: DS_NS},
    )
    content = etree.SubElement(root, qname(SMEV_TYPES_NS, "SenderProvidedRequestData"), Id="SIGNED_BY_CONSUMER")
    etree.SubElement(content, qname(SMEV_TYPES_NS, "MessageID")).text = "db0486d0-3c08-11e5-95e2-d4c9eff07b77"

    signature = etree.SubElement(root, ds("Signature"))
    signed_info = etree.SubElement(signature, ds("SignedInfo"))
    etree.SubElement(
        signed_info,
        ds("CanonicalizationMethod"),
        Algorithm="http://www.w3.org/2001/10/xml-exc-c14n#",
    )
    etree.SubElement(signature, ds("SignatureValue")).text = "  c2lnbmF0dXJl  "

    return etree.tostring(root, encoding="utf-8", pretty_print=pretty)


@pytest.fixture
def transform():
    return SmevTransform()
