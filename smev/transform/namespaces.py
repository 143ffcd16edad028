from lxml.etree import QName

ALGORITHM_URN = "urn://smev-gov-ru/xmldsig/transform"

ENCODING = "utf-8"

# Synthesized prefixes are PREFIX_STEM + counter, counter starting at 1
PREFIX_STEM = "ns"
FIRST_PREFIX_INDEX = 1


def split_tag(tag: str) -> tuple:
    """Split an lxml Clark-notation tag into (namespace, local name)."""
    name = QName(tag)
    return name.namespace, name.localname
