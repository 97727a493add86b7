"""
XML Helpers — Small lxml utilities shared by request builders and the response parser.

Reading is namespace-agnostic: elements are matched on their local name, so a
response carrying the eBLBaseComponents namespace and a hand-written fixture
without it are read the same way. Missing elements map to zero values
("" / 0 / False / Decimal("0")), mirroring how the API omits empty fields.

Writing always qualifies elements with the Shopping API namespace.
"""

from decimal import Decimal, InvalidOperation
from typing import List, Optional

from lxml import etree

from .constants import XML_NAMESPACE

# Hardened parser: no DTD entity expansion, no network access
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def parse_xml(body: bytes) -> etree._Element:
    """Parse an XML document and return its root element.

    Raises:
        lxml.etree.XMLSyntaxError: If the body is not well-formed XML.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    return etree.fromstring(body, parser=_PARSER)


def qualified(name: str) -> str:
    """Return the Clark-notation tag for a Shopping API element."""
    return f"{{{XML_NAMESPACE}}}{name}"


def new_root(name: str) -> etree._Element:
    """Create a root element declaring the Shopping API namespace as default."""
    return etree.Element(qualified(name), nsmap={None: XML_NAMESPACE})


def add_element(parent: etree._Element, name: str, text: Optional[str] = None,
                **attrib) -> etree._Element:
    """Append a namespaced child element, optionally with text and attributes."""
    element = etree.SubElement(parent, qualified(name), **attrib)
    if text is not None:
        element.text = text
    return element


def to_bytes(root: etree._Element) -> bytes:
    """Serialize a document with a leading XML declaration, UTF-8 encoded."""
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8")


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def children(parent: Optional[etree._Element], name: str) -> List[etree._Element]:
    """All direct children of parent whose local name is name."""
    if parent is None:
        return []
    return [
        child for child in parent
        if isinstance(child.tag, str) and etree.QName(child).localname == name
    ]


def child(parent: Optional[etree._Element], name: str) -> Optional[etree._Element]:
    """First direct child of parent with the given local name, or None."""
    found = children(parent, name)
    return found[0] if found else None


def text_of(element: Optional[etree._Element]) -> str:
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def get_text(parent: Optional[etree._Element], name: str) -> str:
    return text_of(child(parent, name))


def get_texts(parent: Optional[etree._Element], name: str) -> List[str]:
    """Text of every repeated child element (e.g. ShipsTo, PictureURL)."""
    return [text_of(element) for element in children(parent, name)]


def parse_int(value: str) -> int:
    return int(value) if value else 0


def parse_float(value: str) -> float:
    return float(value) if value else 0.0


def parse_decimal(value: str) -> Decimal:
    if not value:
        return Decimal("0")
    try:
        return Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Not a decimal value: {value!r}")


def parse_bool(value: str) -> bool:
    """Parse an xs:boolean ("true"/"false"/"1"/"0"); empty means False."""
    lowered = value.lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0", ""):
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


def get_int(parent: Optional[etree._Element], name: str) -> int:
    return parse_int(get_text(parent, name))


def get_float(parent: Optional[etree._Element], name: str) -> float:
    return parse_float(get_text(parent, name))


def get_bool(parent: Optional[etree._Element], name: str) -> bool:
    return parse_bool(get_text(parent, name))


def format_bool(value: bool) -> str:
    return "true" if value else "false"
