"""
Call Base — Shared request-builder logic for every Shopping API operation.

Each operation subclasses ShoppingCall and declares:
  OPERATION  the Operation it issues
  FIELDS     an ordered table of CallField entries describing its wire elements

The base class turns that table into XML (get_body()), reads it back
(from_body()), exposes a plain-dict snapshot (to_dict()), and executes the call
(execute()) through the ShoppingHTTPClient bound at construction time.

Field kinds:
  TEXT              <Tag>value</Tag>
  INT               <Tag>42</Tag>
  BOOL              <Tag>true</Tag>
  SELECTORS         <Tag>Details,Variations</Tag>  (ordered set, comma-joined)
  REPEATED          <Tag>1</Tag><Tag>2</Tag>       (ordered set, one element per value)
  PRODUCT_ID        <Tag type="UPC">0123</Tag>
  NAME_VALUE_LISTS  <Tag><NameValueList><Name/><Value/>...</NameValueList>...</Tag>

Field presence: an unset field is None (or an empty collection) and is omitted.
Empty strings are omitted too. Fields marked required are always emitted, with
an empty element if nothing was set. Booleans and integers are emitted whenever
they were set, including False.

Every request carries the optional MessageID field, echoed back by the server as
CorrelationID.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from lxml import etree

from .constants import MAX_PAGE_VALUE, MIN_PAGE_VALUE, Operation
from .errors import SerializationFailed
from .models import NameValueList, ProductID, ResponseEnvelope
from .response_parser import ResponseParser
from .settings import ServiceConfig
from .shopping_client import ShoppingHTTPClient
from .xml_helpers import (
    add_element,
    child,
    children,
    format_bool,
    get_text,
    get_texts,
    local_name,
    new_root,
    parse_bool,
    parse_int,
    parse_xml,
    text_of,
    to_bytes,
)

logger = logging.getLogger(__name__)

TEXT = "text"
INT = "int"
BOOL = "bool"
SELECTORS = "selectors"
REPEATED = "repeated"
PRODUCT_ID = "product_id"
NAME_VALUE_LISTS = "name_value_lists"


def clamp_page_value(value: int) -> int:
    """Clamp a PageNumber/MaxEntries value into [1, 10000].

    >>> clamp_page_value(-5), clamp_page_value(42), clamp_page_value(50000)
    (1, 42, 10000)
    """
    return max(MIN_PAGE_VALUE, min(MAX_PAGE_VALUE, int(value)))


class OrderedValueSet:
    """Insertion-ordered set of strings.

    Adding a value that is already present is a no-op, so the serialized form
    keeps the order in which values were first seen.
    """

    def __init__(self, values: Iterable[str] = ()):
        self._values: Dict[str, None] = {}
        for value in values:
            self.add(value)

    def add(self, value: str) -> bool:
        """Add value; return True if it was not present before."""
        if value in self._values:
            return False
        self._values[value] = None
        return True

    def joined(self, separator: str = ",") -> str:
        return separator.join(self._values)

    @classmethod
    def from_joined(cls, text: str, separator: str = ",") -> "OrderedValueSet":
        return cls(part.strip() for part in text.split(separator) if part.strip())

    def __contains__(self, value) -> bool:
        return value in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, OrderedValueSet):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedValueSet({list(self._values)!r})"


@dataclass(frozen=True)
class CallField:
    """One wire element of a request.

    Attributes:
        tag: XML element name.
        attr: Attribute name on the request object.
        kind: One of the field kinds listed in the module docstring.
        required: Always emit the element, even when unset.
    """
    tag: str
    attr: str
    kind: str = TEXT
    required: bool = False


MESSAGE_ID_FIELD = CallField("MessageID", "message_id")


class ShoppingCall:
    """Base class for per-operation request builders.

    Attributes:
        config: ServiceConfig snapshot taken when the request was constructed.
        url: Endpoint the request is POSTed to.
        client: ShoppingHTTPClient carrying the headers for this operation.
        message_id: Optional MessageID, echoed back as CorrelationID.
    """

    OPERATION: Operation = None
    FIELDS: Tuple[CallField, ...] = ()

    def __init__(self, config: Optional[ServiceConfig] = None,
                 client: Optional[ShoppingHTTPClient] = None):
        self.config = config or ServiceConfig()
        self.url = self.config.endpoint
        self.client = client or ShoppingHTTPClient(self.config, self.OPERATION)
        for spec in self.all_fields():
            setattr(self, spec.attr, self._empty_value(spec))

    @classmethod
    def all_fields(cls) -> Tuple[CallField, ...]:
        return (MESSAGE_ID_FIELD,) + cls.FIELDS

    @staticmethod
    def _empty_value(spec: CallField):
        if spec.kind in (SELECTORS, REPEATED):
            return OrderedValueSet()
        if spec.kind == NAME_VALUE_LISTS:
            return []
        return None

    def with_message_id(self, message_id: str):
        """Set MessageID; the server returns the same value as CorrelationID."""
        self.message_id = message_id
        return self

    # -----------------------------------------------------------------------
    # Serialization
    # -----------------------------------------------------------------------

    def get_body(self) -> bytes:
        """Serialize the request into its XML document.

        Returns:
            UTF-8 bytes starting with an XML declaration, root element
            <{Operation}Request> in the Shopping API namespace.

        Raises:
            SerializationFailed: If a field value cannot be written as XML
                                 (e.g. control characters in a string).
        """
        try:
            root = new_root(self.OPERATION.request_root)
            for spec in self.all_fields():
                self._write_field(root, spec, getattr(self, spec.attr))
            return to_bytes(root)
        except (ValueError, TypeError) as e:
            raise SerializationFailed(
                f"Could not serialize {self.OPERATION.value} request: {e}",
                operation=self.OPERATION.value,
                cause=e,
            ) from e

    @staticmethod
    def _write_field(root: etree._Element, spec: CallField, value):
        if spec.kind == TEXT:
            if value:
                add_element(root, spec.tag, value)
            elif spec.required:
                add_element(root, spec.tag, "")
        elif spec.kind == INT:
            if value is not None:
                add_element(root, spec.tag, str(value))
        elif spec.kind == BOOL:
            if value is not None:
                add_element(root, spec.tag, format_bool(value))
        elif spec.kind == SELECTORS:
            if value:
                add_element(root, spec.tag, value.joined())
        elif spec.kind == REPEATED:
            for item in value:
                add_element(root, spec.tag, item)
        elif spec.kind == PRODUCT_ID:
            if value is not None:
                add_element(root, spec.tag, value.value, type=value.code_type)
        elif spec.kind == NAME_VALUE_LISTS:
            if value:
                container = add_element(root, spec.tag)
                for nvl in value:
                    entry = add_element(container, "NameValueList")
                    add_element(entry, "Name", nvl.name)
                    for item in nvl.values:
                        add_element(entry, "Value", item)

    # -----------------------------------------------------------------------
    # Deserialization
    # -----------------------------------------------------------------------

    @classmethod
    def from_body(cls, body: bytes, config: Optional[ServiceConfig] = None):
        """Rebuild a request object from a serialized request document.

        Used to inspect stored request bodies and to check that get_body()
        round-trips.

        Raises:
            SerializationFailed: If the body is not a well-formed request
                                 document for this operation.
        """
        operation = cls.OPERATION.value
        try:
            root = parse_xml(body)
        except etree.XMLSyntaxError as e:
            raise SerializationFailed(
                f"{operation} request is not well-formed XML: {e}", operation=operation, cause=e
            ) from e

        if local_name(root) != cls.OPERATION.request_root:
            raise SerializationFailed(
                f"Expected <{cls.OPERATION.request_root}> but got <{local_name(root)}>",
                operation=operation,
            )

        request = cls(config=config)
        try:
            for spec in cls.all_fields():
                request._read_field(root, spec)
        except ValueError as e:
            raise SerializationFailed(
                f"{operation} request has an invalid value: {e}", operation=operation, cause=e
            ) from e
        return request

    def _read_field(self, root: etree._Element, spec: CallField):
        element = child(root, spec.tag)
        if spec.kind == REPEATED:
            setattr(self, spec.attr, OrderedValueSet(get_texts(root, spec.tag)))
            return
        if element is None:
            return

        if spec.kind == TEXT:
            value = text_of(element)
            setattr(self, spec.attr, value if value or spec.required else None)
        elif spec.kind == INT:
            setattr(self, spec.attr, parse_int(text_of(element)))
        elif spec.kind == BOOL:
            setattr(self, spec.attr, parse_bool(text_of(element)))
        elif spec.kind == SELECTORS:
            setattr(self, spec.attr, OrderedValueSet.from_joined(text_of(element)))
        elif spec.kind == PRODUCT_ID:
            setattr(self, spec.attr, ProductID(
                code_type=element.get("type", ""), value=text_of(element)
            ))
        elif spec.kind == NAME_VALUE_LISTS:
            setattr(self, spec.attr, [
                NameValueList(name=get_text(nvl, "Name"), values=get_texts(nvl, "Value"))
                for nvl in children(element, "NameValueList")
            ])

    def to_dict(self) -> dict:
        """Plain snapshot of every wire field, keyed by attribute name."""
        snapshot = {}
        for spec in self.all_fields():
            value = getattr(self, spec.attr)
            if spec.kind in (SELECTORS, REPEATED):
                value = list(value)
            elif spec.kind == NAME_VALUE_LISTS:
                value = [asdict(nvl) for nvl in value]
            elif spec.kind == PRODUCT_ID and value is not None:
                value = asdict(value)
            snapshot[spec.attr] = value
        return snapshot

    # -----------------------------------------------------------------------
    # Builder helpers
    # -----------------------------------------------------------------------

    def _add_limited(self, target: OrderedValueSet, values: Iterable[str], limit: int,
                     field_name: str):
        """Add values to an ordered set, dropping new values past limit."""
        for value in values:
            if value in target:
                continue
            if len(target) >= limit:
                logger.warning(
                    "%s accepts at most %d %s values, ignoring %r",
                    self.OPERATION.value, limit, field_name, value,
                )
                continue
            target.add(value)

    # -----------------------------------------------------------------------
    # Execution
    # -----------------------------------------------------------------------

    def execute(self) -> ResponseEnvelope:
        """Serialize the request, POST it and parse the response.

        A request object may be executed more than once; every call serializes
        the current field values and performs a fresh HTTP call.

        Returns:
            The operation's response model. Check its ack and errors before
            trusting the payload.

        Raises:
            SerializationFailed: If the request or the response cannot be (de)serialized.
            TransportFailed: If the HTTP call could not be completed.
            RemoteCallFailed: If the server answered with a non-200 status.
        """
        body = self.get_body()
        raw = self.client.post(self.url, body)
        return ResponseParser().parse(self.OPERATION, raw)

    def __repr__(self) -> str:
        populated = {k: v for k, v in self.to_dict().items() if v not in (None, [], "")}
        return f"{type(self).__name__}({populated})"
