"""Base reader interface and the table-driven lookup helpers."""

from abc import ABC, abstractmethod
from decimal import Decimal

from lxml import etree

from ..core.exceptions import MalformedDocumentError
from ..core.models import BillingDocument
from ..mappings.base import Locator
from ..utils.formatting import parse_decimal


def parse_xml(xml: str | bytes) -> etree._Element:
    """
    Parse an XML payload and return its root element.

    Entity expansion and network access are disabled; the payload must be
    self-contained.

    Raises:
        MalformedDocumentError: If the payload is not well-formed XML.
    """
    if isinstance(xml, str):
        # lxml refuses str input that carries an encoding declaration
        xml = xml.encode("utf-8")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
    try:
        root = etree.fromstring(xml, parser)
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(f"XML parsing error: {e}") from e
    if root is None:
        raise MalformedDocumentError("XML parsing error: document has no root element")
    return root


class BaseReader(ABC):
    """
    Abstract base class for wire format readers.

    Subclasses walk their format's mapping table; the lookups below only
    know about locators and namespaces.
    """

    namespaces: dict[str, str] = {}

    @abstractmethod
    def read(self, xml: str | bytes) -> BillingDocument:
        """
        Parse an XML document into the canonical model.

        Args:
            xml: Complete XML document as text or UTF-8 bytes

        Returns:
            BillingDocument holding every mapped field found in the document
        """
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the name of the wire format."""
        pass

    def _nodes(self, context: etree._Element, locator: Locator) -> list[etree._Element]:
        return context.xpath(locator.xpath, namespaces=self.namespaces)

    def _node(self, context: etree._Element | None, locator: Locator) -> etree._Element | None:
        if context is None:
            return None
        found = self._nodes(context, locator)
        return found[0] if found else None

    def _text(self, context: etree._Element | None, locator: Locator) -> str | None:
        """
        Return the value at ``locator``, or None when the element is absent.

        For attribute locators the attribute of the leaf element is returned.
        A present but empty element yields an empty string.
        """
        node = self._node(context, locator)
        if node is None:
            return None
        if locator.attribute:
            return node.get(locator.attribute)
        return node.text or ""

    def _decimal(self, context: etree._Element | None, locator: Locator) -> Decimal | None:
        return parse_decimal(self._text(context, locator))
