"""Base writer interface and element construction helpers."""

from abc import ABC, abstractmethod
from decimal import Decimal

from lxml import etree

from ..config import get_settings
from ..core.models import BillingDocument
from ..mappings.base import Locator
from ..utils.formatting import format_decimal


class BaseWriter(ABC):
    """
    Abstract base class for wire format writers.

    Elements are created from the same locators the readers use. A locator's
    intermediate steps are reused when the parent's last child already has
    that tag, so writing fields in schema order builds shared containers
    exactly once.
    """

    namespaces: dict[str, str] = {}

    def __init__(
        self,
        amount_min_decimal_places: int | None = None,
        pretty_print: bool | None = None,
    ):
        settings = get_settings()
        if amount_min_decimal_places is None:
            amount_min_decimal_places = settings.amount_min_decimal_places
        if pretty_print is None:
            pretty_print = settings.pretty_print

        self.amount_min_decimal_places = amount_min_decimal_places
        self.pretty_print = pretty_print

    @abstractmethod
    def write(self, document: BillingDocument) -> str:
        """
        Serialize a canonical document.

        Args:
            document: BillingDocument to serialize

        Returns:
            UTF-8 XML text including the XML declaration
        """
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the name of the wire format."""
        pass

    @property
    def file_extension(self) -> str:
        return "xml"

    @property
    def mime_type(self) -> str:
        return "application/xml"

    def _serialize(self, root: etree._Element) -> str:
        data = etree.tostring(
            root,
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=self.pretty_print,
        )
        return data.decode("utf-8")

    def _qname(self, step: str) -> str:
        prefix, _, local = step.partition(":")
        return f"{{{self.namespaces[prefix]}}}{local}"

    def _ensure_path(self, parent: etree._Element, steps: list[str], reuse: bool = True) -> etree._Element:
        for step in steps:
            tag = self._qname(step)
            if reuse and len(parent) and parent[-1].tag == tag:
                parent = parent[-1]
            else:
                parent = etree.SubElement(parent, tag)
        return parent

    def _ensure(self, parent: etree._Element, locator: Locator) -> etree._Element:
        """Return the container at ``locator``, creating it only if missing."""
        return self._ensure_path(parent, locator.steps)

    def _append(self, parent: etree._Element, locator: Locator, reuse: bool = True) -> etree._Element:
        """Create a new leaf element at ``locator``."""
        steps = locator.steps
        container = self._ensure_path(parent, steps[:-1], reuse=reuse)
        return etree.SubElement(container, self._qname(steps[-1]))

    def _put(
        self,
        parent: etree._Element,
        locator: Locator,
        value: str | None,
        reuse: bool = True,
        **attrs: str | None,
    ) -> etree._Element | None:
        """
        Write ``value`` at ``locator``; ``None`` values are omitted.

        Keyword arguments become attributes of the leaf, skipping ``None``.
        """
        if value is None:
            return None
        node = self._append(parent, locator, reuse=reuse)
        node.text = value
        for name, attr_value in attrs.items():
            if attr_value is not None:
                node.set(name, attr_value)
        return node

    def _amount(self, value: Decimal | None) -> str | None:
        if value is None:
            return None
        return format_decimal(value, self.amount_min_decimal_places)

    def _number(self, value: Decimal | None) -> str | None:
        if value is None:
            return None
        return format_decimal(value)
