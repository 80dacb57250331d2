"""
XML (Google Shopping style) feed parser.

Every ``item`` element anywhere in the document is one product. Fields are
direct children of the item; ``id``, ``price`` and ``sale_price`` live in the
Google base namespace while ``title`` is un-namespaced:

    <item>
      <g:id>P1</g:id>
      <title>Widget</title>
      <g:price>12.00 USD</g:price>
      <g:sale_price>9.99 USD</g:sale_price>
    </item>
"""

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, Optional

from catalog_ingest.core.errors import StructuralParseError
from catalog_ingest.core.schema import IntermediateProduct
from catalog_ingest.parsers.base import FormatParser, ParseEvent, Payload, PayloadFormat, PriceFailurePolicy

logger = logging.getLogger(__name__)

GOOGLE_BASE_NS = "http://base.google.com/ns/1.0"

ITEM_TAG = "item"
ID_TAG = f"{{{GOOGLE_BASE_NS}}}id"
TITLE_TAG = "title"
PRICE_TAG = f"{{{GOOGLE_BASE_NS}}}price"
SALE_PRICE_TAG = f"{{{GOOGLE_BASE_NS}}}sale_price"


def _child_text(item: ET.Element, tag: str) -> Optional[str]:
    """Text content of the first direct child with this tag, None if missing."""
    child = item.find(tag)
    if child is None:
        return None
    return "".join(child.itertext())


class XmlFeedParser(FormatParser):
    """Parser for the namespaced XML shopping feed."""

    payload_format = PayloadFormat.XML
    label = "XML"
    currency_markers = frozenset({"USD"})
    price_failure_policy = PriceFailurePolicy.FALLBACK_TO_ZERO

    def parse(self, payload: Payload) -> Iterator[ParseEvent]:
        try:
            # Bytes go straight to the parser so the XML declaration picks the encoding
            root = ET.fromstring(payload)
        except ET.ParseError as e:
            raise StructuralParseError(str(e), self.payload_format.value)

        products = [
            IntermediateProduct(
                product_id=_child_text(item, ID_TAG),
                product_name=_child_text(item, TITLE_TAG),
                list_price_text=_child_text(item, PRICE_TAG),
                sales_price_text=_child_text(item, SALE_PRICE_TAG),
            )
            for item in root.iter(ITEM_TAG)
        ]
        logger.debug(f"XML feed holds {len(products)} item elements")
        return iter(products)
