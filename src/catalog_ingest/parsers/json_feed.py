"""
JSON feed parser.

The feed is one array of product objects:

    [{"productId": "P1", "productName": "Widget",
      "salesPrice": "$9.99", "listPrice": "$12.00"}, ...]

Every key is optional and may be null. The array is read in one go.

Numeric values are also accepted (``"productId": 42``, ``"salesPrice": 9.99``)
and kept as their exact source text, so ``9.990`` stays ``"9.990"``. Booleans,
objects and arrays in a product field are a structural error.
"""

import json
import logging
from typing import Any, Dict, Iterator, Optional

from catalog_ingest.core.errors import StructuralParseError
from catalog_ingest.core.schema import IntermediateProduct
from catalog_ingest.parsers.base import FormatParser, ParseEvent, Payload, PayloadFormat, PriceFailurePolicy

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "productId": "product_id",
    "productName": "product_name",
    "salesPrice": "sales_price_text",
    "listPrice": "list_price_text",
}


class JsonFeedParser(FormatParser):
    """Parser for the custom JSON product feed."""

    payload_format = PayloadFormat.JSON
    label = "JSON"
    currency_markers = frozenset({"$"})
    price_failure_policy = PriceFailurePolicy.FALLBACK_TO_ZERO

    def parse(self, payload: Payload) -> Iterator[ParseEvent]:
        text = self.decode(payload)
        try:
            # Numbers are kept as their source text so prices stay exact
            document = json.loads(text, parse_float=str, parse_int=str)
        except json.JSONDecodeError as e:
            raise StructuralParseError(str(e), self.payload_format.value)

        if document is None:
            return iter(())
        if not isinstance(document, list):
            raise StructuralParseError(
                f"Expected a JSON array of products, got {type(document).__name__}",
                self.payload_format.value,
            )

        logger.debug(f"JSON feed holds {len(document)} entries")
        products = [self._to_record(entry, index) for index, entry in enumerate(document)]
        return iter(products)

    def _to_record(self, entry: Any, index: int) -> IntermediateProduct:
        if not isinstance(entry, dict):
            raise StructuralParseError(
                f"Product at index {index} is not a JSON object",
                self.payload_format.value,
            )

        values: Dict[str, Optional[str]] = {}
        for key, attr in FIELD_MAP.items():
            values[attr] = self._string_field(entry.get(key), key, index)
        return IntermediateProduct(**values)

    def _string_field(self, value: Any, key: str, index: int) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        raise StructuralParseError(
            f"Product at index {index}: '{key}' must be a string, got {type(value).__name__}",
            self.payload_format.value,
        )
