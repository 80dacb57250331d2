"""Assembly of canonical products from intermediate records."""

from decimal import Decimal

from catalog_ingest.core import config
from catalog_ingest.core.schema import CanonicalProduct, IntermediateProduct, Money


def assemble_product(
    record: IntermediateProduct,
    sales_price: Decimal,
    list_price: Decimal,
) -> CanonicalProduct:
    """
    Build a canonical product from a parsed record and its normalized prices.

    A missing or empty id falls back to the unknown-id sentinel. The name is kept
    verbatim under the display language, absent or not.
    """
    return CanonicalProduct(
        id=record.product_id or config.UNKNOWN_PRODUCT_ID,
        display_name={config.DISPLAY_LANGUAGE: record.product_name},
        list_price=Money(config.PRICE_CURRENCY, list_price),
        sales_price=Money(config.PRICE_CURRENCY, sales_price),
    )
