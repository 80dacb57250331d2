"""Core infrastructure: configuration, schema, errors, price normalization, assembly."""

from catalog_ingest.core.assembler import assemble_product
from catalog_ingest.core.errors import (
    CatalogIngestError,
    ConfigurationError,
    FieldFormatError,
    IngestionCancelled,
    PriceFormatError,
    StructuralParseError,
    TransportError,
)
from catalog_ingest.core.pricing import normalize_price
from catalog_ingest.core.schema import (
    CanonicalProduct,
    IntermediateProduct,
    JobArguments,
    Money,
    RunOutcome,
    RunSummary,
    SkippedRow,
)

__all__ = [
    "assemble_product",
    "normalize_price",
    "CatalogIngestError",
    "ConfigurationError",
    "FieldFormatError",
    "IngestionCancelled",
    "PriceFormatError",
    "StructuralParseError",
    "TransportError",
    "CanonicalProduct",
    "IntermediateProduct",
    "JobArguments",
    "Money",
    "RunOutcome",
    "RunSummary",
    "SkippedRow",
]
