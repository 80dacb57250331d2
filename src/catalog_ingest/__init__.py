"""
catalog_ingest - Multi-format product catalog ingestion

Fetches a product catalog delivered as a JSON array, a namespaced XML
shopping feed or a pipe-delimited text table and normalizes every row into
a canonical product with exact decimal prices.
"""

__version__ = "1.0.0"

from catalog_ingest.core.schema import CanonicalProduct, RunOutcome, RunSummary
from catalog_ingest.parsers import PayloadFormat, get_parser
from catalog_ingest.pipelines.jobs import ProductMapperJob
from catalog_ingest.pipelines.pipeline import IngestionPipeline

__all__ = [
    "CanonicalProduct",
    "RunOutcome",
    "RunSummary",
    "PayloadFormat",
    "get_parser",
    "ProductMapperJob",
    "IngestionPipeline",
]
