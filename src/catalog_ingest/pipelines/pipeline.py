"""
Ingestion Pipeline
==================

Drives one run end to end:

    fetch -> parse -> (normalize prices -> assemble) per record -> RunSummary

Records are handled one at a time in source order so info/warning messages
line up with row positions. Every failure is turned into a RunSummary; the
only thing that escapes ``run`` is cancellation of the calling task itself.

Usage:
    from catalog_ingest.parsers import JsonFeedParser
    from catalog_ingest.pipelines.pipeline import IngestionPipeline

    summary = await IngestionPipeline(JsonFeedParser()).run(url)
    print(summary.message)
"""

import asyncio
import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from catalog_ingest.core import config
from catalog_ingest.core.assembler import assemble_product
from catalog_ingest.core.errors import (
    IngestionCancelled,
    PriceFormatError,
    StructuralParseError,
    TransportError,
)
from catalog_ingest.core.pricing import ZERO, normalize_price
from catalog_ingest.core.schema import (
    CanonicalProduct,
    IntermediateProduct,
    RunOutcome,
    RunSummary,
    SkippedRow,
)
from catalog_ingest.parsers.base import FormatParser, Payload, PayloadFormat, PriceFailurePolicy
from catalog_ingest.pipelines.fetch import Fetcher, HttpFetcher
from catalog_ingest.pipelines.reporting import LoggingReporter, Reporter

logger = logging.getLogger(__name__)

# Warning prefix for a structural parse failure, per format
PARSE_ERROR_WARNINGS = {
    PayloadFormat.JSON: "JSON deserialization error",
    PayloadFormat.XML: "XML parsing error",
    PayloadFormat.TEXT: "Text parsing error",
}


class _RunLog:
    """Forwards messages to the reporter and keeps the run's warnings in order."""

    def __init__(self, reporter: Reporter):
        self.reporter = reporter
        self.warnings: List[str] = []

    async def info(self, message: str) -> None:
        await self.reporter.info(message)

    async def warn(self, message: str) -> None:
        self.warnings.append(message)
        await self.reporter.warn(message)


class IngestionPipeline:
    """
    Fetch a catalog feed and normalize it into canonical products.

    Args:
        parser: Format parser for the feed's wire format
        fetcher: Fetch collaborator (defaults to HttpFetcher)
        reporter: Info/warning sink (defaults to LoggingReporter)
        log_mapped_products: Emit one info message per product
            (defaults to config.LOG_MAPPED_PRODUCTS)
    """

    def __init__(
        self,
        parser: FormatParser,
        fetcher: Optional[Fetcher] = None,
        reporter: Optional[Reporter] = None,
        log_mapped_products: Optional[bool] = None,
    ):
        self.parser = parser
        self.fetcher = fetcher or HttpFetcher()
        self.reporter = reporter or LoggingReporter()
        self.log_mapped_products = (
            config.LOG_MAPPED_PRODUCTS if log_mapped_products is None else log_mapped_products
        )

    # =========================================================================
    # Run
    # =========================================================================

    async def run(
        self,
        source_location: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> RunSummary:
        """
        Execute one ingestion run.

        Args:
            source_location: Where to fetch the payload from
            cancel_event: Set to request cancellation. Honoured while the
                download is in flight and between records.

        Returns:
            RunSummary describing the outcome
        """
        log = _RunLog(self.reporter)
        logger.debug(f"Starting {self.parser!r} run for {source_location}")

        try:
            try:
                payload = await self._fetch(source_location, cancel_event)
            except TransportError as e:
                await log.warn(f"HTTP request error: {e.message}")
                return self._summary(log, RunOutcome.TRANSPORT_ERROR, f"Failed to download data: {e.message}")

            await log.info("Product data downloaded successfully.")

            try:
                products, record_count = await self._process(payload, log, cancel_event)
            except StructuralParseError as e:
                prefix = PARSE_ERROR_WARNINGS.get(self.parser.payload_format, "Parsing error")
                await log.warn(f"{prefix}: {e.message}")
                return self._summary(
                    log, RunOutcome.PARSE_ERROR, f"Failed to parse {self.parser.label} data: {e.message}"
                )

            if record_count == 0:
                await log.warn(f"No products found in the {self.parser.label} data.")
                return self._summary(
                    log, RunOutcome.NO_PRODUCTS, "Failed to deserialize products: No products found."
                )

            return self._summary(
                log,
                RunOutcome.SUCCESS,
                f"Successfully mapped {len(products)} products.",
                products=products,
            )

        except IngestionCancelled as e:
            if e.stage == "download":
                await log.warn("Download cancelled.")
                return self._summary(log, RunOutcome.CANCELLED, f"Failed to download data: {e.message}")
            await log.warn("Processing cancelled.")
            return self._summary(log, RunOutcome.CANCELLED, f"Failed to process data: {e.message}")

        except Exception as e:
            logger.exception(f"Unexpected error while ingesting {source_location}")
            message = str(e) or type(e).__name__
            try:
                await log.warn(f"Unexpected error: {message}")
            except Exception:
                # Failing reporter; the summary still carries the warning
                logger.exception("Reporter failed while reporting an unexpected error")
            return self._summary(log, RunOutcome.UNEXPECTED_ERROR, f"Failed to process data: {message}")

    # =========================================================================
    # Steps
    # =========================================================================

    async def _fetch(self, source_location: str, cancel_event: Optional[asyncio.Event]) -> Payload:
        """Fetch the payload, racing it against the cancellation signal."""
        if cancel_event is None:
            return await self.fetcher.fetch(source_location)
        if cancel_event.is_set():
            raise IngestionCancelled("download")

        fetch_task = asyncio.ensure_future(self.fetcher.fetch(source_location))
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({fetch_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (fetch_task, cancel_task):
                if not task.done():
                    task.cancel()

        if cancel_event.is_set():
            # Outcome of the abandoned download is discarded
            await asyncio.gather(fetch_task, return_exceptions=True)
            raise IngestionCancelled("download")
        await asyncio.gather(cancel_task, return_exceptions=True)
        return fetch_task.result()

    async def _process(
        self,
        payload: Payload,
        log: _RunLog,
        cancel_event: Optional[asyncio.Event],
    ) -> Tuple[List[CanonicalProduct], int]:
        """Parse the payload and assemble every usable record, in order."""
        products: List[CanonicalProduct] = []
        record_count = 0

        for event in self.parser.parse(payload):
            if cancel_event is not None and cancel_event.is_set():
                raise IngestionCancelled("processing")

            if isinstance(event, SkippedRow):
                await log.warn(event.reason)
                continue

            record_count += 1
            prices = await self._normalize_prices(event, log)
            if prices is None:
                continue

            sales_price, list_price = prices
            product = assemble_product(event, sales_price, list_price)
            products.append(product)

            if self.log_mapped_products:
                await log.info(
                    f"Mapped product ID: {product.id}, Name: {product.display_name_text()}, "
                    f"List Price: {product.list_price}, Sale Price: {product.sales_price}"
                )

        return products, record_count

    async def _normalize_prices(
        self,
        record: IntermediateProduct,
        log: _RunLog,
    ) -> Optional[Tuple[Decimal, Decimal]]:
        """
        Normalize the sales/list price pair of a record.

        Returns None when the record must be dropped.
        """
        markers = self.parser.currency_markers

        if self.parser.price_failure_policy == PriceFailurePolicy.DROP_RECORD:
            try:
                return (
                    normalize_price(record.sales_price_text, markers),
                    normalize_price(record.list_price_text, markers),
                )
            except PriceFormatError as e:
                await log.warn(f"Error parsing prices for row '{record.source_text}': {e.message}")
                return None

        prices = []
        for text in (record.sales_price_text, record.list_price_text):
            try:
                prices.append(normalize_price(text, markers))
            except PriceFormatError:
                product_id = record.product_id or config.UNKNOWN_PRODUCT_ID
                await log.warn(f"Invalid price '{text}' for product {product_id}; using 0.")
                prices.append(ZERO)
        return prices[0], prices[1]

    @staticmethod
    def _summary(
        log: _RunLog,
        outcome: RunOutcome,
        message: str,
        products: Optional[List[CanonicalProduct]] = None,
    ) -> RunSummary:
        products = products or []
        return RunSummary(
            outcome=outcome,
            message=message,
            succeeded_count=len(products),
            products=products,
            warnings=list(log.warnings),
        )
