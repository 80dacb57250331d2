"""
Product mapping jobs.

One job per feed format, each exposing the host-facing entry point:

    message = await job.execute(arguments, info, warn, cancel_event)

``execute`` returns the terminal message; the structured RunSummary of the
latest run is kept on ``job.last_summary``.
"""

import asyncio
import logging
from typing import Dict, Optional, Union

from catalog_ingest.core import config
from catalog_ingest.core.schema import JobArguments, RunSummary
from catalog_ingest.parsers import FormatParser, PayloadFormat, get_parser
from catalog_ingest.pipelines.fetch import Fetcher
from catalog_ingest.pipelines.pipeline import IngestionPipeline
from catalog_ingest.pipelines.reporting import CallbackReporter, MessageCallback

logger = logging.getLogger(__name__)

# Job configuration keys understood by ProductMapperJob
URL_KEY = "url"
LOG_MAPPED_PRODUCTS_KEY = "log_mapped_products"


class ProductMapperJob:
    """Map one catalog feed format to canonical products."""

    def __init__(
        self,
        payload_format: Union[PayloadFormat, str],
        fetcher: Optional[Fetcher] = None,
        parser: Optional[FormatParser] = None,
    ):
        self.parser = parser or get_parser(payload_format)
        self.payload_format = self.parser.payload_format
        self.fetcher = fetcher
        self.last_summary: Optional[RunSummary] = None

    def source_location(self, arguments: JobArguments) -> str:
        return arguments.job_configuration.get(URL_KEY) or config.feed_url_for(self.payload_format)

    def _log_mapped_products(self, arguments: JobArguments) -> Optional[bool]:
        value = arguments.job_configuration.get(LOG_MAPPED_PRODUCTS_KEY)
        if value is None:
            return None
        return value.strip().lower() in ("1", "true", "yes", "on")

    async def execute(
        self,
        arguments: JobArguments,
        info: MessageCallback,
        warn: MessageCallback,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """
        Run the job and return its terminal message.

        Args:
            arguments: Job context (dataset id, api key, configuration)
            info: Async callback for informational messages
            warn: Async callback for warnings
            cancel_event: Set to cancel the run
        """
        logger.debug(f"Executing {self.payload_format.value} job for dataset {arguments.dataset_id}")

        pipeline = IngestionPipeline(
            self.parser,
            fetcher=self.fetcher,
            reporter=CallbackReporter(info, warn),
            log_mapped_products=self._log_mapped_products(arguments),
        )
        self.last_summary = await pipeline.run(self.source_location(arguments), cancel_event)
        return self.last_summary.message


def create_jobs(fetcher: Optional[Fetcher] = None) -> Dict[PayloadFormat, ProductMapperJob]:
    """One job per supported feed format."""
    return {payload_format: ProductMapperJob(payload_format, fetcher=fetcher) for payload_format in PayloadFormat}
