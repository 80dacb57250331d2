"""Pipeline orchestration: fetching, reporting, ingestion runs and jobs."""

from catalog_ingest.pipelines.fetch import Fetcher, FileFetcher, HttpFetcher
from catalog_ingest.pipelines.jobs import ProductMapperJob, create_jobs
from catalog_ingest.pipelines.pipeline import IngestionPipeline
from catalog_ingest.pipelines.reporting import CallbackReporter, LoggingReporter, Reporter

__all__ = [
    "Fetcher",
    "FileFetcher",
    "HttpFetcher",
    "IngestionPipeline",
    "ProductMapperJob",
    "create_jobs",
    "CallbackReporter",
    "LoggingReporter",
    "Reporter",
]
