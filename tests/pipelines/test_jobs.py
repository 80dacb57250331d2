"""Tests for the host-facing product mapping jobs."""

import asyncio
import uuid

import httpx
import pytest

from catalog_ingest.core import config
from catalog_ingest.core.schema import JobArguments, RunOutcome
from catalog_ingest.parsers import PayloadFormat
from catalog_ingest.pipelines.fetch import HttpFetcher
from catalog_ingest.pipelines.jobs import ProductMapperJob, create_jobs


def _arguments(**job_configuration):
    return JobArguments(dataset_id=uuid.uuid4(), api_key="my-api-key", job_configuration=job_configuration)


@pytest.mark.asyncio
async def test_execute_returns_terminal_message(sample_json_payload, make_fetcher, reporter):
    job = ProductMapperJob("json", fetcher=make_fetcher(sample_json_payload))

    message = await job.execute(_arguments(), reporter.info, reporter.warn)

    assert message == "Successfully mapped 2 products."
    assert job.last_summary.succeeded_count == 2
    assert [p.id for p in job.last_summary.products] == ["P1", "P2"]


@pytest.mark.asyncio
async def test_execute_uses_configured_feed_url(make_fetcher, reporter):
    fetcher = make_fetcher(b"<rss/>")
    await ProductMapperJob(PayloadFormat.XML, fetcher=fetcher).execute(_arguments(), reporter.info, reporter.warn)
    assert fetcher.requested == [config.CATALOG_XML_FEED_URL]


@pytest.mark.asyncio
async def test_job_configuration_overrides_url_and_logging(sample_text_payload, make_fetcher, reporter):
    fetcher = make_fetcher(sample_text_payload)
    job = ProductMapperJob("text", fetcher=fetcher)

    await job.execute(
        _arguments(url="https://mirror.example.com/raw", log_mapped_products="false"),
        reporter.info,
        reporter.warn,
    )

    assert fetcher.requested == ["https://mirror.example.com/raw"]
    assert reporter.infos == ["Product data downloaded successfully."]


@pytest.mark.asyncio
async def test_execute_never_raises_on_http_failure(reporter):
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    job = ProductMapperJob("json", fetcher=HttpFetcher(client=client))

    message = await job.execute(_arguments(), reporter.info, reporter.warn)
    await client.aclose()

    assert message.startswith("Failed to download data: ")
    assert job.last_summary.outcome == RunOutcome.TRANSPORT_ERROR
    assert reporter.warnings[0].startswith("HTTP request error: ")


@pytest.mark.asyncio
async def test_execute_cancelled(sample_json_payload, make_fetcher, reporter):
    cancel = asyncio.Event()
    cancel.set()
    job = ProductMapperJob("json", fetcher=make_fetcher(sample_json_payload))

    message = await job.execute(_arguments(), reporter.info, reporter.warn, cancel)

    assert job.last_summary.outcome == RunOutcome.CANCELLED
    assert not message.startswith("Successfully")


def test_create_jobs_covers_every_format():
    jobs = create_jobs()
    assert set(jobs) == set(PayloadFormat)
    assert all(job.payload_format == payload_format for payload_format, job in jobs.items())
