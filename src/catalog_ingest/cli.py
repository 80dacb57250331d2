#!/usr/bin/env python3
"""
Catalog Ingestion CLI
=====================

Runs one product mapping job and prints its messages and outcome.

Usage:
    catalog-ingest json
    catalog-ingest xml --url https://example.com/feed.xml
    catalog-ingest text --file ./raw_products.txt --output-json
"""

import argparse
import asyncio
import logging
import sys
import uuid
from typing import List, Optional

from catalog_ingest.core import config
from catalog_ingest.core.errors import ConfigurationError
from catalog_ingest.core.schema import JobArguments, RunSummary, to_json
from catalog_ingest.parsers import PayloadFormat
from catalog_ingest.pipelines.fetch import FileFetcher
from catalog_ingest.pipelines.jobs import LOG_MAPPED_PRODUCTS_KEY, URL_KEY, ProductMapperJob

logger = logging.getLogger(__name__)


async def _print_info(message: str) -> None:
    print("Info: " + message)


async def _print_warning(message: str) -> None:
    print("Warning: " + message)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-ingest",
        description="Fetch a product catalog feed and map it to canonical products",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default JSON feed
  %(prog)s json

  # XML shopping feed from another location
  %(prog)s xml --url https://example.com/googleshoppingfeed

  # Local pipe-delimited table, print products as JSON
  %(prog)s text --file ./raw.txt --output-json

Environment Variables:
  CATALOG_JSON_FEED_URL   JSON feed location
  CATALOG_XML_FEED_URL    XML feed location
  CATALOG_TEXT_FEED_URL   Delimited text feed location
  FETCH_TIMEOUT_SECONDS   Download timeout (default 60)
  LOG_MAPPED_PRODUCTS     Emit one info line per product (default true)
        """,
    )

    parser.add_argument(
        "format",
        choices=[f.value for f in PayloadFormat],
        help="Feed wire format",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--url",
        type=str,
        help="Feed URL (overrides the configured feed location)",
    )
    source.add_argument(
        "--file",
        type=str,
        help="Read the feed from a local file instead of downloading it",
    )

    parser.add_argument(
        "--quiet-products",
        action="store_true",
        help="Do not print one info line per mapped product",
    )

    parser.add_argument(
        "--output-json",
        action="store_true",
        help="Print the canonical products as JSON to stdout",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser


async def run_job(args: argparse.Namespace) -> RunSummary:
    payload_format = PayloadFormat(args.format)
    job_configuration = {}
    if args.url:
        job_configuration[URL_KEY] = args.url
    if args.file:
        job_configuration[URL_KEY] = args.file
    if args.quiet_products:
        job_configuration[LOG_MAPPED_PRODUCTS_KEY] = "false"

    job = ProductMapperJob(payload_format, fetcher=FileFetcher() if args.file else None)
    arguments = JobArguments(
        dataset_id=uuid.uuid4(),
        api_key="",
        job_configuration=job_configuration,
    )

    message = await job.execute(arguments, _print_info, _print_warning)
    print(message)
    return job.last_summary


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if not args.file:
        try:
            config.validate_config()
        except ConfigurationError as e:
            print(e.message, file=sys.stderr)
            sys.exit(1)
        logger.debug(config.get_config_summary())

    try:
        summary = asyncio.run(run_job(args))
    except KeyboardInterrupt:
        logger.warning("Ingestion interrupted by user")
        sys.exit(130)

    if args.output_json:
        print(to_json(summary.products))

    sys.exit(0 if summary.succeeded else 1)


if __name__ == "__main__":
    main()
