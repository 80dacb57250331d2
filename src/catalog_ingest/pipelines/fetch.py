"""
Raw payload retrieval.

Fetchers download the feed bytes and report any failure as TransportError.
They do not retry; callers that want retries wrap the fetcher.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol

import httpx

from catalog_ingest.core import config
from catalog_ingest.core.errors import TransportError

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything that can fetch raw content from a location."""

    async def fetch(self, location: str) -> bytes:
        ...


class HttpFetcher:
    """
    Download feeds over HTTP(S).

    A caller-supplied ``httpx.AsyncClient`` is reused and left open;
    otherwise a client is created and closed per fetch.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self.timeout = timeout if timeout is not None else config.FETCH_TIMEOUT_SECONDS

    async def fetch(self, location: str) -> bytes:
        """
        Download the body at location.

        Raises:
            TransportError: On connection, timeout or non-2xx failures
        """
        logger.debug(f"GET {location}")
        try:
            if self._client is not None:
                return await self._get(self._client, location)
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                return await self._get(client, location)
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Response status code does not indicate success: {e.response.status_code} "
                f"({e.response.reason_phrase}).",
                url=location,
                status_code=e.response.status_code,
            )
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__, url=location)

    async def _get(self, client: httpx.AsyncClient, location: str) -> bytes:
        response = await client.get(location)
        response.raise_for_status()
        logger.debug(f"Downloaded {len(response.content)} bytes from {location}")
        return response.content


class FileFetcher:
    """Read a feed from the local filesystem (offline runs and fixtures)."""

    async def fetch(self, location: str) -> bytes:
        path = Path(location.removeprefix("file://"))
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise TransportError(f"Could not read {path}: {e.strerror or e}", url=location)
