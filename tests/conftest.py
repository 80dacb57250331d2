"""Shared test fixtures for catalog_ingest tests."""

import asyncio
from typing import List, Optional

import pytest


class RecordingReporter:
    """Reporter that keeps every message in emission order."""

    def __init__(self):
        self.messages: List[tuple] = []

    async def info(self, message: str) -> None:
        self.messages.append(("info", message))

    async def warn(self, message: str) -> None:
        self.messages.append(("warn", message))

    @property
    def infos(self) -> List[str]:
        return [m for level, m in self.messages if level == "info"]

    @property
    def warnings(self) -> List[str]:
        return [m for level, m in self.messages if level == "warn"]


class StaticFetcher:
    """Fetcher returning a fixed payload, or raising a fixed error."""

    def __init__(self, payload=b"", error: Optional[Exception] = None, delay: float = 0):
        self.payload = payload
        self.error = error
        self.delay = delay
        self.requested: List[str] = []

    async def fetch(self, location: str):
        self.requested.append(location)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def sample_json_payload():
    """JSON feed with two well-formed products."""
    return (
        b'[{"productId":"P1","productName":"Widget","salesPrice":"$9.99","listPrice":"$12.00"},'
        b'{"productId":"P2","productName":"Gizmo","salesPrice":"$1,299.50","listPrice":"$1,500.00"}]'
    )


@pytest.fixture
def sample_xml_payload():
    """Google Shopping style RSS feed with two items."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:g="http://base.google.com/ns/1.0">
  <channel>
    <title>Store</title>
    <item>
      <g:id>X1</g:id>
      <title>Lamp</title>
      <g:price>25.00 USD</g:price>
      <g:sale_price>19.99 USD</g:sale_price>
    </item>
    <item>
      <g:id>X2</g:id>
      <title>Desk</title>
      <g:price>150.00 USD</g:price>
      <g:sale_price>120.00 USD</g:sale_price>
    </item>
  </channel>
</rss>"""


@pytest.fixture
def sample_text_payload():
    """Delimited table: header, separator, one good row and one bad-price row."""
    return "\n".join([
        "| Id | Name | Category | Sales | List | Stock |",
        "|----|------|----------|-------|------|-------|",
        "P2 | Gadget | X | $5.00 | $7.00 | Y",
        "P3 | Bad | X | abc | $7.00 | Y",
    ])


@pytest.fixture
def make_fetcher():
    """Factory for StaticFetcher instances."""
    return StaticFetcher
