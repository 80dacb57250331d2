"""Tests for the XML shopping feed parser."""

import pytest

from catalog_ingest.core.errors import StructuralParseError
from catalog_ingest.parsers import XmlFeedParser

NS = 'xmlns:g="http://base.google.com/ns/1.0"'


def test_parse_items(sample_xml_payload):
    records = list(XmlFeedParser().parse(sample_xml_payload))

    assert [r.product_id for r in records] == ["X1", "X2"]
    assert records[0].product_name == "Lamp"
    assert records[0].list_price_text == "25.00 USD"
    assert records[0].sales_price_text == "19.99 USD"


def test_items_found_at_any_depth():
    payload = f"<feed {NS}><a><b><item><g:id>deep</g:id></item></b></a><item><g:id>top</g:id></item></feed>"
    records = list(XmlFeedParser().parse(payload))
    assert sorted(r.product_id for r in records) == ["deep", "top"]


def test_missing_child_elements_are_absent():
    payload = f"<feed {NS}><item><title>Only a title</title></item></feed>"
    record = list(XmlFeedParser().parse(payload))[0]
    assert record.product_name == "Only a title"
    assert record.product_id is None
    assert record.list_price_text is None
    assert record.sales_price_text is None


def test_id_requires_google_namespace():
    """An un-namespaced <id> is not the product id."""
    payload = "<feed><item><id>plain</id></item></feed>"
    assert list(XmlFeedParser().parse(payload))[0].product_id is None


def test_zero_items():
    assert list(XmlFeedParser().parse(f"<rss {NS}><channel/></rss>")) == []


def test_malformed_xml_is_structural_error():
    with pytest.raises(StructuralParseError) as excinfo:
        list(XmlFeedParser().parse(b"<rss><channel></rss>"))
    assert excinfo.value.payload_format == "xml"
