"""Tests for parser selection."""

import pytest

from catalog_ingest.parsers import (
    DelimitedTextParser,
    JsonFeedParser,
    PayloadFormat,
    XmlFeedParser,
    get_parser,
)


@pytest.mark.parametrize("payload_format,expected", [
    ("json", JsonFeedParser),
    ("XML", XmlFeedParser),
    (PayloadFormat.TEXT, DelimitedTextParser),
])
def test_get_parser(payload_format, expected):
    assert isinstance(get_parser(payload_format), expected)


def test_get_parser_unknown_format():
    with pytest.raises(ValueError, match="Unknown payload format"):
        get_parser("csv")
