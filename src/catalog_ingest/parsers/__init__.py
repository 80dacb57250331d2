"""Format parsers for the JSON, XML and delimited text catalog feeds."""

from typing import Dict, Type, Union

from catalog_ingest.parsers.base import (
    FormatParser,
    ParseEvent,
    Payload,
    PayloadFormat,
    PriceFailurePolicy,
)
from catalog_ingest.parsers.delimited import DelimitedTextParser
from catalog_ingest.parsers.json_feed import JsonFeedParser
from catalog_ingest.parsers.xml_feed import XmlFeedParser

PARSERS: Dict[PayloadFormat, Type[FormatParser]] = {
    PayloadFormat.JSON: JsonFeedParser,
    PayloadFormat.XML: XmlFeedParser,
    PayloadFormat.TEXT: DelimitedTextParser,
}


def get_parser(payload_format: Union[PayloadFormat, str]) -> FormatParser:
    """Return a fresh parser for a payload format."""
    try:
        key = PayloadFormat(str(getattr(payload_format, "value", payload_format)).lower())
    except ValueError:
        raise ValueError(
            f"Unknown payload format: {payload_format}. Must be one of {[f.value for f in PayloadFormat]}"
        )
    return PARSERS[key]()


__all__ = [
    "FormatParser",
    "ParseEvent",
    "Payload",
    "PayloadFormat",
    "PriceFailurePolicy",
    "JsonFeedParser",
    "XmlFeedParser",
    "DelimitedTextParser",
    "PARSERS",
    "get_parser",
]
