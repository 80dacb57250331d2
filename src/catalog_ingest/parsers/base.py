"""Common contract for catalog feed parsers."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, Iterator, Union

from catalog_ingest.core.errors import StructuralParseError
from catalog_ingest.core.schema import IntermediateProduct, SkippedRow

Payload = Union[bytes, str]
ParseEvent = Union[IntermediateProduct, SkippedRow]


class PayloadFormat(str, Enum):
    """Supported wire formats."""
    JSON = "json"
    XML = "xml"
    TEXT = "text"


class PriceFailurePolicy(str, Enum):
    """What happens to a record whose price text cannot be parsed."""
    FALLBACK_TO_ZERO = "fallback_to_zero"
    DROP_RECORD = "drop_record"


class FormatParser(ABC):
    """
    Turns a raw payload into intermediate product records.

    Subclasses declare which currency markers their price fields carry and
    how a bad price is treated. ``parse`` yields records in source order,
    interleaved with ``SkippedRow`` notices for rows that were passed over
    and should be reported.
    """

    payload_format: PayloadFormat
    label: str
    currency_markers: FrozenSet[str] = frozenset()
    price_failure_policy: PriceFailurePolicy = PriceFailurePolicy.FALLBACK_TO_ZERO

    @abstractmethod
    def parse(self, payload: Payload) -> Iterator[ParseEvent]:
        """
        Parse a payload.

        Raises:
            StructuralParseError: If the payload is not well-formed
        """

    def decode(self, payload: Payload) -> str:
        """Return the payload as text, decoding bytes as UTF-8."""
        if isinstance(payload, str):
            return payload
        try:
            return payload.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise StructuralParseError(str(e), self.payload_format.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
