"""
Pipe-delimited text table parser.

The raw feed is a fixed-column text table:

    | Id  | Name   | Category | Sales | List   | Stock |
    |-----|--------|----------|-------|--------|-------|
    | P2  | Gadget | Tools    | $5.00 | $7.00  | 4     |

The first two rows (header and separator) are always skipped. Columns 0, 1,
3 and 4 hold id, name, sales price and list price.

Known fragility: with ``collapse_empty_columns`` (the default) empty cells
are dropped before columns are indexed, so a blank cell in front of a used
column shifts every later field one position left.
"""

import logging
import re
from typing import Iterator, List

from catalog_ingest.core.schema import IntermediateProduct, SkippedRow
from catalog_ingest.parsers.base import FormatParser, ParseEvent, Payload, PayloadFormat, PriceFailurePolicy

logger = logging.getLogger(__name__)

ROW_SEPARATOR = re.compile(r"\r\n|\r|\n")
COLUMN_DELIMITER = "|"
HORIZONTAL_RULE = "-------------"

HEADER_ROWS = 2
MIN_COLUMNS = 6

ID_COLUMN = 0
NAME_COLUMN = 1
SALES_PRICE_COLUMN = 3
LIST_PRICE_COLUMN = 4


def split_rows(text: str) -> List[str]:
    """Split text on any of \\r\\n, \\r or \\n."""
    return ROW_SEPARATOR.split(text)


class DelimitedTextParser(FormatParser):
    """Parser for the pipe-delimited raw product table."""

    payload_format = PayloadFormat.TEXT
    label = "text"
    currency_markers = frozenset({"$", "USD"})
    price_failure_policy = PriceFailurePolicy.DROP_RECORD

    def __init__(self, collapse_empty_columns: bool = True):
        self.collapse_empty_columns = collapse_empty_columns

    def split_columns(self, row: str) -> List[str]:
        columns = [column.strip() for column in row.split(COLUMN_DELIMITER)]
        if self.collapse_empty_columns:
            return [column for column in columns if column]
        # Keep positions, only drop the artifacts of a leading/trailing delimiter
        if columns and not columns[0]:
            columns = columns[1:]
        if columns and not columns[-1]:
            columns = columns[:-1]
        return columns

    def parse(self, payload: Payload) -> Iterator[ParseEvent]:
        rows = split_rows(self.decode(payload))
        logger.debug(f"Text feed holds {len(rows)} rows including {HEADER_ROWS} header rows")

        for row in rows[HEADER_ROWS:]:
            if not row.strip():
                yield SkippedRow(row=row, reason="Skipping empty row.")
                continue

            columns = self.split_columns(row)
            if len(columns) < MIN_COLUMNS or HORIZONTAL_RULE in row:
                continue

            yield IntermediateProduct(
                product_id=columns[ID_COLUMN],
                product_name=columns[NAME_COLUMN],
                sales_price_text=columns[SALES_PRICE_COLUMN],
                list_price_text=columns[LIST_PRICE_COLUMN],
                source_text=row,
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(collapse_empty_columns={self.collapse_empty_columns})"
