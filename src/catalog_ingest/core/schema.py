"""
Catalog Product Schema

Defines the shapes that flow through an ingestion run:

1. IntermediateProduct - loosely-typed record produced by a format parser.
   Every field is optional because each wire format may omit any of them.
2. CanonicalProduct - the normalized product handed to the catalog/search
   system: non-empty id, one display name under the fixed language tag and
   a list/sales price pair tagged with the fixed currency.
3. RunSummary - the outcome of one run. The human-readable `message` is the
   terminal message existing consumers rely on; `products` and `warnings`
   are the structured side outputs.
"""

from dataclasses import dataclass, field, asdict
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID
import json


# ============================================================================
# INTERMEDIATE RECORD
# ============================================================================

@dataclass
class IntermediateProduct:
    """Format-agnostic product record prior to normalization"""
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    sales_price_text: Optional[str] = None
    list_price_text: Optional[str] = None

    # Raw source text the record came from (delimited rows only)
    source_text: Optional[str] = None


@dataclass
class SkippedRow:
    """A source row the parser passed over, reported in source order."""
    row: str
    reason: str


# ============================================================================
# CANONICAL PRODUCT
# ============================================================================

@dataclass(frozen=True)
class Money:
    """Exact decimal amount tagged with a currency code"""
    currency: str
    amount: Decimal

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"


@dataclass
class CanonicalProduct:
    """
    Normalized product entity.

    `display_name` always holds exactly one entry, keyed by the display
    language. The value is the source name verbatim and may be None.
    """
    id: str
    display_name: Dict[str, Optional[str]]
    list_price: Money
    sales_price: Money

    def display_name_text(self) -> str:
        return ", ".join(f"{lang}: {value}" for lang, value in self.display_name.items())


# ============================================================================
# RUN SUMMARY
# ============================================================================

class RunOutcome(str, Enum):
    """Terminal outcome categories of an ingestion run."""
    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"
    PARSE_ERROR = "parse_error"
    NO_PRODUCTS = "no_products"
    CANCELLED = "cancelled"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass
class RunSummary:
    """Result of one ingestion run."""
    outcome: RunOutcome
    message: str
    succeeded_count: int = 0
    products: List[CanonicalProduct] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.outcome == RunOutcome.SUCCESS

    def __str__(self) -> str:
        return self.message


# ============================================================================
# JOB CONTEXT
# ============================================================================

@dataclass(frozen=True)
class JobArguments:
    """Opaque context handed to a job; the pipeline does not interpret it."""
    dataset_id: UUID
    api_key: str
    job_configuration: Mapping[str, str] = field(default_factory=dict)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def dataclass_to_dict(obj) -> Any:
    """Convert dataclass to dict, handling nested dataclasses and decimals"""
    if hasattr(obj, '__dataclass_fields__'):
        return {k: dataclass_to_dict(v) for k, v in asdict(obj).items()}
    elif isinstance(obj, list):
        return [dataclass_to_dict(item) for item in obj]
    elif isinstance(obj, dict):
        return {k: dataclass_to_dict(v) for k, v in obj.items()}
    elif isinstance(obj, Enum):
        return obj.value
    elif isinstance(obj, (Decimal, UUID)):
        return str(obj)
    return obj


def to_json(products: List[CanonicalProduct], indent: int = 2) -> str:
    """Convert canonical products to a JSON string"""
    return json.dumps(dataclass_to_dict(products), indent=indent, ensure_ascii=False)
