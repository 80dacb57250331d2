"""
Price normalization.

Turns currency-decorated price tokens such as ``"$1,299.00"`` or
``"15.00 USD"`` into exact ``Decimal`` values. Parsing is culture-invariant:
``,`` is only ever a group separator and ``.`` the decimal point.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from catalog_ingest.core.errors import PriceFormatError

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Generic currency sign accepted by invariant number parsing
GENERIC_CURRENCY_SIGN = "¤"

# Applied to stripped text; inner whitespace only next to a sign or parenthesis
_NUMBER_PATTERN = re.compile(
    r"""
    ^
    (?:(?P<open>\()\s*(?=[+\-\d.]))?
    (?:(?P<lead>[+-])\s*(?=[\d.]))?
    (?P<mantissa>(?:\d[\d,]*)?(?:\.\d*)?)
    (?:[eE](?P<exponent>[+-]?\d+))?
    (?:\s*(?P<trail>[+-]))?
    (?:\s*(?P<close>\)))?
    $
    """,
    re.VERBOSE,
)


def strip_currency_markers(text: str, currency_markers: Iterable[str]) -> str:
    """Remove every occurrence of each marker substring from text."""
    # Longest first so "US$" is not left as "US" after "$" is removed
    for marker in sorted(set(currency_markers), key=len, reverse=True):
        if marker:
            text = text.replace(marker, "")
    return text.replace(GENERIC_CURRENCY_SIGN, "")


def parse_invariant_decimal(text: str) -> Decimal:
    """
    Parse a number written in any conventional invariant style.

    Accepts surrounding whitespace, a leading or trailing sign, parentheses
    for negatives, ``,`` group separators, a ``.`` decimal point and an
    exponent.

    Raises:
        PriceFormatError: If the text is not a number
    """
    match = _NUMBER_PATTERN.match(text.strip())
    if match is None:
        raise PriceFormatError(text)

    mantissa = match.group("mantissa")
    if not any(ch.isdigit() for ch in mantissa):
        raise PriceFormatError(text)

    if bool(match.group("open")) != bool(match.group("close")):
        raise PriceFormatError(text)
    parenthesized = bool(match.group("open"))

    signs = [s for s in (match.group("lead"), match.group("trail")) if s]
    if len(signs) > 1 or (parenthesized and signs):
        raise PriceFormatError(text)

    literal = mantissa.replace(",", "")
    if match.group("exponent"):
        literal = f"{literal}E{match.group('exponent')}"

    try:
        value = Decimal(literal)
    except InvalidOperation:
        raise PriceFormatError(text)

    if parenthesized or signs == ["-"]:
        value = -value
    return value


def normalize_price(text: Optional[str], currency_markers: Iterable[str]) -> Decimal:
    """
    Normalize a price token to an exact decimal.

    Args:
        text: Raw price text from the source, or None when absent
        currency_markers: Substrings to strip before parsing (e.g. {"$", "USD"})

    Returns:
        The price as a Decimal; exact zero when text is None

    Raises:
        PriceFormatError: If the remaining text is not a number
    """
    if text is None:
        return ZERO

    cleaned = strip_currency_markers(text, currency_markers)
    try:
        return parse_invariant_decimal(cleaned)
    except PriceFormatError:
        logger.debug(f"Unparsable price token: {text!r}")
        raise PriceFormatError(text)
