#!/usr/bin/env python3
"""
Configuration for catalog ingestion.
Handles environment variable loading and validation.
"""

import os
from typing import Dict, List, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from catalog_ingest.core.errors import ConfigurationError

# Load environment variables from .env file if present
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# Feed Locations
# =============================================================================

CATALOG_JSON_FEED_URL: str = os.getenv(
    "CATALOG_JSON_FEED_URL", "https://cdn.relewise.com/academy/productdata/customjsonfeed"
)
CATALOG_XML_FEED_URL: str = os.getenv(
    "CATALOG_XML_FEED_URL", "https://cdn.relewise.com/academy/productdata/googleshoppingfeed"
)
CATALOG_TEXT_FEED_URL: str = os.getenv(
    "CATALOG_TEXT_FEED_URL", "https://cdn.relewise.com/academy/productdata/raw"
)

# Seconds before the transport gives up on a download
FETCH_TIMEOUT_SECONDS: float = float(os.getenv("FETCH_TIMEOUT_SECONDS", "60"))


# =============================================================================
# Canonical Product Defaults
# =============================================================================

DISPLAY_LANGUAGE: str = os.getenv("DISPLAY_LANGUAGE", "en")
PRICE_CURRENCY: str = os.getenv("PRICE_CURRENCY", "USD")
UNKNOWN_PRODUCT_ID: str = os.getenv("UNKNOWN_PRODUCT_ID", "Unknown")


# =============================================================================
# Reporting
# =============================================================================

# Emit one info message per mapped product
LOG_MAPPED_PRODUCTS: bool = _env_flag("LOG_MAPPED_PRODUCTS", "true")


FEED_URLS: Dict[str, str] = {
    "json": CATALOG_JSON_FEED_URL,
    "xml": CATALOG_XML_FEED_URL,
    "text": CATALOG_TEXT_FEED_URL,
}


def feed_url_for(payload_format: str) -> str:
    """Return the configured source location for a payload format."""
    key = str(getattr(payload_format, "value", payload_format)).lower()
    try:
        return FEED_URLS[key]
    except KeyError:
        raise ValueError(f"Unknown payload format: {payload_format}. Must be one of {sorted(FEED_URLS)}")


# =============================================================================
# Validation
# =============================================================================

def validate_config() -> None:
    """
    Validate the current configuration values.
    Raises ConfigurationError listing every problem found.
    """
    errors: List[str] = []

    for name, url in (
        ("CATALOG_JSON_FEED_URL", CATALOG_JSON_FEED_URL),
        ("CATALOG_XML_FEED_URL", CATALOG_XML_FEED_URL),
        ("CATALOG_TEXT_FEED_URL", CATALOG_TEXT_FEED_URL),
    ):
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(f"{name} must be an http(s) URL, got {url!r}")

    if FETCH_TIMEOUT_SECONDS <= 0:
        errors.append("FETCH_TIMEOUT_SECONDS must be greater than zero")

    if not DISPLAY_LANGUAGE.strip():
        errors.append("DISPLAY_LANGUAGE must not be empty")

    if not PRICE_CURRENCY.strip():
        errors.append("PRICE_CURRENCY must not be empty")

    if not UNKNOWN_PRODUCT_ID.strip():
        errors.append("UNKNOWN_PRODUCT_ID must not be empty")

    if errors:
        raise ConfigurationError("Configuration Error(s):\n" + "\n".join(f"  - {e}" for e in errors))


def get_config_summary(masked_api_key: Optional[str] = None) -> str:
    """
    Get a summary of the current configuration (for logging).
    """
    api_key_line = ""
    if masked_api_key:
        api_key_line = f"\n  Job:\n    - API Key: {masked_api_key[:4]}****"

    return f"""
Catalog Ingestion Configuration:
  Feeds:
    - JSON: {CATALOG_JSON_FEED_URL}
    - XML: {CATALOG_XML_FEED_URL}
    - Text: {CATALOG_TEXT_FEED_URL}
    - Timeout: {FETCH_TIMEOUT_SECONDS}s

  Canonical Products:
    - Display Language: {DISPLAY_LANGUAGE}
    - Currency: {PRICE_CURRENCY}
    - Unknown ID Sentinel: {UNKNOWN_PRODUCT_ID}

  Reporting:
    - Log Mapped Products: {LOG_MAPPED_PRODUCTS}{api_key_line}
"""


if __name__ == "__main__":
    print("Validating configuration...")
    validate_config()
    print("Configuration is valid!")
    print(get_config_summary())
