"""Tests for core configuration module."""

import pytest

from catalog_ingest.core import config
from catalog_ingest.core.errors import ConfigurationError


def test_get_config_summary_returns_string():
    """Config summary should return a formatted string."""
    summary = config.get_config_summary()
    assert isinstance(summary, str)
    assert "Catalog Ingestion Configuration" in summary


def test_config_summary_masks_api_key():
    summary = config.get_config_summary(masked_api_key="secret-key-123")
    assert "secr****" in summary
    assert "secret-key-123" not in summary


def test_defaults():
    """Fixed tags and sentinel should have usable defaults."""
    assert config.DISPLAY_LANGUAGE
    assert config.PRICE_CURRENCY
    assert config.UNKNOWN_PRODUCT_ID
    assert config.FETCH_TIMEOUT_SECONDS > 0


def test_feed_url_for_each_format():
    assert config.feed_url_for("json") == config.CATALOG_JSON_FEED_URL
    assert config.feed_url_for("XML") == config.CATALOG_XML_FEED_URL
    assert config.feed_url_for("text") == config.CATALOG_TEXT_FEED_URL


def test_feed_url_for_unknown_format():
    with pytest.raises(ValueError, match="Unknown payload format"):
        config.feed_url_for("csv")


def test_validate_config_reports_every_problem(monkeypatch):
    monkeypatch.setattr(config, "CATALOG_JSON_FEED_URL", "not-a-url")
    monkeypatch.setattr(config, "FETCH_TIMEOUT_SECONDS", 0)
    with pytest.raises(ConfigurationError) as excinfo:
        config.validate_config()
    assert "CATALOG_JSON_FEED_URL" in excinfo.value.message
    assert "FETCH_TIMEOUT_SECONDS" in excinfo.value.message
