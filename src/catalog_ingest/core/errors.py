"""Exceptions raised while fetching, parsing and normalizing catalog feeds."""

from typing import Optional


class CatalogIngestError(Exception):
    """Base class for all catalog ingestion errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(CatalogIngestError):
    """Raised when configuration values are missing or invalid."""


class TransportError(CatalogIngestError):
    """Exception raised when the raw payload cannot be downloaded."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class IngestionCancelled(CatalogIngestError):
    """Raised when cancellation is observed; stage is "download" or "processing"."""

    def __init__(self, stage: str, message: str = "The operation was cancelled."):
        self.stage = stage
        super().__init__(message)


class StructuralParseError(CatalogIngestError):
    """The payload is not well-formed in its claimed wire format."""

    def __init__(self, message: str, payload_format: str):
        self.payload_format = payload_format
        super().__init__(message)


class FieldFormatError(CatalogIngestError):
    """A single field of one record could not be interpreted."""


class PriceFormatError(FieldFormatError):
    """A price token is not a number once currency markers are removed."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"The input string '{text}' was not in a correct format.")
