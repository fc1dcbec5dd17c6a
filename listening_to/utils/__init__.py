"""Utility modules for listening-to.

- **errors** -- Exception hierarchy rooted at ListeningToError.
- **http** -- ``fetch_validated``: GET + JSON + pydantic validation, with
  every failure folded into ``None``.
- **logging** -- structlog setup with the console/JSON dual renderer.
"""

from listening_to.utils.errors import (
    ConfigurationError,
    ListeningToError,
    MetadataSourceError,
    ProviderUnavailableError,
)
from listening_to.utils.http import fetch_validated
from listening_to.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "ListeningToError",
    "MetadataSourceError",
    "ProviderUnavailableError",
    "configure_logging",
    "fetch_validated",
    "get_logger",
]
