# ============================================================================
# src/pdf_chat/utils/__init__.py
# ============================================================================
"""
Shared utilities: exception hierarchy and logging setup
"""

from .exceptions import (
    PdfChatError,
    ProviderError,
    MalformedResponseError,
    ExtractionError,
    InvalidFileError,
    ConfigurationError,
    RequestInProgressError,
)
from .logging import setup_logging, log_performance, JsonFormatter

__all__ = [
    "PdfChatError",
    "ProviderError",
    "MalformedResponseError",
    "ExtractionError",
    "InvalidFileError",
    "ConfigurationError",
    "RequestInProgressError",
    "setup_logging",
    "log_performance",
    "JsonFormatter",
]
