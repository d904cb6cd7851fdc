# ============================================================================
# src/pdf_chat/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the PDF chat assistant.
"""

from typing import Optional


class PdfChatError(Exception):
    """Base exception for all PDF chat errors."""
    pass


class ProviderError(PdfChatError):
    """Completion provider rejected the request or returned an unreadable body."""
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class MalformedResponseError(PdfChatError):
    """Provider response does not contain an extractable assistant message."""
    def __init__(self, message: str, response: object = None):
        super().__init__(message)
        self.response = response


class ExtractionError(PdfChatError):
    """Error extracting text from an uploaded document."""
    pass


class InvalidFileError(ExtractionError):
    """Uploaded file is not an acceptable PDF."""
    pass


class ConfigurationError(PdfChatError):
    """Invalid or missing configuration (e.g. no API credential)."""
    pass


class RequestInProgressError(PdfChatError):
    """A request is already outstanding for this conversation."""
    pass
