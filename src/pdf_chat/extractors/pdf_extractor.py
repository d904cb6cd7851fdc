# ============================================================================
# src/pdf_chat/extractors/pdf_extractor.py
# ============================================================================
"""
PDF Text Extraction

Turns an uploaded PDF into a Document:
1. Validate - must be a PDF and within the upload size limit
2. Text - pypdfium2 first, pdfplumber as fallback
3. Normalize - whitespace inside a page collapsed to single spaces,
   pages separated by a blank line, result trimmed

The chat core treats the extracted text as an opaque blob.
"""

from io import BytesIO
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Union
import logging
import uuid

import pdfplumber
import pypdfium2

from ..config import upload_settings
from ..core.messages import Document
from ..utils.exceptions import ExtractionError, InvalidFileError


PdfSource = Union[str, Path, bytes, BinaryIO]


class PDFExtractor:
    """
    PDF to Document extractor with validation and a fallback cascade.
    """

    def __init__(
        self,
        max_bytes: Optional[int] = None,
        allowed_extensions: Optional[Sequence[str]] = None
    ):
        self.logger = logging.getLogger(__name__)
        self.max_bytes = max_bytes or upload_settings.MAX_UPLOAD_BYTES
        self.allowed_extensions = tuple(
            ext.lower() for ext in (allowed_extensions or upload_settings.ALLOWED_EXTENSIONS)
        )

    def validate(self, name: str, size: int, content_type: Optional[str] = None):
        """
        Check file type and size before extraction.

        Raises:
            InvalidFileError: Not a PDF, or larger than the upload limit
        """
        is_pdf_type = bool(content_type) and "pdf" in content_type.lower()
        has_pdf_ext = Path(name or "").suffix.lower() in self.allowed_extensions
        if not (is_pdf_type or has_pdf_ext):
            raise InvalidFileError("Please upload a PDF file")

        if size > self.max_bytes:
            raise InvalidFileError(
                f"File is too large. Please upload a PDF smaller than "
                f"{format_file_size(self.max_bytes)}"
            )

    def extract(
        self,
        source: PdfSource,
        name: Optional[str] = None,
        content_type: Optional[str] = None
    ) -> Document:
        """
        Validate and extract a PDF.

        Args:
            source: File path, raw bytes or binary file handle
            name: Display name (defaults to the file name of a path source)
            content_type: MIME type reported by the uploader, if any

        Returns:
            Document with a fresh identifier

        Raises:
            InvalidFileError: Validation failed
            ExtractionError: No extraction method could read the file
        """
        data, name = self._read_source(source, name)
        self.validate(name, len(data), content_type)

        self.logger.info(f"Extracting text from {name} ({format_file_size(len(data))})")

        try:
            pages = self._extract_with_pypdfium2(data)
            method = "pypdfium2"
        except pypdfium2.PdfiumError as e:
            self.logger.warning(f"pypdfium2 failed, trying pdfplumber: {e}")
            try:
                pages = self._extract_with_pdfplumber(data)
                method = "pdfplumber"
            except Exception as e2:
                self.logger.error(f"pdfplumber also failed: {e2}")
                raise ExtractionError(
                    f"Failed to process PDF {name}. pypdfium2: {e}, pdfplumber: {e2}"
                ) from e2

        text = "\n\n".join(" ".join(page.split()) for page in pages).strip()

        self.logger.info(
            f"{method} extracted {len(text)} chars from {len(pages)} pages of {name}"
        )

        return Document(
            document_id=str(uuid.uuid4()),
            name=name,
            size=len(data),
            page_count=len(pages),
            text=text,
        )

    def _read_source(self, source: PdfSource, name: Optional[str]):
        if isinstance(source, (str, Path)):
            path = Path(source)
            try:
                return path.read_bytes(), name or path.name
            except OSError as e:
                raise ExtractionError(f"Cannot read {path}: {e}") from e

        if isinstance(source, (bytes, bytearray)):
            return bytes(source), name or "document.pdf"

        data = source.read()
        return data, name or Path(getattr(source, "name", "") or "document.pdf").name

    def _extract_with_pypdfium2(self, data: bytes) -> List[str]:
        """Extract per-page text using pypdfium2."""
        pdf = pypdfium2.PdfDocument(data)
        try:
            pages = []
            for i in range(len(pdf)):
                page = pdf[i]
                textpage = page.get_textpage()
                pages.append(textpage.get_text_range())
                textpage.close()
                page.close()
            return pages
        finally:
            pdf.close()

    def _extract_with_pdfplumber(self, data: bytes) -> List[str]:
        """Extract per-page text using pdfplumber."""
        with pdfplumber.open(BytesIO(data)) as pdf:
            return [page.extract_text() or "" for page in pdf.pages]


def format_file_size(num_bytes: int) -> str:
    """Human-readable size: '512 bytes', '1.5 KB', '10.0 MB'."""
    if num_bytes < 1024:
        return f"{num_bytes} bytes"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"
