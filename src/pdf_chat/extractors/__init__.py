# ============================================================================
# src/pdf_chat/extractors/__init__.py
# ============================================================================
"""
Document extraction - PDF to Document (pypdfium2, pdfplumber)
"""

from .pdf_extractor import PDFExtractor, format_file_size

__all__ = ["PDFExtractor", "format_file_size"]
