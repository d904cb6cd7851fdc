# ============================================================================
# src/pdf_chat/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .medical_keywords import (
    MEDICAL_KEYWORDS,
    MEDICAL_KEYWORD_THRESHOLD,
    MEDICAL_KEYWORDS_VERSION,
)
