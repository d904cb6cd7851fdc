# ============================================================================
# src/pdf_chat/prompts/__init__.py
# ============================================================================
"""
System prompt templates for document chat
"""

from .templates import (
    PromptTask,
    PromptTemplate,
    GENERIC_DOCUMENT_TEMPLATE,
    MEDICAL_REPORT_TEMPLATE,
    MEDICAL_SECTION_HEADERS,
    MEDICAL_DISCLAIMER,
    AUTO_ANALYSIS_PROMPT,
    select_template,
    render_system_prompt,
)

__all__ = [
    "PromptTask",
    "PromptTemplate",
    "GENERIC_DOCUMENT_TEMPLATE",
    "MEDICAL_REPORT_TEMPLATE",
    "MEDICAL_SECTION_HEADERS",
    "MEDICAL_DISCLAIMER",
    "AUTO_ANALYSIS_PROMPT",
    "select_template",
    "render_system_prompt",
]
