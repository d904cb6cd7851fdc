# ============================================================================
# src/pdf_chat/config/upload_config.py
# ============================================================================
"""
Upload Limits
- Maximum file size
- Accepted file extensions
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class UploadSettings(BaseSettings):
    MAX_UPLOAD_BYTES: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Largest PDF accepted for extraction (bytes)"
    )
    ALLOWED_EXTENSIONS: List[str] = Field(
        default=[".pdf"],
        description="File extensions accepted for upload"
    )


upload_settings = UploadSettings()
