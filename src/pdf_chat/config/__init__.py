# ============================================================================
# src/pdf_chat/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings

Values come from environment variables; a .env file in the working
directory is loaded first.
"""

from dotenv import load_dotenv

load_dotenv()

from .llm_config import LLMSettings, llm_settings
from .upload_config import UploadSettings, upload_settings
from .logging_config import LoggingSettings, logging_settings
