# ============================================================================
# src/pdf_chat/config/llm_config.py
# ============================================================================
"""
Completion Provider Configuration (OpenRouter)
- Endpoint and model
- API credential
- Timeout
- Attribution headers
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMSettings(BaseSettings):
    OPENROUTER_API_KEY: str = Field(
        default="",
        description="Bearer token for the completion endpoint"
    )
    OPENROUTER_URL: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="Chat-completions endpoint"
    )
    OPENROUTER_MODEL: str = Field(
        default="google/gemini-pro",
        description="Model identifier sent in every request body"
    )
    LLM_TIMEOUT: int = Field(
        default=120,
        gt=0,
        description="Maximum time for one completion request (seconds)"
    )
    APP_REFERER: str = Field(
        default="http://localhost:8000",
        description="Value of the HTTP-Referer attribution header"
    )
    APP_TITLE: str = Field(
        default="PDF Chat Assistant",
        description="Value of the X-Title attribution header"
    )


llm_settings = LLMSettings()
