# ============================================================================
# src/pdf_chat/llm/__init__.py
# ============================================================================
"""
LLM module - chat-completions transport
"""

from .base import BaseChatTransport
from .openrouter_client import OpenRouterClient
from .client import create_transport

__all__ = [
    "BaseChatTransport",
    "OpenRouterClient",
    "create_transport",
]
