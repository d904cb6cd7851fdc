# ============================================================================
# src/pdf_chat/llm/client.py
# ============================================================================
"""
Chat Transport Factory

Usage:
    from pdf_chat.llm.client import create_transport

    transport = create_transport()
    raw = await transport.send(messages, api_key)
"""

from typing import Any, Dict, Optional
import logging

from .base import BaseChatTransport
from .openrouter_client import OpenRouterClient
from ..config import llm_settings


DEFAULT_BACKEND = "openrouter"

# One client per connection settings so the HTTP session is reused across conversations
_client_cache: Dict[tuple, BaseChatTransport] = {}

_logger = logging.getLogger(__name__)


def create_transport(config: Optional[Dict[str, Any]] = None) -> BaseChatTransport:
    """
    Factory function to create a chat transport.

    Returns a cached instance when backend + connection params match.

    Args:
        config: Optional overrides:
            - backend: "openrouter" (default)
            - url, model, timeout, referer, title: see OpenRouterClient

    Raises:
        ValueError: If backend type is not supported
    """
    config = dict(config or {})
    backend = config.get('backend', DEFAULT_BACKEND).lower()

    if backend != "openrouter":
        raise ValueError(
            f"Unknown backend: {backend}. Supported backends: openrouter"
        )

    cache_key = (
        backend,
        config.get('url', llm_settings.OPENROUTER_URL),
        config.get('model', llm_settings.OPENROUTER_MODEL),
        config.get('timeout', llm_settings.LLM_TIMEOUT),
        config.get('referer', llm_settings.APP_REFERER),
        config.get('title', llm_settings.APP_TITLE),
    )

    if cache_key in _client_cache:
        _logger.debug(f"Reusing cached {backend} client: {cache_key}")
        return _client_cache[cache_key]

    client = OpenRouterClient(config)
    _client_cache[cache_key] = client
    _logger.info(f"Created and cached {backend} client: {cache_key}")

    return client
