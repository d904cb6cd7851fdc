# ============================================================================
# src/pdf_chat/llm/base.py
# ============================================================================
"""
Base Chat Transport Interface

Defines the narrow contract the chat session depends on:

    send(messages, api_key) -> raw provider response (parsed JSON)

Backends raise ProviderError for anything other than a usable JSON body.
Turning that body into an assistant message is the ContextAssembler's job.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence
import logging

from ..core.messages import Message


class BaseChatTransport(ABC):
    """
    Abstract base class for chat-completion transports.

    All backends must implement:
    - send(): Async POST of a message list
    - model_name: Model identifier sent with each request
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        self._request_count = 0
        self._failure_count = 0
        self._total_request_time = 0.0

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model identifier."""
        pass

    @abstractmethod
    async def send(self, messages: Sequence[Message], api_key: str) -> Dict[str, Any]:
        """
        Send one chat-completions request.

        Args:
            messages: Ordered message list, system message first if present
            api_key: Bearer credential

        Returns:
            Parsed JSON response body

        Raises:
            ProviderError: Non-success status, provider error or unreadable body
        """
        pass

    async def close(self):
        """Release network resources. No-op by default."""
        pass

    def _record(self, elapsed: float, failed: bool = False):
        self._request_count += 1
        self._total_request_time += elapsed
        if failed:
            self._failure_count += 1

    def get_statistics(self) -> Dict[str, Any]:
        """Get request statistics."""
        avg_time = (
            self._total_request_time / self._request_count
            if self._request_count > 0
            else 0.0
        )

        return {
            "model": self.model_name,
            "request_count": self._request_count,
            "failure_count": self._failure_count,
            "total_request_time": self._total_request_time,
            "average_request_time": avg_time,
        }
