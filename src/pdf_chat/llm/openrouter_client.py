# ============================================================================
# src/pdf_chat/llm/openrouter_client.py
# ============================================================================
"""
OpenRouter Chat Client

Posts the assembled message list to OpenRouter's OpenAI-compatible
chat-completions endpoint:

    POST {url}
    Authorization: Bearer <api key>
    {"model": "...", "messages": [{"role": "...", "content": "..."}]}

and returns the parsed JSON body. No retries: every failure surfaces
as ProviderError so the caller decides what to tell the user.
"""

import aiohttp
import asyncio
import json
import time
from typing import Any, Dict, Optional, Sequence, Tuple, Union
import logging

from .base import BaseChatTransport
from ..config import llm_settings
from ..core.messages import Message
from ..utils.exceptions import ProviderError
from ..utils.logging import log_performance


logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to get response"


class OpenRouterClient(BaseChatTransport):
    """
    aiohttp-based chat-completions client.

    Config options (defaults from LLMSettings):
        url: Endpoint URL
        model: Model identifier
        timeout: Request timeout in seconds
        referer: HTTP-Referer attribution header
        title: X-Title attribution header
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

        self.url = self.config.get('url', llm_settings.OPENROUTER_URL)
        self._model_name = self.config.get('model', llm_settings.OPENROUTER_MODEL)
        self.timeout = self.config.get('timeout', llm_settings.LLM_TIMEOUT)
        self.referer = self.config.get('referer', llm_settings.APP_REFERER)
        self.title = self.config.get('title', llm_settings.APP_TITLE)

        # HTTP session (created lazily, tied to event loop)
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop: Optional[asyncio.AbstractEventLoop] = None

        self.logger.info(f"Initialized OpenRouter client: {self.url} / {self._model_name}")

    @property
    def model_name(self) -> str:
        return self._model_name

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session for current event loop."""
        current_loop = asyncio.get_running_loop()

        needs_new_session = (
            self._session is None
            or self._session.closed
            or self._session_loop is not current_loop
        )

        if needs_new_session:
            if self._session is not None and not self._session.closed:
                try:
                    await self._session.close()
                except RuntimeError as e:
                    # Session bound to a loop that has already shut down
                    self.logger.debug(f"Discarding stale HTTP session: {e}")

            timeout = aiohttp.ClientTimeout(
                total=None,
                sock_connect=30,
            )
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._session_loop = current_loop

        return self._session

    async def close(self):
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._session_loop = None

    def build_payload(self, messages: Sequence[Message]) -> Dict[str, Any]:
        return {
            "model": self._model_name,
            "messages": [m.to_dict() for m in messages],
        }

    def build_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }

    async def _post(self, payload: Dict[str, Any], headers: Dict[str, str]) -> Tuple[int, bytes]:
        """POST payload and return (status, raw body)."""
        session = await self._get_session()
        async with session.post(self.url, json=payload, headers=headers) as response:
            return response.status, await response.read()

    def _parse_response(self, status: int, body: Union[bytes, str]) -> Any:
        """
        Decode the response body, raising ProviderError on any failure.

        Error bodies look like {"error": {"message": "...", "code": 401}};
        OpenRouter may also return such a body with a 200 status.
        A body that is not UTF-8 counts as non-JSON.
        """
        try:
            if isinstance(body, bytes):
                body = body.decode("utf-8")
            data = json.loads(body) if body else None
        except (UnicodeDecodeError, json.JSONDecodeError):
            data = None

        error = data.get("error") if isinstance(data, dict) else None
        error_message = None
        if isinstance(error, dict):
            error_message = error.get("message")
        elif isinstance(error, str):
            error_message = error

        if not 200 <= status < 300:
            raise ProviderError(error_message or DEFAULT_ERROR_MESSAGE, status=status)

        if data is None:
            raise ProviderError("Provider returned a body that is not JSON", status=status)

        if error is not None and "choices" not in data:
            raise ProviderError(error_message or DEFAULT_ERROR_MESSAGE, status=status)

        return data

    @log_performance(logger, "OpenRouter chat completion")
    async def send(self, messages: Sequence[Message], api_key: str) -> Dict[str, Any]:
        """
        Send one chat-completions request.

        Args:
            messages: Ordered message list
            api_key: Bearer credential

        Returns:
            Parsed JSON response body

        Raises:
            ProviderError: On HTTP error status, provider error body,
                non-JSON body, connection failure or timeout
        """
        payload = self.build_payload(messages)
        headers = self.build_headers(api_key)

        self.logger.debug(
            f"Sending {len(payload['messages'])} message(s) to {self._model_name} "
            f"({sum(len(m['content']) for m in payload['messages'])} chars)"
        )

        start = time.monotonic()
        try:
            status, body = await asyncio.wait_for(
                self._post(payload, headers),
                timeout=self.timeout
            )
            data = self._parse_response(status, body)

        except asyncio.TimeoutError:
            self._record(time.monotonic() - start, failed=True)
            raise ProviderError(f"Completion request timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            self._record(time.monotonic() - start, failed=True)
            raise ProviderError(f"Cannot reach completion endpoint {self.url}: {e}") from e
        except ProviderError:
            self._record(time.monotonic() - start, failed=True)
            raise

        self._record(time.monotonic() - start)
        return data
