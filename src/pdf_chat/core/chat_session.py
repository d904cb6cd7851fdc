# ============================================================================
# src/pdf_chat/core/chat_session.py
# ============================================================================
"""
ChatSession
- One conversation: ordered history, active document, loading gate
- DocumentSession: per-document record holding the classification
  verdict and whether the automatic report analysis has been issued

Auto-analysis rule: when a document classified as medical is active and
the conversation is empty, the first user turn is AUTO_ANALYSIS_PROMPT,
issued without user input, once per document identity. Loading a
different document (or clearing it) starts a fresh DocumentSession and
so re-arms the rule; re-loading the same document does not.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, TYPE_CHECKING
import logging
import uuid

from .messages import Document, Message, MessageRole
from .context_assembler import ContextAssembler
from ..prompts import AUTO_ANALYSIS_PROMPT
from ..utils.exceptions import ConfigurationError, RequestInProgressError

if TYPE_CHECKING:
    from ..llm.base import BaseChatTransport


@dataclass
class DocumentSession:
    """State tied to one loaded document."""
    document: Document
    is_medical: bool
    auto_analysis_done: bool = False

    def to_dict(self):
        return {
            **self.document.to_dict(),
            "is_medical": self.is_medical,
            "auto_analysis_done": self.auto_analysis_done,
        }


class ChatSession:
    """
    Conversation state machine around the transport call.

    History is append-only. The user turn is appended as soon as it is
    sent; the assistant turn only after a reply has been extracted. A
    failed request leaves no assistant turn behind.
    """

    def __init__(
        self,
        transport: "BaseChatTransport",
        api_key: str,
        assembler: Optional[ContextAssembler] = None,
        session_id: Optional[str] = None
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.transport = transport
        self.api_key = api_key
        self.assembler = assembler or ContextAssembler()
        self.logger = logging.getLogger(__name__)

        self._history: List[Message] = []
        self.document_session: Optional[DocumentSession] = None
        self.is_loading = False

    @property
    def history(self) -> Tuple[Message, ...]:
        return tuple(self._history)

    @property
    def document(self) -> Optional[Document]:
        return self.document_session.document if self.document_session else None

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def load_document(self, document: Document) -> DocumentSession:
        """
        Make document the active document.

        Loading the document that is already active keeps its session
        (and its auto-analysis flag); any other document replaces it.
        """
        current = self.document_session
        if current is not None and current.document.document_id == document.document_id:
            return current

        is_medical = self.assembler.classifier.classify(document.text)
        self.document_session = DocumentSession(document=document, is_medical=is_medical)

        self.logger.info(
            f"[{self.session_id}] Loaded document {document.document_id} "
            f"({document.page_count} pages, {len(document.text)} chars, medical={is_medical})"
        )
        return self.document_session

    def clear_document(self):
        if self.document_session is not None:
            self.logger.info(
                f"[{self.session_id}] Cleared document {self.document_session.document.document_id}"
            )
        self.document_session = None

    def reset_conversation(self):
        """Start a new conversation. The active document stays loaded."""
        if self.is_loading:
            raise RequestInProgressError("Cannot reset while a request is outstanding")
        self._history = []

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def should_auto_analyze(self) -> bool:
        ds = self.document_session
        return (
            ds is not None
            and ds.is_medical
            and ds.document.has_text
            and not ds.auto_analysis_done
            and not self._history
            and not self.is_loading
            and bool(self.api_key)
        )

    async def maybe_auto_analyze(self) -> Optional[Message]:
        """
        Issue the automatic report analysis if the rule applies.

        Safe to call repeatedly: fires at most once per document session.

        Returns:
            The assistant reply, or None if nothing was sent
        """
        if not self.should_auto_analyze():
            return None

        # Mark before awaiting so overlapping evaluations cannot fire twice
        self.document_session.auto_analysis_done = True
        self.logger.info(
            f"[{self.session_id}] Auto-analyzing medical report "
            f"{self.document_session.document.document_id}"
        )
        return await self.send_message(AUTO_ANALYSIS_PROMPT)

    async def send_message(self, content: str) -> Message:
        """
        Send a user turn and append the assistant reply.

        Raises:
            ValueError: Blank content
            ConfigurationError: No API credential
            RequestInProgressError: Another request is outstanding
            ProviderError, MalformedResponseError: Propagated from the
                transport / reply extraction; history keeps the user
                turn but gains no assistant turn
        """
        if not content or not content.strip():
            raise ValueError("Message content cannot be empty")
        if not self.api_key:
            raise ConfigurationError("No API key configured for the completion endpoint")
        if self.is_loading:
            raise RequestInProgressError("A response is still pending for this conversation")

        user_message = Message(MessageRole.USER, content)
        messages = self.assembler.build_request(self._history, user_message, self.document)

        self._history.append(user_message)
        self.is_loading = True
        try:
            raw = await self.transport.send(messages, self.api_key)
            reply = self.assembler.extract_reply(raw)
        except Exception as e:
            self.logger.warning(f"[{self.session_id}] Request failed: {type(e).__name__}: {e}")
            raise
        finally:
            self.is_loading = False

        self._history.append(reply)
        self.logger.info(
            f"[{self.session_id}] Reply received ({len(reply.content)} chars), "
            f"history now {len(self._history)} messages"
        )
        return reply

    def to_dict(self):
        return {
            "session_id": self.session_id,
            "messages": [m.to_dict() for m in self._history],
            "document": self.document_session.to_dict() if self.document_session else None,
            "is_loading": self.is_loading,
        }
