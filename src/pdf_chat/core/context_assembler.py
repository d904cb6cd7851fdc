# ============================================================================
# src/pdf_chat/core/context_assembler.py
# ============================================================================
"""
Context Assembler

Builds the exact message list sent to the completion endpoint and turns
the endpoint's response back into a conversation message.

Request assembly:
1. Working conversation = history + new user message
2. No document, or a document with blank text -> send the conversation as is
3. Otherwise classify the document text and render the medical or the
   generic system prompt with the text substituted verbatim
4. Payload = [system prompt] + working conversation

The verdict is recomputed from the document text on every call; callers
never pass it in.
"""

from typing import Any, List, Optional, Sequence
import logging

from .messages import Document, Message, MessageRole
from ..classifiers import DocumentClassifier
from ..prompts import render_system_prompt
from ..utils.exceptions import MalformedResponseError


class ContextAssembler:
    """
    Pure request/response transformations around the transport call.

    No network or storage access happens here.
    """

    def __init__(self, classifier: Optional[DocumentClassifier] = None):
        self.classifier = classifier or DocumentClassifier()
        self.logger = logging.getLogger(__name__)

    def build_system_message(self, document: Optional[Document]) -> Optional[Message]:
        """
        Render the system message for the active document.

        Returns:
            The system message, or None when there is no usable document text
        """
        if document is None or not document.has_text:
            return None

        is_medical = self.classifier.classify(document.text)
        content = render_system_prompt(document.text, is_medical)

        self.logger.debug(
            f"Using {'medical' if is_medical else 'generic'} prompt for "
            f"document {document.document_id} ({len(document.text)} chars)"
        )
        return Message(MessageRole.SYSTEM, content)

    def build_request(
        self,
        history: Sequence[Message],
        new_message: Message,
        document: Optional[Document] = None
    ) -> List[Message]:
        """
        Build the outbound message list.

        Args:
            history: Conversation so far, NOT including new_message
            new_message: The user turn being sent
            document: Active document, if any

        Returns:
            New list: optional system message first, then history, then new_message
        """
        conversation = list(history)
        conversation.append(new_message)

        system_message = self.build_system_message(document)
        if system_message is None:
            return conversation

        return [system_message] + conversation

    def extract_reply(self, raw_response: Any) -> Message:
        """
        Extract the assistant message from a chat-completions response.

        Expects {"choices": [{"message": {"content": "..."}}]}.

        Raises:
            MalformedResponseError: If the shape does not match or choices is empty
        """
        try:
            choices = raw_response["choices"]
            if not choices:
                raise MalformedResponseError(
                    "Provider response has no choices", response=raw_response
                )
            content = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError(
                f"Provider response has no assistant message: {e!r}",
                response=raw_response
            ) from e

        if not isinstance(content, str):
            raise MalformedResponseError(
                f"Assistant content is {type(content).__name__}, expected str",
                response=raw_response
            )

        return Message(MessageRole.ASSISTANT, content)


_default_assembler = ContextAssembler()


def build_request(
    history: Sequence[Message],
    new_message: Message,
    document: Optional[Document] = None
) -> List[Message]:
    """Build the outbound message list with the default classifier."""
    return _default_assembler.build_request(history, new_message, document)


def extract_reply(raw_response: Any) -> Message:
    """Extract the assistant message from a chat-completions response."""
    return _default_assembler.extract_reply(raw_response)
