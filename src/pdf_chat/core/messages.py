# ============================================================================
# src/pdf_chat/core/messages.py
# ============================================================================
"""
Conversation data model
- Message: one immutable conversation turn
- Document: one extracted PDF, replaced wholesale, never mutated
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class MessageRole(str, Enum):
    """Speaker of a conversation turn, as named by the completion API."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class Message:
    role: MessageRole
    content: str

    def __post_init__(self):
        # Accept plain strings ("user") as well as enum members
        object.__setattr__(self, "role", MessageRole(self.role))

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(MessageRole.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(MessageRole.ASSISTANT, content)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(MessageRole.SYSTEM, content)

    def to_dict(self) -> Dict[str, str]:
        """Wire form used in the completion request body."""
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(MessageRole(data["role"]), data["content"])


@dataclass(frozen=True)
class Document:
    """
    An uploaded PDF after text extraction.

    Identity is `document_id`: two loads of the same file are two
    documents with different ids.
    """
    document_id: str
    name: str
    size: int
    page_count: int
    text: Optional[str] = ""

    def __post_init__(self):
        # Absent text is stored as empty
        if self.text is None:
            object.__setattr__(self, "text", "")

    @property
    def has_text(self) -> bool:
        """False when extraction produced nothing but whitespace."""
        return bool(self.text and self.text.strip())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_id": self.document_id,
            "name": self.name,
            "size": self.size,
            "page_count": self.page_count,
            "char_count": len(self.text),
        }
