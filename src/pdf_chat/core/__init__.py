# ============================================================================
# src/pdf_chat/core/__init__.py
# ============================================================================
"""
Core conversation logic: data model, context assembly, chat session
"""

from .messages import Message, MessageRole, Document
from .context_assembler import ContextAssembler, build_request, extract_reply
from .chat_session import ChatSession, DocumentSession

__all__ = [
    "Message",
    "MessageRole",
    "Document",
    "ContextAssembler",
    "build_request",
    "extract_reply",
    "ChatSession",
    "DocumentSession",
]
