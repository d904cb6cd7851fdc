# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for PDF Chat Assistant

Provides REST API for uploading a PDF and chatting about it.
Conversations live in memory for the lifetime of the process.
"""

import sys
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List

logger = logging.getLogger(__name__)

from fastapi import FastAPI, UploadFile, File, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from contextlib import asynccontextmanager

from pdf_chat.config import llm_settings, logging_settings
from pdf_chat.core import ChatSession
from pdf_chat.extractors import PDFExtractor
from pdf_chat.llm import BaseChatTransport, create_transport
from pdf_chat.utils import (
    setup_logging,
    PdfChatError,
    ProviderError,
    MalformedResponseError,
    ExtractionError,
    InvalidFileError,
    ConfigurationError,
    RequestInProgressError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        level=logging_settings.LOG_LEVEL,
        log_file=logging_settings.LOG_FILE,
        format_json=logging_settings.LOG_JSON,
    )
    if not llm_settings.OPENROUTER_API_KEY:
        logger.warning("OPENROUTER_API_KEY is not set; chat requests will be rejected")
    yield
    await create_transport().close()


app = FastAPI(
    title="PDF Chat Assistant API",
    description="Chat with an uploaded PDF, with blood-test report analysis",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory conversation registry
sessions: Dict[str, ChatSession] = {}

extractor = PDFExtractor()


# ============================================================================
# Dependencies
# ============================================================================

def get_transport() -> BaseChatTransport:
    return create_transport()


def get_api_key() -> str:
    return llm_settings.OPENROUTER_API_KEY


def get_session(session_id: str) -> ChatSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# ============================================================================
# Models
# ============================================================================

class ChatRequest(BaseModel):
    content: str


class MessageOut(BaseModel):
    role: str
    content: str


class SessionCreated(BaseModel):
    session_id: str


class DocumentUploaded(BaseModel):
    document: Dict[str, Any]
    auto_reply: Optional[MessageOut] = None
    auto_analysis_error: Optional[str] = None


class SessionState(BaseModel):
    session_id: str
    messages: List[MessageOut]
    document: Optional[Dict[str, Any]] = None
    is_loading: bool


def _http_error(e: PdfChatError) -> HTTPException:
    """Map a chat error to the HTTP status the client sees."""
    if isinstance(e, InvalidFileError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, ExtractionError):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, RequestInProgressError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, ConfigurationError):
        return HTTPException(status_code=500, detail=str(e))
    if isinstance(e, (ProviderError, MalformedResponseError)):
        return HTTPException(
            status_code=502,
            detail=f"Failed to get a response. Please try again. ({e})"
        )
    return HTTPException(status_code=500, detail=str(e))


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "PDF Chat Assistant API"}


@app.get("/api/health")
async def health(
    transport: BaseChatTransport = Depends(get_transport),
    api_key: str = Depends(get_api_key),
):
    """Health check for monitoring."""
    return {
        "status": "healthy",
        "sessions": len(sessions),
        "api_key_configured": bool(api_key),
        "transport": transport.get_statistics(),
    }


@app.post("/api/sessions", response_model=SessionCreated)
async def create_session(
    transport: BaseChatTransport = Depends(get_transport),
    api_key: str = Depends(get_api_key),
):
    """Start a new conversation."""
    session = ChatSession(transport, api_key)
    sessions[session.session_id] = session
    logger.info(f"Created session {session.session_id}")
    return SessionCreated(session_id=session.session_id)


@app.get("/api/sessions/{session_id}", response_model=SessionState)
async def get_session_state(session: ChatSession = Depends(get_session)):
    return session.to_dict()


@app.delete("/api/sessions/{session_id}")
async def delete_session(session: ChatSession = Depends(get_session)):
    sessions.pop(session.session_id, None)
    return {"deleted": session.session_id}


@app.post("/api/sessions/{session_id}/document", response_model=DocumentUploaded)
async def upload_document(
    file: UploadFile = File(...),
    session: ChatSession = Depends(get_session),
):
    """
    Upload a PDF as the conversation's active document.

    A blood-test report uploaded into an empty conversation is analyzed
    right away; the reply (or the reason it failed) is returned with the
    document info.
    """
    try:
        if file.size is not None:
            # Reject by declared size before buffering the upload
            extractor.validate(file.filename, file.size, file.content_type)
        content = await file.read()
        document = extractor.extract(
            content,
            name=file.filename,
            content_type=file.content_type,
        )
    except ExtractionError as e:
        logger.warning(f"Rejected upload {file.filename}: {e}")
        raise _http_error(e) from e

    document_session = session.load_document(document)

    response = DocumentUploaded(document=document_session.to_dict())
    try:
        reply = await session.maybe_auto_analyze()
        if reply is not None:
            response.auto_reply = MessageOut(**reply.to_dict())
    except PdfChatError as e:
        logger.error(f"Auto-analysis failed for session {session.session_id}: {e}")
        response.auto_analysis_error = _http_error(e).detail

    response.document = document_session.to_dict()
    return response


@app.delete("/api/sessions/{session_id}/document")
async def clear_document(session: ChatSession = Depends(get_session)):
    session.clear_document()
    return {"session_id": session.session_id, "document": None}


@app.post("/api/sessions/{session_id}/messages", response_model=MessageOut)
async def send_message(
    request: ChatRequest,
    session: ChatSession = Depends(get_session),
):
    """Send a user message and return the assistant reply."""
    if not request.content.strip():
        raise HTTPException(status_code=400, detail="Message cannot be empty")

    try:
        reply = await session.send_message(request.content)
    except PdfChatError as e:
        raise _http_error(e) from e

    return MessageOut(**reply.to_dict())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
