# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
import uuid

from pdf_chat.core import ChatSession, Document
from pdf_chat.llm.base import BaseChatTransport


def completion(content):
    """Chat-completions response body carrying one assistant message."""
    return {
        "id": "gen-test",
        "choices": [{"message": {"role": "assistant", "content": content}}],
    }


class FakeTransport(BaseChatTransport):
    """
    In-memory transport. Each send() pops the next queued reply: a string
    becomes a completion body, a dict is returned as is, an exception is
    raised. With nothing queued it answers "ok".
    """

    def __init__(self, replies=None):
        super().__init__()
        self.replies = list(replies or [])
        self.calls = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def send(self, messages, api_key):
        self.calls.append((list(messages), api_key))
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            self._record(0.0, failed=True)
            raise reply
        self._record(0.0)
        if isinstance(reply, dict):
            return reply
        return completion(reply)


def make_pdf(pages_text):
    """
    Build a minimal text PDF (Helvetica, one content stream per page).

    Each entry of pages_text is one page; newlines start a new text line.
    """
    n = len(pages_text)
    page_ids = [4 + 2 * i for i in range(n)]
    objs = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        2: (
            "<< /Type /Pages /Kids [%s] /Count %d >>"
            % (" ".join(f"{p} 0 R" for p in page_ids), n)
        ).encode(),
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    for pid, text in zip(page_ids, pages_text):
        ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
        for line in text.split("\n"):
            escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
            ops.append(f"({escaped}) Tj T*")
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")
        objs[pid] = (
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            "/Resources << /Font << /F1 3 0 R >> >> /Contents %d 0 R >>" % (pid + 1)
        ).encode()
        objs[pid + 1] = b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for oid in sorted(objs):
        offsets[oid] = len(out)
        out += f"{oid} 0 obj\n".encode() + objs[oid] + b"\nendobj\n"

    xref_pos = len(out)
    size = max(objs) + 1
    out += f"xref\n0 {size}\n".encode()
    out += b"0000000000 65535 f \n"
    for oid in range(1, size):
        out += f"{offsets[oid]:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_pos}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def sample_lab_text():
    """Sample lab report text for testing"""
    return """
    Quest Diagnostics Laboratory Report

    Patient: John Doe
    Date: 2024-01-15

    COMPLETE BLOOD COUNT (CBC)

    Test                Result      Reference Range    Flag
    ----------------------------------------------------------------
    WBC                 7.2         4.5-11.0 K/uL
    RBC                 4.8         4.5-5.5 M/uL
    Hemoglobin          14.2        13.5-17.5 g/dL
    Hematocrit          42.1        38.8-50.0 %
    Platelets           245         150-400 K/uL
    """


@pytest.fixture
def sample_generic_text():
    """Non-medical document text (no report keywords)"""
    return """
    Quarterly Sales Summary

    Revenue grew 12% in the third quarter, driven by strong demand in the
    northern region. Operating costs remained flat and the team expects
    similar growth next quarter.
    """


def _document(text, name="report.pdf"):
    return Document(
        document_id=str(uuid.uuid4()),
        name=name,
        size=2048,
        page_count=1,
        text=text,
    )


@pytest.fixture
def make_document():
    """Factory for Documents with fresh identifiers"""
    return _document


@pytest.fixture
def lab_document(sample_lab_text):
    return _document(sample_lab_text, name="blood_test.pdf")


@pytest.fixture
def generic_document(sample_generic_text):
    return _document(sample_generic_text, name="sales.pdf")


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def chat_session(fake_transport):
    return ChatSession(fake_transport, api_key="sk-test")
