# ============================================================================
# tests/unit/test_api.py
# ============================================================================
"""
Tests for the FastAPI backend (transport replaced by FakeTransport)
"""

import runpy

import pytest
import uvicorn
from fastapi.testclient import TestClient

from conftest import FakeTransport, make_pdf
import api.main
from api.main import app, extractor, get_api_key, get_transport, sessions
from pdf_chat.prompts import AUTO_ANALYSIS_PROMPT
from pdf_chat.utils.exceptions import ProviderError


LAB_PDF = make_pdf(["Blood test results\nCholesterol 190 mg/dL\nGlucose 92 mg/dL\nTSH 2.1"])
NOTES_PDF = make_pdf(["Team offsite agenda\nMorning: planning\nAfternoon: hiking"])


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    app.dependency_overrides[get_transport] = lambda: transport
    app.dependency_overrides[get_api_key] = lambda: "sk-test"
    sessions.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
    sessions.clear()


@pytest.fixture
def session_id(client):
    return client.post("/api/sessions").json()["session_id"]


def _upload(client, session_id, data, name="report.pdf", content_type="application/pdf"):
    return client.post(
        f"/api/sessions/{session_id}/document",
        files={"file": (name, data, content_type)},
    )


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_health(client, transport):
    body = client.get("/api/health").json()
    assert body["status"] == "healthy"
    assert body["api_key_configured"] is True
    assert body["transport"]["model"] == "fake-model"


def test_chat_round_trip(client, transport, session_id):
    transport.replies = ["Hello there"]
    response = client.post(f"/api/sessions/{session_id}/messages", json={"content": "Hi"})

    assert response.status_code == 200
    assert response.json() == {"role": "assistant", "content": "Hello there"}

    state = client.get(f"/api/sessions/{session_id}").json()
    assert [m["role"] for m in state["messages"]] == ["user", "assistant"]
    assert state["is_loading"] is False


def test_unknown_session(client):
    response = client.post("/api/sessions/nope/messages", json={"content": "Hi"})
    assert response.status_code == 404


def test_blank_message(client, session_id):
    response = client.post(f"/api/sessions/{session_id}/messages", json={"content": "  "})
    assert response.status_code == 400


def test_provider_failure(client, transport, session_id):
    transport.replies = [ProviderError("Invalid credentials", status=401)]
    response = client.post(f"/api/sessions/{session_id}/messages", json={"content": "Hi"})

    assert response.status_code == 502
    assert "Invalid credentials" in response.json()["detail"]

    state = client.get(f"/api/sessions/{session_id}").json()
    assert [m["role"] for m in state["messages"]] == ["user"]


def test_malformed_reply(client, transport, session_id):
    transport.replies = [{"choices": []}]
    response = client.post(f"/api/sessions/{session_id}/messages", json={"content": "Hi"})
    assert response.status_code == 502


def test_missing_api_key(client, session_id):
    app.dependency_overrides[get_api_key] = lambda: ""
    sid = client.post("/api/sessions").json()["session_id"]
    response = client.post(f"/api/sessions/{sid}/messages", json={"content": "Hi"})
    assert response.status_code == 500


def test_upload_medical_report_auto_analyzes(client, transport, session_id):
    transport.replies = ["ANALYSIS:\nAll values are within range."]
    response = _upload(client, session_id, LAB_PDF)

    assert response.status_code == 200
    body = response.json()
    assert body["document"]["is_medical"] is True
    assert body["document"]["auto_analysis_done"] is True
    assert body["document"]["page_count"] == 1
    assert body["auto_reply"]["content"].startswith("ANALYSIS:")

    messages, _ = transport.calls[0]
    assert messages[-1].content == AUTO_ANALYSIS_PROMPT


def test_upload_generic_document(client, transport, session_id):
    response = _upload(client, session_id, NOTES_PDF, name="agenda.pdf")

    body = response.json()
    assert body["document"]["is_medical"] is False
    assert body["auto_reply"] is None
    assert transport.calls == []


def test_auto_analysis_failure_reported(client, transport, session_id):
    transport.replies = [ProviderError("Service unavailable", status=503)]
    response = _upload(client, session_id, LAB_PDF)

    assert response.status_code == 200
    body = response.json()
    assert body["auto_reply"] is None
    assert "Service unavailable" in body["auto_analysis_error"]


def test_upload_rejects_non_pdf(client, session_id):
    response = _upload(client, session_id, b"hello", name="notes.txt", content_type="text/plain")
    assert response.status_code == 400


def test_upload_oversize_rejected_before_extraction(client, session_id, monkeypatch):
    def _extract(*args, **kwargs):
        raise AssertionError("oversize upload reached extraction")

    monkeypatch.setattr(extractor, "max_bytes", 64)
    monkeypatch.setattr(extractor, "extract", _extract)

    response = _upload(client, session_id, LAB_PDF)

    assert response.status_code == 400
    assert "too large" in response.json()["detail"]
    assert sessions[session_id].document is None


def test_upload_unreadable_pdf(client, session_id):
    response = _upload(client, session_id, b"not really a pdf", name="broken.pdf")
    assert response.status_code == 422


def test_clear_document(client, transport, session_id):
    _upload(client, session_id, NOTES_PDF, name="agenda.pdf")
    client.delete(f"/api/sessions/{session_id}/document")

    client.post(f"/api/sessions/{session_id}/messages", json={"content": "Hi"})
    messages, _ = transport.calls[-1]
    assert [m.role.value for m in messages] == ["user"]


def test_delete_session(client, session_id):
    assert client.delete(f"/api/sessions/{session_id}").status_code == 200
    assert client.get(f"/api/sessions/{session_id}").status_code == 404


def test_main_runs_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

    runpy.run_path(api.main.__file__, run_name="__main__")

    assert calls == [{"host": "0.0.0.0", "port": 8000}]
