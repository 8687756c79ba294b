import json

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from drafter.api import routes as routes_module
from drafter.generation_logic import file_processing
from drafter.generation_logic.workspace import WorkspaceRegistry
from drafter.main import app
from tests.fakes import Scripted
from tests.fakes import update_call

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def registry():
    return WorkspaceRegistry(max_workspaces=5)


@pytest.fixture()
def client(gateway, registry):
    """Application client with the model gateway and registry overridden."""
    app.dependency_overrides[routes_module.get_gateway] = lambda: gateway
    app.dependency_overrides[routes_module.get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


def _events(response) -> list[dict]:
    return [json.loads(line) for line in response.text.splitlines() if line.strip()]


def _create_workspace(client) -> str:
    resp = client.post("/api/workspaces")
    assert resp.status_code == status.HTTP_201_CREATED
    return resp.json()["workspace_id"]


def _generate(client, workspace_id, **data):
    form = {"standards": ["GRI 305-1"], "company_name": "Acme", "raw_text": "Scope 1: 120 t"}
    form.update(data)
    return client.post(f"/api/workspaces/{workspace_id}/generate", data=form)


# ---------------------------------------------------------------------------
# Catalogue and workspaces
# ---------------------------------------------------------------------------


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {"status": "ok"}


def test_list_standards(client):
    resp = client.get("/api/standards")
    assert resp.status_code == status.HTTP_200_OK
    codes = [entry["code"] for entry in resp.json()]
    assert "GRI 305-1" in codes


def test_create_and_read_workspace(client):
    workspace_id = _create_workspace(client)

    resp = client.get(f"/api/workspaces/{workspace_id}")

    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["workspace_id"] == workspace_id
    assert body["document"] == ""
    assert body["has_session"] is False


def test_unknown_workspace_is_404(client):
    assert client.get("/api/workspaces/missing").status_code == status.HTTP_404_NOT_FOUND
    assert client.post("/api/workspaces/missing/greet").status_code == status.HTTP_404_NOT_FOUND


# ---------------------------------------------------------------------------
# /generate
# ---------------------------------------------------------------------------


def test_generate_streams_events(client, completions):
    completions.queue(Scripted(text="### Emissions [GRI 305-1]()\n120 t", citations=[("GHG", "https://ghg")]))
    workspace_id = _create_workspace(client)

    resp = _generate(client, workspace_id)

    assert resp.status_code == status.HTTP_200_OK
    assert resp.headers["content-type"].startswith("application/x-ndjson")
    events = _events(resp)
    assert events[0]["type"] == "partial"
    assert events[-1] == {"type": "finished"}
    document = events[-2]["payload"]["document"]
    assert document.endswith("- [GHG](https://ghg)")

    snapshot = client.get(f"/api/workspaces/{workspace_id}").json()
    assert snapshot["document"] == document
    assert snapshot["has_session"] is True


def test_generate_with_files_and_urls(client, completions):
    completions.queue(Scripted(text="draft"))
    workspace_id = _create_workspace(client)

    resp = client.post(
        f"/api/workspaces/{workspace_id}/generate",
        data={"standards": ["GRI 303-3"], "urls": ["https://acme.example/water"], "tone": "brand"},
        files=[("files", ("water.txt", b"Withdrawal 4.2 ML", "text/plain"))],
    )

    assert resp.status_code == status.HTTP_200_OK
    payload = completions.calls[0]
    parts = payload["messages"][0]["content"]
    assert "- https://acme.example/water" in parts[0]["text"]
    assert "Withdrawal 4.2 ML" in parts[1]["text"]
    assert payload["extra_body"] == {"plugins": [{"id": "web"}]}


def test_generate_without_source_is_400(client):
    workspace_id = _create_workspace(client)

    resp = _generate(client, workspace_id, raw_text="  ")

    assert resp.status_code == status.HTTP_400_BAD_REQUEST


def test_generate_without_standards_is_422(client):
    workspace_id = _create_workspace(client)

    missing = client.post(f"/api/workspaces/{workspace_id}/generate", data={"raw_text": "data"})
    blank = _generate(client, workspace_id, standards=["  "])

    assert missing.status_code == 422
    assert missing.json()["error"] == "Input validation failed"
    assert blank.status_code == 422


def test_empty_upload_is_400(client):
    workspace_id = _create_workspace(client)

    resp = client.post(
        f"/api/workspaces/{workspace_id}/generate",
        data={"standards": ["GRI 305-1"]},
        files=[("files", ("empty.txt", b"", "text/plain"))],
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert "empty" in resp.json()["detail"]


def test_oversized_upload_is_413(client, monkeypatch):
    monkeypatch.setattr(file_processing, "MAX_FILE_SIZE", 4)
    workspace_id = _create_workspace(client)

    resp = client.post(
        f"/api/workspaces/{workspace_id}/generate",
        data={"standards": ["GRI 305-1"]},
        files=[("files", ("big.txt", b"0123456789", "text/plain"))],
    )

    assert resp.status_code == 413


# ---------------------------------------------------------------------------
# Dialogue
# ---------------------------------------------------------------------------


def test_chat_before_generation_is_409(client):
    workspace_id = _create_workspace(client)

    assert client.post(f"/api/workspaces/{workspace_id}/chat", data={"message": "hi"}).status_code == status.HTTP_409_CONFLICT
    assert client.post(f"/api/workspaces/{workspace_id}/greet").status_code == status.HTTP_409_CONFLICT


def test_chat_requires_message_or_files(client, completions):
    completions.queue(Scripted(text="draft"))
    workspace_id = _create_workspace(client)
    _generate(client, workspace_id)

    resp = client.post(f"/api/workspaces/{workspace_id}/chat", data={"message": "  "})

    assert resp.status_code == status.HTTP_400_BAD_REQUEST


def test_chat_turn_replaces_document(client, completions):
    completions.queue(
        Scripted(text="draft"),
        Scripted(text="Updating.", tool_calls=[update_call("draft with 120 t")]),
        Scripted(text="Scope 1 is now 120 t."),
    )
    workspace_id = _create_workspace(client)
    _generate(client, workspace_id)

    resp = client.post(f"/api/workspaces/{workspace_id}/chat", data={"message": "Scope 1 is 120 t"})

    events = _events(resp)
    assert events[-2] == {
        "type": "data",
        "payload": {"reply": "Scope 1 is now 120 t.", "updated_document": "draft with 120 t"},
    }
    snapshot = client.get(f"/api/workspaces/{workspace_id}").json()
    assert snapshot["document"] == "draft with 120 t"
    assert [m["role"] for m in snapshot["transcript"]] == ["user", "assistant"]


def test_greet(client, completions):
    completions.queue(Scripted(text="draft"), Scripted(text="Hello! What is the Scope 1 total?"))
    workspace_id = _create_workspace(client)
    _generate(client, workspace_id)

    events = _events(client.post(f"/api/workspaces/{workspace_id}/greet"))

    assert events[-2]["payload"]["reply"] == "Hello! What is the Scope 1 total?"


def test_replace_document(client, completions):
    completions.queue(Scripted(text="draft"))
    workspace_id = _create_workspace(client)
    _generate(client, workspace_id)

    resp = client.put(f"/api/workspaces/{workspace_id}/document", json={"content": "edited by hand"})

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["document"] == "edited by hand"
    assert resp.json()["has_session"] is True
