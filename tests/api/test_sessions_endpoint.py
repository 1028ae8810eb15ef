"""
Test suite for session endpoints.

Runs the real ChatService against the in-memory database through the
HTTP layer.

System role: Verification of session management HTTP API
"""

import uuid

import pytest


async def _create_session(client, **body) -> dict:
    response = await client.post("/api/sessions", json=body)
    assert response.status_code == 200
    return response.json()["session"]


async def _save_message(client, session_id: str, type_: str, content: str, **extra) -> dict:
    response = await client.post(
        "/api/messages",
        json={"session_id": session_id, "type": type_, "content": content, **extra},
    )
    assert response.status_code == 200, response.text
    return response.json()["message"]


@pytest.mark.usefixtures("db_app")
class TestSessionEndpoints:
    """Test suite for /api/sessions."""

    @pytest.mark.asyncio
    async def test_create_session_should_return_session_envelope(self, client) -> None:
        # Act
        response = await client.post("/api/sessions", json={"metadata": {"origin": "web"}})

        # Assert
        assert response.status_code == 200
        session = response.json()["session"]
        assert session["title"] == "New Chat"
        assert session["message_count"] == 0
        assert session["is_active"] is True
        assert session["metadata"] == {"origin": "web"}
        uuid.UUID(session["id"])

    @pytest.mark.asyncio
    async def test_list_sessions_should_return_most_recent_first(self, client) -> None:
        # Arrange
        older = await _create_session(client, title="older")
        await _create_session(client, title="newer")
        await _save_message(client, older["id"], "user", "bump")

        # Act
        response = await client.get("/api/sessions")

        # Assert
        assert response.status_code == 200
        assert [s["title"] for s in response.json()["sessions"]] == ["older", "newer"]

    @pytest.mark.asyncio
    async def test_list_sessions_should_reject_non_positive_limit(self, client) -> None:
        response = await client.get("/api/sessions", params={"limit": 0})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_session_should_include_messages_and_sources(self, client) -> None:
        # Arrange
        session = await _create_session(client)
        await _save_message(client, session["id"], "user", "What is quantum computing?")
        await _save_message(
            client,
            session["id"],
            "ai",
            "Quantum computers use qubits.",
            sources=[
                {"title": "Qubit", "url": "https://en.wikipedia.org/wiki/Qubit", "snippet": "Unit"},
                {"title": "IBM", "url": "https://www.ibm.com/quantum", "score": 0.9},
            ],
        )

        # Act
        response = await client.get(f"/api/sessions/{session['id']}")

        # Assert
        assert response.status_code == 200
        loaded = response.json()["session"]
        assert loaded["message_count"] == 2
        assert [m["type"] for m in loaded["messages"]] == ["user", "assistant"]
        assert [m["sequence_number"] for m in loaded["messages"]] == [1, 2]
        sources = loaded["messages"][1]["sources"]
        assert [s["display_order"] for s in sources] == [1, 2]
        assert sources[0]["domain"] == "en.wikipedia.org"
        assert sources[1]["favicon_url"] == "https://www.ibm.com/favicon.ico"

    @pytest.mark.asyncio
    async def test_get_unknown_session_should_return_404(self, client) -> None:
        response = await client.get(f"/api/sessions/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["detail"].startswith("Session not found")

    @pytest.mark.asyncio
    async def test_get_session_with_malformed_id_should_return_422(self, client) -> None:
        response = await client.get("/api/sessions/not-a-uuid")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_session_should_rename(self, client) -> None:
        # Arrange
        session = await _create_session(client)

        # Act
        response = await client.put(f"/api/sessions/{session['id']}", json={"title": "Renamed"})

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True}
        loaded = (await client.get(f"/api/sessions/{session['id']}")).json()["session"]
        assert loaded["title"] == "Renamed"

    @pytest.mark.asyncio
    async def test_update_session_with_blank_title_should_return_400(self, client) -> None:
        session = await _create_session(client)
        response = await client.put(f"/api/sessions/{session['id']}", json={"title": " "})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_over_long_title_should_be_rejected_before_any_write(self, client) -> None:
        # Arrange
        session = await _create_session(client, title="Kept")
        long_title = "t" * 256

        # Act
        created = await client.post("/api/sessions", json={"title": long_title})
        renamed = await client.put(f"/api/sessions/{session['id']}", json={"title": long_title})

        # Assert
        assert created.status_code == 422
        assert renamed.status_code == 422
        sessions = (await client.get("/api/sessions")).json()["sessions"]
        assert [s["title"] for s in sessions] == ["Kept"]

    @pytest.mark.asyncio
    async def test_update_unknown_session_should_return_404(self, client) -> None:
        response = await client.put(f"/api/sessions/{uuid.uuid4()}", json={"title": "x"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_session_should_remove_it_and_be_idempotent(self, client) -> None:
        # Arrange
        session = await _create_session(client)
        await _save_message(client, session["id"], "user", "hello")

        # Act
        first = await client.delete(f"/api/sessions/{session['id']}")
        second = await client.delete(f"/api/sessions/{session['id']}")

        # Assert
        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json() == {"success": True}
        assert (await client.get(f"/api/sessions/{session['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_generate_title_should_use_first_question(self, client) -> None:
        # Arrange
        session = await _create_session(client)
        await _save_message(client, session["id"], "user", "What is quantum computing?")

        # Act
        response = await client.post(f"/api/sessions/{session['id']}/title")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"title": "What is quantum computing?"}

    @pytest.mark.asyncio
    async def test_generate_title_without_user_message_should_return_default(self, client) -> None:
        session = await _create_session(client)
        response = await client.post(f"/api/sessions/{session['id']}/title")
        assert response.json() == {"title": "New Chat"}

    @pytest.mark.asyncio
    async def test_context_should_return_last_messages_in_order(self, client) -> None:
        # Arrange
        session = await _create_session(client)
        for index in range(4):
            await _save_message(client, session["id"], "user", f"m{index}")

        # Act
        response = await client.get(f"/api/sessions/{session['id']}/context", params={"limit": 3})

        # Assert
        assert response.status_code == 200
        assert [m["content"] for m in response.json()["messages"]] == ["m1", "m2", "m3"]
