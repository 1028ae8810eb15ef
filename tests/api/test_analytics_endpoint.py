"""
Test suite for the analytics endpoint.

System role: Verification of usage reporting HTTP API
"""

import pytest


@pytest.mark.usefixtures("db_app")
class TestAnalyticsEndpoint:
    """Test suite for /api/analytics/summary."""

    @pytest.mark.asyncio
    async def test_summary_should_count_sessions_and_messages(self, client) -> None:
        # Arrange
        created = await client.post("/api/sessions", json={})
        session_id = created.json()["session"]["id"]
        await client.post(
            "/api/messages",
            json={"session_id": session_id, "type": "assistant", "content": "A", "response_time_ms": 300},
        )

        # Act
        response = await client.get("/api/analytics/summary")

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "total_sessions": 1,
            "total_messages": 1,
            "total_searches": 0,
            "avg_search_duration_ms": None,
            "avg_response_time_ms": 300.0,
        }
