"""Integration tests for API endpoints.

These tests verify API endpoints work correctly end-to-end.
"""

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient


def _create(test_client: TestClient, content: str) -> dict:
    response = test_client.post("/tasks", json={"content": content})
    assert response.status_code == 201
    return response.json()["task"]


def _contents(test_client: TestClient) -> list:
    return [t["content"] for t in test_client.get("/tasks").json()["tasks"]]


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestHealthEndpoint:
    """Test GET /health."""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestTaskEndpoints:
    """Test task CRUD API endpoints."""

    def test_create_task(self, test_client):
        """Test POST /tasks endpoint."""
        response = test_client.post("/tasks", json={"content": "Buy milk"})

        assert response.status_code == 201
        data = response.json()
        assert "task" in data
        task = data["task"]
        assert task["content"] == "Buy milk"
        assert task["is_completed"] is False
        assert task["id"]

    def test_create_task_strips_line_breaks(self, test_client):
        """Dictated text loses its line breaks."""
        task = _create(test_client, "Call\nthe dentist\r\n")

        assert task["content"] == "Callthe dentist"

    def test_create_blank_task_rejected(self, test_client):
        response = test_client.post("/tasks", json={"content": " \n "})

        assert response.status_code == 400
        assert test_client.get("/tasks").json()["count"] == 0

    def test_list_tasks(self, test_client):
        """Test GET /tasks endpoint."""
        _create(test_client, "Task 1")
        _create(test_client, "Task 2")

        response = test_client.get("/tasks")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [t["content"] for t in data["tasks"]] == ["Task 1", "Task 2"]

    def test_get_task_by_id(self, test_client):
        """Test GET /tasks/{task_id} endpoint."""
        task_id = _create(test_client, "Get Test Task")["id"]

        response = test_client.get(f"/tasks/{task_id}")

        assert response.status_code == 200
        task = response.json()["task"]
        assert task["id"] == task_id
        assert task["content"] == "Get Test Task"

    def test_get_nonexistent_task(self, test_client):
        """Test GET /tasks/{task_id} with nonexistent ID."""
        response = test_client.get("/tasks/nonexistent-id")

        assert response.status_code == 404

    def test_update_task(self, test_client):
        """Test PUT /tasks/{task_id} endpoint."""
        created = _create(test_client, "Original")

        response = test_client.put(f"/tasks/{created['id']}", json={"content": "Updated"})

        assert response.status_code == 200
        task = response.json()["task"]
        assert task["content"] == "Updated"
        assert task["order"] == created["order"]
        assert task["created_at"] == created["created_at"]

    def test_update_task_blank_content(self, test_client):
        task_id = _create(test_client, "Keep me")["id"]

        response = test_client.put(f"/tasks/{task_id}", json={"content": "\n"})

        assert response.status_code == 400
        assert test_client.get(f"/tasks/{task_id}").json()["task"]["content"] == "Keep me"

    def test_update_nonexistent_task(self, test_client):
        response = test_client.put("/tasks/nonexistent-id", json={"content": "x"})

        assert response.status_code == 404

    def test_delete_task(self, test_client):
        """Test DELETE /tasks/{task_id} endpoint."""
        task_id = _create(test_client, "Delete Me")["id"]

        response = test_client.delete(f"/tasks/{task_id}")

        assert response.status_code == 204

        # Verify it's deleted
        assert test_client.get(f"/tasks/{task_id}").status_code == 404
        ids = [t["id"] for t in test_client.get("/tasks").json()["tasks"]]
        assert task_id not in ids

    def test_delete_nonexistent_task(self, test_client):
        assert test_client.delete("/tasks/nonexistent-id").status_code == 404


class TestToggleEndpoint:
    """Test POST /tasks/{task_id}/toggle."""

    def test_completed_task_moves_to_top(self, test_client):
        _create(test_client, "A")
        b = _create(test_client, "B")
        _create(test_client, "C")

        response = test_client.post(f"/tasks/{b['id']}/toggle")

        assert response.status_code == 200
        assert response.json()["task"]["is_completed"] is True
        assert _contents(test_client) == ["B", "A", "C"]

    def test_reopened_task_goes_to_head_of_open_group(self, test_client):
        a = _create(test_client, "A")
        b = _create(test_client, "B")
        _create(test_client, "C")
        test_client.post(f"/tasks/{a['id']}/toggle")
        test_client.post(f"/tasks/{b['id']}/toggle")
        assert _contents(test_client) == ["A", "B", "C"]

        response = test_client.post(f"/tasks/{b['id']}/toggle")

        assert response.json()["task"]["is_completed"] is False
        assert _contents(test_client) == ["A", "B", "C"]
        tasks = test_client.get("/tasks").json()["tasks"]
        assert [t["is_completed"] for t in tasks] == [True, False, False]

    def test_toggle_nonexistent_task(self, test_client):
        assert test_client.post("/tasks/nonexistent-id/toggle").status_code == 404


class TestMoveEndpoint:
    """Test POST /tasks/move."""

    def test_move_first_to_end(self, test_client):
        for content in ["A", "B", "C"]:
            _create(test_client, content)

        response = test_client.post("/tasks/move", json={"source_index": 0, "destination": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert [t["content"] for t in data["tasks"]] == ["B", "C", "A"]
        assert _contents(test_client) == ["B", "C", "A"]

    def test_move_last_to_front(self, test_client):
        for content in ["A", "B", "C"]:
            _create(test_client, content)

        response = test_client.post("/tasks/move", json={"source_index": 2, "destination": 0})

        assert [t["content"] for t in response.json()["tasks"]] == ["C", "A", "B"]

    def test_move_rejects_negative_index(self, test_client):
        response = test_client.post("/tasks/move", json={"source_index": -1, "destination": 0})

        assert response.status_code == 422


class TestSettingsEndpoints:
    """Test GET/PUT /settings."""

    def test_default_reset_hour(self, test_client, now):
        response = test_client.get("/settings")

        assert response.status_code == 200
        data = response.json()
        assert data["reset_hour"] == 0
        assert _parse(data["last_reset_at"]) == datetime(2025, 6, 15, 0, 0, tzinfo=timezone.utc)
        assert _parse(data["next_reset_at"]) == datetime(2025, 6, 16, 0, 0, tzinfo=timezone.utc)

    def test_update_reset_hour(self, test_client):
        response = test_client.put("/settings", json={"reset_hour": 13})

        assert response.status_code == 200
        data = response.json()
        assert data["reset_hour"] == 13
        # 12:00 is before today's 13:00 boundary, so the last reset was yesterday.
        assert _parse(data["last_reset_at"]) == datetime(2025, 6, 14, 13, 0, tzinfo=timezone.utc)
        assert _parse(data["next_reset_at"]) == datetime(2025, 6, 15, 13, 0, tzinfo=timezone.utc)
        assert test_client.get("/settings").json()["reset_hour"] == 13

    def test_reset_hour_out_of_range(self, test_client):
        assert test_client.put("/settings", json={"reset_hour": 24}).status_code == 422
        assert test_client.put("/settings", json={"reset_hour": -1}).status_code == 422
        assert test_client.get("/settings").json()["reset_hour"] == 0


class TestResetEndpoint:
    """Test POST /reset."""

    def test_reset_keeps_tasks_from_today(self, test_client):
        _create(test_client, "Today")

        response = test_client.post("/reset")

        assert response.status_code == 200
        data = response.json()
        assert data["deleted_count"] == 0
        assert _parse(data["boundary"]) == datetime(2025, 6, 15, 0, 0, tzinfo=timezone.utc)
        assert _contents(test_client) == ["Today"]

    def test_reset_purges_after_boundary_passes(self, test_client, fixed_clock):
        """Tasks from yesterday are gone once the next day's reset hour passes."""
        test_client.put("/settings", json={"reset_hour": 9})
        first = _create(test_client, "Yesterday 1")
        test_client.post(f"/tasks/{first['id']}/toggle")
        _create(test_client, "Yesterday 2")

        # 08:00 the next day: still before the 09:00 boundary.
        fixed_clock.advance(timedelta(hours=20))
        assert test_client.post("/reset").json()["deleted_count"] == 0
        assert test_client.get("/tasks").json()["count"] == 2

        fixed_clock.advance(timedelta(hours=2))
        later = _create(test_client, "Fresh")
        response = test_client.post("/reset")

        data = response.json()
        assert data["deleted_count"] == 2
        assert _parse(data["boundary"]) == datetime(2025, 6, 16, 9, 0, tzinfo=timezone.utc)
        tasks = test_client.get("/tasks").json()["tasks"]
        assert [t["id"] for t in tasks] == [later["id"]]
