"""End-to-end tests of the task API against a real SQLite database."""

import pytest


@pytest.mark.integration
class TestTaskLifecycle:
    """Create, read, update and delete through HTTP."""

    def test_fresh_database_has_no_tasks(self, test_client):
        response = test_client.get("/tasks")

        assert response.status_code == 404
        assert response.json() == {"message": "No tasks found"}

    def test_create_then_fetch(self, test_client):
        created = test_client.post("/tasks", json={"title": "Buy milk", "description": "2%"})

        assert created.status_code == 201
        task = created.json()
        assert task["id"] > 0
        assert task["status"] == "Pending"
        assert task["description"] == "2%"

        fetched = test_client.get(f"/tasks/{task['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == task

        listed = test_client.get("/tasks")
        assert listed.status_code == 200
        assert listed.json() == [task]

    def test_short_title_is_rejected_and_not_stored(self, test_client):
        response = test_client.post("/tasks", json={"title": "ab"})

        assert response.status_code == 400
        assert response.json() == {
            "message": "Validation failed",
            "errors": ["title must be at least 3 characters long"],
        }
        assert test_client.get("/tasks").status_code == 404

    def test_every_violation_is_reported(self, test_client):
        response = test_client.post("/tasks", json={"title": "x" * 101, "description": 5, "status": "Later"})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "title must be at most 100 characters long",
            "description must be a string",
            "status must be one of: Pending, InProgress, Completed (got 'Later')",
        ]

    @pytest.mark.parametrize(
        ("raw", "stored"),
        [
            ("Pendente", "Pending"),
            ("In Progress", "InProgress"),
            ("em andamento", "InProgress"),
            ("Concluído", "Completed"),
            ("Finalizado", "Completed"),
        ],
    )
    def test_status_synonyms_are_stored_canonically(self, test_client, raw, stored):
        response = test_client.post("/tasks", json={"title": "Synonym task", "status": raw})

        assert response.status_code == 201
        assert response.json()["status"] == stored

    def test_partial_update_keeps_other_fields(self, test_client):
        task = test_client.post("/tasks", json={"title": "Write report", "description": "Q3"}).json()

        response = test_client.put(f"/tasks/{task['id']}", json={"status": "Em progresso"})

        assert response.status_code == 200
        updated = response.json()
        assert updated["status"] == "InProgress"
        assert updated["title"] == "Write report"
        assert updated["description"] == "Q3"
        assert updated["createdAt"] == task["createdAt"]

    def test_update_ignores_id_and_created_at(self, test_client):
        task = test_client.post("/tasks", json={"title": "Immutable fields"}).json()

        response = test_client.put(
            f"/tasks/{task['id']}",
            json={"id": 999, "createdAt": "2000-01-01T00:00:00Z", "title": "Renamed"},
        )

        assert response.status_code == 200
        assert response.json()["id"] == task["id"]
        assert response.json()["createdAt"] == task["createdAt"]

    def test_update_missing_task(self, test_client):
        response = test_client.put("/tasks/999", json={"title": "Whatever"})

        assert response.status_code == 404
        assert response.json() == {"message": "Task not found"}

    def test_update_missing_task_reports_not_found_before_validation(self, test_client):
        response = test_client.put("/tasks/999", json={"title": "ab"})

        assert response.status_code == 404

    def test_invalid_update_is_rejected(self, test_client):
        task = test_client.post("/tasks", json={"title": "Valid title"}).json()

        response = test_client.put(f"/tasks/{task['id']}", json={"status": "Done"})

        assert response.status_code == 400
        assert test_client.get(f"/tasks/{task['id']}").json()["status"] == "Pending"

    def test_delete_twice(self, test_client):
        task = test_client.post("/tasks", json={"title": "Disposable"}).json()

        first = test_client.delete(f"/tasks/{task['id']}")
        second = test_client.delete(f"/tasks/{task['id']}")

        assert first.status_code == 200
        assert first.json() == {"message": "Task deleted successfully"}
        assert second.status_code == 404
        assert test_client.get(f"/tasks/{task['id']}").status_code == 404

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    @pytest.mark.parametrize("task_id", ["99999999999999999999", "-99999999999999999999"])
    def test_ids_beyond_sqlite_range_are_not_found(self, test_client, method, task_id):
        response = test_client.request(method, f"/tasks/{task_id}", json={"title": "Renamed"})

        assert response.status_code == 404
        assert response.json() == {"message": "Task not found"}

    def test_title_with_nul_is_rejected_not_stored(self, test_client):
        response = test_client.post("/tasks", json={"title": "ab\u0000cdef"})

        assert response.status_code == 400
        assert response.json()["errors"] == ["title must not contain control characters"]
        assert test_client.get("/tasks").status_code == 404

    def test_ids_increase(self, test_client):
        first = test_client.post("/tasks", json={"title": "First task"}).json()
        second = test_client.post("/tasks", json={"title": "Second task"}).json()

        assert second["id"] > first["id"]
        assert [task["id"] for task in test_client.get("/tasks").json()] == [first["id"], second["id"]]
