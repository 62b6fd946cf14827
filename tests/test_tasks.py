"""Task endpoint tests."""

from src.models.comment import Comment


def create_task(client, headers, **fields):
    payload = {"title": "Task", **fields}
    response = client.post("/api/tasks", headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


def test_create_task(client, auth_headers):
    response = client.post(
        "/api/tasks",
        headers=auth_headers,
        json={"title": "Test Task", "description": "Test Description", "priority": "high"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Test Task"
    assert data["user_id"] == auth_headers.user_id
    assert data["status"] == "pending"
    assert data["priority"] == "high"


def test_create_task_requires_title(client, auth_headers):
    response = client.post(
        "/api/tasks",
        headers=auth_headers,
        json={"description": "Test Description", "priority": "high"},
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "title"


def test_create_task_rejects_bad_enums(client, auth_headers):
    response = client.post(
        "/api/tasks", headers=auth_headers, json={"title": "T", "status": "done"}
    )
    assert response.status_code == 400


def test_create_task_ignores_owner_in_body(client, auth_headers, other_auth_headers):
    data = create_task(client, auth_headers, user_id=other_auth_headers.user_id)
    assert data["user_id"] == auth_headers.user_id


def test_create_then_get_round_trip(client, auth_headers):
    created = create_task(
        client,
        auth_headers,
        title="Write report",
        description="Quarterly numbers",
        status="in-progress",
        priority="low",
        due_date="2026-12-01T09:00:00Z",
    )

    response = client.get(f"/api/tasks/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    fetched = response.json()
    assert fetched["title"] == "Write report"
    assert fetched["description"] == "Quarterly numbers"
    assert fetched["status"] == "in-progress"
    assert fetched["priority"] == "low"
    assert fetched["due_date"].startswith("2026-12-01T09:00:00")
    assert fetched["id"] == created["id"]
    assert fetched["created_at"]
    assert fetched["updated_at"]


def test_get_tasks_only_returns_own(client, auth_headers, other_auth_headers):
    create_task(client, auth_headers, title="Mine 1")
    create_task(client, auth_headers, title="Mine 2")
    create_task(client, other_auth_headers, title="Theirs")

    response = client.get("/api/tasks", headers=auth_headers)
    assert response.status_code == 200
    assert sorted(t["title"] for t in response.json()) == ["Mine 1", "Mine 2"]


def test_filter_tasks(client, auth_headers):
    create_task(client, auth_headers, title="A", priority="high")
    create_task(client, auth_headers, title="B", priority="low", status="completed")

    response = client.get("/api/tasks?priority=high", headers=auth_headers)
    assert [t["title"] for t in response.json()] == ["A"]

    response = client.get("/api/tasks?status=completed", headers=auth_headers)
    assert [t["title"] for t in response.json()] == ["B"]


def test_sort_tasks(client, auth_headers):
    create_task(client, auth_headers, title="b")
    create_task(client, auth_headers, title="c")
    create_task(client, auth_headers, title="a")

    response = client.get("/api/tasks?sort_by=title:desc", headers=auth_headers)
    assert [t["title"] for t in response.json()] == ["c", "b", "a"]

    response = client.get("/api/tasks?sort_by=title", headers=auth_headers)
    assert [t["title"] for t in response.json()] == ["a", "b", "c"]


def test_sort_tasks_rejects_unknown_field(client, auth_headers):
    response = client.get("/api/tasks?sort_by=password_hash:desc", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_update_task(client, auth_headers, task):
    response = client.put(
        f"/api/tasks/{task['id']}",
        headers=auth_headers,
        json={"title": "Updated Task", "priority": "low"},
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Updated Task"
    assert response.json()["priority"] == "low"
    assert response.json()["description"] == "Test Description"


def test_update_task_can_clear_description(client, auth_headers, task):
    response = client.put(
        f"/api/tasks/{task['id']}", headers=auth_headers, json={"description": None}
    )
    assert response.status_code == 200
    assert response.json()["description"] is None


def test_update_task_invalid_priority(client, auth_headers, task):
    response = client.put(
        f"/api/tasks/{task['id']}", headers=auth_headers, json={"priority": "invalid"}
    )
    assert response.status_code == 400


def test_update_task_ignores_fields_outside_allow_list(
    client, auth_headers, other_auth_headers, task
):
    response = client.put(
        f"/api/tasks/{task['id']}",
        headers=auth_headers,
        json={"user_id": other_auth_headers.user_id, "id": "new-id", "title": "Kept"},
    )
    assert response.status_code == 200
    assert response.json()["user_id"] == auth_headers.user_id
    assert response.json()["id"] == task["id"]


def test_update_other_users_task_is_not_found(client, other_auth_headers, task):
    response = client.put(
        f"/api/tasks/{task['id']}", headers=other_auth_headers, json={"title": "Mine now"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_get_other_users_task_is_not_found(client, other_auth_headers, task):
    response = client.get(f"/api/tasks/{task['id']}", headers=other_auth_headers)
    assert response.status_code == 404


def test_foreign_and_missing_tasks_look_the_same(client, other_auth_headers, task):
    foreign = client.delete(f"/api/tasks/{task['id']}", headers=other_auth_headers)
    missing = client.delete("/api/tasks/does-not-exist", headers=other_auth_headers)
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()


def test_delete_task(client, auth_headers, task, db):
    client.post(
        "/api/comments", headers=auth_headers, json={"content": "Note", "task_id": task["id"]}
    )

    response = client.delete(f"/api/tasks/{task['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}

    response = client.get(f"/api/tasks/{task['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert db.query(Comment).count() == 0


def test_delete_other_users_task_leaves_it(client, auth_headers, other_auth_headers, task):
    response = client.delete(f"/api/tasks/{task['id']}", headers=other_auth_headers)
    assert response.status_code == 404

    response = client.get(f"/api/tasks/{task['id']}", headers=auth_headers)
    assert response.status_code == 200


def test_invalid_task_id_is_not_found(client, auth_headers):
    response = client.delete("/api/tasks/invalidid", headers=auth_headers)
    assert response.status_code == 404
