"""Tests for the Comments API."""


def _task(client, user):
    resp = client.post("/api/v1/tasks", json={
        "title": "Write report",
        "task_owner_id": user.id,
        "assigned_user_id": user.id,
    })
    assert resp.status_code == 201
    return resp.json()


def test_create_comment(client, user):
    task = _task(client, user)
    resp = client.post("/api/v1/comments", json={
        "content": "Draft is ready",
        "task_id": task["id"],
        "user_id": user.id,
    })
    assert resp.status_code == 201
    data = resp.json()
    assert data["content"] == "Draft is ready"
    assert data["task_id"] == task["id"]


def test_comments_listed_on_task_newest_first(client, user):
    task = _task(client, user)
    for content in ("first", "second"):
        client.post("/api/v1/comments", json={"content": content, "task_id": task["id"], "user_id": user.id})

    resp = client.get(f"/api/v1/tasks/{task['slug']}")
    assert [c["content"] for c in resp.json()["comments"]] == ["second", "first"]


def test_create_comment_unknown_task(client, user):
    resp = client.post("/api/v1/comments", json={
        "content": "Hello",
        "task_id": "missing",
        "user_id": user.id,
    })
    assert resp.status_code == 422
    assert resp.json()["errors"] == {"task": ["must exist"]}


def test_create_comment_blank_content(client, user):
    task = _task(client, user)
    resp = client.post("/api/v1/comments", json={"content": "   ", "task_id": task["id"], "user_id": user.id})
    assert resp.status_code == 422


def test_create_comment_too_long(client, user):
    task = _task(client, user)
    resp = client.post("/api/v1/comments", json={"content": "x" * 512, "task_id": task["id"], "user_id": user.id})
    assert resp.status_code == 422
