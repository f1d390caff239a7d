from sqlalchemy.future import select

from app.models.task import Task
from tests.conftest import auth_headers


async def test_create_task_defaults(client, pro_headers):
    response = await client.post("/api/v1/tasks", json={"title": "Buy milk"}, headers=pro_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    task = body["data"]
    assert task["title"] == "Buy milk"
    assert task["completed"] is False
    assert task["priority"] == "medium"
    assert task["tags"] == []
    assert task["parentTaskId"] is None


async def test_create_task_requires_title(client, pro_headers):
    response = await client.post("/api/v1/tasks", json={"description": "no title"}, headers=pro_headers)
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "title" in response.json()["error"]["message"]


async def test_tasks_are_isolated_between_users(client, pro_headers, bob_pro_headers):
    created = await client.post("/api/v1/tasks", json={"title": "Buy milk"}, headers=pro_headers)
    task_id = created.json()["data"]["id"]

    listing = await client.get("/api/v1/tasks", headers=bob_pro_headers)
    assert listing.status_code == 200
    assert listing.json()["data"] == []

    for method in ("get", "delete"):
        response = await getattr(client, method)(f"/api/v1/tasks/{task_id}", headers=bob_pro_headers)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Task not found"

    response = await client.put(f"/api/v1/tasks/{task_id}", json={"title": "Mine now"}, headers=bob_pro_headers)
    assert response.status_code == 404

    still_there = await client.get(f"/api/v1/tasks/{task_id}", headers=pro_headers)
    assert still_there.json()["data"]["title"] == "Buy milk"


async def test_pro_gate(client, db, alice):
    unauthenticated = await client.get("/api/v1/tasks")
    assert unauthenticated.status_code == 401
    assert unauthenticated.json() == {"success": False, "error": {"message": "Authentication required"}}

    bad_token = await client.get("/api/v1/tasks", headers={"Authorization": "Bearer nope"})
    assert bad_token.status_code == 401
    assert bad_token.json()["error"]["message"] == "Invalid or expired token"

    headers = await auth_headers(db, alice)
    response = await client.get("/api/v1/tasks", headers=headers)
    assert response.status_code == 403
    assert response.json()["error"]["message"] == (
        "Pro subscription required. Please upgrade to access this feature."
    )


async def test_subtasks_listing_and_detail(client, pro_headers):
    parent = (await client.post("/api/v1/tasks", json={"title": "Trip"}, headers=pro_headers)).json()["data"]
    child = (await client.post(
        "/api/v1/tasks", json={"title": "Pack", "parentTaskId": parent["id"]}, headers=pro_headers
    )).json()["data"]

    top_level = (await client.get("/api/v1/tasks", headers=pro_headers)).json()["data"]
    assert [t["id"] for t in top_level] == [parent["id"]]

    children = (await client.get(
        "/api/v1/tasks", params={"parentTaskId": parent["id"]}, headers=pro_headers
    )).json()["data"]
    assert [t["id"] for t in children] == [child["id"]]

    detail = (await client.get(f"/api/v1/tasks/{parent['id']}", headers=pro_headers)).json()["data"]
    assert [t["id"] for t in detail["subtasks"]] == [child["id"]]

    child_detail = (await client.get(f"/api/v1/tasks/{child['id']}", headers=pro_headers)).json()["data"]
    assert child_detail["parentTask"]["id"] == parent["id"]

    await client.delete(f"/api/v1/tasks/{parent['id']}", headers=pro_headers)
    gone = await client.get(f"/api/v1/tasks/{child['id']}", headers=pro_headers)
    assert gone.status_code == 404


async def test_filters_ordering_and_toggle(client, pro_headers):
    await client.post("/api/v1/tasks", json={"title": "B", "position": 2, "priority": "high"}, headers=pro_headers)
    a = (await client.post(
        "/api/v1/tasks", json={"title": "A", "position": 1, "category": "work"}, headers=pro_headers
    )).json()["data"]

    ordered = (await client.get("/api/v1/tasks", headers=pro_headers)).json()["data"]
    assert [t["title"] for t in ordered] == ["A", "B"]

    high = (await client.get("/api/v1/tasks", params={"priority": "high"}, headers=pro_headers)).json()["data"]
    assert [t["title"] for t in high] == ["B"]

    work = (await client.get("/api/v1/tasks", params={"category": "work"}, headers=pro_headers)).json()["data"]
    assert [t["title"] for t in work] == ["A"]

    toggled = await client.patch(f"/api/v1/tasks/{a['id']}/toggle", headers=pro_headers)
    assert toggled.json()["data"]["completed"] is True

    done = (await client.get("/api/v1/tasks", params={"completed": "true"}, headers=pro_headers)).json()["data"]
    assert [t["title"] for t in done] == ["A"]


async def test_update_is_partial(client, pro_headers):
    task = (await client.post(
        "/api/v1/tasks", json={"title": "Write", "description": "draft", "tags": ["a"]}, headers=pro_headers
    )).json()["data"]

    updated = await client.put(f"/api/v1/tasks/{task['id']}", json={"title": "Write more"}, headers=pro_headers)

    assert updated.status_code == 200
    data = updated.json()["data"]
    assert data["title"] == "Write more"
    assert data["description"] == "draft"
    assert data["tags"] == ["a"]


async def test_cannot_attach_to_another_users_parent_or_workspace(client, pro_headers, bob_pro_headers):
    parent = (await client.post("/api/v1/tasks", json={"title": "Alice's"}, headers=pro_headers)).json()["data"]
    workspace = (await client.post("/api/v1/workspaces", json={"name": "Alice's"}, headers=pro_headers)).json()["data"]

    child = await client.post(
        "/api/v1/tasks", json={"title": "Sneaky", "parentTaskId": parent["id"]}, headers=bob_pro_headers
    )
    assert child.status_code == 404
    assert child.json()["error"]["message"] == "Parent task not found"

    scoped = await client.post(
        "/api/v1/tasks", json={"title": "Sneaky", "workspaceId": workspace["id"]}, headers=bob_pro_headers
    )
    assert scoped.status_code == 404
    assert scoped.json()["error"]["message"] == "Workspace not found"

    own = (await client.post("/api/v1/tasks", json={"title": "Bob's"}, headers=bob_pro_headers)).json()["data"]
    moved = await client.put(
        f"/api/v1/tasks/{own['id']}", json={"parentTaskId": parent["id"]}, headers=bob_pro_headers
    )
    assert moved.status_code == 404

    listing = (await client.get("/api/v1/tasks", params={"parentTaskId": parent["id"]}, headers=pro_headers)).json()
    assert listing["data"] == []


async def test_task_cannot_be_its_own_parent(client, pro_headers):
    task = (await client.post("/api/v1/tasks", json={"title": "Loop"}, headers=pro_headers)).json()["data"]
    response = await client.put(f"/api/v1/tasks/{task['id']}", json={"parentTaskId": task["id"]}, headers=pro_headers)
    assert response.status_code == 400


async def test_deleting_a_task_leaves_other_users_rows_alone(client, db, alice, bob, pro_headers):
    parent = (await client.post("/api/v1/tasks", json={"title": "Alice's"}, headers=pro_headers)).json()["data"]
    # A row pointing across users can only come from outside the API
    foreign = Task(user_id=bob.id, title="Bob's", parent_task_id=parent["id"])
    db.add(foreign)
    await db.commit()
    foreign_id = foreign.id

    response = await client.delete(f"/api/v1/tasks/{parent['id']}", headers=pro_headers)
    assert response.status_code == 200

    db.expire_all()
    result = await db.execute(select(Task).where(Task.id == foreign_id))
    assert result.scalar_one_or_none() is not None


async def test_other_resources_check_referenced_ids(client, pro_headers, bob_pro_headers):
    task = (await client.post("/api/v1/tasks", json={"title": "Alice's"}, headers=pro_headers)).json()["data"]
    workspace = (await client.post("/api/v1/workspaces", json={"name": "Alice's"}, headers=pro_headers)).json()["data"]

    attempts = [
        ("/api/v1/pomodoro", {"duration": 25, "type": "work", "taskId": task["id"]}),
        ("/api/v1/habits", {"name": "Run", "workspaceId": workspace["id"]}),
        ("/api/v1/countdowns", {"name": "Ship", "targetDate": "2027-01-01T00:00:00", "workspaceId": workspace["id"]}),
        ("/api/v1/sync", {"dataType": "notes", "data": {}, "version": 1, "workspaceId": workspace["id"]}),
        ("/api/v1/tabstash", {"name": "Tabs", "tabs": [], "workspaceId": workspace["id"]}),
        ("/api/v1/ai/conversations", {"type": "notes", "workspaceId": workspace["id"]}),
    ]
    for url, body in attempts:
        response = await client.post(url, json=body, headers=bob_pro_headers)
        assert response.status_code == 404, url

    upload = await client.post(
        "/api/v1/files/upload",
        files={"file": ("a.png", b"\x89PNG\r\n\x1a\n", "image/png")},
        data={"workspaceId": workspace["id"]},
        headers=bob_pro_headers,
    )
    assert upload.status_code == 404
