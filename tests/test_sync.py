from app.services.sync_service import resolve_version


def test_resolve_version():
    assert resolve_version(1, None) == 1
    assert resolve_version(5, 3) == 5
    assert resolve_version(3, 3) == 4
    assert resolve_version(1, 7) == 8


async def test_last_write_wins_with_version_bump(client, pro_headers):
    first = await client.post(
        "/api/v1/sync", json={"dataType": "notes", "data": {"text": "v1"}, "version": 1}, headers=pro_headers
    )
    assert first.status_code == 200
    assert first.json()["data"]["version"] == 1

    stale = await client.post(
        "/api/v1/sync", json={"dataType": "notes", "data": {"text": "v2"}, "version": 1}, headers=pro_headers
    )
    assert stale.json()["data"]["version"] == 2
    assert stale.json()["data"]["data"] == {"text": "v2"}

    fetched = await client.get("/api/v1/sync/notes", headers=pro_headers)
    assert fetched.json()["data"]["data"] == {"text": "v2"}


async def test_workspace_scoping_and_delete(client, pro_headers):
    workspace = (await client.post("/api/v1/workspaces", json={"name": "W"}, headers=pro_headers)).json()["data"]

    await client.post("/api/v1/sync", json={"dataType": "links", "data": [1], "version": 1}, headers=pro_headers)
    await client.post(
        "/api/v1/sync",
        json={"dataType": "links", "data": [2], "version": 1, "workspaceId": workspace["id"]},
        headers=pro_headers,
    )
    await client.post("/api/v1/sync", json={"dataType": "bookmarks", "data": [], "version": 1}, headers=pro_headers)

    unscoped = (await client.get("/api/v1/sync", headers=pro_headers)).json()["data"]
    assert [r["dataType"] for r in unscoped] == ["bookmarks", "links"]

    scoped = (await client.get("/api/v1/sync/links", params={"workspaceId": workspace["id"]}, headers=pro_headers)).json()
    assert scoped["data"]["data"] == [2]

    deleted = await client.delete("/api/v1/sync/links", headers=pro_headers)
    assert deleted.json()["message"] == "Data deleted successfully"

    gone = (await client.get("/api/v1/sync/links", headers=pro_headers)).json()
    assert gone == {"success": True, "data": None}

    kept = (await client.get("/api/v1/sync/links", params={"workspaceId": workspace["id"]}, headers=pro_headers)).json()
    assert kept["data"]["data"] == [2]


async def test_sync_requires_fields(client, pro_headers):
    response = await client.post("/api/v1/sync", json={"dataType": "notes", "version": 1}, headers=pro_headers)
    assert response.status_code == 400
