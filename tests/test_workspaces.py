async def _create(client, headers, name, is_default=False):
    response = await client.post(
        "/api/v1/workspaces", json={"name": name, "isDefault": is_default}, headers=headers
    )
    assert response.status_code == 201
    return response.json()["data"]


async def test_single_default_on_create_and_update(client, pro_headers):
    home = await _create(client, pro_headers, "Home", is_default=True)
    work = await _create(client, pro_headers, "Work", is_default=True)

    listing = (await client.get("/api/v1/workspaces", headers=pro_headers)).json()["data"]
    assert [w["name"] for w in listing] == ["Work", "Home"]
    assert [w["isDefault"] for w in listing] == [True, False]

    await client.put(f"/api/v1/workspaces/{home['id']}", json={"isDefault": True}, headers=pro_headers)

    listing = (await client.get("/api/v1/workspaces", headers=pro_headers)).json()["data"]
    defaults = [w["id"] for w in listing if w["isDefault"]]
    assert defaults == [home["id"]]
    assert listing[1]["id"] == work["id"]


async def test_default_workspace_cannot_be_deleted(client, pro_headers):
    home = await _create(client, pro_headers, "Home", is_default=True)
    side = await _create(client, pro_headers, "Side")

    refused = await client.delete(f"/api/v1/workspaces/{home['id']}", headers=pro_headers)
    assert refused.status_code == 400
    assert refused.json()["error"]["message"] == "Cannot delete default workspace"

    deleted = await client.delete(f"/api/v1/workspaces/{side['id']}", headers=pro_headers)
    assert deleted.status_code == 200


async def test_defaults_are_per_user(client, pro_headers, bob_pro_headers):
    mine = await _create(client, pro_headers, "Mine", is_default=True)
    await _create(client, bob_pro_headers, "Bob's", is_default=True)

    fetched = await client.get(f"/api/v1/workspaces/{mine['id']}", headers=pro_headers)
    assert fetched.json()["data"]["isDefault"] is True

    foreign = await client.get(f"/api/v1/workspaces/{mine['id']}", headers=bob_pro_headers)
    assert foreign.status_code == 404


async def test_workspace_name_required(client, pro_headers):
    response = await client.post("/api/v1/workspaces", json={}, headers=pro_headers)
    assert response.status_code == 400
