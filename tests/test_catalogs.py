import pytest


@pytest.mark.anyio
async def test_health(async_client):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


@pytest.mark.anyio
async def test_workspace_catalogs(async_client):
    resp = await async_client.post("/api/v1/workspaces", json={"name": "Acme"})
    assert resp.status_code == 201, resp.text
    workspace_id = resp.json()["id"]

    resp = await async_client.post(f"/api/v1/workspaces/{workspace_id}/statuses", json={"name": "Retired"})
    assert resp.status_code == 201
    assert resp.json()["color"] == "#6B7280"
    await async_client.post(
        f"/api/v1/workspaces/{workspace_id}/statuses", json={"name": "Active", "color": "#10B981"}
    )
    await async_client.post(
        f"/api/v1/workspaces/{workspace_id}/locations", json={"name": "Lab", "description": "Room 4"}
    )
    await async_client.post(
        f"/api/v1/workspaces/{workspace_id}/assignments", json={"name": "QA team"}
    )

    resp = await async_client.get(f"/api/v1/workspaces/{workspace_id}/statuses")
    assert [s["name"] for s in resp.json()] == ["Active", "Retired"]
    resp = await async_client.get(f"/api/v1/workspaces/{workspace_id}/locations")
    assert resp.json()[0]["description"] == "Room 4"
    resp = await async_client.get(f"/api/v1/workspaces/{workspace_id}/assignments")
    assert resp.json()[0]["name"] == "QA team"


@pytest.mark.anyio
async def test_catalog_of_unknown_workspace(async_client):
    resp = await async_client.get("/api/v1/workspaces/31337/locations")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "WorkspaceNotFound"
