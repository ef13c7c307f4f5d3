import pytest

from api.activity import db_manager as activity
from db_models.asset_log import ActionKind


@pytest.fixture
async def busy_laptop(async_client, laptop, catalog):
    """The laptop after a status, a location and an assignment change."""
    asset_url = f"/api/v1/assets/{laptop['id']}"
    await async_client.patch(f"{asset_url}/status", json={"status_id": catalog["in_use"].id})
    await async_client.patch(f"{asset_url}/location", json={"location_id": catalog["hq"].id})
    await async_client.patch(f"{asset_url}/assignment", json={"assignment_id": catalog["engineering"].id})
    return laptop


@pytest.mark.anyio
async def test_history_is_newest_first(async_client, busy_laptop):
    resp = await async_client.get(f"/api/v1/assets/{busy_laptop['id']}/logs")
    assert resp.status_code == 200
    kinds = [e["action_type"] for e in resp.json()["entries"]]
    assert kinds == ["ASSIGNED", "UPDATE_LOCATION", "UPDATE_STATUS", "CREATE"]


@pytest.mark.anyio
async def test_history_paging(async_client, busy_laptop):
    url = f"/api/v1/assets/{busy_laptop['id']}/logs"
    first = (await async_client.get(url, params={"limit": 2})).json()
    second = (await async_client.get(url, params={"limit": 2, "offset": 2})).json()
    third = (await async_client.get(url, params={"limit": 2, "offset": 4})).json()

    assert [e["action_type"] for e in first["entries"]] == ["ASSIGNED", "UPDATE_LOCATION"]
    assert [e["action_type"] for e in second["entries"]] == ["UPDATE_STATUS", "CREATE"]
    assert third["entries"] == []
    assert second["offset"] == 2


@pytest.mark.anyio
async def test_page_size_is_capped(async_client, laptop):
    resp = await async_client.get(f"/api/v1/assets/{laptop['id']}/logs", params={"limit": 5000})
    assert resp.status_code == 200
    assert resp.json()["limit"] == 200


@pytest.mark.anyio
async def test_filter_without_matches_is_empty(async_client, laptop):
    resp = await async_client.get(
        f"/api/v1/assets/{laptop['id']}/logs", params={"actionType": "ARCHIVE"}
    )
    assert resp.status_code == 200
    assert resp.json()["entries"] == []


@pytest.mark.anyio
async def test_unknown_action_type_is_rejected(async_client, laptop):
    resp = await async_client.get(
        f"/api/v1/assets/{laptop['id']}/logs", params={"actionType": "DELETE"}
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_history_of_unknown_asset_is_an_error(async_client, workspace):
    resp = await async_client.get("/api/v1/assets/4040/logs")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "AssetNotFound"


@pytest.mark.anyio
async def test_iter_asset_history_pages_lazily(session_factory, busy_laptop):
    async with session_factory() as session:
        kinds = [
            entry.action_type
            async for entry in activity.iter_asset_history(session, busy_laptop["id"], page_size=3)
        ]
        assert kinds == ["ASSIGNED", "UPDATE_LOCATION", "UPDATE_STATUS", "CREATE"]

        creates = [
            entry.id
            async for entry in activity.iter_asset_history(
                session, busy_laptop["id"], action_kind=ActionKind.CREATE
            )
        ]
        assert len(creates) == 1
