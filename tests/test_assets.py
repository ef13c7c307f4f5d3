import re
from decimal import Decimal

import pytest
from sqlalchemy import select

from api.assets import db_manager as assets
from core.errors import NotArchived, ValidationError
from db_models.asset_log import AssetLog


async def fetch_logs(async_client, asset_id, **params):
    resp = await async_client.get(f"/api/v1/assets/{asset_id}/logs", params=params)
    assert resp.status_code == 200, resp.text
    return resp.json()["entries"]


@pytest.mark.anyio
async def test_create_asset_with_custom_fields(async_client, laptop_type, catalog):
    resp = await async_client.post(
        "/api/v1/assets",
        json={
            "asset_type_id": laptop_type.id,
            "name": "MacBook Pro",
            "cost": "2399.00",
            "date_acquired": "2024-03-01",
            "custom_fields": {"Condition": "New", "RAM (GB)": 32, "Warranty until": "2027-03-31"},
            "status_id": catalog["in_use"].id,
            "location_id": catalog["hq"].id,
            "acting_user_id": "alice",
        },
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["name"] == "MacBook Pro"
    assert data["is_archived"] is False
    assert data["current_status_id"] == catalog["in_use"].id
    assert data["current_location_id"] == catalog["hq"].id
    assert data["current_assignment_id"] is None
    assert re.fullmatch(r"LAP-\d{4}-\d{8}", data["unique_identifier"])

    fields = {f["field_name"]: f for f in data["custom_fields"]}
    assert list(fields) == ["Condition", "RAM (GB)", "Warranty until"]
    assert fields["Condition"]["value"] == "New"
    assert fields["RAM (GB)"]["kind"] == "Number"
    assert fields["RAM (GB)"]["value"] == "32"
    assert fields["Warranty until"]["value"] == "2027-03-31"

    entries = await fetch_logs(async_client, data["id"])
    assert len(entries) == 1
    assert entries[0]["action_type"] == "CREATE"
    assert entries[0]["user_id"] == "alice"
    assert entries[0]["details"]["uniqueIdentifier"] == data["unique_identifier"]


@pytest.mark.anyio
async def test_create_asset_with_explicit_identifier_and_prefix(async_client, laptop_type):
    resp = await async_client.post(
        "/api/v1/assets",
        json={
            "asset_type_id": laptop_type.id,
            "name": "Spare",
            "id_prefix": "it",
            "custom_fields": {"Condition": "Used"},
        },
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["unique_identifier"].startswith("IT-")


@pytest.mark.anyio
async def test_invalid_dropdown_value_is_rejected(async_client, laptop_type):
    resp = await async_client.post(
        "/api/v1/assets",
        json={
            "asset_type_id": laptop_type.id,
            "name": "ThinkPad",
            "custom_fields": {"Condition": "Broken"},
        },
    )
    assert resp.status_code == 400, resp.text
    error = resp.json()["error"]
    assert error["code"] == "ValidationError"
    assert error["category"] == "input"
    assert [f["field_name"] for f in error["details"]["fields"]] == ["Condition"]

    resp = await async_client.get("/api/v1/assets", params={"asset_type_id": laptop_type.id})
    assert resp.json() == []


@pytest.mark.anyio
async def test_every_invalid_field_is_reported(async_client, laptop_type):
    resp = await async_client.post(
        "/api/v1/assets",
        json={
            "asset_type_id": laptop_type.id,
            "name": "ThinkPad",
            "custom_fields": {"RAM (GB)": "lots", "Warranty until": "2023-02-30"},
        },
    )
    assert resp.status_code == 400
    names = [f["field_name"] for f in resp.json()["error"]["details"]["fields"]]
    assert names == ["Condition", "RAM (GB)", "Warranty until"]


@pytest.mark.anyio
async def test_unknown_asset_type(async_client, workspace):
    resp = await async_client.post("/api/v1/assets", json={"asset_type_id": 999, "name": "Ghost"})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "UnknownAssetType"


@pytest.mark.anyio
async def test_catalog_entry_from_another_workspace_is_rejected(
    async_client, db_session, laptop_type, other_workspace
):
    from api.catalogs import db_manager as catalogs

    foreign = await catalogs.create_status(db_session, other_workspace.id, "Lost")
    resp = await async_client.post(
        "/api/v1/assets",
        json={
            "asset_type_id": laptop_type.id,
            "name": "ThinkPad",
            "custom_fields": {"Condition": "New"},
            "status_id": foreign.id,
        },
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "CrossWorkspaceReference"


@pytest.mark.anyio
async def test_get_unknown_asset(async_client, workspace):
    resp = await async_client.get("/api/v1/assets/12345")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "AssetNotFound"


@pytest.mark.anyio
async def test_update_attributes_logs_changes(async_client, laptop):
    resp = await async_client.patch(
        f"/api/v1/assets/{laptop['id']}",
        json={
            "name": "ThinkPad T14 Gen 4",
            "notes": "Battery replaced",
            "custom_fields": {"Condition": "Refurbished", "RAM (GB)": "16"},
            "acting_user_id": "bob",
        },
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["name"] == "ThinkPad T14 Gen 4"
    fields = {f["field_name"]: f["value"] for f in data["custom_fields"]}
    assert fields == {"Condition": "Refurbished", "RAM (GB)": "16"}

    entries = await fetch_logs(async_client, laptop["id"], actionType="UPDATE")
    assert len(entries) == 1
    changes = entries[0]["details"]["changes"]
    assert changes["name"] == {"fromValue": "ThinkPad T14", "toValue": "ThinkPad T14 Gen 4"}
    assert changes["Condition"] == {"fromValue": "New", "toValue": "Refurbished"}
    assert changes["RAM (GB)"] == {"fromValue": None, "toValue": "16"}
    assert entries[0]["user_id"] == "bob"


@pytest.mark.anyio
async def test_update_without_changes_writes_nothing(async_client, laptop):
    resp = await async_client.patch(
        f"/api/v1/assets/{laptop['id']}",
        json={"name": "ThinkPad T14", "custom_fields": {"Condition": "New"}},
    )
    assert resp.status_code == 200
    entries = await fetch_logs(async_client, laptop["id"])
    assert [e["action_type"] for e in entries] == ["CREATE"]


@pytest.mark.anyio
async def test_update_cannot_clear_required_field(async_client, laptop):
    resp = await async_client.patch(
        f"/api/v1/assets/{laptop['id']}",
        json={"custom_fields": {"Condition": ""}},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["fields"][0]["field_name"] == "Condition"


@pytest.mark.anyio
async def test_optional_field_can_be_cleared(async_client, laptop):
    await async_client.patch(f"/api/v1/assets/{laptop['id']}", json={"custom_fields": {"RAM (GB)": 8}})
    resp = await async_client.patch(
        f"/api/v1/assets/{laptop['id']}", json={"custom_fields": {"RAM (GB)": None}}
    )
    assert resp.status_code == 200
    assert [f["field_name"] for f in resp.json()["custom_fields"]] == ["Condition"]


@pytest.mark.anyio
async def test_archive_once(async_client, laptop):
    resp = await async_client.patch(
        f"/api/v1/assets/{laptop['id']}/archive", json={"acting_user_id": "carol"}
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["is_archived"] is True

    entries = await fetch_logs(async_client, laptop["id"])
    assert entries[0]["action_type"] == "ARCHIVE"
    assert entries[0]["details"]["fromValue"] is False
    assert entries[0]["details"]["toValue"] is True

    # Archived assets drop out of the default listing
    resp = await async_client.get("/api/v1/assets")
    assert resp.json() == []
    resp = await async_client.get("/api/v1/assets", params={"include_archived": True})
    assert [a["id"] for a in resp.json()] == [laptop["id"]]


@pytest.mark.anyio
async def test_archiving_twice_writes_no_second_entry(async_client, laptop):
    resp = await async_client.patch(f"/api/v1/assets/{laptop['id']}/archive")
    assert resp.status_code == 200
    before = await fetch_logs(async_client, laptop["id"])

    resp = await async_client.patch(f"/api/v1/assets/{laptop['id']}/archive")
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "AlreadyArchived"

    after = await fetch_logs(async_client, laptop["id"])
    assert after == before


@pytest.mark.anyio
async def test_archived_asset_cannot_be_edited(async_client, laptop):
    await async_client.patch(f"/api/v1/assets/{laptop['id']}/archive")
    resp = await async_client.patch(f"/api/v1/assets/{laptop['id']}", json={"notes": "x"})
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "AssetArchived"


@pytest.mark.anyio
async def test_unarchive_is_logged_as_update(async_client, session_factory, laptop):
    await async_client.patch(f"/api/v1/assets/{laptop['id']}/archive")

    async with session_factory() as session:
        asset = await assets.unarchive_asset(session, laptop["id"], "dave")
        assert asset.is_archived is False
        with pytest.raises(NotArchived):
            await assets.unarchive_asset(session, laptop["id"], "dave")

    async with session_factory() as session:
        result = await session.execute(
            select(AssetLog).where(AssetLog.asset_id == laptop["id"]).order_by(AssetLog.id)
        )
        kinds = [entry.action_type for entry in result.scalars()]
    assert kinds == ["CREATE", "ARCHIVE", "UPDATE"]


@pytest.mark.anyio
@pytest.mark.parametrize("payload, field", [
    ({"name": "   "}, "name"),
    ({"name": "Spare", "unique_identifier": "   "}, "unique_identifier"),
    ({"name": "Spare", "id_prefix": "AB\n"}, "id_prefix"),
])
async def test_blank_or_malformed_attributes_are_rejected(async_client, laptop_type, payload, field):
    resp = await async_client.post(
        "/api/v1/assets",
        json={"asset_type_id": laptop_type.id, "custom_fields": {"Condition": "New"}, **payload},
    )
    assert resp.status_code == 400, resp.text
    error = resp.json()["error"]
    assert error["code"] == "ValidationError"
    assert [f["field_name"] for f in error["details"]["fields"]] == [field]

    resp = await async_client.get("/api/v1/assets", params={"asset_type_id": laptop_type.id})
    assert resp.json() == []


@pytest.mark.anyio
async def test_identifier_and_name_are_stripped(async_client, laptop_type):
    resp = await async_client.post(
        "/api/v1/assets",
        json={
            "asset_type_id": laptop_type.id,
            "name": "  Spare  ",
            "unique_identifier": " LP-7 ",
            "custom_fields": {"Condition": "New"},
        },
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["unique_identifier"] == "LP-7"
    assert resp.json()["name"] == "Spare"


@pytest.mark.anyio
async def test_rename_to_blank_is_rejected(async_client, laptop):
    resp = await async_client.patch(f"/api/v1/assets/{laptop['id']}", json={"name": " "})
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]["fields"][0]["field_name"] == "name"


@pytest.mark.anyio
@pytest.mark.parametrize("cost", ["10.129", "-1", "10000000000000"])
async def test_cost_outside_column_precision_is_rejected(async_client, laptop, cost):
    resp = await async_client.patch(f"/api/v1/assets/{laptop['id']}", json={"cost": cost})
    assert resp.status_code == 422, resp.text


@pytest.mark.anyio
async def test_cost_is_logged_as_stored(session_factory, laptop):
    for _ in range(2):
        async with session_factory() as session:
            asset = await assets.update_attributes(
                session, laptop["id"], {"cost": Decimal("10.129")}, "alice"
            )
            assert asset.cost == Decimal("10.13")

    async with session_factory() as session:
        result = await session.execute(
            select(AssetLog)
            .where(AssetLog.asset_id == laptop["id"], AssetLog.action_type == "UPDATE")
        )
        updates = result.scalars().all()
    assert len(updates) == 1
    assert updates[0].details["changes"]["cost"] == {"fromValue": None, "toValue": "10.13"}


@pytest.mark.anyio
async def test_cost_too_large_for_column(db_session, laptop):
    with pytest.raises(ValidationError) as exc_info:
        await assets.update_attributes(db_session, laptop["id"], {"cost": Decimal("1e12")}, None)
    assert exc_info.value.errors[0].field_name == "cost"


@pytest.mark.anyio
async def test_list_filters(async_client, laptop_type, catalog, laptop):
    async def create(**payload):
        resp = await async_client.post(
            "/api/v1/assets",
            json={"asset_type_id": laptop_type.id, "custom_fields": {"Condition": "Used"}, **payload},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    desk = await create(
        name="MacBook Air", status_id=catalog["in_use"].id, location_id=catalog["hq"].id
    )
    lab = await create(
        name="Dell XPS",
        notes="Spare CHARGER in drawer",
        status_id=catalog["in_repair"].id,
        assignment_id=catalog["engineering"].id,
    )

    async def ids(**params):
        resp = await async_client.get("/api/v1/assets", params=params)
        assert resp.status_code == 200, resp.text
        return sorted(a["id"] for a in resp.json())

    assert await ids(status_id=catalog["in_use"].id) == [desk]
    assert await ids(location_id=catalog["hq"].id) == [desk]
    assert await ids(assignment_id=catalog["engineering"].id) == [lab]
    assert await ids(search="macbook") == [desk]
    assert await ids(search="charger") == [lab]
    assert await ids(search="00012345") == [laptop["id"]]
    assert await ids(search="xps", status_id=catalog["in_use"].id) == []
    assert await ids(search="  ") == sorted([laptop["id"], desk, lab])
