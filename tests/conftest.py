import os

# Must be set before config is imported
os.environ["MODE"] = "test"

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # noqa: F401  ensure models are registered
from db_base import Base
from api.asset_types import db_manager as asset_types
from api.catalogs import db_manager as catalogs


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def test_engine(tmp_path):
    # One throwaway sqlite file per test keeps tests independent
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}",
        future=True,
        echo=False,
        poolclass=NullPool,  # Disable connection pooling for tests
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory):
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def workspace(db_session):
    return await catalogs.create_workspace(db_session, "Head office")


@pytest.fixture
async def other_workspace(db_session):
    return await catalogs.create_workspace(db_session, "Branch office")


@pytest.fixture
async def catalog(db_session, workspace):
    """Two statuses, two locations and one assignment in `workspace`."""
    return {
        "in_use": await catalogs.create_status(db_session, workspace.id, "In use", "#10B981"),
        "in_repair": await catalogs.create_status(db_session, workspace.id, "In repair"),
        "hq": await catalogs.create_location(db_session, workspace.id, "HQ"),
        "warehouse": await catalogs.create_location(db_session, workspace.id, "Warehouse"),
        "engineering": await catalogs.create_assignment(db_session, workspace.id, "Engineering"),
    }


@pytest.fixture
async def laptop_type(db_session, workspace):
    """'Laptop' with a required Condition dropdown and two optional fields."""
    asset_type = await asset_types.create_asset_type(db_session, workspace.id, "Laptop")
    await asset_types.add_field_definition(
        db_session, asset_type.id, "Condition", "Dropdown",
        is_required=True, dropdown_options=["New", "Used", "Refurbished"],
    )
    await asset_types.add_field_definition(db_session, asset_type.id, "RAM (GB)", "Number")
    await asset_types.add_field_definition(db_session, asset_type.id, "Warranty until", "Date")
    return asset_type


@pytest.fixture
async def laptop(async_client, laptop_type):
    """A freshly created laptop asset with no lifecycle pointers set."""
    resp = await async_client.post(
        "/api/v1/assets",
        json={
            "asset_type_id": laptop_type.id,
            "name": "ThinkPad T14",
            "unique_identifier": "LP-2024-00012345",
            "custom_fields": {"Condition": "New"},
            "acting_user_id": "alice",
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
