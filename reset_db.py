# reset_db.py
"""
Database reset utility - drops all tables and recreates them fresh.

Usage:
    python reset_db.py           # Reset only
    python reset_db.py --seed    # Reset + seed a demo workspace
"""
import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from api.asset_types import db_manager as asset_types
from api.assets import db_manager as assets
from api.catalogs import db_manager as catalogs
from config import settings
from core.log_config import configure_logging
from db import AsyncSessionLocal, engine
from db_base import Base
from db_models.workspace import Workspace

# Import all models to register them with Base.metadata
import db_models  # noqa: F401

logger = logging.getLogger("reset_db")


async def reset_database() -> None:
    """Drop all tables and recreate them from the ORM metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Recreated %d tables", len(Base.metadata.tables))


async def seed_demo(db: AsyncSession) -> Workspace:
    """
    A workspace with a Laptop type, a few catalog entries and two assets,
    created through the same operations the API uses.
    """
    workspace = await catalogs.create_workspace(db, "Demo workspace")
    in_use = await catalogs.create_status(db, workspace.id, "In use", "#10B981")
    await catalogs.create_status(db, workspace.id, "In repair", "#F59E0B")
    office = await catalogs.create_location(db, workspace.id, "Head office", "Floor 2")
    await catalogs.create_assignment(db, workspace.id, "Engineering")

    laptop = await asset_types.create_asset_type(db, workspace.id, "Laptop", icon="laptop")
    await asset_types.add_field_definition(
        db, laptop.id, "Condition", "Dropdown",
        is_required=True, dropdown_options=["New", "Used", "Refurbished"],
    )
    await asset_types.add_field_definition(db, laptop.id, "RAM (GB)", "Number", is_filterable=True)
    await asset_types.add_field_definition(db, laptop.id, "Warranty until", "Date")

    await assets.create_asset(
        db, laptop.id,
        name="ThinkPad T14",
        acting_user="seed",
        custom_fields={"Condition": "New", "RAM (GB)": 32, "Warranty until": "2027-03-31"},
        status_id=in_use.id,
        location_id=office.id,
    )
    await assets.create_asset(
        db, laptop.id,
        name="MacBook Air",
        acting_user="seed",
        custom_fields={"Condition": "Used"},
    )
    logger.info("Seeded workspace %s", workspace.id)
    return workspace


async def main_async(seed: bool, seed_only: bool) -> None:
    if not seed_only:
        await reset_database()
    if seed or seed_only:
        async with AsyncSessionLocal() as session:
            await seed_demo(session)
    await engine.dispose()


def main():
    parser = argparse.ArgumentParser(
        description="Reset database - drop all tables and recreate fresh"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Also seed the database with a demo workspace after reset"
    )
    parser.add_argument(
        "--seed-only",
        action="store_true",
        help="Only seed data (skip table reset)"
    )
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    asyncio.run(main_async(args.seed, args.seed_only))


if __name__ == "__main__":
    main()
