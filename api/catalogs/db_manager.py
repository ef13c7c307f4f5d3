# api/catalogs/db_manager.py
"""
Workspaces and the status/location/assignment lookup tables.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core.catalog import CatalogKind, CatalogSnapshot
from core.errors import WorkspaceNotFound
from db import transaction
from db_models.catalog import Status, Location, Assignment
from db_models.workspace import Workspace
from . import queries

logger = logging.getLogger(__name__)


async def get_workspace_or_raise(db: AsyncSession, workspace_id: int) -> Workspace:
    """Get a workspace by ID. Raises WorkspaceNotFound if missing."""
    result = await db.execute(queries.select_workspace_by_id(workspace_id))
    workspace = result.scalar_one_or_none()
    if workspace is None:
        raise WorkspaceNotFound(f"Workspace {workspace_id} not found")
    return workspace


async def create_workspace(db: AsyncSession, name: str) -> Workspace:
    async with transaction(db):
        workspace = Workspace(name=name)
        db.add(workspace)
        await db.flush()
    logger.info("Workspace %s created (%s)", workspace.id, name)
    return workspace


async def create_status(
    db: AsyncSession, workspace_id: int, name: str, color: str | None = None
) -> Status:
    async with transaction(db):
        await get_workspace_or_raise(db, workspace_id)
        entry = Status(workspace_id=workspace_id, name=name)
        if color:
            entry.color = color
        db.add(entry)
        await db.flush()
    return entry


async def create_location(
    db: AsyncSession, workspace_id: int, name: str, description: str | None = None
) -> Location:
    async with transaction(db):
        await get_workspace_or_raise(db, workspace_id)
        entry = Location(workspace_id=workspace_id, name=name, description=description)
        db.add(entry)
        await db.flush()
    return entry


async def create_assignment(
    db: AsyncSession, workspace_id: int, name: str, details: str | None = None
) -> Assignment:
    async with transaction(db):
        await get_workspace_or_raise(db, workspace_id)
        entry = Assignment(workspace_id=workspace_id, name=name, details=details)
        db.add(entry)
        await db.flush()
    return entry


async def list_entries(db: AsyncSession, kind: CatalogKind, workspace_id: int) -> list:
    """Return one catalog of a workspace, ordered by name."""
    await get_workspace_or_raise(db, workspace_id)
    result = await db.execute(queries.select_catalog_entries(kind, workspace_id))
    return list(result.scalars().all())


async def load_catalog_snapshot(db: AsyncSession, workspace_id: int) -> CatalogSnapshot:
    """Read the three catalogs of a workspace into an immutable snapshot."""
    ids = {}
    for kind in CatalogKind:
        result = await db.execute(queries.select_catalog_ids(kind, workspace_id))
        ids[kind] = frozenset(result.scalars().all())
    return CatalogSnapshot(
        workspace_id=workspace_id,
        status_ids=ids[CatalogKind.STATUS],
        location_ids=ids[CatalogKind.LOCATION],
        assignment_ids=ids[CatalogKind.ASSIGNMENT],
    )
