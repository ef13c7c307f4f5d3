# api/catalogs/views.py
"""
Workspace and lifecycle catalog endpoints (lookup tables).
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.catalog import CatalogKind
from db import get_session
from .models import (
    WorkspaceCreate,
    WorkspaceRead,
    StatusCreate,
    StatusRead,
    LocationCreate,
    LocationRead,
    AssignmentCreate,
    AssignmentRead,
)
from . import db_manager

router = APIRouter(prefix="/workspaces", tags=["catalogs"])


@router.post(
    "",
    response_model=WorkspaceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a workspace",
)
async def create_workspace_endpoint(
    payload: WorkspaceCreate,
    db: AsyncSession = Depends(get_session),
) -> WorkspaceRead:
    workspace = await db_manager.create_workspace(db, payload.name)
    return WorkspaceRead.model_validate(workspace)


@router.post(
    "/{workspace_id}/statuses",
    response_model=StatusRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a status to the workspace catalog",
)
async def create_status_endpoint(
    workspace_id: int,
    payload: StatusCreate,
    db: AsyncSession = Depends(get_session),
) -> StatusRead:
    entry = await db_manager.create_status(db, workspace_id, payload.name, payload.color)
    return StatusRead.model_validate(entry)


@router.get(
    "/{workspace_id}/statuses",
    response_model=list[StatusRead],
    summary="List workspace statuses",
)
async def list_statuses_endpoint(
    workspace_id: int,
    db: AsyncSession = Depends(get_session),
) -> list[StatusRead]:
    entries = await db_manager.list_entries(db, CatalogKind.STATUS, workspace_id)
    return [StatusRead.model_validate(e) for e in entries]


@router.post(
    "/{workspace_id}/locations",
    response_model=LocationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a location to the workspace catalog",
)
async def create_location_endpoint(
    workspace_id: int,
    payload: LocationCreate,
    db: AsyncSession = Depends(get_session),
) -> LocationRead:
    entry = await db_manager.create_location(db, workspace_id, payload.name, payload.description)
    return LocationRead.model_validate(entry)


@router.get(
    "/{workspace_id}/locations",
    response_model=list[LocationRead],
    summary="List workspace locations",
)
async def list_locations_endpoint(
    workspace_id: int,
    db: AsyncSession = Depends(get_session),
) -> list[LocationRead]:
    entries = await db_manager.list_entries(db, CatalogKind.LOCATION, workspace_id)
    return [LocationRead.model_validate(e) for e in entries]


@router.post(
    "/{workspace_id}/assignments",
    response_model=AssignmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add an assignment to the workspace catalog",
)
async def create_assignment_endpoint(
    workspace_id: int,
    payload: AssignmentCreate,
    db: AsyncSession = Depends(get_session),
) -> AssignmentRead:
    entry = await db_manager.create_assignment(db, workspace_id, payload.name, payload.details)
    return AssignmentRead.model_validate(entry)


@router.get(
    "/{workspace_id}/assignments",
    response_model=list[AssignmentRead],
    summary="List workspace assignments",
)
async def list_assignments_endpoint(
    workspace_id: int,
    db: AsyncSession = Depends(get_session),
) -> list[AssignmentRead]:
    entries = await db_manager.list_entries(db, CatalogKind.ASSIGNMENT, workspace_id)
    return [AssignmentRead.model_validate(e) for e in entries]
