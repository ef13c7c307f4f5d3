# api/lifecycle/views.py
"""
Lifecycle transition endpoints (status, location, assignment).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.assets.models import AssetRead
from api.assets.views import to_asset_read
from api.assets.db_manager import get_asset_detail
from db import get_session
from .models import StatusTransition, LocationTransition, AssignmentTransition
from . import db_manager

router = APIRouter(prefix="/assets", tags=["lifecycle"])


@router.patch(
    "/{asset_id}/status",
    response_model=AssetRead,
    summary="Change an asset's status",
)
async def transition_status_endpoint(
    asset_id: int,
    payload: StatusTransition,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    await db_manager.transition_status(
        db, asset_id, payload.status_id, payload.acting_user_id, **payload.expectation()
    )
    asset, definitions = await get_asset_detail(db, asset_id)
    return to_asset_read(asset, definitions)


@router.patch(
    "/{asset_id}/location",
    response_model=AssetRead,
    summary="Change an asset's location",
)
async def transition_location_endpoint(
    asset_id: int,
    payload: LocationTransition,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    await db_manager.transition_location(
        db, asset_id, payload.location_id, payload.acting_user_id, **payload.expectation()
    )
    asset, definitions = await get_asset_detail(db, asset_id)
    return to_asset_read(asset, definitions)


@router.patch(
    "/{asset_id}/assignment",
    response_model=AssetRead,
    summary="Change an asset's assignment",
)
async def transition_assignment_endpoint(
    asset_id: int,
    payload: AssignmentTransition,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    await db_manager.transition_assignment(
        db, asset_id, payload.assignment_id, payload.acting_user_id, **payload.expectation()
    )
    asset, definitions = await get_asset_detail(db, asset_id)
    return to_asset_read(asset, definitions)
