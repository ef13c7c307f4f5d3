# api/activity/views.py
"""
Activity log replay endpoint.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.asset_log import ActionKind
from .models import ActivityLogEntryRead, ActivityLogPage
from . import db_manager

router = APIRouter(prefix="/assets", tags=["activity"])


@router.get(
    "/{asset_id}/logs",
    response_model=ActivityLogPage,
    summary="Page through an asset's activity log, newest first",
)
async def list_asset_logs_endpoint(
    asset_id: int,
    limit: int = Query(db_manager.DEFAULT_PAGE_SIZE, ge=1, description="Page size"),
    offset: int = Query(0, ge=0),
    action_type: ActionKind | None = Query(None, alias="actionType"),
    db: AsyncSession = Depends(get_session),
) -> ActivityLogPage:
    entries = await db_manager.for_asset(
        db, asset_id, limit=limit, offset=offset, action_kind=action_type
    )
    return ActivityLogPage(
        asset_id=asset_id,
        limit=db_manager.clamp_limit(limit),
        offset=offset,
        entries=[ActivityLogEntryRead.model_validate(e) for e in entries],
    )
