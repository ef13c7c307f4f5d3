# api/dashboard/views.py
"""
Dashboard and aggregate statistics endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from .models import AssetStats
from . import db_manager

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=AssetStats,
    summary="Asset totals and per-status counts for a workspace",
)
async def get_stats_endpoint(
    workspace_id: int = Query(..., description="Workspace ID"),
    db: AsyncSession = Depends(get_session),
) -> AssetStats:
    """
    Count active and archived assets and break active ones down by their
    current status.
    """
    stats = await db_manager.get_asset_stats(db, workspace_id)
    return AssetStats(**stats)
