# api/dashboard/db_manager.py
"""
Business logic for workspace asset statistics.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from api.catalogs.db_manager import get_workspace_or_raise
from . import queries


async def get_asset_stats(db: AsyncSession, workspace_id: int) -> dict:
    """
    Totals for a workspace plus a per-status breakdown of active assets.
    """
    await get_workspace_or_raise(db, workspace_id)

    result = await db.execute(queries.count_active_assets(workspace_id))
    total = result.scalar() or 0

    result = await db.execute(queries.count_archived_assets(workspace_id))
    archived = result.scalar() or 0

    result = await db.execute(queries.count_active_assets_by_status(workspace_id))
    by_status = [
        {
            "status_id": row.status_id,
            "status_name": row.status_name if row.status_id is not None else "No status",
            "color": row.color,
            "count": row.count,
        }
        for row in result.all()
    ]

    return {
        "workspace_id": workspace_id,
        "total": total,
        "archived": archived,
        "by_status": by_status,
    }
