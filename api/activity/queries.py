# api/activity/queries.py
"""
SQLAlchemy query builders for the activity log.
"""
from sqlalchemy import select

from db_models.asset_log import ActionKind, AssetLog


def select_logs_for_asset(
    asset_id: int,
    *,
    limit: int,
    offset: int = 0,
    action_kind: ActionKind | None = None,
):
    """
    Select one page of an asset's log, newest first.
    Ties on timestamp fall back to insertion order (id).
    """
    stmt = select(AssetLog).where(AssetLog.asset_id == asset_id)
    if action_kind is not None:
        stmt = stmt.where(AssetLog.action_type == action_kind.value)
    return (
        stmt
        .order_by(AssetLog.timestamp.desc(), AssetLog.id.desc())
        .limit(limit)
        .offset(offset)
    )
