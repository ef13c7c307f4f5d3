# api/dashboard/queries.py
"""
SQLAlchemy query builders for asset statistics.
"""
from sqlalchemy import select, func

from db_models.asset import Asset
from db_models.catalog import Status


def count_active_assets(workspace_id: int):
    """Count non-archived assets in a workspace."""
    return (
        select(func.count(Asset.id))
        .where(Asset.workspace_id == workspace_id, Asset.is_archived == False)
    )


def count_archived_assets(workspace_id: int):
    """Count archived assets in a workspace."""
    return (
        select(func.count(Asset.id))
        .where(Asset.workspace_id == workspace_id, Asset.is_archived == True)
    )


def count_active_assets_by_status(workspace_id: int):
    """
    Count non-archived assets per current status.
    Assets without a status come back with a NULL status_id.
    """
    return (
        select(
            Asset.current_status_id.label("status_id"),
            Status.name.label("status_name"),
            Status.color.label("color"),
            func.count(Asset.id).label("count"),
        )
        .outerjoin(Status, Status.id == Asset.current_status_id)
        .where(Asset.workspace_id == workspace_id, Asset.is_archived == False)
        .group_by(Asset.current_status_id, Status.name, Status.color)
        .order_by(func.count(Asset.id).desc(), Asset.current_status_id.asc())
    )
