# api/assets/queries.py
"""
SQLAlchemy query builders for asset records.
"""
from typing import Any

from sqlalchemy import Numeric, cast, or_, select, update

from db_models.asset import Asset, FieldValue


def select_asset_by_id(asset_id: int):
    """Select an asset by ID, overwriting any stale copy in the session."""
    return (
        select(Asset)
        .where(Asset.id == asset_id)
        .execution_options(populate_existing=True)
    )


def select_assets(
    workspace_id: int | None = None,
    asset_type_id: int | None = None,
    include_archived: bool = False,
    *,
    status_id: int | None = None,
    location_id: int | None = None,
    assignment_id: int | None = None,
    search: str | None = None,
    field_match: tuple[int, str, Any] | None = None,
):
    """
    Select assets, newest first, optionally filtered.

    `search` is a case-insensitive substring match on name, identifier and
    notes. `field_match` is (definition id, storage slot, value) and keeps
    assets whose stored custom value in that slot equals `value`.
    """
    stmt = select(Asset)
    if workspace_id is not None:
        stmt = stmt.where(Asset.workspace_id == workspace_id)
    if asset_type_id is not None:
        stmt = stmt.where(Asset.asset_type_id == asset_type_id)
    if not include_archived:
        stmt = stmt.where(Asset.is_archived == False)
    if status_id is not None:
        stmt = stmt.where(Asset.current_status_id == status_id)
    if location_id is not None:
        stmt = stmt.where(Asset.current_location_id == location_id)
    if assignment_id is not None:
        stmt = stmt.where(Asset.current_assignment_id == assignment_id)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Asset.name.ilike(pattern),
                Asset.unique_identifier.ilike(pattern),
                Asset.notes.ilike(pattern),
            )
        )
    if field_match is not None:
        definition_id, slot, value = field_match
        column = getattr(FieldValue, slot)
        if slot == "number_value":
            # Stored as text; compare numerically so "16" matches "16.0"
            condition = cast(column, Numeric) == value
        else:
            condition = column == value
        stmt = stmt.where(
            Asset.id.in_(
                select(FieldValue.asset_id).where(
                    FieldValue.field_definition_id == definition_id,
                    condition,
                )
            )
        )
    return stmt.order_by(Asset.created_at.desc(), Asset.id.desc())


def set_archived_if(asset_id: int, *, archived: bool):
    """Flip the archived flag only if it still has the opposite value."""
    return (
        update(Asset)
        .where(Asset.id == asset_id, Asset.is_archived == (not archived))
        .values(is_archived=archived)
        .execution_options(synchronize_session=False)
    )
