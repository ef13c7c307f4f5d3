# api/asset_types/queries.py
"""
SQLAlchemy query builders for asset types and their field definitions.
"""
from sqlalchemy import select, func

from db_models.asset_type import AssetType, FieldDefinition


def select_asset_type_by_id(asset_type_id: int):
    """Select an asset type by its ID (fields load eagerly)."""
    return select(AssetType).where(AssetType.id == asset_type_id)


def select_definitions_for_type(asset_type_id: int):
    """Select an asset type's field definitions in display order."""
    return (
        select(FieldDefinition)
        .where(FieldDefinition.asset_type_id == asset_type_id)
        .order_by(FieldDefinition.position.asc(), FieldDefinition.id.asc())
    )


def select_definition_by_id(field_id: int):
    """Select a single field definition."""
    return select(FieldDefinition).where(FieldDefinition.id == field_id)


def next_position_for_type(asset_type_id: int):
    """Position the next appended definition should take."""
    return (
        select(func.coalesce(func.max(FieldDefinition.position), -1) + 1)
        .where(FieldDefinition.asset_type_id == asset_type_id)
    )
