# api/asset_types/db_manager.py
"""
Asset-type configuration and the per-type custom-field schema.
"""
import logging
from typing import Any, Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from api.catalogs.db_manager import get_workspace_or_raise
from core import field_schema
from core.errors import (
    FieldDefinitionNotFound,
    InvalidFieldDefinition,
    UnknownAssetType,
    ValidationError,
)
from core.field_types import FieldKind, ParsedValue, resolve_kind
from db import transaction
from db_models.asset_type import AssetType, FieldDefinition
from . import queries

logger = logging.getLogger(__name__)


async def get_asset_type_or_raise(db: AsyncSession, asset_type_id: int) -> AssetType:
    """Get an asset type by ID. Raises UnknownAssetType if not registered."""
    result = await db.execute(queries.select_asset_type_by_id(asset_type_id))
    asset_type = result.scalar_one_or_none()
    if asset_type is None:
        raise UnknownAssetType(f"Asset type {asset_type_id} not found")
    return asset_type


async def create_asset_type(
    db: AsyncSession,
    workspace_id: int,
    name: str,
    *,
    description: str | None = None,
    icon: str | None = None,
) -> AssetType:
    async with transaction(db):
        await get_workspace_or_raise(db, workspace_id)
        asset_type = AssetType(
            workspace_id=workspace_id,
            name=name,
            description=description,
            fields=[],
        )
        if icon:
            asset_type.icon = icon
        db.add(asset_type)
        await db.flush()
    logger.info("Asset type %s created in workspace %s (%s)", asset_type.id, workspace_id, name)
    return asset_type


def normalize_options(kind: FieldKind, options: Sequence[str] | None) -> list[str] | None:
    """
    Enforce the option invariant: Dropdown carries at least one option,
    every other kind carries none. Duplicates are dropped keeping the first.

    Raises:
        InvalidFieldDefinition
    """
    options = list(options or [])
    if kind is not FieldKind.DROPDOWN:
        if options:
            raise InvalidFieldDefinition(f"{kind.value} fields cannot have dropdown options")
        return None

    cleaned: list[str] = []
    for option in options:
        if not isinstance(option, str) or not option.strip():
            raise InvalidFieldDefinition("Dropdown options must be non-blank strings")
        if option not in cleaned:
            cleaned.append(option)
    if not cleaned:
        raise InvalidFieldDefinition("Dropdown fields need at least one option")
    return cleaned


async def add_field_definition(
    db: AsyncSession,
    asset_type_id: int,
    name: str,
    kind: str,
    *,
    is_required: bool = False,
    is_filterable: bool = False,
    is_visible_on_card: bool = False,
    dropdown_options: Sequence[str] | None = None,
) -> FieldDefinition:
    """
    Append a field definition to an asset type.

    Raises:
        UnknownAssetType, UnsupportedKind, InvalidFieldDefinition
    """
    field_kind = resolve_kind(kind)
    options = normalize_options(field_kind, dropdown_options)

    async with transaction(db):
        await get_asset_type_or_raise(db, asset_type_id)
        result = await db.execute(queries.next_position_for_type(asset_type_id))
        position = result.scalar_one()

        definition = FieldDefinition(
            asset_type_id=asset_type_id,
            name=name,
            kind=field_kind.value,
            is_required=is_required,
            is_filterable=is_filterable,
            is_visible_on_card=is_visible_on_card,
            dropdown_options=options,
            position=position,
        )
        db.add(definition)
        await db.flush()

    logger.info(
        "Field %s (%s, %s) added to asset type %s",
        definition.id, name, field_kind.value, asset_type_id,
    )
    return definition


async def get_field_definition_or_raise(db: AsyncSession, field_id: int) -> FieldDefinition:
    """Get a field definition by ID. Raises FieldDefinitionNotFound if missing."""
    result = await db.execute(queries.select_definition_by_id(field_id))
    definition = result.scalar_one_or_none()
    if definition is None:
        raise FieldDefinitionNotFound(f"Field definition {field_id} not found")
    return definition


# Attributes of a definition that may be edited; position is fixed
EDITABLE_DEFINITION_ATTRIBUTES = (
    "name",
    "kind",
    "is_required",
    "is_filterable",
    "is_visible_on_card",
    "dropdown_options",
)


async def update_field_definition(
    db: AsyncSession,
    field_id: int,
    patch: Mapping[str, Any],
) -> FieldDefinition:
    """
    Edit a field definition in place, keeping its position.

    The option invariant is re-checked against the resulting kind. Switching
    away from Dropdown drops the options unless new ones are supplied (which
    is then an error); switching to Dropdown needs options. Values already
    stored keep the kind they were written with until they are next edited.

    Raises:
        FieldDefinitionNotFound, UnsupportedKind, InvalidFieldDefinition
    """
    unknown = set(patch) - set(EDITABLE_DEFINITION_ATTRIBUTES)
    if unknown:
        raise InvalidFieldDefinition(
            f"Cannot edit: {', '.join(sorted(unknown))}", {"attributes": sorted(unknown)}
        )
    for key in ("name", "kind", "is_required", "is_filterable", "is_visible_on_card"):
        if key in patch and patch[key] is None:
            raise InvalidFieldDefinition(f"{key} cannot be null")
    if "name" in patch and not patch["name"].strip():
        raise InvalidFieldDefinition("Field name cannot be blank")

    async with transaction(db):
        definition = await get_field_definition_or_raise(db, field_id)

        field_kind = resolve_kind(patch.get("kind", definition.kind))
        if "dropdown_options" in patch:
            options = patch["dropdown_options"]
        elif field_kind is FieldKind.DROPDOWN:
            options = definition.dropdown_options
        else:
            options = None
        options = normalize_options(field_kind, options)

        for key in ("name", "is_required", "is_filterable", "is_visible_on_card"):
            if key in patch:
                setattr(definition, key, patch[key].strip() if key == "name" else patch[key])
        definition.kind = field_kind.value
        definition.dropdown_options = options
        await db.flush()

    logger.info("Field definition %s updated: %s", field_id, ", ".join(sorted(patch)))
    return definition


async def delete_field_definition(db: AsyncSession, field_id: int) -> None:
    """
    Remove a field definition. Values already stored for it stay in place
    and are no longer validated or returned.
    """
    async with transaction(db):
        definition = await get_field_definition_or_raise(db, field_id)
        await db.delete(definition)
    logger.info("Field definition %s deleted, stored values left orphaned", field_id)


async def definitions_for(db: AsyncSession, asset_type_id: int) -> list[FieldDefinition]:
    """
    Ordered field definitions of an asset type.

    An asset type with no custom fields yields an empty list.

    Raises:
        UnknownAssetType: no such asset type
    """
    await get_asset_type_or_raise(db, asset_type_id)
    result = await db.execute(queries.select_definitions_for_type(asset_type_id))
    return list(result.scalars().all())


async def validate_for_asset_type(
    db: AsyncSession,
    asset_type_id: int,
    proposed: Mapping[Any, Any],
    *,
    partial: bool = False,
) -> tuple[list[FieldDefinition], dict[int, ParsedValue | None]]:
    """
    Validate a raw custom-field map against the asset type's schema.

    Returns the definitions used together with the validated values so the
    caller can write them without reloading the schema.

    Raises:
        UnknownAssetType, ValidationError
    """
    definitions = await definitions_for(db, asset_type_id)
    try:
        values = field_schema.validate_values(definitions, proposed, partial=partial)
    except ValidationError as exc:
        logger.warning(
            "Custom fields rejected for asset type %s: %d error(s)",
            asset_type_id, len(exc.errors),
        )
        raise
    return definitions, values
