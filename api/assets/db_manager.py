# api/assets/db_manager.py
"""
Asset records: creation, attribute edits, archival.

Lifecycle pointers are set here only at creation time; afterwards they
change exclusively through api.lifecycle.
"""
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from api.activity import db_manager as activity_log
from api.asset_types.db_manager import (
    definitions_for,
    get_asset_type_or_raise,
    get_field_definition_or_raise,
    validate_for_asset_type,
)
from api.catalogs.db_manager import load_catalog_snapshot
from config import settings
from core import field_types, identifiers
from core.catalog import CatalogKind
from core.errors import (
    AlreadyArchived,
    AssetArchived,
    AssetNotFound,
    FieldError,
    NotArchived,
    ValidationError,
)
from core.field_schema import ensure_kind_matches
from core.field_types import FieldKind, FieldTypeError, ParsedValue, STORAGE_SLOT
from db import transaction
from db_models.asset import Asset, FieldValue
from db_models.asset_log import ActionKind
from db_models.asset_type import FieldDefinition
from . import queries

logger = logging.getLogger(__name__)

# Plain attributes an UPDATE may touch
EDITABLE_ATTRIBUTES = ("name", "cost", "date_acquired", "notes")

# Scale and precision of the Numeric(14, 2) cost column
COST_QUANTUM = Decimal("0.01")
COST_LIMIT = Decimal("1e12")


def normalize_cost(cost: Any) -> Decimal | None:
    """
    Round a cost to the stored scale, so comparisons and log entries see
    the value that is actually persisted.

    Raises:
        ValidationError: negative, not a number, or too large for the column
    """
    if cost is None:
        return None
    try:
        value = Decimal(str(cost)).quantize(COST_QUANTUM)
    except InvalidOperation:
        raise ValidationError([FieldError(None, "cost", f"{cost!r} is not a valid amount")]) from None
    if value < 0:
        raise ValidationError([FieldError(None, "cost", "Cost cannot be negative")])
    if value >= COST_LIMIT:
        raise ValidationError([FieldError(None, "cost", "Cost is too large")])
    return value


def _require_text(field_name: str, value: Any) -> str:
    """Strip a mandatory text attribute; blank values are rejected."""
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError([FieldError(None, field_name, f"{field_name} cannot be blank")])
    return text


def jsonable(value: Any) -> Any:
    """Make a value safe for the JSON detail payload of a log entry."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def read_field_value(field_value: FieldValue) -> Any:
    """Typed Python value of a stored FieldValue, from its active slot."""
    kind = FieldKind(field_value.value_kind)
    raw = getattr(field_value, STORAGE_SLOT[kind])
    if kind is FieldKind.NUMBER and raw is not None:
        return Decimal(raw)
    return raw


def _store(field_value: FieldValue, parsed: ParsedValue) -> None:
    for slot in set(STORAGE_SLOT.values()):
        setattr(field_value, slot, None)
    stored = str(parsed.value) if parsed.kind is FieldKind.NUMBER else parsed.value
    setattr(field_value, parsed.slot, stored)
    field_value.value_kind = parsed.kind.value


def apply_field_values(
    asset: Asset,
    definitions: list[FieldDefinition],
    values: Mapping[int, ParsedValue | None],
) -> dict[str, dict[str, Any]]:
    """
    Write validated values onto the asset's FieldValue rows.

    Returns {field name: {fromValue, toValue}} for values that changed.
    """
    by_id = {d.id: d for d in definitions}
    existing = {fv.field_definition_id: fv for fv in asset.field_values}
    changes: dict[str, dict[str, Any]] = {}

    for definition_id, parsed in values.items():
        definition = by_id[definition_id]
        current = existing.get(definition_id)
        old_value = read_field_value(current) if current is not None else None

        if parsed is None:
            if current is not None:
                asset.field_values.remove(current)
                changes[definition.name] = {"fromValue": jsonable(old_value), "toValue": None}
            continue

        ensure_kind_matches(definition, parsed)
        if current is not None and old_value == parsed.value:
            continue
        if current is None:
            current = FieldValue(field_definition_id=definition_id)
            asset.field_values.append(current)
        _store(current, parsed)
        changes[definition.name] = {
            "fromValue": jsonable(old_value),
            "toValue": jsonable(parsed.value),
        }
    return changes


async def get_asset_or_raise(db: AsyncSession, asset_id: int) -> Asset:
    """Get an asset (fresh from the database) or raise AssetNotFound."""
    result = await db.execute(queries.select_asset_by_id(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        raise AssetNotFound(f"Asset {asset_id} not found")
    return asset


async def get_asset_detail(
    db: AsyncSession, asset_id: int
) -> tuple[Asset, list[FieldDefinition]]:
    """Asset plus the current field definitions of its type."""
    asset = await get_asset_or_raise(db, asset_id)
    definitions = await definitions_for(db, asset.asset_type_id)
    return asset, definitions


async def _field_match(
    db: AsyncSession, field_id: int, raw_value: Any
) -> tuple[int, str, Any]:
    """Parse a custom-field filter value with the definition's own rules."""
    definition = await get_field_definition_or_raise(db, field_id)
    if not definition.is_filterable:
        raise ValidationError([
            FieldError(definition.id, definition.name, "This field cannot be used as a filter")
        ])
    try:
        parsed = field_types.validate(definition.kind, raw_value, definition.dropdown_options or ())
    except FieldTypeError as exc:
        raise ValidationError([FieldError(definition.id, definition.name, str(exc))]) from exc
    if parsed is None:
        raise ValidationError([
            FieldError(definition.id, definition.name, "A value is required to filter on this field")
        ])
    return definition.id, parsed.slot, parsed.value


async def list_assets(
    db: AsyncSession,
    *,
    workspace_id: int | None = None,
    asset_type_id: int | None = None,
    include_archived: bool = False,
    status_id: int | None = None,
    location_id: int | None = None,
    assignment_id: int | None = None,
    search: str | None = None,
    field_id: int | None = None,
    field_value: Any = None,
) -> list[Asset]:
    """
    Assets matching every supplied filter. `field_id`/`field_value` filter on
    one custom field, which must be marked filterable.

    Raises:
        FieldDefinitionNotFound, ValidationError
    """
    field_match = None
    if field_id is not None:
        field_match = await _field_match(db, field_id, field_value)

    stmt = queries.select_assets(
        workspace_id,
        asset_type_id,
        include_archived,
        status_id=status_id,
        location_id=location_id,
        assignment_id=assignment_id,
        search=search.strip() if search else None,
        field_match=field_match,
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_asset(
    db: AsyncSession,
    asset_type_id: int,
    *,
    name: str,
    acting_user: str | None,
    unique_identifier: str | None = None,
    id_prefix: str | None = None,
    cost: Decimal | None = None,
    date_acquired: date | None = None,
    notes: str | None = None,
    custom_fields: Mapping[Any, Any] | None = None,
    status_id: int | None = None,
    location_id: int | None = None,
    assignment_id: int | None = None,
) -> Asset:
    """
    Validate and create an asset, writing one CREATE log entry.

    Raises:
        UnknownAssetType, ValidationError, CrossWorkspaceReference,
        StorageUnavailable
    """
    name = _require_text("name", name)
    if unique_identifier is not None:
        unique_identifier = _require_text("unique_identifier", unique_identifier)
    cost = normalize_cost(cost)

    async with transaction(db):
        asset_type = await get_asset_type_or_raise(db, asset_type_id)
        definitions, values = await validate_for_asset_type(
            db, asset_type_id, custom_fields or {}
        )

        snapshot = await load_catalog_snapshot(db, asset_type.workspace_id)
        snapshot.require(CatalogKind.STATUS, status_id)
        snapshot.require(CatalogKind.LOCATION, location_id)
        snapshot.require(CatalogKind.ASSIGNMENT, assignment_id)

        if unique_identifier is None:
            try:
                prefix = (
                    identifiers.normalize_prefix(id_prefix)
                    if id_prefix
                    else identifiers.prefix_for_type_name(asset_type.name, settings.ASSET_ID_PREFIX)
                )
            except ValueError as exc:
                raise ValidationError([FieldError(None, "id_prefix", str(exc))]) from exc
            unique_identifier = identifiers.generate_asset_identifier(prefix)

        asset = Asset(
            workspace_id=asset_type.workspace_id,
            asset_type_id=asset_type_id,
            unique_identifier=unique_identifier,
            name=name,
            cost=cost,
            date_acquired=date_acquired,
            notes=notes,
            is_archived=False,
            current_status_id=status_id,
            current_location_id=location_id,
            current_assignment_id=assignment_id,
            field_values=[],
        )
        db.add(asset)
        apply_field_values(asset, definitions, values)
        await db.flush()

        await activity_log.append(
            db,
            asset.id,
            ActionKind.CREATE,
            acting_user,
            {
                "message": "Asset created",
                "uniqueIdentifier": unique_identifier,
                "statusId": status_id,
                "locationId": location_id,
                "assignmentId": assignment_id,
            },
        )

    logger.info(
        "Asset %s (%s) created with type %s in workspace %s",
        asset.id, unique_identifier, asset_type_id, asset.workspace_id,
    )
    return await get_asset_or_raise(db, asset.id)


async def update_attributes(
    db: AsyncSession,
    asset_id: int,
    patch: Mapping[str, Any],
    acting_user: str | None,
) -> Asset:
    """
    Apply non-lifecycle edits. Keys: name, cost, date_acquired, notes and
    custom_fields (a partial custom-field map). Writes one UPDATE entry
    listing what changed, or nothing if nothing changed.

    Raises:
        AssetNotFound, AssetArchived, ValidationError
    """
    unknown = set(patch) - set(EDITABLE_ATTRIBUTES) - {"custom_fields"}
    if unknown:
        raise ValidationError([
            FieldError(None, key, "This attribute cannot be edited") for key in sorted(unknown)
        ])
    patch = dict(patch)
    if "name" in patch:
        patch["name"] = _require_text("name", patch["name"])
    if "cost" in patch:
        patch["cost"] = normalize_cost(patch["cost"])

    async with transaction(db):
        asset = await get_asset_or_raise(db, asset_id)
        if asset.is_archived:
            raise AssetArchived(f"Asset {asset_id} is archived and cannot be edited")

        changes: dict[str, dict[str, Any]] = {}
        if patch.get("custom_fields"):
            definitions, values = await validate_for_asset_type(
                db, asset.asset_type_id, patch["custom_fields"], partial=True
            )
            changes.update(apply_field_values(asset, definitions, values))

        for attribute in EDITABLE_ATTRIBUTES:
            if attribute not in patch:
                continue
            old, new = getattr(asset, attribute), patch[attribute]
            if old == new:
                continue
            setattr(asset, attribute, new)
            changes[attribute] = {"fromValue": jsonable(old), "toValue": jsonable(new)}

        if not changes:
            return asset

        await db.flush()
        await activity_log.append(
            db,
            asset.id,
            ActionKind.UPDATE,
            acting_user,
            {"message": "Asset updated", "changes": changes},
        )

    logger.info("Asset %s updated: %s", asset_id, ", ".join(sorted(changes)))
    return await get_asset_or_raise(db, asset_id)


async def archive_asset(db: AsyncSession, asset_id: int, acting_user: str | None) -> Asset:
    """
    Archive an asset, writing one ARCHIVE entry.

    Raises:
        AssetNotFound, AlreadyArchived (no entry is written)
    """
    async with transaction(db):
        asset = await get_asset_or_raise(db, asset_id)
        if asset.is_archived:
            raise AlreadyArchived(f"Asset {asset_id} is already archived")

        result = await db.execute(queries.set_archived_if(asset_id, archived=True))
        if result.rowcount != 1:
            # Lost the race to a concurrent archive
            raise AlreadyArchived(f"Asset {asset_id} is already archived")

        await activity_log.append(
            db,
            asset_id,
            ActionKind.ARCHIVE,
            acting_user,
            {"message": "Asset archived", "fromValue": False, "toValue": True},
        )

    logger.info("Asset %s archived by %s", asset_id, acting_user)
    return await get_asset_or_raise(db, asset_id)


async def unarchive_asset(db: AsyncSession, asset_id: int, acting_user: str | None) -> Asset:
    """
    Reverse an archival. Recorded as an UPDATE entry.

    Raises:
        AssetNotFound, NotArchived
    """
    async with transaction(db):
        asset = await get_asset_or_raise(db, asset_id)
        if not asset.is_archived:
            raise NotArchived(f"Asset {asset_id} is not archived")

        result = await db.execute(queries.set_archived_if(asset_id, archived=False))
        if result.rowcount != 1:
            raise NotArchived(f"Asset {asset_id} is not archived")

        await activity_log.append(
            db,
            asset_id,
            ActionKind.UPDATE,
            acting_user,
            {"message": "Asset unarchived", "fromValue": True, "toValue": False},
        )

    logger.info("Asset %s unarchived by %s", asset_id, acting_user)
    return await get_asset_or_raise(db, asset_id)
