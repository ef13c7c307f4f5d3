# api/assets/views.py
"""
Asset record endpoints: create, read, edit, archive.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.asset import Asset
from db_models.asset_type import FieldDefinition
from .models import (
    AssetCreate,
    AssetRead,
    AssetSummary,
    AssetUpdate,
    ArchiveRequest,
    FieldValueRead,
)
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


def to_asset_read(asset: Asset, definitions: list[FieldDefinition]) -> AssetRead:
    """Serialise an asset; values whose definition was deleted are left out."""
    by_id = {d.id: d for d in definitions}
    values = sorted(
        (fv for fv in asset.field_values if fv.field_definition_id in by_id),
        key=lambda fv: by_id[fv.field_definition_id].position,
    )
    read = AssetRead.model_validate(asset, from_attributes=True)
    read.custom_fields = [
        FieldValueRead(
            field_definition_id=fv.field_definition_id,
            field_name=by_id[fv.field_definition_id].name,
            kind=fv.value_kind,
            value=db_manager.read_field_value(fv),
        )
        for fv in values
    ]
    return read


async def _read(db: AsyncSession, asset_id: int) -> AssetRead:
    asset, definitions = await db_manager.get_asset_detail(db, asset_id)
    return to_asset_read(asset, definitions)


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an asset",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """
    Validate the custom-field map against the asset type's schema and create
    the asset. Every failing field is reported at once (HTTP 400).
    """
    asset = await db_manager.create_asset(
        db,
        payload.asset_type_id,
        name=payload.name,
        acting_user=payload.acting_user_id,
        unique_identifier=payload.unique_identifier,
        id_prefix=payload.id_prefix,
        cost=payload.cost,
        date_acquired=payload.date_acquired,
        notes=payload.notes,
        custom_fields=payload.custom_fields,
        status_id=payload.status_id,
        location_id=payload.location_id,
        assignment_id=payload.assignment_id,
    )
    return await _read(db, asset.id)


@router.get(
    "",
    response_model=list[AssetSummary],
    summary="List assets",
)
async def list_assets_endpoint(
    workspace_id: int | None = Query(None),
    asset_type_id: int | None = Query(None),
    include_archived: bool = Query(False),
    status_id: int | None = Query(None),
    location_id: int | None = Query(None),
    assignment_id: int | None = Query(None),
    search: str | None = Query(None, description="Matches name, identifier or notes"),
    field_id: int | None = Query(None, description="Filterable custom field to match on"),
    field_value: str | None = Query(None, description="Value the custom field must hold"),
    db: AsyncSession = Depends(get_session),
) -> list[AssetSummary]:
    assets = await db_manager.list_assets(
        db,
        workspace_id=workspace_id,
        asset_type_id=asset_type_id,
        include_archived=include_archived,
        status_id=status_id,
        location_id=location_id,
        assignment_id=assignment_id,
        search=search,
        field_id=field_id,
        field_value=field_value,
    )
    return [AssetSummary.model_validate(a) for a in assets]


@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get an asset with its custom-field values",
)
async def get_asset_endpoint(
    asset_id: int,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    return await _read(db, asset_id)


@router.patch(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Edit non-lifecycle attributes",
)
async def update_asset_endpoint(
    asset_id: int,
    payload: AssetUpdate,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    patch = payload.model_dump(exclude_unset=True, exclude={"acting_user_id"})
    await db_manager.update_attributes(db, asset_id, patch, payload.acting_user_id)
    return await _read(db, asset_id)


@router.patch(
    "/{asset_id}/archive",
    response_model=AssetRead,
    summary="Archive an asset",
)
async def archive_asset_endpoint(
    asset_id: int,
    payload: ArchiveRequest | None = None,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """Archive the asset. Archiving twice returns AlreadyArchived (409)."""
    acting_user = payload.acting_user_id if payload else None
    await db_manager.archive_asset(db, asset_id, acting_user)
    return await _read(db, asset_id)
