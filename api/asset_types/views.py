# api/asset_types/views.py
"""
Asset-type schema configuration endpoints.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from .models import (
    AssetTypeCreate,
    AssetTypeRead,
    FieldDefinitionCreate,
    FieldDefinitionRead,
    FieldDefinitionUpdate,
)
from . import db_manager

router = APIRouter(prefix="/asset-types", tags=["asset-types"])
fields_router = APIRouter(prefix="/fields", tags=["asset-types"])


@router.post(
    "",
    response_model=AssetTypeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an asset type",
)
async def create_asset_type_endpoint(
    payload: AssetTypeCreate,
    db: AsyncSession = Depends(get_session),
) -> AssetTypeRead:
    asset_type = await db_manager.create_asset_type(
        db,
        payload.workspace_id,
        payload.name,
        description=payload.description,
        icon=payload.icon,
    )
    return AssetTypeRead.model_validate(asset_type)


@router.get(
    "/{asset_type_id}",
    response_model=AssetTypeRead,
    summary="Get an asset type with its field definitions",
)
async def get_asset_type_endpoint(
    asset_type_id: int,
    db: AsyncSession = Depends(get_session),
) -> AssetTypeRead:
    asset_type = await db_manager.get_asset_type_or_raise(db, asset_type_id)
    definitions = await db_manager.definitions_for(db, asset_type_id)
    return AssetTypeRead(
        id=asset_type.id,
        workspace_id=asset_type.workspace_id,
        name=asset_type.name,
        description=asset_type.description,
        icon=asset_type.icon,
        created_at=asset_type.created_at,
        fields=[FieldDefinitionRead.model_validate(d) for d in definitions],
    )


@router.post(
    "/{asset_type_id}/fields",
    response_model=FieldDefinitionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a custom field definition",
)
async def add_field_endpoint(
    asset_type_id: int,
    payload: FieldDefinitionCreate,
    db: AsyncSession = Depends(get_session),
) -> FieldDefinitionRead:
    """
    Append a field to the asset type. Dropdown fields need at least one
    option; other kinds must not carry options.
    """
    definition = await db_manager.add_field_definition(
        db,
        asset_type_id,
        payload.name,
        payload.kind,
        is_required=payload.is_required,
        is_filterable=payload.is_filterable,
        is_visible_on_card=payload.is_visible_on_card,
        dropdown_options=payload.dropdown_options,
    )
    return FieldDefinitionRead.model_validate(definition)


@router.get(
    "/{asset_type_id}/fields",
    response_model=list[FieldDefinitionRead],
    summary="List an asset type's field definitions in order",
)
async def list_fields_endpoint(
    asset_type_id: int,
    db: AsyncSession = Depends(get_session),
) -> list[FieldDefinitionRead]:
    definitions = await db_manager.definitions_for(db, asset_type_id)
    return [FieldDefinitionRead.model_validate(d) for d in definitions]


@fields_router.delete(
    "/{field_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a field definition (stored values are kept)",
)
async def delete_field_endpoint(
    field_id: int,
    db: AsyncSession = Depends(get_session),
) -> Response:
    await db_manager.delete_field_definition(db, field_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@fields_router.patch(
    "/{field_id}",
    response_model=FieldDefinitionRead,
    summary="Edit a field definition",
)
async def update_field_endpoint(
    field_id: int,
    payload: FieldDefinitionUpdate,
    db: AsyncSession = Depends(get_session),
) -> FieldDefinitionRead:
    """
    Rename a field, change its flags, kind or dropdown options. The option
    rules are checked again against the resulting kind.
    """
    definition = await db_manager.update_field_definition(
        db, field_id, payload.model_dump(exclude_unset=True)
    )
    return FieldDefinitionRead.model_validate(definition)
