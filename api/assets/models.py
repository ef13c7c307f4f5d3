# api/assets/models.py
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AssetCreate(BaseModel):
    asset_type_id: int
    name: str = Field(..., min_length=1, max_length=255)

    # Leave empty to have one generated as PREFIX-YEAR-NNNNNNNN
    unique_identifier: str | None = Field(None, max_length=100)
    # 2-4 letters; checked when the identifier is generated
    id_prefix: str | None = Field(None, max_length=4)

    # Matches the Numeric(14, 2) column
    cost: Decimal | None = Field(None, ge=0, max_digits=14, decimal_places=2)
    date_acquired: date | None = None
    notes: str | None = None

    # Raw custom-field map: field id (or exact field name) -> value
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    # Initial lifecycle pointers
    status_id: int | None = None
    location_id: int | None = None
    assignment_id: int | None = None

    acting_user_id: str | None = Field(None, max_length=100)


class AssetUpdate(BaseModel):
    """Partial edit of non-lifecycle attributes; omitted keys are untouched."""
    name: str | None = Field(None, min_length=1, max_length=255)
    # Matches the Numeric(14, 2) column
    cost: Decimal | None = Field(None, ge=0, max_digits=14, decimal_places=2)
    date_acquired: date | None = None
    notes: str | None = None
    custom_fields: dict[str, Any] | None = None

    acting_user_id: str | None = Field(None, max_length=100)


class ArchiveRequest(BaseModel):
    acting_user_id: str | None = Field(None, max_length=100)


class FieldValueRead(BaseModel):
    field_definition_id: int
    field_name: str
    kind: str
    value: str | Decimal | date | bool | None = None


class AssetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workspace_id: int
    asset_type_id: int
    unique_identifier: str
    name: str
    cost: Decimal | None = None
    date_acquired: date | None = None
    notes: str | None = None
    is_archived: bool
    current_status_id: int | None = None
    current_location_id: int | None = None
    current_assignment_id: int | None = None
    created_at: datetime
    updated_at: datetime | None = None
    custom_fields: list[FieldValueRead] = []


class AssetSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    unique_identifier: str
    name: str
    asset_type_id: int
    is_archived: bool
    current_status_id: int | None = None
    current_location_id: int | None = None
    current_assignment_id: int | None = None
