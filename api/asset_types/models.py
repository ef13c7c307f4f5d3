# api/asset_types/models.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class AssetTypeCreate(BaseModel):
    workspace_id: int
    name: str = Field(..., min_length=1, max_length=100, description="e.g. 'Laptop'")
    description: str | None = None
    icon: str | None = Field(None, max_length=50)


class FieldDefinitionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    # Validated by the field-type registry so unknown kinds get UnsupportedKind
    kind: str = Field(..., description="Text | Number | Date | Boolean | Dropdown")
    is_required: bool = False
    is_filterable: bool = False
    is_visible_on_card: bool = False
    dropdown_options: list[str] | None = None


class FieldDefinitionUpdate(BaseModel):
    """Partial edit; omitted keys are untouched. Position cannot change."""
    name: str | None = Field(None, min_length=1, max_length=100)
    kind: str | None = Field(None, description="Text | Number | Date | Boolean | Dropdown")
    is_required: bool | None = None
    is_filterable: bool | None = None
    is_visible_on_card: bool | None = None
    dropdown_options: list[str] | None = None


class FieldDefinitionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_type_id: int
    name: str
    kind: str
    is_required: bool
    is_filterable: bool
    is_visible_on_card: bool
    dropdown_options: list[str] | None = None
    position: int


class AssetTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workspace_id: int
    name: str
    description: str | None = None
    icon: str
    created_at: datetime
    fields: list[FieldDefinitionRead] = []
