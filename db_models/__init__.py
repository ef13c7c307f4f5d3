# Import every model so Base.metadata is complete for create_all / Alembic
from db_models.workspace import Workspace
from db_models.catalog import Status, Location, Assignment
from db_models.asset_type import AssetType, FieldDefinition
from db_models.asset import Asset, FieldValue
from db_models.asset_log import AssetLog, ActionKind

__all__ = [
    "Workspace",
    "Status",
    "Location",
    "Assignment",
    "AssetType",
    "FieldDefinition",
    "Asset",
    "FieldValue",
    "AssetLog",
    "ActionKind",
]
