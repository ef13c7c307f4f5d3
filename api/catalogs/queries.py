# api/catalogs/queries.py
"""
SQLAlchemy query builders for workspaces and lifecycle catalogs.
"""
from sqlalchemy import select

from core.catalog import CatalogKind
from db_models.catalog import Status, Location, Assignment
from db_models.workspace import Workspace

CATALOG_MODELS = {
    CatalogKind.STATUS: Status,
    CatalogKind.LOCATION: Location,
    CatalogKind.ASSIGNMENT: Assignment,
}


def select_workspace_by_id(workspace_id: int):
    """Select a workspace by its ID."""
    return select(Workspace).where(Workspace.id == workspace_id)


def select_catalog_entries(kind: CatalogKind, workspace_id: int):
    """Select all entries of one catalog for a workspace, by name."""
    model = CATALOG_MODELS[kind]
    return (
        select(model)
        .where(model.workspace_id == workspace_id)
        .order_by(model.name.asc(), model.id.asc())
    )


def select_catalog_ids(kind: CatalogKind, workspace_id: int):
    """Select only the ids of one catalog for a workspace."""
    model = CATALOG_MODELS[kind]
    return select(model.id).where(model.workspace_id == workspace_id)
