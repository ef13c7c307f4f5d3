# api/dashboard/models.py
"""
Pydantic models for dashboard responses.
"""
from pydantic import BaseModel


class StatusCount(BaseModel):
    """Active assets currently in one status (status_id None = no status)."""
    status_id: int | None = None
    status_name: str
    color: str | None = None
    count: int


class AssetStats(BaseModel):
    """Asset totals for a workspace."""
    workspace_id: int
    total: int
    archived: int
    by_status: list[StatusCount]
