# api/activity/models.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class ActivityLogEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_id: int
    user_id: str | None = None
    action_type: str
    timestamp: datetime
    details: dict[str, Any] | None = None


class ActivityLogPage(BaseModel):
    asset_id: int
    limit: int
    offset: int
    entries: list[ActivityLogEntryRead]
