# db_models/asset_log.py
"""
Append-only activity log. Rows are inserted once per committed change and
never updated or deleted.
"""
from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import String, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class ActionKind(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    UPDATE_STATUS = "UPDATE_STATUS"
    UPDATE_LOCATION = "UPDATE_LOCATION"
    ASSIGNED = "ASSIGNED"
    ARCHIVE = "ARCHIVE"


class AssetLog(Base):
    __tablename__ = "asset_logs"
    __table_args__ = (
        Index("ix_asset_logs_asset_timestamp", "asset_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Acting user id as supplied by the caller
    user_id: Mapped[str | None] = mapped_column(String(100), nullable=True)

    action_type: Mapped[str] = mapped_column(String(30), nullable=False)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
