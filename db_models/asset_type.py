# db_models/asset_type.py
from datetime import datetime

from sqlalchemy import (
    String,
    Text,
    Boolean,
    Integer,
    DateTime,
    ForeignKey,
    JSON,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow


class AssetType(Base):
    __tablename__ = "asset_types"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    workspace_id: Mapped[int] = mapped_column(
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="dashboard",
        server_default="dashboard",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    fields: Mapped[list["FieldDefinition"]] = relationship(
        "FieldDefinition",
        back_populates="asset_type",
        order_by="FieldDefinition.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class FieldDefinition(Base):
    __tablename__ = "custom_field_definitions"
    # Ids are never reused, so orphaned values cannot attach to a new definition
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    asset_type_id: Mapped[int] = mapped_column(
        ForeignKey("asset_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Text / Number / Date / Boolean / Dropdown
    kind: Mapped[str] = mapped_column(String(20), nullable=False)

    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_filterable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_visible_on_card: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Ordered option strings, Dropdown only
    dropdown_options: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    # Display order within the asset type
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    asset_type: Mapped[AssetType] = relationship(
        "AssetType",
        back_populates="fields",
    )
