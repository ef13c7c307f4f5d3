# db_models/asset.py
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String,
    Text,
    Boolean,
    Date,
    DateTime,
    Numeric,
    ForeignKey,
    UniqueConstraint,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    workspace_id: Mapped[int] = mapped_column(
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Fixed at creation; the custom-field set depends on it
    asset_type_id: Mapped[int] = mapped_column(
        ForeignKey("asset_types.id"),
        nullable=False,
        index=True,
    )

    # Human-readable id such as LAP-2024-73810042. Not unique-constrained.
    unique_identifier: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    cost: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    date_acquired: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_archived: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    # Lifecycle pointers, changed only through the transition engine
    current_status_id: Mapped[int | None] = mapped_column(
        ForeignKey("statuses.id", ondelete="SET NULL"),
        nullable=True,
    )
    current_location_id: Mapped[int | None] = mapped_column(
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
    )
    current_assignment_id: Mapped[int | None] = mapped_column(
        ForeignKey("assignments.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=utcnow,
    )

    field_values: Mapped[list["FieldValue"]] = relationship(
        "FieldValue",
        back_populates="asset",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class FieldValue(Base):
    """
    One custom-field value. Exactly one storage slot is populated, chosen by
    `value_kind` (the definition's kind at write time).
    """
    __tablename__ = "asset_custom_field_values"
    __table_args__ = (
        UniqueConstraint("asset_id", "field_definition_id", name="uq_asset_field"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # No FK: deleting a definition leaves its stored values behind
    field_definition_id: Mapped[int] = mapped_column(nullable=False, index=True)

    value_kind: Mapped[str] = mapped_column(String(20), nullable=False)

    text_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Canonical decimal string, kept exact
    number_value: Mapped[str | None] = mapped_column(String(64), nullable=True)
    date_value: Mapped[date | None] = mapped_column(Date, nullable=True)
    boolean_value: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=utcnow,
    )

    asset: Mapped[Asset] = relationship(
        "Asset",
        back_populates="field_values",
    )
