# db_models/asset.py
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import String, Date, DateTime, Numeric, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class AssetType(str, Enum):
    MOVABLE = "movable"
    IMMOVABLE = "immovable"


class AssetCondition(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    DAMAGED = "damaged"


class AssetStatus(str, Enum):
    AVAILABLE = "available"
    IN_USE = "in_use"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"
    DISPOSED = "disposed"


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    asset_code: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )

    asset_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    category_id: Mapped[int] = mapped_column(
        ForeignKey("asset_categories.id"),
        nullable=False,
        index=True,
    )

    # movable / immovable
    asset_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetType.MOVABLE.value,
    )

    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(100), nullable=True)

    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    purchase_price: Mapped[Decimal | None] = mapped_column(
        Numeric(18, 2),
        nullable=True,
    )

    business_unit_id: Mapped[int] = mapped_column(
        ForeignKey("business_units.id"),
        nullable=False,
        index=True,
    )
    location_id: Mapped[int] = mapped_column(
        ForeignKey("locations.id"),
        nullable=False,
        index=True,
    )

    condition: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetCondition.GOOD.value,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetStatus.AVAILABLE.value,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=func.now(),
    )

    # Lookup relations, joined for display
    category: Mapped["AssetCategory"] = relationship("AssetCategory")
    business_unit: Mapped["BusinessUnit"] = relationship("BusinessUnit")
    location: Mapped["Location"] = relationship("Location")
