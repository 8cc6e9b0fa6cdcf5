# api/assets/models.py
"""
Pydantic models for the asset listing and creation endpoints.
"""
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from core.formatting import format_currency
from db_models.asset import AssetType, AssetCondition, AssetStatus


class AssetFilters(BaseModel):
    """
    Sparse filter set for the asset listing. Unset fields do not narrow the result.

    ``status`` and ``condition`` take one value or a list of values.
    """
    status: AssetStatus | list[AssetStatus] | None = None
    condition: AssetCondition | list[AssetCondition] | None = None
    asset_type: AssetType | None = None
    category_id: int | None = None
    business_unit_id: int | None = None
    location_id: int | None = None
    purchase_date_from: date | None = None
    purchase_date_to: date | None = None
    price_min: Decimal | None = None
    price_max: Decimal | None = None


class CategoryRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str


class BusinessUnitRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str


class LocationRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    floor: str | None = None
    room: str | None = None


class AssetRead(BaseModel):
    """An asset with its lookup relations denormalized for display."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_code: str
    asset_name: str
    category_id: int
    asset_type: AssetType
    brand: str | None = None
    model: str | None = None
    serial_number: str | None = None
    purchase_date: date | None = None
    purchase_price: Decimal | None = None
    business_unit_id: int
    location_id: int
    condition: AssetCondition
    status: AssetStatus
    created_at: datetime
    updated_at: datetime | None = None

    category: CategoryRef | None = None
    business_unit: BusinessUnitRef | None = None
    location: LocationRef | None = None

    @computed_field  # type: ignore[misc]
    @property
    def purchase_price_display(self) -> str:
        return format_currency(self.purchase_price)


class AssetListResponse(BaseModel):
    assets: list[AssetRead]
    total: int


class AssetCreate(BaseModel):
    """
    Create-asset form payload.

    Required fields default to blank values so that missing input is reported
    through the field-keyed error map rather than a schema error.
    """
    asset_code: str = Field("", max_length=100)
    asset_name: str = Field("", max_length=255)
    category_id: int | None = 0
    asset_type: AssetType = AssetType.MOVABLE
    brand: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    serial_number: str | None = Field(None, max_length=100)
    purchase_date: date | None = None
    purchase_price: Decimal | None = Field(None, ge=0)
    business_unit_id: int | None = 0
    location_id: int | None = 0
    condition: AssetCondition = AssetCondition.GOOD
    status: AssetStatus = AssetStatus.AVAILABLE

    @field_validator("purchase_date", "purchase_price", mode="before")
    @classmethod
    def _blank_is_none(cls, value):
        # HTML forms submit "" for untouched date/number inputs
        if isinstance(value, str) and not value.strip():
            return None
        return value
