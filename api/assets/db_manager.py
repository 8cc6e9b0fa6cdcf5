# api/assets/db_manager.py
"""
Business logic for listing and creating assets.
"""
import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import Asset
from .models import AssetFilters, AssetRead
from . import queries

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

DUPLICATE_CODE_MESSAGE = "Asset code already exists"
CREATE_FAILED_MESSAGE = "Failed to create asset. Please try again."
LIST_FAILED_MESSAGE = "Failed to load assets. Please try again."

# field -> message, checked in this order
REQUIRED_FIELDS = {
    "asset_code": "Asset code is required",
    "asset_name": "Asset name is required",
    "category_id": "Category is required",
    "business_unit_id": "Business unit is required",
    "location_id": "Location is required",
}

OPTIONAL_FIELDS = ("brand", "model", "serial_number", "purchase_date", "purchase_price")


class AssetNotFoundError(Exception):
    """Raised when asset doesn't exist"""
    pass


class AssetValidationError(Exception):
    """Raised with a field -> message map when a create payload is rejected."""

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors

    @property
    def is_duplicate(self) -> bool:
        return self.errors.get("asset_code") == DUPLICATE_CODE_MESSAGE


class AssetCreateError(Exception):
    """Raised when an insert fails for any reason other than validation."""
    pass


class AssetQueryError(Exception):
    """Raised when the asset listing cannot be read."""
    pass


def validate_asset_form(data: Mapping[str, Any]) -> dict[str, str]:
    """
    Check required fields. Returns an empty dict when the payload is valid.

    Text fields must be non-blank; reference ids must be set and non-zero.
    """
    errors: dict[str, str] = {}
    for name, message in REQUIRED_FIELDS.items():
        value = data.get(name)
        if isinstance(value, str):
            value = value.strip()
        if not value:
            errors[name] = message
    return errors


def normalize_optional_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of ``data`` with empty optional values (and a zero price) stored as None."""
    row = dict(data)
    for name in OPTIONAL_FIELDS:
        value = row.get(name)
        if isinstance(value, str) and not value.strip():
            row[name] = None
        elif name == "purchase_price" and not value:
            row[name] = None
    return row


def normalize_relation(value):
    """
    Reduce a joined relation to one optional object.

    Joins may hand back a single row, a list of rows, or nothing; callers
    always get the first row or None.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


RELATIONS = ("category", "business_unit", "location")


def to_asset_read(asset: Asset) -> AssetRead:
    """Denormalized read model; every relation is normalized before validation."""
    data = {
        name: getattr(asset, name)
        for name in AssetRead.model_fields
        if name not in RELATIONS
    }
    for name in RELATIONS:
        data[name] = normalize_relation(getattr(asset, name, None))
    return AssetRead.model_validate(data, from_attributes=True)


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code == UNIQUE_VIOLATION
    # SQLite reports "UNIQUE constraint failed: assets.asset_code"
    return "unique" in str(orig).lower()


async def list_assets(
    db: AsyncSession,
    filters: AssetFilters | None = None,
    search: str = "",
) -> list[Asset]:
    """
    Run the asset listing for a filter set and search term, newest first.

    Raises:
        AssetQueryError: If the database read fails
    """
    spec = queries.build_asset_query(filters, search)
    stmt = queries.to_select(spec)
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as exc:
        logger.exception("Error fetching assets")
        raise AssetQueryError(LIST_FAILED_MESSAGE) from exc
    return list(result.unique().scalars().all())


async def get_asset(db: AsyncSession, asset_id: int) -> Asset:
    """Get an asset with its relations. Raises AssetNotFoundError if not found."""
    stmt = queries.select_asset_by_id(asset_id)
    result = await db.execute(stmt)
    asset = result.unique().scalar_one_or_none()
    if asset is None:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    return asset


async def create_asset(db: AsyncSession, data: Mapping[str, Any]) -> Asset:
    """
    Validate and insert a new asset.

    Validation runs before the session is touched, so a rejected payload
    never reaches the database.

    Raises:
        AssetValidationError: Missing required fields, or a duplicate asset_code
        AssetCreateError: Any other database failure
    """
    errors = validate_asset_form(data)
    if errors:
        raise AssetValidationError(errors)

    row = normalize_optional_fields(data)
    for name in ("asset_type", "condition", "status"):
        if row.get(name) is not None:
            row[name] = getattr(row[name], "value", row[name])
    row["asset_code"] = row["asset_code"].strip()
    row["asset_name"] = row["asset_name"].strip()

    asset = Asset(**row)
    db.add(asset)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if _is_unique_violation(exc):
            logger.info("Duplicate asset code %s", row["asset_code"])
            raise AssetValidationError({"asset_code": DUPLICATE_CODE_MESSAGE}) from exc
        logger.exception("Error creating asset %s", row["asset_code"])
        raise AssetCreateError(CREATE_FAILED_MESSAGE) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Error creating asset %s", row["asset_code"])
        raise AssetCreateError(CREATE_FAILED_MESSAGE) from exc

    logger.info("Created asset %s (id=%s)", asset.asset_code, asset.id)
    return await get_asset(db, asset.id)
