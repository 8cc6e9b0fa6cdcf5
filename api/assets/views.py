# api/assets/views.py
"""
Asset listing and creation endpoints.
"""
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from db_models.asset import AssetType, AssetCondition, AssetStatus
from .models import AssetFilters, AssetCreate, AssetRead, AssetListResponse
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


def get_asset_filters(
    status_: list[AssetStatus] | None = Query(None, alias="status"),
    condition: list[AssetCondition] | None = Query(None),
    asset_type: AssetType | None = Query(None),
    category_id: int | None = Query(None),
    business_unit_id: int | None = Query(None),
    location_id: int | None = Query(None),
    purchase_date_from: date | None = Query(None),
    purchase_date_to: date | None = Query(None),
    price_min: Decimal | None = Query(None, ge=0),
    price_max: Decimal | None = Query(None, ge=0),
) -> AssetFilters:
    """Collect listing filters from the query string. Repeat status/condition for several values."""
    return AssetFilters(
        status=status_,
        condition=condition,
        asset_type=asset_type,
        category_id=category_id,
        business_unit_id=business_unit_id,
        location_id=location_id,
        purchase_date_from=purchase_date_from,
        purchase_date_to=purchase_date_to,
        price_min=price_min,
        price_max=price_max,
    )


@router.get(
    "",
    response_model=AssetListResponse,
    summary="List assets",
)
async def list_assets_endpoint(
    current_user: CurrentUser,
    filters: AssetFilters = Depends(get_asset_filters),
    search: str = Query("", description="Matches asset code, name or serial number"),
    db: AsyncSession = Depends(get_session),
) -> AssetListResponse:
    """
    List assets newest first, narrowed by the given filters and search text.
    An empty result is a normal response with an empty list.
    """
    try:
        assets = await db_manager.list_assets(db, filters, search)
    except db_manager.AssetQueryError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    results = [db_manager.to_asset_read(a) for a in assets]
    return AssetListResponse(assets=results, total=len(results))


@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get asset by ID",
)
async def get_asset_endpoint(
    asset_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    try:
        asset = await db_manager.get_asset(db, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return db_manager.to_asset_read(asset)


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an asset",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """
    Create an asset.

    - Missing required fields: 422 with ``{"errors": {field: message}}``
    - Duplicate asset_code: 409 with ``{"errors": {"asset_code": "Asset code already exists"}}``
    - Anything else: 500 with a generic message
    """
    try:
        asset = await db_manager.create_asset(db, payload.model_dump())
    except db_manager.AssetValidationError as exc:
        code = status.HTTP_409_CONFLICT if exc.is_duplicate else status.HTTP_422_UNPROCESSABLE_ENTITY
        raise HTTPException(
            status_code=code,
            detail={"errors": exc.errors},
        ) from exc
    except db_manager.AssetCreateError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return db_manager.to_asset_read(asset)
