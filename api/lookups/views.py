# api/lookups/views.py
"""
Reference data for the asset form dropdowns.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import CategoryRead, BusinessUnitRead, LocationRead, EmployeeRead
from . import db_manager

router = APIRouter(prefix="/lookups", tags=["lookups"])


@router.get("/categories", response_model=list[CategoryRead], summary="List asset categories")
async def list_categories_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[CategoryRead]:
    categories = await db_manager.list_categories(db)
    return [CategoryRead.model_validate(c) for c in categories]


@router.get("/business-units", response_model=list[BusinessUnitRead], summary="List active business units")
async def list_business_units_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[BusinessUnitRead]:
    units = await db_manager.list_business_units(db)
    return [BusinessUnitRead.model_validate(u) for u in units]


@router.get("/locations", response_model=list[LocationRead], summary="List locations")
async def list_locations_endpoint(
    current_user: CurrentUser,
    business_unit_id: int | None = Query(None, description="Only locations of this business unit"),
    db: AsyncSession = Depends(get_session),
) -> list[LocationRead]:
    locations = await db_manager.list_locations(db, business_unit_id)
    return [LocationRead.model_validate(loc) for loc in locations]


@router.get("/employees", response_model=list[EmployeeRead], summary="List active employees")
async def list_employees_endpoint(
    current_user: CurrentUser,
    business_unit_id: int | None = Query(None, description="Only employees of this business unit"),
    db: AsyncSession = Depends(get_session),
) -> list[EmployeeRead]:
    employees = await db_manager.list_employees(db, business_unit_id)
    return [EmployeeRead.model_validate(e) for e in employees]
