# api/lookups/db_manager.py
"""
Reads for the lookup tables. Read-only from this service's point of view.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset_category import AssetCategory
from db_models.business_unit import BusinessUnit
from db_models.location import Location
from db_models.employee import Employee
from . import queries


async def list_categories(db: AsyncSession) -> list[AssetCategory]:
    result = await db.execute(queries.select_categories())
    return list(result.scalars().all())


async def list_business_units(db: AsyncSession) -> list[BusinessUnit]:
    result = await db.execute(queries.select_active_business_units())
    return list(result.scalars().all())


async def list_locations(db: AsyncSession, business_unit_id: int | None = None) -> list[Location]:
    result = await db.execute(queries.select_locations(business_unit_id))
    return list(result.scalars().all())


async def list_employees(db: AsyncSession, business_unit_id: int | None = None) -> list[Employee]:
    result = await db.execute(queries.select_active_employees(business_unit_id))
    return list(result.scalars().all())
