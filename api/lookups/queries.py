# api/lookups/queries.py
"""
SQLAlchemy query builders for the reference tables behind form dropdowns.
"""
from sqlalchemy import select

from db_models.asset_category import AssetCategory
from db_models.business_unit import BusinessUnit
from db_models.location import Location
from db_models.employee import Employee


def select_categories():
    """All asset categories by name."""
    return select(AssetCategory).order_by(AssetCategory.name.asc())


def select_active_business_units():
    """Active business units by name."""
    return (
        select(BusinessUnit)
        .where(BusinessUnit.is_active.is_(True))
        .order_by(BusinessUnit.name.asc())
    )


def select_locations(business_unit_id: int | None = None):
    """Locations by name, optionally limited to one business unit."""
    stmt = select(Location).order_by(Location.name.asc())
    if business_unit_id is not None:
        stmt = stmt.where(Location.business_unit_id == business_unit_id)
    return stmt


def select_active_employees(business_unit_id: int | None = None):
    """Active employees by name, optionally limited to one business unit."""
    stmt = (
        select(Employee)
        .where(Employee.is_active.is_(True))
        .order_by(Employee.name.asc())
    )
    if business_unit_id is not None:
        stmt = stmt.where(Employee.business_unit_id == business_unit_id)
    return stmt
