# api/dashboard/queries.py
"""
SQLAlchemy query builders for dashboard statistics.
"""
from sqlalchemy import select, func

from db_models.asset import Asset, AssetStatus
from db_models.employee import Employee


def count_total_assets():
    """Count all assets."""
    return select(func.count(Asset.id))


def count_assets_with_status(status: AssetStatus):
    """Count assets in one status."""
    return select(func.count(Asset.id)).where(Asset.status == status.value)


def count_active_employees():
    """Count active employees."""
    return select(func.count(Employee.id)).where(Employee.is_active.is_(True))


def count_assets_by_status():
    """(status, count) rows."""
    return select(Asset.status, func.count(Asset.id)).group_by(Asset.status)


def count_assets_by_condition():
    """(condition, count) rows."""
    return select(Asset.condition, func.count(Asset.id)).group_by(Asset.condition)


def count_assets_by_type():
    """(asset_type, count) rows."""
    return select(Asset.asset_type, func.count(Asset.id)).group_by(Asset.asset_type)


def sum_purchase_value():
    """Total purchase price over all assets; NULL prices count as zero."""
    return select(func.coalesce(func.sum(Asset.purchase_price), 0))
