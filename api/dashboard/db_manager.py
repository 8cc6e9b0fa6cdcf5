# api/dashboard/db_manager.py
"""
Business logic for dashboard statistics.
"""
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import AssetType, AssetCondition, AssetStatus
from . import queries


def _breakdown(rows, members) -> dict[str, int]:
    """Counts keyed by every enum value, zero-filled for values with no rows."""
    counts = {m.value: 0 for m in members}
    for key, count in rows:
        counts[key] = count
    return counts


async def get_dashboard_stats(db: AsyncSession) -> dict:
    """
    Asset and employee counts for the dashboard.

    "active" means assets currently in use.
    """
    result = await db.execute(queries.count_total_assets())
    total_assets = result.scalar() or 0

    result = await db.execute(queries.count_assets_with_status(AssetStatus.IN_USE))
    active_assets = result.scalar() or 0

    result = await db.execute(queries.count_assets_with_status(AssetStatus.MAINTENANCE))
    maintenance = result.scalar() or 0

    result = await db.execute(queries.count_active_employees())
    employees = result.scalar() or 0

    result = await db.execute(queries.count_assets_by_status())
    by_status = _breakdown(result.all(), AssetStatus)

    result = await db.execute(queries.count_assets_by_condition())
    by_condition = _breakdown(result.all(), AssetCondition)

    result = await db.execute(queries.count_assets_by_type())
    by_type = _breakdown(result.all(), AssetType)

    result = await db.execute(queries.sum_purchase_value())
    total_value = Decimal(str(result.scalar() or 0))

    return {
        "total_assets": total_assets,
        "active_assets": active_assets,
        "maintenance": maintenance,
        "employees": employees,
        "by_status": by_status,
        "by_condition": by_condition,
        "by_type": by_type,
        "total_value": total_value,
    }
