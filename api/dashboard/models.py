# api/dashboard/models.py
"""
Pydantic models for dashboard responses.
"""
from decimal import Decimal

from pydantic import BaseModel, computed_field

from core.formatting import format_currency


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard cards, plus breakdowns."""
    total_assets: int = 0
    active_assets: int = 0
    maintenance: int = 0
    employees: int = 0

    by_status: dict[str, int] = {}
    by_condition: dict[str, int] = {}
    by_type: dict[str, int] = {}

    total_value: Decimal = Decimal("0")

    @computed_field  # type: ignore[misc]
    @property
    def total_value_display(self) -> str:
        return format_currency(self.total_value)
