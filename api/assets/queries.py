# api/assets/queries.py
"""
Query building for the asset listing.

``build_asset_query`` turns a filter set and a search term into a
``QuerySpec``: a plain description of the request (columns, joins,
predicates, order) with no database access. ``to_select`` renders a spec as a
SQLAlchemy statement. Keeping the two apart lets the predicate list be checked
directly.
"""
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select, or_, Select
from sqlalchemy.orm import contains_eager

from db_models.asset import Asset
from db_models.asset_category import AssetCategory
from db_models.business_unit import BusinessUnit
from db_models.location import Location
from .models import AssetFilters

# Predicate operators
EQ = "eq"
IN = "in"
GTE = "gte"
LTE = "lte"
OR_ILIKE = "or_ilike"

SEARCH_FIELDS = ("asset_code", "asset_name", "serial_number")

LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class Predicate:
    op: str
    field: str | tuple[str, ...]
    value: Any


@dataclass(frozen=True)
class Join:
    """A nested lookup relation and the columns shown from it."""
    name: str
    table: str
    columns: tuple[str, ...]


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = True


ASSET_JOINS = (
    Join("category", "asset_categories", ("id", "name", "code")),
    Join("business_unit", "business_units", ("id", "name", "code")),
    Join("location", "locations", ("id", "name", "floor", "room")),
)


@dataclass
class QuerySpec:
    table: str = "assets"
    columns: tuple[str, ...] = ("*",)
    joins: tuple[Join, ...] = ASSET_JOINS
    predicates: list[Predicate] = field(default_factory=list)
    order_by: OrderBy = field(default_factory=lambda: OrderBy("created_at", descending=True))

    def ops(self) -> list[str]:
        return [p.op for p in self.predicates]


def _one_or_many(field_name: str, value) -> Predicate:
    """Membership for two or more values, equality otherwise."""
    if isinstance(value, (list, tuple, set)):
        values = [_plain(v) for v in value]
        if len(values) == 1:
            return Predicate(EQ, field_name, values[0])
        return Predicate(IN, field_name, values)
    return Predicate(EQ, field_name, _plain(value))


def _plain(value):
    # Enum members go out as their stored string
    return getattr(value, "value", value)


def build_asset_query(filters: AssetFilters | None = None, search: str = "") -> QuerySpec:
    """
    Build the asset listing request.

    Predicates are added in a fixed order, each only when its filter is set:
    status, condition, asset_type, category_id, business_unit_id, location_id,
    purchase date range, price range, then the free-text search.
    """
    filters = filters or AssetFilters()
    spec = QuerySpec()
    predicates = spec.predicates

    if filters.status:
        predicates.append(_one_or_many("status", filters.status))

    if filters.condition:
        predicates.append(_one_or_many("condition", filters.condition))

    if filters.asset_type:
        predicates.append(Predicate(EQ, "asset_type", _plain(filters.asset_type)))

    for name in ("category_id", "business_unit_id", "location_id"):
        value = getattr(filters, name)
        if value:
            predicates.append(Predicate(EQ, name, value))

    if filters.purchase_date_from is not None:
        predicates.append(Predicate(GTE, "purchase_date", filters.purchase_date_from))
    if filters.purchase_date_to is not None:
        predicates.append(Predicate(LTE, "purchase_date", filters.purchase_date_to))
    if filters.price_min is not None:
        predicates.append(Predicate(GTE, "purchase_price", filters.price_min))
    if filters.price_max is not None:
        predicates.append(Predicate(LTE, "purchase_price", filters.price_max))

    term = (search or "").strip()
    if term:
        predicates.append(Predicate(OR_ILIKE, SEARCH_FIELDS, term))

    return spec


def escape_like(term: str) -> str:
    """Make LIKE wildcards in a search term match literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _to_clause(predicate: Predicate):
    if predicate.op == OR_ILIKE:
        pattern = f"%{escape_like(predicate.value)}%"
        return or_(
            *(getattr(Asset, name).ilike(pattern, escape=LIKE_ESCAPE) for name in predicate.field)
        )

    column = getattr(Asset, predicate.field)
    if predicate.op == EQ:
        return column == predicate.value
    if predicate.op == IN:
        return column.in_(predicate.value)
    if predicate.op == GTE:
        return column >= predicate.value
    if predicate.op == LTE:
        return column <= predicate.value
    raise ValueError(f"Unsupported predicate operator: {predicate.op}")


def _base_select() -> Select:
    """Assets with category, business unit and location loaded through outer joins."""
    return (
        select(Asset)
        .outerjoin(AssetCategory, Asset.category_id == AssetCategory.id)
        .outerjoin(BusinessUnit, Asset.business_unit_id == BusinessUnit.id)
        .outerjoin(Location, Asset.location_id == Location.id)
        .options(
            contains_eager(Asset.category),
            contains_eager(Asset.business_unit),
            contains_eager(Asset.location),
        )
    )


def to_select(spec: QuerySpec) -> Select:
    """Render a QuerySpec as a SQLAlchemy SELECT."""
    stmt = _base_select()
    for predicate in spec.predicates:
        stmt = stmt.where(_to_clause(predicate))

    column = getattr(Asset, spec.order_by.field)
    stmt = stmt.order_by(column.desc() if spec.order_by.descending else column.asc())
    # Tie-break rows created in the same instant, newest id first
    return stmt.order_by(Asset.id.desc())


def select_asset_by_id(asset_id: int) -> Select:
    """Select one asset by ID, with its lookup relations."""
    return (
        _base_select()
        .where(Asset.id == asset_id)
        .execution_options(populate_existing=True)
    )
