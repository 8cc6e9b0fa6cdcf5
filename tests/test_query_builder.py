from datetime import date
from decimal import Decimal

import pytest

from api.assets.models import AssetFilters
from api.assets import queries
from api.assets.queries import build_asset_query, to_select, Predicate
from db_models.asset import AssetStatus, AssetCondition, AssetType


def test_no_filters_only_base_query():
    spec = build_asset_query()
    assert spec.predicates == []
    assert spec.table == "assets"
    assert spec.order_by.field == "created_at"
    assert spec.order_by.descending is True
    assert [j.name for j in spec.joins] == ["category", "business_unit", "location"]
    assert spec.joins[2].columns == ("id", "name", "floor", "room")


@pytest.mark.parametrize("status", list(AssetStatus))
def test_single_status_is_one_equality(status):
    spec = build_asset_query(AssetFilters(status=status))
    assert spec.predicates == [Predicate("eq", "status", status.value)]
    assert "in" not in spec.ops()


def test_single_element_status_list_is_equality():
    spec = build_asset_query(AssetFilters(status=[AssetStatus.RETIRED]))
    assert spec.predicates == [Predicate("eq", "status", "retired")]


def test_status_list_is_membership():
    spec = build_asset_query(AssetFilters(status=[AssetStatus.AVAILABLE, AssetStatus.IN_USE]))
    assert spec.predicates == [Predicate("in", "status", ["available", "in_use"])]
    assert "eq" not in spec.ops()


def test_condition_follows_status_rules():
    spec = build_asset_query(AssetFilters(condition=AssetCondition.POOR))
    assert spec.predicates == [Predicate("eq", "condition", "poor")]

    spec = build_asset_query(AssetFilters(condition=["poor", "damaged", "fair"]))
    assert spec.predicates == [Predicate("in", "condition", ["poor", "damaged", "fair"])]


def test_predicates_follow_fixed_order():
    filters = AssetFilters(
        location_id=7,
        asset_type=AssetType.IMMOVABLE,
        category_id=3,
        condition=[AssetCondition.GOOD, AssetCondition.FAIR],
        business_unit_id=2,
        status=AssetStatus.IN_USE,
    )
    spec = build_asset_query(filters, search="dell")

    assert [p.field for p in spec.predicates] == [
        "status",
        "condition",
        "asset_type",
        "category_id",
        "business_unit_id",
        "location_id",
        queries.SEARCH_FIELDS,
    ]
    assert spec.ops() == ["eq", "in", "eq", "eq", "eq", "eq", "or_ilike"]


@pytest.mark.parametrize("search", ["", "   ", None])
def test_empty_search_adds_no_or_predicate(search):
    filters = AssetFilters(status=[AssetStatus.AVAILABLE, AssetStatus.MAINTENANCE], category_id=1)
    spec = build_asset_query(filters, search=search)
    assert "or_ilike" not in spec.ops()
    assert len(spec.predicates) == 2


def test_search_covers_code_name_and_serial():
    spec = build_asset_query(search="  LaP ")
    (predicate,) = spec.predicates
    assert predicate.op == "or_ilike"
    assert predicate.field == ("asset_code", "asset_name", "serial_number")
    assert predicate.value == "LaP"


def test_zero_ids_do_not_filter():
    spec = build_asset_query(AssetFilters(category_id=0, business_unit_id=0, location_id=0))
    assert spec.predicates == []


def test_date_and_price_ranges():
    filters = AssetFilters(
        purchase_date_from=date(2020, 1, 1),
        purchase_date_to=date(2023, 12, 31),
        price_min=Decimal("1000000"),
        price_max=Decimal("20000000"),
    )
    spec = build_asset_query(filters)
    assert spec.predicates == [
        Predicate("gte", "purchase_date", date(2020, 1, 1)),
        Predicate("lte", "purchase_date", date(2023, 12, 31)),
        Predicate("gte", "purchase_price", Decimal("1000000")),
        Predicate("lte", "purchase_price", Decimal("20000000")),
    ]


def test_to_select_renders_joins_and_predicates():
    filters = AssetFilters(status=[AssetStatus.AVAILABLE, AssetStatus.IN_USE], location_id=4)
    sql = str(to_select(build_asset_query(filters, search="dell")))

    assert "LEFT OUTER JOIN asset_categories" in sql
    assert "LEFT OUTER JOIN business_units" in sql
    assert "LEFT OUTER JOIN locations" in sql
    assert "assets.status IN" in sql
    assert "assets.location_id =" in sql
    assert "LIKE" in sql
    assert "ORDER BY assets.created_at DESC" in sql


def test_to_select_rejects_unknown_operator():
    spec = build_asset_query()
    spec.predicates.append(Predicate("between", "purchase_price", (1, 2)))
    with pytest.raises(ValueError):
        to_select(spec)


@pytest.mark.parametrize(
    "term, expected",
    [
        ("lap", "lap"),
        ("100%", "100\\%"),
        ("DL_5420", "DL\\_5420"),
        ("a\\b", "a\\\\b"),
    ],
)
def test_escape_like(term, expected):
    assert queries.escape_like(term) == expected


def test_search_pattern_declares_escape():
    sql = str(to_select(build_asset_query(search="_")))
    assert "ESCAPE" in sql
