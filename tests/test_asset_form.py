from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from api.assets import db_manager
from api.assets.db_manager import (
    REQUIRED_FIELDS,
    AssetValidationError,
    normalize_optional_fields,
    normalize_relation,
    validate_asset_form,
)
from core.formatting import format_currency


VALID_FORM = {
    "asset_code": "AST900",
    "asset_name": "Standing Desk",
    "category_id": 2,
    "business_unit_id": 1,
    "location_id": 3,
}


class RecordingSession:
    """Stands in for an AsyncSession and records every call made on it."""

    def __init__(self):
        self.calls = []

    def add(self, obj):
        self.calls.append(("add", obj))

    async def commit(self):
        self.calls.append(("commit",))

    async def rollback(self):
        self.calls.append(("rollback",))

    async def execute(self, stmt):
        self.calls.append(("execute", stmt))


def test_valid_form_has_no_errors():
    assert validate_asset_form(VALID_FORM) == {}


def test_missing_name_is_the_only_error():
    form = dict(VALID_FORM, asset_name="")
    assert validate_asset_form(form) == {"asset_name": "Asset name is required"}


def test_whitespace_code_counts_as_missing():
    form = dict(VALID_FORM, asset_code="   ")
    assert validate_asset_form(form) == {"asset_code": "Asset code is required"}


def test_blank_form_reports_every_required_field():
    errors = validate_asset_form({"asset_code": "", "asset_name": "", "category_id": 0})
    assert errors == REQUIRED_FIELDS
    assert list(errors) == list(REQUIRED_FIELDS)


def test_optional_blanks_become_none():
    row = normalize_optional_fields(
        dict(VALID_FORM, brand="", model="  ", serial_number="SN-1", purchase_date="", purchase_price=0)
    )
    assert row["brand"] is None
    assert row["model"] is None
    assert row["serial_number"] == "SN-1"
    assert row["purchase_date"] is None
    assert row["purchase_price"] is None
    assert row["asset_code"] == "AST900"


def test_nonzero_price_is_kept():
    row = normalize_optional_fields(dict(VALID_FORM, purchase_price=Decimal("2500000")))
    assert row["purchase_price"] == Decimal("2500000")


@pytest.mark.anyio
async def test_rejected_form_never_touches_session():
    session = RecordingSession()
    with pytest.raises(AssetValidationError) as exc_info:
        await db_manager.create_asset(session, dict(VALID_FORM, asset_name="", location_id=0))

    assert exc_info.value.errors == {
        "asset_name": "Asset name is required",
        "location_id": "Location is required",
    }
    assert exc_info.value.is_duplicate is False
    assert session.calls == []


def test_duplicate_error_is_flagged():
    exc = AssetValidationError({"asset_code": db_manager.DUPLICATE_CODE_MESSAGE})
    assert exc.is_duplicate is True


@pytest.mark.parametrize(
    "orig, expected",
    [
        (SimpleNamespace(pgcode="23505"), True),
        (SimpleNamespace(pgcode="23503"), False),
        (SimpleNamespace(sqlstate="23505"), True),
        (Exception("UNIQUE constraint failed: assets.asset_code"), True),
        (Exception("FOREIGN KEY constraint failed"), False),
    ],
)
def test_unique_violation_detection(orig, expected):
    exc = IntegrityError("INSERT INTO assets", {}, orig)
    assert db_manager._is_unique_violation(exc) is expected


def test_normalize_relation_shapes():
    row = SimpleNamespace(id=1, name="IT Equipment")
    other = SimpleNamespace(id=2, name="Furniture")

    assert normalize_relation(row) is row
    assert normalize_relation([row, other]) is row
    assert normalize_relation([]) is None
    assert normalize_relation(None) is None


@pytest.mark.parametrize(
    "amount, expected",
    [
        (None, "-"),
        (0, "-"),
        (Decimal("0.00"), "-"),
        (1000000, "Rp\u00a01.000.000,00"),
        (Decimal("15500000.5"), "Rp\u00a015.500.000,50"),
        (750, "Rp\u00a0750,00"),
        (-1250, "-Rp\u00a01.250,00"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected
