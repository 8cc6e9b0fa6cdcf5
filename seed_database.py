"""Script to seed the database with lookup tables, a demo user and sample assets"""
import csv
from datetime import date
from decimal import Decimal
from pathlib import Path

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from config import settings
from config.database import get_sync_url
from core.security import get_password_hash
from db_base import Base
from db_models import (
    Asset,
    AssetCategory,
    BusinessUnit,
    Employee,
    Location,
    User,
)

DATABASE_URL = get_sync_url(settings.DATABASE_URL)

BUSINESS_UNITS = [
    ("HQ", "Head Office", "Jakarta head office"),
    ("BR1", "Surabaya Branch", None),
]

# (business unit code, name, floor, room)
LOCATIONS = [
    ("HQ", "Head Office 2F", "2", None),
    ("HQ", "Head Office 3F", "3", None),
    ("HQ", "Head Office Server Room", "B1", "SR-01"),
    ("BR1", "Surabaya Branch", "1", None),
    ("BR1", "Surabaya Warehouse", "1", "WH"),
]

# (code, name, useful life in years)
CATEGORIES = [
    ("IT", "IT Equipment", 4),
    ("FURN", "Furniture", 8),
    ("VEH", "Vehicles", 8),
    ("BLD", "Buildings", 20),
]

EMPLOYEES = [
    ("EMP001", "Budi Santoso", "IT Officer", "IT", "HQ"),
    ("EMP002", "Siti Rahayu", "Branch Manager", "Operations", "BR1"),
]

DEMO_USER = ("admin@example.com", "admin12345", "Demo Admin", "HQ")


def create_tables():
    """Create all database tables"""
    print("Creating database tables...")
    engine = create_engine(DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    print("[OK] Tables created successfully")
    return engine


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def seed_lookups(session) -> tuple[dict, dict, dict]:
    """Insert business units, locations, categories and employees. Returns lookup maps."""
    units = {}
    for code, name, description in BUSINESS_UNITS:
        unit = session.scalar(select(BusinessUnit).where(BusinessUnit.code == code))
        if unit is None:
            unit = BusinessUnit(code=code, name=name, description=description, is_active=True)
            session.add(unit)
        units[code] = unit
    session.flush()

    locations = {}
    for unit_code, name, floor, room in LOCATIONS:
        location = session.scalar(select(Location).where(Location.name == name))
        if location is None:
            location = Location(
                business_unit_id=units[unit_code].id,
                name=name,
                floor=floor,
                room=room,
            )
            session.add(location)
        locations[name] = location

    categories = {}
    for code, name, useful_life in CATEGORIES:
        category = session.scalar(select(AssetCategory).where(AssetCategory.code == code))
        if category is None:
            category = AssetCategory(code=code, name=name, useful_life=useful_life)
            session.add(category)
        categories[code] = category

    for code, name, position, department, unit_code in EMPLOYEES:
        if session.scalar(select(Employee).where(Employee.employee_code == code)) is None:
            session.add(Employee(
                employee_code=code,
                name=name,
                position=position,
                department=department,
                business_unit_id=units[unit_code].id,
                is_active=True,
            ))

    email, password, name, unit_code = DEMO_USER
    if session.scalar(select(User).where(User.email == email)) is None:
        session.add(User(
            email=email,
            hashed_password=get_password_hash(password),
            name=name,
            business_unit_id=units[unit_code].id,
            is_active=True,
        ))
        print(f"  Added demo user {email} / {password}")

    session.flush()
    return units, locations, categories


def seed_assets(session, csv_path: Path, units: dict, locations: dict, categories: dict) -> int:
    """Insert assets from CSV, skipping codes that already exist"""
    count = 0
    with open(csv_path, newline='', encoding='utf-8') as f:
        for row in csv.DictReader(f):
            if session.scalar(select(Asset).where(Asset.asset_code == row['asset_code'])) is not None:
                continue
            price = _blank_to_none(row['purchase_price'])
            purchased = _blank_to_none(row['purchase_date'])
            asset = Asset(
                asset_code=row['asset_code'],
                asset_name=row['asset_name'],
                category_id=categories[row['category_code']].id,
                asset_type=row['asset_type'],
                brand=_blank_to_none(row['brand']),
                model=_blank_to_none(row['model']),
                serial_number=_blank_to_none(row['serial_number']),
                purchase_date=date.fromisoformat(purchased) if purchased else None,
                purchase_price=Decimal(price) if price else None,
                business_unit_id=units[row['business_unit_code']].id,
                location_id=locations[row['location_name']].id,
                condition=row['condition'],
                status=row['status'],
            )
            session.add(asset)
            count += 1
            print(f"  Added: {asset.asset_code} - {asset.asset_name}")
    return count


def seed(engine, csv_path: Path) -> None:
    Session = sessionmaker(bind=engine)
    with Session() as session:
        units, locations, categories = seed_lookups(session)
        count = seed_assets(session, csv_path, units, locations, categories)
        session.commit()
        print(f"\n[OK] Seeded {count} new assets")
        total = session.query(Asset).count()
        print(f"[OK] Total assets in database: {total}")


if __name__ == "__main__":
    print("=" * 60)
    print("DATABASE SEEDING SCRIPT")
    print("=" * 60)
    print(f"Database: {DATABASE_URL}")
    print()

    csv_path = Path(__file__).parent / "tests" / "sample_assets.csv"
    engine = create_tables()
    seed(engine, csv_path)
    print("\n" + "=" * 60)
    print("[OK] Database setup complete!")
    print("=" * 60)
