import os
from pathlib import Path

os.environ.setdefault("MODE", "test")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # ensure models are imported
from db_base import Base
from db_models.user import User
from config import settings
from config.database import get_sync_url
from core.security import get_password_hash
from core.session_gate import AuthService
import seed_database

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL") or settings.DATABASE_URL
sync_url = get_sync_url(TEST_DATABASE_URL)

# Use an async engine for app interactions
engine = create_async_engine(
    TEST_DATABASE_URL,
    future=True,
    echo=False,
    poolclass=NullPool  # Disable connection pooling for tests
)
AsyncSessionTest = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)

TEST_USERS = {
    "user": ("user@test.com", "userpass", True),
    "other": ("other@test.com", "otherpass", True),
    "disabled": ("disabled@test.com", "disabledpass", False),
}


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Create/drop tables for tests (destructive - use a dedicated test DB)
    sync_engine = create_engine(sync_url)
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)
    sync_engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def seed_data(prepare_db):
    """Seed lookup tables, test users and the sample assets from CSV."""
    csv_path = Path(__file__).parent / "sample_assets.csv"
    sync_engine = create_engine(sync_url)
    Session = sessionmaker(bind=sync_engine)

    with Session() as session:
        users = {}
        for key, (email, password, active) in TEST_USERS.items():
            user = User(
                email=email,
                hashed_password=get_password_hash(password),
                name=f"Test {key.title()}",
                is_active=active,
            )
            session.add(user)
            users[key] = user
        session.flush()

        units, locations, categories = seed_database.seed_lookups(session)
        seed_database.seed_assets(session, csv_path, units, locations, categories)
        session.commit()

        seeded = {
            "user_ids": {key: user.id for key, user in users.items()},
            "units": {code: unit.id for code, unit in units.items()},
            "locations": {name: loc.id for name, loc in locations.items()},
            "categories": {code: cat.id for code, cat in categories.items()},
        }
    sync_engine.dispose()
    return seeded


@pytest.fixture
async def db_session():
    async with AsyncSessionTest() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def async_client():
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def auth_service():
    """The AuthService the app under test hands to its handlers."""
    return fastapi_app.state.auth_service


@pytest.fixture
def user_session(auth_service, seed_data):
    """A fresh session for the regular test user, issued without going through login."""
    email = TEST_USERS["user"][0]
    return auth_service._issue(seed_data["user_ids"]["user"], email)


@pytest.fixture
def user_headers(user_session):
    """Return authorization headers for the regular test user."""
    return {"Authorization": f"Bearer {user_session.access_token}"}


@pytest.fixture
def standalone_auth():
    """An AuthService not shared with the app, for gate tests."""
    return AuthService()
