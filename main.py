import json
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from core.logging import configure_logging
from core.session_gate import AuthService
from db import init_db
from api.auth.views import router as auth_router
from api.assets.views import router as assets_router
from api.lookups.views import router as lookups_router
from api.dashboard.views import router as dashboard_router
from api.pages.views import router as pages_router

logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """Get CORS origins from environment variable or use defaults."""
    cors_env = os.environ.get("CORS_ORIGINS", "")

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for local front-end development
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Local SQLite databases are created on the fly; others are migrated with Alembic
    if settings.DATABASE_URL.startswith("sqlite"):
        await init_db()
    logger.info("Asset Management API started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Asset Management API",
    description="Assets, lookup tables and sessions for the asset-management dashboard",
    version="1.0.0",
    lifespan=lifespan,
)

# One AuthService per application; handlers reach it through core.deps
app.state.auth_service = AuthService()

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Authentication endpoints
app.include_router(auth_router, prefix="/api/v1")

# Business endpoints
app.include_router(assets_router, prefix="/api/v1")
app.include_router(lookups_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")

# Navigation: /, /login, /dashboard, /assets
app.include_router(pages_router)


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
