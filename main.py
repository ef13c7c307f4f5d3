import json
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from core.exception_handlers import setup_exception_handlers
from core.log_config import configure_logging
from api.activity.views import router as activity_router
from api.asset_types.views import router as asset_types_router
from api.asset_types.views import fields_router
from api.assets.views import router as assets_router
from api.catalogs.views import router as catalogs_router
from api.dashboard.views import router as dashboard_router
from api.lifecycle.views import router as lifecycle_router


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

    # Default origins for development
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    yield


app = FastAPI(
    title="Asset Inventory API",
    description="Typed custom-field schemas, asset lifecycle transitions and audit log",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Schema configuration and lookup tables
app.include_router(catalogs_router, prefix="/api/v1")
app.include_router(asset_types_router, prefix="/api/v1")
app.include_router(fields_router, prefix="/api/v1")

# Assets, lifecycle and history
app.include_router(assets_router, prefix="/api/v1")
app.include_router(lifecycle_router, prefix="/api/v1")
app.include_router(activity_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
