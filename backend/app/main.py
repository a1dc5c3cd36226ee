import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from sqlalchemy import text
from starlette.middleware.cors import CORSMiddleware

from backend.app.api.error_handling import register_exception_handlers
from backend.app.api.v1.router import api_router
from backend.app.core.config import settings
from backend.app.core.logging import setup_logging
from backend.app.db.base import engine
from backend.app.db.init_db import init_models
from backend.app.security.encryption import ensure_encryption_configured
from backend.app.security.hashing import prepare_dummy_hash

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # No ENCRYPTION_KEY → refuse to start rather than fail on first use
    ensure_encryption_configured()
    prepare_dummy_hash()
    await init_models()
    logger.info("%s API started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    return {"message": "Welcome to Bankr API"}


@app.get("/health")
async def health():
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check: database unreachable")
        return {"status": "unhealthy", "timestamp": timestamp, "database": "disconnected"}
    return {"status": "healthy", "timestamp": timestamp, "database": "connected"}
